""" NusantaraScript data model

The parsed, executable form of a script file. Everything here is immutable
once the parser hands it over: a reload replaces whole Script instances.

An event handler keeps exactly one ordered action sequence. Conditional
blocks sit inside that sequence as NESTED_CONDITION actions, at the position
they were written, so the author's ordering is always the execution order.
"""

import enum
from dataclasses import dataclass, field
from typing import Optional

from nusantarascript.conditions import Condition


class ScriptError(Exception):
    """ misuse of the engine, as opposed to problems inside a script """
    pass


class EventType(enum.Enum):
    PLAYER_JOIN = enum.auto()
    PLAYER_QUIT = enum.auto()
    PLAYER_CHAT = enum.auto()
    BLOCK_BREAK = enum.auto()
    PLAYER_DEATH = enum.auto()
    PLAYER_RESPAWN = enum.auto()
    PLAYER_DAMAGE = enum.auto()
    ENTITY_DAMAGE = enum.auto()


class ActionType(enum.Enum):
    SEND_MESSAGE = enum.auto()
    BROADCAST = enum.auto()
    CANCEL_EVENT = enum.auto()
    HEAL_PLAYER = enum.auto()
    FEED_PLAYER = enum.auto()
    SET_VARIABLE = enum.auto()
    ADD_VARIABLE = enum.auto()
    SUBTRACT_VARIABLE = enum.auto()
    DELETE_VARIABLE = enum.auto()
    GIVE_ITEM = enum.auto()
    KICK_PLAYER = enum.auto()
    TELEPORT = enum.auto()
    PLAY_SOUND = enum.auto()
    GIVE_EFFECT = enum.auto()
    STOP = enum.auto()
    NESTED_CONDITION = enum.auto()

    @property
    def requires_player(self) -> bool:
        return self in REQUIRES_PLAYER


REQUIRES_PLAYER = frozenset([
    ActionType.SEND_MESSAGE,
    ActionType.HEAL_PLAYER,
    ActionType.FEED_PLAYER,
    ActionType.GIVE_ITEM,
    ActionType.KICK_PLAYER,
    ActionType.TELEPORT,
    ActionType.PLAY_SOUND,
    ActionType.GIVE_EFFECT,
])


@dataclass(frozen=True)
class Action:
    action_type: ActionType
    parameter: str = ""
    additional_params: tuple[str, ...] = ()
    line_number: int = 0
    nested_block: Optional["ConditionalBlock"] = None

    def __post_init__(self) -> None:
        if (self.action_type == ActionType.NESTED_CONDITION) != (self.nested_block is not None):
            raise ValueError(f'only NESTED_CONDITION actions carry a block, got {self.action_type} with {self.nested_block}')

    @staticmethod
    def nested(block:"ConditionalBlock", line_number:int) -> "Action":
        return Action(ActionType.NESTED_CONDITION, line_number=line_number, nested_block=block)


@dataclass(frozen=True)
class ConditionalBlock:
    condition: Condition
    actions: tuple[Action, ...] = ()
    else_actions: tuple[Action, ...] = ()
    line_number: int = 0

    @property
    def else_if(self) -> Optional["ConditionalBlock"]:
        """ the next link of an else-if chain, if this block has one """
        if len(self.else_actions) == 1 and self.else_actions[0].action_type == ActionType.NESTED_CONDITION:
            return self.else_actions[0].nested_block
        return None


@dataclass(frozen=True)
class EventHandler:
    event_type: EventType
    actions: tuple[Action, ...] = ()
    line_number: int = 0


@dataclass(frozen=True)
class CustomCommand:
    name: str
    arguments: tuple[str, ...] = ()
    permission: Optional[str] = None
    description: str = ""
    actions: tuple[Action, ...] = ()
    line_number: int = 0


@dataclass(frozen=True)
class Script:
    filename: str
    event_handlers: tuple[EventHandler, ...] = field(default_factory=tuple)
    custom_commands: tuple[CustomCommand, ...] = field(default_factory=tuple)

    def handlers_for(self, event_type:EventType) -> tuple[EventHandler, ...]:
        return tuple(h for h in self.event_handlers if h.event_type == event_type)

""" Interfaces a host application implements to embed NusantaraScript.

The engine never talks to a game server directly. Everything it needs to know
about the acting entity, the targeted block, the triggering event, and
everything it wants to do to the world goes through these.
"""

import abc
from typing import Any, Callable, Mapping, Optional, Sequence

import numpy as np
import numpy.typing as npt


class AbstractEntity(abc.ABC):
    """ the player (or other entity) an event or command is about """

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """ stable identifier, used as the key for per-entity variables """
        ...

    @property
    def display_name(self) -> str:
        return self.name

    @property
    @abc.abstractmethod
    def health(self) -> float: ...

    @property
    @abc.abstractmethod
    def is_flying(self) -> bool: ...

    @property
    @abc.abstractmethod
    def is_sneaking(self) -> bool: ...

    @property
    @abc.abstractmethod
    def held_item(self) -> Optional[str]:
        """ material name of whatever is in the main hand, None if empty """
        ...

    @property
    @abc.abstractmethod
    def world_name(self) -> str: ...

    @abc.abstractmethod
    def has_permission(self, permission:str) -> bool: ...

    @abc.abstractmethod
    def send_message(self, message:str) -> None: ...


class AbstractTarget(abc.ABC):
    """ the block an event targets """

    @property
    @abc.abstractmethod
    def material(self) -> str: ...

    @abc.abstractmethod
    def is_preferred_tool(self, item:Optional[str]) -> bool:
        """ whether item is the right tool to break this block """
        ...


class AbstractEventHandle(abc.ABC):
    """ the host event being handled, so scripts can cancel it """

    @property
    @abc.abstractmethod
    def cancelled(self) -> bool: ...

    @abc.abstractmethod
    def set_cancelled(self, cancelled:bool) -> None: ...


class AbstractEffects(abc.ABC):
    """ side effects actions have on the host world

    Implementations raise ValueError for things they don't recognize (unknown
    materials, sounds or effects). The executor logs those and moves on.
    """

    @abc.abstractmethod
    def broadcast(self, message:str) -> None: ...

    @abc.abstractmethod
    def heal(self, entity:AbstractEntity, health:float, food:int) -> None: ...

    @abc.abstractmethod
    def feed(self, entity:AbstractEntity, food:int) -> None: ...

    @abc.abstractmethod
    def give_item(self, entity:AbstractEntity, material:str, amount:int) -> None: ...

    @abc.abstractmethod
    def kick(self, entity:AbstractEntity, reason:str) -> None: ...

    @abc.abstractmethod
    def teleport(self, entity:AbstractEntity, destination:npt.NDArray[np.float64], world_name:Optional[str]) -> None:
        """ moves entity to destination, an (x, y, z) array

        world_name None means the entity's current world.
        """
        ...

    @abc.abstractmethod
    def play_sound(self, entity:AbstractEntity, sound:str) -> None: ...

    @abc.abstractmethod
    def give_effect(self, entity:AbstractEntity, effect:str, duration_ticks:int, amplifier:int) -> None: ...

    def send_message(self, entity:AbstractEntity, message:str) -> None:
        entity.send_message(message)


CommandInvoker = Callable[[Optional[AbstractEntity], Sequence[str]], None]


class AbstractCommandRegistrar(abc.ABC):
    """ where custom commands get exposed to users """

    @abc.abstractmethod
    def register(self, name:str, permission:Optional[str], description:str, invoke:CommandInvoker) -> None:
        """ makes /name available, calling invoke(sender, args) when used """
        ...

    @abc.abstractmethod
    def unregister(self, name:str) -> None: ...


class VariablePersistence(abc.ABC):
    @abc.abstractmethod
    def save(self, global_variables:Mapping[str, Any], entity_variables:Mapping[str, Mapping[str, Any]]) -> None: ...

    @abc.abstractmethod
    def load(self) -> tuple[dict[str, Any], dict[str, dict[str, Any]]]:
        """ returns (global variables, per entity variables) """
        ...

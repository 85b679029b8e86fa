""" Runs parsed handlers and commands against the host.

Actions run strictly in source order on the calling thread. A conditional
block evaluates its condition once and runs either its actions or its else
actions. berhenti (STOP) ends the whole run, however deeply nested it is.

Failures are contained at two levels: an action that can't be carried out
(no player bound, bad number, unknown material, ...) is logged and skipped,
anything else escaping the action list is logged at the handler boundary so
one broken script never affects another.
"""

import logging
from typing import Callable, Optional, Sequence

import numpy as np

from nusantarascript import config, evaluator, util
from nusantarascript.context import Context
from nusantarascript.host import AbstractEffects, AbstractEntity
from nusantarascript.placeholders import colorize, replace_placeholders
from nusantarascript.script import Action, ActionType, ConditionalBlock, CustomCommand, EventHandler
from nusantarascript.variables import VariableStore, resolve_variable_name

CONSOLE_SENDER = "CONSOLE"


class ScriptExecutor:
    def __init__(self, variables:VariableStore, effects:AbstractEffects, debug:bool=False) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.variables = variables
        self.effects = effects
        self.debug = debug

        self._routines:dict[ActionType, Callable[[Action, Context], None]] = {
            ActionType.SEND_MESSAGE: self._send_message,
            ActionType.BROADCAST: self._broadcast,
            ActionType.CANCEL_EVENT: self._cancel_event,
            ActionType.HEAL_PLAYER: self._heal_player,
            ActionType.FEED_PLAYER: self._feed_player,
            ActionType.SET_VARIABLE: self._set_variable,
            ActionType.ADD_VARIABLE: self._add_variable,
            ActionType.SUBTRACT_VARIABLE: self._subtract_variable,
            ActionType.DELETE_VARIABLE: self._delete_variable,
            ActionType.GIVE_ITEM: self._give_item,
            ActionType.KICK_PLAYER: self._kick_player,
            ActionType.TELEPORT: self._teleport,
            ActionType.PLAY_SOUND: self._play_sound,
            ActionType.GIVE_EFFECT: self._give_effect,
        }
        # STOP and NESTED_CONDITION are control flow, handled by _run_actions
        assert set(self._routines.keys()) | {ActionType.STOP, ActionType.NESTED_CONDITION} == set(ActionType)

    def _substitute(self, text:str, context:Context) -> str:
        return replace_placeholders(text, context, self.variables)

    # control flow

    def _run_actions(self, actions:Sequence[Action], context:Context) -> bool:
        """ runs actions in order, returns False if a STOP was hit """
        for action in actions:
            if action.action_type == ActionType.STOP:
                self.logger.debug(f'line {action.line_number}: stop')
                return False
            elif action.action_type == ActionType.NESTED_CONDITION:
                assert action.nested_block is not None
                if not self.execute_conditional_block(action.nested_block, context):
                    return False
            else:
                self.execute_action(action, context)
        return True

    def execute_conditional_block(self, block:ConditionalBlock, context:Context) -> bool:
        """ runs the branch the condition selects, returns False on STOP """
        if evaluator.evaluate(block.condition, context, self.variables):
            return self._run_actions(block.actions, context)
        else:
            return self._run_actions(block.else_actions, context)

    def execute_action(self, action:Action, context:Context) -> None:
        if action.action_type.requires_player and context.entity is None:
            self.logger.warning(f'line {action.line_number}: {action.action_type.name} needs a player, none bound')
            return

        self.logger.debug(f'line {action.line_number}: {action.action_type.name} {action.parameter!r} {action.additional_params!r}')
        try:
            self._routines[action.action_type](action, context)
        except ValueError as e:
            self.logger.warning(f'line {action.line_number}: {action.action_type.name} skipped: {e}')

    def execute_handler(self, handler:EventHandler, context:Context) -> None:
        try:
            self._run_actions(handler.actions, context)
        except Exception:
            self.logger.exception(f'error running handler for {handler.event_type.name} at line {handler.line_number}')

    def execute_custom_command(self, command:CustomCommand, invoker:Optional[AbstractEntity], args:Sequence[str]) -> bool:
        """ runs a custom command for invoker with the given arguments

        invoker None is the host console, which passes every permission check.
        returns True if the command ran to completion.
        """

        if command.permission and invoker is not None and not invoker.has_permission(command.permission):
            invoker.send_message(colorize(config.Settings.messages.NO_PERMISSION))
            return False

        bindings:dict[str, str] = {}
        for i, arg in enumerate(args):
            bindings[f'arg{i+1}'] = arg
        for name, arg in zip(command.arguments, args):
            bindings[name] = arg
        bindings["args_count"] = str(len(args))
        bindings["all_args"] = " ".join(args)
        bindings["sender"] = invoker.name if invoker is not None else CONSOLE_SENDER

        context = Context(entity=invoker, bindings=bindings)
        try:
            self._run_actions(command.actions, context)
        except Exception:
            self.logger.exception(f'error running command /{command.name} for {bindings["sender"]}')
            if invoker is not None:
                invoker.send_message(colorize(config.Settings.messages.COMMAND_ERROR))
            return False
        return True

    # action routines, entity presence is checked by execute_action

    def _send_message(self, action:Action, context:Context) -> None:
        assert context.entity is not None
        self.effects.send_message(context.entity, self._substitute(action.parameter, context))

    def _broadcast(self, action:Action, context:Context) -> None:
        self.effects.broadcast(self._substitute(action.parameter, context))

    def _cancel_event(self, action:Action, context:Context) -> None:
        if not context.cancel():
            self.logger.debug(f'line {action.line_number}: nothing to cancel')
        elif self.debug:
            self.logger.info(f'line {action.line_number}: event cancelled by script')

    def _heal_player(self, action:Action, context:Context) -> None:
        assert context.entity is not None
        self.effects.heal(context.entity, config.Settings.player.MAX_HEALTH, config.Settings.player.MAX_FOOD)

    def _feed_player(self, action:Action, context:Context) -> None:
        assert context.entity is not None
        self.effects.feed(context.entity, config.Settings.player.MAX_FOOD)

    def _scope(self, variable_name:str, context:Context) -> tuple[Optional[str], str]:
        """ (entity id or None for global, bare name) for a variable reference """
        is_entity, name = resolve_variable_name(variable_name)
        if not is_entity:
            return None, name
        if context.entity is None:
            raise ValueError(f'{variable_name} is per-player and no player is bound')
        return context.entity.name, name

    def _set_variable(self, action:Action, context:Context) -> None:
        entity_id, name = self._scope(action.parameter, context)
        value = self._substitute(action.additional_params[0] if action.additional_params else "", context)
        if entity_id is None:
            self.variables.set_global(name, value)
        else:
            self.variables.set_entity(entity_id, name, value)

    def _amount(self, action:Action, context:Context) -> float:
        raw = self._substitute(action.additional_params[0] if action.additional_params else config.Settings.parser.DEFAULT_AMOUNT, context)
        amount = util.parse_float(raw)
        if amount is None:
            raise ValueError(f'"{raw}" is not a number')
        return amount

    def _add_variable(self, action:Action, context:Context) -> None:
        entity_id, name = self._scope(action.parameter, context)
        self.variables.add(entity_id, name, self._amount(action, context))

    def _subtract_variable(self, action:Action, context:Context) -> None:
        entity_id, name = self._scope(action.parameter, context)
        self.variables.subtract(entity_id, name, self._amount(action, context))

    def _delete_variable(self, action:Action, context:Context) -> None:
        entity_id, name = self._scope(action.parameter, context)
        if entity_id is None:
            self.variables.delete_global(name)
        else:
            self.variables.delete_entity(entity_id, name)

    def _give_item(self, action:Action, context:Context) -> None:
        assert context.entity is not None
        raw = self._substitute(action.additional_params[0] if action.additional_params else "1", context)
        amount = util.parse_float(raw)
        if amount is None or amount < 1:
            raise ValueError(f'bad item amount "{raw}"')
        self.effects.give_item(context.entity, action.parameter, int(amount))

    def _kick_player(self, action:Action, context:Context) -> None:
        assert context.entity is not None
        self.effects.kick(context.entity, self._substitute(action.parameter, context))

    def _teleport(self, action:Action, context:Context) -> None:
        assert context.entity is not None
        coordinates = self._substitute(action.parameter, context).replace(",", " ").split()
        world_name = self._substitute(action.additional_params[0], context) if action.additional_params else None
        # world x y z, with the world unquoted
        if len(coordinates) == 4 and util.parse_float(coordinates[0]) is None:
            world_name = coordinates.pop(0)
        values = [util.parse_float(c) for c in coordinates]
        if len(values) != 3 or any(v is None for v in values):
            raise ValueError(f'expected x y z coordinates, got "{action.parameter}"')
        destination = np.array(values, dtype=np.float64)
        self.effects.teleport(context.entity, destination, world_name)

    def _play_sound(self, action:Action, context:Context) -> None:
        assert context.entity is not None
        self.effects.play_sound(context.entity, self._substitute(action.parameter, context))

    def _give_effect(self, action:Action, context:Context) -> None:
        assert context.entity is not None
        duration_text, level_text = (tuple(action.additional_params) + ("10", "1"))[:2]
        duration = util.parse_float(self._substitute(duration_text, context))
        level = util.parse_float(self._substitute(level_text, context))
        if duration is None or level is None:
            raise ValueError(f'bad duration "{duration_text}" or level "{level_text}"')
        duration_ticks = int(duration * config.Settings.player.TICKS_PER_SECOND)
        self.effects.give_effect(context.entity, action.parameter, duration_ticks, max(int(level) - 1, 0))

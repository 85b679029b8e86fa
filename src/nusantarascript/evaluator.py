""" Evaluates parsed conditions against an execution context.

Every condition variant has exactly one evaluation routine here. Conditions
about the entity or target are false when the context has none bound.
"""

import logging
from typing import Callable

from nusantarascript import conditions as cnd
from nusantarascript import util
from nusantarascript.context import Context
from nusantarascript.placeholders import lookup_variable, replace_bindings
from nusantarascript.variables import VariableStore, to_number

logger = logging.getLogger(__name__)

# checked in priority order, the first one present splits the expression
EXPRESSION_OPERATORS = (">", "<", "==")


def evaluate_expression(expression:str, context:Context) -> bool:
    """ evaluates a simple binary comparison like {arg1} == "emas"

    context bindings are substituted first. > and < compare numerically and
    are false if either side isn't a number, == compares text ignoring case.
    """
    text = replace_bindings(expression, context)
    for operator in EXPRESSION_OPERATORS:
        if operator in text:
            left, _, right = text.partition(operator)
            left = util.strip_quotes(left.strip())
            right = util.strip_quotes(right.strip())
            if operator == "==":
                return left.lower() == right.lower()

            left_number = util.parse_float(left)
            right_number = util.parse_float(right)
            if left_number is None or right_number is None:
                return False
            if operator == ">":
                return left_number > right_number
            else:
                return left_number < right_number
    return False


def _block_type(condition:cnd.BlockTypeCondition, context:Context, variables:VariableStore) -> bool:
    return context.target is not None and context.target.material.upper() == condition.material

def _holding_item(condition:cnd.HoldingItemCondition, context:Context, variables:VariableStore) -> bool:
    if context.entity is None or context.entity.held_item is None:
        return False
    return context.entity.held_item.upper() == condition.material

def _permission(condition:cnd.PermissionCondition, context:Context, variables:VariableStore) -> bool:
    return context.entity is not None and context.entity.has_permission(condition.permission)

def _player_name(condition:cnd.PlayerNameCondition, context:Context, variables:VariableStore) -> bool:
    return context.entity is not None and context.entity.name.lower() == condition.player_name.lower()

def _health_less_than(condition:cnd.HealthLessThanCondition, context:Context, variables:VariableStore) -> bool:
    return context.entity is not None and context.entity.health < condition.threshold

def _world(condition:cnd.WorldCondition, context:Context, variables:VariableStore) -> bool:
    return context.entity is not None and context.entity.world_name.lower() == condition.world_name.lower()

def _flying(condition:cnd.FlyingCondition, context:Context, variables:VariableStore) -> bool:
    return context.entity is not None and context.entity.is_flying

def _sneaking(condition:cnd.SneakingCondition, context:Context, variables:VariableStore) -> bool:
    return context.entity is not None and context.entity.is_sneaking

def _tool_match(condition:cnd.ToolMatchCondition, context:Context, variables:VariableStore) -> bool:
    if context.entity is None or context.target is None:
        return False
    return context.target.is_preferred_tool(context.entity.held_item)

def _variable_less_than(condition:cnd.VariableLessThanCondition, context:Context, variables:VariableStore) -> bool:
    current = to_number(lookup_variable(condition.variable_name, context, variables))
    return current is not None and current < condition.threshold

def _variable_greater_than(condition:cnd.VariableGreaterThanCondition, context:Context, variables:VariableStore) -> bool:
    current = to_number(lookup_variable(condition.variable_name, context, variables))
    return current is not None and current > condition.threshold

def _variable_equals(condition:cnd.VariableEqualsCondition, context:Context, variables:VariableStore) -> bool:
    value = lookup_variable(condition.variable_name, context, variables)
    if value is None:
        return False
    # a counter stored as 3.0 still equals "3"
    current = to_number(value)
    expected = util.parse_float(condition.expected_value)
    if current is not None and expected is not None:
        return current == expected
    return util.format_value(value).lower() == condition.expected_value.lower()

def _expression(condition:cnd.ExpressionCondition, context:Context, variables:VariableStore) -> bool:
    return evaluate_expression(condition.expression, context)


EVALUATORS:dict[type[cnd.Condition], Callable[..., bool]] = {
    cnd.BlockTypeCondition: _block_type,
    cnd.HoldingItemCondition: _holding_item,
    cnd.PermissionCondition: _permission,
    cnd.PlayerNameCondition: _player_name,
    cnd.HealthLessThanCondition: _health_less_than,
    cnd.WorldCondition: _world,
    cnd.FlyingCondition: _flying,
    cnd.SneakingCondition: _sneaking,
    cnd.ToolMatchCondition: _tool_match,
    cnd.VariableLessThanCondition: _variable_less_than,
    cnd.VariableGreaterThanCondition: _variable_greater_than,
    cnd.VariableEqualsCondition: _variable_equals,
    cnd.ExpressionCondition: _expression,
}
assert set(EVALUATORS.keys()) == set(cnd.CONDITION_TYPES), f'unhandled conditions: {set(cnd.CONDITION_TYPES) - set(EVALUATORS.keys())}'


def evaluate(condition:cnd.Condition, context:Context, variables:VariableStore) -> bool:
    result = EVALUATORS[type(condition)](condition, context, variables)
    logger.debug(f'line {condition.line_number}: {condition} -> {result}')
    return result

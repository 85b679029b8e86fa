import pytest

from nusantarascript import evaluator
from nusantarascript import conditions as cnd
from nusantarascript.context import Context
from nusantarascript.variables import VariableStore
from . import MockEntity, MockTarget

def test_every_condition_has_an_evaluator():
    assert set(evaluator.EVALUATORS.keys()) == set(cnd.CONDITION_TYPES)

def test_entity_conditions(context:Context, variables:VariableStore):
    assert evaluator.evaluate(cnd.PermissionCondition("nusantara.vip"), context, variables)
    assert not evaluator.evaluate(cnd.PermissionCondition("nusantara.admin"), context, variables)
    assert evaluator.evaluate(cnd.PlayerNameCondition("budi"), context, variables)
    assert not evaluator.evaluate(cnd.PlayerNameCondition("Ani"), context, variables)
    assert evaluator.evaluate(cnd.WorldCondition("WORLD"), context, variables)
    assert evaluator.evaluate(cnd.HealthLessThanCondition(20.5), context, variables)
    assert not evaluator.evaluate(cnd.HealthLessThanCondition(20.0), context, variables)
    assert not evaluator.evaluate(cnd.FlyingCondition(), context, variables)
    assert not evaluator.evaluate(cnd.SneakingCondition(), context, variables)

    sneaky = Context(entity=MockEntity("Ani", is_sneaking=True, is_flying=True))
    assert evaluator.evaluate(cnd.SneakingCondition(), sneaky, variables)
    assert evaluator.evaluate(cnd.FlyingCondition(), sneaky, variables)

def test_held_item_and_block(variables:VariableStore):
    player = MockEntity("Budi", held_item="diamond_pickaxe")
    block = MockTarget("DIAMOND_ORE", preferred_tools=["diamond_pickaxe"])
    context = Context(entity=player, target=block)
    assert evaluator.evaluate(cnd.HoldingItemCondition("DIAMOND_PICKAXE"), context, variables)
    assert evaluator.evaluate(cnd.BlockTypeCondition("DIAMOND_ORE"), context, variables)
    assert not evaluator.evaluate(cnd.BlockTypeCondition("STONE"), context, variables)
    assert evaluator.evaluate(cnd.ToolMatchCondition(), context, variables)

    empty_handed = Context(entity=MockEntity("Ani"), target=block)
    assert not evaluator.evaluate(cnd.HoldingItemCondition("DIAMOND_PICKAXE"), empty_handed, variables)
    assert not evaluator.evaluate(cnd.ToolMatchCondition(), empty_handed, variables)

def test_nothing_bound_is_false(variables:VariableStore):
    context = Context()
    for condition in [
        cnd.BlockTypeCondition("STONE"),
        cnd.HoldingItemCondition("STONE"),
        cnd.PermissionCondition("x"),
        cnd.PlayerNameCondition("Budi"),
        cnd.HealthLessThanCondition(100),
        cnd.WorldCondition("world"),
        cnd.FlyingCondition(),
        cnd.SneakingCondition(),
        cnd.ToolMatchCondition(),
        cnd.VariableEqualsCondition("skor.%player%", "0"),
    ]:
        assert not evaluator.evaluate(condition, context, variables), condition

def test_variable_comparisons(context:Context, variables:VariableStore):
    variables.set_global("koin", "7")
    variables.set_entity("Budi", "skor", 3.0)

    assert evaluator.evaluate(cnd.VariableLessThanCondition("koin", 10), context, variables)
    assert not evaluator.evaluate(cnd.VariableGreaterThanCondition("koin", 10), context, variables)
    assert evaluator.evaluate(cnd.VariableGreaterThanCondition("skor.%pemain%", 2), context, variables)
    assert evaluator.evaluate(cnd.VariableEqualsCondition("skor.%player%", "3"), context, variables)
    assert evaluator.evaluate(cnd.VariableEqualsCondition("skor.%player%", "3.0"), context, variables)

    # absent is neither less nor greater
    assert not evaluator.evaluate(cnd.VariableLessThanCondition("hilang", 10), context, variables)
    assert not evaluator.evaluate(cnd.VariableGreaterThanCondition("hilang", -10), context, variables)
    assert not evaluator.evaluate(cnd.VariableEqualsCondition("hilang", "0"), context, variables)

def test_variable_text_comparisons(context:Context, variables:VariableStore):
    variables.set_global("status", "Aktif")
    assert evaluator.evaluate(cnd.VariableEqualsCondition("status", "aktif"), context, variables)
    assert not evaluator.evaluate(cnd.VariableLessThanCondition("status", 10), context, variables)

def test_expression_bindings():
    assert evaluator.evaluate_expression('{arg1} == "emas"', Context(bindings={"arg1": "emas"}))
    assert evaluator.evaluate_expression('{arg1} == "emas"', Context(bindings={"arg1": "EMAS"}))
    assert not evaluator.evaluate_expression('{arg1} == "emas"', Context(bindings={"arg1": "perak"}))
    # unbound placeholders stay literal and don't match
    assert not evaluator.evaluate_expression('{arg1} == "emas"', Context())

def test_expression_numeric():
    context = Context(bindings={"args_count": "2"})
    assert evaluator.evaluate_expression("{args_count} > 1", context)
    assert not evaluator.evaluate_expression("{args_count} < 1", context)
    assert evaluator.evaluate_expression("{args_count} == 2", context)
    assert not evaluator.evaluate_expression('"dua" > 1', context)

@pytest.mark.parametrize("expression,expected", [
    ("5 > 3", True),
    ("3 > 5", False),
    ("'a' == \"A\"", True),
    ("1.5 < 2", True),
    ("tanpa operator", False),
])
def test_expression_forms(expression:str, expected:bool):
    assert evaluator.evaluate_expression(expression, Context()) == expected

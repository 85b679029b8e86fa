from nusantarascript.context import Context
from nusantarascript.placeholders import replace_placeholders
from nusantarascript.variables import VariableStore
from . import MockEntity

def test_player_name(variables:VariableStore):
    context = Context(entity=MockEntity("Budi"))
    assert replace_placeholders("Halo %player%!", context, variables) == "Halo Budi!"
    assert replace_placeholders("Halo %pemain%!", context, variables) == "Halo Budi!"

def test_display_name_is_used(variables:VariableStore):
    context = Context(entity=MockEntity("budi123", display_name="Budi"))
    assert replace_placeholders("Halo %player%", context, variables) == "Halo Budi"

def test_no_entity_leaves_token(variables:VariableStore):
    assert replace_placeholders("Halo %player%", Context(), variables) == "Halo %player%"

def test_bindings(variables:VariableStore):
    context = Context(bindings={"arg1": "emas", "args_count": 1})
    assert replace_placeholders("{arg1} x{args_count}", context, variables) == "emas x1"

def test_entity_variables(variables:VariableStore):
    variables.set_entity("Ani", "skor", 3.0)
    context = Context(entity=MockEntity("Ani"))
    assert replace_placeholders("Skor: {skor.%pemain%}", context, variables) == "Skor: 3.0"
    assert replace_placeholders("Skor: {skor.%player%}", context, variables) == "Skor: 3.0"

def test_missing_variable_is_zero(variables:VariableStore):
    context = Context(entity=MockEntity("Ani"))
    assert replace_placeholders("{hilang} {hilang.%player%}", context, variables) == "0 0"
    # per-player reference with nobody bound
    assert replace_placeholders("{skor.%player%}", Context(), variables) == "0"

def test_global_variables(variables:VariableStore):
    variables.set_global("motd", "Selamat")
    assert replace_placeholders("{motd}!", Context(), variables) == "Selamat!"

def test_colors(variables:VariableStore):
    assert replace_placeholders("&aHijau &lTebal", Context(), variables) == "§aHijau §lTebal"

def test_no_recursive_substitution(variables:VariableStore):
    variables.set_global("a", "{b}")
    variables.set_global("b", "tidak")
    context = Context(bindings={"arg1": "{a}"})
    # a binding value that looks like a variable is still substituted in the
    # variable pass, but a variable value is never expanded again
    assert replace_placeholders("{arg1}", context, variables) == "{b}"

def test_unterminated_brace(variables:VariableStore):
    assert replace_placeholders("{tidak ditutup", Context(), variables) == "{tidak ditutup"

def test_binding_wins_over_variable(variables:VariableStore):
    variables.set_global("arg1", "global")
    context = Context(bindings={"arg1": "binding"})
    assert replace_placeholders("{arg1}", context, variables) == "binding"

def test_empty(variables:VariableStore):
    assert replace_placeholders("", Context(), variables) == ""

def test_empty_braces_are_left_alone(variables:VariableStore):
    assert replace_placeholders("kosong {} tetap", Context(), variables) == "kosong {} tetap"

""" Placeholder substitution for script text.

replace_placeholders runs a fixed sequence of passes over the text, each one
exactly once, so substituted values are never themselves expanded:

 1. actor tokens (%player%, %pemain%) become the acting entity's display name
 2. {key} for each context binding becomes the binding's value
 3. any other {name} becomes the variable's value, or 0 if it has none
 4. the color marker & becomes the host's rich text marker
"""

import re
from typing import Any, Optional

from nusantarascript import config, util
from nusantarascript.context import Context
from nusantarascript.variables import VariableStore, resolve_variable_name

RE_BRACED = re.compile(r'\{([^{}]+)\}')


def lookup_variable(name:str, context:Context, variables:VariableStore) -> Optional[Any]:
    """ value of a variable reference in context, None if absent """
    is_entity, bare_name = resolve_variable_name(name)
    if is_entity:
        if context.entity is None:
            return None
        return variables.get_entity(context.entity.name, bare_name)
    return variables.get_global(bare_name)


def _replace_outside_braces(text:str, old:str, new:str) -> str:
    # {skor.%pemain%} has to reach the variable pass intact
    parts = []
    last = 0
    for m in RE_BRACED.finditer(text):
        parts.append(text[last:m.start()].replace(old, new))
        parts.append(m.group(0))
        last = m.end()
    parts.append(text[last:].replace(old, new))
    return "".join(parts)


def replace_bindings(text:str, context:Context) -> str:
    for key, value in context.bindings.items():
        text = text.replace(f'{{{key}}}', util.format_value(value))
    return text


def replace_placeholders(text:str, context:Context, variables:VariableStore) -> str:
    if not text:
        return ""

    if context.entity is not None:
        display_name = context.entity.display_name
        for token in config.Settings.placeholders.ENTITY_TOKENS:
            text = _replace_outside_braces(text, token, display_name)

    text = replace_bindings(text, context)

    def variable_value(m:re.Match) -> str:
        value = lookup_variable(m.group(1), context, variables)
        return "0" if value is None else util.format_value(value)
    text = RE_BRACED.sub(variable_value, text)

    return colorize(text)


def colorize(text:str) -> str:
    return text.replace(config.Settings.placeholders.COLOR_MARKER, config.Settings.placeholders.HOST_COLOR_MARKER)

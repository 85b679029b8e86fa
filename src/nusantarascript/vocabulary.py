""" NusantaraScript phrase vocabulary

Recognizes the fixed catalogue of Indonesian phrases for triggers,
conditions and actions and turns a single line of text into the matching
model object. Anything that doesn't fit raises ValueError, the parser decides
what to do about it.

Matching is case-insensitive and ignores the contents of quoted strings, so
kirim "jika tidak" ke pemain is still just a message.
"""

import re
from typing import Sequence

from nusantarascript import util, config
from nusantarascript import conditions as cnd
from nusantarascript.script import Action, ActionType, EventType

TRIGGER_PREFIXES = ("saat ", "ketika ")
TRIGGERS = {
    "pemain masuk": EventType.PLAYER_JOIN,
    "pemain keluar": EventType.PLAYER_QUIT,
    "pemain chat": EventType.PLAYER_CHAT,
    "blok dihancurkan": EventType.BLOCK_BREAK,
    "pemain mati": EventType.PLAYER_DEATH,
    "pemain hidup kembali": EventType.PLAYER_RESPAWN,
    "pemain terluka": EventType.PLAYER_DAMAGE,
    "entitas terluka": EventType.ENTITY_DAMAGE,
    "entity terluka": EventType.ENTITY_DAMAGE,
}

COMMAND_KEYWORD = "perintah "
CONDITION_KEYWORD = "jika "
ELSE_MARKERS = ("jika tidak", "kalau tidak", "selain itu")
EXPRESSION_OPERATORS = (">", "<", "==")

PROPERTY_PERMISSION = "izin:"
PROPERTY_DESCRIPTION = "deskripsi:"
PROPERTY_ACTIONS = "aksi:"

# [variabel] {name} <comparison> <value>
RE_VARIABLE_CONDITION = re.compile(
    r'^(?:variabel\s+)?\{([^{}]+)\}\s+(kurang dari|lebih dari|sama dengan|adalah)\s+(.+)$',
    re.IGNORECASE,
)
RE_VARIABLE_NAME = re.compile(r'\{([^{}]*)\}')
RE_EFFECT_DURATION = re.compile(r'durasi\s+(\S+)', re.IGNORECASE)
RE_EFFECT_LEVEL = re.compile(r'level\s+(\S+)', re.IGNORECASE)
RE_TELEPORT = re.compile(r'^\S+\s+pemain\s+ke\b(.*)$', re.IGNORECASE)
RE_SOUND = re.compile(r'^(?:mainkan\s+)?suara\b(.*?)(?:\bke\s+pemain)?$', re.IGNORECASE)


def _strip_colon(text:str) -> str:
    text = text.strip()
    if text.endswith(":"):
        text = text[:-1].rstrip()
    return text

def _keywords(text:str) -> str:
    """ lower case text with quoted literals dropped and whitespace collapsed """
    return " ".join(util.remove_strings(text).lower().split())

def normalize_material(name:str) -> str:
    material = "_".join(name.strip().upper().split())
    if not material:
        raise ValueError("empty material name")
    return material

def extract_variable_name(text:str) -> str:
    """ contents of the first {...} span of text """
    m = RE_VARIABLE_NAME.search(text)
    if not m or not m.group(1).strip():
        raise ValueError(f'expected a {{variable}} in "{text}"')
    return m.group(1).strip()

def _first_string(strings:Sequence[str], what:str, text:str) -> str:
    if not strings:
        raise ValueError(f'expected quoted {what} in "{text}"')
    return strings[0]

def _number(text:str, what:str) -> float:
    number = util.extract_number(text)
    if number is None:
        raise ValueError(f'expected a number for {what} in "{text}"')
    return float(number)


# line classification

def is_trigger(text:str) -> bool:
    lower = text.strip().lower()
    return lower.startswith(TRIGGER_PREFIXES) and lower.endswith(":")

def is_command_declaration(text:str) -> bool:
    return text.strip().lower().startswith(COMMAND_KEYWORD)

def is_else(text:str) -> bool:
    return _strip_colon(text).lower() in ELSE_MARKERS

def is_condition(text:str) -> bool:
    return text.strip().lower().startswith(CONDITION_KEYWORD) and not is_else(text)


# triggers and commands

def parse_trigger(text:str) -> EventType:
    trigger = " ".join(_strip_colon(text).lower().split())
    for prefix in TRIGGER_PREFIXES:
        if trigger.startswith(prefix):
            trigger = trigger[len(prefix):].strip()
            break
    else:
        raise ValueError(f'not a trigger "{text}"')

    if trigger not in TRIGGERS:
        raise ValueError(f'unknown event trigger "{trigger}"')
    return TRIGGERS[trigger]

def parse_command_declaration(text:str) -> tuple[str, tuple[str, ...]]:
    """ perintah /name arg1 arg2: -> ("name", ("arg1", "arg2")) """
    if not is_command_declaration(text):
        raise ValueError(f'not a command declaration "{text}"')
    parts = _strip_colon(text)[len(COMMAND_KEYWORD):].split()
    if not parts:
        raise ValueError(f'command declaration without a name "{text}"')
    name = parts[0]
    if name.startswith("/"):
        name = name[1:]
    name = name.lower()
    if not name:
        raise ValueError(f'command declaration without a name "{text}"')
    return name, tuple(x.strip(":") for x in parts[1:] if x.strip(":"))

def parse_property_value(text:str) -> str:
    """ izin: "some.permission" -> some.permission """
    strings = util.extract_strings(text)
    if strings:
        return strings[0]
    _, _, value = text.partition(":")
    return value.strip()


# conditions

def parse_condition(text:str, line_number:int=0) -> cnd.Condition:
    condition_text = _strip_colon(text)
    if condition_text.lower().startswith(CONDITION_KEYWORD):
        condition_text = condition_text[len(CONDITION_KEYWORD):].strip()
    if not condition_text:
        raise ValueError(f'empty condition "{text}"')

    keywords = _keywords(condition_text)
    strings = util.extract_strings(condition_text)

    m = RE_VARIABLE_CONDITION.match(condition_text)
    if m:
        variable_name = m.group(1).strip()
        comparison = " ".join(m.group(2).lower().split())
        value = m.group(3).strip()
        if comparison == "kurang dari":
            return cnd.VariableLessThanCondition(variable_name, _number(value, "comparison"), line_number)
        elif comparison == "lebih dari":
            return cnd.VariableGreaterThanCondition(variable_name, _number(value, "comparison"), line_number)
        else:
            return cnd.VariableEqualsCondition(variable_name, util.strip_quotes(value), line_number)

    if keywords.startswith("darah pemain kurang dari"):
        return cnd.HealthLessThanCondition(_number(keywords, "health"), line_number)
    elif keywords.startswith("dunia adalah"):
        return cnd.WorldCondition(_first_string(strings, "world name", text), line_number)
    elif keywords.startswith("blok adalah"):
        return cnd.BlockTypeCondition(normalize_material(_first_string(strings, "material", text)), line_number)
    elif keywords.startswith("pemain memegang"):
        return cnd.HoldingItemCondition(normalize_material(_first_string(strings, "material", text)), line_number)
    elif keywords.startswith("pemain punya izin"):
        return cnd.PermissionCondition(_first_string(strings, "permission", text), line_number)
    elif keywords.startswith("pemain adalah"):
        return cnd.PlayerNameCondition(_first_string(strings, "player name", text), line_number)
    elif keywords == "pemain sedang terbang":
        return cnd.FlyingCondition(line_number)
    elif keywords == "pemain sedang menyelinap":
        return cnd.SneakingCondition(line_number)
    elif keywords == "alat benar":
        return cnd.ToolMatchCondition(line_number)
    elif any(op in condition_text for op in EXPRESSION_OPERATORS):
        return cnd.ExpressionCondition(condition_text, line_number)

    raise ValueError(f'unknown condition "{text}"')


# actions

def _variable_value(raw:str, strings:Sequence[str]) -> str:
    """ value of a set variable line, quoted or after menjadi / = """
    if strings:
        return strings[0]
    m = RE_VARIABLE_NAME.search(raw)
    rest = raw[m.end():] if m else raw
    rest = rest.strip()
    if rest.lower().startswith("menjadi"):
        return rest[len("menjadi"):].strip()
    if rest.startswith("="):
        return rest[1:].strip()
    return ""

def _amount(keywords:str) -> str:
    # variable names can hold digits, only look outside the braces
    default = config.Settings.parser.DEFAULT_AMOUNT
    return util.extract_number(RE_VARIABLE_NAME.sub(" ", keywords), default) or default

def parse_action(text:str, line_number:int=0) -> Action:
    raw = text.strip()
    strings = util.extract_strings(raw)
    keywords = _keywords(raw)

    if keywords == "berhenti":
        return Action(ActionType.STOP, line_number=line_number)

    elif keywords.startswith("kirim") and "ke pemain" in keywords:
        return Action(ActionType.SEND_MESSAGE, _first_string(strings, "message", raw), line_number=line_number)

    elif keywords.startswith(("broadcast", "umumkan")):
        return Action(ActionType.BROADCAST, _first_string(strings, "message", raw), line_number=line_number)

    elif keywords in ("batalkan event", "cancel event"):
        return Action(ActionType.CANCEL_EVENT, line_number=line_number)

    elif keywords in ("pulihkan pemain", "heal pemain"):
        return Action(ActionType.HEAL_PLAYER, line_number=line_number)

    elif keywords in ("beri makan pemain", "feed pemain"):
        return Action(ActionType.FEED_PLAYER, line_number=line_number)

    elif keywords.startswith(("atur variabel", "set variabel", "setel")):
        return Action(
            ActionType.SET_VARIABLE,
            extract_variable_name(raw),
            (_variable_value(raw, strings),),
            line_number=line_number,
        )

    elif keywords.startswith("tambah"):
        return Action(ActionType.ADD_VARIABLE, extract_variable_name(raw), (_amount(keywords),), line_number=line_number)

    elif keywords.startswith("kurangi"):
        return Action(ActionType.SUBTRACT_VARIABLE, extract_variable_name(raw), (_amount(keywords),), line_number=line_number)

    elif keywords.startswith(("hapus variabel", "delete variabel")):
        return Action(ActionType.DELETE_VARIABLE, extract_variable_name(raw), line_number=line_number)

    elif keywords.startswith("berikan efek"):
        effect = _first_string(strings, "effect", raw)
        unquoted = util.remove_strings(raw)
        duration = RE_EFFECT_DURATION.search(unquoted)
        level = RE_EFFECT_LEVEL.search(unquoted)
        return Action(
            ActionType.GIVE_EFFECT,
            normalize_material(effect),
            (duration.group(1) if duration else "10", level.group(1) if level else "1"),
            line_number=line_number,
        )

    elif keywords.startswith("beri_item"):
        material, _, amount = raw[len("beri_item"):].partition(",")
        return Action(
            ActionType.GIVE_ITEM,
            normalize_material(util.strip_quotes(material.strip())),
            (amount.strip() or "1",),
            line_number=line_number,
        )

    elif keywords.startswith("berikan"):
        return Action(
            ActionType.GIVE_ITEM,
            normalize_material(_first_string(strings, "item", raw)),
            (util.extract_number(keywords, "1") or "1",),
            line_number=line_number,
        )

    elif keywords.startswith(("keluarkan pemain", "tendang pemain", "kick pemain")):
        return Action(ActionType.KICK_PLAYER, strings[0] if strings else "", line_number=line_number)

    elif keywords.startswith(("teleportasi pemain ke", "teleport pemain ke")):
        m = RE_TELEPORT.match(util.remove_strings(raw))
        coordinates = " ".join(m.group(1).split()) if m else ""
        if not coordinates:
            raise ValueError(f'expected coordinates in "{text}"')
        # optional quoted world name comes along as the secondary parameter
        return Action(ActionType.TELEPORT, coordinates, tuple(strings[:1]), line_number=line_number)

    elif keywords.startswith(("suara", "mainkan suara")):
        if strings:
            sound = strings[0]
        else:
            m = RE_SOUND.match(raw)
            sound = m.group(1).strip() if m else ""
        if not sound:
            raise ValueError(f'expected a sound name in "{text}"')
        return Action(ActionType.PLAY_SOUND, sound, line_number=line_number)

    raise ValueError(f'unknown action "{text}"')

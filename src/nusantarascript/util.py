""" Utility methods broadly applicable across the codebase. """

from __future__ import annotations

import re
import math
import bisect
import logging
from typing import Any, Iterable, List, Optional

logger = logging.getLogger(__name__)

def fullname(o:Any) -> str:
    # from https://stackoverflow.com/a/2020083/553580
    # o.__module__ + "." + o.__class__.__qualname__ is an example in
    # this context of H.L. Mencken's "neat, plausible, and wrong."
    # Python makes no guarantees as to whether the __module__ special
    # attribute is defined, so we take a more circumspect approach.

    if isinstance(o, type):
        klass = o
    else:
        klass = o.__class__

    module = klass.__module__
    if module is None or module == str.__class__.__module__:
        return klass.__qualname__  # Avoid reporting __builtin__
    else:
        return module + '.' + klass.__qualname__

RE_QUOTED = re.compile(r'"([^"]*)"')
def extract_strings(line:str) -> List[str]:
    """ all double quoted literals in line, in order, without the quotes

    kirim "Selamat datang!" ke pemain -> ["Selamat datang!"]
    """
    return RE_QUOTED.findall(line)

def remove_strings(line:str) -> str:
    """ drops double quoted literals from line, leaving the surrounding text """
    return RE_QUOTED.sub("", line)

def parse_float(text:str) -> Optional[float]:
    """ text as a finite float, None if it isn't one (inf and nan are not) """
    try:
        value = float(text.strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value

def extract_number(text:str, default:Optional[str]=None) -> Optional[str]:
    """ first whitespace separated token of text that parses as a number

    returns the token as written (so "5" stays "5") or default if there is
    no such token.
    """
    for part in text.split():
        if parse_float(part) is not None:
            return part
    return default

def strip_quotes(text:str) -> str:
    """ strips exactly one pair of surrounding quotes, if present """
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ('"', "'"):
        return text[1:-1]
    return text

def format_value(value:Any) -> str:
    """ display form of a stored variable value """
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)

def elipsis(string:str, max_length:int) -> str:
    if len(string) <= max_length:
        return string
    else:
        return string[:max_length-3] + "..."

def tab_complete(partial:str, options:Iterable[str]) -> List[str]:
    """ Tab completion of partial, every option it prefixes, sorted. """

    options = sorted(options)
    i = bisect.bisect_left(options, partial)
    candidates = []
    while i < len(options) and options[i].startswith(partial):
        candidates.append(options[i])
        i += 1
    return candidates

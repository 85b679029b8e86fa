""" Indentation tokenizer for NusantaraScript source

Turns raw script lines into IndentedLine records. Indentation is what gives a
script its structure:

saat pemain masuk:                     <- level 0, trigger
    kirim "Halo" ke pemain             <- level 1, action
    jika pemain punya izin "vip":      <- level 1, condition
        kirim "VIP!" ke pemain         <- level 2, conditional action

Blank and comment lines are kept so line numbers and indices stay aligned
with the source. The parser skips them.
"""

from typing import Iterable, List, Optional

from nusantarascript import config


class IndentedLine:
    def __init__(self, content:str, indent_level:int, line_number:int) -> None:
        self.content = content
        self.indent_level = indent_level
        self.line_number = line_number

    @property
    def is_blank(self) -> bool:
        return self.content == ""

    @property
    def is_comment(self) -> bool:
        return self.content.startswith(config.Settings.parser.COMMENT_PREFIX)

    @property
    def is_skippable(self) -> bool:
        return self.is_blank or self.is_comment

    def __eq__(self, other:object) -> bool:
        if not isinstance(other, IndentedLine):
            return NotImplemented
        return (self.content, self.indent_level, self.line_number) == (other.content, other.indent_level, other.line_number)

    def __repr__(self) -> str:
        return f'IndentedLine({self.content!r}, {self.indent_level}, {self.line_number})'


def indent_width(line:str, tab_width:Optional[int]=None) -> int:
    """ width of the leading whitespace of line, tabs count tab_width """
    if tab_width is None:
        tab_width = config.Settings.parser.TAB_WIDTH
    width = 0
    for c in line:
        if c == " ":
            width += 1
        elif c == "\t":
            width += tab_width
        else:
            break
    return width


def tokenize(lines:Iterable[str], indent_size:Optional[int]=None, tab_width:Optional[int]=None) -> List[IndentedLine]:
    if indent_size is None:
        indent_size = config.Settings.parser.INDENT_SIZE

    result:List[IndentedLine] = []
    for i, line in enumerate(lines):
        # lines may still carry their terminators
        line = line.rstrip("\r\n")
        result.append(IndentedLine(
            line.strip(),
            indent_width(line, tab_width) // indent_size,
            i + 1,
        ))
    return result

""" NusantaraScript block parser

Consumes the indented line stream from the lexer and builds a Script:

 * level 0 lines are trigger declarations (saat pemain masuk:) or command
   declarations (perintah /nama arg1:), anything else is skipped
 * a body is every line indented past its header; lines exactly one level
   deeper are either an action or a condition (jika ...:) which opens a
   conditional block parsed recursively
 * a conditional block at level L may be followed, at level L, by an else
   marker (jika tidak:) or by another condition, which becomes an else-if:
   a single nested condition action making up the whole else list

Unrecognized lines are logged with file and line number and dropped, the
rest of the file still parses. A file that ends up with no handlers and no
commands is reported and rejected.
"""

import logging
from typing import List, Optional, Sequence

from nusantarascript import util, config, lexer, vocabulary
from nusantarascript.lexer import IndentedLine
from nusantarascript.script import Action, ConditionalBlock, CustomCommand, EventHandler, Script


class ParseDiagnostic:
    def __init__(self, filename:str, line_number:int, message:str) -> None:
        self.filename = filename
        self.line_number = line_number
        self.message = message

    def __str__(self) -> str:
        return f'{self.filename} line {self.line_number}: {self.message}'

    def __repr__(self) -> str:
        return f'ParseDiagnostic({self.filename!r}, {self.line_number}, {self.message!r})'


class ScriptParser:
    def __init__(self) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        # diagnostics for the most recent call to parse
        self.diagnostics:List[ParseDiagnostic] = []
        self._filename = ""

    def _diagnostic(self, line:IndentedLine, message:str) -> None:
        diagnostic = ParseDiagnostic(self._filename, line.line_number, message)
        self.diagnostics.append(diagnostic)
        self.logger.warning(str(diagnostic))

    def parse(self, filename:str, raw_lines:Sequence[str]) -> Optional[Script]:
        """ Parses script source into a Script.

        Parameters
        ----------
        filename : str
            identifies the script, used in diagnostics
        raw_lines : sequence of str
            the source, one entry per line

        Returns
        -------
        out : Script or None
            the parsed script, None if nothing usable was found
        """

        self.diagnostics = []
        self._filename = filename

        lines = lexer.tokenize(raw_lines)

        event_handlers:List[EventHandler] = []
        custom_commands:List[CustomCommand] = []

        i = 0
        while i < len(lines):
            line = lines[i]
            if line.is_skippable:
                i += 1
            elif line.indent_level == 0 and vocabulary.is_trigger(line.content):
                handler, i = self._parse_event_handler(lines, i)
                if handler is not None:
                    event_handlers.append(handler)
            elif line.indent_level == 0 and vocabulary.is_command_declaration(line.content):
                command, i = self._parse_custom_command(lines, i)
                if command is not None:
                    custom_commands.append(command)
            else:
                self._diagnostic(line, f'skipping unexpected line "{line.content}"')
                i += 1

        if not event_handlers and not custom_commands:
            self.logger.warning(f'no event handlers or commands found in {filename}')
            return None

        self.logger.debug(f'parsed {filename}: {len(event_handlers)} handlers, {len(custom_commands)} commands, {len(self.diagnostics)} diagnostics')
        return Script(filename, tuple(event_handlers), tuple(custom_commands))

    def _skip_block(self, lines:Sequence[IndentedLine], start:int) -> int:
        """ index of the first line after the block headed by lines[start] """
        level = lines[start].indent_level
        i = start + 1
        while i < len(lines) and (lines[i].is_skippable or lines[i].indent_level > level):
            i += 1
        return i

    def _parse_event_handler(self, lines:Sequence[IndentedLine], start:int) -> tuple[Optional[EventHandler], int]:
        trigger_line = lines[start]
        try:
            event_type = vocabulary.parse_trigger(trigger_line.content)
        except ValueError as e:
            self._diagnostic(trigger_line, str(e))
            return None, self._skip_block(lines, start)

        actions, i = self._parse_actions(lines, start + 1, trigger_line.indent_level + 1)
        return EventHandler(event_type, actions, trigger_line.line_number), i

    def _parse_actions(self, lines:Sequence[IndentedLine], start:int, level:int) -> tuple[tuple[Action, ...], int]:
        """ parses the body whose lines sit at level

        returns the actions in source order and the index of the first line
        that is not part of the body. conditions at level become nested
        condition actions right where they appear.
        """
        actions:List[Action] = []
        i = start
        while i < len(lines):
            line = lines[i]
            if line.is_skippable:
                i += 1
                continue
            if line.indent_level < level:
                break

            if line.indent_level > level:
                self._diagnostic(line, f'unexpected indentation for "{line.content}"')
                i += 1
            elif vocabulary.is_condition(line.content):
                block, i = self._parse_conditional_block(lines, i)
                if block is not None:
                    actions.append(Action.nested(block, line.line_number))
            elif vocabulary.is_else(line.content):
                self._diagnostic(line, "else without a preceding condition")
                i = self._skip_block(lines, i)
            else:
                try:
                    actions.append(vocabulary.parse_action(line.content, line.line_number))
                except ValueError as e:
                    self._diagnostic(line, str(e))
                i += 1

        return tuple(actions), i

    def _parse_conditional_block(self, lines:Sequence[IndentedLine], start:int) -> tuple[Optional[ConditionalBlock], int]:
        condition_line = lines[start]
        level = condition_line.indent_level
        try:
            condition = vocabulary.parse_condition(condition_line.content, condition_line.line_number)
        except ValueError as e:
            self._diagnostic(condition_line, str(e))
            return None, self._skip_block(lines, start)

        actions, i = self._parse_actions(lines, start + 1, level + 1)
        else_actions:tuple[Action, ...] = ()

        # _parse_actions stops on a non-blank line at or above our level
        if i < len(lines) and lines[i].indent_level == level:
            next_line = lines[i]
            if vocabulary.is_else(next_line.content):
                else_actions, i = self._parse_actions(lines, i + 1, level + 1)
            elif vocabulary.is_condition(next_line.content):
                # else-if, the recursive call consumes the rest of the chain
                else_block, i = self._parse_conditional_block(lines, i)
                if else_block is not None:
                    else_actions = (Action.nested(else_block, next_line.line_number),)

        return ConditionalBlock(condition, actions, else_actions, condition_line.line_number), i

    def _parse_custom_command(self, lines:Sequence[IndentedLine], start:int) -> tuple[Optional[CustomCommand], int]:
        command_line = lines[start]
        try:
            name, arguments = vocabulary.parse_command_declaration(command_line.content)
        except ValueError as e:
            self._diagnostic(command_line, str(e))
            return None, self._skip_block(lines, start)

        permission:Optional[str] = None
        description:str = config.Settings.commands.DEFAULT_DESCRIPTION
        actions:List[Action] = []

        i = start + 1
        while i < len(lines):
            line = lines[i]
            if line.is_skippable:
                i += 1
                continue
            if line.indent_level <= command_line.indent_level:
                break

            lower = line.content.lower()
            if line.indent_level != command_line.indent_level + 1:
                self._diagnostic(line, f'unexpected line outside of aksi: "{line.content}"')
                i += 1
            elif lower.startswith(vocabulary.PROPERTY_PERMISSION):
                permission = vocabulary.parse_property_value(line.content) or None
                i += 1
            elif lower.startswith(vocabulary.PROPERTY_DESCRIPTION):
                description = vocabulary.parse_property_value(line.content)
                i += 1
            elif lower == vocabulary.PROPERTY_ACTIONS:
                block_actions, i = self._parse_actions(lines, i + 1, line.indent_level + 1)
                actions.extend(block_actions)
            else:
                self._diagnostic(line, f'unknown command property "{line.content}"')
                i += 1

        return CustomCommand(name, arguments, permission, description, tuple(actions), command_line.line_number), i

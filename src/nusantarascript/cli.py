""" Command line tool for checking NusantaraScript files without a host.

nusantarascript check scripts/*.ns
nusantarascript dump scripts/contoh.ns
"""

import sys
import logging
import argparse
from typing import List, Sequence, TextIO

from nusantarascript import config, util
from nusantarascript.parser import ScriptParser
from nusantarascript.script import Action, ActionType, ConditionalBlock, Script

MAX_PARAMETER_WIDTH = 60


def read_lines(path:str) -> List[str]:
    with open(path, "r", encoding="utf-8-sig") as f:
        return f.read().splitlines()


def _format_action(action:Action) -> str:
    parts = [action.action_type.name]
    if action.parameter:
        parts.append(repr(util.elipsis(action.parameter, MAX_PARAMETER_WIDTH)))
    parts.extend(repr(x) for x in action.additional_params)
    return " ".join(parts)


def _dump_actions(actions:Sequence[Action], depth:int, out:TextIO) -> None:
    indent = "    " * depth
    for action in actions:
        if action.action_type == ActionType.NESTED_CONDITION:
            assert action.nested_block is not None
            _dump_block(action.nested_block, depth, out)
        else:
            out.write(f'{indent}{_format_action(action)}  # line {action.line_number}\n')


def _dump_block(block:ConditionalBlock, depth:int, out:TextIO) -> None:
    indent = "    " * depth
    out.write(f'{indent}jika {block.condition}:  # line {block.line_number}\n')
    _dump_actions(block.actions, depth+1, out)
    if block.else_actions:
        out.write(f'{indent}jika tidak:\n')
        _dump_actions(block.else_actions, depth+1, out)


def dump_script(script:Script, out:TextIO) -> None:
    out.write(f'# {script.filename}\n')
    for handler in script.event_handlers:
        out.write(f'{handler.event_type.name}:  # line {handler.line_number}\n')
        _dump_actions(handler.actions, 1, out)
    for command in script.custom_commands:
        header = " ".join((f'/{command.name}',) + command.arguments)
        out.write(f'{header}:  # line {command.line_number}\n')
        out.write(f'    izin: {command.permission}\n')
        out.write(f'    deskripsi: {command.description}\n')
        _dump_actions(command.actions, 1, out)


def check(paths:Sequence[str], out:TextIO) -> int:
    """ parses each file, reporting what it holds. returns the failure count """
    parser = ScriptParser()
    failures = 0
    for path in paths:
        try:
            lines = read_lines(path)
        except (OSError, UnicodeDecodeError) as e:
            out.write(f'{path}: cannot read: {e}\n')
            failures += 1
            continue

        script = parser.parse(path, lines)
        for diagnostic in parser.diagnostics:
            out.write(f'{diagnostic}\n')
        if script is None:
            out.write(f'{path}: no event handlers or commands\n')
            failures += 1
        else:
            out.write(f'{path}: {len(script.event_handlers)} handlers, {len(script.custom_commands)} commands, {len(parser.diagnostics)} dropped lines\n')
    return failures


def main() -> None:
    parser = argparse.ArgumentParser(description="check and inspect NusantaraScript files")
    parser.add_argument("-c", "--config", type=argparse.FileType("r"), default=None,
                        help="config override file (toml)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log parser details")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="parse files and report problems")
    check_parser.add_argument("files", nargs="+", type=str)

    dump_parser = subparsers.add_parser("dump", help="print the parsed structure of a file")
    dump_parser.add_argument("file", type=str)

    args = parser.parse_args()

    logging.basicConfig(
            format="%(asctime)s %(name)-12s %(levelname)-8s %(message)s",
            stream=sys.stderr,
            level=logging.DEBUG if args.verbose else logging.ERROR,
    )
    logging.captureWarnings(True)

    if args.config:
        config.load_config(args.config)

    if args.command == "check":
        sys.exit(1 if check(args.files, sys.stdout) else 0)
    else:
        script = ScriptParser().parse(args.file, read_lines(args.file))
        if script is None:
            sys.stderr.write(f'{args.file}: no event handlers or commands\n')
            sys.exit(1)
        dump_script(script, sys.stdout)


if __name__ == "__main__":
    main()

""" Custom commands declared in scripts (perintah /nama ...:) """

import logging
from typing import Optional, Sequence

from nusantarascript import util
from nusantarascript.executor import ScriptExecutor
from nusantarascript.host import AbstractCommandRegistrar, AbstractEntity
from nusantarascript.script import CustomCommand


def normalize_command_name(name:str) -> str:
    name = name.strip().lower()
    if name.startswith("/"):
        name = name[1:]
    return name


class CustomCommandRegistry:
    """ tracks script commands and exposes them through the host registrar """

    def __init__(self, registrar:AbstractCommandRegistrar, executor:ScriptExecutor) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.registrar = registrar
        self.executor = executor
        self._commands:dict[str, CustomCommand] = {}

    def __len__(self) -> int:
        return len(self._commands)

    def register(self, command:CustomCommand) -> None:
        name = normalize_command_name(command.name)
        if name in self._commands:
            self.logger.warning(f'command /{name} declared more than once, replacing the one from line {self._commands[name].line_number}')
            self.registrar.unregister(name)

        def invoke(sender:Optional[AbstractEntity], args:Sequence[str]) -> None:
            self.executor.execute_custom_command(command, sender, args)

        self.registrar.register(name, command.permission, command.description, invoke)
        self._commands[name] = command
        self.logger.info(f'registered custom command /{name}')

    def unregister_all(self) -> None:
        for name in self._commands:
            self.registrar.unregister(name)
        self._commands.clear()

    def lookup(self, name:str) -> Optional[CustomCommand]:
        return self._commands.get(normalize_command_name(name))

    def is_registered(self, name:str) -> bool:
        return normalize_command_name(name) in self._commands

    def registered_commands(self) -> dict[str, CustomCommand]:
        return dict(self._commands)

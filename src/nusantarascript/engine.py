""" ScriptEngine ties parsing, execution, variables and commands together.

A host builds one engine with its effects and command registrar, calls start
once, forwards events with trigger, and calls shutdown when it stops.

    engine = ScriptEngine.in_data_folder("plugins/NusantaraScript", effects, registrar)
    engine.start()
    engine.trigger(EventType.PLAYER_JOIN, Context(entity=player))
    ...
    engine.shutdown()
"""

import os
import glob
import logging
import collections
from typing import Optional, Sequence

from nusantarascript import util, config
from nusantarascript.admin import AdminCommand
from nusantarascript.commands import CustomCommandRegistry
from nusantarascript.context import Context
from nusantarascript.executor import ScriptExecutor
from nusantarascript.host import AbstractCommandRegistrar, AbstractEffects, AbstractEntity, VariablePersistence
from nusantarascript.parser import ScriptParser
from nusantarascript.script import EventHandler, EventType, Script, ScriptError
from nusantarascript.variables import TomlVariablePersistence, VariableStore

logger = logging.getLogger(__name__)


def create_sample_scripts(folder:str) -> list[str]:
    """ writes the bundled sample scripts into folder if it has no scripts

    returns the paths written, empty if the folder already had scripts.
    """
    os.makedirs(folder, exist_ok=True)
    if glob.glob(os.path.join(folder, f'*{config.Settings.scripts.EXTENSION}')):
        return []

    written = []
    for sample in config.Settings.scripts.SAMPLES:
        path = os.path.join(folder, sample)
        with open(path, "w", encoding="utf-8") as f:
            f.write(config.read_data_text(sample))
        written.append(path)
    logger.info(f'created {len(written)} sample scripts in {folder}')
    return written


class ScriptEngine:
    def __init__(
        self,
        effects:AbstractEffects,
        registrar:AbstractCommandRegistrar,
        persistence:Optional[VariablePersistence]=None,
        scripts_folder:Optional[str]=None,
        debug:bool=False,
    ) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.scripts_folder = scripts_folder
        self.registrar = registrar

        self.parser = ScriptParser()
        self.variables = VariableStore(persistence)
        self.executor = ScriptExecutor(self.variables, effects, debug=debug)
        self.commands = CustomCommandRegistry(registrar, self.executor)
        self.admin = AdminCommand(self)

        self.scripts:dict[str, Script] = {}
        self.handlers:collections.defaultdict[EventType, list[EventHandler]] = collections.defaultdict(list)

        self._started = False

    @classmethod
    def in_data_folder(cls, data_folder:str, effects:AbstractEffects, registrar:AbstractCommandRegistrar, debug:bool=False) -> "ScriptEngine":
        """ an engine keeping scripts and variables under a host data folder """
        return cls(
            effects,
            registrar,
            TomlVariablePersistence(os.path.join(data_folder, config.Settings.variables.FILENAME)),
            os.path.join(data_folder, config.Settings.scripts.FOLDER),
            debug=debug,
        )

    @property
    def debug(self) -> bool:
        return self.executor.debug

    def toggle_debug(self) -> bool:
        self.executor.debug = not self.executor.debug
        self.logger.info(f'debug {"on" if self.executor.debug else "off"}')
        return self.executor.debug

    def start(self) -> int:
        """ loads variables and every script in the scripts folder

        returns the number of scripts loaded.
        """
        if self._started:
            raise ScriptError("engine already started")
        self._started = True

        self.variables.load()
        self.admin.register(self.registrar)

        if self.scripts_folder is None:
            return 0
        create_sample_scripts(self.scripts_folder)
        return self.load_all(self.scripts_folder)

    def load_all(self, folder:str) -> int:
        """ loads every script file in folder, in name order """
        paths = sorted(glob.glob(os.path.join(folder, f'*{config.Settings.scripts.EXTENSION}')))
        if not paths:
            self.logger.info(f'no script files found in {folder}')
            return 0

        loaded = 0
        for path in paths:
            if self.load_file(path) is not None:
                loaded += 1
        self.logger.info(f'loaded {loaded} of {len(paths)} scripts from {folder}')
        return loaded

    def load_file(self, path:str) -> Optional[Script]:
        try:
            with open(path, "r", encoding="utf-8-sig") as f:
                lines = f.read().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            self.logger.error(f'could not read script {path}: {e}')
            return None
        return self.load_script(os.path.basename(path), lines)

    def load_script(self, filename:str, lines:Sequence[str]) -> Optional[Script]:
        """ parses lines and registers the resulting handlers and commands

        returns None (and registers nothing) if the script has nothing usable.
        """
        if filename in self.scripts:
            raise ScriptError(f'script {filename} is already loaded')
        if not lines:
            self.logger.warning(f'script {filename} is empty, skipping')
            return None

        script = self.parser.parse(filename, lines)
        if script is None:
            self.logger.warning(f'failed to load script {filename}')
            return None

        self.scripts[filename] = script
        for handler in script.event_handlers:
            self.handlers[handler.event_type].append(handler)
        for command in script.custom_commands:
            self.commands.register(command)

        self.logger.info(f'loaded script {filename} (events: {len(script.event_handlers)}, commands: {len(script.custom_commands)})')
        return script

    def trigger(self, event_type:EventType, context:Context) -> bool:
        """ runs every handler registered for event_type, in load order

        handlers share the context, so a cancellation or binding made by one
        is visible to the ones after it. returns whether the event got
        cancelled.
        """
        for handler in self.handlers.get(event_type, []):
            self.executor.execute_handler(handler, context)
        return context.cancelled

    def run_command(self, name:str, invoker:Optional[AbstractEntity], args:Sequence[str]) -> bool:
        command = self.commands.lookup(name)
        if command is None:
            raise ScriptError(f'no such command /{name}')
        return self.executor.execute_custom_command(command, invoker, args)

    def _clear(self) -> None:
        self.commands.unregister_all()
        self.handlers.clear()
        self.scripts.clear()

    def reload(self) -> int:
        """ saves variables, drops every script and loads them again """
        if self.scripts_folder is None:
            raise ScriptError("no scripts folder to reload from")
        self.variables.save()
        self._clear()
        return self.load_all(self.scripts_folder)

    def shutdown(self) -> None:
        self.variables.save()
        self._clear()
        if self._started:
            self.admin.unregister(self.registrar)
        self._started = False
        self.logger.info("shut down")

    def event_statistics(self) -> dict[EventType, int]:
        return {k: len(v) for k, v in self.handlers.items() if v}

    def loaded_script_count(self) -> int:
        return len(self.scripts)

""" /nusantara, the administrative command.

/nusantara reload   reload every script
/nusantara list     list loaded scripts
/nusantara info     version, script count, registered events
"""

import time
import logging
from typing import TYPE_CHECKING, Callable, Optional, Sequence

from nusantarascript import util, config, _version
from nusantarascript.host import AbstractCommandRegistrar, AbstractEntity
from nusantarascript.placeholders import colorize
from nusantarascript.script import ScriptError

if TYPE_CHECKING:
    from nusantarascript.engine import ScriptEngine

COMMAND_NAME = "nusantara"
SUBCOMMANDS = ("reload", "list", "info")


class AdminCommand:
    def __init__(self, engine:"ScriptEngine") -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.engine = engine
        self._subcommands:dict[str, Callable[[Optional[AbstractEntity]], None]] = {
            "reload": self._reload,
            "list": self._list,
            "info": self._info,
        }

    def register(self, registrar:AbstractCommandRegistrar) -> None:
        registrar.register(
            COMMAND_NAME,
            config.Settings.commands.ADMIN_PERMISSION,
            "NusantaraScript administration",
            self.invoke,
        )

    def unregister(self, registrar:AbstractCommandRegistrar) -> None:
        registrar.unregister(COMMAND_NAME)

    def _send(self, sender:Optional[AbstractEntity], message:str) -> None:
        # the console gets the log
        if sender is None:
            self.logger.info(message)
        else:
            sender.send_message(colorize(message))

    def invoke(self, sender:Optional[AbstractEntity], args:Sequence[str]) -> None:
        if sender is not None and not sender.has_permission(config.Settings.commands.ADMIN_PERMISSION):
            self._send(sender, config.Settings.messages.NO_PERMISSION)
            return

        if not args or args[0].lower() not in self._subcommands:
            self._help(sender)
            return
        self._subcommands[args[0].lower()](sender)

    def complete(self, args:Sequence[str]) -> list[str]:
        """ tab completion for the argument being typed """
        if len(args) > 1:
            return []
        return util.tab_complete(args[0].lower() if args else "", SUBCOMMANDS)

    def _help(self, sender:Optional[AbstractEntity]) -> None:
        self._send(sender, "&e&l=== NusantaraScript ===")
        self._send(sender, "&7/nusantara reload &f- Muat ulang semua skrip")
        self._send(sender, "&7/nusantara list &f- Daftar skrip yang dimuat")
        self._send(sender, "&7/nusantara info &f- Informasi plugin")

    def _reload(self, sender:Optional[AbstractEntity]) -> None:
        self._send(sender, "&eMemuat ulang semua skrip...")
        start_time = time.perf_counter()
        try:
            self.engine.reload()
        except ScriptError as e:
            self._send(sender, f'&cGagal: {e}')
            return
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        self._send(sender, f'&aSelesai! &7({elapsed_ms:.0f}ms)')
        self._send(sender, f'&aDimuat: &f{self.engine.loaded_script_count()} skrip')

    def _list(self, sender:Optional[AbstractEntity]) -> None:
        if not self.engine.scripts:
            self._send(sender, "&cTidak ada skrip yang dimuat.")
            if self.engine.scripts_folder is not None:
                self._send(sender, f'&7Letakkan file {config.Settings.scripts.EXTENSION} di folder: &f{self.engine.scripts_folder}')
            return

        self._send(sender, "&e&l=== Daftar Skrip ===")
        for filename, script in self.engine.scripts.items():
            self._send(sender, f'&7- &f{filename} &7({len(script.event_handlers)} event handlers, {len(script.custom_commands)} perintah)')

    def _info(self, sender:Optional[AbstractEntity]) -> None:
        self._send(sender, "&e&l=== NusantaraScript ===")
        self._send(sender, f'&eVersi: &f{_version.version}')
        self._send(sender, f'&eSkrip Dimuat: &f{self.engine.loaded_script_count()}')
        self._send(sender, f'&eVariabel: &f{self.engine.variables.variable_count()}')

        stats = self.engine.event_statistics()
        if stats:
            self._send(sender, "&eEvent Terdaftar:")
            for event_type, count in stats.items():
                self._send(sender, f'  &7- &f{event_type.name} &7(x{count})')

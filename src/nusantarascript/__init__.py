""" NusantaraScript

An embeddable scripting language for game servers, written in Indonesian.
Server operators write small event driven scripts with indentation for
structure:

saat pemain masuk:
    kirim "&aSelamat datang, %player%!" ke pemain
    tambah 1 ke variabel {kunjungan.%player%}
    jika {kunjungan.%player%} adalah 1:
        broadcast "&dSambut member baru kita: %player%!"

Scripts are read into an immutable tree (Script, EventHandler, Action,
ConditionalBlock) by the ScriptParser, then run by the ScriptExecutor whenever
the host reports a matching event. The host plugs in through the interfaces in
nusantarascript.host: who the player is, what the block is, and how to send
messages, give items, teleport and so on.

Variables live in a VariableStore with a global scope and a scope per player.
They survive restarts through a VariablePersistence, by default a TOML file.

Scripts can also declare commands:

perintah /hadiah jenis:
    izin: "nusantara.hadiah"
    aksi:
        jika {arg1} == "emas":
            beri_item GOLD_INGOT, 5

The ScriptEngine bundles all of this for a host: load a folder of scripts,
forward events, reload, shut down.
"""

from .script import EventType, ActionType, Action, ConditionalBlock, EventHandler, CustomCommand, Script, ScriptError
from .context import Context
from .parser import ScriptParser
from .executor import ScriptExecutor
from .variables import VariableStore, TomlVariablePersistence
from .engine import ScriptEngine, create_sample_scripts

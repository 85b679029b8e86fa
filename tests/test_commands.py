import logging

from nusantarascript import config
from nusantarascript.admin import AdminCommand
from nusantarascript.commands import CustomCommandRegistry, normalize_command_name
from nusantarascript.engine import ScriptEngine
from nusantarascript.executor import ScriptExecutor
from nusantarascript.script import Action, ActionType, CustomCommand, EventType
from . import MockEntity, MonitoringEffects, MonitoringRegistrar

def test_normalize_command_name():
    assert normalize_command_name("/Hadiah") == "hadiah"
    assert normalize_command_name("hadiah") == "hadiah"

def test_register_and_invoke(registrar:MonitoringRegistrar, executor:ScriptExecutor, effects:MonitoringEffects):
    registry = CustomCommandRegistry(registrar, executor)
    command = CustomCommand("Umumkan", permission="nusantara.umumkan", description="umumkan sesuatu", actions=(Action(ActionType.BROADCAST, "{all_args}"),))
    registry.register(command)

    assert len(registry) == 1
    assert registry.is_registered("/umumkan")
    assert registry.lookup("UMUMKAN") is command
    permission, description, _ = registrar.commands["umumkan"]
    assert permission == "nusantara.umumkan"
    assert description == "umumkan sesuatu"

    registrar.invoke("umumkan", MockEntity(permissions=["nusantara.umumkan"]), "halo", "semua")
    assert effects.broadcasts == ["halo semua"]

def test_register_replaces_duplicate(registrar:MonitoringRegistrar, executor:ScriptExecutor, effects:MonitoringEffects):
    registry = CustomCommandRegistry(registrar, executor)
    registry.register(CustomCommand("a", actions=(Action(ActionType.BROADCAST, "lama"),)))
    registry.register(CustomCommand("a", actions=(Action(ActionType.BROADCAST, "baru"),)))
    assert len(registry) == 1
    registrar.invoke("a", None)
    assert effects.broadcasts == ["baru"]

def test_unregister_all(registrar:MonitoringRegistrar, executor:ScriptExecutor):
    registry = CustomCommandRegistry(registrar, executor)
    registry.register(CustomCommand("a"))
    registry.register(CustomCommand("b"))
    registry.unregister_all()
    assert len(registry) == 0
    assert registrar.commands == {}
    assert sorted(registrar.unregistered) == ["a", "b"]
    assert registry.lookup("a") is None

def test_admin_requires_permission(engine:ScriptEngine):
    admin = AdminCommand(engine)
    player = MockEntity("Ani")
    admin.invoke(player, ["list"])
    assert player.messages == ["§cKamu tidak memiliki izin untuk menjalankan perintah ini!"]

def test_admin_help(engine:ScriptEngine):
    admin = AdminCommand(engine)
    player = MockEntity(permissions=[config.Settings.commands.ADMIN_PERMISSION])
    admin.invoke(player, [])
    assert len(player.messages) == 4
    assert player.messages[1].startswith("§7/nusantara reload")

    player.messages.clear()
    admin.invoke(player, ["menari"])
    assert len(player.messages) == 4

def test_admin_list_and_info(engine:ScriptEngine, registrar:MonitoringRegistrar):
    admin = engine.admin
    player = MockEntity(permissions=[config.Settings.commands.ADMIN_PERMISSION])

    admin.invoke(player, ["list"])
    assert player.messages[0] == "§cTidak ada skrip yang dimuat."

    engine.start()
    player.messages.clear()
    registrar.invoke("nusantara", player, "LIST")
    assert player.messages[0] == "§e§l=== Daftar Skrip ==="
    assert len(player.messages) == 1 + len(config.Settings.scripts.SAMPLES)
    assert any("contoh.ns" in m for m in player.messages)

    player.messages.clear()
    admin.invoke(player, ["info"])
    assert any("Skrip Dimuat: §f3" in m for m in player.messages)
    assert any(EventType.PLAYER_JOIN.name in m for m in player.messages)

def test_admin_reload(engine:ScriptEngine):
    engine.start()
    player = MockEntity(permissions=[config.Settings.commands.ADMIN_PERMISSION])
    engine.admin.invoke(player, ["reload"])
    assert player.messages[0] == "§eMemuat ulang semua skrip..."
    assert player.messages[1].startswith("§aSelesai!")
    assert player.messages[2] == f'§aDimuat: §f{len(config.Settings.scripts.SAMPLES)} skrip'

def test_admin_reload_failure(effects:MonitoringEffects, registrar:MonitoringRegistrar):
    engine = ScriptEngine(effects, registrar)
    player = MockEntity(permissions=[config.Settings.commands.ADMIN_PERMISSION])
    engine.admin.invoke(player, ["reload"])
    assert player.messages[-1].startswith("§cGagal")

def test_admin_console(engine:ScriptEngine, caplog):
    caplog.set_level(logging.INFO)
    engine.admin.invoke(None, ["info"])
    assert "NusantaraScript" in caplog.text

def test_admin_completion(engine:ScriptEngine):
    assert engine.admin.complete([]) == ["info", "list", "reload"]
    assert engine.admin.complete(["re"]) == ["reload"]
    assert engine.admin.complete(["I"]) == ["info"]
    assert engine.admin.complete(["list", "x"]) == []

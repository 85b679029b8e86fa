import logging

import pytest

from nusantarascript import config
from nusantarascript.context import Context
from nusantarascript.engine import ScriptEngine
from nusantarascript.executor import ScriptExecutor
from nusantarascript.parser import ScriptParser
from nusantarascript.variables import VariableStore
from . import MockEntity, MockTarget, MockEventHandle, MonitoringEffects, MonitoringRegistrar, MemoryVariablePersistence

# some logging to turn on if we like
#logging.getLogger("nusantarascript.parser").level = logging.DEBUG
#logging.getLogger("nusantarascript.executor").level = logging.DEBUG

@pytest.fixture(autouse=True)
def settings() -> None:
    # tests may override settings, start each one from the built-in config
    config.load_config()

@pytest.fixture
def parser() -> ScriptParser:
    return ScriptParser()

@pytest.fixture
def persistence() -> MemoryVariablePersistence:
    return MemoryVariablePersistence()

@pytest.fixture
def variables(persistence:MemoryVariablePersistence) -> VariableStore:
    return VariableStore(persistence)

@pytest.fixture
def effects() -> MonitoringEffects:
    return MonitoringEffects()

@pytest.fixture
def registrar() -> MonitoringRegistrar:
    return MonitoringRegistrar()

@pytest.fixture
def executor(variables:VariableStore, effects:MonitoringEffects) -> ScriptExecutor:
    return ScriptExecutor(variables, effects)

@pytest.fixture
def player() -> MockEntity:
    return MockEntity("Budi", permissions=["nusantara.vip"])

@pytest.fixture
def target() -> MockTarget:
    return MockTarget("DIAMOND_ORE", preferred_tools=["IRON_PICKAXE", "DIAMOND_PICKAXE"])

@pytest.fixture
def event() -> MockEventHandle:
    return MockEventHandle()

@pytest.fixture
def context(player:MockEntity, target:MockTarget, event:MockEventHandle) -> Context:
    return Context(entity=player, target=target, event=event)

@pytest.fixture
def engine(effects:MonitoringEffects, registrar:MonitoringRegistrar, persistence:MemoryVariablePersistence, tmp_path) -> ScriptEngine:
    return ScriptEngine(effects, registrar, persistence, str(tmp_path / "scripts"))

from typing import Optional, List, Any, Mapping, Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from nusantarascript import host

class MockEntity(host.AbstractEntity):
    def __init__(
            self,
            name:str="Budi",
            health:float=20.0,
            is_flying:bool=False,
            is_sneaking:bool=False,
            held_item:Optional[str]=None,
            world_name:str="world",
            permissions:Sequence[str]=(),
            display_name:Optional[str]=None,
    ) -> None:
        self._name = name
        self._display_name = display_name or name
        self._health = health
        self._is_flying = is_flying
        self._is_sneaking = is_sneaking
        self._held_item = held_item
        self._world_name = world_name
        self.permissions = set(permissions)
        self.messages:List[str] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def health(self) -> float:
        return self._health

    @property
    def is_flying(self) -> bool:
        return self._is_flying

    @property
    def is_sneaking(self) -> bool:
        return self._is_sneaking

    @property
    def held_item(self) -> Optional[str]:
        return self._held_item

    @property
    def world_name(self) -> str:
        return self._world_name

    def has_permission(self, permission:str) -> bool:
        return permission in self.permissions

    def send_message(self, message:str) -> None:
        self.messages.append(message)

class MockTarget(host.AbstractTarget):
    def __init__(self, material:str="STONE", preferred_tools:Sequence[str]=("DIAMOND_PICKAXE",)) -> None:
        self._material = material
        self.preferred_tools = set(preferred_tools)

    @property
    def material(self) -> str:
        return self._material

    def is_preferred_tool(self, item:Optional[str]) -> bool:
        return item in self.preferred_tools

class MockEventHandle(host.AbstractEventHandle):
    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def set_cancelled(self, cancelled:bool) -> None:
        self._cancelled = cancelled

@dataclass
class LoggedEffect:
    kind: str
    entity: Optional[str]
    args: tuple

class MonitoringEffects(host.AbstractEffects):
    """ records every effect, raises ValueError for unknown materials """

    def __init__(self, known_materials:Sequence[str]=("GOLD_INGOT", "DIAMOND", "BREAD")) -> None:
        self.known_materials = set(known_materials)
        self.effects:List[LoggedEffect] = []
        self.broadcasts:List[str] = []

    def _log(self, kind:str, entity:Optional[host.AbstractEntity], *args:Any) -> None:
        self.effects.append(LoggedEffect(kind, entity.name if entity else None, args))

    def of_kind(self, kind:str) -> List[LoggedEffect]:
        return [x for x in self.effects if x.kind == kind]

    def broadcast(self, message:str) -> None:
        self.broadcasts.append(message)
        self._log("broadcast", None, message)

    def heal(self, entity:host.AbstractEntity, health:float, food:int) -> None:
        self._log("heal", entity, health, food)

    def feed(self, entity:host.AbstractEntity, food:int) -> None:
        self._log("feed", entity, food)

    def give_item(self, entity:host.AbstractEntity, material:str, amount:int) -> None:
        if material not in self.known_materials:
            raise ValueError(f'unknown material {material}')
        self._log("give_item", entity, material, amount)

    def kick(self, entity:host.AbstractEntity, reason:str) -> None:
        self._log("kick", entity, reason)

    def teleport(self, entity:host.AbstractEntity, destination:npt.NDArray[np.float64], world_name:Optional[str]) -> None:
        self._log("teleport", entity, destination, world_name)

    def play_sound(self, entity:host.AbstractEntity, sound:str) -> None:
        self._log("play_sound", entity, sound)

    def give_effect(self, entity:host.AbstractEntity, effect:str, duration_ticks:int, amplifier:int) -> None:
        self._log("give_effect", entity, effect, duration_ticks, amplifier)

class MonitoringRegistrar(host.AbstractCommandRegistrar):
    def __init__(self) -> None:
        self.commands:dict[str, tuple[Optional[str], str, host.CommandInvoker]] = {}
        self.unregistered:List[str] = []

    def register(self, name:str, permission:Optional[str], description:str, invoke:host.CommandInvoker) -> None:
        self.commands[name] = (permission, description, invoke)

    def unregister(self, name:str) -> None:
        self.commands.pop(name, None)
        self.unregistered.append(name)

    def invoke(self, name:str, sender:Optional[host.AbstractEntity], *args:str) -> None:
        self.commands[name][2](sender, list(args))

class MemoryVariablePersistence(host.VariablePersistence):
    def __init__(self, global_variables:Optional[Mapping[str, Any]]=None, entity_variables:Optional[Mapping[str, Mapping[str, Any]]]=None) -> None:
        self.global_variables = dict(global_variables or {})
        self.entity_variables = {k: dict(v) for k, v in (entity_variables or {}).items()}
        self.saves = 0

    def save(self, global_variables:Mapping[str, Any], entity_variables:Mapping[str, Mapping[str, Any]]) -> None:
        self.global_variables = dict(global_variables)
        self.entity_variables = {k: dict(v) for k, v in entity_variables.items()}
        self.saves += 1

    def load(self) -> tuple[dict[str, Any], dict[str, dict[str, Any]]]:
        return dict(self.global_variables), {k: dict(v) for k, v in self.entity_variables.items()}

def script_lines(text:str) -> List[str]:
    """ splits a dedented, triple quoted script into lines """
    return text.strip("\n").split("\n")

""" Script variables: a global scope and one scope per entity.

Scripts refer to variables by name inside braces. A name carrying an entity
marker token is per-entity:

    {kunjungan}            global "kunjungan"
    {kunjungan.%player%}   "kunjungan" in the acting player's scope
    {skor.%pemain%}        same thing, Indonesian marker

Values are whatever the script put there: set stores text, add and subtract
store floats.
"""

import os
import logging
import threading
from typing import Any, Mapping, Optional

import toml # type: ignore

from nusantarascript import util, config
from nusantarascript.host import VariablePersistence

logger = logging.getLogger(__name__)


def resolve_variable_name(name:str) -> tuple[bool, str]:
    """ splits a variable reference into (is per-entity, bare name)

    >>> resolve_variable_name("skor.%pemain%")
    (True, 'skor')
    >>> resolve_variable_name("server_visits")
    (False, 'server_visits')
    """
    for marker in config.Settings.placeholders.ENTITY_TOKENS:
        if marker in name:
            stripped = name.replace(f'.{marker}', "").replace(f'{marker}.', "").replace(marker, "")
            return True, stripped.strip()
    return False, name.strip()


def to_number(value:Any) -> Optional[float]:
    """ numeric reading of a stored value, None if it has none """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    return util.parse_float(str(value))


class VariableStore:
    def __init__(self, persistence:Optional[VariablePersistence]=None) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.persistence = persistence
        self._lock = threading.RLock()
        self._global:dict[str, Any] = {}
        self._entities:dict[str, dict[str, Any]] = {}

    # global scope

    def get_global(self, name:str) -> Optional[Any]:
        with self._lock:
            return self._global.get(name)

    def set_global(self, name:str, value:Any) -> None:
        with self._lock:
            self._global[name] = value
        self.logger.debug(f'set global {name} = {value!r}')

    def delete_global(self, name:str) -> None:
        with self._lock:
            self._global.pop(name, None)

    # per-entity scope

    def get_entity(self, entity_id:str, name:str) -> Optional[Any]:
        with self._lock:
            scope = self._entities.get(entity_id)
            if scope is None:
                return None
            return scope.get(name)

    def set_entity(self, entity_id:str, name:str, value:Any) -> None:
        with self._lock:
            self._entities.setdefault(entity_id, {})[name] = value
        self.logger.debug(f'set {entity_id}.{name} = {value!r}')

    def delete_entity(self, entity_id:str, name:str) -> None:
        with self._lock:
            scope = self._entities.get(entity_id)
            if scope is not None:
                scope.pop(name, None)

    def delete_all_entity(self, entity_id:str) -> None:
        with self._lock:
            self._entities.pop(entity_id, None)

    # arithmetic

    def add(self, entity_id:Optional[str], name:str, amount:float) -> float:
        """ adds amount to a variable, creating it if needed

        a missing or non-numeric prior value counts as zero. entity_id None
        means the global scope. returns the new value.
        """
        with self._lock:
            if entity_id is None:
                scope = self._global
            else:
                scope = self._entities.setdefault(entity_id, {})
            current = to_number(scope.get(name))
            value = (current or 0.0) + amount
            scope[name] = value
        self.logger.debug(f'add {amount} to {entity_id or "global"}.{name} = {value}')
        return value

    def subtract(self, entity_id:Optional[str], name:str, amount:float) -> float:
        return self.add(entity_id, name, -amount)

    # bulk access

    def get_all_global(self) -> dict[str, Any]:
        with self._lock:
            return dict(self._global)

    def get_all_entity(self, entity_id:str) -> dict[str, Any]:
        with self._lock:
            return dict(self._entities.get(entity_id, {}))

    def entity_ids(self) -> list[str]:
        with self._lock:
            return list(self._entities.keys())

    def variable_count(self) -> int:
        with self._lock:
            return len(self._global) + sum(len(v) for v in self._entities.values())

    def clear_all(self) -> None:
        """ saves then forgets every variable """
        self.save()
        with self._lock:
            self._global.clear()
            self._entities.clear()
        self.logger.info("all variables cleared")

    # persistence

    def save(self) -> None:
        if self.persistence is None:
            return
        with self._lock:
            global_variables = dict(self._global)
            entity_variables = {k: dict(v) for k, v in self._entities.items()}
        self.persistence.save(global_variables, entity_variables)
        self.logger.info(f'saved {self.variable_count()} variables')

    def load(self) -> None:
        if self.persistence is None:
            return
        global_variables, entity_variables = self.persistence.load()
        with self._lock:
            self._global.update(global_variables)
            for entity_id, scope in entity_variables.items():
                self._entities.setdefault(entity_id, {}).update(scope)
        self.logger.info(f'loaded {self.variable_count()} variables')


class TomlVariablePersistence(VariablePersistence):
    """ keeps variables in a TOML document

    [global]
    server_visits = 12.0

    [player.Budi]
    kunjungan = 3.0

    I/O and format problems are logged, never raised.
    """

    def __init__(self, path:str) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.path = path

    def save(self, global_variables:Mapping[str, Any], entity_variables:Mapping[str, Mapping[str, Any]]) -> None:
        document = {
            "global": dict(global_variables),
            "player": {k: dict(v) for k, v in entity_variables.items()},
        }
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                toml.dump(document, f)
        except (OSError, TypeError, ValueError) as e:
            self.logger.error(f'could not save variables to {self.path}: {e}')

    def load(self) -> tuple[dict[str, Any], dict[str, dict[str, Any]]]:
        if not os.path.exists(self.path):
            return {}, {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = toml.load(f)
        except (OSError, toml.TomlDecodeError) as e:
            self.logger.error(f'could not load variables from {self.path}: {e}')
            return {}, {}

        global_variables = dict(document.get("global", {}))
        entity_variables = {
            str(k): dict(v) for k, v in document.get("player", {}).items() if isinstance(v, dict)
        }
        return global_variables, entity_variables

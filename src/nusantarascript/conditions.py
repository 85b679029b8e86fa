""" Conditions that gate a conditional block (jika ...)

A closed set of condition variants. Each is plain data, evaluation lives in
nusantarascript.evaluator so every variant is handled in one place.
"""

import abc
from dataclasses import dataclass


class Condition(abc.ABC):
    line_number: int

    @abc.abstractmethod
    def describe(self) -> str: ...

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class BlockTypeCondition(Condition):
    """ jika blok adalah "MATERIAL" """
    material: str
    line_number: int = 0

    def describe(self) -> str:
        return f'blok adalah "{self.material}"'


@dataclass(frozen=True)
class HoldingItemCondition(Condition):
    """ jika pemain memegang "MATERIAL" """
    material: str
    line_number: int = 0

    def describe(self) -> str:
        return f'pemain memegang "{self.material}"'


@dataclass(frozen=True)
class PermissionCondition(Condition):
    """ jika pemain punya izin "permission.node" """
    permission: str
    line_number: int = 0

    def describe(self) -> str:
        return f'pemain punya izin "{self.permission}"'


@dataclass(frozen=True)
class PlayerNameCondition(Condition):
    """ jika pemain adalah "Name" """
    player_name: str
    line_number: int = 0

    def describe(self) -> str:
        return f'pemain adalah "{self.player_name}"'


@dataclass(frozen=True)
class HealthLessThanCondition(Condition):
    """ jika darah pemain kurang dari NUMBER """
    threshold: float
    line_number: int = 0

    def describe(self) -> str:
        return f'darah pemain kurang dari {self.threshold}'


@dataclass(frozen=True)
class WorldCondition(Condition):
    """ jika dunia adalah "world" """
    world_name: str
    line_number: int = 0

    def describe(self) -> str:
        return f'dunia adalah "{self.world_name}"'


@dataclass(frozen=True)
class FlyingCondition(Condition):
    line_number: int = 0

    def describe(self) -> str:
        return "pemain sedang terbang"


@dataclass(frozen=True)
class SneakingCondition(Condition):
    line_number: int = 0

    def describe(self) -> str:
        return "pemain sedang menyelinap"


@dataclass(frozen=True)
class VariableLessThanCondition(Condition):
    variable_name: str
    threshold: float
    line_number: int = 0

    def describe(self) -> str:
        return f'{{{self.variable_name}}} kurang dari {self.threshold}'


@dataclass(frozen=True)
class VariableGreaterThanCondition(Condition):
    variable_name: str
    threshold: float
    line_number: int = 0

    def describe(self) -> str:
        return f'{{{self.variable_name}}} lebih dari {self.threshold}'


@dataclass(frozen=True)
class VariableEqualsCondition(Condition):
    variable_name: str
    expected_value: str
    line_number: int = 0

    def describe(self) -> str:
        return f'{{{self.variable_name}}} sama dengan "{self.expected_value}"'


@dataclass(frozen=True)
class ToolMatchCondition(Condition):
    """ jika alat benar

    whether the held tool suits the target block is the host's call.
    """
    line_number: int = 0

    def describe(self) -> str:
        return "alat benar"


@dataclass(frozen=True)
class ExpressionCondition(Condition):
    """ ad hoc comparison, e.g. jika {arg1} == "emas" """
    expression: str
    line_number: int = 0

    def describe(self) -> str:
        return self.expression


CONDITION_TYPES:tuple[type[Condition], ...] = (
    BlockTypeCondition,
    HoldingItemCondition,
    PermissionCondition,
    PlayerNameCondition,
    HealthLessThanCondition,
    WorldCondition,
    FlyingCondition,
    SneakingCondition,
    VariableLessThanCondition,
    VariableGreaterThanCondition,
    VariableEqualsCondition,
    ToolMatchCondition,
    ExpressionCondition,
)

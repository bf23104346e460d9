from dataclasses import dataclass, field
from typing import Any, Union

@dataclass(frozen=True, slots=True)
class Variable:
    """
    A Datalog variable, e.g. X, Y, Z. The `name` is the variable's identifier.
    A variable binds to whatever value occupies its position in a matched fact.
    """
    name: str

    def is_variable(self) -> bool:
        return True

    def __repr__(self) -> str:
        return self.name

@dataclass(frozen=True, slots=True)
class Constant:
    """
    A Datalog constant, e.g. "alice". In a body atom a constant filters
    facts instead of binding; two constants are equal iff their values are.
    `name` is the printable form of `value`.
    """
    value: Any
    name: str = field(init=False, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "name", str(self.value))

    def is_variable(self) -> bool:
        return False

    def __repr__(self) -> str:
        if isinstance(self.value, str):
            return f'"{self.value}"'
        return str(self.value)

Term = Union[Variable, Constant]

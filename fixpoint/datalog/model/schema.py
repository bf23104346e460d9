from dataclasses import dataclass
from typing import Optional
from .atom import Predicate

@dataclass(frozen=True, slots=True)
class RelationSchema:
    """
    Relation schema: predicate and column names used when a relation is
    exchanged as a table.
    """
    predicate: Predicate
    colnames: tuple[str, ...]

    def __post_init__(self):
        if len(self.colnames) != self.predicate.arity:
            raise ValueError("RelationSchema: colnames length must match arity.")

    @property
    def arity(self) -> int:
        return self.predicate.arity

    @classmethod
    def default(cls, predicate: Predicate, colnames: Optional[tuple[str, ...]] = None) -> 'RelationSchema':
        if colnames is None:
            colnames = tuple(f"arg{i}" for i in range(predicate.arity))
        return cls(predicate=predicate, colnames=tuple(colnames))

from collections.abc import Mapping
from typing import Any, Iterable, Iterator, Optional

from ..model.atom import Predicate
from .errors import ArityMismatch

Fact = tuple[str, ...]
Relation = frozenset[Fact]

EMPTY_RELATION: Relation = frozenset()


def make_relation(predicate: Predicate, facts: Iterable[Iterable[Any]]) -> Relation:
    """
    Build a duplicate-free relation for `predicate`, checking that every fact
    has exactly `predicate.arity` positions.
    """
    rows = set()
    for fact in facts:
        if isinstance(fact, str):
            raise TypeError(f"fact for {predicate!r} must be a sequence of values, got the string {fact!r}")
        row = tuple(fact)
        if len(row) != predicate.arity:
            raise ArityMismatch(predicate, predicate.arity, len(row), context=f"fact {row!r}")
        rows.add(row)
    return frozenset(rows)


class Database(Mapping):
    """
    An immutable mapping Predicate -> Relation.

    Holds at most one relation per predicate. Nothing mutates a Database in
    place: `with_facts`, `replace`, `union` and `restrict` all return a new
    value, so a database handed to an evaluation call is a frozen snapshot.
    Looking up an absent predicate through `relation()` yields the empty
    relation rather than an error.
    """
    __slots__ = ("_relations",)

    def __init__(self, relations: Optional[Mapping[Predicate, Iterable[Iterable[Any]]]] = None) -> None:
        if isinstance(relations, Database):
            self._relations = dict(relations._relations)
            return
        self._relations = {
            pred: make_relation(pred, facts) for pred, facts in (relations or {}).items()
        }

    @classmethod
    def _wrap(cls, relations: dict[Predicate, Relation]) -> 'Database':
        # Callers guarantee the relations are already validated frozensets.
        db = cls.__new__(cls)
        db._relations = relations
        return db

    def __getitem__(self, predicate: Predicate) -> Relation:
        return self._relations[predicate]

    def __iter__(self) -> Iterator[Predicate]:
        return iter(self._relations)

    def __len__(self) -> int:
        return len(self._relations)

    def __hash__(self) -> int:
        return hash(frozenset(self._relations.items()))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Database):
            return self._relations == other._relations
        if isinstance(other, Mapping):
            return self._relations == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        inner = ", ".join(f"{pred!r}: {len(rel)} facts" for pred, rel in self._relations.items())
        return f"Database({inner})"

    def relation(self, predicate: Predicate) -> Relation:
        return self._relations.get(predicate, EMPTY_RELATION)

    def predicates(self) -> frozenset[Predicate]:
        return frozenset(self._relations)

    def num_facts(self) -> int:
        return sum(len(rel) for rel in self._relations.values())

    def is_empty(self) -> bool:
        """True if no predicate holds a fact (predicates mapped to empty relations do not count)."""
        return all(not rel for rel in self._relations.values())

    def replace(self, predicate: Predicate, facts: Iterable[Iterable[Any]]) -> 'Database':
        """Return a copy where `predicate` resolves to exactly `facts`."""
        relations = dict(self._relations)
        relations[predicate] = make_relation(predicate, facts)
        return Database._wrap(relations)

    def with_facts(self, predicate: Predicate, facts: Iterable[Iterable[Any]]) -> 'Database':
        """Return a copy with `facts` added to the relation of `predicate`."""
        new = make_relation(predicate, facts)
        relations = dict(self._relations)
        relations[predicate] = relations.get(predicate, EMPTY_RELATION) | new
        return Database._wrap(relations)

    def union(self, other: Mapping[Predicate, Iterable[Iterable[Any]]]) -> 'Database':
        """Per-predicate union of two databases."""
        if not isinstance(other, Database):
            other = Database(other)
        relations = dict(self._relations)
        for pred, rel in other._relations.items():
            relations[pred] = relations.get(pred, EMPTY_RELATION) | rel
        return Database._wrap(relations)

    def restrict(self, predicates: Iterable[Predicate]) -> 'Database':
        """Keep exactly `predicates`; those without a relation map to the empty relation."""
        return Database._wrap({pred: self.relation(pred) for pred in predicates})

    def issubset(self, other: 'Database') -> bool:
        return all(rel <= other.relation(pred) for pred, rel in self._relations.items())


class EvaluationResult:
    """A wrapper for evaluation outcomes that provides a consistent interface
    whether evaluation succeeded or failed.

    Calling code can always ask for `database`, `num_facts()` or `facts(pred)`
    without checking for None first; a failed evaluation carries the raised
    error and an empty database.
    """
    def __init__(self, database: Optional[Database] = None, status: str = "success",
                 message: str = "", rounds: int = 0, error: Optional[Exception] = None):
        self.database = database if database is not None else Database()
        self.status = status  # success, error
        self.message = message
        self.rounds = rounds
        self.error = error

    def has_error(self) -> bool:
        """Returns True if evaluation stopped with an error"""
        return self.status == "error"

    def is_empty(self) -> bool:
        return self.database.is_empty()

    def num_facts(self) -> int:
        return self.database.num_facts()

    def facts(self, predicate: Predicate) -> Relation:
        return self.database.relation(predicate)

    @classmethod
    def success(cls, database: Database, rounds: int) -> 'EvaluationResult':
        return cls(database=database, status="success",
                   message=f"Fixpoint reached after {rounds} rounds", rounds=rounds)

    @classmethod
    def failure(cls, error: Exception, rounds: int = 0) -> 'EvaluationResult':
        return cls(database=None, status="error", message=str(error), rounds=rounds, error=error)

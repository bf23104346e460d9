"""
Variable substitutions and the join that combines sets of them.
"""
from collections.abc import Mapping
from typing import Any, Iterable, Iterator, Optional, Union

from ..model.terms import Variable


class Substitution(Mapping):
    """
    An immutable, hashable binding of variables to values.

    Hashability lets substitutions be collected in sets, which gives the
    duplicate-free semantics the join relies on.
    """
    __slots__ = ("_bindings", "_hash")

    def __init__(self, bindings: Optional[Union[Mapping[Variable, Any], Iterable[tuple[Variable, Any]]]] = None) -> None:
        self._bindings: dict[Variable, Any] = dict(bindings or ())
        self._hash: Optional[int] = None

    def __getitem__(self, var: Variable) -> Any:
        return self._bindings[var]

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self._bindings.items()))
        return self._hash

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Substitution):
            return self._bindings == other._bindings
        if isinstance(other, Mapping):
            return self._bindings == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        inner = ", ".join(f"{v!r}: {val!r}" for v, val in self._bindings.items())
        return f"{{{inner}}}"

    def compatible(self, other: 'Substitution') -> bool:
        """True if every variable bound by both has the same value in both."""
        small, large = (self, other) if len(self) <= len(other) else (other, self)
        for var, value in small._bindings.items():
            if var in large._bindings and large._bindings[var] != value:
                return False
        return True


EMPTY = Substitution()

# Joining with the set holding only the empty substitution leaves the other side unchanged.
IDENTITY: frozenset[Substitution] = frozenset({EMPTY})


def merge(l: Substitution, r: Substitution) -> Optional[Substitution]:
    """Union of two substitutions, or None if they disagree on a shared variable."""
    if not l.compatible(r):
        return None
    if not r:
        return l
    if not l:
        return r
    return Substitution({**l._bindings, **r._bindings})


def join(lhs: Iterable[Substitution], rhs: Iterable[Substitution]) -> frozenset[Substitution]:
    """
    Merge every compatible pair drawn from `lhs` and `rhs`.

    Brute force: |lhs| x |rhs| compatibility checks. An empty side yields an
    empty result; IDENTITY on either side returns the other side.
    """
    rhs = tuple(rhs)
    result: set[Substitution] = set()
    for l in lhs:
        for r in rhs:
            merged = merge(l, r)
            if merged is not None:
                result.add(merged)
    return frozenset(result)

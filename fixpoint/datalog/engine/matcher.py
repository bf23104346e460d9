import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional

from ..model.atom import Atom, Predicate
from ..model.terms import Constant, Variable
from .errors import ArityMismatch, SelfInconsistentAtom
from .substitution import Substitution

logger = logging.getLogger(__name__)

ON_CONFLICT_FILTER = "filter"
ON_CONFLICT_ERROR = "error"


def lookup(db: Mapping[Predicate, Iterable[tuple]], predicate: Predicate) -> Iterable[tuple]:
    if hasattr(db, "relation"):
        return db.relation(predicate)
    return db.get(predicate, ())


def match_fact(atom: Atom, fact: tuple, on_conflict: str = ON_CONFLICT_FILTER) -> Optional[Substitution]:
    """Pair the terms of `atom` with the values of `fact`.

    Args:
        atom: Body atom whose terms are matched positionally
        fact: Ground tuple from the atom's relation
        on_conflict: "filter" to reject a fact that binds a repeated variable
            to different values, "error" to raise SelfInconsistentAtom instead

    Returns:
        The substitution binding the atom's variables, or None if a constant
        or a repeated variable rules the fact out
    """
    if len(fact) != len(atom.terms):
        raise ArityMismatch(atom.predicate, len(atom.terms), len(fact), context=f"fact {fact!r} for atom {atom!r}")
    bindings: dict[Variable, Any] = {}
    for term, value in zip(atom.terms, fact):
        if isinstance(term, Constant):
            if term.value != value:
                return None
            continue
        bound = bindings.get(term, value)
        if bound != value:
            if on_conflict == ON_CONFLICT_ERROR:
                raise SelfInconsistentAtom(atom, fact, term)
            logger.debug(f"[MATCH] {atom!r}: fact {fact!r} binds {term!r} to {bound!r} and {value!r}, skipped")
            return None
        bindings[term] = value
    return Substitution(bindings)


def match_relation(atom: Atom, relation: Iterable[tuple],
                   on_conflict: str = ON_CONFLICT_FILTER) -> frozenset[Substitution]:
    """
    Scan `relation` in full and return one substitution per fact that
    satisfies the atom's constants and repeated variables.
    """
    if on_conflict not in (ON_CONFLICT_FILTER, ON_CONFLICT_ERROR):
        raise ValueError(f"Unknown on_conflict policy: {on_conflict}. Valid options: "
                         f"{[ON_CONFLICT_FILTER, ON_CONFLICT_ERROR]}")
    if atom.arity() != atom.predicate.arity:
        raise ArityMismatch(atom.predicate, atom.predicate.arity, atom.arity(), context=f"atom {atom!r}")
    result: set[Substitution] = set()
    for fact in relation:
        if isinstance(fact, str):
            raise TypeError(f"fact for {atom!r} must be a sequence of values, got the string {fact!r}")
        sub = match_fact(atom, tuple(fact), on_conflict)
        if sub is not None:
            result.add(sub)
    return frozenset(result)


def evaluate_atom(atom: Atom, db: Mapping[Predicate, Iterable[tuple]],
                  on_conflict: str = ON_CONFLICT_FILTER) -> frozenset[Substitution]:
    """
    Evaluate a single atom against `db`.

    An absent predicate is treated as the empty relation, never an error.
    """
    return match_relation(atom, lookup(db, atom.predicate), on_conflict)

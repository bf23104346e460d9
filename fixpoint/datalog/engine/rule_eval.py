"""
Evaluation of a single rule: chained joins over the body, then projection
onto the head.
"""
import logging
from collections.abc import Mapping
from typing import Iterable, Optional, Sequence

from ..model.atom import Predicate
from ..model.rule import Rule
from ..model.terms import Term
from .database import Fact
from .errors import UnboundHeadVariable
from .matcher import ON_CONFLICT_FILTER, lookup, match_relation
from .substitution import IDENTITY, Substitution, join

logger = logging.getLogger(__name__)


def check_head(rule: Rule) -> None:
    """Raise UnboundHeadVariable unless every head term is a variable bound by the body."""
    bound = rule.body_variables()
    for t in rule.head.terms:
        if not t.is_variable() or t not in bound:
            raise UnboundHeadVariable(rule, t)


def project(substitution: Substitution, terms: Iterable[Term], rule: Optional[Rule] = None) -> Fact:
    """Instantiate `terms` with the values bound in `substitution`.

    `rule` is only used to report an unbound term.
    """
    try:
        return tuple(substitution[t] for t in terms)
    except KeyError as e:
        raise UnboundHeadVariable(rule, e.args[0]) from e


def evaluate_body_over(rule: Rule, relations: Sequence[Iterable[tuple]],
                       on_conflict: str = ON_CONFLICT_FILTER) -> frozenset[Substitution]:
    """Substitutions satisfying the whole body, where body atom j is matched
    against `relations[j]`. Joined left to right starting from IDENTITY."""
    if len(relations) != len(rule.body):
        raise ValueError(f"expected {len(rule.body)} relations for {rule!r}, got {len(relations)}")
    acc = IDENTITY
    for atom, relation in zip(rule.body, relations):
        acc = join(acc, match_relation(atom, relation, on_conflict))
    return acc


def evaluate_rule_over(rule: Rule, relations: Sequence[Iterable[tuple]],
                       on_conflict: str = ON_CONFLICT_FILTER) -> frozenset[Fact]:
    """
    Derive the head facts of `rule`, matching body atom j against
    `relations[j]`.

    Binding relations per position rather than per predicate lets two
    occurrences of the same predicate in one body see different relations.
    The head is checked before any join, so a rule whose head cannot be
    instantiated fails even if its body is unsatisfiable.
    """
    check_head(rule)
    joined = evaluate_body_over(rule, relations, on_conflict)
    facts = frozenset(project(sub, rule.head.terms, rule) for sub in joined)
    logger.debug(f"[RULE] {rule!r}: {len(joined)} substitutions, {len(facts)} facts")
    return facts


def evaluate_rule(rule: Rule, db: Mapping[Predicate, Iterable[tuple]],
                  on_conflict: str = ON_CONFLICT_FILTER) -> frozenset[Fact]:
    """
    Derive the head facts of `rule` from `db`.

    Atom order affects intermediate sizes only, never the result.
    """
    relations = [lookup(db, atom.predicate) for atom in rule.body]
    return evaluate_rule_over(rule, relations, on_conflict)

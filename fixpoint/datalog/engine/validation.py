"""
Static checks run on a rule set before evaluation starts, so that a
malformed rule fails before any facts are derived.
"""
import logging
from typing import Iterable

from ..model.rule import Rule
from .errors import ArityMismatch, DatalogError
from .rule_eval import check_head

logger = logging.getLogger(__name__)


def check_rule(rule: Rule) -> None:
    """Raise the first problem found in `rule`: atom arity, then the head."""
    for atom in (rule.head, *rule.body):
        if atom.arity() != atom.predicate.arity:
            raise ArityMismatch(atom.predicate, atom.predicate.arity, atom.arity(),
                                context=f"atom {atom!r} of rule {rule!r}")
    check_head(rule)


def find_errors(rules: Iterable[Rule]) -> list[DatalogError]:
    """Collect the first error of every malformed rule."""
    errors: list[DatalogError] = []
    for rule in rules:
        try:
            check_rule(rule)
        except DatalogError as e:
            errors.append(e)
    return errors


def validate_rules(rules: Iterable[Rule]) -> None:
    """Raise the first error found in `rules`, logging every other one."""
    errors = find_errors(rules)
    if not errors:
        return
    for e in errors[1:]:
        logger.error(f"[VALIDATE] {e}")
    raise errors[0]

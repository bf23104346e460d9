"""
Errors raised by the evaluation engine.

These are programmer or input errors scoped to a single rule, atom or fact;
none of them is transient, so nothing in the engine retries.
"""
from typing import Any, Optional


class DatalogError(Exception):
    """Base class for every error raised by the engine."""


class ArityMismatch(DatalogError):
    """An atom or fact does not have as many positions as its predicate."""

    def __init__(self, predicate: Any, expected: int, found: int, context: Optional[str] = None) -> None:
        self.predicate = predicate
        self.expected = expected
        self.found = found
        self.context = context
        msg = f"arity mismatch for {predicate}: expected {expected}, found {found}"
        if context:
            msg = f"{msg} in {context}"
        super().__init__(msg)


class UnboundHeadVariable(DatalogError):
    """A head term is not a variable bound by the rule body."""

    def __init__(self, rule: Any, term: Any) -> None:
        self.rule = rule
        self.term = term
        super().__init__(f"head term {term!r} is not bound by the body of rule {rule!r}")


class SelfInconsistentAtom(DatalogError):
    """A fact assigns different values to a variable repeated within one atom."""

    def __init__(self, atom: Any, fact: tuple, variable: Any) -> None:
        self.atom = atom
        self.fact = fact
        self.variable = variable
        super().__init__(f"fact {fact!r} binds {variable!r} to conflicting values in {atom!r}")


class IterationLimitExceeded(DatalogError, RuntimeError):
    """The fixpoint loop ran more rounds than allowed."""

    def __init__(self, max_iterations: int) -> None:
        self.max_iterations = max_iterations
        super().__init__(
            f"Datalog evaluation exceeded max_iterations={max_iterations}. Possible infinite loop."
        )

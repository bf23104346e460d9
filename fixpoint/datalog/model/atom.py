from dataclasses import dataclass
from .terms import Term, Variable

@dataclass(frozen=True, slots=True)
class Predicate:
    """
    A relation symbol. Two predicates are the same relation iff both the
    name and the arity match, so `edge/2` and `edge/3` never share facts.
    """
    name: str
    arity: int

    def __post_init__(self):
        if self.arity < 0:
            raise ValueError(f"Predicate {self.name}: arity must be non-negative, got {self.arity}")

    def __repr__(self) -> str:
        return f"{self.name}/{self.arity}"

@dataclass(frozen=True, slots=True)
class Atom:
    """
    A predicate applied to terms.
      - predicate: the Predicate, e.g. Predicate("parent", 2)
      - terms: tuple of Term (Variable or Constant), one per argument position
    The term count is expected to equal predicate.arity; validation and the
    matcher report a mismatch as ArityMismatch.
    """
    predicate: Predicate
    terms: tuple[Term, ...] = ()

    def arity(self) -> int:
        return len(self.terms)

    def is_ground(self) -> bool:
        return all(not t.is_variable() for t in self.terms)

    def variables(self) -> tuple[Variable, ...]:
        seen: list[Variable] = []
        for t in self.terms:
            if isinstance(t, Variable) and t not in seen:
                seen.append(t)
        return tuple(seen)

    def __repr__(self) -> str:
        inner = ", ".join(repr(t) for t in self.terms)
        return f"{self.predicate.name}({inner})"

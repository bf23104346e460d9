from dataclasses import dataclass
from .atom import Atom
from .terms import Variable

@dataclass(frozen=True, slots=True)
class Rule:
    """
    A conjunctive Datalog rule:

        ancestor(X, Y) :- ancestor(X, Z), parent(Z, Y).

    `head` is derived for every substitution satisfying all `body` atoms.
    An empty body means "always true".
    """
    head: Atom
    body: tuple[Atom, ...] = ()

    def body_variables(self) -> set[Variable]:
        return {v for atom in self.body for v in atom.variables()}

    def __repr__(self) -> str:
        if self.body:
            body_str = ", ".join(repr(atom) for atom in self.body)
            return f"{repr(self.head)} :- {body_str}."
        return f"{repr(self.head)}."

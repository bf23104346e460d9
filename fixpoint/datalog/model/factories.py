"""
Small constructors for building programs in code.

Strings starting with an uppercase letter or an underscore become
variables, everything else becomes a constant:

    parent = Predicate("parent", 2)
    atom(parent, "X", "bob")   # parent(X, "bob")
"""
from typing import Any
from .atom import Atom, Predicate
from .rule import Rule
from .terms import Term, Variable, Constant


def term(value: Any) -> Term:
    if isinstance(value, (Variable, Constant)):
        return value
    if isinstance(value, str) and value and (value[0].isupper() or value[0] == "_"):
        return Variable(value)
    return Constant(value)


def atom(predicate: Predicate, *terms: Any) -> Atom:
    return Atom(predicate=predicate, terms=tuple(term(t) for t in terms))


def rule(head: Atom, *body: Atom) -> Rule:
    return Rule(head=head, body=tuple(body))

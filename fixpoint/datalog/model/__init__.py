from .terms import Term, Variable, Constant
from .atom import Predicate, Atom
from .rule import Rule
from .schema import RelationSchema
from .factories import term, atom, rule

__all__ = [
    'Term', 'Variable', 'Constant',
    'Predicate', 'Atom', 'Rule', 'RelationSchema',
    'term', 'atom', 'rule',
]

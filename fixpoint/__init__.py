"""
fixpoint: semi-naive fixpoint evaluation of Datalog rules.
"""
from .datalog.model import Predicate, Atom, Rule, Variable, Constant, atom, rule
from .datalog.engine import Database, semi_naive_evaluation, SemiNaiveEvaluator

__all__ = [
    'Predicate', 'Atom', 'Rule', 'Variable', 'Constant', 'atom', 'rule',
    'Database', 'semi_naive_evaluation', 'SemiNaiveEvaluator',
]

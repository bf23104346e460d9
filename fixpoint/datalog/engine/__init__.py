"""
Semi-naive bottom-up evaluation of positive Datalog rules.
"""
from .database import Database, EvaluationResult, Fact, Relation, make_relation
from .errors import (
    DatalogError,
    ArityMismatch,
    UnboundHeadVariable,
    SelfInconsistentAtom,
    IterationLimitExceeded,
)
from .substitution import Substitution, IDENTITY, join, merge
from .matcher import evaluate_atom, match_relation
from .rule_eval import evaluate_rule, evaluate_rule_over, project
from .evaluator import (
    EvaluationState,
    SemiNaiveEvaluator,
    semi_naive_evaluation,
    naive_evaluation,
)

__all__ = [
    'Database', 'EvaluationResult', 'Fact', 'Relation', 'make_relation',
    'DatalogError', 'ArityMismatch', 'UnboundHeadVariable', 'SelfInconsistentAtom',
    'IterationLimitExceeded',
    'Substitution', 'IDENTITY', 'join', 'merge',
    'evaluate_atom', 'match_relation',
    'evaluate_rule', 'evaluate_rule_over', 'project',
    'EvaluationState', 'SemiNaiveEvaluator', 'semi_naive_evaluation', 'naive_evaluation',
]

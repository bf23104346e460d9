import pytest

from fixpoint.datalog.engine.errors import ArityMismatch, UnboundHeadVariable
from fixpoint.datalog.engine.validation import check_rule, find_errors, validate_rules
from fixpoint.datalog.model import Atom, Predicate, Rule, Variable, atom, rule

P = Predicate("p", 2)
Q = Predicate("q", 2)


def test_valid_rules_pass():
    validate_rules([rule(atom(P, "X", "Y"), atom(Q, "X", "Y"))])


def test_body_atom_arity_mismatch():
    r = Rule(Atom(P, (Variable("X"), Variable("Y"))), (Atom(Q, (Variable("X"),)),))
    with pytest.raises(ArityMismatch):
        check_rule(r)


def test_head_atom_arity_mismatch():
    r = Rule(Atom(P, (Variable("X"),)), (Atom(Q, (Variable("X"), Variable("Y"))),))
    with pytest.raises(ArityMismatch):
        check_rule(r)


def test_find_errors_collects_one_error_per_bad_rule():
    good = rule(atom(P, "X", "Y"), atom(Q, "X", "Y"))
    unbound = rule(atom(P, "X", "Z"), atom(Q, "X", "Y"))
    bad_arity = Rule(Atom(P, (Variable("X"),)), ())
    errors = find_errors([good, unbound, bad_arity])
    assert [type(e) for e in errors] == [UnboundHeadVariable, ArityMismatch]


def test_validate_raises_first_error():
    unbound = rule(atom(P, "X", "Z"), atom(Q, "X", "Y"))
    with pytest.raises(UnboundHeadVariable):
        validate_rules([unbound, Rule(Atom(P, (Variable("X"),)), ())])

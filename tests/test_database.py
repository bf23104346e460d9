import pytest

from fixpoint.datalog.engine.database import Database, EvaluationResult, make_relation
from fixpoint.datalog.engine.errors import ArityMismatch
from fixpoint.datalog.model import Predicate

P = Predicate("p", 2)
Q = Predicate("q", 1)


def test_make_relation_deduplicates():
    assert make_relation(P, [["a", "b"], ("a", "b")]) == {("a", "b")}


def test_fact_arity_is_checked_on_insert():
    with pytest.raises(ArityMismatch):
        Database({P: [("a",)]})
    with pytest.raises(ArityMismatch):
        Database().with_facts(Q, [("a", "b")])


def test_negative_arity_is_rejected():
    with pytest.raises(ValueError):
        Predicate("bad", -1)


def test_predicates_differ_by_arity():
    db = Database({Predicate("p", 1): [("a",)]})
    assert db.relation(P) == frozenset()


def test_updates_return_new_databases():
    db = Database({P: [("a", "b")]})
    bigger = db.with_facts(P, [("c", "d")])
    assert db.relation(P) == {("a", "b")}
    assert bigger.relation(P) == {("a", "b"), ("c", "d")}
    replaced = bigger.replace(P, [("e", "f")])
    assert replaced.relation(P) == {("e", "f")}
    assert bigger.relation(P) == {("a", "b"), ("c", "d")}


def test_union_and_restrict():
    db = Database({P: [("a", "b")]}).union({P: [("c", "d")], Q: [("x",)]})
    assert db.relation(P) == {("a", "b"), ("c", "d")}
    restricted = db.restrict([Q, Predicate("r", 3)])
    assert set(restricted) == {Q, Predicate("r", 3)}
    assert restricted.relation(Predicate("r", 3)) == frozenset()


def test_is_empty_ignores_empty_relations():
    assert Database({P: []}).is_empty()
    assert not Database({Q: [("x",)]}).is_empty()
    assert Database({P: [("a", "b")], Q: [("x",)]}).num_facts() == 2


def test_issubset():
    small = Database({P: [("a", "b")]})
    big = small.with_facts(P, [("c", "d")])
    assert small.issubset(big)
    assert not big.issubset(small)


def test_equality_and_hash():
    assert Database({P: [("a", "b")]}) == Database({P: {("a", "b")}})
    assert hash(Database({P: [("a", "b")]})) == hash(Database({P: [("a", "b")]}))
    assert Database(Database({Q: [("x",)]})) == {Q: {("x",)}}


def test_evaluation_result_failure():
    result = EvaluationResult.failure(ArityMismatch(P, 2, 1))
    assert result.has_error()
    assert result.is_empty()
    assert result.facts(P) == frozenset()


def test_string_fact_is_rejected_instead_of_split():
    with pytest.raises(TypeError):
        Database({P: ["ab"]})
    with pytest.raises(TypeError):
        Database().with_facts(Q, ["bob"])

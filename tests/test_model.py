from fixpoint.datalog.model import Atom, Constant, Predicate, Rule, Variable, atom, rule, term


def test_constants_compare_by_value():
    assert Constant("a") == Constant("a")
    assert Constant(1) != Constant("1")
    assert Constant("a") != Variable("a")
    assert Constant(1).name == "1"
    assert Variable("X").is_variable() and not Constant("X").is_variable()


def test_term_factory_classifies_strings():
    assert term("X") == Variable("X")
    assert term("_tmp") == Variable("_tmp")
    assert term("alice") == Constant("alice")
    assert term(42) == Constant(42)
    assert term(Constant("Alice")) == Constant("Alice")


def test_atom_helpers():
    p = Predicate("p", 3)
    a = atom(p, "X", "bob", "X")
    assert a.arity() == 3
    assert a.variables() == (Variable("X"),)
    assert not a.is_ground()
    assert atom(p, "a", "b", "c").is_ground()


def test_rule_helpers_and_repr():
    parent = Predicate("parent", 2)
    ancestor = Predicate("ancestor", 2)
    r = rule(atom(ancestor, "X", "Y"), atom(ancestor, "X", "Z"), atom(parent, "Z", "Y"))
    assert r.body_variables() == {Variable("X"), Variable("Y"), Variable("Z")}
    assert repr(r) == "ancestor(X, Y) :- ancestor(X, Z), parent(Z, Y)."
    assert repr(Rule(Atom(Predicate("start", 0)))) == "start()."
    assert repr(parent) == "parent/2"

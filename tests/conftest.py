import pytest

from fixpoint.datalog.model import Predicate, Variable, Constant, Atom, Rule
from fixpoint.datalog.engine.config import config
from fixpoint.datalog.engine.database import Database

X, Y, Z = Variable("x"), Variable("y"), Variable("z")

PARENT = Predicate("parent", 2)
ANCESTOR = Predicate("ancestor", 2)
LINKED = Predicate("linked", 2)
REACHABLE = Predicate("reachable", 2)

CHAIN = [("Alice", "Bob"), ("Bob", "Charlie"), ("Charlie", "Delta")]


def closure_rules(edge: Predicate, path: Predicate) -> list[Rule]:
    return [
        Rule(Atom(path, (X, Y)), (Atom(edge, (X, Y)),)),
        Rule(Atom(path, (X, Y)), (Atom(path, (X, Z)), Atom(edge, (Z, Y)))),
    ]


@pytest.fixture(autouse=True)
def default_config():
    config.reset()
    yield config
    config.reset()


@pytest.fixture
def family_edb() -> Database:
    return Database({PARENT: CHAIN, LINKED: CHAIN})


@pytest.fixture
def family_rules() -> list[Rule]:
    return closure_rules(PARENT, ANCESTOR) + closure_rules(LINKED, REACHABLE)

import pytest

from fixpoint.datalog.engine.config import Config, DEFAULT_CONFIG, config


def test_config_is_singleton():
    assert Config.get_instance() is config
    with pytest.raises(RuntimeError):
        Config()


def test_defaults(default_config):
    assert default_config.get_max_iterations() is None
    assert default_config.get_workers() == 1
    assert default_config.get_on_conflict() == "filter"
    assert default_config.get("missing.path", "fallback") == "fallback"


def test_set_and_reset(default_config):
    default_config.set("evaluator.workers", 8)
    default_config.set("new.nested.key", True)
    assert default_config.get("evaluator.workers") == 8
    assert default_config.get("new.nested.key") is True
    default_config.reset()
    assert default_config.get("evaluator.workers") == 1
    assert DEFAULT_CONFIG["evaluator"]["workers"] == 1


def test_load_from_file_merges_with_defaults(tmp_path, default_config):
    path = tmp_path / "fixpoint.yaml"
    path.write_text("evaluator:\n  max_iterations: 50\nmatcher:\n  on_conflict: error\n")
    default_config.load_from_file(str(path))
    assert default_config.get_max_iterations() == 50
    assert default_config.get_workers() == 1
    assert default_config.get_on_conflict() == "error"


def test_missing_or_empty_file_keeps_defaults(tmp_path, default_config):
    default_config.load_from_file(str(tmp_path / "absent.yaml"))
    empty = tmp_path / "empty.yaml"
    empty.write_text("")
    default_config.load_from_file(str(empty))
    assert default_config.get_workers() == 1


def test_save_round_trip(tmp_path, default_config):
    default_config.set("evaluator.max_iterations", 7)
    path = tmp_path / "saved.yaml"
    default_config.save(str(path))
    default_config.reset()
    default_config.load_from_file(str(path))
    assert default_config.get_max_iterations() == 7


def test_on_conflict_from_config_reaches_matcher(default_config):
    from fixpoint.datalog.engine.errors import SelfInconsistentAtom
    from fixpoint.datalog.engine.evaluator import semi_naive_evaluation
    from fixpoint.datalog.model import Predicate, atom, rule

    q = Predicate("q", 2)
    p = Predicate("p", 1)
    rules = [rule(atom(p, "X"), atom(q, "X", "X"))]
    edb = {q: [("a", "a"), ("a", "b")]}
    assert semi_naive_evaluation(rules, edb).relation(p) == {("a",)}
    default_config.set("matcher.on_conflict", "error")
    with pytest.raises(SelfInconsistentAtom):
        semi_naive_evaluation(rules, edb)

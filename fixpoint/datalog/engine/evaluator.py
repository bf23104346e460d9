import logging

import os
logger = logging.getLogger(__name__)
log_level_str = os.environ.get("DLG_DEBUG", "INFO").upper()
try:
    logger.setLevel(getattr(logging, log_level_str))
except AttributeError:
    logger.setLevel(logging.INFO)
if not logger.hasHandlers():
    handler = logging.StreamHandler()
    formatter = logging.Formatter('[%(levelname)s] %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)

from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .config import config
from .database import Database, EvaluationResult, Fact, Relation
from .dependency import idb_predicates, recursive_predicates, references_idb, strata
from .errors import DatalogError, IterationLimitExceeded
from .rule_eval import evaluate_rule, evaluate_rule_over
from .validation import validate_rules
from ..model.atom import Predicate
from ..model.rule import Rule


@dataclass(frozen=True, slots=True)
class EvaluationState:
    """
    Loop state of the fixpoint computation.
      - accumulated: every IDB fact known so far
      - delta: the IDB facts first derived in the last round
      - round: number of incremental rounds completed (0 right after seeding)
    """
    accumulated: Database
    delta: Database
    round: int = 0

    def is_fixpoint(self) -> bool:
        return self.delta.is_empty()


def _as_database(edb: Mapping[Predicate, Iterable[Iterable[str]]]) -> Database:
    return edb if isinstance(edb, Database) else Database(edb)


class SemiNaiveEvaluator:
    """
    A semi-naive, bottom-up Datalog evaluator for positive conjunctive rules.

    Rules whose body mentions no intensional predicate are evaluated once
    against the EDB to seed the computation. Every following round evaluates
    each remaining rule once per IDB body position, binding that position to
    the previous round's delta, other IDB positions to the accumulated facts
    and EDB positions to the EDB. Only facts not already accumulated form the
    next delta; evaluation stops when a round derives nothing new.

    Explicit arguments override the values in `config`.
    """
    def __init__(self, rules: Iterable[Rule], edb: Mapping[Predicate, Iterable[Iterable[str]]],
                 max_iterations: Optional[int] = None, workers: Optional[int] = None,
                 on_conflict: Optional[str] = None) -> None:
        self.rules: tuple[Rule, ...] = tuple(rules)
        self.edb = _as_database(edb)
        self.max_iterations = config.get_max_iterations() if max_iterations is None else max_iterations
        self.workers = config.get_workers() if workers is None else workers
        self.on_conflict = config.get_on_conflict() if on_conflict is None else on_conflict

        self.idb: frozenset[Predicate] = idb_predicates(self.rules)
        self._seed_rules = [r for r in self.rules if not references_idb(r, self.idb)]
        self._incremental_rules = [r for r in self.rules if references_idb(r, self.idb)]
        # One task per (rule, IDB body position)
        self._tasks: list[tuple[Rule, int]] = [
            (rule, i)
            for rule in self._incremental_rules
            for i, atom in enumerate(rule.body)
            if atom.predicate in self.idb
        ]

    def validate(self) -> None:
        validate_rules(self.rules)

    def seed(self) -> EvaluationState:
        """Evaluate the rules that do not depend on IDB predicates.

        EDB facts given for an IDB predicate are part of the seed as well.
        """
        accumulated = self.edb.restrict(self.idb)
        delta = accumulated
        for rule in self._seed_rules:
            facts = evaluate_rule(rule, self.edb, self.on_conflict)
            accumulated = accumulated.with_facts(rule.head.predicate, facts)
            delta = delta.with_facts(rule.head.predicate, facts)
        logger.debug(f"[SEED] {len(self._seed_rules)} rules, {delta.num_facts()} facts")
        return EvaluationState(accumulated=accumulated, delta=delta, round=0)

    def _resolve(self, state: EvaluationState, rule: Rule, position: int) -> list[Relation]:
        relations: list[Relation] = []
        for j, atom in enumerate(rule.body):
            pred = atom.predicate
            if j == position:
                relations.append(state.delta.relation(pred))
            elif pred in self.idb:
                relations.append(state.accumulated.relation(pred))
            else:
                relations.append(self.edb.relation(pred))
        return relations

    def contribution(self, state: EvaluationState, rule: Rule, position: int) -> frozenset[Fact]:
        """New head facts of `rule` with body atom `position` bound to the delta."""
        relations = self._resolve(state, rule, position)
        if not relations[position]:
            return frozenset()
        facts = evaluate_rule_over(rule, relations, self.on_conflict)
        return facts - state.accumulated.relation(rule.head.predicate)

    def compute_delta(self, state: EvaluationState) -> Database:
        """The facts first derivable in the round following `state`."""
        def run_task(task: tuple[Rule, int]) -> tuple[Predicate, frozenset[Fact]]:
            rule, position = task
            return rule.head.predicate, self.contribution(state, rule, position)

        if self.workers > 1 and len(self._tasks) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                results = list(pool.map(run_task, self._tasks))
        else:
            results = [run_task(task) for task in self._tasks]

        new_facts: dict[Predicate, set[Fact]] = {pred: set() for pred in self.idb}
        for pred, facts in results:
            new_facts[pred].update(facts)
        return Database(new_facts)

    def step(self, state: EvaluationState) -> EvaluationState:
        """Run one incremental round and fold its delta into the accumulated facts."""
        delta = self.compute_delta(state)
        accumulated = state.accumulated.union(delta)
        logger.debug(f"[ROUND {state.round + 1}] {delta.num_facts()} new facts, "
                     f"{accumulated.num_facts()} total")
        return EvaluationState(accumulated=accumulated, delta=delta, round=state.round + 1)

    def iterate(self) -> Iterator[EvaluationState]:
        """Yield the seed state and the state after every round, ending at the fixpoint."""
        self.validate()
        state = self.seed()
        yield state
        while not state.is_fixpoint():
            if self.max_iterations is not None and state.round >= self.max_iterations:
                logger.error(f"[ERROR][LOOP] Exceeded max_iterations={self.max_iterations}.")
                raise IterationLimitExceeded(self.max_iterations)
            state = self.step(state)
            yield state

    def fixpoint(self) -> EvaluationState:
        if logger.isEnabledFor(logging.DEBUG):
            self._log_program()
        state = None
        for state in self.iterate():
            pass
        logger.debug(f"[FIXPOINT] Reached after {state.round} rounds, {state.accumulated.num_facts()} facts")
        return state

    def _log_program(self) -> None:
        logger.debug(f"[EVAL] {len(self.rules)} rules, IDB predicates: {sorted(map(repr, self.idb))}")
        logger.debug(f"[EVAL] Recursive predicates: {sorted(map(repr, recursive_predicates(self.rules)))}")
        logger.debug(f"[EVAL] Strata: {[sorted(map(repr, s)) for s in strata(self.rules)]}")

    def evaluate(self) -> Database:
        """Return every derivable IDB fact, one relation per IDB predicate."""
        return self.fixpoint().accumulated

    def run(self) -> EvaluationResult:
        """Like evaluate(), but report a DatalogError as an error result instead of raising."""
        state = None
        try:
            if logger.isEnabledFor(logging.DEBUG):
                self._log_program()
            for state in self.iterate():
                pass
        except DatalogError as e:
            rounds = state.round if state is not None else 0
            logger.error(f"[EVAL] Evaluation failed after {rounds} rounds: {e}")
            return EvaluationResult.failure(e, rounds)
        logger.debug(f"[FIXPOINT] Reached after {state.round} rounds, {state.accumulated.num_facts()} facts")
        return EvaluationResult.success(state.accumulated, state.round)


def semi_naive_evaluation(rules: Iterable[Rule], edb: Mapping[Predicate, Iterable[Iterable[str]]],
                          **kwargs) -> Database:
    """Evaluate `rules` over `edb` to a fixpoint with the semi-naive strategy."""
    return SemiNaiveEvaluator(rules, edb, **kwargs).evaluate()


def naive_evaluation(rules: Iterable[Rule], edb: Mapping[Predicate, Iterable[Iterable[str]]],
                     max_iterations: Optional[int] = None, on_conflict: Optional[str] = None) -> Database:
    """
    Reference evaluator: re-evaluate every rule over all facts known so far
    until a round adds nothing. Produces the same result as the semi-naive
    strategy, redoing every join each round.
    """
    rules = tuple(rules)
    edb = _as_database(edb)
    if max_iterations is None:
        max_iterations = config.get_max_iterations()
    if on_conflict is None:
        on_conflict = config.get_on_conflict()
    validate_rules(rules)
    accumulated = edb.restrict(idb_predicates(rules))
    rounds = 0
    while True:
        if max_iterations is not None and rounds >= max_iterations:
            raise IterationLimitExceeded(max_iterations)
        db = edb.union(accumulated)
        derived = accumulated
        for rule in rules:
            derived = derived.with_facts(rule.head.predicate, evaluate_rule(rule, db, on_conflict))
        rounds += 1
        if derived == accumulated:
            logger.debug(f"[NAIVE] Fixpoint after {rounds} rounds")
            return accumulated
        accumulated = derived

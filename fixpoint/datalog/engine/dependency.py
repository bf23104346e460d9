"""
Predicate dependency analysis.

The dependency graph has one node per predicate and an edge from every
rule head to each predicate used in that rule's body. Intensional (IDB)
predicates are exactly the rule heads; everything else the rules mention is
extensional (EDB).
"""
import logging
from typing import Iterable

import networkx as nx

from ..model.atom import Predicate
from ..model.rule import Rule

logger = logging.getLogger(__name__)


def dependency_graph(rules: Iterable[Rule]) -> nx.DiGraph:
    G = nx.DiGraph()
    for rule in rules:
        head_pred = rule.head.predicate
        G.add_node(head_pred, idb=True)
        for atom in rule.body:
            if atom.predicate not in G:
                G.add_node(atom.predicate, idb=False)
            G.add_edge(head_pred, atom.predicate)
    return G


def idb_predicates(rules: Iterable[Rule]) -> frozenset[Predicate]:
    return frozenset(rule.head.predicate for rule in rules)


def edb_predicates(rules: Iterable[Rule]) -> frozenset[Predicate]:
    rules = list(rules)
    idb = idb_predicates(rules)
    return frozenset(atom.predicate for rule in rules for atom in rule.body
                     if atom.predicate not in idb)


def references_idb(rule: Rule, idb: frozenset[Predicate]) -> bool:
    """True if some body atom of `rule` uses an intensional predicate."""
    return any(atom.predicate in idb for atom in rule.body)


def recursive_predicates(rules: Iterable[Rule]) -> frozenset[Predicate]:
    """Predicates that (directly or mutually) depend on themselves."""
    G = dependency_graph(rules)
    recursive: set[Predicate] = set()
    for scc in nx.strongly_connected_components(G):
        if len(scc) > 1:
            recursive.update(scc)
        else:
            (pred,) = scc
            if G.has_edge(pred, pred):
                recursive.add(pred)
    return frozenset(recursive)


def strata(rules: Iterable[Rule]) -> list[frozenset[Predicate]]:
    """Group IDB predicates into strongly connected components, dependencies first.

    Every rule set here is free of negation and aggregation, so any ordering
    is a valid stratification; the grouping is reported for diagnostics and
    does not change evaluation.
    """
    G = dependency_graph(rules)
    C = nx.condensation(G)
    order = list(nx.topological_sort(C))
    order.reverse()  # Reverse so that independent predicates come first
    result: list[frozenset[Predicate]] = []
    for node in order:
        members = frozenset(p for p in C.nodes[node]["members"] if G.nodes[p].get("idb"))
        if members:
            result.append(members)
    return result

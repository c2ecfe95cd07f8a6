from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Set

from .automaton import NFA
from .models import State


# Diagnostic pass run after construction. It inspects the graph and reports;
# it never rewrites it. No subset construction happens here.


@dataclass(frozen=True)
class ReductionReport:
    has_epsilon: bool
    self_loops: List[State] = field(default_factory=list)

    @property
    def self_loops_checked(self) -> bool:
        return not self.has_epsilon


def contains_epsilon(nfa: NFA) -> bool:
    if nfa.start is None:
        return False
    visited: Set[int] = set()
    q: Deque[State] = deque([nfa.start])
    while q:
        s = q.popleft()
        if id(s) in visited:
            continue
        visited.add(id(s))
        for t in s.outgoing:
            if t.is_epsilon:
                return True
            if id(t.target) not in visited:
                q.append(t.target)
    return False


def find_self_loops(nfa: NFA) -> List[State]:
    return [s for s in nfa.states() if any(t.is_self_loop for t in s.outgoing)]


def reduce_nfa(nfa: NFA) -> ReductionReport:
    if contains_epsilon(nfa):
        return ReductionReport(has_epsilon=True)
    return ReductionReport(has_epsilon=False, self_loops=find_self_loops(nfa))

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Set, Tuple

from .errors import NothingToRepeatError
from .models import EPSILON, State, Transition, connect


@dataclass(frozen=True)
class Fragment:
    # Last complete atom: the state it hangs off, the edges it added there, and where it ends.
    entry: State
    edges: Tuple[Transition, ...]
    exit: State


class NFA:
    """
    Incremental NFA builder.

    `start` is the root of the graph (None once the automaton has been spliced into
    another one). `current` is the state the next fragment attaches to.
    """

    def __init__(self) -> None:
        # A fresh automaton is the empty expression, which accepts the empty string.
        self.start: Optional[State] = State(accepting=True)
        self.current: State = self.start

    # -------------------------------------------------------------------------
    # Fragment operations
    # -------------------------------------------------------------------------

    def concatenate(self, symbol: str) -> Transition:
        nxt = State()
        t = connect(self.current, nxt, symbol)
        self.current.set_accepting(False)
        nxt.set_accepting(True)
        self.current = nxt
        return t

    def branch(self, origin: State) -> State:
        s = State(accepting=True)
        connect(origin, s, EPSILON)
        origin.set_accepting(False)
        self.current = s
        return s

    def repeat(self, symbol: str) -> Transition:
        source = self.current.incoming_source(symbol)
        if source is None:
            raise NothingToRepeatError(f"Nothing to repeat: no {symbol!r} edge leads into the current state")
        # Zero repetitions.
        source.set_accepting(True)

        target = source.outgoing_target(symbol, prefer=self.current)
        if target is None:
            raise NothingToRepeatError(f"Nothing to repeat: {symbol!r} edge has no target")
        return connect(target, target, symbol)

    def repeat_fragment(self, fragment: Fragment) -> List[Transition]:
        fragment.entry.set_accepting(True)
        fragment.exit.set_accepting(True)
        # Leaving the exit the same way the entry was left closes the loop.
        return [connect(fragment.exit, t.target, t.symbol) for t in fragment.edges]

    def detach_start(self) -> None:
        self.start = None

    def splice(self, sub: NFA) -> Fragment:
        """
        Merge `sub` into this automaton at `current`.

        The sub-automaton's start state is absorbed: its edges are re-parented onto
        `current` and its accepting flag is copied. The group's accepting states
        become its exits; several exits are joined through epsilon edges into one
        new accepting state, which becomes `current`.
        """
        sub_start = sub.start
        if sub_start is None:
            raise ValueError("Sub-automaton has already been spliced")

        entry = self.current
        exits = [entry if s is sub_start else s for s in sub.accepting_states()]

        edges: List[Transition] = []
        for t in list(sub_start.outgoing):
            target = entry if t.is_self_loop else t.target
            moved = Transition(entry, target, t.symbol)
            entry.add_outgoing(moved)
            if t.is_self_loop:
                entry.add_incoming(moved)
            else:
                _replace(target.incoming, t, moved)
            edges.append(moved)

        for t in list(sub_start.incoming):
            if t.is_self_loop:
                continue
            moved = Transition(t.source, entry, t.symbol)
            _replace(t.source.outgoing, t, moved)
            entry.add_incoming(moved)

        entry.set_accepting(sub_start.accepting)
        sub_start.outgoing.clear()
        sub_start.incoming.clear()
        sub.detach_start()

        if len(exits) == 1:
            exit_state = exits[0]
        elif not exits:
            exit_state = entry
        else:
            exit_state = State(accepting=True)
            for s in exits:
                connect(s, exit_state, EPSILON)
                s.set_accepting(False)

        self.current = exit_state
        return Fragment(entry, tuple(edges), exit_state)

    # -------------------------------------------------------------------------
    # Traversal
    # -------------------------------------------------------------------------

    def states(self) -> List[State]:
        # Breadth-first from start, outgoing edges in insertion order.
        if self.start is None:
            return []
        seen: Set[int] = {id(self.start)}
        order: List[State] = []
        q: Deque[State] = deque([self.start])
        while q:
            s = q.popleft()
            order.append(s)
            for t in s.outgoing:
                if id(t.target) not in seen:
                    seen.add(id(t.target))
                    q.append(t.target)
        return order

    def accepting_states(self) -> List[State]:
        return [s for s in self.states() if s.accepting]

    def transitions(self) -> List[Transition]:
        return [t for s in self.states() for t in s.outgoing]


def _replace(items: List[Transition], old: Transition, new: Transition) -> None:
    for i, t in enumerate(items):
        if t is old:
            items[i] = new
            return
    items.append(new)

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional


# Reserved label for edges that consume no input. Never a valid literal.
EPSILON = ""


@dataclass(frozen=True, eq=False, repr=False)
class Transition:
    """
    Directed edge source --symbol--> target.
    Compared by identity: two edges with the same endpoints and label may coexist.
    """
    source: "State"
    target: "State"
    symbol: str

    @property
    def is_epsilon(self) -> bool:
        return self.symbol == EPSILON

    @property
    def is_self_loop(self) -> bool:
        return self.source is self.target

    def __repr__(self) -> str:
        label = "ε" if self.is_epsilon else self.symbol
        return f"Transition({label!r}, {id(self.source):#x} -> {id(self.target):#x})"


class State:
    __slots__ = ("accepting", "incoming", "outgoing")

    def __init__(self, accepting: bool = False):
        self.accepting = accepting
        self.incoming: List[Transition] = []
        self.outgoing: List[Transition] = []

    def __repr__(self) -> str:
        flag = " accepting" if self.accepting else ""
        return f"<State {id(self):#x}{flag} in={len(self.incoming)} out={len(self.outgoing)}>"

    def is_accepting(self) -> bool:
        return self.accepting

    def set_accepting(self, flag: bool = True) -> None:
        self.accepting = flag

    def add_outgoing(self, t: Transition) -> None:
        self.outgoing.append(t)

    def add_incoming(self, t: Transition) -> None:
        self.incoming.append(t)

    def remove_outgoing(self, t: Transition) -> None:
        self.outgoing = [x for x in self.outgoing if x is not t]

    def remove_incoming(self, t: Transition) -> None:
        self.incoming = [x for x in self.incoming if x is not t]

    def has_outgoing_symbol(self, symbol: str) -> bool:
        return any(t.symbol == symbol for t in self.outgoing)

    def outgoing_target(self, symbol: str, prefer: Optional[State] = None) -> Optional[State]:
        # First match in insertion order, unless `prefer` is among the targets. Self-loops are skipped.
        found: Optional[State] = None
        for t in self.outgoing:
            if t.symbol != symbol or t.is_self_loop:
                continue
            if t.target is prefer:
                return t.target
            if found is None:
                found = t.target
        return found

    def incoming_source(self, symbol: str) -> Optional[State]:
        for t in self.incoming:
            if t.symbol == symbol and not t.is_self_loop:
                return t.source
        return None

    def delete(self) -> None:
        # Unhook from every neighbour so no list keeps a reference to this state.
        for t in self.outgoing:
            if t.target is not self:
                t.target.remove_incoming(t)
        for t in self.incoming:
            if t.source is not self:
                t.source.remove_outgoing(t)
        self.outgoing.clear()
        self.incoming.clear()


def connect(source: State, target: State, symbol: str) -> Transition:
    t = Transition(source, target, symbol)
    source.add_outgoing(t)
    target.add_incoming(t)
    return t

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .automaton import NFA
from .models import EPSILON, State


DEFAULT_EPSILON_SYMBOL = "ε"
DEFAULT_LABEL_PREFIX = "q"


@dataclass(frozen=True)
class StateRow:
    label: str
    is_start: bool
    is_accepting: bool
    edges: List[Tuple[str, str]]  # (display symbol, target label)


# =============================================================================
# Labelling
# =============================================================================

def label_states(nfa: NFA, prefix: str = DEFAULT_LABEL_PREFIX) -> Dict[State, str]:
    # Labels follow breadth-first discovery: the start state first, then each
    # target the first time an edge reaches it. A label is never reused.
    return {s: f"{prefix}{n}" for n, s in enumerate(nfa.states())}


def serialize(nfa: NFA,
              prefix: str = DEFAULT_LABEL_PREFIX,
              epsilon_symbol: str = DEFAULT_EPSILON_SYMBOL) -> List[StateRow]:
    labels = label_states(nfa, prefix)
    rows: List[StateRow] = []
    for s in nfa.states():
        edges = [(epsilon_symbol if t.symbol == EPSILON else t.symbol, labels[t.target])
                 for t in s.outgoing]
        rows.append(StateRow(labels[s], s is nfa.start, s.accepting, edges))
    return rows


# =============================================================================
# Rendering
# =============================================================================

def _markers(row: StateRow) -> List[str]:
    markers = []
    if row.is_start:
        markers.append("Start")
    if row.is_accepting:
        markers.append("Accepting")
    return markers


def format_transition_table(rows: List[StateRow]) -> str:
    # One block per state:
    #   State: q0 (Start)
    #     Transition: a -> q1
    out: List[str] = []
    for row in rows:
        head = f"State: {row.label}" + "".join(f" ({m})" for m in _markers(row))
        out.append(head)
        for symbol, dest in row.edges:
            out.append(f"  Transition: {symbol} -> {dest}")
    return "\n".join(out)


def _make_table(rows: List[List[str]], headers: List[str]) -> str:
    cols = len(headers)
    widths = [len(h) for h in headers]
    for r in rows:
        for c in range(cols):
            widths[c] = max(widths[c], len(r[c]))

    def fmt_row(r: List[str]) -> str:
        return " | ".join(r[c].ljust(widths[c]) for c in range(cols)).rstrip()

    line = "-+-".join("-" * w for w in widths)
    out = [fmt_row(headers), line]
    out.extend(fmt_row(r) for r in rows)
    return "\n".join(out)


def dump_transition_table(rows: List[StateRow]) -> str:
    # Columns: State | Markers | Symbol | Dest, one row per transition.
    table: List[List[str]] = []
    for row in rows:
        mark = ",".join(m.upper() for m in _markers(row))
        if not row.edges:
            # Still show the state even if nothing leaves it.
            table.append([row.label, mark, "", ""])
            continue
        first_row = True
        for symbol, dest in row.edges:
            s_col = row.label if first_row else ""
            m_col = mark if first_row else ""
            table.append([s_col, m_col, symbol, dest])
            first_row = False
    return _make_table(table, ["State", "Markers", "Symbol", "Dest"])


def nfa_to_string(nfa: NFA,
                  prefix: str = DEFAULT_LABEL_PREFIX,
                  epsilon_symbol: str = DEFAULT_EPSILON_SYMBOL,
                  tabular: bool = False) -> str:
    rows = serialize(nfa, prefix, epsilon_symbol)
    if tabular:
        return dump_transition_table(rows)
    return format_transition_table(rows)

from __future__ import annotations
import re
from typing import Optional

from .automaton import NFA, Fragment
from .errors import (
    EmptyExpressionError,
    InvalidCharacterError,
    MultipleRepeatError,
    NothingToRepeatError,
    UnbalancedParenthesesError,
)


# =============================================================================
# Input validation
# =============================================================================

_VALID_EXPRESSION = re.compile(r"[a-z()*|]+")
_INVALID_CHAR = re.compile(r"[^a-z()*|]")


def validate_expression(text: str) -> str:
    if not text:
        raise EmptyExpressionError("Expression is empty")
    if _VALID_EXPRESSION.fullmatch(text) is None:
        m = _INVALID_CHAR.search(text)
        raise InvalidCharacterError(m.group(), m.start())
    return text


# =============================================================================
# Parser
# =============================================================================

class Parser:
    # Grammar:
    #   expr   := term ('|' term)*
    #   term   := factor*
    #   factor := atom '*'?
    #   atom   := [a-z] | '(' expr ')'
    #
    # One scanning loop per expression drives the NFA builder directly; groups
    # recurse on the text between the matching parentheses.
    # The text is assumed to be validated already (see validate_expression).

    def __init__(self, text: str):
        self.text = text

    def parse(self) -> NFA:
        return self._parse_expression(0, len(self.text))

    def _parse_expression(self, lo: int, hi: int) -> NFA:
        nfa = NFA()
        origin = nfa.start
        # Every alternative, the first one included, forks from the same origin.
        if self._has_top_level_alternation(lo, hi):
            nfa.branch(origin)

        last: Optional[Fragment] = None
        last_symbol: Optional[str] = None

        i = lo
        while i < hi:
            c = self.text[i]

            if c == '(':
                close = self._matching_paren(i, hi)
                sub = self._parse_expression(i + 1, close)
                last = nfa.splice(sub)
                last_symbol = None
                i = close + 1
                continue

            if c == ')':
                raise UnbalancedParenthesesError("Unbalanced parentheses: unexpected ')'", i)

            if c == '*':
                if last is None:
                    if i > lo and self.text[i - 1] == '*':
                        raise MultipleRepeatError("Multiple repeat", i)
                    raise NothingToRepeatError("Nothing to repeat", i)
                if last_symbol is not None:
                    nfa.repeat(last_symbol)
                else:
                    nfa.repeat_fragment(last)
                last = None
                last_symbol = None
            elif c == '|':
                nfa.branch(origin)
                last = None
                last_symbol = None
            else:
                t = nfa.concatenate(c)
                last = Fragment(t.source, (t,), t.target)
                last_symbol = c
            i += 1

        return nfa

    def _matching_paren(self, open_pos: int, hi: int) -> int:
        depth = 0
        for j in range(open_pos, hi):
            c = self.text[j]
            if c == '(':
                depth += 1
            elif c == ')':
                depth -= 1
                if depth == 0:
                    return j
        raise UnbalancedParenthesesError("Unbalanced parentheses: unclosed '('", open_pos)

    def _has_top_level_alternation(self, lo: int, hi: int) -> bool:
        depth = 0
        for j in range(lo, hi):
            c = self.text[j]
            if c == '(':
                depth += 1
            elif c == ')':
                depth -= 1
            elif c == '|' and depth == 0:
                return True
        return False


def parse_regex(text: str) -> NFA:
    return Parser(validate_expression(text)).parse()

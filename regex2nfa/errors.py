from __future__ import annotations
from typing import Optional


class RegexParseError(ValueError):
    def __init__(self, message: str, position: Optional[int] = None) -> None:
        super().__init__(message if position is None else f"{message} (pos {position})")
        self.position = position


class EmptyExpressionError(RegexParseError):
    pass


class InvalidCharacterError(RegexParseError):
    def __init__(self, char: str, position: int) -> None:
        super().__init__(f"Input contains invalid character {char!r}", position)
        self.char = char


class UnbalancedParenthesesError(RegexParseError):
    pass


class NothingToRepeatError(RegexParseError):
    pass


class MultipleRepeatError(RegexParseError):
    pass

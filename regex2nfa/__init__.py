from .models import EPSILON, State, Transition, connect
from .automaton import NFA, Fragment
from .errors import (
    RegexParseError,
    EmptyExpressionError,
    InvalidCharacterError,
    UnbalancedParenthesesError,
    NothingToRepeatError,
    MultipleRepeatError,
)
from .parser import Parser, parse_regex, validate_expression
from .serializer import StateRow, label_states, serialize, format_transition_table, dump_transition_table, nfa_to_string
from .reduction import ReductionReport, contains_epsilon, find_self_loops, reduce_nfa
from .config import Settings, ConfigError, load_settings

from __future__ import annotations
import argparse
import sys
from dataclasses import replace
from typing import List, Optional, TextIO

from .config import ConfigError, Settings, load_settings
from .errors import RegexParseError
from .parser import parse_regex
from .reduction import reduce_nfa
from .serializer import dump_transition_table, format_transition_table, label_states, serialize


TABLE_HEADER = "---NFA State Transition Table---"


def render_expression(expr: str, settings: Settings) -> str:
    nfa = parse_regex(expr)
    rows = serialize(nfa, settings.label_prefix, settings.epsilon_symbol)
    if settings.output_format == "table":
        out = [dump_transition_table(rows)]
    else:
        out = [format_transition_table(rows)]

    if settings.reduce:
        report = reduce_nfa(nfa)
        if report.has_epsilon:
            out.append("Contains epsilon transitions; self-loop check skipped.")
        else:
            labels = label_states(nfa, settings.label_prefix)
            for s in report.self_loops:
                out.append(f"State {labels[s]} has a self-referential transition.")
    return "\n".join(out)


def _compile_one(expr: str, settings: Settings) -> bool:
    try:
        text = render_expression(expr, settings)
    except RegexParseError as ex:
        print(f"Error: {ex}", file=sys.stderr)
        return False
    print(f"\n{TABLE_HEADER}")
    print(text)
    return True


def run_interactive(settings: Settings, stream: Optional[TextIO] = None) -> int:
    stream = stream if stream is not None else sys.stdin
    failures = 0
    prompt = settings.prompt
    while True:
        print(prompt, end="", flush=True)
        line = stream.readline()
        if not line:
            print()
            break
        expr = line.strip()
        if not expr:
            break
        if not _compile_one(expr, settings):
            failures += 1
        prompt = settings.next_prompt
    return 1 if failures else 0


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="regex2nfa",
                                description="Compile regular expressions over [a-z()*|] into NFA transition tables")
    p.add_argument("expressions", nargs="*", metavar="EXPR",
                   help="Expressions to compile (default: read them interactively from stdin)")
    p.add_argument("--config", help="Path to a TOML settings file (default: ./regex2nfa.toml if present)")
    p.add_argument("--table", action="store_true", help="Print an ASCII table instead of per-state blocks")
    p.add_argument("--reduce", action="store_true", help="Run the epsilon / self-loop diagnostic after each build")
    args = p.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except (ConfigError, FileNotFoundError) as ex:
        print(f"CONFIG ERROR: {ex}", file=sys.stderr)
        return 2

    if args.table:
        settings = replace(settings, output_format="table")
    if args.reduce:
        settings = replace(settings, reduce=True)

    if not args.expressions:
        return run_interactive(settings)

    failures = 0
    for expr in args.expressions:
        if not _compile_one(expr, settings):
            failures += 1
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())

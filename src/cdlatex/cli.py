"""
cdlatex command line

Shows the merged tables and replays key sequences against a text, which
is handy for trying out configuration overrides without an editor.

Usage:
    cdlatex tables                           # All tables
    cdlatex tables --kind symbols            # One table
    cdlatex play '$fr|$' TAB                 # Expand a keyword
    cdlatex play 'x^{2|}' TAB --math         # Leave a superscript
    cdlatex --help                           # Show help
"""

import argparse
import logging
import sys

from cdlatex.buffer import Buffer
from cdlatex.collaborators import FixedPathPrompter, ScriptedKeyReader, StaticMathDetector
from cdlatex.config import EngineConfig, load_config
from cdlatex.engine import Engine
from cdlatex.engine.help import render_modifier_help, render_symbol_help
from cdlatex.errors import ConfigError
from cdlatex.observability import configure_logging
from cdlatex.tables import MergedTables
from cdlatex.vocabulary import Key, TableKind

# Names accepted for keys that are awkward to type on a shell line
KEY_NAMES = {
    "TAB": "\t",
    "RET": Key.RETURN.value,
    "SPC": " ",
    "C-g": Key.CANCEL.value,
    "IDLE": None,
}


def parse_keys(specs: list[str]) -> list[str | None]:
    """
    Turn KEYS arguments into key events.

    A named key (TAB, RET, SPC, C-g, IDLE) is one event; any other
    argument is typed character by character.
    """
    keys: list[str | None] = []
    for spec in specs:
        if spec in KEY_NAMES:
            keys.append(KEY_NAMES[spec])
        else:
            keys.extend(spec)
    return keys


def format_tables(tables: MergedTables, config: EngineConfig, kind: TableKind | None = None) -> list[str]:
    """Help text for one or all tables."""
    lines: list[str] = []
    kinds = [kind] if kind else list(TableKind)

    for table in kinds:
        if lines:
            lines.append("")
        if table == TableKind.COMMANDS:
            lines.append(f"Commands ({len(tables.commands)})")
            for entry in tables.commands:
                modes = "/".join(
                    name for name, on in (("text", entry.text_mode), ("math", entry.math_mode)) if on
                )
                lines.append(f"  {entry.keyword:<10}{modes:<11}{entry.docstring}")
        elif table == TableKind.ENVIRONMENTS:
            lines.append(f"Environments ({len(tables.environments)})")
            for entry in tables.environments:
                suffix = "  [item]" if entry.item else ""
                lines.append(f"  {entry.name}{suffix}")
        elif table == TableKind.SYMBOLS:
            for level in range(1, tables.symbol_levels + 1):
                if level > 1:
                    lines.append("")
                lines.extend(render_symbol_help(
                    tables.symbols, level, config.math_symbol_prefix, config.binding_prefix(level)
                ))
        elif table == TableKind.MODIFIERS:
            lines.extend(render_modifier_help(tables.modifiers, config.math_modify_prefix))
    return lines


def run_tables(args: argparse.Namespace, config: EngineConfig) -> int:
    engine = Engine(config=config)
    kind = TableKind(args.kind) if args.kind else None
    for line in format_tables(engine.tables, config, kind):
        print(line)
    return 0


def run_play(args: argparse.Namespace, config: EngineConfig) -> int:
    keys = ScriptedKeyReader(parse_keys(args.keys))
    messages: list[str] = []
    engine = Engine(
        config=config,
        buffer=Buffer.from_marked(args.text),
        detector=StaticMathDetector(math=True) if args.math else None,
        keys=keys,
        paths=FixedPathPrompter(args.file) if args.file else None,
        on_message=messages.append,
    )

    failed = False
    while keys.pending:
        key = keys.read_key()
        result = engine.handle_key(key)
        if not result.success and not result.aborted:
            failed = True

    print(engine.buffer.render())
    for message in messages:
        print(f"[ERROR] {message}")
    return 1 if failed else 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="cdlatex",
        description="cdlatex - Fast insertion of LaTeX environments, macros and math symbols",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List the environments, including configured ones
  cdlatex --config my.json tables --kind environments

  # Expand a keyword in math mode
  cdlatex play '$fr|$' TAB

  # Math symbol for "a" (\\alpha), then put a tilde on it
  cdlatex play '$|$' '`a' "'~"

Keys: TAB, RET, SPC, C-g and IDLE (waiting past the help delay) are
named; any other argument is typed character by character.
        """
    )
    parser.add_argument(
        "--config",
        help="JSON configuration file (default: $CDLATEX_CONFIG)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log dispatch decisions to stderr"
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Log as JSON lines"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    tables = subparsers.add_parser("tables", help="Print the merged tables")
    tables.add_argument(
        "--kind",
        choices=[k.value for k in TableKind],
        help="Only this table"
    )

    play = subparsers.add_parser("play", help="Replay keys against a text")
    play.add_argument("text", help="Buffer text, with | marking the cursor")
    play.add_argument("keys", nargs="*", help="Keys to replay")
    play.add_argument(
        "--math",
        action="store_true",
        help="Treat the cursor as always being in math mode"
    )
    play.add_argument(
        "--file",
        help="Answer to file name prompts"
    )

    args = parser.parse_args(argv)

    configure_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        json_format=args.json_logs,
    )

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"[ERROR] {e}")
        sys.exit(1)

    if args.command == "tables":
        sys.exit(run_tables(args, config))
    sys.exit(run_play(args, config))


if __name__ == "__main__":
    main()

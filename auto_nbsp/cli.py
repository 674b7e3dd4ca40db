"""Command line filter: read text, bind short words and numbers, write it back.

  python -m auto_nbsp.cli page.html -o page.nbsp.html --language cs
  echo "v Praze" | python -m auto_nbsp.cli --language cs --stats
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from auto_nbsp.formatting.config import InvalidConfiguration, NbspConfig
from auto_nbsp.formatting.engine import NbspEngine
from auto_nbsp.models import RuleOptions
from auto_nbsp.settings import default_options

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    defaults = default_options()

    parser = argparse.ArgumentParser(prog="auto_nbsp.cli", add_help=True)
    parser.add_argument("input", nargs="?", help="Input file (default: stdin)")
    parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    parser.add_argument("--language", default=defaults.language, help=f"Language code (default: {defaults.language})")
    parser.add_argument("--marker", default=defaults.marker, help="Replacement for eligible spaces (default: &nbsp;)")
    parser.add_argument("--debug", action="store_true", default=defaults.debug, help="Highlight inserted markers")
    parser.add_argument("--stats", action="store_true", help="Print per-pass replacement counts to stderr")
    parser.add_argument(
        "--custom-replacements",
        metavar="JSON_FILE",
        help='Extra tokens, e.g. {"cs": {"abbreviations": ["ing."]}}',
    )

    rules = parser.add_argument_group("rules")
    for name in RuleOptions.model_fields:
        flag = name.replace("_", "-")
        rules.add_argument(
            f"--{flag}",
            dest=name,
            action=argparse.BooleanOptionalAction,
            default=getattr(defaults.rules, name),
        )
    return parser


def _read_input(path: str | None) -> str:
    if not path or path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    opts = default_options()
    custom = opts.custom_replacements
    if args.custom_replacements:
        try:
            custom = json.loads(Path(args.custom_replacements).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            print(f"error: cannot read custom replacements: {e}", file=sys.stderr)
            return 2

    try:
        config = NbspConfig(
            language=args.language,
            custom_replacements=custom,
            debug=bool(args.debug),
            marker=args.marker,
            **{name: bool(getattr(args, name)) for name in RuleOptions.model_fields},
        )
        engine = NbspEngine(config)
    except InvalidConfiguration as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    result = engine.replace_with_stats(_read_input(args.input))

    if args.output:
        Path(args.output).write_text(result.text, encoding="utf-8")
    else:
        sys.stdout.write(result.text)

    if args.stats:
        for name in engine.passes:
            print(f"{name}: {result.stats.get(name, 0)}", file=sys.stderr)
    logger.debug("stats: %s", result.stats)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""Command-line interface for MiniLisp."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from minilisp.errors import LexError
from minilisp.rules import DEFAULT_RULES, Rule, rules_by_name
from minilisp.tokens import INT64_MAX

logger = logging.getLogger(__name__)

FORMATS = ("text", "json")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    output_format: str
    rules: tuple[Rule, ...]
    max_int: int | None
    snippet_length: int
    watch: bool
    debug: bool
    verbose: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="minilisp",
        description="MiniLisp tokenizer",
    )
    p.add_argument("input", help="Input source file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-f",
        "--format",
        choices=FORMATS,
        default=None,
        help="Output format (default: text)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover minilisp.toml)",
    )
    p.add_argument(
        "--max-int",
        type=int,
        default=None,
        metavar="N",
        help="Largest accepted number literal (default: 2**63 - 1)",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and re-tokenize")
    p.add_argument("--debug", action="store_true", help="Dump tokens to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "minilisp.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def _positive_int(value: Any, what: str) -> int:
    """Return *value* if it is a positive integer (TOML booleans excluded)."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"invalid {what} (expected a positive integer): {value!r}")
    return value


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags. Raises ValueError on
    invalid config values.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    # Output format: config < CLI
    output_format = "text"
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_format = cfg_output.get("format")
        if cfg_format is not None:
            if cfg_format not in FORMATS:
                raise ValueError(f"invalid output format in config: {cfg_format!r}")
            output_format = cfg_format
    if args.format is not None:
        output_format = args.format

    # Lexer settings: config < CLI
    rules = DEFAULT_RULES
    max_int: int | None = INT64_MAX
    snippet_length = 20
    cfg_lexer = config.get("lexer")
    if isinstance(cfg_lexer, dict):
        cfg_rules = cfg_lexer.get("rules")
        if cfg_rules is not None:
            if not isinstance(cfg_rules, list):
                raise ValueError(f"invalid rules in config (expected a list of names): {cfg_rules!r}")
            rules = rules_by_name(str(name) for name in cfg_rules)
        cfg_max = cfg_lexer.get("max-int")
        if cfg_max is not None:
            max_int = _positive_int(cfg_max, "max-int in config")
        cfg_snippet = cfg_lexer.get("snippet-length")
        if cfg_snippet is not None:
            snippet_length = _positive_int(cfg_snippet, "snippet-length in config")
    if args.max_int is not None:
        max_int = _positive_int(args.max_int, "--max-int")

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        output_format=output_format,
        rules=rules,
        max_int=max_int,
        snippet_length=snippet_length,
        watch=args.watch,
        debug=args.debug,
        verbose=args.verbose,
    )


def tokenize_file(options: CliOptions) -> str:
    """Read and tokenize a source file, returning the rendered token listing."""
    from minilisp.debug import dump_tokens, format_token, token_to_dict
    from minilisp.lexer import Lexer

    source = options.input_file.read_text(encoding="utf-8")
    lexer = Lexer(
        options.rules,
        max_int=options.max_int,
        snippet_length=options.snippet_length,
    )
    tokens = lexer.tokenize(source, str(options.input_file))

    if options.debug:
        dump_tokens(tokens, file=sys.stderr)

    if options.output_format == "json":
        return json.dumps([token_to_dict(t) for t in tokens], indent=2) + "\n"
    return "".join(format_token(t) + "\n" for t in tokens)


def _write_output(options: CliOptions, text: str) -> None:
    if options.output_file:
        options.output_file.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, re-tokenize on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    _write_output(options, tokenize_file(options))
                    sys.stdout.flush()
                    print(f"Tokenized {options.input_file}", file=sys.stderr)
                except (OSError, UnicodeDecodeError) as exc:
                    print(f"error: {exc}", file=sys.stderr)
                except LexError as exc:
                    print(exc.format(str(options.input_file)), file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        options = resolve_options(args)
    except (ValueError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        text = tokenize_file(options)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except LexError as exc:
        logger.debug("tokenizing %s failed", options.input_file, exc_info=True)
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1

    _write_output(options, text)
    return 0

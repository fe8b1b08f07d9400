"""Command-line interface for the s-expression parser."""

from __future__ import annotations

import argparse
import io
import logging
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sexpr.errors import LexError, ParseError
from sexpr.tokenizer import TokenizerConfig

logger = logging.getLogger(__name__)

CONFIG_NAME = "sexpr.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    config: TokenizerConfig
    max_depth: int | None
    mode: str  # "print", "tokens" or "check"
    watch: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="sexpr",
        description="Parse s-expression files and print them back normalized",
    )
    p.add_argument("input", help="Input file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument(
        "--no-comments",
        dest="comments",
        action="store_false",
        default=None,
        help="Drop ';' comments",
    )
    p.add_argument(
        "--no-bytes",
        dest="bytes",
        action="store_false",
        default=None,
        help="Disable #hex# bytes literals",
    )
    p.add_argument(
        "--no-brackets",
        dest="brackets",
        action="store_false",
        default=None,
        help="Disable [ ] groups",
    )
    p.add_argument(
        "--no-braces",
        dest="braces",
        action="store_false",
        default=None,
        help="Disable { } groups",
    )
    p.add_argument(
        "--ascii",
        dest="unicode",
        action="store_false",
        default=None,
        help="Restrict identifiers to ASCII characters",
    )
    p.add_argument(
        "--max-depth",
        type=int,
        default=None,
        metavar="N",
        help="Reject groups nested deeper than N levels",
    )
    mode = p.add_mutually_exclusive_group()
    mode.add_argument("--tokens", action="store_true", help="List tokens instead of printing")
    mode.add_argument("--check", action="store_true", help="Only validate the input")
    p.add_argument("--watch", action="store_true", help="Watch for changes and reprocess")
    p.add_argument("--debug", action="store_true", help="Dump element tree to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        logger.debug("no config file at %s", path)
        return {}

    logger.debug("loading config from %s", path)
    with open(path, "rb") as f:
        return tomllib.load(f)


def _config_bool(table: dict[str, Any], key: str, default: bool) -> bool:
    value = table.get(key, default)
    if not isinstance(value, bool):
        raise argparse.ArgumentTypeError(f"config key '{key}' must be true or false")
    return value


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path, input_dir)
    except tomllib.TOMLDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid config file: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise argparse.ArgumentTypeError(f"config file is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        logger.debug("cannot read config", exc_info=True)
        raise argparse.ArgumentTypeError(f"cannot read config file: {exc}") from exc

    cfg_tok = config.get("tokenizer")
    if not isinstance(cfg_tok, dict):
        cfg_tok = {}
    defaults = TokenizerConfig()
    flags: dict[str, bool] = {}
    for key in ("comments", "bytes", "brackets", "braces", "unicode"):
        flags[key] = _config_bool(cfg_tok, key, getattr(defaults, key))
        cli_value = getattr(args, key)
        if cli_value is not None:
            flags[key] = cli_value

    max_depth: int | None = None
    cfg_parser = config.get("parser")
    if isinstance(cfg_parser, dict):
        cfg_depth = cfg_parser.get("max_depth")
        if cfg_depth is not None:
            if not isinstance(cfg_depth, int) or isinstance(cfg_depth, bool) or cfg_depth < 1:
                raise argparse.ArgumentTypeError("config key 'max_depth' must be a positive integer")
            max_depth = cfg_depth
    if args.max_depth is not None:
        if args.max_depth < 1:
            raise argparse.ArgumentTypeError("--max-depth must be a positive integer")
        max_depth = args.max_depth

    if args.tokens:
        mode = "tokens"
    elif args.check:
        mode = "check"
    else:
        mode = "print"

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        config=TokenizerConfig(**flags),
        max_depth=max_depth,
        mode=mode,
        watch=args.watch,
        debug=args.debug,
    )


def process_file(options: CliOptions) -> str:
    """Read and parse a file; return the text to write for the selected mode."""
    from sexpr.debug import dump_tokens, dump_tree
    from sexpr.parser import Parser
    from sexpr.printer import print_elements
    from sexpr.tokenizer import tokenize

    data = options.input_file.read_bytes()

    if options.mode == "tokens":
        buf = io.StringIO()
        dump_tokens(tokenize(data, options.config), file=buf)
        return buf.getvalue()

    elements = list(Parser(data, options.config, max_depth=options.max_depth))
    logger.debug("parsed %d top-level elements from %s", len(elements), options.input_file)

    if options.debug:
        dump_tree(elements, file=sys.stderr)

    if options.mode == "check":
        return ""
    return print_elements(elements) + "\n" if elements else ""


def _write(options: CliOptions, text: str) -> None:
    if options.output_file:
        options.output_file.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)
        sys.stdout.flush()


def _report(exc: LexError | ParseError, options: CliOptions) -> None:
    print(exc.format(str(options.input_file)), file=sys.stderr)


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, reprocess on each modification."""
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
                    _write(options, process_file(options))
                    print(f"Processed {options.input_file}", file=sys.stderr)
                except (LexError, ParseError) as exc:
                    _report(exc, options)
                except OSError as exc:
                    logger.debug("cannot read input", exc_info=True)
                    print(f"error: {exc}", file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        text = process_file(options)
    except (LexError, ParseError) as exc:
        _report(exc, options)
        return 1
    except OSError as exc:
        logger.debug("cannot read input", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    _write(options, text)
    return 0

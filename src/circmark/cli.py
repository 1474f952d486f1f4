# src/circmark/cli.py
"""Command-line interface: render circmark notation to SVG."""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from .config import CircmarkConfig, ConfigError, load_config
from .errors import RenderError
from .log_config import setup_logging
from .render import CircmarkRenderer

logger = logging.getLogger(__name__)


class UsageError(Exception):
    pass


class FriendlyArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = FriendlyArgumentParser(
        prog="circmark-svg",
        description="Render circmark circuit notation (e.g. '(R1+R2||R3)' or '|V1-R1|R2') as SVG.",
    )
    parser.add_argument("circmark", nargs="?", help="Circmark document; read from stdin when omitted")
    parser.add_argument("-o", "--output", help="Write SVG to this file instead of stdout")
    parser.add_argument("-c", "--config", help="YAML file with 'layout' and 'svg' settings")
    parser.add_argument("--validate", action="store_true", help="Check port alignment of the layout")
    parser.add_argument("--debug", action="store_true", help="Log every stage to stderr")
    return parser


def _read_source(argument: Optional[str]) -> str:
    if argument is not None:
        return argument
    return sys.stdin.read().rstrip("\r\n")


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        args = _build_parser().parse_args(argv)
    except UsageError as exc:
        print(f"circmark-svg: error: {exc}", file=sys.stderr)
        return 2

    setup_logging(logging.DEBUG if args.debug else logging.WARNING, stream=sys.stderr)

    try:
        config = load_config(args.config) if args.config else CircmarkConfig()
    except ConfigError as exc:
        print(exc.get_diagnostic_report(), file=sys.stderr)
        return 1
    if args.validate:
        config = CircmarkConfig(layout=replace(config.layout, validate=True), svg=config.svg)

    source = _read_source(args.circmark)
    try:
        svg = CircmarkRenderer(config).render_svg(source)
    except RenderError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    if args.output:
        output = Path(args.output)
        try:
            output.write_text(svg + "\n", encoding="utf-8")
        except OSError as exc:
            print(f"circmark-svg: error: failed to write {output}: {exc}", file=sys.stderr)
            return 1
        logger.info(f"Wrote {output}")
    else:
        sys.stdout.write(svg + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

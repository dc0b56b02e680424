"""Command line entrypoint.

Owns argument parsing, logging setup, and exit codes, then hands the resolved
override table to the encoder and the USB session.
"""

from __future__ import annotations

import argparse
import logging
import sys
from importlib import metadata
from typing import Iterable, Optional

from ..core.config import Config
from ..core.encoder import encode
from ..core.overrides import OverrideTable, resolve_overrides
from ..core.resources.layout import groups, key_names, layout
from ..core.session import SessionStatus, apply_reports
from ..core.utils.exceptions import InputError
from .startup import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PARTIAL = 1
EXIT_INPUT_ERROR = 2
EXIT_NO_DEVICE = 3


def _installed_version() -> str:
    try:
        return metadata.version("hpkeyrgb")
    except metadata.PackageNotFoundError:
        return "unknown"


def _help_epilog() -> str:
    lines = ["example: hpkeyrgb pkeys ff0000 home 00ff00", ""]
    lines.append("Default color: 'base' or 'all' (keys without a color; white if unset)")
    lines.append("")
    lines.append("Groups:")
    for name, members in sorted(groups().items()):
        lines.append(f"    {name}: {', '.join(sorted(members))}")
    lines.append("")
    lines.append("Keys:")
    for key in key_names():
        lines.append(f"    {key}")
    return "\n".join(lines)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hpkeyrgb",
        description="Set the per-key RGB backlight of the HP 03f0:1f41 keyboard.",
        usage="%(prog)s [options] [key|group color ...]",
        epilog=_help_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("pairs", nargs="*", metavar="key|group color", help="Alternating names and hex colors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_installed_version()}")
    parser.add_argument("--dump", action="store_true", help="Print the encoded reports as hex; no USB access")
    parser.add_argument("--no-config", action="store_true", help="Ignore overrides from config.json")
    parser.add_argument("--strict", action="store_true", help="Non-zero exit when the keyboard is missing or a report fails")
    parser.add_argument("--debug", action="store_true", help="Verbose logging (same as HPKEYRGB_DEBUG=1)")
    return parser


def build_overrides(pairs: Iterable[str], *, use_config: bool = True) -> OverrideTable:
    """Resolve config.json overrides, then command-line pairs on top of them."""

    cli_table = resolve_overrides(pairs)
    if not use_config:
        return cli_table

    cfg = Config()
    try:
        cfg_table = resolve_overrides(cfg.overrides_tokens())
    except InputError as exc:
        raise InputError(f"{cfg.CONFIG_FILE}: {exc}") from exc
    return cfg_table.merged(cli_table)


def format_reports(reports: Iterable[bytes]) -> str:
    return "\n".join(f"{index}: {data.hex()}" for index, data in enumerate(reports))


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_intermixed_args(None if argv is None else list(argv))
    configure_logging(debug=args.debug)

    try:
        overrides = build_overrides(args.pairs, use_config=not args.no_config)
    except InputError as exc:
        print(f"{parser.prog}: error: {exc}", file=sys.stderr)
        print(f"usage: {parser.prog} [key|group color ...]  (see --help)", file=sys.stderr)
        return EXIT_INPUT_ERROR

    reports = encode(layout(), overrides)

    if args.dump:
        print(format_reports(reports))
        return EXIT_OK

    try:
        result = apply_reports(reports)
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        return 130
    except Exception as exc:
        logger.exception("Unhandled error: %s", exc)
        return EXIT_PARTIAL

    if result.status is SessionStatus.DEVICE_NOT_FOUND:
        if not args.strict:
            return EXIT_OK
        print(f"{parser.prog}: error: {result.error}", file=sys.stderr)
        return EXIT_NO_DEVICE
    if result.status is SessionStatus.PARTIAL:
        return EXIT_PARTIAL if args.strict else EXIT_OK
    return EXIT_OK

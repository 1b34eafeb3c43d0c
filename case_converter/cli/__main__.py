from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from case_converter.config.loader import ConfigError, load_config, resolve_config_path
from case_converter.logging.init import log_summary, setup_logging
from case_converter.services.orchestrator import ProcessingError, convert_all
from case_converter.services.summary import render_summary_fields

"""CLI entrypoint.

Flow:
- Load .env (python-dotenv), then resolve and load the YAML config
- Convert each input export to ``<stem>_Testomatio<ext>`` next to it
- Print a SUMMARY line and return the exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

USAGE_HINT = "Usage: case-converter <input-file.csv> [<input-file.csv> ...]"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env so CASE_CONVERTER_CONFIG can be set per working directory."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="case-converter",
        description="Convert test-case CSV exports into the Testomat.io import format",
    )
    p.add_argument("inputs", nargs="*", help="CSV export file(s) to convert")
    p.add_argument(
        "--format",
        dest="source_format",
        choices=["auto", "flat", "grouped"],
        default=None,
        help="Source export schema (default: from config, else auto-detect)",
    )
    p.add_argument("--config", default=None, help="YAML config file")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # 空リスト [] が渡された場合に sys.argv[1:] を読まないよう None のときのみ参照
    if argv is None:
        argv = sys.argv[1:]
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.inputs:
        print("Please provide an input file path as an argument", file=sys.stderr)
        print(USAGE_HINT, file=sys.stderr)
        return EXIT_FATAL

    if args.debug:
        logger.setLevel(logging.DEBUG)
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"), override=True)
    try:
        cfg = load_config(resolve_config_path(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    paths = [Path(p) for p in args.inputs]
    try:
        result = convert_all(paths, cfg, args.source_format)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    log_summary(render_summary_fields(result))

    if result.failed_files == 0:
        return EXIT_SUCCESS_ALL
    if result.success_files == 0:
        return EXIT_FATAL
    return EXIT_PARTIAL_FAILURE


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

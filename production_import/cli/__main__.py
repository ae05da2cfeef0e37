from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from production_import.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from production_import.excel.reader import ImportSourceError
from production_import.logging.init import log_summary, set_debug, setup_logging
from production_import.services.pipeline import import_workbook
from production_import.services.summary import render_completion_lines, render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config
- Resolve input / output paths (CLI argument > environment > config)
- Run the import and print the completion summary

Exit codes: 0 on success (zero records included), 1 on any fatal error.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

ENV_CONFIG = "IMPORT_CONFIG"
ENV_OUTPUT = "IMPORT_OUTPUT"


def _load_env_file(path: Path) -> None:
    """Load .env using python-dotenv without overriding the real environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Production spreadsheet -> JSON importer")
    p.add_argument("input", nargs="?", help="Workbook to import (default: config input_path)")
    p.add_argument("--output", "-o", help="JSON file to write (default: config output_path)")
    p.add_argument("--config", "-c", help=f"YAML config file (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging and print the detected header mapping",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # [] from tests must not fall back to sys.argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    config_arg = args.config or os.getenv(ENV_CONFIG)
    try:
        if config_arg:
            cfg = load_config(Path(config_arg), required=True)
        else:
            cfg = load_config(DEFAULT_CONFIG_PATH)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    input_path = Path(args.input or cfg.input_path)
    output_path = Path(args.output or os.getenv(ENV_OUTPUT) or cfg.output_path)
    if not input_path.exists():
        logger.error(f"input file not found: {input_path}")
        return EXIT_FATAL

    logger.info(f"Importing {input_path}")
    try:
        result = import_workbook(input_path, cfg, output_path=output_path, verbose=args.debug)
    except ImportSourceError as e:
        logger.error(f"input: {e}")
        return EXIT_FATAL
    except OSError as e:
        logger.error(f"output: {e}")
        return EXIT_FATAL

    for line in render_completion_lines(result.statistics, str(output_path)):
        logger.info(line)
    if args.debug:
        logger.info("debug run: check the normalized headers listed above")

    summary_line = render_summary_line(result.statistics)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line[len("SUMMARY "):])
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

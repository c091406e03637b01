#!/usr/bin/env python3
# Path: ppo_index/main.py
"""
ppo_index - Main Entry Point

Streams a Transparency in Coverage table-of-contents (index) file and
writes the extracted results to stdout as JSON Lines.

Data Flow:
    INPUT:   index file (.json or .json.gz), heuristic tables
    PROCESS: streaming walk, per-record EIN correlation, classification
    OUTPUT:  stdout (one JSON value per line), logs on stderr

Usage:
    ppo-index index.json.gz                  # heuristics mode (default)
    ppo-index index.json.gz --unique-plans   # unique plan descriptions
    ppo-index index.json.gz --analysis       # streamed match records

Legacy spellings -uniquePlans, -heuristics and -analysis are accepted.
"""

import argparse
import sys
import time
from datetime import datetime
from typing import Optional, Sequence

from .config_loader import ConfigLoader
from .constants import (
    EXIT_FAILURE,
    EXIT_INTERRUPTED,
    EXIT_OK,
    RECORD_AUDIT,
    RECORD_DURATION,
    RECORD_END_TIME,
    RECORD_ERROR,
    RECORD_START_TIME,
    RECORD_WARNING,
    SERVICE_UNAVAILABLE_WARNING,
    TIMESTAMP_FORMAT,
)
from .core.logger import setup_ipo_logging, get_input_logger
from .errors import (
    ClassificationServiceError,
    HeuristicsLoadError,
    IndexStructureError,
)
from .loaders.heuristic_tables import load_heuristic_tables
from .output.record_writer import RecordWriter
from .process.extractor import IndexExtractor
from .process.modes import ClassificationMode, DEFAULT_MODE, get_mode_config, list_modes
from .services.llm_client import OllamaClassificationService


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog='ppo-index',
        description='Extract plan data from a price transparency index file',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Modes:\n" + "\n".join(f"  {line}" for line in list_modes()) + """

Examples:
  ppo-index 2026-10-01_index.json.gz
  ppo-index 2026-10-01_index.json.gz --unique-plans
  ppo-index 2026-10-01_index.json --analysis
        """
    )

    parser.add_argument(
        'filename',
        help='Index file to read (gzip detected from content)'
    )

    modes = parser.add_mutually_exclusive_group()
    modes.add_argument(
        '--unique-plans', '-uniquePlans',
        dest='mode',
        action='store_const',
        const=ClassificationMode.UNIQUE_PLANS,
        help='Print every distinct plan description'
    )
    modes.add_argument(
        '--heuristics', '-heuristics',
        dest='mode',
        action='store_const',
        const=ClassificationMode.HEURISTICS,
        help='Print locations whose plan is a known PPO in a known region (default)'
    )
    modes.add_argument(
        '--analysis', '-analysis',
        dest='mode',
        action='store_const',
        const=ClassificationMode.ANALYSIS,
        help='Stream match records using hints, region codes and the LLM'
    )
    parser.set_defaults(mode=DEFAULT_MODE)

    return parser


def initialize_system() -> ConfigLoader:
    """
    Initialize configuration and logging.

    Returns:
        ConfigLoader instance
    """
    config = ConfigLoader()

    log_level = 'DEBUG' if config.get('debug') else config.get('log_level', 'WARNING')

    setup_ipo_logging(
        log_dir=config.get('log_dir'),
        log_level=log_level,
        console_output=config.get('log_console', True)
    )

    return config


def probe_service(
    service: OllamaClassificationService,
    writer: RecordWriter,
    config: ConfigLoader,
    logger
) -> None:
    """
    Check the classification service before the walk starts.

    On success the model's greeting is written as an audit record. When
    the service is down a warning record is written and the run pauses
    so the user can cancel; afterwards the run continues and every
    service question counts as "no".
    """
    try:
        greeting = service.greet()
    except ClassificationServiceError as e:
        logger.warning(f"Classification service unavailable: {e}")
        writer.write_marker(RECORD_WARNING, SERVICE_UNAVAILABLE_WARNING)
        time.sleep(config.get('llm_unavailable_grace_seconds', 0))
        return

    writer.write_marker(RECORD_AUDIT, greeting)


def run(args: argparse.Namespace, config: ConfigLoader, writer: RecordWriter) -> int:
    """
    Run one extraction.

    Args:
        args: Parsed command line arguments
        config: Configuration loader
        writer: Result record writer

    Returns:
        Exit code (0 for success)

    Raises:
        IndexStructureError: If the index document is malformed
        HeuristicsLoadError: If the heuristic tables cannot be loaded
        OSError: If the index file doesn't exist or can't be opened
    """
    logger = get_input_logger('main')
    mode_config = get_mode_config(args.mode)
    logger.info(f"Mode: {args.mode.value} ({mode_config.description})")

    tables = load_heuristic_tables(config.get('heuristics_path'))

    service = None
    if mode_config.uses_classification_service:
        service = OllamaClassificationService.from_config(config)
        probe_service(service, writer, config, logger)

    match_sink = writer.write_match if mode_config.streams_results else None
    extractor = IndexExtractor(args.mode, tables, service, match_sink, config)
    summary = extractor.run_file(args.filename)

    if not mode_config.streams_results:
        writer.write_results(summary.results)

    logger.info(f"Summary: {summary.to_dict()}")
    if service is not None:
        logger.info(f"Classification service: {service.get_stats()}")

    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for ppo_index.

    Returns:
        Exit code (0 for success, 1 for a fatal error, 130 on interrupt)
    """
    args = build_parser().parse_args(argv)

    config = initialize_system()
    writer = RecordWriter()

    started = datetime.now()
    writer.write_marker(RECORD_START_TIME, started.strftime(TIMESTAMP_FORMAT))

    try:
        exit_code = run(args, config, writer)
    except (IndexStructureError, HeuristicsLoadError) as e:
        print(f"Error: {e}", file=sys.stderr)
        writer.write_marker(RECORD_ERROR, e.to_dict())
        exit_code = EXIT_FAILURE
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        writer.write_marker(RECORD_ERROR, {'message': str(e)})
        exit_code = EXIT_FAILURE
    except KeyboardInterrupt:
        print("\n[Interrupted]", file=sys.stderr)
        return EXIT_INTERRUPTED

    finished = datetime.now()
    writer.write_marker(RECORD_END_TIME, finished.strftime(TIMESTAMP_FORMAT))
    writer.write_marker(RECORD_DURATION, f"{(finished - started).total_seconds():.3f}s")

    return exit_code


if __name__ == '__main__':
    sys.exit(main())

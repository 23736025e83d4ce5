#!/usr/bin/env python3
"""
WordPress.org Handbook to Markdown - Main CLI Entry Point

Fetches every page of a WordPress.org handbook through the REST API and
writes one markdown file per page, mirroring the handbook's URL hierarchy.
Files are only rewritten when their content changed.
"""

import argparse
import logging
import sys
from typing import List, Optional

import yaml

from config_loader import ConfigLoader, get_nested
from exporters import ExportError
from fetchers import EmptyCollectionError, FetcherError
from logger import log_config, log_section, setup_logging
from orchestrator import SyncOrchestrator

__version__ = "1.0.0"


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for CLI."""
    parser = argparse.ArgumentParser(
        description="Generate markdown files from a WordPress.org handbook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # make.wordpress.org/core/handbook into ./en
  handbook-to-markdown core

  # developer.wordpress.org/plugins into ./plugins, from scratch
  handbook-to-markdown -s developer -b plugin-handbook -o plugins -r

  # Settings from a YAML file, CLI values take precedence
  handbook-to-markdown core --config handbook.yaml -v
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        'team',
        nargs='?',
        default=None,
        help='Team name, e.g. "core" for make.wordpress.org/core (default: none)'
    )

    parser.add_argument(
        '-b', '--handbook',
        type=str,
        help='Handbook name (default: "handbook")'
    )

    parser.add_argument(
        '-s', '--sub-domain',
        type=str,
        help='Subdomain, for example "developer" for developer.w.org, "w.org" for w.org (default: "make")'
    )

    parser.add_argument(
        '-o', '--output-dir',
        type=str,
        help='Directory to save files (default: en/)'
    )

    parser.add_argument(
        '-r', '--regenerate',
        action='store_true',
        help='Delete the output directory first and regenerate every file'
    )

    parser.add_argument(
        '-c', '--config',
        type=str,
        help='Path to a YAML configuration file'
    )

    parser.add_argument(
        '--report',
        type=str,
        help='Write a JSON report of the run to this path'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        help='Also write log output to this file'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Increase verbosity (-v for DEBUG)'
    )

    return parser


def run_sync(config: dict, logger: logging.Logger) -> int:
    """Execute one sync run and map its failures to exit codes."""
    try:
        orchestrator = SyncOrchestrator(config)
        report = orchestrator.run()
    except EmptyCollectionError as e:
        logger.warning(f"{e}. Check the team, handbook and subdomain settings.")
        return 1
    except FetcherError as e:
        logger.error(f"Fetch failed: {e}")
        return 1
    except ExportError as e:
        logger.error(f"Export failed: {e}")
        return 1

    logger.info(report.format_console_report())

    report_path = get_nested(config, 'export.report_path')
    if report_path:
        try:
            report.export_json(report_path, logger)
        except OSError as e:
            logger.error(f"Failed to export JSON report: {str(e)}")
            return 1

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        config = ConfigLoader.load(args.config)
        config = ConfigLoader.merge_with_args(config, args)
        ConfigLoader.validate(config)
    except FileNotFoundError as e:
        print(f"ERROR: File not found: {e}", file=sys.stderr)
        return 2
    except (ValueError, yaml.YAMLError) as e:
        print(f"ERROR: Configuration error: {e}", file=sys.stderr)
        return 2

    logger = setup_logging(
        verbosity=args.verbose,
        log_file=get_nested(config, 'logging.file'),
        level=None if args.verbose else get_nested(config, 'logging.level')
    )

    log_section("WordPress.org Handbook to Markdown")
    logger.debug(f"Version: {__version__}")
    log_config(config)

    try:
        return run_sync(config, logger)
    except KeyboardInterrupt:
        logger.error("Sync interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())

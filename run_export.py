#!/usr/bin/env python3
"""
Command-line entry point: annotated C++ sources to editor completion files.

Parses every source file below the input directory, reports documentation
warnings and writes the completion file for the chosen editor.

Usage:
    python run_export.py --input moai/src --output out/zerobrane
    python run_export.py --input moai/src --output out/sublime --format sublime
    python run_export.py --config export.yml --report-dir output/run_reports
"""

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from core.run_artifacts import build_warning_report, write_run_report
from core.run_config import (
    ConfigValidationError,
    ExportConfig,
    load_export_config,
    resolve_strict_mode,
)
from core.structured_logging import configure_structured_logging, phase_scope, set_run_id
from exporters import EXPORTERS, get_exporter
from extraction.config import EXCLUDED_DIRS, SOURCE_EXTENSIONS
from extraction.diagnostics import WarningList, WarningType
from extraction.extractor import parse_source_tree

logger = logging.getLogger(__name__)

# Warning categories that fail the run in strict mode
STRICT_CATEGORIES = (WarningType.MISSING_ANNOTATION, WarningType.UNEXPECTED_ANNOTATION)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Create code completion files from annotated C++ sources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_export.py --input moai/src --output out\n"
            "  python run_export.py --input moai/src --output out --format sublime\n"
        ),
    )
    parser.add_argument(
        "-i",
        "--input",
        help="The source directory to scan for documentation.",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="The directory where the completion file will be created.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=sorted(EXPORTERS),
        type=str.lower,
        help="The export format. Default: zerobrane",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Optional YAML/JSON run configuration. Command-line flags take precedence.",
    )
    parser.add_argument(
        "--header",
        help="Header text placed as a comment at the top of the completion file.",
    )
    parser.add_argument(
        "--report-dir",
        help="If set, write a JSON warning report into this directory.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Exit with status 1 when undocumented or unknown annotations are found.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Use debug-level logging.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not log individual warnings. Supersedes verbose mode.",
    )
    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> ExportConfig:
    """Merge the optional config file with command-line overrides."""
    config = load_export_config(args.config) if args.config else ExportConfig()
    config = config.with_overrides(
        input_dir=args.input,
        output_dir=args.output,
        format=args.format,
        header=args.header,
        report_dir=args.report_dir,
        strict=args.strict,
    )
    if not config.strict and resolve_strict_mode():
        config = config.with_overrides(strict=True)
    return config.validate()


def report_warnings(warnings: WarningList, quiet: bool) -> None:
    """Log warning totals per category and, unless quiet, each warning."""
    if not quiet:
        for warning in warnings:
            logger.warning("%s", warning)
    for category, count in sorted(warnings.counts().items()):
        logger.info("%-28s %d", category, count)
    logger.info("Total warnings: %d", len(warnings))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    load_dotenv()
    args = parse_args(argv)

    level = logging.INFO
    if args.quiet:
        level = logging.WARNING
    elif args.verbose:
        level = logging.DEBUG
    configure_structured_logging(level)
    run_id = set_run_id()

    try:
        config = resolve_config(args)
        exporter = get_exporter(config.format)

        with phase_scope("parse"):
            result = parse_source_tree(
                config.input_dir,
                extensions=config.extensions or SOURCE_EXTENSIONS,
                excluded_dirs=config.excluded_dirs or EXCLUDED_DIRS,
            )
            report_warnings(result.warnings, quiet=args.quiet)
            logger.info(
                "Parsed %d types, %d scriptable",
                len(result.registry),
                len(result.registry.scriptable_types()),
            )

        with phase_scope("export"):
            output_path = exporter.export(
                result.registry.snapshot(),
                config.header,
                config.output_dir,
            )

        if config.report_dir:
            report = build_warning_report(
                result.warnings, result.stats.to_dict(), output_path=str(output_path)
            )
            report_path = write_run_report(report, run_id, config.report_dir)
            logger.info("Wrote warning report to %s", report_path)

    except FileNotFoundError as e:
        logger.error("File error: %s", e)
        return 1
    except (ConfigValidationError, ValueError) as e:
        logger.error("Configuration error: %s", e)
        return 1
    except OSError as e:
        logger.error("Export failed: %s", e, exc_info=True)
        return 1

    if config.strict:
        blocking = [w for w in result.warnings if w.category in STRICT_CATEGORIES]
        if blocking:
            logger.error("Strict mode: %d blocking warnings", len(blocking))
            return 1

    logger.info("Export finished successfully: %s", output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())

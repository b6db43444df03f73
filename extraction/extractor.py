"""
High-level orchestrator for documentation extraction.

This module provides the entry points for parsing single files or entire
source trees into a shared type registry.
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from codegraph.models import Type
from codegraph.registry import TypeRegistry
from core.positions import FilePosition, Position
from core.structured_logging import source_scope
from extraction.config import BUILTIN_TYPE_NAMES, EXCLUDED_DIRS, SOURCE_EXTENSIONS
from extraction.diagnostics import ParseWarning, WarningList, WarningType
from extraction.parser import parse_source_file

logger = logging.getLogger(__name__)


class ParseStats:
    """Statistics for a parsing run."""

    def __init__(self):
        self.files_processed = 0
        self.files_failed = 0
        self.blocks_parsed = 0
        self.warnings = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "files_processed": self.files_processed,
            "files_failed": self.files_failed,
            "blocks_parsed": self.blocks_parsed,
            "warnings": self.warnings,
        }

    def __str__(self) -> str:
        return (
            f"ParseStats(processed={self.files_processed}, "
            f"failed={self.files_failed}, blocks={self.blocks_parsed}, "
            f"warnings={self.warnings})"
        )


@dataclass
class ParseResult:
    """Everything produced by parsing a source tree."""

    registry: TypeRegistry
    warnings: WarningList
    stats: ParseStats


def create_registry() -> TypeRegistry:
    """Create a registry pre-seeded with the scripting primitives."""
    return TypeRegistry(builtin_names=BUILTIN_TYPE_NAMES)


def discover_source_files(
    directory: str,
    extensions: Iterable[str] = SOURCE_EXTENSIONS,
    excluded_dirs: Iterable[str] = EXCLUDED_DIRS,
) -> List[str]:
    """Recursively discover all source files in a directory.

    Args:
        directory: Root directory to search.
        extensions: File extensions to include (with leading dot).
        excluded_dirs: Directory names never descended into.

    Returns:
        Sorted list of absolute paths.

    Example:
        >>> files = discover_source_files("/path/to/moai/src")
        >>> len(files)
        412
    """
    extensions = {ext.lower() for ext in extensions}
    excluded = set(excluded_dirs)
    directory = os.path.abspath(directory)

    logger.info("Discovering source files in %s", directory)

    source_files = []
    for root, dirs, files in os.walk(directory):
        dirs[:] = [d for d in dirs if not d.startswith(".") and d not in excluded]
        for file in files:
            if os.path.splitext(file)[1].lower() in extensions:
                source_files.append(os.path.join(root, file))

    logger.info("Found %d source files", len(source_files))
    return sorted(source_files)


def _file_position(file_path: str, root: Optional[str]) -> FilePosition:
    if root is None:
        return FilePosition(os.path.basename(file_path))
    try:
        relative = os.path.relpath(file_path, root)
    except ValueError:
        logger.warning(
            "Cannot compute relative path for %s from %s. Using absolute path.",
            file_path,
            root,
        )
        relative = file_path
    return FilePosition(relative.replace(os.sep, "/"))


def parse_file(
    file_path: str,
    registry: TypeRegistry,
    warnings: WarningList,
    root: Optional[str] = None,
) -> int:
    """Read one source file and parse its documentation.

    Args:
        file_path: Path to the source file.
        registry: Registry updated in place.
        warnings: Collector appended to in place.
        root: Directory file positions are made relative to. If None, the
            file's base name is used.

    Returns:
        Number of documentation blocks processed.

    Raises:
        FileNotFoundError: If the file does not exist.
        OSError: If the file cannot be read.
    """
    file_path = os.path.abspath(file_path)
    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    with open(file_path, "r", encoding="utf-8", errors="replace") as f:
        code = f.read()

    file_position = _file_position(file_path, root)
    with source_scope(file_position.path):
        return parse_source_file(code, file_position, registry, warnings)


def _first_references(registry: TypeRegistry) -> Dict[str, Position]:
    references: Dict[str, Position] = {}

    def refer(target: Optional[Type], position: Optional[Position]) -> None:
        if target is None or position is None:
            return
        if target.is_builtin or target.is_documented:
            return
        references.setdefault(target.name, position)

    for type_ in registry:
        for base_type in type_.base_types:
            refer(base_type, type_.position)
        for method in type_.methods:
            for overload in method.overloads:
                refer(type_, overload.position)
                for parameter in overload.parameters:
                    refer(parameter.type, overload.position)
        for field in type_.fields:
            refer(field.type, type_.position)
    return references


def warn_for_undocumented_types(
    registry: TypeRegistry, warnings: WarningList
) -> List[ParseWarning]:
    """Report each referenced, non-builtin type that was never documented.

    One ``MISSING_TYPE_DOCUMENTATION`` warning is added per type, positioned
    at the first documented entity referring to it. Must run after every
    file has been parsed.
    """
    added = []
    for name, position in _first_references(registry).items():
        added.append(
            warnings.add(
                position,
                WarningType.MISSING_TYPE_DOCUMENTATION,
                "Type '%s' is referenced but not documented.",
                name,
            )
        )
    return added


def parse_source_tree(
    directory: str,
    registry: Optional[TypeRegistry] = None,
    warnings: Optional[WarningList] = None,
    extensions: Iterable[str] = SOURCE_EXTENSIONS,
    excluded_dirs: Iterable[str] = EXCLUDED_DIRS,
    continue_on_error: bool = True,
    check_types: bool = True,
) -> ParseResult:
    """Parse every source file below ``directory`` into one registry.

    Args:
        directory: Root directory to process; file positions are relative to it.
        registry: Registry to extend. A fresh one with builtins if None.
        warnings: Collector to extend. A fresh one if None.
        extensions: File extensions to include.
        excluded_dirs: Directory names to skip.
        continue_on_error: If True, unreadable files are logged and counted.
            If False, the first read error is raised.
        check_types: Whether to report referenced but undocumented types
            once all files are parsed.

    Returns:
        A ``ParseResult`` holding the registry, warnings and statistics.

    Raises:
        FileNotFoundError: If directory does not exist.

    Example:
        >>> result = parse_source_tree("moai/src")
        >>> print(result.stats)
    """
    directory = os.path.abspath(directory)
    if not os.path.isdir(directory):
        raise FileNotFoundError(f"Directory not found: {directory}")

    registry = registry if registry is not None else create_registry()
    warnings = warnings if warnings is not None else WarningList()
    stats = ParseStats()

    source_files = discover_source_files(directory, extensions, excluded_dirs)
    if not source_files:
        logger.warning("No source files found in %s", directory)

    for file_path in source_files:
        try:
            stats.blocks_parsed += parse_file(file_path, registry, warnings, root=directory)
            stats.files_processed += 1
        except OSError as e:
            logger.error("Cannot read %s: %s", file_path, e)
            stats.files_failed += 1
            if not continue_on_error:
                raise

    if check_types:
        warn_for_undocumented_types(registry, warnings)

    stats.warnings = len(warnings)
    logger.info("Parsing complete: %s", stats)
    return ParseResult(registry=registry, warnings=warnings, stats=stats)

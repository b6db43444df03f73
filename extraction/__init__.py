"""
Documentation extraction engine.

Regex-driven scanner for ``/** @... */`` documentation blocks in C++ sources.
Extracts classes, methods and their annotations into a type registry.
"""

from extraction.diagnostics import ParseWarning, WarningList, WarningType
from extraction.annotations import Annotation, UnknownAnnotation, parse_annotation
from extraction.blocks import DocumentationBlock, iter_documentation_blocks
from extraction.assembler import assemble_method, assemble_type
from extraction.undocumented import warn_for_undocumented_methods
from extraction.parser import parse_source_file
from extraction.extractor import (
    ParseResult,
    ParseStats,
    create_registry,
    discover_source_files,
    parse_file,
    parse_source_tree,
    warn_for_undocumented_types,
)

__all__ = [
    # Diagnostics
    "ParseWarning",
    "WarningList",
    "WarningType",
    # Low-level parsing
    "Annotation",
    "UnknownAnnotation",
    "parse_annotation",
    "DocumentationBlock",
    "iter_documentation_blocks",
    # Mid-level assembly
    "assemble_method",
    "assemble_type",
    "warn_for_undocumented_methods",
    "parse_source_file",
    # High-level orchestration
    "ParseResult",
    "ParseStats",
    "create_registry",
    "discover_source_files",
    "parse_file",
    "parse_source_tree",
    "warn_for_undocumented_types",
]

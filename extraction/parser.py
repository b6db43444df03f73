"""
Per-file documentation parsing.

Wires block extraction, annotation parsing, assembly and the
undocumented-method scan together for the text of one source file.
"""

import logging
from typing import List

from codegraph.registry import TypeRegistry
from core.positions import FilePosition
from extraction.annotations import Annotation, UnknownAnnotation, is_usable, parse_annotation
from extraction.assembler import assemble_method, assemble_type
from extraction.blocks import DocumentationBlock, iter_documentation_blocks
from extraction.diagnostics import WarningList, WarningType
from extraction.undocumented import warn_for_undocumented_methods

logger = logging.getLogger(__name__)


def parse_block_annotations(
    block: DocumentationBlock, warnings: WarningList
) -> List[Annotation]:
    """Parse a block's raw annotations and drop the unusable ones.

    Unknown commands are reported as ``UNEXPECTED_ANNOTATION``; malformed
    known commands have already been reported by their parser.
    """
    annotations = [
        parse_annotation(raw, block.position, warnings) for raw in block.raw_annotations
    ]
    for annotation in annotations:
        if isinstance(annotation, UnknownAnnotation):
            warnings.add(
                block.position,
                WarningType.UNEXPECTED_ANNOTATION,
                "Unknown annotation command '%s'.",
                annotation.command,
            )
    return [annotation for annotation in annotations if is_usable(annotation)]


def parse_source_file(
    code: str,
    file_position: FilePosition,
    registry: TypeRegistry,
    warnings: WarningList,
) -> int:
    """Extract all documentation from one file's text into ``registry``.

    Never raises for malformed documentation; every anomaly becomes a
    warning in ``warnings``.

    Args:
        code: Full text of the source file.
        file_position: Position identifying the file in diagnostics.
        registry: Type registry updated in place.
        warnings: Warning collector appended to in place.

    Returns:
        Number of documentation blocks processed.

    Example:
        >>> registry, warnings = TypeRegistry(), WarningList()
        >>> parse_source_file(code, FilePosition("MOAIProp.cpp"), registry, warnings)
        12
    """
    block_count = 0
    for block in iter_documentation_blocks(code, file_position):
        annotations = parse_block_annotations(block, warnings)
        if block.is_method:
            assemble_method(block, annotations, registry, warnings)
        else:
            assemble_type(block, annotations, registry, warnings)
        block_count += 1

    warn_for_undocumented_methods(code, file_position, warnings)
    logger.debug("Parsed %d documentation blocks from %s", block_count, file_position)
    return block_count

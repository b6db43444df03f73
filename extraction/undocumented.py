"""
Detection of script-bound methods without documentation.

Runs independently of block extraction so that methods with no
documentation comment at all are still reported.
"""

import logging
import re
from typing import List

from core.positions import FilePosition, MethodPosition
from extraction.diagnostics import ParseWarning, WarningList, WarningType

logger = logging.getLogger(__name__)

# Script-bound methods return int and have a leading underscore
_SCRIPT_METHOD_RE = re.compile(
    r"\bint\s+(?P<class_name>[A-Za-z0-9_]+)\s*::\s*(?P<method_name>_[A-Za-z0-9_]*)\s*\("
)

_COMMENT_END = "*/"


def _is_documented(code: str, start: int) -> bool:
    index = start - 1
    while index >= 0 and code[index].isspace():
        index -= 1
    if index < len(_COMMENT_END) - 1:
        return False
    return code.startswith(_COMMENT_END, index - len(_COMMENT_END) + 1)


def warn_for_undocumented_methods(
    code: str, file_position: FilePosition, warnings: WarningList
) -> List[ParseWarning]:
    """Record a ``MISSING_ANNOTATION`` warning per undocumented bound method.

    A method counts as documented when the last non-whitespace text before
    its definition closes a block comment.

    Args:
        code: Full text of one source file.
        file_position: Position of that file.
        warnings: Collector to append to.

    Returns:
        The warnings added by this call, in source order.
    """
    added = []
    for match in _SCRIPT_METHOD_RE.finditer(code):
        if _is_documented(code, match.start()):
            continue
        position = MethodPosition.of(
            file_position, match.group("class_name"), match.group("method_name")
        )
        added.append(
            warnings.add(position, WarningType.MISSING_ANNOTATION, "Missing method documentation.")
        )
    if added:
        logger.debug("%d undocumented bound methods in %s", len(added), file_position)
    return added

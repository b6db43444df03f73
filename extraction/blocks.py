"""
Documentation block extraction.

Scans raw source text for ``/** @... */`` comments that sit directly on top
of either a class/struct header or a ``Type::method(...)`` definition. Only
text matching is performed; no C++ grammar is involved.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from core.positions import FilePosition, MethodPosition, TypePosition
from extraction.config import ACCESS_SPECIFIERS

logger = logging.getLogger(__name__)

_DOCUMENTATION_RE = re.compile(
    r"""
    /\*\*\s*
    # Documentation, never running past the end of its own comment
    (?P<annotations>@(?:(?!\*/).)*?)
    \*/\s*
    (?:
        # Class definition
        (?:class|struct)\s+
        (?P<class_name>[A-Za-z0-9_]+)\s*
        (?:
            :\s*(?P<base_list>[A-Za-z0-9_:<,\s>]+?)\s*\{
        )?
        |
        # Method definition
        (?P<return_type>(?:[A-Za-z_][A-Za-z0-9_:<>]*[\s*&]+)+?)
        (?P<owner_name>[A-Za-z0-9_]+)\s*::\s*(?P<method_name>[A-Za-z0-9_]+)\s*
        \([^)]*\)\s*
        # Body ends at a column-0 brace, a dash separator or the next doc comment
        (?:
            \{(?P<method_body>.*?)(?:^\}[ \t]*$|^[ \t]*//-{3,}|(?=^[ \t]*/\*\*))
        )?
    )
    """,
    re.VERBOSE | re.MULTILINE | re.DOTALL,
)

# Leading "*" gutter of continuation lines inside a block comment
_GUTTER_RE = re.compile(r"^[ \t]*\*(?!/)[ \t]?", re.MULTILINE)

# An annotation starts at an "@" that is not glued to a preceding word
_ANNOTATION_START_RE = re.compile(r"(?<!\S)@")


@dataclass(frozen=True)
class DocumentationBlock:
    """A documentation comment and the definition it is attached to.

    Attributes:
        position: ``TypePosition`` for class/struct headers,
            ``MethodPosition`` for method definitions.
        raw_annotations: Annotation texts in source order, each starting
            with ``@``.
        base_type_names: Non-template base types from the class header.
        method_body: Verbatim body text of a method definition, or None.
        line: 1-indexed line of the opening ``/**``.
    """

    position: Union[TypePosition, MethodPosition]
    raw_annotations: Tuple[str, ...]
    base_type_names: Tuple[str, ...] = ()
    method_body: Optional[str] = None
    line: int = 0

    @property
    def is_method(self) -> bool:
        return isinstance(self.position, MethodPosition)

    @property
    def type_name(self) -> str:
        return self.position.type_name


def split_annotations(documentation: str) -> List[str]:
    """Split the inside of a documentation comment into raw annotations.

    Args:
        documentation: Comment text starting at the first ``@``.

    Returns:
        One string per annotation, gutters removed and trailing whitespace
        stripped.
    """
    text = _GUTTER_RE.sub("", documentation)
    starts = [m.start() for m in _ANNOTATION_START_RE.finditer(text)]
    annotations = []
    for index, start in enumerate(starts):
        end = starts[index + 1] if index + 1 < len(starts) else len(text)
        annotation = text[start:end].rstrip()
        if annotation:
            annotations.append(annotation)
    return annotations


def split_base_list(base_list: str) -> List[str]:
    """Split a class header's base list into base type names.

    Commas nested inside template arguments do not split. Access specifiers
    are removed and template instantiations (entries containing ``<``) are
    discarded.

    Example:
        >>> split_base_list("public MOAINode, public Holder < A, B >")
        ['MOAINode']
    """
    entries: List[str] = []
    current: List[str] = []
    depth = 0
    for char in base_list:
        if char == "<":
            depth += 1
        elif char == ">" and depth > 0:
            depth -= 1
        if char == "," and depth == 0:
            entries.append("".join(current))
            current = []
        else:
            current.append(char)
    entries.append("".join(current))

    names = []
    for entry in entries:
        tokens = entry.split()
        while tokens and tokens[0] in ACCESS_SPECIFIERS:
            tokens.pop(0)
        name = " ".join(tokens)
        if not name or "<" in name:
            continue
        names.append(name)
    return names


def iter_documentation_blocks(
    code: str, file_position: FilePosition
) -> Iterator[DocumentationBlock]:
    """Lazily yield every attached documentation block in ``code``.

    The class/struct form is tried before the method form. Comments that are
    not immediately followed by one of the two headers are skipped.

    Args:
        code: Full text of one source file.
        file_position: Position of that file, used to build block positions.

    Yields:
        ``DocumentationBlock`` instances in source order.
    """
    for match in _DOCUMENTATION_RE.finditer(code):
        line = code.count("\n", 0, match.start()) + 1
        raw_annotations = tuple(split_annotations(match.group("annotations")))

        class_name = match.group("class_name")
        if class_name is not None:
            base_list = match.group("base_list")
            yield DocumentationBlock(
                position=TypePosition(file_position, class_name),
                raw_annotations=raw_annotations,
                base_type_names=tuple(split_base_list(base_list)) if base_list else (),
                line=line,
            )
            continue

        position = MethodPosition.of(
            file_position, match.group("owner_name"), match.group("method_name")
        )
        logger.debug("Found method documentation %s at line %d", position, line)
        yield DocumentationBlock(
            position=position,
            raw_annotations=raw_annotations,
            method_body=match.group("method_body"),
            line=line,
        )

"""
Common exporter interface.

Exporters render the finished type graph into an editor-specific
code-completion file.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from codegraph.models import Field, Method, Overload, Parameter, Type

logger = logging.getLogger(__name__)


class ApiExporter(ABC):
    """Renders scriptable types into one completion file."""

    #: Name of the file written into the output directory
    file_name: str = ""

    def __init__(self, file_name: Optional[str] = None):
        if file_name:
            self.file_name = file_name

    def export(self, types: Iterable[Type], header: str, output_dir: str) -> Path:
        """Write the completion file for ``types`` into ``output_dir``.

        Only scriptable types are rendered; they are sorted by name.

        Args:
            types: Types to export, typically ``registry.snapshot()``.
            header: Free text placed as a comment at the top of the file.
            output_dir: Target directory, created if missing.

        Returns:
            Path of the written file.
        """
        classes = sorted((t for t in types if t.is_scriptable), key=lambda t: t.name)
        target_dir = Path(output_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / self.file_name

        content = self.render(classes, header)
        target.write_text(content, encoding="utf-8")
        logger.info("Exported %d classes to %s", len(classes), target)
        return target

    @abstractmethod
    def render(self, classes: Sequence[Type], header: str) -> str:
        """Render sorted scriptable ``classes`` into the file content."""


def header_lines(header: str) -> List[str]:
    return header.splitlines() if header else []


def sorted_fields(type_: Type) -> List[Field]:
    return sorted(
        (m for m in type_.all_members if isinstance(m, Field)), key=lambda f: f.name
    )


def sorted_methods(type_: Type) -> List[Method]:
    return sorted(
        (m for m in type_.all_members if isinstance(m, Method)), key=lambda m: m.name
    )


def call_parameters(overload: Overload) -> List[Parameter]:
    """In-parameters as seen by a caller, i.e. without the leading ``self``."""
    parameters = overload.in_parameters
    if not overload.is_static:
        return parameters[1:]
    return parameters

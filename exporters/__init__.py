"""
Completion file exporters.

Each exporter consumes the scriptable types of a finished registry plus a
header string and writes one editor-specific file.
"""

from typing import Dict, Type as ClassType

from exporters.base import ApiExporter
from exporters.sublime import SublimeTextExporter
from exporters.zerobrane import ZeroBraneExporter

EXPORTERS: Dict[str, ClassType[ApiExporter]] = {
    "zerobrane": ZeroBraneExporter,
    "sublime": SublimeTextExporter,
}


def get_exporter(name: str) -> ApiExporter:
    """Create the exporter registered under ``name`` (case-insensitive).

    Raises:
        ValueError: If no exporter has that name.
    """
    key = name.strip().lower()
    exporter_class = EXPORTERS.get(key)
    if exporter_class is None:
        raise ValueError(
            f"Unknown export format '{name}'. Expected one of: {', '.join(sorted(EXPORTERS))}"
        )
    return exporter_class()


__all__ = [
    "ApiExporter",
    "EXPORTERS",
    "SublimeTextExporter",
    "ZeroBraneExporter",
    "get_exporter",
]

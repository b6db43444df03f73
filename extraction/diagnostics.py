"""
Warning collection for the documentation pass.

Anomalies in documentation never abort parsing; they are appended here and
reported by the caller once every file has been processed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Tuple

from core.positions import Position


class WarningType(Enum):
    """Categories of documentation problems."""

    UNEXPECTED_ANNOTATION = "UnexpectedAnnotation"
    MISSING_ANNOTATION = "MissingAnnotation"
    UNEXPECTED_VALUE = "UnexpectedValue"
    MISSING_TYPE_DOCUMENTATION = "MissingTypeDocumentation"


@dataclass(frozen=True)
class ParseWarning:
    """A single formatted warning."""

    position: Position
    category: WarningType
    message: str

    def to_dict(self) -> dict:
        return {
            "position": str(self.position),
            "category": self.category.value,
            "message": self.message,
        }

    def __str__(self) -> str:
        return f"{self.position}: {self.category.value}: {self.message}"


def _format_message(template: str, args: tuple) -> str:
    if not args:
        return template
    try:
        return template % args
    except (TypeError, ValueError, KeyError):
        return f"{template} {args!r}"


class WarningList:
    """Append-only list of warnings in discovery order."""

    def __init__(self):
        self._warnings: List[ParseWarning] = []

    def add(self, position: Position, category: WarningType, template: str, *args) -> ParseWarning:
        """Format ``template % args`` and append the resulting warning."""
        warning = ParseWarning(position, category, _format_message(template, args))
        self._warnings.append(warning)
        return warning

    @property
    def all(self) -> Tuple[ParseWarning, ...]:
        return tuple(self._warnings)

    def by_category(self, category: WarningType) -> List[ParseWarning]:
        return [w for w in self._warnings if w.category is category]

    def counts(self) -> dict:
        """Number of warnings per category value, for reporting."""
        result: dict = {}
        for warning in self._warnings:
            result[warning.category.value] = result.get(warning.category.value, 0) + 1
        return result

    def __iter__(self) -> Iterator[ParseWarning]:
        return iter(tuple(self._warnings))

    def __len__(self) -> int:
        return len(self._warnings)

    def __repr__(self) -> str:
        return f"WarningList(warnings={len(self._warnings)})"

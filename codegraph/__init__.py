"""
Type graph built from extracted documentation.

Holds documented types, their members and overloads, and the registry that
resolves type names to records.
"""

from codegraph.models import (
    Field,
    Member,
    Method,
    Overload,
    Parameter,
    ParameterDirection,
    Type,
)
from codegraph.registry import TypeRegistry

__all__ = [
    "Field",
    "Member",
    "Method",
    "Overload",
    "Parameter",
    "ParameterDirection",
    "Type",
    "TypeRegistry",
]

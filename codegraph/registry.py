"""
Name-keyed registry of documented types.

References may precede definitions, so lookups go through
``get_or_create``; a type that is only ever referenced stays in the registry
as an undocumented forward reference.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, Optional, Tuple

from codegraph.models import Type

logger = logging.getLogger(__name__)


class TypeRegistry:
    """Mapping from type name to its single mutable ``Type`` record."""

    def __init__(self, builtin_names: Iterable[str] = ()):
        self._types: Dict[str, Type] = {}
        for name in builtin_names:
            self._types[name] = Type(name=name, is_builtin=True)

    def get_or_create(self, name: str) -> Type:
        """Return the type named ``name``, registering an empty one if needed."""
        existing = self._types.get(name)
        if existing is not None:
            return existing
        created = Type(name=name)
        self._types[name] = created
        logger.debug("Registered forward reference %s", name)
        return created

    def get(self, name: str) -> Optional[Type]:
        return self._types.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[Type]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)

    @property
    def all_types(self) -> Tuple[Type, ...]:
        return tuple(self._types.values())

    def scriptable_types(self) -> Tuple[Type, ...]:
        """Types flagged scriptable, in registration order."""
        return tuple(t for t in self._types.values() if t.is_scriptable)

    def snapshot(self) -> Tuple[Type, ...]:
        """Read-only view handed to exporters once parsing is complete."""
        return self.all_types

    def __repr__(self) -> str:
        return f"TypeRegistry(types={len(self._types)})"

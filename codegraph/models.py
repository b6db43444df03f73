"""
Data models for the documented type graph.

A ``Type`` is created by name the first time anything refers to it and is
filled in once its own documentation block is parsed. Until then it is a
forward reference: it has no defining position and no members.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple, Union

from core.positions import MethodPosition, TypePosition


class ParameterDirection(Enum):
    """Whether a parameter is passed into or returned from a method."""

    IN = "in"
    OUT = "out"


@dataclass
class Parameter:
    """A single in- or out-parameter of an overload.

    Attributes:
        name: Parameter name; out-parameters may be unnamed (empty string).
        direction: ``ParameterDirection.IN`` or ``ParameterDirection.OUT``.
        is_optional: Whether callers may omit the parameter.
        type: Declared type, or None when the annotation gave no type.
        description: Free text following the declaration.
    """

    name: str
    direction: ParameterDirection
    is_optional: bool = False
    type: Optional["Type"] = None
    description: str = ""

    @property
    def type_name(self) -> Optional[str]:
        return self.type.name if self.type is not None else None


@dataclass
class Overload:
    """One call signature of a method."""

    parameters: List[Parameter] = field(default_factory=list)
    is_static: bool = True
    description: str = ""
    position: Optional[MethodPosition] = None

    @property
    def in_parameters(self) -> List[Parameter]:
        return [p for p in self.parameters if p.direction is ParameterDirection.IN]

    @property
    def out_parameters(self) -> List[Parameter]:
        return [p for p in self.parameters if p.direction is ParameterDirection.OUT]


@dataclass
class Field:
    """A named value exposed on a type (constant, flag, attribute, field)."""

    name: str
    type: Optional["Type"] = None
    kind: str = "field"
    description: str = ""


@dataclass
class Method:
    """A method with its ordered overload set."""

    name: str
    is_scriptable: bool = False
    description: str = ""
    overloads: List[Overload] = field(default_factory=list)

    def add_overload(self, overload: Overload) -> Overload:
        self.overloads.append(overload)
        if not self.description and overload.description:
            self.description = overload.description
        return overload


Member = Union[Field, Method]


@dataclass(eq=False)
class Type:
    """A documented (or merely referenced) type.

    Types compare by identity; the registry guarantees that each name maps to
    exactly one ``Type`` instance.

    Attributes:
        name: Case-sensitive type name.
        position: Where the type was last documented, or None for forward
            references.
        description: Text from the first ``@text`` annotation.
        is_scriptable: Whether the type is exposed to the scripting layer.
        is_builtin: Whether the type is a pre-registered scripting primitive.
        base_types: Ordered, de-duplicated base types.
        field_map: Fields keyed by name, in attachment order.
        method_map: Methods keyed by name, in attachment order. Fields and
            methods live in separate name spaces, so a clash between the two
            never discards either.
    """

    name: str
    position: Optional[TypePosition] = None
    description: str = ""
    is_scriptable: bool = False
    is_builtin: bool = False
    base_types: List["Type"] = field(default_factory=list)
    field_map: Dict[str, Field] = field(default_factory=dict)
    method_map: Dict[str, Method] = field(default_factory=dict)

    @property
    def is_documented(self) -> bool:
        return self.position is not None

    def add_base_type(self, base_type: "Type") -> bool:
        """Add ``base_type`` unless it is already present or is ``self``."""
        if base_type is self or any(b is base_type for b in self.base_types):
            return False
        self.base_types.append(base_type)
        return True

    @property
    def fields(self) -> List[Field]:
        return list(self.field_map.values())

    @property
    def methods(self) -> List[Method]:
        return list(self.method_map.values())

    @property
    def members(self) -> List[Member]:
        """Own fields followed by own methods."""
        return [*self.field_map.values(), *self.method_map.values()]

    @property
    def all_members(self) -> List[Member]:
        """Own members followed by inherited ones.

        An inherited member is hidden by a nearer member of the same kind
        and name.
        """
        seen: Dict[Tuple[type, str], Member] = {}
        for member in self._iter_members(set()):
            seen.setdefault((type(member), member.name), member)
        return list(seen.values())

    def _iter_members(self, visited: set) -> Iterator[Member]:
        if id(self) in visited:
            return
        visited.add(id(self))
        yield from self.members
        for base_type in self.base_types:
            yield from base_type._iter_members(visited)

    def __repr__(self) -> str:
        return (
            f"Type(name={self.name!r}, documented={self.is_documented}, "
            f"scriptable={self.is_scriptable}, "
            f"bases={[b.name for b in self.base_types]}, "
            f"fields={list(self.field_map)}, methods={list(self.method_map)})"
        )

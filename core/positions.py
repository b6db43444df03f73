"""Source positions attached to documentation facts and warnings.

Positions are purely descriptive. They are only used to tell the user where
a fact or a problem came from and never take part in entity identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class FilePosition:
    """A source file, identified by its path relative to the scanned root."""

    path: str

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True)
class TypePosition:
    """A type documented (or referenced) inside a file."""

    file_position: FilePosition
    type_name: str

    @property
    def path(self) -> str:
        return self.file_position.path

    def __str__(self) -> str:
        return f"{self.file_position}: {self.type_name}"


@dataclass(frozen=True)
class MethodPosition:
    """A method of a type inside a file."""

    type_position: TypePosition
    method_name: str

    @classmethod
    def of(cls, file_position: FilePosition, type_name: str, method_name: str) -> "MethodPosition":
        return cls(TypePosition(file_position, type_name), method_name)

    @property
    def file_position(self) -> FilePosition:
        return self.type_position.file_position

    @property
    def type_name(self) -> str:
        return self.type_position.type_name

    @property
    def path(self) -> str:
        return self.type_position.path

    def __str__(self) -> str:
        return f"{self.type_position}.{self.method_name}"


Position = Union[FilePosition, TypePosition, MethodPosition]


"""
Configuration constants for documentation extraction.

Defines the annotation vocabulary, the scripting primitives that are always
known, and the file discovery defaults.
"""

from typing import Dict, FrozenSet, Optional, Set, Tuple

# Annotation commands, grouped by what they describe
NAME_COMMANDS: FrozenSet[str] = frozenset({"name", "lua"})
TEXT_COMMANDS: FrozenSet[str] = frozenset({"text"})
SCRIPTABLE_COMMANDS: FrozenSet[str] = frozenset({"scriptable"})
BASE_TYPE_COMMANDS: FrozenSet[str] = frozenset({"base"})
IN_PARAMETER_COMMANDS: FrozenSet[str] = frozenset({"in", "opt", "param"})
OUT_PARAMETER_COMMANDS: FrozenSet[str] = frozenset({"out", "return"})

# Field-like commands; None means the annotation declares its own type
FIELD_COMMANDS: Dict[str, Optional[str]] = {
    "field": None,
    "const": "number",
    "flag": "number",
    "attr": "number",
}

# Access specifiers that may precede a base type name
ACCESS_SPECIFIERS: FrozenSet[str] = frozenset({"public", "protected", "private", "virtual"})

# Name of the first in-parameter that marks an instance overload
SELF_PARAMETER_NAME: str = "self"

# Prefix of C++ methods bound into the scripting layer
SCRIPT_METHOD_PREFIX: str = "_"

# Scripting primitives registered before any file is parsed
BUILTIN_TYPE_NAMES: Tuple[str, ...] = (
    "nil",
    "boolean",
    "number",
    "string",
    "table",
    "function",
    "userdata",
    "thread",
    "variant",
    "...",
)

# Source file extensions scanned for documentation
SOURCE_EXTENSIONS: Set[str] = {
    ".cpp",
    ".cc",
    ".cxx",
    ".h",
    ".hpp",
    ".hxx",
}

# Directories never descended into during discovery
EXCLUDED_DIRS: Set[str] = {
    "build",
    "cmake-build-debug",
    "cmake-build-release",
    "node_modules",
    "venv",
    "__pycache__",
    "dist",
    "out",
}

"""
Annotation parsing.

Turns the raw text of one ``@command ...`` annotation into a typed fact.
Commands outside the known vocabulary become ``UnknownAnnotation``; known
commands with unusable arguments record a warning and become
``MalformedAnnotation``. Parsing never raises.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from core.positions import Position
from extraction.config import (
    BASE_TYPE_COMMANDS,
    FIELD_COMMANDS,
    IN_PARAMETER_COMMANDS,
    NAME_COMMANDS,
    OUT_PARAMETER_COMMANDS,
    SCRIPTABLE_COMMANDS,
    TEXT_COMMANDS,
)
from extraction.diagnostics import WarningList, WarningType

logger = logging.getLogger(__name__)

# The command is everything up to the first whitespace after "@"
_COMMAND_RE = re.compile(r"^@(?P<command>\S*)(?P<arguments>.*)$", re.DOTALL)


@dataclass(frozen=True)
class NameAnnotation:
    position: Position
    value: str


@dataclass(frozen=True)
class TextAnnotation:
    position: Position
    value: str


@dataclass(frozen=True)
class ScriptableAnnotation:
    position: Position


@dataclass(frozen=True)
class BaseTypeAnnotation:
    position: Position
    type_name: str


@dataclass(frozen=True)
class FieldAnnotation:
    position: Position
    kind: str
    name: str
    type_name: str
    description: str = ""


@dataclass(frozen=True)
class InParameterAnnotation:
    position: Position
    name: str
    type_name: Optional[str]
    is_optional: bool = False
    description: str = ""


@dataclass(frozen=True)
class OutParameterAnnotation:
    position: Position
    type_name: str
    name: str = ""
    description: str = ""


@dataclass(frozen=True)
class MalformedAnnotation:
    """A known command whose arguments could not be used."""

    position: Position
    command: str
    text: str
    reason: str


@dataclass(frozen=True)
class UnknownAnnotation:
    """A command outside the known vocabulary."""

    position: Position
    command: str
    text: str


Annotation = Union[
    NameAnnotation,
    TextAnnotation,
    ScriptableAnnotation,
    BaseTypeAnnotation,
    FieldAnnotation,
    InParameterAnnotation,
    OutParameterAnnotation,
    MalformedAnnotation,
    UnknownAnnotation,
]

# Annotations that only make sense in type or in method documentation
TYPE_ANNOTATIONS = (ScriptableAnnotation, BaseTypeAnnotation, FieldAnnotation)
METHOD_ANNOTATIONS = (InParameterAnnotation, OutParameterAnnotation)


def _malformed(
    command: str,
    text: str,
    position: Position,
    warnings: WarningList,
    expectation: str,
) -> MalformedAnnotation:
    warnings.add(
        position,
        WarningType.UNEXPECTED_VALUE,
        "Annotation '@%s' expects %s.",
        command,
        expectation,
    )
    return MalformedAnnotation(position, command, text, f"expects {expectation}")


def _rest(tokens: List[str], start: int) -> str:
    return " ".join(tokens[start:])


def _parse_name(command, tokens, text, position, warnings) -> Annotation:
    if not tokens:
        return _malformed(command, text, position, warnings, "a name")
    return NameAnnotation(position, tokens[0])


def _parse_text(command, tokens, text, position, warnings) -> Annotation:
    if not tokens:
        return _malformed(command, text, position, warnings, "a description")
    return TextAnnotation(position, _rest(tokens, 0))


def _parse_scriptable(command, tokens, text, position, warnings) -> Annotation:
    return ScriptableAnnotation(position)


def _parse_base_type(command, tokens, text, position, warnings) -> Annotation:
    if not tokens:
        return _malformed(command, text, position, warnings, "a type name")
    return BaseTypeAnnotation(position, tokens[0])


def _parse_field(command, tokens, text, position, warnings) -> Annotation:
    implicit_type = FIELD_COMMANDS[command]
    if implicit_type is not None:
        if not tokens:
            return _malformed(command, text, position, warnings, "a name")
        return FieldAnnotation(position, command, tokens[0], implicit_type, _rest(tokens, 1))
    if len(tokens) < 2:
        return _malformed(command, text, position, warnings, "a type and a name")
    return FieldAnnotation(position, command, tokens[1], tokens[0], _rest(tokens, 2))


def _parse_in_parameter(command, tokens, text, position, warnings) -> Annotation:
    if command == "param":
        if not tokens:
            return _malformed(command, text, position, warnings, "a name")
        return InParameterAnnotation(position, tokens[0], None, False, _rest(tokens, 1))
    if len(tokens) < 2:
        return _malformed(command, text, position, warnings, "a type and a name")
    return InParameterAnnotation(
        position,
        name=tokens[1],
        type_name=tokens[0],
        is_optional=command == "opt",
        description=_rest(tokens, 2),
    )


def _parse_out_parameter(command, tokens, text, position, warnings) -> Annotation:
    if not tokens:
        return _malformed(command, text, position, warnings, "a type")
    if command == "return":
        return OutParameterAnnotation(position, tokens[0], "", _rest(tokens, 1))
    name = tokens[1] if len(tokens) > 1 else ""
    return OutParameterAnnotation(position, tokens[0], name, _rest(tokens, 2))


_CommandParser = Callable[[str, List[str], str, Position, WarningList], Annotation]

_COMMAND_PARSERS: Dict[str, _CommandParser] = {}
for _commands, _parser in (
    (NAME_COMMANDS, _parse_name),
    (TEXT_COMMANDS, _parse_text),
    (SCRIPTABLE_COMMANDS, _parse_scriptable),
    (BASE_TYPE_COMMANDS, _parse_base_type),
    (FIELD_COMMANDS, _parse_field),
    (IN_PARAMETER_COMMANDS, _parse_in_parameter),
    (OUT_PARAMETER_COMMANDS, _parse_out_parameter),
):
    for _command in _commands:
        _COMMAND_PARSERS[_command] = _parser


def parse_annotation(raw: str, position: Position, warnings: WarningList) -> Annotation:
    """Parse one raw annotation.

    Args:
        raw: Annotation text starting with ``@``; may span several lines.
        position: Type or method position the enclosing block is attached to.
        warnings: Collector for argument problems of known commands.

    Returns:
        The typed annotation, a ``MalformedAnnotation`` when a known command
        has unusable arguments, or an ``UnknownAnnotation`` otherwise.

    Example:
        >>> parse_annotation("@in number x", position, warnings)
        InParameterAnnotation(position=..., name='x', type_name='number', ...)
    """
    text = raw.strip()
    match = _COMMAND_RE.match(text)
    if match is None:
        return UnknownAnnotation(position, "", text)

    command = match.group("command")
    parser = _COMMAND_PARSERS.get(command)
    if parser is None:
        logger.debug("Unknown annotation command %r at %s", command, position)
        return UnknownAnnotation(position, command, text)

    tokens = match.group("arguments").split()
    return parser(command, tokens, text, position, warnings)


def is_usable(annotation: Annotation) -> bool:
    """Whether the annotation carries a usable fact."""
    return not isinstance(annotation, (UnknownAnnotation, MalformedAnnotation))

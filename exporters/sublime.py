"""
Sublime Text completions export.

Writes a ``.sublime-completions`` JSON file for Lua sources, preceded by the
header as ``//`` comments.
"""

import json
from typing import Any, Dict, List, Sequence, Union

from codegraph.models import Parameter, Type
from exporters.base import (
    ApiExporter,
    call_parameters,
    header_lines,
    sorted_fields,
    sorted_methods,
)

Completion = Union[str, Dict[str, str]]


def format_trigger_params(parameters: Sequence[Parameter]) -> str:
    """Render parameters for a trigger; optional ones are wrapped in ``[...]``.

    Example:
        ``( self, x, [y, z] )``
    """
    if not parameters:
        return "( )"
    parts = []
    optional = False
    for parameter in parameters:
        name = parameter.name
        if parameter.is_optional and not optional:
            name = "[" + name
            optional = True
        parts.append(name)
    text = ", ".join(parts)
    if optional:
        text += "]"
    return f"( {text} )"


def format_replacement_params(parameters: Sequence[Parameter]) -> str:
    """Render parameters as snippet placeholders ``${1:name}``."""
    if not parameters:
        return "( )"
    placeholders = [
        "${%d:%s}" % (index + 1, parameter.name) for index, parameter in enumerate(parameters)
    ]
    return "( " + ", ".join(placeholders) + " )"


def create_completion_list(classes: Sequence[Type]) -> List[Completion]:
    """Build the ``completions`` array for already sorted ``classes``."""
    completions: List[Completion] = []
    for type_ in classes:
        completions.append(type_.name)

        for field in sorted_fields(type_):
            completions.append(f"{type_.name}.{field.name}")

        for method in sorted_methods(type_):
            for overload in method.overloads:
                trigger = f"{type_.name}.{method.name}{format_trigger_params(overload.in_parameters)}"
                replacement = format_replacement_params(call_parameters(overload))
                if overload.is_static:
                    contents = f"{type_.name}.{method.name}{replacement}"
                else:
                    contents = f"{method.name}{replacement}"
                completions.append({"trigger": trigger, "contents": contents})
    return completions


class SublimeTextExporter(ApiExporter):
    """Exports Sublime Text completions for Lua."""

    file_name = "lua.sublime-completions"

    def render(self, classes: Sequence[Type], header: str) -> str:
        contents: Dict[str, Any] = {
            "scope": "source.lua",
            "completions": create_completion_list(classes),
        }
        comment = "\n".join("// " + line for line in header_lines(header))
        body = json.dumps(contents, indent=2)
        if comment:
            return f"{comment}\n\n{body}\n"
        return f"{body}\n"

"""
ZeroBrane Studio API export.

Writes a Lua module returning the API table ZeroBrane Studio uses for
auto-completion and tooltips.
"""

from textwrap import dedent
from typing import Any, Dict, List, Optional, Sequence

from jinja2 import Environment

from codegraph.models import Field, Method, Overload, Parameter, Type
from exporters.base import (
    ApiExporter,
    call_parameters,
    header_lines,
    sorted_fields,
    sorted_methods,
)

_LUA_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def lua_string(value: Optional[str]) -> str:
    """Quote ``value`` as a Lua string literal."""
    text = "" if value is None else str(value)
    return '"' + "".join(_LUA_ESCAPES.get(char, char) for char in text) + '"'


_ENVIRONMENT = Environment(trim_blocks=True, lstrip_blocks=True, keep_trailing_newline=True)
_ENVIRONMENT.filters["lua_string"] = lua_string

ZEROBRANE_API_FILE = _ENVIRONMENT.from_string(
    dedent(
        """\
        {% for line in header_lines %}
        -- {{ line }}
        {% endfor %}

        return {
        {% for cls in classes %}
          [{{ cls.name | lua_string }}] = {
            type = "class",
            description = {{ cls.description | lua_string }},
        {% if cls.inherits %}
            inherits = {{ cls.inherits | lua_string }},
        {% endif %}
            childs = {
        {% for child in cls.childs %}
              [{{ child.name | lua_string }}] = {
                type = {{ child.type | lua_string }},
                description = {{ child.description | lua_string }},
        {% if child.args is not none %}
                args = {{ child.args | lua_string }},
                returns = {{ child.returns | lua_string }},
        {% endif %}
        {% if child.valuetype %}
                valuetype = {{ child.valuetype | lua_string }},
        {% endif %}
              },
        {% endfor %}
            },
          },
        {% endfor %}
        }
        """
    )
)


def format_args(parameters: Sequence[Parameter]) -> str:
    """Render in-parameters as ``(type name, [type name])``."""
    parts = []
    for parameter in parameters:
        text = f"{parameter.type_name} {parameter.name}" if parameter.type else parameter.name
        parts.append(f"[{text}]" if parameter.is_optional else text)
    return "(" + ", ".join(parts) + ")"


def format_returns(overload: Overload) -> str:
    return "(" + ", ".join(p.type_name or "" for p in overload.out_parameters) + ")"


def _signature(type_: Type, method: Method, overload: Overload) -> str:
    separator = "." if overload.is_static else ":"
    returns = format_returns(overload)
    return f"{type_.name}{separator}{method.name}{format_args(call_parameters(overload))} -> {returns}"


def _method_child(type_: Type, method: Method) -> Dict[str, Any]:
    overloads = method.overloads
    if not overloads:
        return {
            "name": method.name,
            "type": "method",
            "description": method.description,
            "args": "()",
            "returns": "()",
            "valuetype": None,
        }

    first = overloads[0]
    description = method.description
    if len(overloads) > 1:
        signatures = "\n".join(_signature(type_, method, o) for o in overloads)
        description = f"{description}\n\nOverloads:\n{signatures}".strip()

    is_instance = any(not overload.is_static for overload in overloads)
    return {
        "name": method.name,
        "type": "method" if is_instance else "function",
        "description": description,
        "args": format_args(call_parameters(first)),
        "returns": format_returns(first),
        "valuetype": None,
    }


def _field_child(field: Field) -> Dict[str, Any]:
    return {
        "name": field.name,
        "type": "value",
        "description": field.description,
        "args": None,
        "returns": None,
        "valuetype": field.type.name if field.type is not None else None,
    }


def _class_context(type_: Type) -> Dict[str, Any]:
    childs: List[Dict[str, Any]] = [_field_child(f) for f in sorted_fields(type_)]
    childs.extend(_method_child(type_, m) for m in sorted_methods(type_))
    return {
        "name": type_.name,
        "description": type_.description,
        "inherits": " ".join(b.name for b in type_.base_types),
        "childs": childs,
    }


class ZeroBraneExporter(ApiExporter):
    """Exports a ZeroBrane Studio API description (Lua table)."""

    file_name = "api.lua"

    def render(self, classes: Sequence[Type], header: str) -> str:
        return ZEROBRANE_API_FILE.render(
            header_lines=header_lines(header),
            classes=[_class_context(t) for t in classes],
        )

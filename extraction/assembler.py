"""
Type and method assembly.

Applies the annotations of one documentation block to the type registry.
Unknown and malformed annotations are expected to have been reported and
removed by the caller; anything that is still unusable is skipped.
"""

import logging
from typing import List, Sequence

from codegraph.models import (
    Field,
    Method,
    Overload,
    Parameter,
    ParameterDirection,
    Type,
)
from codegraph.registry import TypeRegistry
from core.positions import MethodPosition, TypePosition
from extraction.annotations import (
    METHOD_ANNOTATIONS,
    TYPE_ANNOTATIONS,
    Annotation,
    BaseTypeAnnotation,
    FieldAnnotation,
    InParameterAnnotation,
    NameAnnotation,
    OutParameterAnnotation,
    ScriptableAnnotation,
    TextAnnotation,
    is_usable,
)
from extraction.blocks import DocumentationBlock
from extraction.config import SCRIPT_METHOD_PREFIX, SELF_PARAMETER_NAME
from extraction.diagnostics import WarningList, WarningType

logger = logging.getLogger(__name__)


def _add_field(
    type_: Type,
    annotation: FieldAnnotation,
    registry: TypeRegistry,
    warnings: WarningList,
) -> None:
    existing = type_.field_map.get(annotation.name)
    if existing is not None:
        if not existing.description:
            existing.description = annotation.description
        return
    if annotation.name in type_.method_map:
        warnings.add(
            annotation.position,
            WarningType.UNEXPECTED_VALUE,
            "Field '%s' clashes with a method of the same name.",
            annotation.name,
        )
    type_.field_map[annotation.name] = Field(
        name=annotation.name,
        type=registry.get_or_create(annotation.type_name),
        kind=annotation.kind,
        description=annotation.description,
    )


def assemble_type(
    block: DocumentationBlock,
    annotations: Sequence[Annotation],
    registry: TypeRegistry,
    warnings: WarningList,
) -> Type:
    """Apply a class/struct documentation block to the registry.

    The type's defining position is (re)set to the block's position. Base
    types and members accumulate across repeated documentation.

    Args:
        block: Block attached to a class or struct header.
        annotations: Filtered annotations of the block.
        registry: Registry to update.
        warnings: Collector for structural problems.

    Returns:
        The documented type.
    """
    position = block.position
    if not isinstance(position, TypePosition):
        raise TypeError(f"Expected a type block, got position {position!r}")

    type_ = registry.get_or_create(position.type_name)
    type_.position = position

    for base_name in block.base_type_names:
        type_.add_base_type(registry.get_or_create(base_name))

    for annotation in annotations:
        if not is_usable(annotation):
            continue
        if isinstance(annotation, NameAnnotation):
            if annotation.value != type_.name:
                warnings.add(
                    position,
                    WarningType.UNEXPECTED_VALUE,
                    "Name annotation '%s' does not match type name '%s'.",
                    annotation.value,
                    type_.name,
                )
        elif isinstance(annotation, TextAnnotation):
            if not type_.description:
                type_.description = annotation.value
        elif isinstance(annotation, ScriptableAnnotation):
            type_.is_scriptable = True
        elif isinstance(annotation, BaseTypeAnnotation):
            type_.add_base_type(registry.get_or_create(annotation.type_name))
        elif isinstance(annotation, FieldAnnotation):
            _add_field(type_, annotation, registry, warnings)
        elif isinstance(annotation, METHOD_ANNOTATIONS):
            warnings.add(
                position,
                WarningType.UNEXPECTED_ANNOTATION,
                "Parameter annotations are not allowed in type documentation.",
            )
        else:
            raise TypeError(f"Unhandled annotation {annotation!r}")

    logger.debug("Assembled type %r", type_)
    return type_


def _build_parameters(
    annotations: Sequence[Annotation],
    registry: TypeRegistry,
    position: MethodPosition,
    warnings: WarningList,
) -> List[Parameter]:
    parameters: List[Parameter] = []
    seen_optional = False
    for annotation in annotations:
        if isinstance(annotation, InParameterAnnotation):
            if seen_optional and not annotation.is_optional:
                warnings.add(
                    position,
                    WarningType.UNEXPECTED_VALUE,
                    "Required parameter '%s' follows an optional parameter.",
                    annotation.name,
                )
            seen_optional = seen_optional or annotation.is_optional
            parameters.append(
                Parameter(
                    name=annotation.name,
                    direction=ParameterDirection.IN,
                    is_optional=annotation.is_optional,
                    type=(
                        registry.get_or_create(annotation.type_name)
                        if annotation.type_name
                        else None
                    ),
                    description=annotation.description,
                )
            )
        elif isinstance(annotation, OutParameterAnnotation):
            parameters.append(
                Parameter(
                    name=annotation.name,
                    direction=ParameterDirection.OUT,
                    type=registry.get_or_create(annotation.type_name),
                    description=annotation.description,
                )
            )
    return parameters


def assemble_method(
    block: DocumentationBlock,
    annotations: Sequence[Annotation],
    registry: TypeRegistry,
    warnings: WarningList,
) -> Method:
    """Apply a method documentation block to the registry.

    The owning type is resolved with ``get_or_create`` and may still be a
    forward reference. The method is looked up by its documented name (the
    ``@name``/``@lua`` value, falling back to the C++ name) and gains exactly
    one overload.

    Args:
        block: Block attached to a ``Type::method(...)`` definition.
        annotations: Filtered annotations of the block.
        registry: Registry to update.
        warnings: Collector for structural problems.

    Returns:
        The updated method. A field of the same name stays in place and
        the clash is reported as ``UNEXPECTED_VALUE``.
    """
    position = block.position
    if not isinstance(position, MethodPosition):
        raise TypeError(f"Expected a method block, got position {position!r}")

    type_ = registry.get_or_create(position.type_name)
    cpp_name = position.method_name

    name = cpp_name
    descriptions = []
    for annotation in annotations:
        if not is_usable(annotation):
            continue
        if isinstance(annotation, NameAnnotation):
            name = annotation.value
        elif isinstance(annotation, TextAnnotation):
            descriptions.append(annotation.value)
        elif isinstance(annotation, TYPE_ANNOTATIONS):
            warnings.add(
                position,
                WarningType.UNEXPECTED_ANNOTATION,
                "Type annotations are not allowed in method documentation.",
            )
        elif not isinstance(annotation, METHOD_ANNOTATIONS):
            raise TypeError(f"Unhandled annotation {annotation!r}")

    parameters = _build_parameters(annotations, registry, position, warnings)
    in_parameters = [p for p in parameters if p.direction is ParameterDirection.IN]
    is_static = not (in_parameters and in_parameters[0].name == SELF_PARAMETER_NAME)

    if name in type_.field_map:
        warnings.add(
            position,
            WarningType.UNEXPECTED_VALUE,
            "Method '%s' clashes with a field of the same name.",
            name,
        )

    method = type_.method_map.get(name)
    if method is None:
        method = Method(name=name)
        type_.method_map[name] = method
    if cpp_name.startswith(SCRIPT_METHOD_PREFIX):
        method.is_scriptable = True

    method.add_overload(
        Overload(
            parameters=parameters,
            is_static=is_static,
            description=" ".join(descriptions),
            position=position,
        )
    )

    if block.method_body is not None:
        logger.debug(
            "Method %s has a %d character body", position, len(block.method_body)
        )
    return method

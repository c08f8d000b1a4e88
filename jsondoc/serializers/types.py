"""Recursive serialization of type references and class basics."""

from __future__ import annotations

from typing import Any, Dict, FrozenSet, Sequence, Tuple, Union

from ..models import (
    CLASS_KINDS,
    AnnotatedType,
    AnnotationTypeRef,
    AnnotationUsage,
    ClassEntity,
    ClassRef,
    Parameterized,
    Primitive,
    TypeReference,
    TypeVariable,
    Wildcard,
)
from ..writer import JsonWriter, TreeJsonWriter
from .errors import UnsupportedAnnotatedTypeError, UnsupportedClassKindError, UnsupportedShapeError

# Identities of the type variables being expanded on the current call path.
Expanding = FrozenSet[Tuple[str, str]]

_NOTHING: Expanding = frozenset()


def write_type(writer: JsonWriter, ref: TypeReference, expanding: Expanding = _NOTHING) -> None:
    """Write the fields describing ``ref`` into the currently open object."""
    writer.write_field("dimension", ref.dimension)

    if isinstance(ref, Primitive):
        writer.write_field("type", ref.name)
        return

    writer.write_field("name", ref.display_name)

    if isinstance(ref, AnnotatedType):
        raise UnsupportedAnnotatedTypeError(ref.display_name)
    if isinstance(ref, AnnotationTypeRef):
        _write_annotation_type(writer, ref)
    elif isinstance(ref, Parameterized):
        write_class_basics(writer, ref.base, generics=False, expanding=expanding)
        _write_type_list(writer, "genericTypes", ref.arguments, expanding)
    elif isinstance(ref, Wildcard):
        writer.write_field("type", "wildcard")
        _write_type_list(writer, "extendsBounds", ref.extends_bounds, expanding)
        _write_type_list(writer, "superBounds", ref.super_bounds, expanding)
    elif isinstance(ref, TypeVariable):
        if ref.identity in expanding:
            # Already being expanded further up: leave the reference unexpanded.
            return
        writer.write_field("type", "generic")
        _write_type_list(writer, "bounds", ref.parameter.bounds, expanding | {ref.identity})
    elif isinstance(ref, ClassRef):
        write_class_basics(writer, ref, generics=True, expanding=expanding)
    else:
        raise UnsupportedShapeError(ref)


def write_type_object(
    writer: JsonWriter, ref: TypeReference, expanding: Expanding = _NOTHING
) -> None:
    writer.start_object()
    write_type(writer, ref, expanding)
    writer.end_object()


def write_class_basics(
    writer: JsonWriter,
    cls: Union[ClassRef, ClassEntity],
    *,
    generics: bool = True,
    expanding: Expanding = _NOTHING,
) -> None:
    """Write kind, qualified name, package and (optionally) declared type parameters.

    Use sites pass ``generics=False`` so that a parameterization does not also
    repeat the declared parameters of its erased class.
    """
    if cls.kind not in CLASS_KINDS:
        raise UnsupportedClassKindError(cls.qualified_name, cls.kind)
    writer.write_field("type", cls.kind)
    writer.write_field("qualifiedName", cls.qualified_name)
    writer.write_field("package", cls.package)
    if generics and cls.kind != "annotation":
        _write_type_list(writer, "genericTypes", cls.type_parameters, expanding)


def write_annotation_usages(writer: JsonWriter, usages: Sequence[AnnotationUsage]) -> None:
    writer.start_array_field("annotations")
    for usage in usages:
        writer.start_object()
        writer.start_object_field("annotation")
        write_type(writer, usage.annotation)
        writer.end_object()
        writer.start_array_field("values")
        for item in usage.values:
            writer.start_object()
            writer.write_field("name", item.name)
            writer.write_field("value", item.value)
            writer.end_object()
        writer.end_array()
        writer.end_object()
    writer.end_array()


def serialize_type(ref: TypeReference) -> Dict[str, Any]:
    """Return the JSON object for ``ref`` as a plain dict."""
    writer = TreeJsonWriter()
    write_type_object(writer, ref)
    return writer.result


def _write_annotation_type(writer: JsonWriter, ref: AnnotationTypeRef) -> None:
    writer.write_field("type", "annotation")
    writer.write_field("qualifiedName", ref.qualified_name)
    writer.write_field("package", ref.package)
    writer.start_array_field("elements")
    for element in ref.elements:
        writer.start_object()
        writer.write_field("name", element.name)
        writer.write_field(
            "defaultValue", element.default_value if element.default_value is not None else ""
        )
        writer.end_object()
    writer.end_array()


def _write_type_list(
    writer: JsonWriter, name: str, refs: Sequence[TypeReference], expanding: Expanding
) -> None:
    writer.start_array_field(name)
    for ref in refs:
        write_type_object(writer, ref, expanding)
    writer.end_array()


__all__ = [
    "serialize_type",
    "write_annotation_usages",
    "write_class_basics",
    "write_type",
    "write_type_object",
]

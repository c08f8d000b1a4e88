"""Serialization of constructors, methods, fields and annotation elements."""

from __future__ import annotations

from typing import Sequence

from ..models import AnnotationTypeElement, Constructor, Field, Method, Parameter, ProgramElement, Tag
from ..writer import JsonWriter
from .tags import other_tags, param_comment, return_comment, see_references, since_text, throws_comment
from .types import write_annotation_usages, write_class_basics, write_type_object


def write_element_common(writer: JsonWriter, element: ProgramElement) -> None:
    """Write the fields every documented member shares."""
    writer.write_field("name", element.name)
    writer.write_field("comment", element.comment)
    write_annotation_usages(writer, element.annotations)
    writer.write_field("modifiers", list(element.modifiers))
    writer.write_field("package", element.package)
    write_tag_fields(writer, element.tags)


def write_tag_fields(writer: JsonWriter, tags: Sequence[Tag]) -> None:
    writer.write_field("since", since_text(tags))
    writer.write_field("see", see_references(tags))
    writer.start_array_field("tags")
    for kind, text in other_tags(tags):
        writer.start_object()
        writer.write_field("kind", kind)
        writer.write_field("text", text)
        writer.end_object()
    writer.end_array()


def write_constructor(writer: JsonWriter, ctor: Constructor) -> None:
    writer.start_object()
    _write_executable(writer, ctor)
    writer.end_object()


def write_method(writer: JsonWriter, method: Method) -> None:
    writer.start_object()
    _write_method_fields(writer, method)
    writer.end_object()


def write_annotation_element(writer: JsonWriter, element: AnnotationTypeElement) -> None:
    writer.start_object()
    _write_method_fields(writer, element)
    default = element.default_value
    writer.write_field("defaultValue", default if default is not None else "")
    writer.end_object()


def write_field_declaration(writer: JsonWriter, field: Field) -> None:
    writer.start_object()
    write_element_common(writer, field)
    # Enum constants take their type from the enclosing declaration.
    if not field.enum_constant and field.type is not None:
        writer.write_field_name("type")
        write_type_object(writer, field.type)
    writer.end_object()


def _write_executable(writer: JsonWriter, member: Constructor) -> None:
    write_element_common(writer, member)

    writer.start_array_field("genericTypes")
    for variable in member.type_parameters:
        write_type_object(writer, variable)
    writer.end_array()

    writer.write_field("varargs", member.varargs)

    writer.start_array_field("parameters")
    for parameter in member.parameters:
        _write_parameter(writer, parameter, member.tags)
    writer.end_array()

    writer.start_array_field("throws")
    for exception in member.thrown:
        writer.start_object()
        writer.write_field("comment", throws_comment(member.tags, exception))
        writer.write_field_name("type")
        write_type_object(writer, exception)
        writer.end_object()
    writer.end_array()


def _write_method_fields(writer: JsonWriter, method: Method) -> None:
    _write_executable(writer, method)

    writer.write_field_name("return")
    write_type_object(writer, method.return_type)
    writer.write_field("returnComment", return_comment(method.tags))

    if method.overridden_class is not None:
        writer.start_object_field("overrides")
        writer.start_object_field("class")
        write_class_basics(writer, method.overridden_class, generics=False)
        writer.end_object()
        writer.write_field("method", method.overridden_method or method.name)
        writer.end_object()


def _write_parameter(writer: JsonWriter, parameter: Parameter, tags: Sequence[Tag]) -> None:
    writer.start_object()
    writer.write_field("name", parameter.name)
    writer.write_field("comment", param_comment(tags, parameter.name))
    writer.write_field_name("type")
    write_type_object(writer, parameter.type)
    write_annotation_usages(writer, parameter.annotations)
    writer.end_object()


__all__ = [
    "write_annotation_element",
    "write_constructor",
    "write_element_common",
    "write_field_declaration",
    "write_method",
    "write_tag_fields",
]

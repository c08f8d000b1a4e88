"""Serialization of a top-level type into its root JSON document."""

from __future__ import annotations

from typing import Any, Dict

from ..models import ClassEntity
from ..writer import JsonWriter, TreeJsonWriter
from .members import (
    write_annotation_element,
    write_constructor,
    write_field_declaration,
    write_method,
    write_tag_fields,
)
from .types import write_annotation_usages, write_class_basics, write_type_object


def write_class(writer: JsonWriter, doc: ClassEntity) -> None:
    """Write the complete document for ``doc`` as one JSON object."""
    writer.start_object()

    writer.write_field("name", doc.name)
    write_class_basics(writer, doc, generics=True)

    writer.write_field("comment", doc.comment)
    write_annotation_usages(writer, doc.annotations)
    writer.write_field("modifiers", list(doc.modifiers))
    write_tag_fields(writer, doc.tags)

    # The implicit Enum<E> supertype carries no information.
    if doc.kind != "enum" and doc.superclass is not None:
        writer.write_field_name("extends")
        write_type_object(writer, doc.superclass)

    writer.start_array_field("interfaces")
    for interface in doc.interfaces:
        write_type_object(writer, interface)
    writer.end_array()

    writer.start_array_field("constructors")
    for ctor in doc.constructors:
        write_constructor(writer, ctor)
    writer.end_array()

    writer.start_array_field("fields")
    for field in doc.fields:
        write_field_declaration(writer, field)
    writer.end_array()

    writer.start_array_field("methods")
    for method in doc.methods:
        write_method(writer, method)
    writer.end_array()

    if doc.kind == "enum":
        writer.start_array_field("enumConstants")
        for constant in doc.enum_constants:
            write_field_declaration(writer, constant)
        writer.end_array()
    elif doc.kind == "annotation":
        writer.start_array_field("elements")
        for element in doc.elements:
            write_annotation_element(writer, element)
        writer.end_array()

    writer.end_object()


def serialize_class(doc: ClassEntity) -> Dict[str, Any]:
    """Return the root document for ``doc`` as a plain dict."""
    writer = TreeJsonWriter()
    write_class(writer, doc)
    return writer.result


__all__ = ["serialize_class", "write_class"]

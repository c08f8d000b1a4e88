"""Tests for top-level document serialization."""

from __future__ import annotations

import pytest

from jsondoc.models import (
    CLASS_KINDS,
    AnnotationTypeElement,
    ClassEntity,
    ClassRef,
    Field,
    GenericTag,
    Method,
    Primitive,
    SeeTag,
    SinceTag,
)
from jsondoc.serializers import UnsupportedClassKindError, serialize_class
from tests._fixtures.models import OBJECT, STRING, comparable


def test_root_document_field_order(box_class: ClassEntity) -> None:
    result = serialize_class(box_class)

    assert list(result) == [
        "name",
        "type",
        "qualifiedName",
        "package",
        "genericTypes",
        "comment",
        "annotations",
        "modifiers",
        "since",
        "see",
        "tags",
        "extends",
        "interfaces",
        "constructors",
        "fields",
        "methods",
    ]
    assert result["name"] == "Box"
    assert result["type"] == "class"
    assert result["modifiers"] == ["public", "final"]
    assert result["extends"]["qualifiedName"] == "java.lang.Object"
    assert result["interfaces"] == []


def test_self_bounded_class_parameter_terminates(box_class: ClassEntity) -> None:
    result = serialize_class(box_class)

    (param,) = result["genericTypes"]
    assert param["name"] == "T"
    assert param["type"] == "generic"
    (bound,) = param["bounds"]
    assert bound["qualifiedName"] == "java.lang.Comparable"
    assert bound["genericTypes"] == [{"dimension": 0, "name": "T"}]


def test_members_reuse_class_type_variables(box_class: ClassEntity) -> None:
    result = serialize_class(box_class)

    field_type = result["fields"][0]["type"]
    assert field_type["name"] == "T"
    assert field_type["bounds"][0]["genericTypes"] == [{"dimension": 0, "name": "T"}]
    assert result["methods"][0]["return"]["type"] == "generic"


def test_enum_document(enum_class: ClassEntity) -> None:
    result = serialize_class(enum_class)

    assert result["type"] == "enum"
    assert "extends" not in result
    assert "elements" not in result
    assert [c["name"] for c in result["enumConstants"]] == ["RED", "GREEN"]
    assert all("type" not in constant for constant in result["enumConstants"])


def test_annotation_document_lists_elements() -> None:
    doc = ClassEntity(
        name="Marker",
        qualified_name="demo.Marker",
        package="demo",
        kind="annotation",
        interfaces=(ClassRef("java.lang.annotation.Annotation", kind="interface", package="java.lang.annotation"),),
        elements=(AnnotationTypeElement(name="value", package="demo", return_type=STRING, default_value="x"),),
    )

    result = serialize_class(doc)

    assert result["type"] == "annotation"
    assert "genericTypes" not in result
    assert "enumConstants" not in result
    assert result["elements"][0]["name"] == "value"
    assert result["elements"][0]["defaultValue"] == "x"
    assert result["interfaces"][0]["type"] == "interface"


def test_interface_without_superclass_omits_extends() -> None:
    doc = ClassEntity(
        name="Shape",
        qualified_name="demo.Shape",
        package="demo",
        kind="interface",
        interfaces=(comparable(),),
        methods=(Method(name="area", package="demo", return_type=Primitive("double")),),
    )

    result = serialize_class(doc)

    assert "extends" not in result
    assert result["interfaces"][0]["qualifiedName"] == "java.lang.Comparable"
    assert result["methods"][0]["return"] == {"dimension": 0, "type": "double"}


@pytest.mark.parametrize("kind", CLASS_KINDS)
def test_each_kind_yields_exactly_its_optional_sections(kind: str) -> None:
    doc = ClassEntity(
        name="Thing",
        qualified_name="demo.Thing",
        package="demo",
        kind=kind,
        superclass=OBJECT,
        enum_constants=(Field(name="ONE", package="demo", enum_constant=True),),
        elements=(AnnotationTypeElement(name="value", package="demo"),),
    )

    result = serialize_class(doc)

    assert result["type"] == kind
    assert ("enumConstants" in result) == (kind == "enum")
    assert ("elements" in result) == (kind == "annotation")
    assert ("extends" in result) == (kind != "enum")


def test_unknown_kind_is_rejected() -> None:
    doc = ClassEntity(name="Point", qualified_name="demo.Point", package="demo", kind="record")
    with pytest.raises(UnsupportedClassKindError):
        serialize_class(doc)


def test_override_scenario_names_superclass() -> None:
    base = ClassRef("demo.shapes.Base", package="demo.shapes")
    doc = ClassEntity(
        name="Circle",
        qualified_name="demo.shapes.Circle",
        package="demo.shapes",
        superclass=base,
        methods=(
            Method(
                name="area",
                package="demo.shapes",
                return_type=Primitive("double"),
                overridden_class=base,
                overridden_method="area",
            ),
        ),
    )

    overrides = serialize_class(doc)["methods"][0]["overrides"]

    assert overrides["class"]["qualifiedName"] == "demo.shapes.Base"
    assert overrides["method"] == "area"


def test_class_level_tags() -> None:
    doc = ClassEntity(
        name="Util",
        qualified_name="demo.Util",
        package="demo",
        comment="Helpers.",
        tags=(SinceTag("1.4"), SeeTag("demo.Other"), GenericTag("author", "Ada")),
    )

    result = serialize_class(doc)

    assert result["comment"] == "Helpers."
    assert result["since"] == "1.4"
    assert result["see"] == ["demo.Other"]
    assert result["tags"] == [{"kind": "author", "text": "Ada"}]

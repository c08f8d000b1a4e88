"""Tests for the recursive type serializer."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from jsondoc.models import (
    AnnotatedType,
    AnnotationElementDecl,
    AnnotationTypeRef,
    ClassRef,
    Parameterized,
    Primitive,
    TypeParameter,
    TypeVariable,
    Wildcard,
)
from jsondoc.serializers import (
    UnsupportedAnnotatedTypeError,
    UnsupportedClassKindError,
    UnsupportedShapeError,
    serialize_type,
)
from jsondoc.serializers.types import write_class_basics
from jsondoc.writer import TreeJsonWriter
from tests._fixtures.models import STRING, comparable, self_bounded_parameter

STRING_JSON = {
    "dimension": 0,
    "name": "String",
    "type": "class",
    "qualifiedName": "java.lang.String",
    "package": "java.lang",
    "genericTypes": [],
}


def _depth(value) -> int:
    if isinstance(value, dict):
        return 1 + max((_depth(item) for item in value.values()), default=0)
    if isinstance(value, list):
        return 1 + max((_depth(item) for item in value), default=0)
    return 0


def test_primitive_carries_only_dimension_and_type() -> None:
    assert serialize_type(Primitive("int", dimension=2)) == {"dimension": 2, "type": "int"}


def test_class_reference_includes_class_basics() -> None:
    assert serialize_type(STRING) == STRING_JSON


def test_array_of_class_keeps_dimension() -> None:
    result = serialize_type(ClassRef("java.lang.String", package="java.lang", dimension=1))
    assert result["dimension"] == 1
    assert result["qualifiedName"] == "java.lang.String"


def test_parameterized_emits_arguments_not_declared_parameters() -> None:
    element = TypeParameter("E", owner="java.util.List")
    list_ref = ClassRef(
        "java.util.List",
        kind="interface",
        package="java.util",
        type_parameters=(TypeVariable(element),),
    )

    result = serialize_type(Parameterized(list_ref, (STRING,)))

    assert result == {
        "dimension": 0,
        "name": "List",
        "type": "interface",
        "qualifiedName": "java.util.List",
        "package": "java.util",
        "genericTypes": [STRING_JSON],
    }


def test_unbounded_wildcard_has_empty_bounds() -> None:
    assert serialize_type(Wildcard()) == {
        "dimension": 0,
        "name": "?",
        "type": "wildcard",
        "extendsBounds": [],
        "superBounds": [],
    }


def test_lower_bounded_wildcard() -> None:
    integer = ClassRef("java.lang.Integer", package="java.lang")
    result = serialize_type(Wildcard(super_bounds=(integer,)))
    assert result["extendsBounds"] == []
    assert [bound["qualifiedName"] for bound in result["superBounds"]] == ["java.lang.Integer"]


def test_self_referential_type_variable_terminates() -> None:
    param = self_bounded_parameter()

    result = serialize_type(TypeVariable(param))

    assert result == {
        "dimension": 0,
        "name": "T",
        "type": "generic",
        "bounds": [
            {
                "dimension": 0,
                "name": "Comparable",
                "type": "interface",
                "qualifiedName": "java.lang.Comparable",
                "package": "java.lang",
                "genericTypes": [{"dimension": 0, "name": "T"}],
            }
        ],
    }


def test_raw_self_reference_through_class_generics_terminates() -> None:
    param = TypeParameter("T", owner="demo.Node")
    node = ClassRef("demo.Node", package="demo", type_parameters=(TypeVariable(param),))
    param.bounds.append(node)

    result = serialize_type(TypeVariable(param))

    bound = result["bounds"][0]
    assert bound["qualifiedName"] == "demo.Node"
    assert bound["genericTypes"] == [{"dimension": 0, "name": "T"}]


def test_mutually_recursive_type_variables_terminate() -> None:
    key = TypeParameter("K", owner="demo.Pair")
    value = TypeParameter("V", owner="demo.Pair")
    key.bounds.append(Parameterized(comparable(), (TypeVariable(value),)))
    value.bounds.append(Parameterized(comparable(), (TypeVariable(key),)))

    result = serialize_type(TypeVariable(key))

    inner_value = result["bounds"][0]["genericTypes"][0]
    assert inner_value["name"] == "V"
    assert inner_value["type"] == "generic"
    assert inner_value["bounds"][0]["genericTypes"][0] == {"dimension": 0, "name": "K"}
    assert _depth(result) < 12


def test_same_variable_in_sibling_positions_is_expanded_each_time() -> None:
    param = TypeParameter("T", owner="demo.Map")
    map_ref = ClassRef("demo.Map", package="demo")

    result = serialize_type(Parameterized(map_ref, (TypeVariable(param), TypeVariable(param))))

    assert [arg["type"] for arg in result["genericTypes"]] == ["generic", "generic"]


def test_type_variable_array_dimension() -> None:
    param = TypeParameter("T", owner="demo.Box")
    assert serialize_type(TypeVariable(param, dimension=1)) == {
        "dimension": 1,
        "name": "T",
        "type": "generic",
        "bounds": [],
    }


def test_annotation_type_lists_elements_with_defaults() -> None:
    marker = AnnotationTypeRef(
        "demo.Marker",
        package="demo",
        elements=(AnnotationElementDecl("value", "x"), AnnotationElementDecl("count")),
    )
    assert serialize_type(marker) == {
        "dimension": 0,
        "name": "Marker",
        "type": "annotation",
        "qualifiedName": "demo.Marker",
        "package": "demo",
        "elements": [
            {"name": "value", "defaultValue": "x"},
            {"name": "count", "defaultValue": ""},
        ],
    }


def test_annotated_type_is_rejected() -> None:
    with pytest.raises(UnsupportedAnnotatedTypeError):
        serialize_type(AnnotatedType(STRING))


def test_unknown_shape_is_rejected() -> None:
    @dataclass(frozen=True)
    class Bogus:
        dimension: int = 0
        display_name: str = "Bogus"

    with pytest.raises(UnsupportedShapeError):
        serialize_type(Bogus())  # type: ignore[arg-type]


def test_unknown_class_kind_is_rejected() -> None:
    with pytest.raises(UnsupportedClassKindError):
        serialize_type(ClassRef("demo.Point", kind="record", package="demo"))


def test_class_basics_skip_generics_for_annotations() -> None:
    param = TypeParameter("T", owner="demo.Odd")
    writer = TreeJsonWriter()
    writer.start_object()
    write_class_basics(
        writer,
        ClassRef("demo.Odd", kind="annotation", package="demo", type_parameters=(TypeVariable(param),)),
        generics=True,
    )
    writer.end_object()

    assert writer.result == {"type": "annotation", "qualifiedName": "demo.Odd", "package": "demo"}


def test_serialization_is_repeatable() -> None:
    param = self_bounded_parameter()
    assert serialize_type(TypeVariable(param)) == serialize_type(TypeVariable(param))

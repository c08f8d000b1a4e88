"""Read-only documentation model consumed by the serializers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

CLASS_KINDS = ("class", "interface", "enum", "exception", "error", "annotation")

LiteralValue = Union[None, bool, int, float, str, Sequence["LiteralValue"]]


# ----------------------------------------------------------------------
# Type references


@dataclass(eq=False)
class TypeParameter:
    """Declaration of a type variable on a class or executable member.

    ``bounds`` may refer back to this declaration (``T extends Comparable<T>``),
    so instances compare by identity only.
    """

    name: str
    owner: str
    bounds: List["TypeReference"] = field(default_factory=list)

    @property
    def identity(self) -> Tuple[str, str]:
        return (self.owner, self.name)


@dataclass(frozen=True)
class Primitive:
    name: str
    dimension: int = 0

    @property
    def display_name(self) -> str:
        return self.name


@dataclass(frozen=True)
class ClassRef:
    """Use of a class, interface, enum or exception type."""

    qualified_name: str
    kind: str = "class"
    package: str = ""
    type_parameters: Sequence["TypeVariable"] = ()
    name: str = ""
    dimension: int = 0

    @property
    def display_name(self) -> str:
        return self.name or self.qualified_name.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class Parameterized:
    base: ClassRef
    arguments: Sequence["TypeReference"] = ()
    dimension: int = 0

    @property
    def display_name(self) -> str:
        return self.base.display_name


@dataclass(frozen=True)
class Wildcard:
    extends_bounds: Sequence["TypeReference"] = ()
    super_bounds: Sequence["TypeReference"] = ()
    dimension: int = 0

    @property
    def display_name(self) -> str:
        return "?"


@dataclass(frozen=True)
class TypeVariable:
    """Use of a declared type parameter."""

    parameter: TypeParameter
    dimension: int = 0

    @property
    def display_name(self) -> str:
        return self.parameter.name

    @property
    def identity(self) -> Tuple[str, str]:
        return self.parameter.identity


@dataclass(frozen=True)
class AnnotationElementDecl:
    name: str
    default_value: LiteralValue = None


@dataclass(frozen=True)
class AnnotationTypeRef:
    qualified_name: str
    package: str = ""
    elements: Sequence[AnnotationElementDecl] = ()
    name: str = ""
    dimension: int = 0

    @property
    def display_name(self) -> str:
        return self.name or self.qualified_name.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class AnnotatedType:
    """Type use carrying type annotations (``@NonNull String``)."""

    underlying: "TypeReference"
    annotations: Sequence["AnnotationUsage"] = ()
    dimension: int = 0

    @property
    def display_name(self) -> str:
        return self.underlying.display_name


TypeReference = Union[
    Primitive,
    ClassRef,
    Parameterized,
    Wildcard,
    TypeVariable,
    AnnotationTypeRef,
    AnnotatedType,
]


def type_key(ref: TypeReference) -> Tuple[object, ...]:
    """Hashable identity of a type use: qualified name plus generic shape.

    Type variables contribute their declaration identity rather than their
    bounds, which keeps the key finite for self-referential declarations.
    """
    if isinstance(ref, Primitive):
        return ("primitive", ref.name, ref.dimension)
    if isinstance(ref, ClassRef):
        return ("class", ref.qualified_name, ref.dimension)
    if isinstance(ref, Parameterized):
        return (
            "parameterized",
            ref.base.qualified_name,
            tuple(type_key(arg) for arg in ref.arguments),
            ref.dimension,
        )
    if isinstance(ref, Wildcard):
        return (
            "wildcard",
            tuple(type_key(bound) for bound in ref.extends_bounds),
            tuple(type_key(bound) for bound in ref.super_bounds),
            ref.dimension,
        )
    if isinstance(ref, TypeVariable):
        return ("typevar", *ref.identity, ref.dimension)
    if isinstance(ref, AnnotationTypeRef):
        return ("annotation", ref.qualified_name, ref.dimension)
    if isinstance(ref, AnnotatedType):
        return ("annotated", type_key(ref.underlying), ref.dimension)
    raise TypeError(f"Not a type reference: {ref!r}")


# ----------------------------------------------------------------------
# Documentation tags


@dataclass(frozen=True)
class SinceTag:
    text: str

    kind = "since"


@dataclass(frozen=True)
class SeeTag:
    reference: str

    kind = "see"


@dataclass(frozen=True)
class ParamTag:
    name: str
    text: str = ""

    kind = "param"


@dataclass(frozen=True)
class ThrowsTag:
    exception: TypeReference
    text: str = ""
    kind: str = "throws"


@dataclass(frozen=True)
class GenericTag:
    """Any tag without a dedicated representation (``@author``, ``@return``...)."""

    kind: str
    text: str = ""


Tag = Union[SinceTag, SeeTag, ParamTag, ThrowsTag, GenericTag]


# ----------------------------------------------------------------------
# Program elements


@dataclass(frozen=True)
class AnnotationValue:
    name: str
    value: LiteralValue


@dataclass(frozen=True)
class AnnotationUsage:
    annotation: AnnotationTypeRef
    values: Sequence[AnnotationValue] = ()


@dataclass(frozen=True)
class Parameter:
    name: str
    type: TypeReference
    annotations: Sequence[AnnotationUsage] = ()
    varargs: bool = False


@dataclass(frozen=True)
class ProgramElement:
    """Fields shared by every documented declaration."""

    name: str
    package: str = ""
    comment: str = ""
    tags: Sequence[Tag] = ()
    modifiers: Sequence[str] = ()
    annotations: Sequence[AnnotationUsage] = ()


@dataclass(frozen=True)
class Constructor(ProgramElement):
    parameters: Sequence[Parameter] = ()
    thrown: Sequence[TypeReference] = ()
    type_parameters: Sequence[TypeVariable] = ()

    @property
    def varargs(self) -> bool:
        return bool(self.parameters) and self.parameters[-1].varargs


@dataclass(frozen=True)
class Method(Constructor):
    return_type: TypeReference = Primitive("void")
    overridden_class: Optional[ClassRef] = None
    overridden_method: Optional[str] = None


@dataclass(frozen=True)
class AnnotationTypeElement(Method):
    default_value: LiteralValue = None


@dataclass(frozen=True)
class Field(ProgramElement):
    type: Optional[TypeReference] = None
    enum_constant: bool = False


@dataclass(frozen=True)
class ClassEntity(ProgramElement):
    """A top-level type: class, interface, enum, exception, error or annotation."""

    qualified_name: str = ""
    kind: str = "class"
    superclass: Optional[TypeReference] = None
    interfaces: Sequence[TypeReference] = ()
    type_parameters: Sequence[TypeVariable] = ()
    constructors: Sequence[Constructor] = ()
    fields: Sequence[Field] = ()
    methods: Sequence[Method] = ()
    enum_constants: Sequence[Field] = ()
    elements: Sequence[AnnotationTypeElement] = ()

    def as_ref(self) -> ClassRef:
        return ClassRef(
            qualified_name=self.qualified_name,
            kind=self.kind,
            package=self.package,
            type_parameters=tuple(self.type_parameters),
            name=self.name,
        )


@dataclass
class DocumentationModel:
    """Everything the front end hands over for one emission run."""

    classes: List[ClassEntity] = field(default_factory=list)


__all__ = [
    "CLASS_KINDS",
    "AnnotatedType",
    "AnnotationElementDecl",
    "AnnotationTypeElement",
    "AnnotationTypeRef",
    "AnnotationUsage",
    "AnnotationValue",
    "ClassEntity",
    "ClassRef",
    "Constructor",
    "DocumentationModel",
    "Field",
    "GenericTag",
    "LiteralValue",
    "Method",
    "Parameter",
    "ParamTag",
    "Parameterized",
    "Primitive",
    "ProgramElement",
    "SeeTag",
    "SinceTag",
    "Tag",
    "ThrowsTag",
    "TypeParameter",
    "TypeReference",
    "TypeVariable",
    "Wildcard",
    "type_key",
]

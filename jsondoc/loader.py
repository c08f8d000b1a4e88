"""Adapter turning a front-end JSON dump into the documentation model.

The dump is ``{"classes": [...], "references": {...}}``. ``classes`` are the
top-level types to emit; ``references`` describe external types (for example
``java.lang.Comparable``) that are used but not emitted. Type variables are
resolved to their declaring ``TypeParameter`` so that self-referential bounds
such as ``T extends Comparable<T>`` become real cycles in memory.
"""

from __future__ import annotations

import json
import re
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .models import (
    AnnotatedType,
    AnnotationElementDecl,
    AnnotationTypeElement,
    AnnotationTypeRef,
    AnnotationUsage,
    AnnotationValue,
    ClassEntity,
    ClassRef,
    Constructor,
    DocumentationModel,
    Field,
    GenericTag,
    Method,
    Parameter,
    Parameterized,
    ParamTag,
    Primitive,
    SeeTag,
    SinceTag,
    Tag,
    ThrowsTag,
    TypeParameter,
    TypeReference,
    TypeVariable,
    Wildcard,
)

PRIMITIVE_NAMES = frozenset(
    {"boolean", "byte", "char", "short", "int", "long", "float", "double", "void"}
)

_ARRAY_SUFFIX = re.compile(r"((?:\[\])*)$")

Scope = Mapping[str, TypeParameter]


class ModelError(ValueError):
    """Raised when the documentation model dump is malformed."""


def load_model(path: Path) -> DocumentationModel:
    """Read and parse a model dump from disk."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ModelError(f"{Path(path).name} is not valid JSON: {exc}") from exc
    return parse_model(data)


def parse_model(data: Any) -> DocumentationModel:
    """Build the documentation model from an already decoded dump."""
    if not isinstance(data, Mapping):
        raise ModelError("Model dump must contain a mapping at the root")
    return _ModelBuilder(data).build()


class _ModelBuilder:
    def __init__(self, data: Mapping[str, Any]) -> None:
        self._class_specs = [
            _require_mapping(spec, f"classes[{index}]")
            for index, spec in enumerate(_as_list(data.get("classes"), "classes"))
        ]
        references = data.get("references") or {}
        if not isinstance(references, Mapping):
            raise ModelError("'references' must be a mapping of qualified names")
        self._reference_specs = {
            str(qn): _require_mapping(spec, f"references[{qn}]") for qn, spec in references.items()
        }
        self._known: Dict[str, ClassRef] = {}
        self._parameters: Dict[str, Dict[str, TypeParameter]] = {}
        self._annotation_elements: Dict[str, List[AnnotationElementDecl]] = {}

    def build(self) -> DocumentationModel:
        # Emitted classes win over a reference entry with the same name.
        declared: Dict[str, Mapping[str, Any]] = dict(self._reference_specs)
        for index, spec in enumerate(self._class_specs):
            declared[_qualified_name(spec, f"classes[{index}]")] = spec
        for qn, spec in declared.items():
            self._declare(qn, spec)

        # Bounds may mention any declared class, including the owner itself.
        for qn, spec in declared.items():
            self._resolve_bounds(spec.get("typeParameters"), self._parameters[qn], self._parameters[qn], qn)

        classes = [
            self._class(spec, _qualified_name(spec, f"classes[{index}]"))
            for index, spec in enumerate(self._class_specs)
        ]
        return DocumentationModel(classes=classes)

    # ------------------------------------------------------------------
    # Declarations

    def _declare(self, qn: str, spec: Mapping[str, Any]) -> None:
        params = self._declare_parameters(spec.get("typeParameters"), qn, qn)
        self._parameters[qn] = params
        kind = _as_str(spec.get("kind")) or "class"
        self._known[qn] = ClassRef(
            qualified_name=qn,
            kind=kind,
            package=_package_of(qn, spec),
            type_parameters=tuple(TypeVariable(param) for param in params.values()),
            name=_as_str(spec.get("name")) or "",
        )
        if kind == "annotation":
            self._annotation_elements[qn] = [
                AnnotationElementDecl(
                    name=_as_str(element.get("name")) or "",
                    default_value=element.get("defaultValue"),
                )
                for element in (
                    _require_mapping(item, f"{qn}.elements")
                    for item in _as_list(spec.get("elements"), f"{qn}.elements")
                )
            ]

    def _declare_parameters(self, specs: Any, owner: str, where: str) -> Dict[str, TypeParameter]:
        params: Dict[str, TypeParameter] = {}
        for item in _as_list(specs, f"{where}.typeParameters"):
            name = item if isinstance(item, str) else _as_str(_require_mapping(item, where).get("name"))
            if not name:
                raise ModelError(f"Type parameter without a name in {where}")
            params[name] = TypeParameter(name=name, owner=owner)
        return params

    def _resolve_bounds(
        self, specs: Any, params: Mapping[str, TypeParameter], scope: Scope, where: str
    ) -> None:
        for item in _as_list(specs, f"{where}.typeParameters"):
            if isinstance(item, str):
                continue
            param = params[_as_str(item.get("name")) or ""]
            for bound in _as_list(item.get("bounds"), f"{where}.{param.name}.bounds"):
                param.bounds.append(self._type(bound, scope, f"{where}.{param.name}"))

    # ------------------------------------------------------------------
    # Types

    def _type(self, spec: Any, scope: Scope, where: str) -> TypeReference:
        if isinstance(spec, str):
            return self._type_from_string(spec, scope, where)
        spec = _require_mapping(spec, where)
        kind = _as_str(spec.get("kind"))
        if kind is None and "qualifiedName" in spec:
            kind = "class"
        dimension = _as_int(spec.get("dimension")) or 0

        if kind == "primitive":
            return Primitive(name=_require_str(spec, "name", where), dimension=dimension)
        if kind == "class":
            return self._class_type(_require_str(spec, "qualifiedName", where), dimension, spec)
        if kind == "parameterized":
            base = spec.get("base")
            if isinstance(base, str):
                base_ref = self._plain_class_ref(base)
            else:
                base_spec = _require_mapping(base, f"{where}.base")
                base_ref = self._plain_class_ref(
                    _require_str(base_spec, "qualifiedName", f"{where}.base"), base_spec
                )
            return Parameterized(
                base=base_ref,
                arguments=tuple(
                    self._type(arg, scope, f"{where}.arguments")
                    for arg in _as_list(spec.get("arguments"), f"{where}.arguments")
                ),
                dimension=dimension,
            )
        if kind == "wildcard":
            return Wildcard(
                extends_bounds=tuple(
                    self._type(b, scope, f"{where}.extends")
                    for b in _as_list(spec.get("extends"), f"{where}.extends")
                ),
                super_bounds=tuple(
                    self._type(b, scope, f"{where}.super")
                    for b in _as_list(spec.get("super"), f"{where}.super")
                ),
                dimension=dimension,
            )
        if kind == "typevar":
            name = _require_str(spec, "name", where)
            if name not in scope:
                raise ModelError(f"Unknown type variable {name!r} in {where}")
            return TypeVariable(scope[name], dimension=dimension)
        if kind == "annotation":
            return self._annotation_ref(_require_str(spec, "qualifiedName", where), spec, dimension)
        if kind == "annotated":
            return AnnotatedType(
                underlying=self._type(spec.get("type"), scope, f"{where}.type"),
                annotations=self._annotations(spec.get("annotations"), f"{where}.annotations"),
                dimension=dimension,
            )
        raise ModelError(f"Unknown type kind {kind!r} in {where}")

    def _type_from_string(self, text: str, scope: Scope, where: str) -> TypeReference:
        suffix = _ARRAY_SUFFIX.search(text)
        dimension = len(suffix.group(1)) // 2 if suffix else 0
        name = text[: len(text) - dimension * 2].strip()
        if not name:
            raise ModelError(f"Empty type name in {where}")
        if name in scope:
            return TypeVariable(scope[name], dimension=dimension)
        if name in PRIMITIVE_NAMES:
            return Primitive(name=name, dimension=dimension)
        return self._class_type(name, dimension)

    def _class_type(
        self, qn: str, dimension: int, spec: Optional[Mapping[str, Any]] = None
    ) -> TypeReference:
        known = self._known.get(qn)
        if known is not None and known.kind == "annotation":
            return self._annotation_ref(qn, spec or {}, dimension)
        return replace(self._plain_class_ref(qn, spec), dimension=dimension)

    def _plain_class_ref(self, qn: str, spec: Optional[Mapping[str, Any]] = None) -> ClassRef:
        known = self._known.get(qn)
        if known is not None:
            return known
        spec = spec or {}
        return ClassRef(
            qualified_name=qn,
            kind=_as_str(spec.get("classKind")) or "class",
            package=_package_of(qn, spec),
            name=_as_str(spec.get("name")) or "",
        )

    def _annotation_ref(self, qn: str, spec: Mapping[str, Any], dimension: int = 0) -> AnnotationTypeRef:
        known = self._known.get(qn)
        return AnnotationTypeRef(
            qualified_name=qn,
            package=known.package if known is not None else _package_of(qn, spec),
            elements=tuple(self._annotation_elements.get(qn, ())),
            name=(known.name if known is not None else _as_str(spec.get("name"))) or "",
            dimension=dimension,
        )

    # ------------------------------------------------------------------
    # Program elements

    def _class(self, spec: Mapping[str, Any], qn: str) -> ClassEntity:
        ref = self._known[qn]
        scope: Scope = self._parameters[qn]
        package = ref.package

        superclass = spec.get("superclass")
        return ClassEntity(
            name=ref.display_name,
            qualified_name=qn,
            kind=ref.kind,
            package=package,
            comment=_as_str(spec.get("comment")) or "",
            tags=self._tags(spec.get("tags"), scope, qn),
            modifiers=_modifiers(spec.get("modifiers")),
            annotations=self._annotations(spec.get("annotations"), f"{qn}.annotations"),
            superclass=self._type(superclass, scope, f"{qn}.superclass") if superclass else None,
            interfaces=tuple(
                self._type(item, scope, f"{qn}.interfaces")
                for item in _as_list(spec.get("interfaces"), f"{qn}.interfaces")
            ),
            type_parameters=ref.type_parameters,
            constructors=tuple(
                self._executable(Constructor, item, qn, package, scope)
                for item in _as_list(spec.get("constructors"), f"{qn}.constructors")
            ),
            fields=tuple(
                self._field(item, qn, package, scope, enum_constant=False)
                for item in _as_list(spec.get("fields"), f"{qn}.fields")
            ),
            methods=tuple(
                self._executable(Method, item, qn, package, scope)
                for item in _as_list(spec.get("methods"), f"{qn}.methods")
            ),
            enum_constants=tuple(
                self._field(item, qn, package, scope, enum_constant=True)
                for item in _as_list(spec.get("enumConstants"), f"{qn}.enumConstants")
            ),
            elements=tuple(
                self._executable(AnnotationTypeElement, item, qn, package, scope)
                for item in _as_list(spec.get("elements"), f"{qn}.elements")
            ),
        )

    def _executable(self, cls: type, item: Any, qn: str, package: str, class_scope: Scope):
        spec = _require_mapping(item, f"{qn} member")
        name = _require_str(spec, "name", f"{qn} member")
        where = f"{qn}#{name}"

        own = self._declare_parameters(spec.get("typeParameters"), where, where)
        scope: Scope = {**class_scope, **own}
        self._resolve_bounds(spec.get("typeParameters"), own, scope, where)

        kwargs: Dict[str, Any] = dict(
            name=name,
            package=package,
            comment=_as_str(spec.get("comment")) or "",
            tags=self._tags(spec.get("tags"), scope, where),
            modifiers=_modifiers(spec.get("modifiers")),
            annotations=self._annotations(spec.get("annotations"), f"{where}.annotations"),
            parameters=tuple(
                self._parameter(param, scope, where)
                for param in _as_list(spec.get("parameters"), f"{where}.parameters")
            ),
            thrown=tuple(
                self._type(exc, scope, f"{where}.throws")
                for exc in _as_list(spec.get("throws"), f"{where}.throws")
            ),
            type_parameters=tuple(TypeVariable(param) for param in own.values()),
        )
        if cls is Constructor:
            return Constructor(**kwargs)

        kwargs["return_type"] = self._type(spec.get("returnType") or "void", scope, f"{where}.returnType")
        overrides = spec.get("overrides")
        if overrides:
            overrides = _require_mapping(overrides, f"{where}.overrides")
            kwargs["overridden_class"] = self._plain_class_ref(
                _require_str(overrides, "class", f"{where}.overrides")
            )
            kwargs["overridden_method"] = _as_str(overrides.get("method")) or name
        if cls is AnnotationTypeElement:
            return AnnotationTypeElement(default_value=spec.get("defaultValue"), **kwargs)
        return Method(**kwargs)

    def _parameter(self, item: Any, scope: Scope, where: str) -> Parameter:
        spec = _require_mapping(item, f"{where}.parameters")
        name = _require_str(spec, "name", f"{where}.parameters")
        return Parameter(
            name=name,
            type=self._type(spec.get("type"), scope, f"{where}({name})"),
            annotations=self._annotations(spec.get("annotations"), f"{where}({name})"),
            varargs=bool(spec.get("varargs", False)),
        )

    def _field(self, item: Any, qn: str, package: str, scope: Scope, *, enum_constant: bool) -> Field:
        if isinstance(item, str) and enum_constant:
            return Field(name=item, package=package, enum_constant=True)
        spec = _require_mapping(item, f"{qn} field")
        name = _require_str(spec, "name", f"{qn} field")
        where = f"{qn}#{name}"
        field_type = None
        if not enum_constant:
            field_type = self._type(spec.get("type"), scope, where)
        return Field(
            name=name,
            package=package,
            comment=_as_str(spec.get("comment")) or "",
            tags=self._tags(spec.get("tags"), scope, where),
            modifiers=_modifiers(spec.get("modifiers")),
            annotations=self._annotations(spec.get("annotations"), f"{where}.annotations"),
            type=field_type,
            enum_constant=enum_constant,
        )

    def _annotations(self, specs: Any, where: str) -> tuple[AnnotationUsage, ...]:
        usages: List[AnnotationUsage] = []
        for item in _as_list(specs, where):
            if isinstance(item, str):
                usages.append(AnnotationUsage(annotation=self._annotation_ref(item, {})))
                continue
            spec = _require_mapping(item, where)
            target = spec.get("type")
            if isinstance(target, Mapping):
                annotation = self._annotation_ref(
                    _require_str(target, "qualifiedName", where), target
                )
            elif isinstance(target, str):
                annotation = self._annotation_ref(target, {})
            else:
                raise ModelError(f"Annotation without a type in {where}")
            usages.append(
                AnnotationUsage(annotation=annotation, values=_annotation_values(spec.get("values"), where))
            )
        return tuple(usages)

    def _tags(self, specs: Any, scope: Scope, where: str) -> tuple[Tag, ...]:
        tags: List[Tag] = []
        for item in _as_list(specs, f"{where}.tags"):
            spec = _require_mapping(item, f"{where}.tags")
            kind = (_as_str(spec.get("kind")) or "").lstrip("@").lower()
            text = _as_str(spec.get("text")) or ""
            if kind == "param":
                tags.append(ParamTag(name=_require_str(spec, "name", f"{where}.tags"), text=text))
            elif kind in ("throws", "exception"):
                exception = self._type(spec.get("type"), scope, f"{where}.tags")
                tags.append(ThrowsTag(exception=exception, text=text, kind=kind))
            elif kind == "since":
                tags.append(SinceTag(text=text))
            elif kind == "see":
                tags.append(SeeTag(reference=_as_str(spec.get("reference")) or text))
            elif kind:
                tags.append(GenericTag(kind=kind, text=text))
            else:
                raise ModelError(f"Tag without a kind in {where}")
        return tuple(tags)


def _annotation_values(values: Any, where: str) -> tuple[AnnotationValue, ...]:
    if values is None:
        return ()
    if isinstance(values, Mapping):
        return tuple(AnnotationValue(name=str(key), value=value) for key, value in values.items())
    result: List[AnnotationValue] = []
    for item in _as_list(values, where):
        spec = _require_mapping(item, where)
        result.append(AnnotationValue(name=_require_str(spec, "name", where), value=spec.get("value")))
    return tuple(result)


def _qualified_name(spec: Mapping[str, Any], where: str) -> str:
    qn = _as_str(spec.get("qualifiedName"))
    if qn:
        return qn
    name = _require_str(spec, "name", where)
    package = _as_str(spec.get("package"))
    return f"{package}.{name}" if package else name


def _package_of(qn: str, spec: Mapping[str, Any]) -> str:
    package = _as_str(spec.get("package"))
    if package is not None:
        return package
    return qn.rsplit(".", 1)[0] if "." in qn else ""


def _modifiers(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(value.split())
    if isinstance(value, Sequence):
        return tuple(str(item) for item in value)
    return ()


def _require_mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ModelError(f"Expected an object in {where}")
    return value


def _require_str(spec: Mapping[str, Any], key: str, where: str) -> str:
    value = _as_str(spec.get(key))
    if not value:
        raise ModelError(f"Missing '{key}' in {where}")
    return value


def _as_list(value: Any, where: str) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise ModelError(f"Expected a list in {where}")
    return list(value)


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


__all__ = ["ModelError", "PRIMITIVE_NAMES", "load_model", "parse_model"]

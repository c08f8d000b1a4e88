"""Structural errors raised while serializing the documentation model."""

from __future__ import annotations


class SerializationError(RuntimeError):
    """Base class for failures that abort a single output document."""


class UnsupportedShapeError(SerializationError):
    """Raised when a type reference matches none of the known shapes."""

    def __init__(self, ref: object) -> None:
        super().__init__(f"Unsupported type reference: {ref!r}")
        self.ref = ref


class UnsupportedClassKindError(SerializationError):
    """Raised when a class reports a kind outside the recognized set."""

    def __init__(self, qualified_name: str, kind: object) -> None:
        super().__init__(f"Unsupported class kind {kind!r} for {qualified_name}")
        self.qualified_name = qualified_name
        self.kind = kind


class UnsupportedAnnotatedTypeError(SerializationError):
    """Raised for annotated type uses, which have no output schema yet."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Annotated type references are not supported yet: {name}")
        self.name = name


__all__ = [
    "SerializationError",
    "UnsupportedAnnotatedTypeError",
    "UnsupportedClassKindError",
    "UnsupportedShapeError",
]

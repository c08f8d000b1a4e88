"""Serializers turning the documentation model into JSON write events."""

from .classes import serialize_class, write_class
from .errors import (
    SerializationError,
    UnsupportedAnnotatedTypeError,
    UnsupportedClassKindError,
    UnsupportedShapeError,
)
from .types import serialize_type, write_type

__all__ = [
    "SerializationError",
    "UnsupportedAnnotatedTypeError",
    "UnsupportedClassKindError",
    "UnsupportedShapeError",
    "serialize_class",
    "serialize_type",
    "write_class",
    "write_type",
]

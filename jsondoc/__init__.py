"""Serialize parsed API documentation models into canonical JSON documents."""

from .emitter import DocumentEmitter, EmitReport
from .loader import ModelError, load_model, parse_model
from .serializers import serialize_class, serialize_type

__version__ = "0.1.0"

__all__ = [
    "DocumentEmitter",
    "EmitReport",
    "ModelError",
    "load_model",
    "parse_model",
    "serialize_class",
    "serialize_type",
]

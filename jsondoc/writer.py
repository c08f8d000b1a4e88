"""Event-based JSON sinks used by the serializers."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, TextIO, Union


class JsonWriterError(RuntimeError):
    """Raised when write events arrive in an order that cannot form valid JSON."""


class JsonWriter(Protocol):
    """Sink receiving a stream of structured JSON write events."""

    def start_object(self) -> None:
        """Open an object as the next value."""

    def end_object(self) -> None:
        """Close the innermost object."""

    def start_array(self) -> None:
        """Open an array as the next value."""

    def end_array(self) -> None:
        """Close the innermost array."""

    def write_field_name(self, name: str) -> None:
        """Name the next value written inside the current object."""

    def write_value(self, value: Any) -> None:
        """Write a scalar, or a sequence/mapping of scalars, as the next value."""

    def write_field(self, name: str, value: Any) -> None:
        ...

    def start_object_field(self, name: str) -> None:
        ...

    def start_array_field(self, name: str) -> None:
        ...


class _WriterBase:
    """Shared convenience events built on top of the primitive ones."""

    def start_object(self) -> None:  # pragma: no cover - overridden
        raise NotImplementedError

    def end_object(self) -> None:  # pragma: no cover - overridden
        raise NotImplementedError

    def start_array(self) -> None:  # pragma: no cover - overridden
        raise NotImplementedError

    def end_array(self) -> None:  # pragma: no cover - overridden
        raise NotImplementedError

    def write_field_name(self, name: str) -> None:  # pragma: no cover - overridden
        raise NotImplementedError

    def _write_scalar(self, value: Any) -> None:  # pragma: no cover - overridden
        raise NotImplementedError

    def write_value(self, value: Any) -> None:
        if isinstance(value, float) and not math.isfinite(value):
            raise JsonWriterError(f"Non-finite number {value!r} has no JSON representation")
        if value is None or isinstance(value, (bool, int, float, str)):
            self._write_scalar(value)
        elif isinstance(value, Mapping):
            self.start_object()
            for key, item in value.items():
                self.write_field(str(key), item)
            self.end_object()
        elif isinstance(value, Sequence):
            self.start_array()
            for item in value:
                self.write_value(item)
            self.end_array()
        else:
            raise JsonWriterError(f"Cannot write value of type {type(value).__name__}")

    def write_field(self, name: str, value: Any) -> None:
        self.write_field_name(name)
        self.write_value(value)

    def start_object_field(self, name: str) -> None:
        self.write_field_name(name)
        self.start_object()

    def start_array_field(self, name: str) -> None:
        self.write_field_name(name)
        self.start_array()


@dataclass
class _Frame:
    kind: str
    count: int = 0


class StreamJsonWriter(_WriterBase):
    """Writes JSON tokens straight to a text stream as events arrive."""

    def __init__(self, stream: TextIO, *, indent: int | None = None) -> None:
        self._stream = stream
        self._indent = indent
        self._stack: List[_Frame] = []
        self._pending_name: Optional[str] = None
        self._root_written = False

    @property
    def is_complete(self) -> bool:
        """True once a single root value has been written and closed."""
        return self._root_written and not self._stack

    def start_object(self) -> None:
        self._before_value()
        self._stream.write("{")
        self._stack.append(_Frame("object"))

    def end_object(self) -> None:
        self._close("object", "}")

    def start_array(self) -> None:
        self._before_value()
        self._stream.write("[")
        self._stack.append(_Frame("array"))

    def end_array(self) -> None:
        self._close("array", "]")

    def write_field_name(self, name: str) -> None:
        if not self._stack or self._stack[-1].kind != "object":
            raise JsonWriterError(f"Field name {name!r} written outside of an object")
        if self._pending_name is not None:
            raise JsonWriterError(f"Field {self._pending_name!r} has no value")
        self._pending_name = name

    def flush(self) -> None:
        self._stream.flush()

    def _write_scalar(self, value: Any) -> None:
        self._before_value()
        self._stream.write(json.dumps(value, ensure_ascii=False))

    def _before_value(self) -> None:
        if not self._stack:
            if self._root_written:
                raise JsonWriterError("Only one root value may be written")
            self._root_written = True
            return
        frame = self._stack[-1]
        if frame.kind == "object":
            if self._pending_name is None:
                raise JsonWriterError("Value written inside an object without a field name")
            self._separate(frame)
            self._stream.write(json.dumps(self._pending_name, ensure_ascii=False))
            self._stream.write(": " if self._indent is not None else ":")
            self._pending_name = None
        else:
            self._separate(frame)
        frame.count += 1

    def _separate(self, frame: _Frame) -> None:
        if frame.count:
            self._stream.write(",")
        self._newline(len(self._stack))

    def _close(self, kind: str, token: str) -> None:
        if not self._stack or self._stack[-1].kind != kind:
            raise JsonWriterError(f"Unbalanced end of {kind}")
        if self._pending_name is not None:
            raise JsonWriterError(f"Field {self._pending_name!r} has no value")
        frame = self._stack.pop()
        if frame.count:
            self._newline(len(self._stack))
        self._stream.write(token)

    def _newline(self, depth: int) -> None:
        if self._indent is not None:
            self._stream.write("\n" + " " * (self._indent * depth))


JsonContainer = Union[Dict[str, Any], List[Any]]


class TreeJsonWriter(_WriterBase):
    """Materializes write events as plain dicts and lists."""

    def __init__(self) -> None:
        self._stack: List[JsonContainer] = []
        self._pending_name: Optional[str] = None
        self._root: Any = None
        self._root_written = False

    @property
    def result(self) -> Any:
        if self._stack or not self._root_written:
            raise JsonWriterError("Document is not complete")
        return self._root

    def start_object(self) -> None:
        container: Dict[str, Any] = {}
        self._attach(container)
        self._stack.append(container)

    def end_object(self) -> None:
        self._close(dict)

    def start_array(self) -> None:
        container: List[Any] = []
        self._attach(container)
        self._stack.append(container)

    def end_array(self) -> None:
        self._close(list)

    def write_field_name(self, name: str) -> None:
        if not self._stack or not isinstance(self._stack[-1], dict):
            raise JsonWriterError(f"Field name {name!r} written outside of an object")
        if self._pending_name is not None:
            raise JsonWriterError(f"Field {self._pending_name!r} has no value")
        self._pending_name = name

    def _write_scalar(self, value: Any) -> None:
        self._attach(value)

    def _attach(self, value: Any) -> None:
        if not self._stack:
            if self._root_written:
                raise JsonWriterError("Only one root value may be written")
            self._root = value
            self._root_written = True
            return
        parent = self._stack[-1]
        if isinstance(parent, dict):
            if self._pending_name is None:
                raise JsonWriterError("Value written inside an object without a field name")
            parent[self._pending_name] = value
            self._pending_name = None
        else:
            parent.append(value)

    def _close(self, kind: type) -> None:
        if not self._stack or not isinstance(self._stack[-1], kind):
            raise JsonWriterError(f"Unbalanced end of {kind.__name__}")
        if self._pending_name is not None:
            raise JsonWriterError(f"Field {self._pending_name!r} has no value")
        self._stack.pop()


__all__ = ["JsonWriter", "JsonWriterError", "StreamJsonWriter", "TreeJsonWriter"]

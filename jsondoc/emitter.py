"""Emission driver: one JSON document per top-level type."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .logging import artifact_logger, get_logger
from .models import ClassEntity
from .serializers import SerializationError, write_class
from .writer import JsonWriterError, StreamJsonWriter, TreeJsonWriter

# Failures contained to the artifact being produced; anything else propagates.
_ARTIFACT_ERRORS = (SerializationError, JsonWriterError, OSError)


@dataclass
class ArtifactFailure:
    """A top-level type whose document could not be produced."""

    qualified_name: str
    error: str


@dataclass
class EmitReport:
    """Outcome of writing a batch of documents to disk."""

    written: List[Path] = field(default_factory=list)
    failures: List[ArtifactFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass
class RenderReport:
    """Outcome of materializing a batch of documents in memory."""

    documents: Dict[str, Any] = field(default_factory=dict)
    failures: List[ArtifactFailure] = field(default_factory=list)


def artifact_path(output_dir: Path, doc: ClassEntity) -> Path:
    return output_dir / f"{doc.qualified_name}.json"


class DocumentEmitter:
    """Serializes every supplied class, isolating failures per document."""

    def __init__(self, *, indent: int | None = None) -> None:
        self.indent = indent
        self.logger = get_logger("emitter")

    def emit(self, classes: Iterable[ClassEntity], output_dir: Path) -> EmitReport:
        """Write ``<qualifiedName>.json`` for each class into ``output_dir``."""
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        report = EmitReport()
        for doc in classes:
            log = artifact_logger(self.logger, doc.qualified_name)
            try:
                path = self.emit_class(doc, output_dir)
            except _ARTIFACT_ERRORS as exc:
                log.error("Failed to write document: %s", exc)
                report.failures.append(ArtifactFailure(doc.qualified_name, str(exc)))
                continue
            log.debug("Wrote %s", path)
            report.written.append(path)
        self.logger.info(
            "Wrote %d document(s) to %s, %d failed",
            len(report.written),
            output_dir,
            len(report.failures),
        )
        return report

    def emit_class(self, doc: ClassEntity, output_dir: Path) -> Path:
        """Write one document atomically; nothing is left behind on failure."""
        target = artifact_path(output_dir, doc)
        handle = tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=output_dir,
            prefix=f".{doc.qualified_name}.",
            suffix=".tmp",
            delete=False,
        )
        temp_path = Path(handle.name)
        try:
            with handle:
                writer = StreamJsonWriter(handle, indent=self.indent)
                write_class(writer, doc)
                if not writer.is_complete:
                    raise JsonWriterError(f"Incomplete document for {doc.qualified_name}")
                handle.write("\n")
                writer.flush()
            os.replace(temp_path, target)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise
        return target

    def render(self, classes: Iterable[ClassEntity]) -> RenderReport:
        """Materialize documents keyed by qualified name without touching disk."""
        report = RenderReport()
        for doc in classes:
            writer = TreeJsonWriter()
            try:
                write_class(writer, doc)
                report.documents[doc.qualified_name] = writer.result
            except (SerializationError, JsonWriterError) as exc:
                artifact_logger(self.logger, doc.qualified_name).error(
                    "Failed to render document: %s", exc
                )
                report.failures.append(ArtifactFailure(doc.qualified_name, str(exc)))
        return report


__all__ = [
    "ArtifactFailure",
    "DocumentEmitter",
    "EmitReport",
    "RenderReport",
    "artifact_path",
]

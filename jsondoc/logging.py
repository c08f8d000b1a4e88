"""Logging utilities for jsondoc commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "jsondoc"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the jsondoc hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class ArtifactLogger(logging.LoggerAdapter):
    """Prefixes messages with the qualified name of the document being produced."""

    def process(self, msg, kwargs):
        return f"[{self.extra['artifact']}] {msg}", kwargs


def artifact_logger(logger: logging.Logger, qualified_name: str) -> ArtifactLogger:
    return ArtifactLogger(logger, {"artifact": qualified_name})


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the jsondoc logger with console output and optional file sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI runs more than once.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[jsondoc] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["ArtifactLogger", "artifact_logger", "configure_logging", "get_logger"]

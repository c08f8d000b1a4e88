"""CLI entrypoints for jsondoc commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .emitter import DocumentEmitter
from .loader import ModelError, load_model
from .logging import configure_logging


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsondoc",
        description="Serialize a parsed API documentation model into one JSON file per type.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    emit_parser = subparsers.add_parser(
        "emit",
        help="Write <qualifiedName>.json for every top-level type in a model dump.",
    )
    _add_verbose_option(emit_parser, suppress_default=True)
    emit_parser.add_argument(
        "model",
        help="Path to the documentation model dump (JSON).",
    )
    emit_parser.add_argument(
        "-d",
        "--output-dir",
        default=None,
        help="Directory receiving the JSON documents (defaults to the config or current directory).",
    )
    emit_parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Pretty-print documents with the given indent width.",
    )
    emit_parser.add_argument(
        "--config",
        default=".",
        help="Path to .jsondoc.yml or the directory containing it.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing the serializer.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for jsondoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "emit":
        try:
            config = load_config(Path(args.config))
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        configure_logging(verbose=bool(args.verbose), log_file=config.log_file)

        try:
            model = load_model(Path(args.model))
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except ModelError as exc:
            parser.exit(1, f"jsondoc emit failed: {exc}\n")

        output_dir = Path(args.output_dir) if args.output_dir else config.output_dir
        indent = args.indent if args.indent is not None else config.indent
        emitter = DocumentEmitter(indent=indent)
        try:
            report = emitter.emit(model.classes, output_dir)
        except OSError as exc:
            parser.exit(1, f"jsondoc emit failed: {exc}\nRun with --verbose for more details.\n")

        print(f"Wrote {len(report.written)} document(s) to {_relativize(output_dir)}")
        if not report.ok:
            for failure in report.failures:
                print(f"  failed: {failure.qualified_name}: {failure.error}", file=sys.stderr)
            parser.exit(1, f"{len(report.failures)} document(s) could not be written\n")
    elif args.command == "serve":
        configure_logging(verbose=bool(args.verbose))
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])

"""CLI entrypoints for repolens commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .analyzers import discover_scanners
from .collector import FileCollector
from .config import ConfigError, load_config
from .engine import HeuristicEngine
from .logging import configure_logging, get_logger
from .models import SEVERITIES
from .report import build_evidence, exceeds_severity, render_text

_FAIL_EXIT_CODE = 2


def _add_verbosity_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    default: object = argparse.SUPPRESS if suppress_default else False
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Only log warnings and errors.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repolens",
        description="Heuristic security, bug, performance and duplication analysis for source trees.",
    )
    _add_verbosity_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser(
        "scan",
        help="Analyze the source files under a directory.",
    )
    _add_verbosity_options(scan_parser, suppress_default=True)
    scan_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the repository root (defaults to current directory).",
    )
    scan_parser.add_argument(
        "--max-pairs",
        type=int,
        default=None,
        help="Upper bound on file pairs compared for duplicates (default from config or 8000).",
    )
    scan_parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format for the report.",
    )
    scan_parser.add_argument(
        "--evidence",
        action="store_true",
        help="Emit the compact evidence payload instead of the full summary (JSON only).",
    )
    scan_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the report to a file instead of stdout.",
    )
    scan_parser.add_argument(
        "--fail-on",
        choices=SEVERITIES,
        default=None,
        help=f"Exit with status {_FAIL_EXIT_CODE} when an issue at or above this severity is found.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP analysis service.",
    )
    _add_verbosity_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default=None, help="Interface to bind (default from config).")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to bind (default from config).")
    serve_parser.add_argument(
        "--config",
        type=Path,
        default=Path("."),
        help="Directory or .repolens.yml file holding service settings.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for repolens commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    if args.command == "scan":
        _run_scan(parser, args)
    elif args.command == "serve":
        _run_serve(parser, args)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_scan(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    logger = get_logger("cli")
    if args.max_pairs is not None and args.max_pairs < 0:
        parser.error("--max-pairs must not be negative")
    if args.evidence and args.format != "json":
        parser.error("--evidence requires --format json")

    try:
        config = load_config(Path(args.path))
        files = FileCollector(config.collect).collect(args.path)
        scanners = discover_scanners(config.analysis.scanners)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except (ConfigError, ValueError, TypeError, RuntimeError) as exc:
        parser.exit(1, f"repolens scan failed: {exc}\nRun with --verbose for more details.\n")

    max_pairs = args.max_pairs if args.max_pairs is not None else config.analysis.max_pairs
    logger.info("Scanning %d files under %s", len(files), config.root)
    summary = HeuristicEngine(scanners, max_pairs=max_pairs).analyze(files)

    if args.format == "json":
        payload = build_evidence(summary) if args.evidence else summary.to_dict()
        rendered = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
    else:
        rendered = render_text(summary)

    if args.output is not None:
        args.output.write_text(rendered, encoding="utf-8")
        logger.info("Report written to %s", _relativize(args.output))
    else:
        sys.stdout.write(rendered)

    if args.fail_on is not None and exceeds_severity(summary, args.fail_on):
        parser.exit(_FAIL_EXIT_CODE)


def _run_serve(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    from .service import run_service

    try:
        config = load_config(args.config)
        host = args.host or config.service.host
        port = args.port or config.service.port
        run_service(host=host, port=port, config=config)
    except ConfigError as exc:
        parser.exit(1, f"repolens serve failed: {exc}\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])

# src/main.py — v1
"""CLI entry point — serve, refresh, ask commands.

Usage:
    bankchat serve [--host HOST] [--port PORT]
    bankchat refresh
    bankchat ask "<question>" [--analysis-type TYPE] [--no-documents]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import TYPE_CHECKING

from bankchat.version import __version__

if TYPE_CHECKING:
    from bankchat.config.settings import Settings

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    from bankchat.config.settings import ConfigurationError, load_settings

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    _setup_logging(settings, args.verbose)

    try:
        return args.func(args, settings)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="bankchat",
        description=f"bankchat v{__version__} - banking analytics chatbot backend",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- serve ---
    p_serve = subparsers.add_parser("serve", help="Run the HTTP server")
    p_serve.add_argument("--host", default=None, help="Bind address (default: HOST)")
    p_serve.add_argument("--port", type=int, default=None, help="Port (default: PORT)")
    p_serve.set_defaults(func=_cmd_serve)

    # --- refresh ---
    p_refresh = subparsers.add_parser(
        "refresh", help="Load the documents folder and print cache stats",
    )
    p_refresh.set_defaults(func=_cmd_refresh)

    # --- ask ---
    p_ask = subparsers.add_parser("ask", help="Answer a single question")
    p_ask.add_argument("question", help="Question to ask")
    p_ask.add_argument(
        "-t", "--analysis-type", default=None,
        help="Analysis type: rate-risk, net-interest (default: generic)",
    )
    p_ask.add_argument(
        "--no-documents", action="store_true",
        help="Do not include the document context",
    )
    p_ask.add_argument("--model", default=None, help="Model override")
    p_ask.set_defaults(func=_cmd_ask)

    return parser


def _cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    """Run the FastAPI app under uvicorn."""
    import uvicorn

    from bankchat.api.app import create_app

    app = create_app(settings=settings)
    host = args.host or settings.host
    port = args.port or settings.port
    logger.info("Server running on http://%s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_config=None)
    return 0


def _cmd_refresh(args: argparse.Namespace, settings: Settings) -> int:
    """Force-load the documents folder once and print the resulting stats."""
    from bankchat.cache.document_cache import DocumentContextCache

    cache = DocumentContextCache.from_settings(settings)
    asyncio.run(cache.force_refresh())
    stats = cache.stats()
    report = stats.last_report

    print(f"\nDocuments folder: {stats.documents_folder}")
    if report is not None:
        print(f"  Files found:     {report.files_found}")
        print(f"  Processed:       {report.files_processed}")
        print(f"  Failed:          {report.failure_count}")
        for failure in report.failures:
            print(f"    - {failure.relative_path}: {failure.error}")
    print(f"  Content length:  {stats.content_length}")
    print(f"  Fingerprint:     {stats.content_fingerprint}")
    return 0


def _cmd_ask(args: argparse.Namespace, settings: Settings) -> int:
    """Answer one question through the same service the server uses."""
    from bankchat.api.app import build_service
    from bankchat.chat.models import ChatRequest

    service = build_service(settings)
    request = ChatRequest(
        question=args.question,
        analysis_kind=args.analysis_type,
        include_document_context=not args.no_documents,
        model=args.model,
    )
    result = asyncio.run(service.answer(request))
    if result.success:
        print(result.answer_text)
        return 0

    print(
        json.dumps({"error": result.error_message, "error_category": result.error_category.value}),
        file=sys.stderr,
    )
    return 1


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage from settings."""
    from bankchat.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())

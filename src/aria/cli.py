"""CLI entry point for Aria."""

import argparse
import asyncio
import logging
import sys

from aria.config import Settings, build_controller
from aria.errors import AriaError
from aria.models import ChatRole, RawFile
from aria.pipeline import prepare_file
from aria.session import SessionController
from aria.truncators import WindowTruncator
from aria.utils import SUPPORTED_EXTENSIONS

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
    )


def load_files(paths: list[str]) -> list[RawFile]:
    """Read local paths into RawFiles, skipping ones that cannot be read."""
    files = []
    for path in paths:
        try:
            files.append(RawFile.from_path(path))
        except OSError as e:
            logger.error(f"Cannot read {path}: {e.strerror or e}")
    return files


def print_transcript(controller: SessionController, start: int = 0) -> None:
    """Print transcript entries from ``start`` onwards."""
    labels = {
        ChatRole.SYSTEM: "--",
        ChatRole.USER: "you>",
        ChatRole.ASSISTANT: "aria>",
    }
    for turn in controller.state.transcript[start:]:
        print(f"{labels[turn.role]} {turn.text}")
        print()


async def _analyze(controller: SessionController, questions: list[str]) -> int:
    reply = await controller.run_analysis()
    print_transcript(controller)
    if reply is None:
        logger.error(f"Analysis failed: {controller.state.last_error}")
        return 1

    for question in questions:
        start = len(controller.state.transcript)
        await controller.send_message(question)
        print_transcript(controller, start)
    return 0


def analyze(paths: list[str], questions: list[str], settings: Settings) -> None:
    """Analyze files in one batch, then ask follow-up questions.

    Args:
        paths: Files to upload
        questions: Follow-up chat messages, sent in order
        settings: Runtime configuration
    """
    controller = build_controller(settings)
    for warning in controller.queue_files(load_files(paths)):
        print(f"warning: {warning}", file=sys.stderr)

    if not controller.state.pending_files:
        logger.error("No supported files to analyze")
        logger.error(f"Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}")
        sys.exit(1)

    logger.info(f"Analyzing {len(controller.state.pending_files)} file(s) with {settings.model}")
    status = asyncio.run(_analyze(controller, questions))
    if status:
        sys.exit(status)


def inspect(paths: list[str], max_chars: int) -> None:
    """Show what each file looks like after extraction and truncation.

    Runs offline; nothing is sent to the analysis service.
    """
    truncator = WindowTruncator(max_chars)
    failures = 0

    for raw in load_files(paths):
        try:
            prepared = prepare_file(raw, truncator)
        except AriaError as e:
            print(f"{raw.name}: {e}")
            failures += 1
            continue

        extraction = prepared.extraction
        print(f"{raw.name}")
        print(f"  Kind: {extraction.kind.value}")
        print(f"  Size: {raw.size_bytes / 1024:.1f} KB")
        for key, value in extraction.counters().items():
            print(f"  {key.replace('_', ' ').capitalize()}: {value:,}")
        print(f"  Extracted: {len(extraction.text):,} chars")
        print(f"  Sent: {len(prepared.text):,} chars{' (truncated)' if prepared.was_truncated else ''}")
        print()

    if failures:
        sys.exit(1)


def chat(settings: Settings) -> None:
    """Launch the interactive console."""
    # Import here to avoid loading Textual unless needed
    from aria.console import main as console_main

    console_main(build_controller(settings))


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="aria",
        description="Aria - sales and receivables analysis from your files",
    )
    parser.add_argument("--model", help="Model identifier (default: $ARIA_MODEL)")
    parser.add_argument(
        "--max-chars",
        type=int,
        help="Per-file character budget (default: $ARIA_MAX_CHARS or 15000)",
    )
    parser.add_argument("--log-level", help="Logging level (default: $ARIA_LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # analyze command
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyze files in one batch and print the conversation",
    )
    analyze_parser.add_argument("files", nargs="+", help="Files to analyze")
    analyze_parser.add_argument(
        "-q",
        "--ask",
        action="append",
        default=[],
        metavar="QUESTION",
        help="Follow-up question (repeatable)",
    )

    # inspect command
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Show extraction and truncation results without calling the API",
    )
    inspect_parser.add_argument("files", nargs="+", help="Files to inspect")

    # chat command
    subparsers.add_parser(
        "chat",
        help="Launch the interactive console",
    )

    args = parser.parse_args()

    try:
        settings = Settings.from_env().override(
            model=args.model,
            max_chars_per_file=args.max_chars,
            log_level=args.log_level,
        )
    except ValueError as e:
        parser.error(str(e))
    if settings.max_chars_per_file <= 0:
        parser.error("--max-chars must be positive")

    configure_logging(settings.log_level)

    if args.command == "analyze":
        analyze(args.files, args.ask, settings)
    elif args.command == "inspect":
        inspect(args.files, settings.max_chars_per_file)
    elif args.command == "chat":
        chat(settings)


if __name__ == "__main__":
    main()

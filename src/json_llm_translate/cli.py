"""Command-line interface for json-llm-translate."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from . import __version__
from .analyzer import DEFAULT_CHUNK_SIZE, EFFECTIVE_CEILING
from .client import create_client
from .config import LOG_LEVEL, TRANSLATION_MODEL
from .exceptions import JsonTranslateError
from .logging_config import setup_logging
from .style_guide import load_style_guide
from .translator import JsonTranslator


def chunk_size_type(value: str) -> int:
    """argparse type for --chunk-size: a positive integer below the effective ceiling."""
    try:
        size = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if size <= 0 or size >= EFFECTIVE_CEILING:
        raise argparse.ArgumentTypeError(
            f"must be a positive integer less than {EFFECTIVE_CEILING}, got {size}"
        )
    return size


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json-llm-translate",
        description="Translate the string values of a JSON file using OpenAI's API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Translate to Spanish, writing messages_es.json next to the input
  json-llm-translate -f ./locales/messages.json -l es

  # With a style guide and smaller chunks
  json-llm-translate -f ./locales/messages.json -l de -s ./style-guide.json -c 1000

  # Show how the file would be split without making API calls
  json-llm-translate -f ./locales/messages.json -l fr --dry-run

Environment Variables:
  OPENAI_API_KEY              Your OpenAI API key (required)
  OPENAI_TRANSLATION_MODEL    Model used for translation
        """,
    )

    parser.add_argument(
        "-f",
        "--file",
        type=Path,
        required=True,
        help="Path to the source JSON file",
    )

    parser.add_argument(
        "-l",
        "--locale",
        type=str,
        required=True,
        help="Target locale code (e.g. es, de, pt-BR)",
    )

    parser.add_argument(
        "-s",
        "--style-guide",
        type=Path,
        default=None,
        help="Path to a JSON style guide file",
    )

    parser.add_argument(
        "-c",
        "--chunk-size",
        type=chunk_size_type,
        default=DEFAULT_CHUNK_SIZE,
        help=f"Target tokens per request (default: {DEFAULT_CHUNK_SIZE}, must be below {EFFECTIVE_CEILING})",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output path (default: <name>_<locale>.json next to the input file)",
    )

    parser.add_argument(
        "-m",
        "--model",
        type=str,
        default=TRANSLATION_MODEL,
        help=f"OpenAI model to use (default: {TRANSLATION_MODEL})",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be translated without making API calls",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=LOG_LEVEL,
        help=f"Logging level (default: {LOG_LEVEL})",
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    # Load environment variables from .env file in current working directory
    load_dotenv(find_dotenv(usecwd=True))

    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    if not args.file.is_file():
        print(f"Error: File does not exist: {args.file}", file=sys.stderr)
        return 1

    try:
        style_guide = load_style_guide(args.style_guide)

        if args.dry_run:
            translator = JsonTranslator(None, args.locale, style_guide, chunk_size=args.chunk_size)
            plan = translator.plan_file(args.file, args.output)
            print("Dry run mode - no translations will be performed.")
            print(f"  Output file: {plan['output_file']}")
            print(f"  Keys to translate: {plan['translated_keys']}")
            print(f"  Estimated tokens: {plan['total_tokens']}")
            print(f"  Chunks: {plan['chunks']}")
            return 0

        client = create_client(model=args.model)
        translator = JsonTranslator(client, args.locale, style_guide, chunk_size=args.chunk_size)
        result = asyncio.run(translator.translate_file(args.file, args.output))
    except (JsonTranslateError, OSError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130

    if result["skipped"]:
        print(f"Nothing to translate, {result['output_file']} is up to date")
    else:
        print(f"Translation saved to: {result['output_file']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

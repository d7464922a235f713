"""
Leto command line.

Turns a web page or a saved JSON file into a reading state and prints it in
the serialized save format.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from leto.errors import ReaderError
from leto.models import (
    ExtractionMethod,
    ExtractionRequest,
    PathSelectOptions,
    ReadingState,
    ReadingStateSource,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="leto", description="Prepare texts for speed reading."
    )
    commands = parser.add_subparsers(dest="command", required=True)

    scrape = commands.add_parser("scrape", help="Extract the text of a web page.")
    scrape.add_argument("url")
    scrape.add_argument("--path", help="XPath selecting the text to read.")
    scrape.add_argument(
        "--select-all",
        action="store_true",
        help="Join every node matching --path instead of the first one.",
    )

    imp = commands.add_parser("import", help="Load a saved reading state.")
    imp.add_argument("file", type=Path)
    imp.add_argument(
        "--source",
        default=ReadingStateSource.JSON_IMPORT.name,
        help="Source to assume when the file does not name one.",
    )
    imp.add_argument("--format-version", help="Format version recorded in the log.")
    return parser


def run(args: argparse.Namespace) -> ReadingState:
    """Executes a parsed command and returns the resulting state."""
    if args.command == "scrape":
        request = ExtractionRequest(url=args.url)
        if args.path:
            request.method = ExtractionMethod.PATH_SELECT
            request.path_select_options = PathSelectOptions(args.path, args.select_all)
        return asyncio.run(ReadingState.scrape_from_web(request))

    try:
        fallback_source = ReadingStateSource.parse(args.source)
    except ValueError as e:
        raise ReaderError(str(e)) from e
    payload = args.file.read_text(encoding="utf-8")
    return ReadingState.import_from_serialized(
        payload,
        fallback_source,
        f"Imported from {args.file.name}",
        version=args.format_version,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution entry point."""
    args = build_parser().parse_args(argv)

    try:
        state = run(args)
    except (ReaderError, OSError) as e:
        logger.error("%s", e)
        return 1

    print(state.export_to_serialized())
    return 0


if __name__ == "__main__":
    sys.exit(main())

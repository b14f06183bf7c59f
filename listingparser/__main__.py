"""CLI entry point: python -m listingparser CANDIDATES.json [options]"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from listingparser import settings
from listingparser.config import DEFAULT_CONFIG, ConfigError, ExtractionConfig, load_config
from listingparser.items import ExtractedListing, ListingCandidates
from listingparser.listing import extract_candidates
from listingparser.rewrite import build_rewrite_prompt

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="listingparser",
        description=(
            "Clean scraped product-page text into a title, feature bullets and a\n"
            "description. Input is a JSON document of raw candidates per field."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("candidates", metavar="CANDIDATES",
                        help="JSON file with title_candidates, bullet_blobs, "
                             "description_candidates and script_texts ('-' for stdin)")
    parser.add_argument("--profile", default=None, metavar="YAML",
                        help="YAML profile with extraction thresholds")
    parser.add_argument("--url", default=None, metavar="URL",
                        help="Listing URL used to pick the profile's domain section "
                             "(default: source_url from the candidates file)")
    parser.add_argument("--max-bullets", type=int, default=None, metavar="N",
                        help=f"Maximum bullets to keep (default: {settings.MAX_BULLETS})")
    parser.add_argument("--prompt", action="store_true", default=False,
                        help="Also print the rewrite prompt built from the result")
    parser.add_argument("--pretty", action="store_true", default=False,
                        help="Render the result as a Rich panel instead of JSON")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help=f"Logging level (default: {settings.LOG_LEVEL})")
    return parser


def _read_candidates(source: str) -> ListingCandidates:
    raw = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    return ListingCandidates.model_validate(json.loads(raw))


def _resolve_config(args: argparse.Namespace, candidates: ListingCandidates) -> ExtractionConfig:
    config = DEFAULT_CONFIG
    if args.profile:
        config = load_config(args.profile, url=args.url or candidates.source_url)
    if args.max_bullets is not None:
        config = config.model_copy(update={"max_bullets": max(1, args.max_bullets)})
    return config


def _print_pretty(console: Console, listing: ExtractedListing) -> None:
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column(style="bold cyan", no_wrap=True)
    table.add_column()
    table.add_row("Title", escape(listing.title) if listing.title else "[dim]none[/dim]")
    for i, bullet in enumerate(listing.bullets, 1):
        table.add_row(f"Bullet {i}", escape(bullet))
    if not listing.bullets:
        table.add_row("Bullets", "[dim]none[/dim]")
    table.add_row("Description", escape(listing.description) if listing.description else "[dim]none[/dim]")
    style = "red" if listing.is_empty else "green"
    console.print(Panel(table, title="[bold]Extracted listing[/bold]", border_style=style))


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format=settings.LOG_FORMAT)

    try:
        candidates = _read_candidates(args.candidates)
    except (OSError, ValueError, ValidationError) as exc:
        print(f"ERROR: Could not read candidates {args.candidates}: {exc}", file=sys.stderr)
        return 1

    try:
        config = _resolve_config(args, candidates)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    listing = extract_candidates(candidates, config=config)

    if args.pretty:
        console = Console()
        _print_pretty(console, listing)
        if args.prompt:
            prompt = build_rewrite_prompt(listing)
            console.print(Panel(escape(prompt.user), title="[bold]Rewrite prompt[/bold]",
                                border_style="cyan"))
    else:
        payload: dict = {"listing": listing.model_dump(mode="json")}
        if args.prompt:
            prompt = build_rewrite_prompt(listing)
            payload["prompt"] = {"system": prompt.system, "user": prompt.user}
        print(json.dumps(payload, indent=2, ensure_ascii=False))

    if listing.is_empty:
        logger.warning("No usable content in %s", args.candidates)
    return 0


if __name__ == "__main__":
    sys.exit(main())

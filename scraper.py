"""Carzone listing scraper with CLI support.

Fetches each listing URL in turn, extracts the listing fields, prints them as
a table and optionally saves them as CSV or Excel.
"""
import argparse
import logging
import sys
from typing import Callable, Optional, Sequence

import requests

from extractor import extract_listing, load_selector_config, SelectorConfig
from exporter import DataExporter, ExportFormat
from fetcher import fetch_html, FetchConfig
from tables import render
from models import ListingRecord

logger = logging.getLogger(__name__)

EXPORT_CHOICES = {
    "csv": ExportFormat.CSV,
    "excel": ExportFormat.EXCEL,
    "none": None,
}


def parse_url_list(text: str) -> list[str]:
    """Split a comma-separated list of URLs, dropping blank entries."""
    return [url.strip() for url in text.split(",") if url.strip()]


def scrape_listing(
    url: str,
    fetch_config: Optional[FetchConfig] = None,
    selector_config: Optional[SelectorConfig] = None,
    session: Optional[requests.Session] = None,
) -> ListingRecord:
    """Scrape one listing; failures come back as an error record."""
    try:
        result = fetch_html(url, config=fetch_config, session=session)
        if result.success:
            return extract_listing(result.html, url, config=selector_config)
        message = result.error
    except Exception as e:
        message = str(e) or e.__class__.__name__

    logger.error(f"Error scraping {url}: {message}")
    return ListingRecord.from_error(url, message)


def scrape_listings(
    urls: Sequence[str],
    fetch_config: Optional[FetchConfig] = None,
    selector_config: Optional[SelectorConfig] = None,
) -> list[ListingRecord]:
    """Scrape listings sequentially.

    Returns one record per URL, in input order. A URL that fails produces a
    record whose name holds the error message and every other field "N/A".
    """
    records = []
    with requests.Session() as session:
        for url in urls:
            logger.info(f"Scraping: {url}")
            records.append(scrape_listing(url, fetch_config, selector_config, session))

    failed = sum(1 for record in records if record.name.startswith("Error: "))
    logger.debug(f"Scraped {len(records) - failed}/{len(records)} listings")
    return records


def prompt_urls(prompt: Optional[Callable[[str], str]] = None) -> list[str]:
    prompt = prompt or input
    return parse_url_list(prompt("Enter a comma-separated list of car URLs: "))


def prompt_export_format(prompt: Optional[Callable[[str], str]] = None) -> Optional[ExportFormat]:
    """Ask which file type to save as. Empty input means no export."""
    prompt = prompt or input
    question = (
        "Would you like to save the results as a file? "
        "If so, select the file type [CSV/Excel/None] (default: None): "
    )
    while True:
        answer = prompt(question).strip().lower() or "none"
        if answer in EXPORT_CHOICES:
            return EXPORT_CHOICES[answer]
        print(f"Please choose one of: CSV, Excel, None (got {answer!r})")


def run(
    urls: Sequence[str],
    export: Optional[str] = None,
    output_dir: Optional[str] = None,
    fetch_config: Optional[FetchConfig] = None,
    selector_config: Optional[SelectorConfig] = None,
    prompt: Optional[Callable[[str], str]] = None,
) -> Optional[str]:
    """Run the pipeline: scrape -> print table -> optional export.

    Args:
        urls: Listing URLs to scrape
        export: "csv", "excel" or "none"; prompts the user if None
        output_dir: Directory for the exported file (default: current directory)
        fetch_config: Network settings
        selector_config: Field selector table
        prompt: Function used to ask the user questions (default: input)

    Returns:
        Path to the exported file, or None if nothing was written
    """
    records = scrape_listings(urls, fetch_config, selector_config)
    rendered = render(records)
    print(rendered.console_table)

    if export is None:
        fmt = prompt_export_format(prompt)
    else:
        fmt = EXPORT_CHOICES[export.lower()]
    if fmt is None:
        return None

    path = DataExporter(output_dir=output_dir).export(rendered, fmt)
    print(f"Results saved to {path}")
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Carzone scraper - fetch used-car listings and export them as a table"
    )
    parser.add_argument(
        "urls",
        nargs="*",
        help="Listing URLs (comma-separated values allowed); prompts if omitted",
    )
    parser.add_argument(
        "--export",
        choices=sorted(EXPORT_CHOICES),
        type=str.lower,
        help="Save results without asking (csv, excel or none)",
    )
    parser.add_argument(
        "-o", "--output-dir",
        default=None,
        help="Directory for car_details.csv/.xlsx (default: current directory)",
    )
    parser.add_argument(
        "--selectors",
        metavar="PATH",
        help="JSON file overriding the field selector rules",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Request timeout in seconds (default: 30)",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=1,
        help="Attempts per URL (default: 1, no retries)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        selector_config = load_selector_config(args.selectors) if args.selectors else None
        fetch_config = FetchConfig(timeout=args.timeout, retries=args.retries)

        urls = parse_url_list(",".join(args.urls)) if args.urls else prompt_urls()
        if not urls:
            logger.warning("No URLs given, nothing to scrape")
            return

        run(
            urls,
            export=args.export,
            output_dir=args.output_dir,
            fetch_config=fetch_config,
            selector_config=selector_config,
        )
    except KeyboardInterrupt:
        logger.error("Interrupted")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

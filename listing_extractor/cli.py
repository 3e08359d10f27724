#!/usr/bin/env python3
"""
Command-line entry point: extract listings from a saved page or a live URL.
"""
import argparse
import asyncio
import json
import os
import sys

from .core import run_scrape
from .database import db_connect, db_init, save_scrape
from .export import save_output_rows
from .extract import extract_listings
from .models import PROFILES, ExtractionParams, RawPageContent, ScrapeResult
from .utils import init_logger, now_iso


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Extract real-estate listings from scraped page text")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--markdown-file", type=str, help="Path to a markdown file of page content ('-' for stdin)")
    src.add_argument("--url", type=str, help="Scrape this URL through the provider first")
    ap.add_argument("--location", type=str, default="", help="Location, e.g. 'Austin, TX'")
    ap.add_argument("--property-type", type=str, default="", help="Property type, e.g. 'house'")
    ap.add_argument("--min-price", type=str, default="", help="Minimum price")
    ap.add_argument("--max-price", type=str, default="", help="Maximum price")
    ap.add_argument("--distance-from", type=str, default="", help="Reference point for distance")
    ap.add_argument("--max-distance", type=str, default="", help="Maximum distance")
    ap.add_argument("--profile", choices=sorted(PROFILES), default="general",
                    help="Extraction profile (record cap and preview length)")
    ap.add_argument("--db", type=str, default="", help="Path to SQLite DB; saves the scrape when set")
    ap.add_argument("--user-id", type=str, default=os.getenv("LISTINGS_USER_ID", ""),
                    help="User id the saved scrape belongs to (required with --db)")
    ap.add_argument("--out", type=str, default="", help="CSV/XLSX to export; prints JSON when omitted")
    # Logging
    lvl_choices = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    ap.add_argument("--log-level", choices=lvl_choices, default=None,
                    help="Global log level for both console and file (overrides --log-console/--log-file).")
    ap.add_argument("--log-console", choices=lvl_choices, default=os.getenv("LOG_CONSOLE", "WARNING"),
                    help="Console log level (default from env LOG_CONSOLE or WARNING).")
    ap.add_argument("--log-file", choices=lvl_choices, default=os.getenv("LOG_FILE", "DEBUG"),
                    help="File log level (default from env LOG_FILE or DEBUG).")
    ap.add_argument("--log-file-path", default=os.getenv("LOG_FILE_PATH", "listing_extractor.log"),
                    help="Path to log file (default from env LOG_FILE_PATH or listing_extractor.log).")
    ap.add_argument("--no-file-log", action="store_true",
                    help="Disable file logging (only console output).")

    args = ap.parse_args(argv)
    if args.db and not args.user_id:
        ap.error("--user-id is required when --db is set")
    return args


def read_markdown(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as fh:
        return fh.read()


def main(argv=None):
    args = parse_args(argv)
    eff_console = args.log_level or args.log_console
    eff_file = args.log_level or args.log_file
    logger = init_logger(
        console_level=eff_console,
        file_level=eff_file,
        log_file=None if args.no_file_log else args.log_file_path
    )
    logger.info(f">>> Run started at {now_iso()}")

    params = ExtractionParams.from_mapping({
        "location": args.location,
        "property_type": args.property_type,
        "min_price": args.min_price,
        "max_price": args.max_price,
        "distance_from": args.distance_from,
        "max_distance": args.max_distance,
    })
    profile = PROFILES[args.profile]

    if args.url:
        result = asyncio.run(run_scrape(args.url, params, profile=profile, logger=logger))
    else:
        content = RawPageContent(markdown=read_markdown(args.markdown_file))
        listings = extract_listings(content, params, profile)
        result = ScrapeResult(url=args.markdown_file, params=params, content=content, listings=listings)
    logger.info(f">>> Extracted {len(result.listings)} listing(s), limit {profile.record_limit}")

    if args.db:
        os.makedirs(os.path.dirname(args.db) or ".", exist_ok=True)
        conn = db_connect(args.db)
        try:
            db_init(conn)
            scrape_id = save_scrape(conn, args.user_id, result)
            logger.info(f">>> Saved scrape #{scrape_id} for user {args.user_id} to {args.db}")
        finally:
            conn.close()

    if args.out:
        save_output_rows(result.listings, args.out, logger)
    else:
        json.dump([r.to_dict() for r in result.listings], sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")


if __name__ == "__main__":
    main()

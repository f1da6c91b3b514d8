#!/usr/bin/env python3
"""
Data download CLI.

Downloads daily bars for tickers into data/tickers/ and updates cached files.
"""
import argparse
import sys

from predictor.data.download import download_ticker
from predictor.data.loader import list_available_tickers
from predictor.shared.defaults import DEFAULT_START_DATE
from cli.predict import setup_logging


def update_all_tickers(force_refresh: bool = False, start_date: str = DEFAULT_START_DATE) -> int:
    """
    Update all tickers in data/tickers/ directory.

    Returns:
        Number of tickers successfully updated
    """
    tickers = list_available_tickers()
    if not tickers:
        print("No tickers found in data/tickers/ to update")
        return 0

    print(f"\nUpdating {len(tickers)} tickers...")
    updated = 0
    failed = []
    for ticker in tickers:
        try:
            download_ticker(ticker, force_refresh=force_refresh, start_date=start_date)
            updated += 1
        except Exception as e:
            failed.append(ticker)
            print(f"  ✗ {ticker}: {e}")

    print(f"Updated {updated}/{len(tickers)} tickers")
    if failed:
        print(f"Failed: {', '.join(failed[:5])}{' ...' if len(failed) > 5 else ''}")
    return updated


def main():
    parser = argparse.ArgumentParser(
        description="Download daily bars for tickers from Yahoo Finance",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Download one ticker
    python -m cli.download AAPL

    # Download several, from a given date
    python -m cli.download HINDALCO.NS TATASTEEL.NS --start-date 2020-01-01

    # Refresh everything already in data/tickers/
    python -m cli.download --update-all
        """
    )
    parser.add_argument("tickers", nargs="*", help="Yahoo Finance ticker symbols")
    parser.add_argument("--update-all", action="store_true", help="Update every ticker in data/tickers/")
    parser.add_argument("--list", "-l", action="store_true", help="List downloaded tickers")
    parser.add_argument("--refresh", "-r", action="store_true", help="Force refresh (re-download even if cached)")
    parser.add_argument(
        "--start-date", "-s",
        default=DEFAULT_START_DATE,
        help=f"Start date for historical data (default: {DEFAULT_START_DATE})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging (DEBUG level)")
    args = parser.parse_args()
    setup_logging(args.verbose)

    if args.list:
        tickers = list_available_tickers()
        print("\n".join(tickers) if tickers else "No tickers downloaded yet")
        return 0

    if args.update_all:
        update_all_tickers(force_refresh=args.refresh, start_date=args.start_date)
        return 0

    if not args.tickers:
        parser.error("give at least one ticker, or --update-all / --list")

    exit_code = 0
    for ticker in args.tickers:
        try:
            df, used_cache = download_ticker(ticker, force_refresh=args.refresh, start_date=args.start_date)
            state = "cached" if used_cache else "downloaded"
            print(f"  ✓ {ticker}: {len(df)} rows ({state})")
        except Exception as e:
            print(f"  ✗ {ticker}: {e}", file=sys.stderr)
            exit_code = 1
    return exit_code


if __name__ == "__main__":
    sys.exit(main())

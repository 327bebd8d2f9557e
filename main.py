#!/usr/bin/env python3
"""
================================================================================
MAIN.PY - ENTRY POINT
================================================================================
PURPOSE: Build the site's JSON files from the Google Sheet in one pass.

WORKFLOW:
  1. Load and validate configuration (fail fast)
  2. Authenticate with Google Sheets (read-only)
  3. Build translations.json, then interpretation.json
  4. Print a completion report

USAGE:
  python main.py                         # Build into ./site
  python main.py --output-dir public     # Custom output directory
  python main.py --env-file ci.env       # Load settings from another .env
================================================================================
"""

import sys
import argparse
from pathlib import Path

from sheetbuild import (
    ConfigError, load_config,
    log_msg, print_header, print_separator, print_fatal,
    authenticate_google, SheetsFetcher,
    run_build, summarize,
)


def main(argv=None):
    """
    PURPOSE: Main entry point for the build.

    RETURNS:
      int: Exit code (0 = success, 1 = configuration or unexpected error)
    """
    parser = argparse.ArgumentParser(
        description="Build translations.json / interpretation.json from Google Sheets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                       # Build into ./site
  python main.py --output-dir public   # Custom output directory
        """
    )
    parser.add_argument(
        "--output-dir", type=Path, default=None,
        help="Directory for the JSON files (default: OUTPUT_DIR or ./site)"
    )
    parser.add_argument(
        "--env-file", type=Path, default=None,
        help="Optional .env file to load before reading the environment"
    )
    args = parser.parse_args(argv)

    # ========== CONFIGURATION ==========
    try:
        config = load_config(env_file=args.env_file, output_dir=args.output_dir)
    except ConfigError as e:
        print_fatal(str(e))
        return 1

    log_msg(f"[INFO] Using Sheet ID {config.masked_sheet_id}")

    # ========== BUILD ==========
    try:
        client = authenticate_google(config)
        fetcher = SheetsFetcher(client, config.sheet_id)

        log_msg(f"[INFO] Building JSON into {config.output_dir}/ ...")
        print_separator()
        report = run_build(config, fetcher)
    except ConfigError as e:
        print_fatal(str(e))
        return 1
    except Exception as e:
        print_fatal(f"Build error: {e}")
        return 1

    # ========== FINAL REPORT ==========
    print_separator()
    log_msg("[COMPLETE] Build finished")
    print_header("Build Summary", summarize(report))

    return 0


def run():
    sys.exit(main())


if __name__ == '__main__':
    run()

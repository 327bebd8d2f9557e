"""
================================================================================
sheetbuild/__init__.py - Package Initialization
================================================================================
PURPOSE: Builds the site's translations.json / interpretation.json from the
         request-tracking Google Sheet and exposes the pieces main.py needs.

EXPORTS:
  - load_config, BuildConfig, ConfigError (from config)
  - authenticate_google, SheetsFetcher, SheetFetchError (from sheets)
  - run_build, BuildReport, summarize (from builder)
  - log_msg and print helpers (from logger)
================================================================================
"""

__version__ = "1.0.0"

from sheetbuild.config import BuildConfig, ConfigError, load_config

from sheetbuild.logger import (
    log_msg, print_header, print_separator, print_success, print_error, print_fatal
)

from sheetbuild.sheets import authenticate_google, SheetsFetcher, SheetFetchError

from sheetbuild.builder import run_build, BuildReport, summarize

__all__ = [
    'BuildConfig', 'ConfigError', 'load_config',
    'log_msg', 'print_header', 'print_separator', 'print_success', 'print_error', 'print_fatal',
    'authenticate_google', 'SheetsFetcher', 'SheetFetchError',
    'run_build', 'BuildReport', 'summarize',
]

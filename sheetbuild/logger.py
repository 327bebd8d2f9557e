"""
================================================================================
LOGGER.PY - LOGGING & CONSOLE OUTPUT
================================================================================
PURPOSE: Centralized console output for the build. Every line goes through
         log_msg, which picks a color and icon from the bracketed tag at the
         start of the message ([OK], [ERROR], [FETCH], [SKIP], ...).

FEATURES:
  - Color-coded messages based on log tag
  - Plain timestamped text under GitHub Actions
  - Rich panels for headers and run summaries
  - Fatal messages routed to stderr
================================================================================
"""

import os
import sys
from datetime import datetime
from colorama import init as colorama_init
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Initialize colorama for Windows compatibility
colorama_init(autoreset=True)

console = Console()
err_console = Console(stderr=True)

IS_CI = bool(os.getenv('GITHUB_ACTIONS'))

# tag -> (rich style, icon)
_TAG_STYLES = (
    ("[OK]", "green", "✅"),
    ("[ERROR]", "red", "❌"),
    ("[FATAL]", "bold red", "💥"),
    ("[FETCH]", "cyan", "🔎"),
    ("[SKIP]", "yellow", "⏭️ "),
    ("[WRITE]", "blue", "💾"),
    ("[COMPLETE]", "magenta", "🏁"),
)

# ==================== TIME UTILITIES ====================

def get_timestamp_short():
    """Current local time as HH:MM:SS."""
    return datetime.now().strftime('%H:%M:%S')

# ==================== LOGGING FUNCTIONS ====================

def log_msg(message: str, style: str = None):
    """
    PURPOSE: Log a message with automatic level detection and formatting

    LOGIC:
      - Look for a known tag ([OK], [ERROR], ...) in the message
      - Assign color and icon based on the tag
      - Output plain text under CI, rich formatting otherwise

    ARGS:
      message (str): Message to log
      style (str, optional): Rich style override
    """
    ts = get_timestamp_short()
    text = str(message)
    detected_style = style
    icon = "ℹ️ "

    upper = text.upper()
    for tag, tag_style, tag_icon in _TAG_STYLES:
        if tag in upper:
            detected_style = style or tag_style
            icon = tag_icon
            break

    if IS_CI:
        print(f"[{ts}] {text}")
        sys.stdout.flush()
    else:
        # markup=False keeps "[OK]"-style tags from being parsed as rich markup
        console.print(f"{ts} {icon}  {text}", style=detected_style, markup=False, highlight=False)


def print_header(title: str, data: dict = None):
    """
    PURPOSE: Print a formatted header panel with configuration/status info

    ARGS:
      title (str): Header title
      data (dict, optional): Key-value pairs to display
    """
    if IS_CI:
        print(f"\n{'=' * 70}")
        print(f"  {title}")
        print(f"{'=' * 70}")
        if data:
            for key, value in data.items():
                print(f"  {key}: {value}")
        return

    header = Table.grid(padding=(0, 2))
    header.add_column(justify="left")
    header.add_column(justify="left")
    if data:
        for key, value in data.items():
            header.add_row(str(key), str(value))

    console.print(Panel(header, title=title, border_style="magenta"))


def print_separator(char: str = "="):
    """Print a separator line for visual clarity."""
    print(char * 70)


def print_success(message: str):
    log_msg(f"[OK] {message}")


def print_error(message: str):
    log_msg(f"[ERROR] {message}")


def print_info(message: str):
    log_msg(f"[INFO] {message}")


def print_fatal(message: str):
    """
    PURPOSE: Report an unrecoverable error on stderr.
             Used by the entry point right before a non-zero exit.
    """
    if IS_CI:
        print(f"[{get_timestamp_short()}] [FATAL] {message}", file=sys.stderr)
        sys.stderr.flush()
    else:
        err_console.print(f"💥 [FATAL] {message}", style="bold red", markup=False, highlight=False)

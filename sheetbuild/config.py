"""
Configuration for the sheet build.
Reads secrets and settings from the environment (and an optional .env file)
once at startup and hands back an immutable BuildConfig.
"""

import json
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from dotenv import load_dotenv

DEFAULT_OUTPUT_DIR = "site"
DEFAULT_RANGE = "A:Z"

SHEET_ID_PATTERN = re.compile(r"^[A-Za-z0-9\-_]{20,}$")
REQUIRED_ACCOUNT_FIELDS = ("client_email", "private_key")

# dataset key -> env var holding a comma-separated tab name override
TAB_OVERRIDE_VARS = {
    "translations": "TRANSLATION_TABS",
    "interpretation": "INTERPRETATION_TABS",
}


class ConfigError(ValueError):
    """Missing or malformed configuration; the build must not start."""


@dataclass(frozen=True)
class BuildConfig:
    """Central configuration, constructed once and passed down explicitly."""

    sheet_id: str
    service_account_info: Dict[str, Any] = field(repr=False)
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    range_suffix: str = DEFAULT_RANGE
    tab_overrides: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    fetch_timeout: Optional[float] = None

    @property
    def masked_sheet_id(self) -> str:
        """Last six characters only, for logs."""
        return f"…{self.sheet_id[-6:]} (len={len(self.sheet_id)})"


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[Path] = None,
    output_dir: Optional[Path] = None,
) -> BuildConfig:
    """
    PURPOSE: Validate settings and build the BuildConfig.

    LOGIC:
      - When environ is None, load .env (if present) into os.environ first
      - Sheet id: strip all whitespace, then check the id pattern
      - Service account: raw JSON from GOOGLE_SERVICE_ACCOUNT, or the file
        named by GOOGLE_APPLICATION_CREDENTIALS
      - Optional output dir, range, tab overrides and fetch timeout

    RAISES:
      ConfigError: On any missing or malformed value
    """
    if environ is None:
        env_path = Path(env_file) if env_file else Path('.env')
        if env_path.exists():
            load_dotenv(env_path)
        environ = os.environ

    sheet_id = parse_sheet_id(environ.get('GOOGLE_SHEET_ID', ''))
    account = parse_service_account(_read_service_account(environ))

    if output_dir is None:
        output_dir = Path(environ.get('OUTPUT_DIR', '').strip() or DEFAULT_OUTPUT_DIR)

    tab_overrides = {}
    for key, var in TAB_OVERRIDE_VARS.items():
        names = _split_names(environ.get(var, ''))
        if names:
            tab_overrides[key] = names

    return BuildConfig(
        sheet_id=sheet_id,
        service_account_info=account,
        output_dir=Path(output_dir),
        range_suffix=environ.get('SHEET_RANGE', '').strip() or DEFAULT_RANGE,
        tab_overrides=tab_overrides,
        fetch_timeout=_parse_timeout(environ.get('FETCH_TIMEOUT', '')),
    )


def parse_sheet_id(raw: str) -> str:
    """Strip ALL whitespace (spaces, tabs, newlines) and validate the id."""
    sheet_id = re.sub(r"\s+", "", raw or "")
    if not sheet_id:
        raise ConfigError("Missing GOOGLE_SHEET_ID secret.")
    if not SHEET_ID_PATTERN.match(sheet_id):
        raise ConfigError(
            f'GOOGLE_SHEET_ID looks malformed after sanitizing '
            f'(got "{sheet_id}", length={len(sheet_id)}).'
        )
    return sheet_id


def parse_service_account(raw: str) -> Dict[str, Any]:
    if not raw or not raw.strip():
        raise ConfigError("Missing GOOGLE_SERVICE_ACCOUNT secret.")
    try:
        info = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"GOOGLE_SERVICE_ACCOUNT is not valid JSON: {e}") from e
    if not isinstance(info, dict):
        raise ConfigError("GOOGLE_SERVICE_ACCOUNT must be a JSON object.")

    missing = [name for name in REQUIRED_ACCOUNT_FIELDS if not info.get(name)]
    if missing:
        raise ConfigError(f"GOOGLE_SERVICE_ACCOUNT is missing {', '.join(missing)}.")
    return info


def _read_service_account(environ: Mapping[str, str]) -> str:
    raw = environ.get('GOOGLE_SERVICE_ACCOUNT', '')
    if raw.strip():
        return raw

    cred_path = environ.get('GOOGLE_APPLICATION_CREDENTIALS', '').strip()
    if not cred_path:
        return ''
    path = Path(cred_path)
    if not path.exists():
        raise ConfigError(f"GOOGLE_APPLICATION_CREDENTIALS file not found: {path}")
    return path.read_text(encoding='utf-8')


def _split_names(raw: str) -> Tuple[str, ...]:
    return tuple(name.strip() for name in raw.split(',') if name.strip())


def _parse_timeout(raw: str) -> Optional[float]:
    raw = (raw or '').strip()
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError as e:
        raise ConfigError(f"FETCH_TIMEOUT must be a number of seconds (got {raw!r}).") from e
    if timeout <= 0:
        raise ConfigError(f"FETCH_TIMEOUT must be greater than zero (got {raw!r}).")
    return timeout

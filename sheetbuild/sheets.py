"""
================================================================================
SHEETS.PY - GOOGLE SHEETS OPERATIONS
================================================================================
PURPOSE: Read-only access to the source spreadsheet.

FEATURES:
  - Service account authentication from raw JSON (GitHub Secrets)
  - Range reads with unformatted values and formatted date strings
  - Provider errors wrapped in SheetFetchError with the API's message
================================================================================
"""

from typing import Any, Dict, List, Optional

import gspread
import requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials
from gspread.exceptions import APIError, SpreadsheetNotFound
from gspread.utils import absolute_range_name

from .config import BuildConfig, ConfigError
from .logger import log_msg

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]

# Numbers and text come back raw, dates/times as the sheet displays them
READ_PARAMS = {
    "valueRenderOption": "UNFORMATTED_VALUE",
    "dateTimeRenderOption": "FORMATTED_STRING",
}


class SheetFetchError(RuntimeError):
    """A tab/range could not be read (missing tab, no access, network)."""


# ==================== GOOGLE AUTH ====================

def authenticate_google(config: BuildConfig):
    """
    PURPOSE: Authorize a gspread client with the service account from config.

    LOGIC:
      - Build service account credentials with the read-only Sheets scope
      - Authorize gspread with them
      - Apply the optional per-request timeout

    RETURNS:
      gspread.Client: Authenticated Sheets client

    RAISES:
      ConfigError: If the credential blob cannot produce signing credentials
    """
    log_msg("[INFO] Authenticating with Google Sheets API...")

    try:
        credentials = Credentials.from_service_account_info(
            config.service_account_info, scopes=SCOPES
        )
    except (ValueError, KeyError) as e:
        raise ConfigError(f"GOOGLE_SERVICE_ACCOUNT could not be loaded: {e}") from e

    client = gspread.authorize(credentials)
    if config.fetch_timeout:
        client.set_timeout(config.fetch_timeout)

    log_msg(f"[OK] Google Sheets authenticated ({config.service_account_info['client_email']})")
    return client


# ==================== TABLE FETCHER ====================

class SheetsFetcher:
    """
    PURPOSE: Fetch raw rows for a named tab range.

    The spreadsheet handle is opened on first use so that a missing or
    unshared spreadsheet surfaces as a SheetFetchError per tab.

    ATTRIBUTES:
      client (gspread.Client): Authenticated Sheets API client
      sheet_id (str): Spreadsheet key
    """

    def __init__(self, client, sheet_id: str):
        self.client = client
        self.sheet_id = sheet_id
        self._spreadsheet = None

    def __call__(self, table_name: str, range_suffix: str) -> List[List[Any]]:
        return self.fetch(table_name, range_suffix)

    def _open(self):
        if self._spreadsheet is None:
            self._spreadsheet = self.client.open_by_key(self.sheet_id)
        return self._spreadsheet

    def fetch(self, table_name: str, range_suffix: str) -> List[List[Any]]:
        """
        PURPOSE: Read one tab range.

        ARGS:
          table_name (str): Tab name, quoted automatically
          range_suffix (str): A1 cell range inside the tab (e.g. "A:Z")

        RETURNS:
          list: Rows of raw cell values; [] when the range is empty

        RAISES:
          SheetFetchError: Wrong tab name, invalid range, no access or
                           network failure
        """
        range_name = absolute_range_name(table_name, range_suffix or None)
        try:
            response = self._open().values_get(range_name, params=READ_PARAMS)
        except APIError as e:
            raise SheetFetchError(
                f'Unable to read range "{range_name}": {_api_error_message(e)}'
            ) from e
        except SpreadsheetNotFound as e:
            raise SheetFetchError(
                f'Unable to read range "{range_name}": spreadsheet not found or not shared'
            ) from e
        except (requests.exceptions.RequestException, GoogleAuthError) as e:
            raise SheetFetchError(f'Unable to read range "{range_name}": {e}') from e

        return response.get("values", [])


def _api_error_message(error: APIError) -> str:
    """Pull the provider's message out of an APIError, falling back to str()."""
    details: Optional[Dict[str, Any]] = getattr(error, "error", None)
    if isinstance(details, dict) and details.get("message"):
        return str(details["message"])

    response = getattr(error, "response", None)
    try:
        return str(response.json()["error"]["message"])
    except (AttributeError, KeyError, TypeError, ValueError):
        return str(error)

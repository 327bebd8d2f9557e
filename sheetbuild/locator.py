"""
================================================================================
LOCATOR.PY - TAB NAME FALLBACK SEARCH
================================================================================
PURPOSE: Find the first candidate tab that actually holds rows.

LOGIC:
  - Each candidate is probed once, in order, through the fetch callable
  - A probe ends as Found, NotFound (zero rows) or FetchFailed (raised)
  - Failures are logged and the search moves on; nothing is retried
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Union

from .logger import log_msg

RawTable = List[List[Any]]
FetchFn = Callable[[str, str], RawTable]


@dataclass(frozen=True)
class Found:
    rows: RawTable
    name: str


@dataclass(frozen=True)
class NotFound:
    name: str


@dataclass(frozen=True)
class FetchFailed:
    name: str
    cause: Exception


ProbeOutcome = Union[Found, NotFound, FetchFailed]


@dataclass
class LocateResult:
    """Aggregated outcome of one locate_table call."""

    found: Optional[Found] = None
    attempts: List[ProbeOutcome] = field(default_factory=list)

    @property
    def failures(self) -> List[FetchFailed]:
        return [a for a in self.attempts if isinstance(a, FetchFailed)]

    @property
    def all_failed(self) -> bool:
        """True when every candidate raised (as opposed to returning no rows)."""
        return bool(self.attempts) and len(self.failures) == len(self.attempts)


def probe_table(fetch: FetchFn, name: str, range_suffix: str) -> ProbeOutcome:
    """Fetch one candidate tab and classify the outcome without raising."""
    try:
        rows = fetch(name, range_suffix)
    except Exception as e:
        return FetchFailed(name=name, cause=e)
    if not rows:
        return NotFound(name=name)
    return Found(rows=rows, name=name)


def locate_table(
    fetch: FetchFn,
    candidate_names: Sequence[str],
    range_suffix: str,
) -> LocateResult:
    """
    PURPOSE: Return the first candidate tab that yields at least one row.

    ARGS:
      fetch: Callable(table_name, range_suffix) -> rows
      candidate_names: Tab names in preference order
      range_suffix: Cell range appended to each tab name (e.g. "A:Z")

    RETURNS:
      LocateResult: .found is None when no candidate produced rows
    """
    result = LocateResult()

    for name in candidate_names:
        log_msg(f"[FETCH] Trying tab '{name}'...")
        outcome = probe_table(fetch, name, range_suffix)
        result.attempts.append(outcome)

        if isinstance(outcome, Found):
            log_msg(f"[OK] Tab '{name}' has {len(outcome.rows)} rows (including header)")
            result.found = outcome
            return result
        if isinstance(outcome, FetchFailed):
            log_msg(f"[SKIP] Tab '{name}' unavailable: {outcome.cause}")
        else:
            log_msg(f"[SKIP] Tab '{name}' returned no rows")

    return result

"""
================================================================================
BUILDER.PY - DATASET BUILD & JSON OUTPUT
================================================================================
PURPOSE: Drive tab lookup, header resolution and row mapping for each dataset
         and write the resulting JSON files.

WORKFLOW (per dataset, Translations first, then Interpretation):
  1. Locate the first candidate tab holding rows
  2. Not found -> write [] (Translations) or skip the file (Interpretation)
  3. Found -> header index from row 0, map every following row
  4. Drop rows the dataset rejects, number the rest from 1
  5. Write pretty-printed JSON
================================================================================
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .config import BuildConfig
from .datasets import DATASETS, DatasetDefinition, Record
from .locator import FetchFn, LocateResult, locate_table
from .logger import log_msg, print_error
from .normalize import build_header_index, map_row

# Outcome labels reported per dataset
STATUS_WRITTEN = "written"
STATUS_EMPTY = "empty"
STATUS_SKIPPED = "skipped"


@dataclass
class DatasetOutcome:
    key: str
    status: str
    count: int = 0
    tab: Optional[str] = None
    path: Optional[Path] = None
    reason: str = ""


@dataclass
class BuildReport:
    outcomes: List[DatasetOutcome] = field(default_factory=list)

    def get(self, key: str) -> Optional[DatasetOutcome]:
        for outcome in self.outcomes:
            if outcome.key == key:
                return outcome
        return None


def build_records(rows: Sequence[Sequence[Any]], definition: DatasetDefinition) -> List[Record]:
    """
    PURPOSE: Map a raw table (header row first) to numbered output records.

    Ids are assigned after filtering, so they are always 1..N.
    """
    if not rows:
        return []

    header_index = build_header_index(rows[0])
    records: List[Record] = []

    for row in rows[1:]:
        mapped = map_row(row, header_index, definition.field_spec, definition.defaults)
        if definition.keep is not None and not definition.keep(mapped):
            continue
        records.append(mapped)

    return [
        {"id": number, **definition.constants, **record}
        for number, record in enumerate(records, 1)
    ]


def build_dataset(
    definition: DatasetDefinition,
    fetch: FetchFn,
    config: BuildConfig,
) -> Optional[List[Record]]:
    """Locate and map one dataset. Returns None when no tab held rows."""
    candidates = config.tab_overrides.get(definition.key, definition.candidate_names)
    located: LocateResult = locate_table(fetch, candidates, config.range_suffix)

    if located.found is None:
        if located.all_failed:
            log_msg(f"[SKIP] {definition.key}: every candidate tab failed to load")
        else:
            log_msg(f"[SKIP] {definition.key}: no candidate tab ({', '.join(candidates)}) has rows")
        return None

    return build_records(located.found.rows, definition)


def write_json(path: Path, records: List[Record]):
    """Write records as UTF-8 JSON with 2-space indentation."""
    path.write_text(json.dumps(records, indent=2, ensure_ascii=False), encoding="utf-8")


def run_dataset(definition: DatasetDefinition, fetch: FetchFn, config: BuildConfig) -> DatasetOutcome:
    """
    PURPOSE: Build and persist one dataset, applying its missing-tab policy.

    LOGIC:
      - Any error while locating/mapping is logged and treated like a
        missing tab
      - Missing tab: write [] when the dataset requires a file, else skip
      - Errors while writing propagate
    """
    path = config.output_dir / definition.filename
    log_msg(f"[INFO] Building {definition.filename}...")

    reason = ""
    try:
        records = build_dataset(definition, fetch, config)
    except Exception as e:
        print_error(f"{definition.key} build failed: {e}")
        records = None
        reason = str(e)

    if records is None:
        if not definition.write_when_missing:
            log_msg(f"[SKIP] {definition.filename} not written (optional dataset)")
            return DatasetOutcome(definition.key, STATUS_SKIPPED, reason=reason or "tab not found")
        write_json(path, [])
        log_msg(f"[WRITE] Wrote {path} (0 items, fallback)")
        return DatasetOutcome(definition.key, STATUS_EMPTY, path=path, reason=reason or "tab not found")

    write_json(path, records)
    log_msg(f"[WRITE] Wrote {path} ({len(records)} items)")
    return DatasetOutcome(definition.key, STATUS_WRITTEN, count=len(records), path=path)


def run_build(
    config: BuildConfig,
    fetch: FetchFn,
    datasets: Sequence[DatasetDefinition] = DATASETS,
) -> BuildReport:
    """
    PURPOSE: Build every dataset in order into config.output_dir.

    RETURNS:
      BuildReport: One outcome per dataset
    """
    config.output_dir.mkdir(parents=True, exist_ok=True)

    report = BuildReport()
    for definition in datasets:
        report.outcomes.append(run_dataset(definition, fetch, config))

    translations = report.get("translations")
    if translations is not None and translations.count == 0:
        log_msg(
            "[INFO] No translation rows found. If this is unexpected, confirm the tab name "
            "and headers in your sheet, and that the service account has at least Viewer access."
        )

    return report


def summarize(report: BuildReport) -> Dict[str, str]:
    """Flatten a report into label -> text pairs for print_header."""
    summary = {}
    for outcome in report.outcomes:
        if outcome.status == STATUS_WRITTEN:
            summary[outcome.key] = f"{outcome.count} items"
        else:
            summary[outcome.key] = f"{outcome.status} ({outcome.reason})"
    return summary

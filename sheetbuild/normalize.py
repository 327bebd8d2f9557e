"""
================================================================================
NORMALIZE.PY - CELL, HEADER & ROW NORMALIZATION
================================================================================
PURPOSE: Turn raw spreadsheet rows into flat string records.

FEATURES:
  - normalize_value: canonical trimmed, whitespace-collapsed cell text
  - build_header_index: case/whitespace-insensitive header -> column lookup
  - map_row: per-field synonym fallback chains with optional defaults
================================================================================
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional, Sequence

HeaderIndex = Dict[str, int]
FieldSpec = Mapping[str, Sequence[str]]

_WHITESPACE = re.compile(r"[\s\u00a0]+")
_LEADING_JUNK = re.compile(r"^[\s\ufeff]+")


def normalize_value(raw: Any) -> str:
    """
    PURPOSE: Canonicalize a raw cell value into display text.

    LOGIC:
      - None -> ""
      - Integral floats drop the ".0" (UNFORMATTED_VALUE returns 3.0 for 3)
      - Booleans render lowercase, as the sheet's JSON does
      - Non-breaking spaces and whitespace runs collapse to one space
      - Leading byte-order-marks and surrounding whitespace are removed

    RETURNS:
      str: Normalized text (never None)
    """
    if raw is None:
        return ""
    if isinstance(raw, bool):
        text = "true" if raw else "false"
    elif isinstance(raw, float) and raw.is_integer():
        text = str(int(raw))
    else:
        text = str(raw)

    text = _WHITESPACE.sub(" ", text)
    text = _LEADING_JUNK.sub("", text)
    return text.rstrip()


def header_key(text: Any) -> str:
    """Lookup key shared by header cells and field synonyms."""
    return normalize_value(text).lower()


def build_header_index(header_row: Optional[Sequence[Any]]) -> HeaderIndex:
    """
    PURPOSE: Map every header cell to its zero-based column position.

    Duplicate headers resolve to the last matching column.
    """
    index: HeaderIndex = {}
    for position, cell in enumerate(header_row or ()):
        index[header_key(cell)] = position
    return index


def map_row(
    row: Sequence[Any],
    header_index: HeaderIndex,
    field_spec: FieldSpec,
    defaults: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    PURPOSE: Build one output record from a data row.

    LOGIC:
      - For each field, walk its synonyms in priority order
      - The first synonym whose column holds a non-empty value wins
      - Cells beyond the end of a short row count as empty
      - Fields left empty fall back to defaults[field], else ""

    ARGS:
      row: Raw data row
      header_index: Output of build_header_index for the table
      field_spec: Output field -> ordered header synonyms
      defaults (optional): Output field -> value used when no synonym matches

    RETURNS:
      dict: Field name -> normalized string, in field_spec order
    """
    defaults = defaults or {}
    record: Dict[str, str] = {}

    for field, synonyms in field_spec.items():
        value = ""
        for synonym in synonyms:
            position = header_index.get(header_key(synonym))
            if position is None or position >= len(row):
                continue
            candidate = normalize_value(row[position])
            if candidate:
                value = candidate
                break
        record[field] = value or defaults.get(field, "")

    return record


def map_rows(
    rows: Sequence[Sequence[Any]],
    header_index: HeaderIndex,
    field_spec: FieldSpec,
    defaults: Optional[Mapping[str, str]] = None,
) -> List[Dict[str, str]]:
    """Apply map_row to every row, preserving order."""
    return [map_row(row, header_index, field_spec, defaults) for row in rows]

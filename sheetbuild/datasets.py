"""Fixed output datasets: tab names, header synonyms, defaults and filters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional, Sequence, Tuple

Record = Dict[str, object]


@dataclass(frozen=True)
class DatasetDefinition:
    """
    PURPOSE: Everything that distinguishes one output file from the other.

    ATTRIBUTES:
      key: Short name, also used for tab-name overrides in config
      filename: Output file name inside the output directory
      candidate_names: Tab names tried in order
      field_spec: Output field -> header synonyms, most preferred first
      defaults: Values used when a field resolves empty
      constants: Fields with a fixed value, placed before mapped fields
      keep: Optional predicate; records failing it are dropped
      write_when_missing: Write [] when no tab is found, instead of skipping
    """

    key: str
    filename: str
    candidate_names: Tuple[str, ...]
    field_spec: Mapping[str, Sequence[str]]
    defaults: Mapping[str, str] = field(default_factory=dict)
    constants: Mapping[str, str] = field(default_factory=dict)
    keep: Optional[Callable[[Record], bool]] = None
    write_when_missing: bool = False


def _has_program_or_title(record: Record) -> bool:
    return bool(record.get("program") or record.get("title"))


TRANSLATIONS = DatasetDefinition(
    key="translations",
    filename="translations.json",
    candidate_names=("Translations", "Translation", "Translation Requests"),
    field_spec={
        "program": ["Program", "Programme", "Department"],
        "title": ["Document name", "Document", "Title"],
        "language": ["Language", "Languages", "Target Language"],
        "status": ["Status"],
        "dateRequested": ["Date Requested", "Request Date", "Requested"],
        "date": ["Event Date/Deadline", "Event Date", "Deadline", "Due Date"],
        "link": ["Completed Request Link", "Link", "URL"],
    },
    defaults={"status": "Pending"},
    constants={"type": "Translation"},
    keep=_has_program_or_title,
    write_when_missing=True,
)

INTERPRETATION = DatasetDefinition(
    key="interpretation",
    filename="interpretation.json",
    candidate_names=("Interpretation", "Interpretations", "Interpreting"),
    field_spec={
        "program": ["Program", "Programme", "Department"],
        "type": ["Language/Type", "Language", "Type"],
        "eventName": ["Event name", "Event", "Event Title"],
        "eventDate": ["Event Date", "Date"],
        "eventTime": ["Event Time", "Time"],
        "interpreter": ["Interpreter", "Interpreters", "Assigned Interpreter"],
        "status": ["Status"],
    },
)

DATASETS = (TRANSLATIONS, INTERPRETATION)

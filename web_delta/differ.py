# File: web_delta/differ.py
"""Field-by-field comparison of two :class:`FieldRecord` objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from web_delta.parser.fields import FieldRecord

__all__ = ("CONTENT_CHANGE", "FieldChange", "ComparisonResult", "compare")

CONTENT_CHANGE = "content_change"


@dataclass(frozen=True, slots=True)
class FieldChange:
    field: str
    old_value: str
    new_value: str
    change_type: str = CONTENT_CHANGE

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "old": self.old_value, "new": self.new_value, "changeType": self.change_type}


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Changes found for one common page, identified by its new-site URL."""

    url: str
    changes: Tuple[FieldChange, ...] = field(default_factory=tuple)
    extraction_failed: bool = False

    @property
    def has_changes(self) -> bool:
        return bool(self.changes)

    def changed_fields(self) -> Tuple[str, ...]:
        return tuple(change.field for change in self.changes)

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "changes": [change.to_dict() for change in self.changes]}


def compare(
    old_record: FieldRecord,
    new_record: FieldRecord,
    url: str,
    *,
    flag_failures: bool = True,
) -> ComparisonResult:
    """Compare two records in schema order.

    With *flag_failures* a degraded record on either side yields an
    ``extraction_failed`` result without changes, so a failed extraction is not
    reported as every field having changed.
    """
    if old_record.fields != new_record.fields:
        raise ValueError("Cannot compare records of different field schemas")

    if flag_failures and (old_record.extraction_failed or new_record.extraction_failed):
        return ComparisonResult(url=url, extraction_failed=True)

    changes = tuple(
        FieldChange(name, old, new)
        for name, old, new in zip(old_record.fields, old_record.values, new_record.values)
        if old != new
    )
    return ComparisonResult(url=url, changes=changes)

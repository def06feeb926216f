"""Snapshot loading: turns an analytics export into Conflict records."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from cannibalmap.metrics import derive_click_shares
from cannibalmap.models import Conflict, Page, Severity

logger = logging.getLogger(__name__)


class SnapshotResult:
    """Conflicts parsed from one snapshot, plus what was dropped."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.conflicts: list[Conflict] = []
        self.skipped = 0
        self.shares_derived = 0

    def __repr__(self) -> str:
        parts = [
            f"SnapshotResult({self.source}: ",
            f"{len(self.conflicts)} conflicts",
        ]
        if self.skipped:
            parts.append(f", skipped={self.skipped}")
        if self.shares_derived:
            parts.append(f", shares_derived={self.shares_derived}")
        parts.append(")")
        return "".join(parts)


def _normalize_severity(raw: Any) -> str:
    """Lowercase the label; anything unrecognised becomes 'low'."""
    label = str(raw or "low").strip().lower()
    if label in {s.value for s in Severity}:
        return label
    return Severity.LOW.value


def _records(data: Any) -> list[Any]:
    if isinstance(data, dict):
        data = data.get("conflicts", [])
    if not isinstance(data, list):
        raise ValueError(f"Snapshot must be a list of conflicts, got {type(data).__name__}")
    return data


def build_conflict(record: dict[str, Any]) -> tuple[Conflict, bool]:
    """Validate one conflict record.

    Fills in ctr and clickShare when upstream omitted them. Returns the
    conflict and whether click shares had to be derived from clicks.
    """
    record = dict(record)
    record["severity"] = _normalize_severity(record.get("severity"))

    page_records = record.get("pages") or []
    if not isinstance(page_records, list):
        raise ValueError(f"pages must be a list, got {type(page_records).__name__}")
    pages = [Page.model_validate(p) for p in page_records]
    missing_share = any(
        "clickShare" not in p and "click_share" not in p for p in page_records
    )
    if missing_share and pages:
        shares = derive_click_shares(pages)
        pages = [p.model_copy(update={"click_share": s}) for p, s in zip(pages, shares)]

    filled = []
    for p, raw in zip(pages, page_records):
        if "ctr" not in raw and p.impressions > 0:
            p = p.model_copy(update={"ctr": p.clicks / p.impressions * 100})
        filled.append(p)

    record["pages"] = filled
    return Conflict.model_validate(record), missing_share


def parse_snapshot(data: Any, source: str = "<memory>") -> SnapshotResult:
    """Parse decoded JSON into conflicts, skipping invalid records."""
    result = SnapshotResult(source)
    for i, record in enumerate(_records(data)):
        if not isinstance(record, dict):
            logger.warning("Skipping conflict #%d in %s: not an object", i, source)
            result.skipped += 1
            continue
        try:
            conflict, derived = build_conflict(record)
        except ValidationError as e:
            logger.warning(
                "Skipping conflict #%d (%s) in %s: %d validation errors",
                i, record.get("id", "?"), source, e.error_count(),
            )
            result.skipped += 1
            continue
        except ValueError as e:
            logger.warning("Skipping conflict #%d (%s) in %s: %s", i, record.get("id", "?"), source, e)
            result.skipped += 1
            continue
        if derived:
            result.shares_derived += 1
        result.conflicts.append(conflict)

    logger.info("Loaded %s", result)
    return result


def load_snapshot(path: Path) -> SnapshotResult:
    """Read a JSON snapshot file."""
    data = json.loads(Path(path).read_text())
    return parse_snapshot(data, source=str(path))

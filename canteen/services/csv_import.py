"""Import historical entries from the canteen spreadsheet export.

The export has the header ``Id,dato,Navn,Fyritoka,Maltid,NrOfPersons,Umbod``
with ``dato`` written as ``dd-mm-yyyy HH:MM:SS`` in local time. Rows are
stored as pending entries keeping their original creation time. Historical
rows may carry a zero amount; the public form may not.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, TextIO
from zoneinfo import ZoneInfo

from canteen.core.exceptions import CanteenError, ValidationError
from canteen.repositories.base import Store
from canteen.services.registration_service import build_entry

logger = logging.getLogger(__name__)

CSV_DATE_FORMAT = "%d-%m-%Y %H:%M:%S"
COLUMN_MAP: dict[str, str] = {
    "name": "Navn",
    "company": "Fyritoka",
    "meal": "Maltid",
    "amount": "NrOfPersons",
    "representative": "Umbod",
}


@dataclass
class ImportResult:
    imported: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)


def parse_export_timestamp(value: str, tz: ZoneInfo) -> datetime:
    """Read a ``dato`` cell as local time in ``tz`` and return it in UTC."""
    try:
        local = datetime.strptime((value or "").strip(), CSV_DATE_FORMAT)
    except ValueError as exc:
        raise ValidationError(f"Invalid date: {value!r}") from exc
    return local.replace(tzinfo=tz).astimezone(timezone.utc)


def import_rows(store: Store, rows: Iterable[dict[str, str]], *, tz: ZoneInfo) -> ImportResult:
    """Store each row in its own transaction so one bad row does not stop the rest."""
    result = ImportResult()
    for line_number, row in enumerate(rows, start=2):
        try:
            payload = {target: (row.get(source) or "").strip() for target, source in COLUMN_MAP.items()}
            entry = build_entry(
                payload,
                created_at=parse_export_timestamp(row.get("dato", ""), tz),
                allow_zero_amount=True,
            )
            with store.transaction("Failed to import entry"):
                store.entries.add(entry)
        except CanteenError as exc:
            result.failed += 1
            result.errors.append(f"line {line_number}: {exc.message}")
            logger.warning("[IMPORT] Skipping line %s: %s", line_number, exc.message)
            continue
        result.imported += 1
        if result.imported % 100 == 0:
            logger.info("[IMPORT] Imported %s records...", result.imported)
    return result


def import_csv(store: Store, handle: TextIO, *, tz: ZoneInfo) -> ImportResult:
    reader = csv.DictReader(handle, skipinitialspace=True)
    rows = (row for row in reader if any(isinstance(value, str) and value.strip() for value in row.values()))
    return import_rows(store, rows, tz=tz)

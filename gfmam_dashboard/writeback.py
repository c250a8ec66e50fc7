"""
Write-back of admin-form submissions into the "Society Data" sheet.

Upsert keyed by organisation name: the first row whose first cell matches
the name exactly (case-sensitive) is overwritten in place, otherwise a new
row is appended. Submitting the same payload twice leaves the sheet as if it
had been submitted once.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import openpyxl

from .config import SOCIETY_DATA_SHEET_NAME

logger = logging.getLogger(__name__)

# Admin form field -> sheet column, left to right
WRITEBACK_COLUMNS = (
    "organizationName",
    "totalPopulation",
    "activeMembers",
    "orgMembers",
    "totalMembers",
    "revenue",
    "events",
    "calendarEvents",
    "projects",
    "meetingHosting",
)


@dataclass(frozen=True)
class WritebackResult:
    status: str
    message: str
    row_index: int = -1
    created: bool = False

    def as_dict(self) -> dict:
        return {"status": self.status, "message": self.message}


def build_row(data: dict) -> list:
    """Sheet row for a form payload; absent or falsy fields become ""."""
    return [data.get(col) or "" for col in WRITEBACK_COLUMNS]


def find_entity_row(rows: list[list], name: str) -> int:
    """0-based index of the first data row named `name`, or -1.

    rows[0] is the header and is never matched.
    """
    for i in range(1, len(rows)):
        if rows[i] and rows[i][0] == name:
            return i
    return -1


def upsert_row(rows: list[list], data: dict) -> tuple[list[list], WritebackResult]:
    """Return a new row list with `data` written in, plus the outcome.

    The input list is not modified.
    """
    name = data.get("organizationName")
    if not name:
        return list(rows), WritebackResult("error", "organizationName is required")

    new_rows = [list(r) for r in rows]
    row = build_row(data)
    index = find_entity_row(new_rows, name)

    if index == -1:
        new_rows.append(row)
        logger.info("Added new organization: %s", name)
        return new_rows, WritebackResult(
            "success", "Data saved successfully", len(new_rows) - 1, created=True
        )

    new_rows[index] = row
    logger.info("Updated organization: %s", name)
    return new_rows, WritebackResult("success", "Data saved successfully", index)


def upsert_workbook(
    path: str | Path,
    data: dict,
    sheet_name: str = SOCIETY_DATA_SHEET_NAME,
) -> dict:
    """Upsert `data` into an .xlsx copy of the society sheet.

    Returns {"status": "success" | "error", "message": ...}; failures are
    reported in the status rather than raised.
    """
    name = data.get("organizationName")
    if not name:
        return WritebackResult("error", "organizationName is required").as_dict()

    try:
        wb = openpyxl.load_workbook(path)
    except Exception as exc:
        logger.exception("Failed to open workbook: %s", path)
        return WritebackResult("error", str(exc)).as_dict()

    try:
        if sheet_name not in wb.sheetnames:
            logger.warning("Sheet '%s' not found in %s", sheet_name, path)
            return WritebackResult("error", "Society Data sheet not found").as_dict()

        ws = wb[sheet_name]
        row = build_row(data)

        target = None
        for row_idx in range(2, ws.max_row + 1):
            if ws.cell(row=row_idx, column=1).value == name:
                target = row_idx
                break

        if target is None:
            ws.append(row)
            logger.info("Added new organization: %s", name)
        else:
            for col_idx, value in enumerate(row, start=1):
                ws.cell(row=target, column=col_idx).value = value
            logger.info("Updated organization: %s (row %d)", name, target)

        wb.save(path)
    except Exception as exc:
        logger.exception("Failed to write organization %s", name)
        return WritebackResult("error", str(exc)).as_dict()
    finally:
        wb.close()

    return WritebackResult("success", "Data saved successfully").as_dict()

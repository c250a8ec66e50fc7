"""
Loader for the published society-data sheet.

Source: the "Society Data" Google Sheet, published to the web as CSV.
    Row 1: header (Organization Name, then one column per KPI source field)
    Row 2+: one organisation per row

Two stages:
    1. fetch_csv_text / load_csv_file  -- the only I/O, returns raw text
    2. normalize_csv                   -- synchronous, turns text into a RecordSet

A transport failure never raises: it is logged and yields an empty snapshot,
so a caller can simply re-run the whole pipeline to retry.
"""

import io
import logging
from pathlib import Path

import httpx
import pandas as pd

from ..config import (
    DUPLICATE_POLICIES,
    ENTITY_FIELD,
    KPI_REGISTRY,
    MISSING_VALUE,
    OVERFLOW_PREFIX,
    SHEET_URL,
)
from ..models import EntityRecord, RecordSet
from .utils import clean_header, is_blank_line, split_cells, split_lines

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------

def _parse_simple(text: str) -> tuple[tuple[str, ...], list[list[str]]]:
    """Comma split without quote handling."""
    lines = split_lines(text)
    headers = clean_header(split_cells(lines[0]))
    rows = [split_cells(line) for line in lines[1:] if not is_blank_line(line)]
    return headers, rows


def _parse_extended(text: str) -> tuple[tuple[str, ...], list[list[str]]]:
    """Quote-aware parse through pandas.

    The header line is read as an ordinary row so that rows longer than it
    reach the bad-line handler, which truncates them. Blank header cells get
    pandas' "Unnamed: <n>" label and their columns are dropped. Rows whose
    cells are all empty are kept.
    """
    read_kwargs = dict(
        header=None,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        engine="python",
    )
    n_cols = pd.read_csv(io.StringIO(text), nrows=1, **read_kwargs).shape[1]
    df = pd.read_csv(
        io.StringIO(text),
        on_bad_lines=lambda bad: bad[:n_cols],
        **read_kwargs,
    ).fillna(MISSING_VALUE)

    headers = clean_header([str(c) for c in df.iloc[0]])
    body = df.iloc[1:].copy()
    body.columns = [h or f"{OVERFLOW_PREFIX} {i}" for i, h in enumerate(headers)]

    overflow = [c for c in body.columns if c.startswith(OVERFLOW_PREFIX)]
    if overflow:
        logger.info("Dropping %d unnamed column(s): %s", len(overflow), overflow)
        body = body.drop(columns=overflow)

    for col in body.columns:
        body[col] = body[col].astype(str).str.strip()

    return tuple(body.columns), [list(row) for row in body.itertuples(index=False, name=None)]


def _apply_duplicate_policy(
    records: list[EntityRecord],
    policy: str,
) -> list[EntityRecord]:
    seen: set[str] = set()
    duplicates: list[str] = []
    kept = []
    for record in records:
        if record.name in seen:
            duplicates.append(record.name)
            if policy == "keep_first":
                continue
        seen.add(record.name)
        kept.append(record)

    if duplicates:
        logger.warning(
            "Duplicate entity names (%s policy): %s",
            policy,
            sorted(set(duplicates)),
        )
    return kept


def normalize_csv(
    text: str,
    *,
    extended: bool = False,
    duplicate_policy: str = "keep_all",
    entity_field: str = ENTITY_FIELD,
) -> RecordSet:
    """Parse raw CSV text into an immutable RecordSet.

    Parameters
    ----------
    text : Raw CSV, first line is the header.
    extended : Use the quote-aware pandas parser instead of a plain comma split.
    duplicate_policy : "keep_all" (every row becomes a record) or
        "keep_first" (later rows reusing an entity name are dropped).
    entity_field : Header of the column holding the entity name.

    Returns
    -------
    RecordSet, empty when the input is blank. Every record carries every
    header key; cells missing from short rows hold the empty string.
    Empty lines are skipped, but a delimiter-only line is a record. If the
    quote-aware parser rejects the text (an unterminated quote, say), the
    plain comma split is used instead.
    """
    if duplicate_policy not in DUPLICATE_POLICIES:
        raise ValueError(
            f"duplicate_policy must be one of {DUPLICATE_POLICIES}, got {duplicate_policy!r}"
        )

    if not text or not text.strip():
        logger.warning("Empty CSV input, returning empty record set")
        return RecordSet()

    if extended:
        try:
            headers, rows = _parse_extended(text)
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
            logger.warning("Quote-aware parse failed, falling back to comma split: %s", exc)
            headers, rows = _parse_simple(text)
    else:
        headers, rows = _parse_simple(text)

    if entity_field not in headers:
        logger.warning("Entity column '%s' not found in header %s", entity_field, list(headers))

    records = [
        EntityRecord.from_cells(headers, cells, entity_field, MISSING_VALUE)
        for cells in rows
    ]
    records = _apply_duplicate_policy(records, duplicate_policy)

    record_set = RecordSet(headers=headers, records=tuple(records))

    missing = record_set.missing_fields(KPI_REGISTRY)
    if missing:
        logger.warning("KPI source columns missing from sheet: %s", missing)

    logger.info("Normalised %d records with %d columns", len(record_set), len(headers))
    return record_set


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------

async def _get_text(client: httpx.AsyncClient, url: str) -> str:
    response = await client.get(url)
    if not response.is_success:
        logger.warning(
            "Failed to fetch data. Status: %s %s",
            response.status_code,
            response.reason_phrase,
        )
        return ""
    return response.text


async def fetch_csv_text(url: str = SHEET_URL, client: httpx.AsyncClient | None = None) -> str:
    """Fetch the published CSV. Returns "" on any transport failure."""
    try:
        if client is not None:
            return await _get_text(client, url)
        async with httpx.AsyncClient(follow_redirects=True) as own_client:
            return await _get_text(own_client, url)
    except httpx.HTTPError as exc:
        logger.warning("Error fetching sheet %s: %s", url, exc)
        return ""


async def load_snapshot(
    url: str = SHEET_URL,
    client: httpx.AsyncClient | None = None,
    **normalize_kwargs,
) -> RecordSet:
    """Fetch then normalise; the only suspension point is the fetch itself."""
    text = await fetch_csv_text(url, client=client)
    return normalize_csv(text, **normalize_kwargs)


def load_csv_file(path: str | Path, **normalize_kwargs) -> RecordSet:
    """Load a CSV exported to disk."""
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError):
        logger.exception("Failed to read CSV file: %s", path)
        return RecordSet()
    return normalize_csv(text, **normalize_kwargs)

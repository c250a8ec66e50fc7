"""Data ingestion for the published society-data sheet."""

from .csv_source import fetch_csv_text, load_csv_file, load_snapshot, normalize_csv
from .utils import coerce_number

__all__ = [
    "fetch_csv_text",
    "load_csv_file",
    "load_snapshot",
    "normalize_csv",
    "coerce_number",
]

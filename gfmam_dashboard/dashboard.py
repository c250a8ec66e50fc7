"""
Dashboard-ready output functions.

DashboardSession is the primary entry point for a Streamlit front end: it
owns one immutable snapshot of the sheet and hands out plain dicts and
series for cards, bar charts and the radar chart. A refresh builds a new
session; nothing is carried over from the previous one.
"""

import logging
from functools import cached_property
from typing import Iterable

import httpx

from .config import (
    COMPOUND_KPIS,
    KPI_REGISTRY,
    PLACEHOLDER,
    SHEET_URL,
    TOTAL_KPIS,
    chart_kpis,
    get_kpi,
)
from .kpis import calculate_kpis
from .loaders import load_snapshot
from .models import ChartSeries, RadarSeries, RecordSet, ScaleRange
from .scaling import build_radar_series, compute_scale_ranges
from .series import build_all_series

logger = logging.getLogger(__name__)


def format_kpi_value(value: float | None, style: str = "decimal") -> str:
    """Render a card value; None becomes the placeholder, never "0".

    style: "decimal" (one decimal place), "currency" ("$ 12,345")
    or "count" (whole number).
    """
    if value is None:
        return PLACEHOLDER
    if style == "currency":
        return f"$ {value:,.0f}"
    if style == "count":
        return f"{value:,.0f}"
    return f"{value:,.1f}"


def kpi_tooltip(kpi_id: str) -> str:
    """Tooltip text: unit line followed by the description.

    The compound agreements card lists the description of each component.
    """
    for compound in COMPOUND_KPIS:
        if compound.id == kpi_id:
            parts = [get_kpi(c) for c in compound.components]
            lines = [f"Unit: {compound.unit}", "", "This is the sum of:"]
            lines += [f"{i}. {p.tooltip}" for i, p in enumerate(parts, start=1)]
            return "\n".join(lines)

    kpi = get_kpi(kpi_id)
    return f"Unit: {kpi.unit}\n\n{kpi.tooltip}"


class DashboardSession:
    """All derived dashboard state for one snapshot of the sheet."""

    def __init__(self, records: RecordSet):
        self.records = records

    @classmethod
    async def refresh(
        cls,
        url: str = SHEET_URL,
        client: httpx.AsyncClient | None = None,
        **normalize_kwargs,
    ) -> "DashboardSession":
        """Fetch a fresh snapshot and wrap it in a new session."""
        records = await load_snapshot(url, client=client, **normalize_kwargs)
        if records.is_empty:
            logger.error("No data fetched to initialize dashboard")
        return cls(records)

    @property
    def is_empty(self) -> bool:
        return self.records.is_empty

    @cached_property
    def summary(self) -> dict:
        return calculate_kpis(self.records)

    @cached_property
    def scale_ranges(self) -> dict[str, ScaleRange]:
        return compute_scale_ranges(self.records)

    def entity_names(self) -> list[str]:
        """Entity names for selector widgets, in data order."""
        return self.records.names()

    def kpi_cards(self) -> list[dict]:
        """One dict per KPI card, with display strings already formatted.

        Returns
        -------
        [
            {"id": "total_orgs", "title": ..., "display": "12", ...},
            {"id": "membership_reach", "value": 52.3, "display": "52.3", ...},
            ...
        ]
        """
        summary = self.summary
        compound_ids = {c.id for c in COMPOUND_KPIS}
        cards = [{
            "id": "total_orgs",
            "title": "Total Organizations",
            "unit": "Organizations",
            "value": summary["total_orgs"],
            "display": str(summary["total_orgs"]),
            "tooltip": None,
        }]

        for kpi_id, kpi in summary["kpis"].items():
            if kpi_id in TOTAL_KPIS:
                value = kpi["sum"] if kpi["observed_count"] else None
                display = format_kpi_value(value, "currency")
            elif kpi_id in compound_ids:
                value = kpi["sum"] if kpi["observed_count"] else None
                display = format_kpi_value(value, "count")
            else:
                value = kpi["mean"]
                display = format_kpi_value(value)

            cards.append({
                "id": kpi_id,
                "title": kpi["title"],
                "unit": kpi["unit"],
                "value": value,
                "display": display,
                "tooltip": kpi_tooltip(kpi_id),
            })
        return cards

    def chart_series(self, selection: Iterable[str] | None = None) -> dict[str, ChartSeries]:
        """Bar series for every chart KPI, restricted to `selection`."""
        return build_all_series(self.records, selection)

    def radar(self, entity_name: str) -> RadarSeries | None:
        """Radar series for one entity, scaled against the whole population."""
        return build_radar_series(
            self.records,
            entity_name,
            chart_kpis(KPI_REGISTRY),
            ranges=self.scale_ranges,
        )

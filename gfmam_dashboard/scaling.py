"""
Min-max scaling of KPI values onto the 1-10 radar axis.

Unlike the aggregator, a cell that cannot be coerced counts as 0 here:
every organisation has to sit somewhere on every axis. Ranges always come
from the full record set, so an organisation's radar shape does not change
when the user filters the bar charts.
"""

import logging

from .config import SCALE_MAX, SCALE_MIDPOINT, SCALE_MIN, chart_kpis
from .kpis import kpi_frame
from .loaders.utils import coerce_or_zero
from .models import KpiDefinition, RadarSeries, RecordSet, ScaleRange

logger = logging.getLogger(__name__)


def compute_scale_ranges(
    records: RecordSet,
    kpis: list[KpiDefinition] | None = None,
) -> dict[str, ScaleRange]:
    """Per-KPI min/max over all entities, missing values filled with 0."""
    if kpis is None:
        kpis = chart_kpis()
    if records.is_empty:
        return {}

    frame = kpi_frame(records, kpis).fillna(0.0)
    ranges = {
        k.id: ScaleRange(min=float(frame[k.id].min()), max=float(frame[k.id].max()))
        for k in kpis
    }
    logger.info("Computed scale ranges for %d KPIs", len(ranges))
    return ranges


def scale_value(value: float, scale_range: ScaleRange) -> float:
    """Map `value` onto [1, 10]; a constant column maps to the midpoint."""
    if scale_range.is_degenerate:
        return SCALE_MIDPOINT
    span = SCALE_MAX - SCALE_MIN
    return SCALE_MIN + (value - scale_range.min) * span / (scale_range.max - scale_range.min)


def build_radar_series(
    records: RecordSet,
    entity_name: str,
    kpis: list[KpiDefinition] | None = None,
    ranges: dict[str, ScaleRange] | None = None,
) -> RadarSeries | None:
    """Scaled values for one entity, or None if the entity is not loaded.

    Parameters
    ----------
    records : Full record set (never a filtered subset).
    entity_name : Exact entity name; with duplicates, the first row wins.
    ranges : Precomputed ranges from compute_scale_ranges(), if available.
    """
    if kpis is None:
        kpis = chart_kpis()

    record = records.find(entity_name)
    if record is None:
        logger.warning("No organisation named '%s' for radar chart", entity_name)
        return None

    if ranges is None:
        ranges = compute_scale_ranges(records, kpis)

    values = []
    for kpi in kpis:
        raw = coerce_or_zero(record.get(kpi.source_field))
        values.append(scale_value(raw, ranges[kpi.id]))

    return RadarSeries(
        entity=entity_name,
        labels=[k.title for k in kpis],
        values=values,
    )


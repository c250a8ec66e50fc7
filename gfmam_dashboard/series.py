"""
Bar-chart series: per-entity values for one KPI plus a population baseline.

The baseline is always the aggregator's mean over the full record set, so
the average line stays put while the user narrows the selection.

That mean only counts cells that parse as numbers, the same figure the KPI
card shows. The bars themselves zero-fill unparsable cells, so a baseline
computed over the bar values (blanks counted as 0) would sit lower whenever
a column has gaps.
"""

import logging
from typing import Iterable

from .config import ABOVE, BELOW, chart_kpis
from .kpis import summarise_kpi
from .loaders.utils import coerce_or_zero
from .models import ChartSeries, EntityRecord, KpiDefinition, RecordSet

logger = logging.getLogger(__name__)


def filter_records(
    records: RecordSet,
    selection: Iterable[str] | None = None,
) -> list[EntityRecord]:
    """Records whose name is in `selection`, in data order.

    An empty or missing selection means "show all".
    """
    selected = set(selection or ())
    if not selected:
        return list(records)
    return [r for r in records if r.name in selected]


def classify_against_baseline(value: float, baseline: float) -> str:
    """'above' when value >= baseline (ties included), else 'below'."""
    return ABOVE if value >= baseline else BELOW


def build_chart_series(
    records: RecordSet,
    kpi: KpiDefinition,
    selection: Iterable[str] | None = None,
) -> ChartSeries:
    """Bar values for the selected entities against the full-population mean.

    Parameters
    ----------
    records : Full record set; the baseline is always computed from it.
    kpi : Registry entry with a source field.
    selection : Entity names to show. None/empty shows every entity.

    Returns
    -------
    ChartSeries whose baseline_value is 0.0 when the KPI has no numeric
    observations at all.
    """
    summary = summarise_kpi(records, kpi)
    baseline = summary.mean if summary.mean is not None else 0.0

    shown = filter_records(records, selection)
    values = [coerce_or_zero(r.get(kpi.source_field)) for r in shown]

    return ChartSeries(
        kpi_id=kpi.id,
        labels=[r.name for r in shown],
        values=values,
        baseline_value=baseline,
        color_classes=[classify_against_baseline(v, baseline) for v in values],
    )


def build_all_series(
    records: RecordSet,
    selection: Iterable[str] | None = None,
    kpis: list[KpiDefinition] | None = None,
) -> dict[str, ChartSeries]:
    """One ChartSeries per chart KPI, keyed by KPI id, in registry order."""
    if kpis is None:
        kpis = chart_kpis()
    # Materialise once: a generator selection would be consumed by the first KPI
    selection = list(selection or ())

    series = {k.id: build_chart_series(records, k, selection) for k in kpis}
    logger.info(
        "Built %d chart series for %s",
        len(series),
        f"{len(selection)} selected organisations" if selection else "all organisations",
    )
    return series

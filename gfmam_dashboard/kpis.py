"""
KPI aggregation functions — pure functions with no side effects.

Non-numeric cells are excluded from both the sum and the observation count,
so a blank cell never drags a mean towards zero. A KPI with no numeric
observations has mean None, which the dashboard renders as a placeholder
rather than 0.
"""

import logging

import pandas as pd

from .config import COMPOUND_KPIS, KPI_REGISTRY, chart_kpis, get_kpi
from .loaders.utils import coerce_number
from .models import CompoundKpi, KpiDefinition, KpiSummary, RecordSet

logger = logging.getLogger(__name__)


def coerce_column(records: RecordSet, source_field: str | None) -> pd.Series:
    """Numeric values of one column, NaN where coercion fails.

    Indexed by entity name, in source order.
    """
    values = [coerce_number(r.get(source_field)) for r in records]
    return pd.to_numeric(
        pd.Series(values, index=records.names(), dtype="object"),
        errors="coerce",
    ).astype("float64")


def kpi_frame(
    records: RecordSet,
    kpis: list[KpiDefinition] | None = None,
) -> pd.DataFrame:
    """Wide DataFrame of coerced KPI values: one row per entity, one column per KPI id."""
    if kpis is None:
        kpis = chart_kpis()
    # Positional: entity names are not guaranteed unique
    return pd.DataFrame(
        {k.id: coerce_column(records, k.source_field).to_numpy() for k in kpis},
        index=pd.Index(records.names(), name="entity", dtype="object"),
    )


def summarise_kpi(records: RecordSet, kpi: KpiDefinition) -> KpiSummary:
    """Count-gated aggregate of one KPI column.

    mean = total / observed_count when observed_count > 0, else None.
    """
    observed = coerce_column(records, kpi.source_field).dropna()
    count = int(observed.count())
    total = float(observed.sum()) if count else 0.0
    mean = total / count if count else None
    return KpiSummary(kpi_id=kpi.id, observed_count=count, total=total, mean=mean)


def summarise_compound(records: RecordSet, compound: CompoundKpi) -> KpiSummary:
    """Plain total across the component columns; no mean is reported."""
    count = 0
    total = 0.0
    for component_id in compound.components:
        part = summarise_kpi(records, get_kpi(component_id))
        count += part.observed_count
        total += part.total
    return KpiSummary(kpi_id=compound.id, observed_count=count, total=total, mean=None)


def calculate_kpis(
    records: RecordSet,
    registry: tuple[KpiDefinition, ...] = KPI_REGISTRY,
    compounds: tuple[CompoundKpi, ...] = COMPOUND_KPIS,
) -> dict:
    """Return a dict suitable for the top-level KPI cards.

    Returns
    -------
    {
        "total_orgs": 12,
        "kpis": {
            "membership_reach": {
                "id": ..., "title": ..., "unit": ..., "tooltip": ...,
                "observed_count": 10, "sum": 523.0, "mean": 52.3,
            },
            ...
            "total_agreements": {..., "mean": None},
        },
    }
    """
    kpis: dict[str, dict] = {}

    for kpi in chart_kpis(registry):
        summary = summarise_kpi(records, kpi)
        kpis[kpi.id] = {
            "id": kpi.id,
            "title": kpi.title,
            "unit": kpi.unit,
            "tooltip": kpi.tooltip,
            "observed_count": summary.observed_count,
            "sum": summary.total,
            "mean": summary.mean,
        }
        if summary.mean is None:
            logger.warning("No numeric values for KPI '%s'", kpi.id)

    for compound in compounds:
        summary = summarise_compound(records, compound)
        kpis[compound.id] = {
            "id": compound.id,
            "title": compound.title,
            "unit": compound.unit,
            "tooltip": None,
            "observed_count": summary.observed_count,
            "sum": summary.total,
            "mean": None,
        }

    logger.info("Calculated %d KPI summaries over %d organisations", len(kpis), len(records))
    return {"total_orgs": len(records), "kpis": kpis}

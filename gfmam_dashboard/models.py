"""
Typed records passed between pipeline stages.

All of these are immutable: a refresh builds a new RecordSet and every
derived structure (summaries, scale ranges, series) is recomputed from it.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping


@dataclass(frozen=True)
class KpiDefinition:
    """One entry of the KPI registry.

    source_field is None for meta entries (e.g. the radar chart card) that
    carry presentation metadata but no data column.
    """

    id: str
    title: str
    unit: str
    tooltip: str
    source_field: str | None


@dataclass(frozen=True)
class CompoundKpi:
    """A KPI reported as a plain total across several registry entries."""

    id: str
    title: str
    unit: str
    components: tuple[str, ...]


@dataclass(frozen=True)
class EntityRecord:
    """One normalised spreadsheet row, keyed by its entity name."""

    name: str
    fields: Mapping[str, str]

    def get(self, field_name: str | None, default: str = "") -> str:
        """Return the trimmed cell value, or `default` if the column is absent."""
        if field_name is None:
            return default
        return self.fields.get(field_name, default)

    @classmethod
    def from_cells(
        cls,
        headers: tuple[str, ...],
        cells: list[str],
        entity_field: str,
        missing: str = "",
    ) -> "EntityRecord":
        """Pair cells with headers; short rows are padded, surplus cells dropped."""
        values = {}
        for i, header in enumerate(headers):
            values[header] = cells[i].strip() if i < len(cells) else missing
        return cls(
            name=values.get(entity_field, missing),
            fields=MappingProxyType(values),
        )


@dataclass(frozen=True)
class RecordSet:
    """Immutable snapshot of one refresh cycle."""

    headers: tuple[str, ...] = ()
    records: tuple[EntityRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[EntityRecord]:
        return iter(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records

    def names(self) -> list[str]:
        return [r.name for r in self.records]

    def find(self, name: str) -> EntityRecord | None:
        """First record whose name matches exactly, or None."""
        for record in self.records:
            if record.name == name:
                return record
        return None

    def missing_fields(self, kpis) -> list[str]:
        """Source columns named by `kpis` that the header does not carry."""
        present = set(self.headers)
        return [
            k.source_field for k in kpis
            if k.source_field is not None and k.source_field not in present
        ]


@dataclass(frozen=True)
class KpiSummary:
    """Aggregate for one KPI. mean is None when nothing could be averaged."""

    kpi_id: str
    observed_count: int
    total: float
    mean: float | None


@dataclass(frozen=True)
class ScaleRange:
    min: float
    max: float

    @property
    def is_degenerate(self) -> bool:
        return self.max == self.min


@dataclass(frozen=True)
class ChartSeries:
    """Bar values for a set of entities plus the population baseline."""

    kpi_id: str
    labels: list[str]
    values: list[float]
    baseline_value: float
    color_classes: list[str] = field(default_factory=list)

    @property
    def baseline(self) -> list[float]:
        return [self.baseline_value] * len(self.labels)

    def to_frame(self):
        import pandas as pd

        return pd.DataFrame({
            "entity": self.labels,
            "value": self.values,
            "baseline": self.baseline,
            "color_class": self.color_classes,
        })


@dataclass(frozen=True)
class RadarSeries:
    """Values on the 1-10 scale, one per chart KPI, for a single entity."""

    entity: str
    labels: list[str]
    values: list[float]

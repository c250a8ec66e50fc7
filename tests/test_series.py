"""
tests/test_series.py

Pytest unit tests for bar-chart series building.

Coverage
--------
- Empty selection shows everything
- Selection keeps data order, not selection order
- Baseline is the full-population mean regardless of selection
- Above/below classification, ties go to "above"
"""

from __future__ import annotations

import pytest

from gfmam_dashboard.config import ABOVE, BELOW, chart_kpis, get_kpi
from gfmam_dashboard.loaders import normalize_csv
from gfmam_dashboard.models import KpiDefinition, RecordSet
from gfmam_dashboard.series import (
    build_all_series,
    build_chart_series,
    classify_against_baseline,
    filter_records,
)

X_KPI = KpiDefinition(id="x", title="X", unit="u", tooltip="", source_field="x")


class TestFilterRecords:
    @pytest.mark.parametrize("selection", [None, [], set(), ()])
    def test_no_selection_means_all(self, records: RecordSet, selection) -> None:
        assert [r.name for r in filter_records(records, selection)] == ["Alpha", "Beta", "Gamma"]

    def test_data_order_preserved(self, records: RecordSet) -> None:
        shown = filter_records(records, ["Gamma", "Alpha"])
        assert [r.name for r in shown] == ["Alpha", "Gamma"]

    def test_unknown_names_ignored(self, records: RecordSet) -> None:
        shown = filter_records(records, ["Beta", "Nobody"])
        assert [r.name for r in shown] == ["Beta"]


class TestClassify:
    def test_tie_goes_above(self) -> None:
        assert classify_against_baseline(15.0, 15.0) == ABOVE

    def test_below(self) -> None:
        assert classify_against_baseline(14.9, 15.0) == BELOW


class TestBuildChartSeries:
    def test_all_entities(self, records: RecordSet) -> None:
        series = build_chart_series(records, get_kpi("membership_reach"))
        assert series.labels == ["Alpha", "Beta", "Gamma"]
        # Gamma's "n/a" is plotted as 0
        assert series.values == [10.0, 20.0, 0.0]
        assert series.baseline_value == pytest.approx(15.0)
        assert series.color_classes == [BELOW, ABOVE, BELOW]

    def test_baseline_broadcast_to_label_length(self, records: RecordSet) -> None:
        series = build_chart_series(records, get_kpi("membership_reach"), ["Beta"])
        assert series.baseline == [pytest.approx(15.0)]

    def test_baseline_independent_of_selection(self, records: RecordSet) -> None:
        for kpi in chart_kpis():
            full = build_chart_series(records, kpi)
            for selection in (["Alpha"], ["Beta", "Gamma"], ["Gamma"]):
                assert build_chart_series(records, kpi, selection).baseline_value == full.baseline_value

    def test_filtered_series_keeps_data_order(self, records: RecordSet) -> None:
        series = build_chart_series(records, get_kpi("financial_health"), ["Gamma", "Alpha"])
        assert series.labels == ["Alpha", "Gamma"]
        assert series.values == [1000.0, 2000.0]
        assert series.baseline_value == pytest.approx(2000.0)
        assert series.color_classes == [BELOW, ABOVE]

    def test_no_numeric_values_gives_zero_baseline(self) -> None:
        rs = normalize_csv("Organization Name,x\nA,n/a\nB,")
        series = build_chart_series(rs, X_KPI)
        assert series.baseline_value == 0.0
        assert series.values == [0.0, 0.0]
        assert series.color_classes == [ABOVE, ABOVE]

    def test_empty_record_set(self) -> None:
        series = build_chart_series(RecordSet(), X_KPI)
        assert series.labels == []
        assert series.baseline == []

    def test_to_frame(self, records: RecordSet) -> None:
        frame = build_chart_series(records, get_kpi("membership_reach")).to_frame()
        assert list(frame.columns) == ["entity", "value", "baseline", "color_class"]
        assert len(frame) == 3


class TestBuildAllSeries:
    def test_one_series_per_chart_kpi(self, records: RecordSet) -> None:
        series = build_all_series(records)
        assert list(series) == [k.id for k in chart_kpis()]

    def test_generator_selection_applies_to_every_kpi(self, records: RecordSet) -> None:
        series = build_all_series(records, (name for name in ["Beta"]))
        assert all(s.labels == ["Beta"] for s in series.values())

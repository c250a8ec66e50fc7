"""
tests/test_scaling.py

Pytest unit tests for radar scaling.

Coverage
--------
- Min/max from zero-filled values over the full population
- Degenerate (constant) columns map to the midpoint
- Output bounded to [1, 10]
- Radar series for known and unknown entities
"""

from __future__ import annotations

import pytest

from gfmam_dashboard.config import SCALE_MAX, SCALE_MIDPOINT, SCALE_MIN, chart_kpis, get_kpi
from gfmam_dashboard.loaders import normalize_csv
from gfmam_dashboard.models import KpiDefinition, RecordSet, ScaleRange
from gfmam_dashboard.scaling import build_radar_series, compute_scale_ranges, scale_value

X_KPI = KpiDefinition(id="x", title="X", unit="u", tooltip="", source_field="x")


class TestScaleValue:
    def test_endpoints(self) -> None:
        rng = ScaleRange(min=0.0, max=20.0)
        assert scale_value(0.0, rng) == pytest.approx(1.0)
        assert scale_value(20.0, rng) == pytest.approx(10.0)

    def test_linear_interpolation(self) -> None:
        rng = ScaleRange(min=0.0, max=20.0)
        assert scale_value(10.0, rng) == pytest.approx(5.5)

    def test_degenerate_range_is_midpoint(self) -> None:
        rng = ScaleRange(min=7.0, max=7.0)
        assert scale_value(7.0, rng) == SCALE_MIDPOINT

    @pytest.mark.parametrize("value", [-3.0, -1.5, 0.0, 0.1, 2.0, 4.999, 5.0])
    def test_values_within_range_stay_within_scale(self, value: float) -> None:
        rng = ScaleRange(min=-3.0, max=5.0)
        assert SCALE_MIN <= scale_value(value, rng) <= SCALE_MAX


class TestComputeScaleRanges:
    def test_missing_values_count_as_zero(self, records: RecordSet) -> None:
        # Membership: Alpha 10, Beta 20, Gamma n/a -> 0
        ranges = compute_scale_ranges(records)
        assert ranges["membership_reach"] == ScaleRange(min=0.0, max=20.0)

    def test_one_range_per_chart_kpi(self, records: RecordSet) -> None:
        assert set(compute_scale_ranges(records)) == {k.id for k in chart_kpis()}

    def test_empty_record_set(self) -> None:
        assert compute_scale_ranges(RecordSet()) == {}

    def test_constant_column_scales_to_midpoint_for_everyone(self) -> None:
        rs = normalize_csv("Organization Name,x\nA,4\nB,4\nC,4")
        rng = compute_scale_ranges(rs, [X_KPI])["x"]
        assert rng.is_degenerate
        for name in rs.names():
            radar = build_radar_series(rs, name, [X_KPI])
            assert radar.values == [SCALE_MIDPOINT]

    def test_single_entity_is_degenerate(self) -> None:
        rs = normalize_csv("Organization Name,x\nA,123")
        assert build_radar_series(rs, "A", [X_KPI]).values == [SCALE_MIDPOINT]


class TestRadarSeries:
    def test_labels_are_kpi_titles(self, records: RecordSet) -> None:
        radar = build_radar_series(records, "Alpha")
        assert radar.labels == [k.title for k in chart_kpis()]
        assert radar.entity == "Alpha"

    def test_scaled_against_full_population(self, records: RecordSet) -> None:
        membership = [k.id for k in chart_kpis()].index("membership_reach")
        assert build_radar_series(records, "Alpha").values[membership] == pytest.approx(5.5)
        assert build_radar_series(records, "Beta").values[membership] == pytest.approx(10.0)
        assert build_radar_series(records, "Gamma").values[membership] == pytest.approx(1.0)

    def test_all_values_within_scale(self, records: RecordSet) -> None:
        for name in records.names():
            for value in build_radar_series(records, name).values:
                assert SCALE_MIN <= value <= SCALE_MAX

    def test_precomputed_ranges_used(self, records: RecordSet) -> None:
        kpi = get_kpi("membership_reach")
        ranges = {kpi.id: ScaleRange(min=10.0, max=10.0)}
        radar = build_radar_series(records, "Beta", [kpi], ranges=ranges)
        assert radar.values == [SCALE_MIDPOINT]

    def test_unknown_entity_returns_none(self, records: RecordSet) -> None:
        assert build_radar_series(records, "Nobody") is None

    def test_name_match_is_case_sensitive(self, records: RecordSet) -> None:
        assert build_radar_series(records, "alpha") is None

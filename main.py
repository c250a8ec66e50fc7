"""
GFMAM Society Dashboard — End-to-end analytics pipeline.

Runs the full data pipeline from the published sheet (or a local CSV, or
simulated data) to dashboard-ready outputs and prints smoke-test summaries.

Usage:
    python main.py                  # simulated data
    python main.py path/to/file.csv
    python main.py https://...      # published sheet URL
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent))

from gfmam_dashboard.config import COMPOUND_KPIS, SCALE_MAX, SCALE_MIN, chart_kpis
from gfmam_dashboard.dashboard import DashboardSession
from gfmam_dashboard.loaders import load_csv_file, normalize_csv
from gfmam_dashboard.simulator import generate_society_csv

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def load_session(source: str | None) -> DashboardSession:
    if source is None:
        return DashboardSession(normalize_csv(generate_society_csv(), extended=True))
    if source.startswith(("http://", "https://")):
        return asyncio.run(DashboardSession.refresh(source, extended=True))
    return DashboardSession(load_csv_file(source, extended=True))


def main() -> None:
    """Run the full analytics pipeline and print smoke-test outputs."""
    source = sys.argv[1] if len(sys.argv) > 1 else None

    print("=" * 70)
    print("  GFMAM SOCIETY DASHBOARD")
    print("  Analytics Pipeline Smoke Test")
    print("=" * 70)
    print()

    # ------------------------------------------------------------------
    # 1. Load source data
    # ------------------------------------------------------------------
    print("[ 1 ] LOADING SOURCE DATA")
    print("-" * 40)

    session = load_session(source)
    print(f"\nSource: {source or 'simulated'}")
    print(f"Organisations loaded: {len(session.records)}")
    if session.is_empty:
        print("\nNo data to render.")
        return

    # ------------------------------------------------------------------
    # 2. KPI cards
    # ------------------------------------------------------------------
    print("\n")
    print("[ 2 ] KPI CARDS")
    print("-" * 40)
    for card in session.kpi_cards():
        print(f"  {card['title']:36s} | {card['display']:>14s} {card['unit']}")

    # ------------------------------------------------------------------
    # 3. Chart series
    # ------------------------------------------------------------------
    print("\n")
    print("[ 3 ] CHART SERIES (all organisations)")
    print("-" * 40)
    for kpi_id, series in session.chart_series().items():
        above = series.color_classes.count("above")
        print(
            f"  {kpi_id:24s} | baseline {series.baseline_value:10.2f} | "
            f"{above}/{len(series.values)} at or above"
        )

    first = session.entity_names()[0]
    radar = session.radar(first)
    print(f"\nRadar — {first}:")
    for label, value in zip(radar.labels, radar.values):
        print(f"  {label:36s} | {value:5.2f}")

    # ------------------------------------------------------------------
    # 4. Acceptance criteria verification
    # ------------------------------------------------------------------
    print("\n")
    print("[ 4 ] ACCEPTANCE CRITERIA CHECKS")
    print("-" * 40)

    all_series = session.chart_series()
    subset = session.chart_series(session.entity_names()[:2])
    check1 = all(
        all_series[k].baseline_value == subset[k].baseline_value for k in all_series
    )
    print(f"\n  [{'PASS' if check1 else 'FAIL'}] Baseline unchanged by selection")

    radar_values = [
        v for name in session.entity_names()
        for v in (session.radar(name).values)
    ]
    check2 = all(SCALE_MIN <= v <= SCALE_MAX for v in radar_values)
    print(f"  [{'PASS' if check2 else 'FAIL'}] Radar values within [{SCALE_MIN:g}, {SCALE_MAX:g}]")

    check3 = len(session.kpi_cards()) == len(chart_kpis()) + len(COMPOUND_KPIS) + 1
    print(f"  [{'PASS' if check3 else 'FAIL'}] {len(session.kpi_cards())} KPI cards built")

    print("\n" + "=" * 70)
    print("  Pipeline complete.")
    print("=" * 70)


if __name__ == "__main__":
    main()

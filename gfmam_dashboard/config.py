"""
Configuration: KPI registry, data source, constants.

KPI_REGISTRY is the single source of truth for KPI presentation: each entry
maps a logical KPI id to its display title, unit, tooltip and the column it
reads in the published sheet.
"""

import os

from .models import CompoundKpi, KpiDefinition

# ---------------------------------------------------------------------------
# Data source
# ---------------------------------------------------------------------------
SHEET_URL = os.environ.get(
    "GFMAM_SHEET_URL",
    "https://docs.google.com/spreadsheets/d/e/2PACX-1vShUL9swlQuiTVz1LQvJhL_lfhB3eriJkIV7vsAN-nKINaowMfFl7We8gezVGFpy8QcPnR4xjBSuN23/pub?gid=1423207942&single=true&output=csv",
)

# Sheet that the admin form writes into
SOCIETY_DATA_SHEET_NAME = "Society Data"

# ---------------------------------------------------------------------------
# CSV normalisation
# ---------------------------------------------------------------------------
ENTITY_FIELD = "Organization Name"
FIELD_DELIMITER = ","
MISSING_VALUE = ""

# pandas names blank or surplus header cells "Unnamed: <n>"
OVERFLOW_PREFIX = "Unnamed:"

DUPLICATE_POLICIES = ("keep_all", "keep_first")

# ---------------------------------------------------------------------------
# Radar scaling
# ---------------------------------------------------------------------------
SCALE_MIN = 1.0
SCALE_MAX = 10.0
SCALE_MIDPOINT = 5.0

# ---------------------------------------------------------------------------
# Presentation
# ---------------------------------------------------------------------------
PLACEHOLDER = "--"
ABOVE = "above"
BELOW = "below"

SERIES_COLORS = {
    ABOVE: "#84bd00",
    BELOW: "#e74c3c",
    "baseline": "#00a3e0",
    "radar_fill": "rgba(0, 163, 224, 0.2)",
}

# ---------------------------------------------------------------------------
# KPI Registry
# ---------------------------------------------------------------------------
SPIDER_CHART_ID = "spider_chart"

KPI_REGISTRY: tuple[KpiDefinition, ...] = (
    KpiDefinition(
        id="membership_reach",
        title="Membership Reach",
        unit="Member / Million Inhabitants",
        tooltip="How many members you have per million inhabitants in the target region.",
        source_field="Membership Reach",
    ),
    KpiDefinition(
        id="certification_reach",
        title="Certification Scheme Reach",
        unit="Certified / Million Inhabitants",
        tooltip="Number of individuals or organizations certified per million inhabitants.",
        source_field="Certification Scheme Reach",
    ),
    KpiDefinition(
        id="financial_health",
        title="Financial Health",
        unit="$ Annualized Revenue / Member",
        tooltip="Average annual revenue generated per member (USD / member).",
        source_field="Financial Health",
    ),
    KpiDefinition(
        id="project_involvement",
        title="Involvement in GFMAM Projects",
        unit="Representative / 10 Projects",
        tooltip="Number of representatives you have participating in each of the last 10 GFMAM projects.",
        source_field="Involvement in GFMAM Projects",
    ),
    KpiDefinition(
        id="agreements_members",
        title="Bilateral Agreements (Members)",
        unit="Agreements",
        tooltip="Total count of formal bilateral agreements signed with existing GFMAM member organizations.",
        source_field="# Bilateral Agreement with GFMAM Members",
    ),
    KpiDefinition(
        id="agreements_potential",
        title="Bilateral Agreements (Potential)",
        unit="Agreements",
        tooltip="Total count of formal bilateral agreements signed with organizations that are prospective GFMAM members.",
        source_field="# Bilateral Agreement with GFMAM Potential Members",
    ),
    KpiDefinition(
        id="member_presentations",
        title="Presentations from GFMAM Members",
        unit="Presentations / Event",
        tooltip="Number of presentations delivered by GFMAM member entities at your events.",
        source_field="Presentations from GFMAM Members",
    ),
    KpiDefinition(
        id=SPIDER_CHART_ID,
        title="Organization Radar",
        unit="1-10 Scale",
        tooltip=(
            "This chart visualizes the organization's performance across all 7 KPIs, "
            "scaled from 1 (lowest performance) to 10 (highest performance) relative "
            "to all other GFMAM members."
        ),
        source_field=None,
    ),
)

COMPOUND_KPIS: tuple[CompoundKpi, ...] = (
    CompoundKpi(
        id="total_agreements",
        title="Total Agreements",
        unit="Agreements",
        components=("agreements_members", "agreements_potential"),
    ),
)

# Cards that report a total rather than a mean
TOTAL_KPIS = {"financial_health"}

_KPI_INDEX = {k.id: k for k in KPI_REGISTRY}


def get_kpi(kpi_id: str) -> KpiDefinition:
    """Return the registry entry for `kpi_id` (KeyError if unknown)."""
    return _KPI_INDEX[kpi_id]


def chart_kpis(registry: tuple[KpiDefinition, ...] = KPI_REGISTRY) -> list[KpiDefinition]:
    """Registry entries backed by a data column, in registry order."""
    return [k for k in registry if k.source_field is not None]

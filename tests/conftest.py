"""Shared fixtures: a small, deliberately messy society sheet."""

from __future__ import annotations

import pytest

from gfmam_dashboard.loaders import normalize_csv
from gfmam_dashboard.models import RecordSet

HEADER = (
    "Organization Name,Membership Reach,Certification Scheme Reach,Financial Health,"
    "Involvement in GFMAM Projects,# Bilateral Agreement with GFMAM Members,"
    "# Bilateral Agreement with GFMAM Potential Members,Presentations from GFMAM Members"
)

SOCIETY_CSV = "\n".join([
    HEADER,
    "Alpha,10,2,$1000,3,2,1,4",
    "Beta,20,,$3000,5,1,0,2",
    "Gamma,n/a,4,$2000,1,,2,",
])


@pytest.fixture()
def society_csv() -> str:
    return SOCIETY_CSV


@pytest.fixture()
def records() -> RecordSet:
    """Alpha, Beta, Gamma with a few blank and non-numeric cells."""
    return normalize_csv(SOCIETY_CSV)


@pytest.fixture()
def header_only() -> RecordSet:
    return normalize_csv(HEADER + "\n")

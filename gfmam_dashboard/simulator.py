"""
Simulated data generator for the GFMAM society dashboard.

Generates a published-sheet CSV with realistic value ranges and the kind of
noise human-edited spreadsheets carry (currency symbols, thousands
separators, blank and "n/a" cells). All values are synthetic.
"""

import numpy as np
import pandas as pd

from .config import ENTITY_FIELD, chart_kpis

# ---------------------------------------------------------------------------
# Typical society parameters (realistic ranges)
# ---------------------------------------------------------------------------
_KPI_PARAMS = {
    "membership_reach": {"mean": 45.0, "std": 20.0, "decimals": 1},
    "certification_reach": {"mean": 8.0, "std": 5.0, "decimals": 1},
    "financial_health": {"mean": 120.0, "std": 60.0, "decimals": 0},
    "project_involvement": {"mean": 4.0, "std": 2.5, "decimals": 0},
    "agreements_members": {"mean": 3.0, "std": 2.0, "decimals": 0},
    "agreements_potential": {"mean": 1.5, "std": 1.2, "decimals": 0},
    "member_presentations": {"mean": 2.0, "std": 1.5, "decimals": 1},
}

_SOCIETIES = [
    "AMCouncil", "IAM", "SMRP", "ABRAMAN", "AMPEAK", "APMM", "ASM",
    "EFNMS", "GFMAM Japan", "IMEMA", "MESA", "PAMA", "SAMA", "SOCIEDAD",
    "FRAM", "PMSI", "AMSA", "NZAM", "AMI Chile", "UKMA",
]

_NOISE_CELLS = ["", "n/a", "-", "TBC"]


def generate_society_frame(
    n_societies: int = 12,
    seed: int = 42,
    noise_rate: float = 0.1,
) -> pd.DataFrame:
    """Generate one row per society with string cells, as a sheet would hold them.

    Parameters
    ----------
    n_societies : Number of rows (capped at the number of known names).
    seed : Seed for numpy's default_rng.
    noise_rate : Share of cells replaced by blank/text noise.
    """
    rng = np.random.default_rng(seed)
    names = _SOCIETIES[: min(n_societies, len(_SOCIETIES))]

    columns: dict[str, list[str]] = {ENTITY_FIELD: list(names)}
    for kpi in chart_kpis():
        params = _KPI_PARAMS[kpi.id]
        raw = np.clip(rng.normal(params["mean"], params["std"], len(names)), 0, None)
        cells = []
        for value in raw:
            if rng.random() < noise_rate:
                cells.append(str(rng.choice(_NOISE_CELLS)))
            elif kpi.id == "financial_health":
                cells.append(f"${value:,.0f}")
            else:
                cells.append(f"{value:.{params['decimals']}f}")
        columns[kpi.source_field] = cells

    return pd.DataFrame(columns)


def generate_society_csv(
    n_societies: int = 12,
    seed: int = 42,
    noise_rate: float = 0.1,
) -> str:
    """CSV text of generate_society_frame(), quoting cells that contain commas."""
    df = generate_society_frame(n_societies, seed, noise_rate)
    return df.to_csv(index=False, lineterminator="\n")

"""Score-to-tier lookup tables.

Every calculator classifies its integer score through a literal, ordered
table of :class:`RangeTier` rows.  Each row covers the scores up to and
including ``upper``; the last row has ``upper=None`` and catches the rest.
The percentage attached to a tier is looked up, never recomputed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class RangeTier:
    """One row of a tier table."""

    upper: int | None
    label: str
    percentage: float | None = None
    # Display form, e.g. "≥11%"
    percentage_text: str | None = None


def lookup_tier(table: Sequence[RangeTier], score: int) -> RangeTier:
    """Return the first tier whose inclusive upper bound contains *score*."""
    for tier in table:
        if tier.upper is None or score <= tier.upper:
            return tier
    raise ValueError(f"score {score} is above every tier in the table")


# --- RCRI: risk class and major cardiac complication rate ---
RCRI_TIERS: tuple[RangeTier, ...] = (
    RangeTier(0, "I", 0.4, "0.4%"),
    RangeTier(1, "II", 0.9, "0.9%"),
    RangeTier(2, "III", 6.6, "6.6%"),
    RangeTier(None, "IV", 11.0, "≥11%"),
)

# --- STOP-BANG: categorical only ---
STOP_BANG_TIERS: tuple[RangeTier, ...] = (
    RangeTier(2, "low"),
    RangeTier(4, "intermediate"),
    RangeTier(None, "high"),
)

# --- Apfel: risk category; incidence comes from APFEL_INCIDENCE ---
APFEL_TIERS: tuple[RangeTier, ...] = (
    RangeTier(0, "low"),
    RangeTier(1, "moderate"),
    RangeTier(2, "high"),
    RangeTier(None, "very-high"),
)

# PONV incidence (%), indexed by score (0-4). Apfel et al. 1999
APFEL_INCIDENCE: tuple[int, ...] = (10, 21, 39, 61, 79)

# --- MELD: 3-month mortality ---
MELD_TIERS: tuple[RangeTier, ...] = (
    RangeTier(9, "low", 1.9, "1.9%"),
    RangeTier(19, "moderate", 6.0, "6.0%"),
    RangeTier(29, "high", 19.6, "19.6%"),
    RangeTier(None, "very-high", 52.6, "52.6%"),
)

"""Free-text procedure classifier for the RCRI high-risk surgery factor.

A blunt heuristic: the description is lower-cased and checked for any of
the keywords in ``HIGH_RISK_SURGERY_KEYWORDS`` as a plain substring.  There
is no word-boundary or negation handling, so "thoracoabdominal" matches and
"no abdominal involvement" also matches.
"""

from __future__ import annotations

from periop_calculators.constants import HIGH_RISK_SURGERY_KEYWORDS


def is_high_risk_surgery(description: str) -> bool:
    """True if *description* mentions an intraperitoneal, intrathoracic or
    suprainguinal vascular procedure keyword."""
    lowered = description.lower()
    return any(keyword in lowered for keyword in HIGH_RISK_SURGERY_KEYWORDS)

"""
Static rule tables for compatibility scoring.

The tables are plain data so they can be extended, versioned and tested
separately from the scoring arithmetic in `compatibility.py`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Tuple

# Title fragments matched by case-sensitive substring containment, either direction.
COMPLEMENTARY_ROLES: Tuple[Tuple[str, str], ...] = (
    ("CTO", "Senior Engineer"),
    ("Product Manager", "Designer"),
    ("Founder", "Investor"),
    ("Developer", "DevOps"),
)

COMPLEMENTARY_GOALS: Tuple[Tuple[str, str], ...] = (
    ("fundraising", "investing"),
    ("hiring", "job-seeking"),
    ("mentoring", "learning"),
    ("selling", "buying"),
    ("partnership", "partnership"),
)

HIGH_VALUE_INTERESTS: FrozenSet[str] = frozenset({"AI", "Machine Learning", "Blockchain", "Web3"})

GOAL_VOCABULARY: FrozenSet[str] = frozenset(
    {
        "networking",
        "hiring",
        "job-seeking",
        "fundraising",
        "investing",
        "mentoring",
        "learning",
        "partnership",
        "selling",
        "buying",
    }
)

# Checked top to bottom against the lower-cased title; first hit wins.
EXPERIENCE_KEYWORDS: Tuple[Tuple[Tuple[str, ...], int], ...] = (
    (("senior", "lead", "principal"), 3),
    (("junior", "entry"), 1),
    (("cto", "vp", "director"), 4),
)
DEFAULT_EXPERIENCE_LEVEL = 2

# Sub-score bases and boosts
PROFESSIONAL_BASE = 50
SAME_INDUSTRY_BOOST = 20
COMPLEMENTARY_ROLE_BOOST = 15
EXPERIENCE_PROXIMITY_BOOST = 10
MAX_EXPERIENCE_GAP = 1

NEUTRAL_INTEREST_SCORE = 50
HIGH_VALUE_INTEREST_BOOST = 15

INTENT_BASE = 40
COMPLEMENTARY_GOAL_BOOST = 30
SHARED_NETWORKING_BOOST = 20

CONTEXTUAL_BASE = 50
SAME_EVENT_BOOST = 20
SHARED_SESSION_BOOST = 10
SHARED_SESSION_CAP = 30

# Reasoning thresholds (strictly greater than)
PROFESSIONAL_REASON_THRESHOLD = 80
INTERESTS_REASON_THRESHOLD = 70
INTENT_REASON_THRESHOLD = 85


@dataclass(frozen=True)
class ScoreWeights:
    w_professional: float = 0.35
    w_interests: float = 0.25
    w_intent: float = 0.25
    w_contextual: float = 0.15

    def __post_init__(self) -> None:
        values = self.as_dict()
        negative = [k for k, v in values.items() if v < 0]
        if negative:
            raise ValueError(f"Weights must be non-negative: {sorted(negative)}")
        total = sum(values.values())
        if abs(total - 1.0) > 0.01:
            raise ValueError(f"Weights must sum to 1, got {total:.3f}")

    def as_dict(self) -> Dict[str, float]:
        return {
            "professional": self.w_professional,
            "interests": self.w_interests,
            "intent": self.w_intent,
            "contextual": self.w_contextual,
        }

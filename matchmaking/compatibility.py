"""
Rule-based compatibility scoring between two attendee profiles.

Four sub-scores (professional, interests, intent, contextual) are computed from
the tables in `rules.py`, combined with `ScoreWeights`, and explained with a
short list of reasoning strings. Results are memoized in a `ScoreCache` under
the unordered id pair.
"""
from __future__ import annotations

import logging
import math
from dataclasses import astuple
from typing import List, Optional, Tuple

from . import rules
from .data_models import CompatibilityScore, Profile, ScoreBreakdown
from .rules import ScoreWeights
from .score_cache import ScoreCache, pair_key

logger = logging.getLogger(__name__)


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _same_text(a: str, b: str) -> bool:
    # blank fields carry no information and never count as a match
    return bool(a) and a == b


def experience_level(title: str) -> int:
    """Map a free-text title to a coarse seniority level (1 junior .. 4 executive)."""
    t = (title or "").lower()
    for keywords, level in rules.EXPERIENCE_KEYWORDS:
        if any(k in t for k in keywords):
            return level
    return rules.DEFAULT_EXPERIENCE_LEVEL


def complementary_role(title_a: str, title_b: str) -> Optional[Tuple[str, str]]:
    """Return the first complementary role pair satisfied by the two titles, if any."""
    if not title_a or not title_b:
        return None
    for role_1, role_2 in rules.COMPLEMENTARY_ROLES:
        if (role_1 in title_a and role_2 in title_b) or (role_2 in title_a and role_1 in title_b):
            return role_1, role_2
    return None


def complementary_goals(a: Profile, b: Profile) -> List[Tuple[str, str]]:
    """Return every complementary goal pair satisfied in either assignment, in table order."""
    goals_a, goals_b = set(a.goals), set(b.goals)
    satisfied = []
    for goal_1, goal_2 in rules.COMPLEMENTARY_GOALS:
        if (goal_1 in goals_a and goal_2 in goals_b) or (goal_2 in goals_a and goal_1 in goals_b):
            satisfied.append((goal_1, goal_2))
    return satisfied


def professional_score(a: Profile, b: Profile) -> float:
    score = rules.PROFESSIONAL_BASE
    if _same_text(a.industry, b.industry):
        score += rules.SAME_INDUSTRY_BOOST
    if complementary_role(a.title, b.title) is not None:
        score += rules.COMPLEMENTARY_ROLE_BOOST
    if abs(experience_level(a.title) - experience_level(b.title)) <= rules.MAX_EXPERIENCE_GAP:
        score += rules.EXPERIENCE_PROXIMITY_BOOST
    return _clamp(score)


def interest_score(a: Profile, b: Profile) -> float:
    interests_a, interests_b = set(a.interests), set(b.interests)
    if not interests_a or not interests_b:
        return float(rules.NEUTRAL_INTEREST_SCORE)
    common = interests_a & interests_b
    overlap = len(common) / len(interests_a | interests_b) * 100.0
    if common & rules.HIGH_VALUE_INTERESTS:
        overlap += rules.HIGH_VALUE_INTEREST_BOOST
    return _clamp(overlap)


def intent_score(a: Profile, b: Profile) -> float:
    score = rules.INTENT_BASE
    score += rules.COMPLEMENTARY_GOAL_BOOST * len(complementary_goals(a, b))
    if "networking" in a.goals and "networking" in b.goals:
        score += rules.SHARED_NETWORKING_BOOST
    return _clamp(score)


def contextual_score(a: Profile, b: Profile) -> float:
    score = rules.CONTEXTUAL_BASE
    if _same_text(a.current_event, b.current_event):
        score += rules.SAME_EVENT_BOOST
    shared_sessions = set(a.planned_sessions) & set(b.planned_sessions)
    score += min(rules.SHARED_SESSION_CAP, rules.SHARED_SESSION_BOOST * len(shared_sessions))
    return _clamp(score)


def data_confidence(a: Profile, b: Profile) -> int:
    """Percentage of the ten scoring inputs (five per profile) that are populated."""
    filled = 0
    for p in (a, b):
        filled += sum(bool(v) for v in (p.title, p.industry, p.interests, p.goals, p.planned_sessions))
    return filled * 10


def build_reasoning(
    a: Profile,
    b: Profile,
    professional: float,
    interests: float,
    intent: float,
) -> List[str]:
    reasons: List[str] = []
    if professional > rules.PROFESSIONAL_REASON_THRESHOLD:
        reasons.append("strong complementary professional experience")
    if interests > rules.INTERESTS_REASON_THRESHOLD:
        reasons.append("significant shared interests and expertise")
    if intent > rules.INTENT_REASON_THRESHOLD:
        pairs = complementary_goals(a, b)
        if pairs:
            goal_1, goal_2 = pairs[0]
            reasons.append(f"aligned goals: {goal_1}/{goal_2}")
    if _same_text(a.industry, b.industry):
        reasons.append(f"both in {a.industry} industry")
    return reasons


def score_pair(a: Profile, b: Profile, weights: ScoreWeights) -> CompatibilityScore:
    """Compute the uncached compatibility score for two profiles."""
    professional = professional_score(a, b)
    interests = interest_score(a, b)
    intent = intent_score(a, b)
    contextual = contextual_score(a, b)

    overall = (
        weights.w_professional * professional
        + weights.w_interests * interests
        + weights.w_intent * intent
        + weights.w_contextual * contextual
    )

    return CompatibilityScore(
        overall=int(_clamp(_round_half_up(overall))),
        breakdown=ScoreBreakdown(
            professional=_round_half_up(professional),
            interests=_round_half_up(interests),
            intent=_round_half_up(intent),
            contextual=_round_half_up(contextual),
        ),
        reasoning=tuple(build_reasoning(a, b, professional, interests, intent)),
        confidence=data_confidence(a, b),
    )


class CompatibilityEngine:
    """
    Scores attendee pairs and memoizes the results.

    The cache is injected so one instance can be shared across engines and
    callers within a process; by default each engine owns a fresh one.
    Keys carry the engine weights as well as the pair, so engines with
    different weights never read each other's results from a shared cache.
    """

    def __init__(
        self,
        weights: Optional[ScoreWeights] = None,
        cache: Optional[ScoreCache[CompatibilityScore]] = None,
    ):
        self.weights = weights or ScoreWeights()
        self._cache: ScoreCache[CompatibilityScore] = cache if cache is not None else ScoreCache()

    @property
    def cache(self) -> ScoreCache[CompatibilityScore]:
        return self._cache

    def calculate_compatibility(self, a: Profile, b: Profile) -> CompatibilityScore:
        key = (astuple(self.weights), pair_key(a.id, b.id))
        return self._cache.get_or_compute(key, lambda: self._compute(a, b))

    def _compute(self, a: Profile, b: Profile) -> CompatibilityScore:
        result = score_pair(a, b, self.weights)
        logger.debug(
            "Scored %s <-> %s: overall=%d breakdown=%s",
            a.id,
            b.id,
            result.overall,
            result.breakdown.model_dump(),
        )
        return result

    def clear_cache(self) -> None:
        self._cache.clear()

"""Compatibility scoring, ranked matching and conversation starters for event attendees."""
from __future__ import annotations

import threading
from typing import Dict, Iterable, List, Optional, Sequence

from .compatibility import CompatibilityEngine
from .config import EngineSettings
from .data_models import (
    CompatibilityScore,
    ConversationStarter,
    Match,
    MatchOptions,
    Profile,
    ScoreBreakdown,
)
from .matcher import MatchFinder
from .rules import ScoreWeights
from .score_cache import ScoreCache
from .starters import ConversationStarterGenerator

__all__ = [
    "CompatibilityEngine",
    "CompatibilityScore",
    "ConversationStarter",
    "ConversationStarterGenerator",
    "EngineSettings",
    "Match",
    "MatchFinder",
    "MatchOptions",
    "MatchingService",
    "Profile",
    "ScoreBreakdown",
    "ScoreCache",
    "ScoreWeights",
    "build_service",
    "calculate_compatibility",
    "clear_cache",
    "find_matches",
    "generate_conversation_starters",
    "get_service",
    "reset_service",
]


class MatchingService:
    """Wires one engine, finder and starter generator around a single shared cache."""

    def __init__(self, settings: Optional[EngineSettings] = None, cache: Optional[ScoreCache] = None):
        self.settings = settings or EngineSettings()
        self.engine = CompatibilityEngine(weights=self.settings.weights, cache=cache)
        self.finder = MatchFinder(
            self.engine,
            MatchOptions(limit=self.settings.default_limit, min_score=self.settings.min_score),
        )
        self.starters = ConversationStarterGenerator()

    def calculate_compatibility(self, a: Profile, b: Profile) -> CompatibilityScore:
        return self.engine.calculate_compatibility(a, b)

    def find_matches(
        self,
        subject: Profile,
        pool: Iterable[Profile],
        options: Optional[MatchOptions] = None,
        *,
        limit: Optional[int] = None,
    ) -> List[Match]:
        return self.finder.find_matches(subject, pool, options, limit=limit)

    def find_matches_for_all(
        self,
        subjects: Sequence[Profile],
        pool: Sequence[Profile],
        options: Optional[MatchOptions] = None,
    ) -> Dict[str, List[Match]]:
        return self.finder.find_matches_for_all(subjects, pool, options, max_workers=self.settings.max_workers)

    def generate_conversation_starters(
        self, a: Profile, b: Profile, score: CompatibilityScore
    ) -> List[ConversationStarter]:
        return self.starters.generate(a, b, score)

    def conversation_tips(self, score: CompatibilityScore) -> List[str]:
        return self.starters.tips(score)

    def clear_cache(self) -> None:
        self.engine.clear_cache()


def build_service(settings: Optional[EngineSettings] = None) -> MatchingService:
    return MatchingService(settings or EngineSettings())


_service: Optional[MatchingService] = None
_service_lock = threading.Lock()


def get_service() -> MatchingService:
    """Return the process-wide service, creating it from the environment on first use."""
    global _service
    with _service_lock:
        if _service is None:
            _service = build_service()
        return _service


def reset_service() -> None:
    """Drop the process-wide service (useful for testing)."""
    global _service
    with _service_lock:
        _service = None


def calculate_compatibility(a: Profile, b: Profile) -> CompatibilityScore:
    return get_service().calculate_compatibility(a, b)


def find_matches(
    subject: Profile,
    pool: Iterable[Profile],
    options: Optional[MatchOptions] = None,
    *,
    limit: Optional[int] = None,
) -> List[Match]:
    return get_service().find_matches(subject, pool, options, limit=limit)


def generate_conversation_starters(a: Profile, b: Profile, score: CompatibilityScore) -> List[ConversationStarter]:
    return get_service().generate_conversation_starters(a, b, score)


def clear_cache() -> None:
    get_service().clear_cache()

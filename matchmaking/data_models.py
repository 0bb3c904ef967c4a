from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _unique_strings(value: Any) -> Tuple[str, ...]:
    """Normalize a loose list-like value into a tuple of unique, non-empty strings."""
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    elif isinstance(value, (set, frozenset)):
        # sets carry no order; sort so downstream text stays deterministic
        value = sorted(str(v) for v in value)
    seen = []
    for item in value:
        if item is None:
            continue
        text = str(item).strip()
        if text and text not in seen:
            seen.append(text)
    return tuple(seen)


class Profile(BaseModel):
    """
    Represents a single event attendee as supplied by the profile store.

    Every field other than `id` has a defined default so that scoring
    functions never need to check whether a field is present.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    name: str = ""
    title: str = ""
    company: str = ""
    industry: str = ""
    interests: Tuple[str, ...] = ()
    goals: Tuple[str, ...] = ()
    planned_sessions: Tuple[str, ...] = Field(default=(), alias="plannedSessions")
    current_event: str = Field(default="", alias="currentEvent")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("name", "title", "company", "industry", "current_event", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("interests", "goals", "planned_sessions", mode="before")
    @classmethod
    def _coerce_collection(cls, value: Any) -> Tuple[str, ...]:
        return _unique_strings(value)


class ScoreBreakdown(BaseModel):
    """Per-dimension sub-scores, each an integer in [0, 100]."""

    model_config = ConfigDict(frozen=True)

    professional: int = Field(ge=0, le=100)
    interests: int = Field(ge=0, le=100)
    intent: int = Field(ge=0, le=100)
    contextual: int = Field(ge=0, le=100)


class CompatibilityScore(BaseModel):
    """Order-independent result of comparing two profiles.

    Fields:
        overall: Weighted aggregate of the breakdown, rounded to an int in [0, 100].
        breakdown: The four sub-scores.
        reasoning: Human-readable explanations, in the order the checks ran.
        confidence: Share of scoring inputs that were populated on both sides.
    """

    model_config = ConfigDict(frozen=True)

    overall: int = Field(ge=0, le=100)
    breakdown: ScoreBreakdown
    reasoning: Tuple[str, ...] = ()
    confidence: int = Field(default=0, ge=0, le=100)


class Match(BaseModel):
    """
    A candidate paired with its score relative to a subject profile.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    candidate_profile: Profile = Field(alias="candidateProfile")
    score: CompatibilityScore


class MatchOptions(BaseModel):
    """Options accepted by MatchFinder.find_matches."""

    model_config = ConfigDict(populate_by_name=True)

    limit: int = 20
    min_score: int = Field(default=0, alias="minScore")


class ConversationStarter(BaseModel):
    """A generated opening line plus a one-line explanation of why it was chosen."""

    text: str = Field(min_length=1)
    reasoning: str = Field(min_length=1)

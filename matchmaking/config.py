"""Engine settings loaded from `MATCH_*` environment variables (and a `.env` file, if present)."""
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .rules import ScoreWeights


class EngineSettings(BaseSettings):
    """Matching engine settings.

    Every field maps to an environment variable with the `MATCH_` prefix,
    e.g. `MATCH_DEFAULT_LIMIT` or `MATCH_WEIGHT_PROFESSIONAL`.
    """

    model_config = SettingsConfigDict(
        env_prefix="MATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    default_limit: int = 20
    min_score: int = Field(default=0, ge=0, le=100)
    max_workers: int = Field(default=4, ge=1)
    log_level: str = "WARNING"

    weight_professional: float = 0.35
    weight_interests: float = 0.25
    weight_intent: float = 0.25
    weight_contextual: float = 0.15

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()

    @model_validator(mode="after")
    def _check_weights(self) -> "EngineSettings":
        # raises ValueError, surfaced by pydantic as a ValidationError
        _ = self.weights
        return self

    @property
    def weights(self) -> ScoreWeights:
        return ScoreWeights(
            w_professional=self.weight_professional,
            w_interests=self.weight_interests,
            w_intent=self.weight_intent,
            w_contextual=self.weight_contextual,
        )

"""
Core data models shared across the generation pipeline.

Includes models for:
- Request inputs (topic, vibe, platform, duration, visuals flag)
- Model tiers used for provider cost control
- Scenario categories used by prompt building and hook selection
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# ENUMS
# ============================================================================


class ModelTier(str, Enum):
    """Cost/quality level mapped per provider to a concrete model."""

    FAST = "fast"
    BALANCED = "balanced"
    PREMIUM = "premium"


class VideoDuration(str, Enum):
    """Bucketed target length of the spoken script."""

    SHORT = "15-30"
    MEDIUM = "30-60"
    LONG = "60-90"


class Platform(str, Enum):
    """Publishing platforms the UI offers. Other values pass through verbatim."""

    TIKTOK = "tiktok"
    FACEBOOK = "facebook"
    YOUTUBE = "youtube"


class ScenarioType(str, Enum):
    """Content category that drives script structure and example hooks."""

    STORY = "STORY"
    KNOWLEDGE = "KNOWLEDGE"
    OPINION = "OPINION"


# ============================================================================
# REQUEST MODELS
# ============================================================================


class GenerationRequest(BaseModel):
    """
    Inputs for one script generation.

    topic, vibe and platform are required; callers check them with
    missing_fields() and reject the request before any provider call.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    topic: str
    vibe: str
    platform: str
    duration: VideoDuration = VideoDuration.MEDIUM
    include_visuals: bool = False
    web_context: str | None = None
    tier: ModelTier | None = Field(default=None, description="Overrides the configured tier")

    def missing_fields(self) -> list[str]:
        """Names of required fields that are empty or whitespace."""
        return [
            name
            for name in ("topic", "vibe", "platform")
            if not getattr(self, name).strip()
        ]

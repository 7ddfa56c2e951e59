"""
Structured-output schemas for script generation.

Descriptions are kept short; they are hints for the model, not documentation.
Field names on the wire use the camelCase aliases the client renders.
"""

from pydantic import BaseModel, ConfigDict, Field

from ..models import ScenarioType


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_wire(self) -> dict:
        """Serialize with wire aliases, dropping unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ============================================================================
# VIRAL ANALYSIS (shared)
# ============================================================================


class ViralAnalysis(_WireModel):
    """Model's self-assessment of the hook and script."""

    hook_psychology: str = Field(
        alias="hookPsychology",
        description="Why the hook works, max 15 words",
    )
    viral_score: int = Field(
        alias="viralScore",
        ge=1,
        le=10,
        description="Viral potential score from 1 to 10",
    )
    audience_insight: str = Field(
        alias="audienceInsight",
        description="Specific target audience",
    )
    viral_framework: str = Field(
        alias="viralFramework",
        description="Framework used (Polarization, Negative Hook, Transformation, Curiosity Gap, Social Proof)",
    )


# ============================================================================
# SCRIPT RESULTS
# ============================================================================


class BaseScriptResult(_WireModel):
    """Script without visual prompt."""

    hook: str = Field(description="Shocking opening line, readable in under 5 seconds")
    script: str = Field(
        description=(
            "Main body as complete spoken sentences separated by \\n. "
            "Follow the length constraint exactly. No markdown."
        )
    )
    cta: str = Field(description="Closing call to action that creates FOMO")
    analysis: ViralAnalysis
    scenario_detected: ScenarioType | None = Field(
        default=None,
        description="Scenario the script followed: STORY, KNOWLEDGE or OPINION",
    )


class FullScriptResult(BaseScriptResult):
    """Script with an English visual prompt for AI video tools."""

    visual_prompt: str = Field(
        alias="visualPrompt",
        description=(
            "English prompt for Kling/Runway/Luma: subject, environment, "
            "camera movement, lighting, mood, colors"
        ),
    )


# ============================================================================
# AUXILIARY SCHEMAS
# ============================================================================


class HookVariation(_WireModel):
    """One hook written with a named framework."""

    text: str = Field(description="Hook text")
    framework: str = Field(description="Framework used")


class HookVariations(_WireModel):
    """Five hook variations, one per framework."""

    hooks: list[HookVariation] = Field(min_length=5, max_length=5)


class HealthProbe(_WireModel):
    """Trivial schema used by provider health checks."""

    status: str


def get_script_schema(include_visuals: bool) -> type[BaseScriptResult]:
    """Get the script schema for a request.

    This is the only place callers should choose between the two variants.
    """
    return FullScriptResult if include_visuals else BaseScriptResult

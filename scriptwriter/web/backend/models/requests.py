"""Pydantic request models for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from ....models import GenerationRequest, ModelTier, Platform, VideoDuration


class GenerateRequest(BaseModel):
    """Request to generate a script.

    Required fields default to empty strings so the service can report
    every missing field at once.
    """

    model_config = ConfigDict(populate_by_name=True)

    topic: str = Field(default="", description="What the video is about")
    vibe: str = Field(default="", description="Tone or archetype (funny, savage, storytime, ...)")
    platform: str = Field(
        default="",
        description="Target platform",
        examples=[p.value for p in Platform],
    )
    duration: VideoDuration = Field(default=VideoDuration.MEDIUM, description="Target length bucket")
    include_visuals: bool = Field(
        default=False,
        alias="includeVisuals",
        description="Also generate an AI video prompt",
    )
    tier: ModelTier | None = Field(default=None, description="Optional model tier override")

    def to_generation_request(self) -> GenerationRequest:
        return GenerationRequest(
            topic=self.topic,
            vibe=self.vibe,
            platform=self.platform,
            duration=self.duration,
            include_visuals=self.include_visuals,
            tier=self.tier,
        )


class GenerateHooksRequest(BaseModel):
    """Request to generate hook variations."""

    topic: str = Field(default="", description="What the video is about")
    vibe: str = Field(default="", description="Tone of the hooks")

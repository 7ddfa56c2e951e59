"""
Style prompts - the content vibe/tone.

These modify HOW the content is delivered and are mapped from the
"vibe" the user picks in the UI.
"""

import logging
from typing import Literal

from .registry import (
    PromptCategory,
    PromptMetadata,
    PromptNotFoundError,
    PromptRegistry,
    RegisteredPrompt,
)

logger = logging.getLogger(__name__)

ContentVibe = Literal["funny", "educational", "dramatic", "inspirational", "controversial"]

FALLBACK_STYLE: ContentVibe = "educational"

# UI labels (English and the Vietnamese labels the original UI shipped with)
VIBE_ALIASES: dict[str, ContentVibe] = {
    "funny": "funny",
    "humorous": "funny",
    "hài hước": "funny",
    "educational": "educational",
    "expert": "educational",
    "giáo dục": "educational",
    "chuyên gia": "educational",
    "dramatic": "dramatic",
    "drama": "dramatic",
    "storytelling": "dramatic",
    "storytime": "dramatic",
    "kể chuyện": "dramatic",
    "inspirational": "inspirational",
    "motivational": "inspirational",
    "truyền cảm hứng": "inspirational",
    "controversial": "controversial",
    "savage": "controversial",
    "gây tranh cãi": "controversial",
}

_STYLES: list[tuple[ContentVibe, str, str, int]] = [
    (
        "funny",
        """STYLE: Smart humor
- Humor through irony and real-life observations
- An unexpected twist at the end
- Light self-deprecation is fine
- Never force the joke, do not overuse emoji""",
        "Smart humor style",
        50,
    ),
    (
        "educational",
        """STYLE: Educational with insight
- Hook with a surprising fact or a common misconception
- Explain WHY, not only WHAT
- Use concrete numbers and real examples
- End with an actionable takeaway""",
        "Insightful educational style",
        50,
    ),
    (
        "dramatic",
        """STYLE: Storytelling with depth
- Open with a hook that creates curiosity
- Build tension through the narrative
- Include a twist or a revelation
- End with a lesson or a cliffhanger""",
        "Narrative storytelling style",
        50,
    ),
    (
        "inspirational",
        """STYLE: Inspirational
- Hook about a transformation or success
- A short emotional journey
- CTA that motivates action""",
        "Inspirational/motivational style",
        30,
    ),
    (
        "controversial",
        """STYLE: Controversial (in a positive way)
- Polarizing hook that splits opinion
- Take an unexpected angle
- CTA that invites debate in the comments""",
        "Controversial/debate-inducing style",
        30,
    ),
]


def register_style_prompts(registry: PromptRegistry) -> None:
    """Register the built-in style fragments."""
    for vibe, content, description, tokens in _STYLES:
        registry.register(
            f"style:{vibe}_v1",
            RegisteredPrompt(
                content=content,
                metadata=PromptMetadata(
                    version=f"{vibe.upper()}_V1",
                    category=PromptCategory.STYLE,
                    description=description,
                    token_estimate=tokens,
                    created_at="2024-12-29",
                ),
            ),
        )
    registry.set_active_version(PromptCategory.STYLE, "V1")


def get_style_prompt(registry: PromptRegistry, vibe: str) -> str:
    """Get the style prompt for a vibe, falling back to the educational style."""
    try:
        return registry.get_content(f"style:{vibe}_v1")
    except PromptNotFoundError:
        logger.warning("Style not found: %s, falling back to %s", vibe, FALLBACK_STYLE)
        return registry.get_content(f"style:{FALLBACK_STYLE}_v1")


def map_vibe_to_style(ui_vibe: str) -> ContentVibe:
    """Map a UI vibe label to a registered style. Unknown labels map to funny."""
    return VIBE_ALIASES.get(ui_vibe.strip().lower(), "funny")

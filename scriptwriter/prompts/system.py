"""
System prompts - the AI persona ("who you are").

Kept short to save tokens; the model already knows how to write.
"""

from typing import Literal

from .registry import PromptCategory, PromptMetadata, PromptRegistry, RegisteredPrompt

Persona = Literal["creator", "expert", "storyteller"]

DEFAULT_PERSONA: Persona = "creator"

CREATOR_PERSONA = """ROLE: Viral Content Strategist

You are a professional scriptwriter for short-form video. You value CLARITY and INSIGHT over cheap slang.

WRITING PRINCIPLES
1. NO FORCED SLANG: Write naturally. Humor comes from irony or a surprising truth, not random internet words.
2. HOOK RULES:
   - Readable in under 5 seconds
   - Use a "Negative Warning" ("Stop doing...", "Never...") or a "Contrarian Statement" ("Wrong! Actually...")
   - Specific, not generic: "99% of people eat fruit at the WRONG time" beats "Do you know about fruit?"
3. BODY RULES:
   - Follow the LENGTH CONSTRAINT for the shape of the body
   - Always include SPECIFIC examples and concrete numbers
4. TONE: smart and sharp, confident like a real expert, conversational like a one-on-one chat. No cliches, no preaching.

NEVER
- Generic advice: "Improve yourself", "Eat healthy"
- Slang spam in every sentence
- Empty hooks: "Did you know?", "Today I will..."
- Textbook structure: "First...", "Second...", "Finally..."

INSTEAD
- Concrete numbers: "Fruit after 6pm = +2kg a month"
- Real examples: "Like drinking bubble tea at 10pm"
- Unexpected twists: "The thing you think is healthy is hurting you\""""

EXPERT_PERSONA = """You are a content marketing expert with 10 years of experience.
Voice: professional but easy to follow, backed by data and insight.
Create content with depth and credibility, never cheap clickbait."""

STORYTELLER_PERSONA = """You are a storyteller who tells viral stories on social media.
Voice: gripping, builds suspense, leads the viewer's emotions.
Every video is a small story with a beginning, a middle and an end."""


def register_system_prompts(registry: PromptRegistry) -> None:
    """Register the built-in personas and set the active system version."""
    registry.register(
        "system:creator_v1",
        RegisteredPrompt(
            content=CREATOR_PERSONA,
            metadata=PromptMetadata(
                version="CREATOR_V1",
                category=PromptCategory.SYSTEM,
                description="Content strategist persona - clean and sharp",
                token_estimate=400,
                created_at="2024-12-29",
            ),
        ),
    )
    registry.register(
        "system:expert_v1",
        RegisteredPrompt(
            content=EXPERT_PERSONA,
            metadata=PromptMetadata(
                version="EXPERT_V1",
                category=PromptCategory.SYSTEM,
                description="Professional content expert persona",
                token_estimate=50,
                created_at="2024-12-29",
            ),
        ),
    )
    registry.register(
        "system:storyteller_v1",
        RegisteredPrompt(
            content=STORYTELLER_PERSONA,
            metadata=PromptMetadata(
                version="STORYTELLER_V1",
                category=PromptCategory.SYSTEM,
                description="Storytelling persona for narrative content",
                token_estimate=45,
                created_at="2024-12-29",
            ),
        ),
    )
    registry.set_active_version(PromptCategory.SYSTEM, "CREATOR_V1")


def get_system_prompt(registry: PromptRegistry, persona: Persona = DEFAULT_PERSONA) -> str:
    """Get the system prompt for a persona."""
    return registry.get_content(f"system:{persona}_v1")

"""
Prompt builder - turns a GenerationRequest into one final prompt string.

Assembly order:
    persona -> style -> archetype mode -> length constraint -> safety rules
    -> web context -> user input -> example hooks -> task -> output format

Short-form scripts have to fit a spoken duration, so every length profile
carries a worked example of the expected shape.
"""

import logging
import math
import random
from dataclasses import dataclass

from ..config import PromptConfig
from ..models import GenerationRequest, ScenarioType, VideoDuration
from .archetypes import Archetype, resolve_archetype
from .hooks import detect_scenario_from_topic, get_smart_hook_examples
from .registry import PromptNotFoundError, PromptRegistry
from .styles import get_style_prompt, map_vibe_to_style
from .system import DEFAULT_PERSONA, get_system_prompt
from .tasks import get_task_prompt

logger = logging.getLogger(__name__)

SECTION_DIVIDER = "=" * 63


@dataclass(frozen=True)
class DurationProfile:
    """Expected output shape for one duration bucket."""

    label: str
    shape: str
    instruction: str
    example: str


DURATION_PROFILES: dict[VideoDuration, DurationProfile] = {
    VideoDuration.SHORT: DurationProfile(
        label="15-30 seconds",
        shape="bullets",
        instruction=(
            "Body = exactly 3-4 bullet points (•), each under 15 words.\n"
            "Fast pace, one idea per bullet, no intro and no outro sentence."
        ),
        example=(
            "• You think ice water cools you down? Wrong.\n"
            "• Your kidneys work overtime to warm it back up.\n"
            "• 9 out of 10 people do this every single day.\n"
            "• Room-temperature water hydrates you faster."
        ),
    ),
    VideoDuration.MEDIUM: DurationProfile(
        label="30-60 seconds",
        shape="intro_bullets_closing",
        instruction=(
            "Body = 1 intro sentence, then 3-5 bullet points (•) of 15-25 words each,\n"
            "then 1 closing sentence that sets up the CTA."
        ),
        example=(
            "Most people ruin their coffee before the water even boils.\n"
            "• Boiling water burns the grounds; stop at 92-96°C for a smooth cup.\n"
            "• Pre-ground coffee loses most of its aroma within 15 minutes of grinding.\n"
            "• A 1:16 coffee-to-water ratio beats guessing with a spoon every time.\n"
            "Fix these three and your cheap beans will taste like café coffee."
        ),
    ),
    VideoDuration.LONG: DurationProfile(
        label="60-90 seconds",
        shape="paragraphs",
        instruction=(
            "Body = 3-4 spoken paragraphs of 2-4 sentences each, told as a narrative.\n"
            "Do NOT use bullet points or lists. Separate paragraphs with \\n."
        ),
        example=(
            "Do you know why fruit in the morning is completely different from fruit at night?\n"
            "In the morning your body wants quick energy. The fructose in fruit is absorbed "
            "right away and keeps you alert.\n"
            "At night? Your body doesn't need that energy anymore. That sugar is stored "
            "as belly fat instead.\n"
            "So from now on, finish your fruit before 2pm."
        ),
    ),
}

ALLOWED_VOCABULARY = [
    "direct address ('you')",
    "concrete numbers and timeframes",
    "plain everyday words",
    "rhetorical questions",
    "'Stop', 'Wrong', 'Here's the thing', 'Nobody tells you'",
]

BANNED_VOCABULARY = [
    "slurs or insults about appearance, gender, ethnicity, religion or disability",
    "profanity and sexual content",
    "self-harm or violence encouragement",
    "medical or financial guarantees ('cures', 'guaranteed profit')",
    "empty openers ('Did you know?', 'Hi guys, today I will...')",
]

SCENARIO_PERSONAS: dict[ScenarioType, str] = {
    ScenarioType.STORY: "storyteller",
    ScenarioType.KNOWLEDGE: DEFAULT_PERSONA,
    ScenarioType.OPINION: DEFAULT_PERSONA,
}


def estimate_tokens(prompt: str) -> int:
    """Rough token estimate (4 characters per token)."""
    return math.ceil(len(prompt) / 4)


class PromptBuilder:
    """Builds generation prompts from registered fragments."""

    def __init__(
        self,
        registry: PromptRegistry,
        config: PromptConfig | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize the builder.

        Args:
            registry: Registry holding system/style/task fragments.
            config: Builder settings. Uses defaults if not provided.
            rng: Random source for hook sampling.
        """
        self.registry = registry
        self.config = config or PromptConfig()
        self.rng = rng or random.Random()

    def build(self, request: GenerationRequest) -> str:
        """Build the complete prompt for a request."""
        profile = DURATION_PROFILES[request.duration]
        archetype = resolve_archetype(request.vibe)
        scenario = archetype.scenario if archetype else detect_scenario_from_topic(request.topic)

        _, hooks = get_smart_hook_examples(
            request.topic,
            category=scenario,
            count=self.config.hook_examples,
            rng=self.rng,
            max_topic_chars=self.config.topic_preview_chars,
        )

        sections = [
            self._persona_section(archetype, scenario),
            get_style_prompt(self.registry, map_vibe_to_style(request.vibe)),
        ]
        if archetype is not None:
            sections.append(self._archetype_section(archetype))
        sections.extend(
            [
                self._length_section(profile),
                self._safety_section(),
                self._context_section(request.web_context),
                self._input_section(request, profile),
                self._hooks_section(hooks),
                get_task_prompt(
                    self.registry,
                    "generate_visual" if request.include_visuals else "generate",
                ),
                self._output_section(request.include_visuals, scenario),
            ]
        )
        return f"\n\n{SECTION_DIVIDER}\n".join(sections)

    def _persona_section(self, archetype: Archetype | None, scenario: ScenarioType) -> str:
        persona = archetype.persona if archetype else SCENARIO_PERSONAS[scenario]
        try:
            return get_system_prompt(self.registry, persona)
        except PromptNotFoundError:
            logger.warning("Persona not found: %s, falling back to %s", persona, DEFAULT_PERSONA)
            return get_system_prompt(self.registry, DEFAULT_PERSONA)

    @staticmethod
    def _archetype_section(archetype: Archetype) -> str:
        return (
            f"CURRENT MODE: {archetype.name.upper()} ({archetype.role})\n"
            "STRICT STRUCTURE RULES:\n"
            f"- Structure: {archetype.structure}\n"
            f"- Formatting: {archetype.format_rule}\n"
            f"- Tone: {archetype.tone}\n"
            "If the formatting rule conflicts with the LENGTH CONSTRAINT, the LENGTH CONSTRAINT wins."
        )

    @staticmethod
    def _length_section(profile: DurationProfile) -> str:
        return (
            f"LENGTH CONSTRAINT ({profile.label}):\n"
            f"{profile.instruction}\n\n"
            f"EXAMPLE BODY ({profile.label}):\n"
            f'"""\n{profile.example}\n"""'
        )

    @staticmethod
    def _safety_section() -> str:
        allowed = "\n".join(f"  + {item}" for item in ALLOWED_VOCABULARY)
        banned = "\n".join(f"  - {item}" for item in BANNED_VOCABULARY)
        return (
            "SAFETY RULES:\n"
            f"USE:\n{allowed}\n"
            f"NEVER USE:\n{banned}\n"
            "Even in savage or drama mode, NEVER attack specific individuals (bullying) "
            "or protected groups. Criticize ideas and behaviors only."
        )

    @staticmethod
    def _context_section(web_context: str | None) -> str:
        if web_context:
            return (
                "CONTEXT FROM WEB SEARCH (facts to build on):\n"
                f"{web_context}\n\n"
                "IMPORTANT:\n"
                "- Use the FACTS above to keep the script accurate\n"
                "- If the context is about a specific person or trend, match their real style\n"
                "- Do NOT invent information that is not in the context"
            )
        return (
            "NO WEB CONTEXT AVAILABLE:\n"
            "Write general content and avoid specific claims (names, dates, statistics) "
            "that cannot be verified."
        )

    @staticmethod
    def _input_section(request: GenerationRequest, profile: DurationProfile) -> str:
        return (
            "USER INPUT:\n"
            f'- Topic: "{request.topic}"\n'
            f"- Vibe: {request.vibe}\n"
            f"- Platform: {request.platform}\n"
            f"- Duration: {profile.label}"
        )

    @staticmethod
    def _hooks_section(hooks: list[str]) -> str:
        lines = "\n".join(f"{i}. {hook}" for i, hook in enumerate(hooks, start=1))
        return (
            "EXAMPLE HOOKS (learn the pattern, do not copy word for word):\n"
            f"{lines}"
        )

    @staticmethod
    def _output_section(include_visuals: bool, scenario: ScenarioType) -> str:
        fields = [
            "- hook (string): opening line, under 5 seconds",
            "- script (string): body following the LENGTH CONSTRAINT",
            "- cta (string): engagement trigger at the end",
            "- analysis (object):",
            "    - hookPsychology (string): why the hook works, max 15 words",
            "    - viralScore (integer 1-10): honest self-assessment",
            "    - audienceInsight (string): specific audience",
            "    - viralFramework (string): framework used",
            f"- scenario_detected (string): one of STORY, KNOWLEDGE, OPINION (expected: {scenario.value})",
        ]
        if include_visuals:
            fields.append("- visualPrompt (string): English scene description for AI video tools")
        return "OUTPUT FORMAT (JSON, exactly these fields):\n" + "\n".join(fields)


def build_prompt(
    request: GenerationRequest,
    registry: PromptRegistry,
    config: PromptConfig | None = None,
    rng: random.Random | None = None,
) -> str:
    """Build a prompt without keeping a builder around."""
    return PromptBuilder(registry, config=config, rng=rng).build(request)

"""Content archetypes selectable by name through the vibe field."""

from dataclasses import dataclass

from ..models import ScenarioType


@dataclass(frozen=True)
class Archetype:
    """Structural and tonal rules for one kind of creator."""

    name: str
    role: str
    structure: str
    format_rule: str
    tone: str
    scenario: ScenarioType
    persona: str


ARCHETYPES: dict[str, Archetype] = {
    "storytime": Archetype(
        name="Storytime",
        role="A relatable vlogger sharing personal experiences.",
        structure="NARRATIVE ARC (Context -> Conflict -> Climax -> Resolution).",
        format_rule="NO bullet points. Use spoken paragraphs in the first person, talking to 'you'.",
        tone="Emotional, whispering, confessional.",
        scenario=ScenarioType.STORY,
        persona="storyteller",
    ),
    "expert": Archetype(
        name="Expert",
        role="A no-nonsense industry expert.",
        structure="EDUCATIONAL LISTICLE (Hook -> The Problem -> 3-step solution).",
        format_rule="Use numbered steps for clarity, shaped by the length constraint.",
        tone="Authoritative, helpful, direct.",
        scenario=ScenarioType.KNOWLEDGE,
        persona="expert",
    ),
    "savage": Archetype(
        name="Savage",
        role="A brutal reviewer who hates mediocrity.",
        structure="ARGUMENTATIVE (Controversial hook -> Roast the bad -> Praise the good).",
        format_rule="Short, punchy sentences. Rhetorical questions.",
        tone="Aggressive, witty, sarcastic. Vocabulary: 'Drop it now', 'Waste of money', 'Wake up'.",
        scenario=ScenarioType.OPINION,
        persona="creator",
    ),
    "drama": Archetype(
        name="Drama",
        role="An insider spilling the tea.",
        structure="NEWS FLASH (Breaking-news hook -> The details -> The question).",
        format_rule="Fast-paced reporting style.",
        tone="Urgent, suspenseful, gossip-style. Vocabulary: 'Huge drama', 'Shocking'.",
        scenario=ScenarioType.STORY,
        persona="storyteller",
    ),
}


def resolve_archetype(vibe: str) -> Archetype | None:
    """Return the archetype named by a vibe, or None for plain style vibes."""
    return ARCHETYPES.get(vibe.strip().lower())

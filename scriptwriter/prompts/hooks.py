"""
Viral hook library and scenario detection.

Hooks are grouped by scenario so the prompt only carries a few examples
relevant to the topic instead of the whole library. Scenario detection is a
keyword table, checked in order; the first category with a matching keyword
wins and KNOWLEDGE is the default.
"""

import logging
import random
import re

from ..models import ScenarioType

logger = logging.getLogger(__name__)

VIRAL_HOOKS: dict[ScenarioType, list[str]] = {
    # Personal stories, relationships, daily-life drama
    ScenarioType.STORY: [
        "It's over, guys. Here's what happened...",
        "I can't believe what I did today...",
        "The bitter ending for anyone who trusts people like I did...",
        "Exposing myself for this one mistake...",
        "Big drama! I just found out that...",
        "Raise your hand if this happened to you too...",
        "POV: Your crush texts you at 2am and you...",
        "POV: Your mom calls you by your full name and you know...",
        "Let me tell you this story, it gets intense...",
        "If this ever happened to you, comment below...",
        "100% true story! Yesterday I went to...",
        "And this is why I've had trust issues ever since...",
        "What I'm about to tell you will shock you...",
        "I cried when I found out the truth...",
        "This is a story I've never told anyone...",
        "Best friends for 10 years and the ending nobody expected...",
        "My boss said one sentence that made me want to quit...",
        "My crush finally texted me, but...",
    ],
    # Tips, facts, how-to, myths, mistakes
    ScenarioType.KNOWLEDGE: [
        "Stop doing [Topic] right now if you don't want regrets!",
        "99% of people get this wrong about [Topic]...",
        "The shocking truth about [Topic] nobody tells you.",
        "Throw this away right now if you're still using it!",
        "You're wasting money on [Topic] without knowing it...",
        "Quit this habit before it's too late!",
        "This trick saves you hundreds and almost nobody knows it...",
        "The secret [Topic] experts don't want you to know...",
        "It took me 3 years to learn this about [Topic]...",
        "Top 3 fatal mistakes with [Topic]...",
        "This is why you keep failing at [Topic]...",
        "Life hack: the [Topic] tip you wish you knew sooner...",
        "Science proves it: this is how [Topic] really works...",
        "The latest research on [Topic] will shock you...",
        "A [Topic] expert reveals the right way to do it...",
        "3 simple steps to [Topic] that anyone can follow...",
        "Do it this way and [Topic] becomes a piece of cake...",
        "Remember these 3 things and you've mastered [Topic]...",
    ],
    # Reviews, comparisons, hot takes
    ScenarioType.OPINION: [
        "Waste of money! Never buy this [Topic]...",
        "Wake up! [Topic] isn't as magical as you think.",
        "Anyone who says [Topic] is great gets blocked...",
        "Debate: is [Topic] really worth the money?",
        "Spending $500 on [Topic]? Let me be honest...",
        "This is the real deal, don't trust the ads...",
        "[Thing A] vs [Thing B] - which one is actually worth it?",
        "I tried both and here's the truth...",
        "Don't buy [A] when [B] exists! Here's why...",
        "Honest comparison: [Topic A] or [Topic B]?",
        "One costs $50, the other $500 - which do you pick?",
        "I used it for 30 days and here's my verdict...",
        "100% honest review after using [Topic]...",
        "I bought [Topic] and here's what they don't tell you...",
        "No sugar-coating review: is [Topic] worth it?",
        "Amazing or awful? The truth about [Topic] after a month...",
        "Worth every penny or a waste? [Topic] review.",
        "Final verdict on [Topic] - should you buy it?",
    ],
}

# Checked in this order; the first category with a hit wins.
SCENARIO_KEYWORDS: list[tuple[ScenarioType, tuple[str, ...]]] = [
    (
        ScenarioType.STORY,
        (
            "boyfriend", "girlfriend", "crush", "best friend", " my boss",
            " my mom", " my dad", " my family", " today i ", "yesterday",
            "went home", " at work", " at school", "got scammed", "got blocked",
            "got dumped", "got fired", " i was ", " i got ", "storytime",
            "story time", "pov:", "story:",
            # Vietnamese signals from the original keyword table
            "người yêu", "bạn thân", "hôm nay", "hôm qua", "kể chuyện",
        ),
    ),
    (
        ScenarioType.OPINION,
        (
            "review", "worth it", "worth the money", "should i buy",
            "should you buy", "which is better", " vs ", " vs.", "versus",
            "better than", "compare", "comparison", "overrated", "underrated",
            "hot take", "unpopular opinion", "waste of money", "iphone",
            "samsung",
            "đánh giá", "so sánh", "có nên", "phí tiền", "đáng tiền",
        ),
    ),
]

DEFAULT_SCENARIO = ScenarioType.KNOWLEDGE

_PLACEHOLDERS: list[tuple[str, str | None]] = [
    (r"\[Topic A\]", "Option A"),
    (r"\[Topic B\]", "Option B"),
    (r"\[Thing A\]", "Option A"),
    (r"\[Thing B\]", "Option B"),
    (r"\[A\]", "A"),
    (r"\[B\]", "B"),
    (r"\[Topic\]", None),
]


def detect_scenario_from_topic(topic: str) -> ScenarioType:
    """Classify a topic into a scenario by keyword matching."""
    lowered = f" {topic.lower()} "
    for scenario, keywords in SCENARIO_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return scenario
    return DEFAULT_SCENARIO


def shorten_topic(topic: str, max_chars: int = 20) -> str:
    """Truncate a topic for use inside example hooks."""
    topic = topic.strip()
    return topic if len(topic) <= max_chars else topic[:max_chars] + "..."


def fill_hook_placeholders(hook: str, topic: str, max_chars: int = 20) -> str:
    """Replace placeholder tokens in a hook with the (truncated) topic."""
    short_topic = shorten_topic(topic, max_chars)
    for pattern, replacement in _PLACEHOLDERS:
        value = short_topic if replacement is None else replacement
        hook = re.sub(pattern, lambda _m, v=value: v, hook, flags=re.IGNORECASE)
    return hook


def get_random_hooks(
    category: ScenarioType,
    count: int = 3,
    topic: str | None = None,
    rng: random.Random | None = None,
    max_topic_chars: int = 20,
) -> list[str]:
    """Sample unique hooks from one category.

    Uses a Fisher-Yates shuffle on a copy of the category list and takes the
    first ``min(count, len(category))`` entries. When a topic is given the
    placeholders are filled in.
    """
    rng = rng or random.Random()
    shuffled = list(VIRAL_HOOKS[category])
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]

    hooks = shuffled[: max(0, min(count, len(shuffled)))]
    if topic:
        hooks = [fill_hook_placeholders(hook, topic, max_topic_chars) for hook in hooks]
    return hooks


def get_smart_hook_examples(
    topic: str,
    category: ScenarioType | None = None,
    count: int = 3,
    rng: random.Random | None = None,
    max_topic_chars: int = 20,
) -> tuple[ScenarioType, list[str]]:
    """Pick example hooks relevant to a topic.

    Args:
        topic: The user's topic.
        category: Scenario to sample from; detected from the topic if None.
        count: Number of hooks to return.
        rng: Random source, for reproducible sampling.
        max_topic_chars: Topic length used inside the hooks.

    Returns:
        The scenario used and the filled-in hooks.
    """
    if category is None:
        category = detect_scenario_from_topic(topic)
    hooks = get_random_hooks(category, count, topic=topic, rng=rng, max_topic_chars=max_topic_chars)
    logger.debug("Hook selection: %s -> %d hooks for %r", category.value, len(hooks), topic[:30])
    return category, hooks

"""Prompt fragments, the registry that holds them, and the prompt builder."""

from .archetypes import ARCHETYPES, Archetype, resolve_archetype
from .builder import DURATION_PROFILES, PromptBuilder, build_prompt, estimate_tokens
from .hooks import (
    VIRAL_HOOKS,
    detect_scenario_from_topic,
    fill_hook_placeholders,
    get_random_hooks,
    get_smart_hook_examples,
)
from .registry import (
    PromptCategory,
    PromptMetadata,
    PromptNotFoundError,
    PromptRegistry,
    RegisteredPrompt,
    compose_prompts,
    create_default_registry,
)
from .styles import get_style_prompt, map_vibe_to_style
from .system import get_system_prompt
from .tasks import get_task_prompt

__all__ = [
    "ARCHETYPES",
    "Archetype",
    "DURATION_PROFILES",
    "PromptBuilder",
    "PromptCategory",
    "PromptMetadata",
    "PromptNotFoundError",
    "PromptRegistry",
    "RegisteredPrompt",
    "VIRAL_HOOKS",
    "build_prompt",
    "compose_prompts",
    "create_default_registry",
    "detect_scenario_from_topic",
    "estimate_tokens",
    "fill_hook_placeholders",
    "get_random_hooks",
    "get_smart_hook_examples",
    "get_style_prompt",
    "get_system_prompt",
    "get_task_prompt",
    "map_vibe_to_style",
    "resolve_archetype",
]

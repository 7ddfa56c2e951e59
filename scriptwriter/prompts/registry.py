"""
Prompt registry with versioned fragments.

Fragments are registered once at startup and looked up by key at request
time. Keys are namespaced by category, e.g. "system:expert_v1",
"style:funny_v1", "task:generate_script_v1".
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class PromptCategory(str, Enum):
    """Category a prompt fragment belongs to."""

    SYSTEM = "system"
    STYLE = "style"
    TASK = "task"


class PromptMetadata(BaseModel):
    """Metadata describing a registered fragment."""

    model_config = ConfigDict(frozen=True)

    version: str
    category: PromptCategory
    description: str
    token_estimate: int
    created_at: str


class RegisteredPrompt(BaseModel):
    """A prompt fragment and its metadata."""

    model_config = ConfigDict(frozen=True)

    content: str
    metadata: PromptMetadata


class PromptNotFoundError(KeyError):
    """Raised when a prompt key has not been registered."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Prompt not found: {self.key}"


class PromptRegistry:
    """In-memory store of prompt fragments.

    Built once during application startup and injected into the prompt
    builder and the generator; read-only afterwards.
    """

    def __init__(self) -> None:
        self._prompts: dict[str, RegisteredPrompt] = {}
        self._active_versions: dict[PromptCategory, str] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._prompts

    def __len__(self) -> int:
        return len(self._prompts)

    def register(self, key: str, prompt: RegisteredPrompt) -> None:
        """Register a fragment. Re-registering a key replaces it."""
        self._prompts[key] = prompt

    def get(self, key: str) -> RegisteredPrompt | None:
        """Get a registered fragment, or None."""
        return self._prompts.get(key)

    def get_content(self, key: str) -> str:
        """Get fragment content by key.

        Raises:
            PromptNotFoundError: If the key is not registered.
        """
        prompt = self._prompts.get(key)
        if prompt is None:
            raise PromptNotFoundError(key)
        return prompt.content

    def compose(self, *keys: str) -> str:
        """Join fragment contents with a blank line, in the given order."""
        return "\n\n".join(self.get_content(key) for key in keys)

    def set_active_version(self, category: PromptCategory, version: str) -> None:
        """Record the current version for a category."""
        self._active_versions[category] = version

    def get_active_version(self, category: PromptCategory) -> str | None:
        """Get the recorded version for a category."""
        return self._active_versions.get(category)

    def list(self) -> list[tuple[str, PromptMetadata]]:
        """List registered keys with their metadata."""
        return [(key, prompt.metadata) for key, prompt in self._prompts.items()]


def compose_prompts(registry: PromptRegistry, *keys: str) -> str:
    """Compose several fragments from a registry."""
    return registry.compose(*keys)


def create_default_registry() -> PromptRegistry:
    """Create a registry with every built-in fragment registered."""
    from .styles import register_style_prompts
    from .system import register_system_prompts
    from .tasks import register_task_prompts

    registry = PromptRegistry()
    register_system_prompts(registry)
    register_style_prompts(registry)
    register_task_prompts(registry)
    return registry

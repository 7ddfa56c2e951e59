"""Configuration loading and management."""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

from .models import ModelTier


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: Literal["openai", "gemini", "mock"] = "openai"
    tier: ModelTier = ModelTier.FAST
    temperature: float | None = None
    max_tokens: int | None = None


class SearchConfig(BaseModel):
    """Web search (Tavily) configuration."""

    enabled: bool = True
    max_results: int = 5
    search_depth: str = "basic"
    timeout_seconds: float = 10.0
    max_snippets: int = 3
    snippet_chars: int = 200


class CacheConfig(BaseModel):
    """Generated-script cache configuration."""

    backend: Literal["memory", "sql"] = "memory"
    database_url: str | None = None
    replay_chunk_size: int = 50
    replay_delay_seconds: float = 0.01


class PromptConfig(BaseModel):
    """Prompt builder configuration."""

    hook_examples: int = 3
    topic_preview_chars: int = 20


class Config(BaseModel):
    """Main application configuration."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    prompts: PromptConfig = Field(default_factory=PromptConfig)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "Config":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            return cls()

        return cls(**data)

    def to_yaml(self, path: Path | str) -> None:
        """Save configuration to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self.model_dump(mode="json")
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)


def load_config(config_path: Path | str | None = None) -> Config:
    """Load configuration from file or use defaults."""
    if config_path is None:
        # Look for config.yaml in current directory or project root
        candidates = [Path("config.yaml"), Path(__file__).parent.parent / "config.yaml"]
        for candidate in candidates:
            if candidate.exists():
                config_path = candidate
                break

    if config_path is not None:
        return Config.from_yaml(config_path)

    return Config()

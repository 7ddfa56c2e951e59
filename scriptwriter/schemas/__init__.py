"""Structured-output schemas."""

from .script import (
    BaseScriptResult,
    FullScriptResult,
    HealthProbe,
    HookVariation,
    HookVariations,
    ViralAnalysis,
    get_script_schema,
)

__all__ = [
    "BaseScriptResult",
    "FullScriptResult",
    "HealthProbe",
    "HookVariation",
    "HookVariations",
    "ViralAnalysis",
    "get_script_schema",
]

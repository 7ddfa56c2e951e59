"""
Task prompts - WHAT to generate.

These specify output requirements and are kept separate from persona and
style so each can be versioned on its own.
"""

from typing import Literal

from .registry import PromptCategory, PromptMetadata, PromptRegistry, RegisteredPrompt

Task = Literal["generate", "generate_visual", "rewrite", "hooks"]

TASK_KEYS: dict[str, str] = {
    "generate": "task:generate_script_v1",
    "generate_visual": "task:generate_script_visual_v1",
    "rewrite": "task:rewrite_script_v1",
    "hooks": "task:generate_hooks_v1",
}

GENERATE_SCRIPT_TASK = """TASK: Write a VIRAL short video script for TikTok/Reels/Shorts

MANDATORY RULES:
1. NOT GENERIC:
   - WRONG: "Eat healthy", "Improve your skills", "Exercise regularly"
   - RIGHT: "Eat 2 eggs before 8am", "Stop charging your phone overnight", "Run 5km at 6am"
   - Always give CONCRETE examples, real numbers, clear actions
2. WRITE ENOUGH:
   - Fill the LENGTH CONSTRAINT above, no more and no less
   - Write the script the way it is SPOKEN
3. OUTPUT FIELDS:
   - hook: shocking opening line (under 5 seconds)
   - script: the MAIN content in complete sentences, "\\n" between lines, no markdown
   - cta: call to action at the end of the video
4. ANALYSIS:
   - hookPsychology: why the hook works (max 15 words)
   - viralScore: integer 1-10
   - audienceInsight: specific audience
   - viralFramework: framework used"""

GENERATE_SCRIPT_VISUAL_TASK = GENERATE_SCRIPT_TASK + """
5. VISUAL PROMPT (English):
   Describe the scene for AI video tools (Kling/Runway/Luma).
   Include: subject, environment, camera movement, lighting, mood, colors.
   Example: "Young entrepreneur in a modern coffee shop, golden hour lighting, slow dolly in, warm color grading, cinematic 4k, shallow depth of field\""""

REWRITE_SCRIPT_TASK = """TASK: Improve an existing script

INPUT: the user's original script
OUTPUT: a polished script with
- A stronger hook
- More natural language
- Better flow
- The same core idea"""

GENERATE_HOOKS_TASK = """TASK: Write 5 hook variations for the topic

OUTPUT: an array of 5 hooks, each using a different framework:
1. Negative Hook (warning/consequence)
2. Curiosity Gap (reveal a secret)
3. Social Proof (statistics)
4. Polarization (split opinion)
5. Transformation (before/after)"""


def register_task_prompts(registry: PromptRegistry) -> None:
    """Register the built-in task fragments."""
    tasks = [
        ("generate", GENERATE_SCRIPT_TASK, "GENERATE_SCRIPT_V1", "Generate viral short video script", 350),
        (
            "generate_visual",
            GENERATE_SCRIPT_VISUAL_TASK,
            "GENERATE_SCRIPT_VISUAL_V1",
            "Generate script with AI video prompt",
            420,
        ),
        ("rewrite", REWRITE_SCRIPT_TASK, "REWRITE_SCRIPT_V1", "Polish/improve existing script", 50),
        ("hooks", GENERATE_HOOKS_TASK, "GENERATE_HOOKS_V1", "Generate 5 hook variations", 60),
    ]
    for task, content, version, description, tokens in tasks:
        registry.register(
            TASK_KEYS[task],
            RegisteredPrompt(
                content=content,
                metadata=PromptMetadata(
                    version=version,
                    category=PromptCategory.TASK,
                    description=description,
                    token_estimate=tokens,
                    created_at="2024-12-29",
                ),
            ),
        )
    registry.set_active_version(PromptCategory.TASK, "GENERATE_SCRIPT_V1")


def get_task_prompt(registry: PromptRegistry, task: Task = "generate") -> str:
    """Get the prompt for a task."""
    return registry.get_content(TASK_KEYS[task])

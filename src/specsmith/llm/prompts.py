# src/specsmith/llm/prompts.py
from __future__ import annotations

from collections.abc import Sequence

PROJECT_INSTRUCTION = (
    "Generate a Java Spring Boot project using the following specification files. "
    "Provide only the main code files as a JSON object with file paths as keys and "
    "file contents as values."
)

SYSTEM_MESSAGE = "\n".join([
    "You generate source files for Java Spring Boot projects.",
    "",
    "- Output MUST be a single JSON object mapping relative file paths to file contents.",
    "- No markdown fences.",
    "- No extra commentary.",
]) + "\n"


class ProjectGenerationPrompt:
    """Builds the single AI-mode prompt from the supplied source texts.

    Each source appears as a `--- <name> file ---` block in the order given.
    """

    def __init__(self, *, instruction: str = PROJECT_INSTRUCTION) -> None:
        self.instruction = instruction

    def text(self, sources: Sequence[tuple[str, str]]) -> str:
        parts = [self.instruction, ""]
        for name, content in sources:
            parts.append(f"--- {name} file ---")
            parts.append(content.rstrip("\n"))
            parts.append("")
        return "\n".join(parts)

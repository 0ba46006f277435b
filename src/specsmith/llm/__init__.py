"""LLM collaborator used by AI mode: provider clients, prompt, and reply parsing."""

from .factory import build_chat_client, build_completion_client, llm_config_from_settings
from .llm_client import (
    ChatCompletion,
    ChatMessages,
    CompletionClient,
    LLMClient,
    LLMConfig,
    LLMError,
    LLMResult,
)
from .prompts import SYSTEM_MESSAGE, ProjectGenerationPrompt
from .response import parse_file_mapping, strip_code_fences

__all__ = [
    "ChatCompletion",
    "ChatMessages",
    "CompletionClient",
    "LLMClient",
    "LLMConfig",
    "LLMError",
    "LLMResult",
    "ProjectGenerationPrompt",
    "SYSTEM_MESSAGE",
    "build_chat_client",
    "build_completion_client",
    "llm_config_from_settings",
    "parse_file_mapping",
    "strip_code_fences",
]

# src/specsmith/llm/llm_client.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

from ..errors import LLMError

ChatMessage = dict[str, str]
ChatMessages = list[ChatMessage]


@dataclass(frozen=True, slots=True)
class LLMResult:
    """Standard return type for all LLM clients."""
    status: Literal["OK", "ERROR"]
    text: str
    provider: str
    model: str
    input_tokens: int | None = None
    output_tokens: int | None = None
    total_tokens: int | None = None
    raw: Any | None = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class LLMConfig:
    """Represents the fixed settings for one configured client instance."""
    provider: str               # "openai" | "ollama"
    model: str
    max_tokens: int | None = None
    temperature: float | None = None
    extra: dict[str, Any] = field(default_factory=dict)  # base_url, api_key_env, timeout_s, request


class LLMClient(Protocol):
    """Defines the minimal chat interface every provider client implements.

    Each concrete client instance is configured (provider + model + defaults).
    The chat() call uses those defaults and returns the model text + metadata.
    """

    config: LLMConfig

    def chat(self, *, messages: ChatMessages) -> LLMResult:
        ...


class CompletionClient(Protocol):
    """The single-call collaborator the pipeline talks to in AI mode."""

    def complete(self, prompt: str) -> str:
        ...


@dataclass(slots=True)
class ChatCompletion:
    """Adapts a chat client to complete(prompt) -> str.

    The prompt is sent as one user message, after the optional system message.
    Any failure surfaces as LLMError.
    """

    client: LLMClient
    system: str | None = None
    last_result: LLMResult | None = None

    def _messages(self, prompt: str) -> ChatMessages:
        messages: ChatMessages = []
        if self.system:
            messages.append({"role": "system", "content": self.system})
        messages.append({"role": "user", "content": prompt})
        return messages

    def complete(self, prompt: str) -> str:
        try:
            result = self.client.chat(messages=self._messages(prompt))
        except LLMError:
            raise
        except (OSError, ValueError, RuntimeError) as e:
            raise LLMError(
                f"{self.client.config.provider} call failed: {e}",
                data={"provider": self.client.config.provider, "error": f"{type(e).__name__}: {e}"},
            ) from e

        self.last_result = result
        if result.status != "OK":
            raise LLMError(result.error or "LLM returned an error status", data={"provider": result.provider})
        return result.text

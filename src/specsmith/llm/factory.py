# src/specsmith/llm/factory.py
from __future__ import annotations

from ..config import GeneratorSettings
from ..errors import ConfigError
from .llm_client import ChatCompletion, LLMClient, LLMConfig
from .prompts import SYSTEM_MESSAGE
from .providers.ollama_client import OllamaClient
from .providers.openai_client import OpenAIClient


def llm_config_from_settings(settings: GeneratorSettings) -> LLMConfig:
    extra: dict[str, object] = {"timeout_s": settings.llm_timeout_s, "api_key_env": settings.api_key_env}
    if settings.llm_base_url:
        extra["base_url"] = settings.llm_base_url
    return LLMConfig(
        provider=settings.llm_provider,
        model=settings.llm_model,
        max_tokens=settings.llm_max_tokens,
        temperature=settings.llm_temperature,
        extra=extra,
    )


def build_chat_client(config: LLMConfig) -> LLMClient:
    if config.provider == "openai":
        return OpenAIClient(config=config)
    if config.provider == "ollama":
        return OllamaClient(config=config)
    raise ConfigError(f"Unknown LLM provider: {config.provider}", data={"provider": config.provider})


def build_completion_client(settings: GeneratorSettings) -> ChatCompletion:
    """Returns the complete(prompt) collaborator configured by settings."""
    return ChatCompletion(client=build_chat_client(llm_config_from_settings(settings)), system=SYSTEM_MESSAGE)

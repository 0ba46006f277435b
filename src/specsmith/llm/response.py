# src/specsmith/llm/response.py
from __future__ import annotations

import json

from ..errors import LLMError


def strip_code_fences(text: str) -> str:
    """Removes markdown code fences from a model response.

    The function supports responses that start with ``` or ```json and end with ```.
    The function returns the original text if no fences are present.
    """
    s = (text or "").strip()
    if not s.startswith("```"):
        return s

    lines = s.splitlines()

    if lines and lines[0].lstrip().startswith("```"):
        lines = lines[1:]
    if lines and lines[-1].strip() == "```":
        lines = lines[:-1]

    return "\n".join(lines).strip()


def _unwrap_chat_envelope(obj: object) -> object:
    """Returns the message content when obj is a raw chat-completions body."""
    if not isinstance(obj, dict) or "choices" not in obj:
        return obj
    choices = obj.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        msg = choices[0].get("message")
        if isinstance(msg, dict) and isinstance(msg.get("content"), str):
            return json.loads(strip_code_fences(msg["content"]))
    return obj


def parse_file_mapping(text: str) -> dict[str, str]:
    """Parses a model reply into an ordered {relative path: content} mapping.

    Accepts a bare JSON object, a fenced one, or a full chat-completions body
    whose message content is such an object. Raises LLMError on anything else.
    """
    try:
        obj = _unwrap_chat_envelope(json.loads(strip_code_fences(text)))
    except json.JSONDecodeError as e:
        raise LLMError(f"Failed to parse OpenAI response as JSON: {e}", data={"error": str(e)}) from e

    if not isinstance(obj, dict):
        raise LLMError(
            f"Failed to parse OpenAI response as JSON: expected an object, got {type(obj).__name__}",
            data={"type": type(obj).__name__},
        )

    bad = [k for k, v in obj.items() if not isinstance(v, str)]
    if bad:
        raise LLMError(
            f"Failed to parse OpenAI response as JSON: non-text content for {', '.join(bad)}",
            data={"paths": bad},
        )
    return {str(k): v for k, v in obj.items()}

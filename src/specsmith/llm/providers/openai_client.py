# src/specsmith/llm/providers/openai_client.py
from __future__ import annotations

import json
import os
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any

from ..llm_client import ChatMessages, LLMConfig, LLMError, LLMResult

JsonDict = dict[str, Any]


def _post_json(*, url: str, headers: dict[str, str], payload: JsonDict, timeout_s: float = 60.0) -> JsonDict:
    data = json.dumps(payload).encode("utf-8")
    req = urllib.request.Request(url, data=data, headers=headers, method="POST")
    with urllib.request.urlopen(req, timeout=timeout_s) as resp:
        body = resp.read().decode("utf-8", errors="replace")
    obj = json.loads(body) if body else {}
    return obj if isinstance(obj, dict) else {"raw": obj}


@dataclass(slots=True)
class OpenAIClient:
    config: LLMConfig

    def chat(self, *, messages: ChatMessages) -> LLMResult:
        base_url = str(self.config.extra.get("base_url") or "https://api.openai.com").rstrip("/")
        api_key_env = str(self.config.extra.get("api_key_env") or "OPENAI_API_KEY")
        timeout_s = float(self.config.extra.get("timeout_s") or 60.0)

        api_key = os.getenv(api_key_env, "")
        if not api_key:
            raise LLMError(f"{api_key_env} environment variable is not set", data={"api_key_env": api_key_env})

        url = f"{base_url}/v1/chat/completions"
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

        payload: JsonDict = {"model": self.config.model, "messages": list(messages)}
        if self.config.temperature is not None:
            payload["temperature"] = float(self.config.temperature)
        if self.config.max_tokens is not None:
            payload["max_tokens"] = int(self.config.max_tokens)

        extra_request = self.config.extra.get("request")
        if isinstance(extra_request, dict):
            payload.update(extra_request)

        try:
            raw = _post_json(url=url, headers=headers, payload=payload, timeout_s=timeout_s)
        except urllib.error.HTTPError as e:
            body = e.read().decode("utf-8", errors="replace") if hasattr(e, "read") else str(e)
            raise LLMError(
                f"OpenAI API returned status code {getattr(e, 'code', None)}",
                data={"code": getattr(e, "code", None), "body": body},
            ) from e
        except urllib.error.URLError as e:
            raise LLMError(f"OpenAI URLError: {e.reason}", data={"error": str(e)}) from e
        except (TimeoutError, json.JSONDecodeError) as e:
            raise LLMError(f"OpenAI request failed: {e}", data={"error": f"{type(e).__name__}: {e}"}) from e

        text = ""
        choices = raw.get("choices")
        if isinstance(choices, list) and choices:
            c0 = choices[0]
            if isinstance(c0, dict):
                msg = c0.get("message")
                if isinstance(msg, dict):
                    text = str(msg.get("content") or "")
        if not text:
            raise LLMError("No choices in OpenAI response", data={"raw_keys": sorted(raw)})

        usage = raw.get("usage") if isinstance(raw.get("usage"), dict) else {}
        input_tokens = usage.get("prompt_tokens")
        output_tokens = usage.get("completion_tokens")
        total_tokens = usage.get("total_tokens")

        return LLMResult(
            status="OK",
            text=text,
            provider=self.config.provider,
            model=self.config.model,
            input_tokens=int(input_tokens) if isinstance(input_tokens, int) else None,
            output_tokens=int(output_tokens) if isinstance(output_tokens, int) else None,
            total_tokens=int(total_tokens) if isinstance(total_tokens, int) else None,
            raw=raw,
        )

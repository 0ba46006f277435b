# src/specsmith/llm/providers/ollama_client.py
from __future__ import annotations

import json
import urllib.error
import urllib.request
from dataclasses import dataclass

from ..llm_client import ChatMessages, LLMConfig, LLMError, LLMResult

JsonDict = dict[str, object]


def _post_json(*, url: str, payload: JsonDict, timeout_s: float = 60.0) -> JsonDict:
    data = json.dumps(payload).encode("utf-8")
    req = urllib.request.Request(url, data=data, headers={"Content-Type": "application/json"}, method="POST")
    with urllib.request.urlopen(req, timeout=timeout_s) as resp:
        body = resp.read().decode("utf-8", errors="replace")
    obj = json.loads(body) if body else {}
    return obj if isinstance(obj, dict) else {"raw": obj}


@dataclass(slots=True)
class OllamaClient:
    config: LLMConfig

    def chat(self, *, messages: ChatMessages) -> LLMResult:
        base_url = str(self.config.extra.get("base_url") or "http://localhost:11434").rstrip("/")
        timeout_s = float(self.config.extra.get("timeout_s") or 60.0)
        url = f"{base_url}/api/chat"

        # JSON output keeps the reply parseable as a path -> content mapping.
        payload: JsonDict = {"model": self.config.model, "messages": list(messages), "stream": False, "format": "json"}

        options: JsonDict = {}
        if self.config.temperature is not None:
            options["temperature"] = float(self.config.temperature)
        if self.config.max_tokens is not None:
            options["num_predict"] = int(self.config.max_tokens)
        if options:
            payload["options"] = options

        extra_request = self.config.extra.get("request")
        if isinstance(extra_request, dict):
            payload.update(extra_request)

        try:
            raw = _post_json(url=url, payload=payload, timeout_s=timeout_s)
        except urllib.error.HTTPError as e:
            body = e.read().decode("utf-8", errors="replace") if hasattr(e, "read") else str(e)
            raise LLMError("Ollama HTTPError", data={"code": getattr(e, "code", None), "body": body}) from e
        except urllib.error.URLError as e:
            raise LLMError(f"Ollama URLError: {e.reason}", data={"error": str(e)}) from e
        except (TimeoutError, json.JSONDecodeError) as e:
            raise LLMError(f"Ollama request failed: {e}", data={"error": f"{type(e).__name__}: {e}"}) from e

        err = raw.get("error")
        if isinstance(err, str) and err.strip():
            raise LLMError(f"Ollama error: {err}", data={"error": err})

        msg = raw.get("message")
        text = ""
        if isinstance(msg, dict) and isinstance(msg.get("content"), str):
            text = str(msg["content"]).strip()
        if not text:
            raise LLMError(
                "Ollama returned empty response text",
                data={"done_reason": raw.get("done_reason"), "eval_count": raw.get("eval_count")},
            )

        input_tokens = raw.get("prompt_eval_count")
        output_tokens = raw.get("eval_count")
        total_tokens = None
        if isinstance(input_tokens, int) and isinstance(output_tokens, int):
            total_tokens = input_tokens + output_tokens

        return LLMResult(
            status="OK",
            text=text,
            provider=self.config.provider,
            model=self.config.model,
            input_tokens=input_tokens if isinstance(input_tokens, int) else None,
            output_tokens=output_tokens if isinstance(output_tokens, int) else None,
            total_tokens=total_tokens,
            raw=raw,
        )

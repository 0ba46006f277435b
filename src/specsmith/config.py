# src/specsmith/config.py
from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml  # PyYAML

from .errors import ConfigError

ENV_PREFIX = "SPECSMITH_"


@dataclass(frozen=True, slots=True)
class GeneratorSettings:
    """Run-wide settings for the generator and its optional LLM collaborator.

    Precedence, lowest first:
    - dataclass defaults
    - an optional YAML settings file
    - SPECSMITH_* environment variables (after load_dotenv())
    - explicit overrides (CLI flags)
    """

    output_dir: str = "generated"
    llm_provider: str = "openai"
    llm_model: str = "gpt-4o-mini"
    llm_base_url: str | None = None
    llm_timeout_s: float = 60.0
    llm_max_tokens: int | None = None
    llm_temperature: float | None = 0.2
    api_key_env: str = "OPENAI_API_KEY"

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


_PROVIDERS = ("openai", "ollama")


def _coerce(name: str, value: Any) -> Any:
    """Converts a raw YAML/env value to the field's type."""
    if value is None or value == "":
        if name in ("llm_base_url", "llm_max_tokens", "llm_temperature"):
            return None
        raise ConfigError(f"Setting '{name}' must not be empty", data={"setting": name})
    try:
        if name == "llm_timeout_s":
            out: Any = float(value)
            if out <= 0:
                raise ValueError("must be positive")
            return out
        if name == "llm_max_tokens":
            return int(value)
        if name == "llm_temperature":
            return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for '{name}': {value!r}", data={"setting": name, "error": str(e)}) from e

    out = str(value).strip()
    if name == "llm_provider":
        out = out.lower()
        if out not in _PROVIDERS:
            raise ConfigError(
                f"Unknown llm_provider '{out}' (expected one of: {', '.join(_PROVIDERS)})",
                data={"setting": name},
            )
    return out


def _apply(settings: GeneratorSettings, values: Mapping[str, Any], *, origin: str) -> GeneratorSettings:
    known = {f.name for f in fields(GeneratorSettings)}
    unknown = sorted(k for k in values if k not in known)
    if unknown:
        raise ConfigError(f"Unknown settings in {origin}: {', '.join(unknown)}", data={"unknown": unknown})
    return replace(settings, **{k: _coerce(k, v) for k, v in values.items()})


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        obj = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read settings file {path}: {e}", data={"path": str(path)}) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in settings file {path}: {e}", data={"path": str(path)}) from e
    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping", data={"path": str(path)})
    return obj


def _env_values(environ: Mapping[str, str]) -> dict[str, str]:
    known = {f.name for f in fields(GeneratorSettings)}
    out: dict[str, str] = {}
    for key, value in environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        name = key[len(ENV_PREFIX):].lower()
        if name in known:
            out[name] = value
    return out


def load_settings(
    config_path: str | Path | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
    use_dotenv: bool = True,
) -> GeneratorSettings:
    """Resolves GeneratorSettings from file, environment, and overrides.

    Overrides whose value is None are ignored so unset CLI flags do not mask
    lower layers.
    """
    if use_dotenv and environ is None:
        from dotenv import load_dotenv

        load_dotenv()

    settings = GeneratorSettings()
    if config_path is not None:
        settings = _apply(settings, _read_yaml(Path(config_path)), origin=str(config_path))

    settings = _apply(settings, _env_values(os.environ if environ is None else environ), origin="environment")

    if overrides:
        settings = _apply(
            settings,
            {k: v for k, v in overrides.items() if v is not None},
            origin="overrides",
        )
    return settings

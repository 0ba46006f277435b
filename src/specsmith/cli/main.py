from __future__ import annotations

import argparse
from collections.abc import Mapping, Sequence
from dataclasses import fields, is_dataclass
from enum import Enum
from pathlib import Path

import yaml

from specsmith.config import GeneratorSettings, load_settings
from specsmith.constants import (
    SOURCE_DOMAIN,
    SOURCE_GRAPHQL,
    SOURCE_METADATA,
    SOURCE_OPENAPI,
    SOURCE_OUTPUT_PREFS,
)
from specsmith.data.descriptors import SpecSources
from specsmith.errors import ConfigError, EmissionError
from specsmith.gaps.report import render_gap_report
from specsmith.llm.factory import build_completion_client
from specsmith.log import configure_logging
from specsmith.pipeline import GenerationPipeline
from specsmith.sources import load_sources
from specsmith.store import FileArtifactStore, MemoryArtifactStore


def _to_primitive(x: object) -> object:
    """Converts objects into YAML/JSON-safe primitives.

    The conversion rules are:
    - dataclasses -> dict of field values (recursively converted)
    - Enum -> its .value
    - Path -> str(path)
    - Mapping -> dict with string keys and recursively converted values
    - Sequence (list/tuple) -> list of recursively converted items
    - everything else -> returned as-is
    """
    if is_dataclass(x):
        return {f.name: _to_primitive(getattr(x, f.name)) for f in fields(x)}

    if isinstance(x, Enum):
        return x.value

    if isinstance(x, Path):
        return str(x)

    if isinstance(x, Mapping):
        return {str(k): _to_primitive(v) for k, v in x.items()}

    if isinstance(x, (list, tuple)):
        return [_to_primitive(v) for v in x]

    return x


def _print_yaml(title: str, payload: object) -> None:
    """Prints a human-readable YAML view of structured data."""
    print(f"\n=== {title} ===\n")
    safe_payload = _to_primitive(payload)
    print(yaml.safe_dump(safe_payload, sort_keys=False, allow_unicode=True))


def _source_paths(args: argparse.Namespace) -> dict[str, str | None]:
    return {
        SOURCE_OPENAPI: args.openapi,
        SOURCE_GRAPHQL: args.graphql,
        SOURCE_DOMAIN: args.domain,
        SOURCE_METADATA: args.metadata,
        SOURCE_OUTPUT_PREFS: args.outputprefs,
    }


def _settings_from_cli(args: argparse.Namespace) -> GeneratorSettings:
    overrides = {
        "output_dir": getattr(args, "out", None),
        "llm_provider": getattr(args, "provider", None),
        "llm_model": getattr(args, "model", None),
        "llm_base_url": getattr(args, "base_url", None),
        "llm_timeout_s": getattr(args, "timeout", None),
        "llm_max_tokens": getattr(args, "max_tokens", None),
        "llm_temperature": getattr(args, "temperature", None),
    }
    try:
        return load_settings(args.config, overrides=overrides)
    except ConfigError as e:
        raise SystemExit(f"Invalid configuration: {e}") from e


def _load(args: argparse.Namespace) -> SpecSources:
    return load_sources(_source_paths(args))


def cmd_generate(args: argparse.Namespace) -> None:
    """Generates the project (or runs AI mode) and prints the run summary."""
    settings = _settings_from_cli(args)
    sources = _load(args)

    store = FileArtifactStore(output_root=settings.output_dir)
    llm = build_completion_client(settings) if args.ai else None
    pipeline = GenerationPipeline(store, llm=llm)

    try:
        result = pipeline.run(sources, ai_mode=args.ai)
    except EmissionError as e:
        payload = e.data or {}
        _print_yaml("GAPS SO FAR", payload.get("gaps", []))
        raise SystemExit(f"Generation failed: {e}") from e

    summary = result.to_dict()
    if not args.list_artifacts:
        summary.pop("artifacts", None)
    _print_yaml("GENERATION RESULT", summary)
    print("\n=== OUTPUT ROOT ===\n")
    print(str(store.output_root))


def cmd_report(args: argparse.Namespace) -> None:
    """Runs the deterministic pipeline in memory and prints only the gap report."""
    sources = _load(args)
    pipeline = GenerationPipeline(MemoryArtifactStore())
    try:
        result = pipeline.run(sources)
    except EmissionError as e:
        raise SystemExit(f"Generation failed: {e}") from e
    print(render_gap_report(result.gaps), end="")


def build_parser() -> argparse.ArgumentParser:
    """Builds the CLI parser."""
    p = argparse.ArgumentParser(prog="specsmith", description="Generate Spring Boot projects from API specifications")
    p.add_argument("--log-level", default="WARNING", help="DEBUG | INFO | WARNING | ERROR")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_source_flags(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("--openapi", default=None, help="OpenAPI/Swagger document (.json, .yaml, .yml)")
        sp.add_argument("--graphql", default=None, help="GraphQL schema (passed through, not compiled)")
        sp.add_argument("--domain", default=None, help="Domain model YAML (entities -> fields)")
        sp.add_argument("--metadata", default=None, help="Project metadata YAML (projectName)")
        sp.add_argument("--outputprefs", default=None, help="Output preferences YAML (packageName)")

    sp_gen = sub.add_parser("generate", help="Generate a project into an output directory")
    add_source_flags(sp_gen)
    sp_gen.add_argument("--out", default=None, help="Output directory (default: settings output_dir)")
    sp_gen.add_argument("--config", default=None, help="Settings YAML file")
    sp_gen.add_argument("--ai", action="store_true", help="Ask the LLM to generate the project instead")
    sp_gen.add_argument("--provider", default=None, help="openai | ollama")
    sp_gen.add_argument("--model", default=None, help="LLM model name")
    sp_gen.add_argument("--base-url", default=None, help="Provider base URL override")
    sp_gen.add_argument("--timeout", type=float, default=None, help="LLM request timeout in seconds")
    sp_gen.add_argument("--max-tokens", type=int, default=None, help="Max output tokens")
    sp_gen.add_argument("--temperature", type=float, default=None, help="Sampling temperature")
    sp_gen.add_argument("--list-artifacts", action="store_true", help="Include every written path in the summary")
    sp_gen.set_defaults(func=cmd_generate)

    sp_report = sub.add_parser("report", help="Print the gap report without writing any files")
    add_source_flags(sp_report)
    sp_report.set_defaults(func=cmd_report)

    return p


def main(argv: Sequence[str] | None = None) -> None:
    """Runs the CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    args.func(args)


if __name__ == "__main__":
    main()

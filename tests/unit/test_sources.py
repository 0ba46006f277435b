"""Tests for reading and decoding source documents."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from specsmith.sources import decode_sources, load_sources

pytestmark = pytest.mark.unit


def _write(root: Path, name: str, text: str) -> Path:
    path = root / name
    path.write_text(text, encoding="utf-8")
    return path


class TestDecodeSources:
    def test_openapi_json(self) -> None:
        sources = decode_sources({"openapi": ("api.json", json.dumps({"openapi": "3.0.0"}))})
        assert sources.schema == {"openapi": "3.0.0"}
        assert sources.decode_failures == ()

    def test_openapi_yaml_by_suffix(self) -> None:
        sources = decode_sources({"openapi": ("api.YML", "openapi: 3.0.0\ninfo:\n  title: Book API\n")})
        assert sources.schema == {"openapi": "3.0.0", "info": {"title": "Book API"}}

    def test_yaml_in_json_file_fails(self) -> None:
        sources = decode_sources({"openapi": ("api.json", "openapi: 3.0.0\n")})
        assert sources.schema is None
        assert sources.failed("openapi")
        assert sources.supplied("openapi")

    def test_graphql_is_passed_through(self) -> None:
        sdl = "type Query { books: [Book] }\n"
        sources = decode_sources({"graphql": ("schema.graphql", sdl)})
        assert sources.idl == sdl

    def test_empty_output_prefs_is_empty_mapping(self) -> None:
        assert decode_sources({"outputprefs": ("prefs.yaml", "  \n")}).output_prefs == {}

    def test_empty_domain_model_is_a_failure(self) -> None:
        sources = decode_sources({"domain": ("domain.yaml", "")})
        assert sources.domain_model is None
        assert sources.decode_failures[0][0] == "domain"
        assert "expected a mapping" in sources.decode_failures[0][1]

    def test_top_level_list_is_a_failure(self) -> None:
        sources = decode_sources({"metadata": ("meta.yaml", "- a\n- b\n")})
        assert sources.failed("metadata")

    def test_one_bad_source_does_not_affect_others(self) -> None:
        sources = decode_sources(
            {
                "openapi": ("api.json", "{not json"),
                "domain": ("domain.yaml", "entities:\n  Task:\n    fields:\n      title: string\n"),
            }
        )
        assert sources.schema is None
        assert sources.domain_model == {"entities": {"Task": {"fields": {"title": "string"}}}}
        assert [name for name, _ in sources.decode_failures] == ["openapi"]

    def test_raw_texts_follow_source_order(self) -> None:
        sources = decode_sources({"domain": ("d.yaml", "entities: {}\n"), "openapi": ("a.json", "{}")})
        assert [name for name, _ in sources.raw_texts] == ["openapi", "domain"]

    def test_unknown_sources_are_ignored(self) -> None:
        sources = decode_sources({"style": ("style.yaml", "x: 1\n")})
        assert sources.raw_texts == ()


class TestLoadSources:
    def test_reads_files(self, tmp_path: Path) -> None:
        api = _write(tmp_path, "api.yaml", "openapi: 3.0.0\n")
        prefs = _write(tmp_path, "prefs.yaml", "packageName: org.acme\n")
        sources = load_sources({"openapi": api, "outputprefs": str(prefs), "domain": None})
        assert sources.schema == {"openapi": "3.0.0"}
        assert sources.output_prefs == {"packageName": "org.acme"}
        assert not sources.supplied("domain")

    def test_unreadable_file_is_recorded_in_source_order(self, tmp_path: Path) -> None:
        bad_domain = _write(tmp_path, "domain.yaml", "entities: [\n")
        sources = load_sources({"openapi": tmp_path / "missing.json", "domain": bad_domain})
        assert [name for name, _ in sources.decode_failures] == ["openapi", "domain"]
        assert sources.decode_failures[0][1].startswith("FileNotFoundError")

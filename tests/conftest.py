from __future__ import annotations

import copy

import pytest

from specsmith.store import MemoryArtifactStore

BOOK_SCHEMA: dict[str, object] = {
    "openapi": "3.0.0",
    "info": {"title": "Book API", "version": "1.0.0"},
    "paths": {
        "/books": {
            "get": {"summary": "List all books"},
            "post": {"summary": "Create a book"},
        },
        "/books/{id}": {
            "parameters": [{"name": "id", "in": "path"}],
            "get": {},
        },
    },
    "components": {
        "schemas": {
            "Book": {
                "type": "object",
                "properties": {
                    "title": {"type": "string"},
                    "year": {"type": "integer"},
                },
            },
        },
    },
}

TASK_DOMAIN_TEXT = """\
entities:
  Task:
    fields:
      title: string
      done: boolean
      estimate: int or float
"""


@pytest.fixture()
def book_schema() -> dict[str, object]:
    return copy.deepcopy(BOOK_SCHEMA)


@pytest.fixture()
def task_domain_model() -> dict[str, object]:
    return {"entities": {"Task": {"fields": {"title": "string", "done": "boolean", "estimate": "int or float"}}}}


@pytest.fixture()
def memory_store() -> MemoryArtifactStore:
    return MemoryArtifactStore()

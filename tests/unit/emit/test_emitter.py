"""Tests for per-entity artifact emission and project scaffolding."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from specsmith.data.descriptors import CanonicalFieldType, EndpointDescriptor, EntityDescriptor, HttpMethod
from specsmith.data.result import ArtifactKind
from specsmith.emit.emitter import TemplateEmitter, field_views
from specsmith.emit.naming import NamingContext
from specsmith.emit.scaffold import (
    ProjectScaffolder,
    ProjectSettings,
    default_package_name,
    derive_package_name,
    derive_project_name,
    derive_project_settings,
)
from specsmith.gaps.collector import GapCollector

pytestmark = pytest.mark.unit

NAMING = NamingContext("com.example.bookapi")
EMITTER = TemplateEmitter(NAMING)
BOOK = EntityDescriptor.build("Book", [("title", CanonicalFieldType.TEXT), ("year", CanonicalFieldType.INTEGER)])
BOOK_ENDPOINTS = (
    EndpointDescriptor("/books", HttpMethod.GET, "List all books"),
    EndpointDescriptor("/books", HttpMethod.POST, "Create a book"),
)


def _by_kind(entity: EntityDescriptor = BOOK, endpoints: tuple[EndpointDescriptor, ...] = BOOK_ENDPOINTS) -> dict[ArtifactKind, str]:
    return {a.kind: a.content for a in EMITTER.emit(entity, endpoints)}


# ---------------------------------------------------------------------------
# Artifact family
# ---------------------------------------------------------------------------


class TestArtifactFamily:
    def test_fixed_order_and_paths(self) -> None:
        artifacts = EMITTER.emit(BOOK, BOOK_ENDPOINTS)
        assert [a.path for a in artifacts] == [
            "src/main/java/com/example/bookapi/entity/Book.java",
            "src/main/java/com/example/bookapi/dto/BookDTO.java",
            "src/main/java/com/example/bookapi/repository/BookRepository.java",
            "src/main/java/com/example/bookapi/service/BookService.java",
            "src/main/java/com/example/bookapi/service/BookServiceImpl.java",
            "src/main/java/com/example/bookapi/controller/BookController.java",
            "src/test/java/com/example/bookapi/controller/BookControllerTest.java",
        ]

    def test_emission_is_deterministic(self) -> None:
        assert EMITTER.emit(BOOK, BOOK_ENDPOINTS) == TemplateEmitter(NAMING).emit(BOOK, BOOK_ENDPOINTS)

    def test_every_artifact_uses_the_package(self) -> None:
        for content in _by_kind().values():
            assert content.startswith("package com.example.bookapi.")

    def test_field_order_with_injected_identity(self) -> None:
        entity = _by_kind()[ArtifactKind.ENTITY]
        positions = [entity.index(decl) for decl in ("private Long id;", "private String title;", "private Long year;")]
        assert positions == sorted(positions)
        assert entity.count("@Id") == 1
        assert entity.index("@Id") < entity.index("private Long id;")

    def test_dto_has_one_accessor_pair_per_field(self) -> None:
        dto = _by_kind()[ArtifactKind.DTO]
        for name in ("Id", "Title", "Year"):
            assert dto.count(f"get{name}()") == 1
            assert dto.count(f"set{name}(") == 1

    def test_repository_uses_identity_type(self) -> None:
        entity = EntityDescriptor.build("Tag", [("id", CanonicalFieldType.TEXT)])
        repo = _by_kind(entity, ())[ArtifactKind.REPOSITORY]
        assert "JpaRepository<Tag, String>" in repo

    def test_to_record_skips_identity_only(self) -> None:
        impl = _by_kind()[ArtifactKind.SERVICE_IMPL]
        to_transfer = impl[impl.index("toTransfer(Book entity)"):impl.index("toRecord(BookDTO dto)")]
        to_record = impl[impl.index("toRecord(BookDTO dto)"):]
        assert "dto.setId(entity.getId());" in to_transfer
        assert "setId(" not in to_record
        assert to_record.index("entity.setTitle(dto.getTitle());") < to_record.index("entity.setYear(dto.getYear());")

    def test_controller_has_one_route_per_kind(self) -> None:
        controller = _by_kind()[ArtifactKind.CONTROLLER]
        assert '@RequestMapping("/api/books")' in controller
        assert controller.count("@PostMapping") == 1
        assert controller.count("@GetMapping") == 2
        assert controller.count("@DeleteMapping") == 1
        assert "// List all books" in controller
        assert controller.index("getAllBooks") < controller.index("createBook") < controller.index("getBookById")

    def test_controller_test_has_one_case_per_route(self) -> None:
        test = _by_kind()[ArtifactKind.CONTROLLER_TEST]
        assert test.count("@Test") == 4
        assert "Placeholder for DELETE /api/books/{id}: no assertions yet." in test

    def test_uppercase_id_is_not_duplicated(self) -> None:
        entity = EntityDescriptor.build("Book", [("ID", CanonicalFieldType.INTEGER), ("title", CanonicalFieldType.TEXT)])
        views = field_views(entity)
        assert [v.name for v in views] == ["ID", "title"]
        assert [v.is_identity for v in views] == [True, False]
        assert "private Long id;" not in _by_kind(entity, ())[ArtifactKind.ENTITY]

    @settings(max_examples=25, deadline=None)
    @given(
        st.lists(
            st.from_regex(r"[a-z][a-zA-Z0-9]{0,8}", fullmatch=True).filter(lambda s: s.lower() != "id"),
            min_size=1,
            max_size=6,
            unique=True,
        )
    )
    def test_declaration_order_follows_descriptor(self, names: list[str]) -> None:
        entity = EntityDescriptor.build("Item", [(n, CanonicalFieldType.TEXT) for n in names])
        content = _by_kind(entity, ())[ArtifactKind.ENTITY]
        positions = [content.index(f"private String {n};") for n in names]
        assert positions == sorted(positions)
        assert content.index("private Long id;") < positions[0]


# ---------------------------------------------------------------------------
# Project settings and scaffold
# ---------------------------------------------------------------------------


class TestProjectSettings:
    def test_metadata_name_wins(self) -> None:
        name = derive_project_name(metadata={"projectName": "Library"}, schema={"info": {"title": "Book API"}})
        assert name == "Library"

    def test_schema_title_without_whitespace(self) -> None:
        assert derive_project_name(metadata=None, schema={"info": {"title": "Book  API\n"}}) == "BookAPI"

    def test_default_name(self) -> None:
        assert derive_project_name(metadata={}, schema=None) == "GeneratedProject"

    def test_default_package(self) -> None:
        assert default_package_name("BookAPI") == "com.example.bookapi"
        assert default_package_name("My-Shop") == "com.example.myshop"
        assert default_package_name("123Shop") == "com.example._123shop"

    def test_explicit_package(self) -> None:
        assert derive_package_name("BookAPI", {"packageName": "org.acme.books"}) == "org.acme.books"

    def test_invalid_explicit_package_falls_back_with_gap(self) -> None:
        gaps = GapCollector()
        assert derive_package_name("BookAPI", {"packageName": "org.acme-books"}, gaps=gaps) == "com.example.bookapi"
        assert gaps.all() == (
            "Output preference packageName 'org.acme-books' is not a valid package name; using 'com.example.bookapi'",
        )

    def test_settings(self) -> None:
        s = derive_project_settings(metadata=None, schema={"info": {"title": "Book API"}}, output_prefs={})
        assert s == ProjectSettings(project_name="BookAPI", package_name="com.example.bookapi")
        assert s.application_class == "BookAPIApplication"

    @pytest.mark.parametrize(
        ("metadata", "schema", "expected"),
        [
            ({"projectName": 123}, None, "_123Application"),
            (None, {"info": {"title": "3D Print API"}}, "_3DPrintAPIApplication"),
        ],
    )
    def test_application_class_never_starts_with_digit(
        self, metadata: dict[str, object] | None, schema: dict[str, object] | None, expected: str
    ) -> None:
        s = derive_project_settings(metadata=metadata, schema=schema, output_prefs={})
        assert s.application_class == expected

    def test_artifact_id_has_no_spaces(self) -> None:
        s = derive_project_settings(metadata={"projectName": "my shop"}, schema=None, output_prefs={})
        assert s.artifact_id == "my-shop"
        pom = ProjectScaffolder(s).build_files()[0].content
        assert "<artifactId>my-shop</artifactId>" in pom


class TestScaffold:
    def test_build_files(self) -> None:
        scaffolder = ProjectScaffolder(ProjectSettings("BookAPI", "com.example.bookapi"))
        files = scaffolder.build_files()
        assert [f.path for f in files] == [
            "pom.xml",
            "src/main/resources/application.properties",
            "src/main/java/com/example/bookapi/BookAPIApplication.java",
        ]
        assert "<artifactId>bookapi</artifactId>" in files[0].content
        assert "public class BookAPIApplication" in files[2].content

    def test_readme_lists_entities_and_gaps(self) -> None:
        scaffolder = ProjectScaffolder(ProjectSettings("BookAPI", "com.example.bookapi"))
        readme = scaffolder.readme(["Book", "Task"], ["gap one"])
        assert readme.path == "README.md"
        assert "- Book\n- Task\n" in readme.content
        assert "- gap one" in readme.content

    def test_gap_report(self) -> None:
        scaffolder = ProjectScaffolder(ProjectSettings("BookAPI", "com.example.bookapi"))
        report = scaffolder.gap_report([])
        assert report.path == "GAP_REPORT.md"
        assert "No Gaps Found" in report.content

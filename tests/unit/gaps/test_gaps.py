"""Tests for gap collection, validation checks and report rendering."""

from __future__ import annotations

import pytest

from specsmith.data.descriptors import CanonicalFieldType, EndpointDescriptor, EntityDescriptor, HttpMethod
from specsmith.gaps.checks import (
    IDL_NOT_COMPILED,
    NO_SOURCES,
    check_duplicate_entities,
    check_endpoint_completeness,
    check_entity_completeness,
    check_missing_sources,
    record_decode_failure,
    record_opaque_idl,
)
from specsmith.gaps.collector import GapCollector
from specsmith.gaps.report import NO_GAPS_STATUS, is_complete_report, render_gap_report

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Collector
# ---------------------------------------------------------------------------


class TestGapCollector:
    def test_keeps_insertion_order_without_dedup(self) -> None:
        gaps = GapCollector()
        for message in ("A", "B", "A", "C"):
            gaps.record(message)
        assert gaps.all() == ("A", "B", "A", "C")
        assert len(gaps) == 4

    def test_snapshot_is_detached(self) -> None:
        gaps = GapCollector()
        gaps.record("A")
        snapshot = gaps.all()
        gaps.record("B")
        assert snapshot == ("A",)

    def test_is_empty(self) -> None:
        gaps = GapCollector()
        assert gaps.is_empty()
        gaps.record("x")
        assert not gaps.is_empty()


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


class TestChecks:
    def test_entity_without_fields_or_identity(self) -> None:
        gaps = GapCollector()
        check_entity_completeness(gaps, EntityDescriptor("Tag"))
        assert gaps.all() == (
            "Entity 'Tag' has no fields defined",
            "Entity 'Tag' does not have an explicit 'id' field (auto-generated)",
        )

    def test_entity_with_uppercase_id_is_complete(self) -> None:
        gaps = GapCollector()
        check_entity_completeness(gaps, EntityDescriptor.build("Tag", [("ID", CanonicalFieldType.INTEGER)]))
        assert gaps.is_empty()

    def test_endpoint_without_summary(self) -> None:
        gaps = GapCollector()
        check_endpoint_completeness(gaps, EndpointDescriptor("/books/{id}", HttpMethod.GET))
        check_endpoint_completeness(gaps, EndpointDescriptor("/books", HttpMethod.GET, "List"))
        assert gaps.all() == ("Endpoint GET /books/{id} lacks a summary/description",)

    def test_missing_sources(self) -> None:
        gaps = GapCollector()
        check_missing_sources(gaps, has_schema=False, has_idl=False, has_domain_model=False)
        check_missing_sources(gaps, has_schema=False, has_idl=True, has_domain_model=False)
        assert gaps.all() == (NO_SOURCES,)

    def test_decode_failure_uses_source_label(self) -> None:
        gaps = GapCollector()
        record_decode_failure(gaps, "openapi", "bad token")
        record_decode_failure(gaps, "domain", "bad indent")
        record_opaque_idl(gaps)
        assert gaps.all() == (
            "Failed to parse OpenAPI specification: bad token",
            "Failed to parse domain model: bad indent",
            IDL_NOT_COMPILED,
        )

    def test_duplicates_flagged_once_per_name(self) -> None:
        gaps = GapCollector()
        entities = [EntityDescriptor("Book"), EntityDescriptor("Task"), EntityDescriptor("Book"), EntityDescriptor("Book")]
        check_duplicate_entities(gaps, entities)
        assert gaps.all() == (
            "Entity 'Book' is defined 3 times; all definitions were generated in source order",
        )


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------


class TestReport:
    def test_empty_report_is_complete(self) -> None:
        report = render_gap_report([])
        assert NO_GAPS_STATUS in report
        assert is_complete_report(report)
        assert "1." not in report

    def test_numbered_in_insertion_order(self) -> None:
        report = render_gap_report(["A", "B", "A"])
        assert "## Status: 3 Gap(s) Identified" in report
        assert report.endswith("1. A\n2. B\n3. A\n")
        assert not is_complete_report(report)

    def test_gap_quoting_the_status_line_is_not_complete(self) -> None:
        report = render_gap_report([f"Template emitted '{NO_GAPS_STATUS}' verbatim"])
        assert NO_GAPS_STATUS in report
        assert not is_complete_report(report)

    def test_no_timestamp_unless_given(self) -> None:
        assert "Generated:" not in render_gap_report(["A"])
        assert "Generated: 2024-01-01T00:00:00" in render_gap_report(["A"], generated_at="2024-01-01T00:00:00")

    def test_rendering_is_deterministic(self) -> None:
        assert render_gap_report(["x", "y"]) == render_gap_report(("x", "y"))

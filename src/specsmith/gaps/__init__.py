"""Gap collection: ordered diagnostics, validation checks, and report rendering."""

from .checks import (
    IDL_NOT_COMPILED,
    NO_SOURCES,
    check_duplicate_entities,
    check_endpoint_completeness,
    check_entity_completeness,
    check_missing_sources,
    record_decode_failure,
    record_opaque_idl,
)
from .collector import GapCollector
from .report import NO_GAPS_STATUS, is_complete_report, render_gap_report

__all__ = [
    "GapCollector",
    "IDL_NOT_COMPILED",
    "NO_GAPS_STATUS",
    "NO_SOURCES",
    "check_duplicate_entities",
    "check_endpoint_completeness",
    "check_entity_completeness",
    "check_missing_sources",
    "is_complete_report",
    "record_decode_failure",
    "record_opaque_idl",
    "render_gap_report",
]

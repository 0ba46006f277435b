# src/specsmith/data/result.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class RunStatus(str, Enum):
    """Lifecycle of one pipeline run.

    Status meanings:
    - IDLE: Nothing has happened yet.
    - SOURCES_LOADED: Supplied sources were decoded; failures were recorded as gaps.
    - NORMALIZED: Entity and endpoint descriptors were extracted.
    - VALIDATED: Every descriptor went through the gap checks.
    - EMITTING: Artifacts are being rendered and written.
    - DONE: The result was assembled.
    - FAILED: Emission failed for an entity; the run was aborted.
    """

    IDLE = "IDLE"
    SOURCES_LOADED = "SOURCES_LOADED"
    NORMALIZED = "NORMALIZED"
    VALIDATED = "VALIDATED"
    EMITTING = "EMITTING"
    DONE = "DONE"
    FAILED = "FAILED"


class ArtifactKind(str, Enum):
    ENTITY = "entity"
    DTO = "dto"
    REPOSITORY = "repository"
    SERVICE = "service"
    SERVICE_IMPL = "service_impl"
    CONTROLLER = "controller"
    CONTROLLER_TEST = "controller_test"
    SCAFFOLD = "scaffold"
    REPORT = "report"
    AI_OUTPUT = "ai_output"


@dataclass(frozen=True, slots=True)
class Artifact:
    """One generated output unit: a relative path and its text content."""

    path: str
    content: str
    kind: ArtifactKind


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Aggregate handed back to the caller once per pipeline run."""

    output_root: Path | None
    entities: tuple[str, ...]
    gaps: tuple[str, ...]
    artifacts: tuple[str, ...] = ()
    status: RunStatus = RunStatus.DONE

    def to_dict(self) -> dict[str, object]:
        """Converts the result into a JSON/YAML-serializable mapping."""
        return {
            "output_root": str(self.output_root) if self.output_root is not None else None,
            "status": self.status.value,
            "entities": list(self.entities),
            "gaps": list(self.gaps),
            "artifacts": list(self.artifacts),
        }

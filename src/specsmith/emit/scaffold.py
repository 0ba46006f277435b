# src/specsmith/emit/scaffold.py
from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ..constants import (
    DEFAULT_PACKAGE_PREFIX,
    DEFAULT_PROJECT_NAME,
    GAP_REPORT_FILE_NAME,
    MAIN_SOURCE_ROOT,
    README_FILE_NAME,
    RESOURCES_ROOT,
)
from ..data.json_value import get_path
from ..data.result import Artifact, ArtifactKind
from ..gaps.collector import GapCollector
from ..gaps.report import render_gap_report
from .naming import NamingContext, is_valid_package_name
from .renderer import TemplateRenderer

_WHITESPACE_RE = re.compile(r"\s+")
_NON_IDENT_RE = re.compile(r"\W")
_ARTIFACT_ID_RE = re.compile(r"[^a-z0-9_.-]+")


@dataclass(frozen=True, slots=True)
class ProjectSettings:
    """Project-level names every scaffold file is rendered with."""

    project_name: str
    package_name: str

    @property
    def naming(self) -> NamingContext:
        return NamingContext(package_name=self.package_name)

    @property
    def application_class(self) -> str:
        base = _NON_IDENT_RE.sub("", self.project_name) or DEFAULT_PROJECT_NAME
        if base[0].isdigit():
            base = f"_{base}"
        return f"{base}Application"

    @property
    def artifact_id(self) -> str:
        """Lowercased project name with runs of characters Maven rejects turned into '-'."""
        return _ARTIFACT_ID_RE.sub("-", self.project_name.lower()).strip("-") or DEFAULT_PROJECT_NAME.lower()


def derive_project_name(
    *,
    metadata: Mapping[str, object] | None,
    schema: Mapping[str, object] | None,
) -> str:
    """metadata.projectName, else the schema's info.title without whitespace, else a default."""
    from_metadata = get_path(metadata, "projectName")
    if from_metadata is not None and str(from_metadata).strip():
        return str(from_metadata).strip()
    title = get_path(schema, "info", "title")
    if title is not None:
        compact = _WHITESPACE_RE.sub("", str(title))
        if compact:
            return compact
    return DEFAULT_PROJECT_NAME


def default_package_name(project_name: str) -> str:
    segment = re.sub(r"[^a-z0-9_]", "", project_name.lower()) or DEFAULT_PROJECT_NAME.lower()
    if segment[0].isdigit():
        segment = f"_{segment}"
    return f"{DEFAULT_PACKAGE_PREFIX}.{segment}"


def derive_package_name(
    project_name: str,
    output_prefs: Mapping[str, object] | None,
    *,
    gaps: GapCollector | None = None,
) -> str:
    """outputprefs.packageName, else com.example.<project name lowercased>.

    An explicit package name that is not a valid dotted identifier is ignored
    and, when a collector is given, reported as a gap.
    """
    explicit = get_path(output_prefs, "packageName")
    if explicit is not None and str(explicit).strip():
        candidate = str(explicit).strip()
        if is_valid_package_name(candidate):
            return candidate
        fallback = default_package_name(project_name)
        if gaps is not None:
            gaps.record(f"Output preference packageName '{candidate}' is not a valid package name; using '{fallback}'")
        return fallback
    return default_package_name(project_name)


def derive_project_settings(
    *,
    metadata: Mapping[str, object] | None,
    schema: Mapping[str, object] | None,
    output_prefs: Mapping[str, object] | None,
    gaps: GapCollector | None = None,
) -> ProjectSettings:
    project_name = derive_project_name(metadata=metadata, schema=schema)
    return ProjectSettings(
        project_name=project_name,
        package_name=derive_package_name(project_name, output_prefs, gaps=gaps),
    )


class ProjectScaffolder:
    """Renders the project-level files surrounding the per-entity artifacts."""

    def __init__(self, settings: ProjectSettings, *, renderer: TemplateRenderer | None = None) -> None:
        self.settings = settings
        self.renderer = renderer or TemplateRenderer()

    def _vars(self) -> dict[str, object]:
        return {
            "project_name": self.settings.project_name,
            "artifact_id": self.settings.artifact_id,
            "package": self.settings.package_name,
            "class_name": self.settings.application_class,
        }

    def build_files(self) -> tuple[Artifact, ...]:
        package_path = self.settings.naming.package_path
        v = self._vars()
        return (
            Artifact("pom.xml", self.renderer.render("project/pom.xml.j2", v), ArtifactKind.SCAFFOLD),
            Artifact(
                f"{RESOURCES_ROOT}/application.properties",
                self.renderer.render("project/application.properties.j2", v),
                ArtifactKind.SCAFFOLD,
            ),
            Artifact(
                f"{MAIN_SOURCE_ROOT}/{package_path}/{self.settings.application_class}.java",
                self.renderer.render("project/Application.java.j2", v),
                ArtifactKind.SCAFFOLD,
            ),
        )

    def readme(self, entities: Sequence[str], gaps: Sequence[str]) -> Artifact:
        v = {**self._vars(), "entities": list(entities), "gaps": list(gaps)}
        return Artifact(README_FILE_NAME, self.renderer.render("project/README.md.j2", v), ArtifactKind.REPORT)

    def gap_report(self, gaps: Sequence[str]) -> Artifact:
        return Artifact(GAP_REPORT_FILE_NAME, render_gap_report(gaps), ArtifactKind.REPORT)

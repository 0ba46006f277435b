# src/specsmith/store.py
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from .data.result import Artifact
from .errors import EmissionError


@dataclass(frozen=True, slots=True)
class ArtifactRef:
    """What was written for one artifact (path relative to the output root)."""

    relpath: str
    sha256: str
    bytes: int


def _sha256_bytes(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _safe_relpath(relpath: str) -> PurePosixPath:
    p = PurePosixPath(relpath.replace("\\", "/"))
    if p.is_absolute() or not p.parts or ".." in p.parts:
        raise EmissionError("Artifact path escapes the output root", data={"relpath": relpath})
    return p


class ArtifactStore:
    """Defines the persistence contract for generated artifacts."""

    @property
    def output_root(self) -> Path | None: ...

    def write(self, artifact: Artifact) -> ArtifactRef: ...

    def read(self, relpath: str) -> str | None: ...


class FileArtifactStore:
    """Writes artifacts under an output root directory.

    Layout mirrors the artifact paths, e.g.
      <output_root>/pom.xml
      <output_root>/src/main/java/<package path>/entity/<Entity>.java
      <output_root>/GAP_REPORT.md
    """

    def __init__(self, *, output_root: str | Path) -> None:
        self._root = Path(output_root).resolve()

    @property
    def output_root(self) -> Path:
        return self._root

    def write(self, artifact: Artifact) -> ArtifactRef:
        rel = _safe_relpath(artifact.path)
        payload = artifact.content.encode("utf-8")
        out_path = self._root.joinpath(*rel.parts)
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_bytes(payload)
        except OSError as e:
            raise EmissionError(
                f"Failed to write {artifact.path}: {e}",
                data={"relpath": artifact.path, "error": f"{type(e).__name__}: {e}"},
            ) from e
        return ArtifactRef(relpath=str(rel), sha256=_sha256_bytes(payload), bytes=len(payload))

    def read(self, relpath: str) -> str | None:
        p = self._root.joinpath(*_safe_relpath(relpath).parts)
        if not p.exists():
            return None
        return p.read_text(encoding="utf-8")


class MemoryArtifactStore:
    """Keeps artifacts in memory for unit tests and dry runs (e.g. `specsmith report`)."""

    def __init__(self) -> None:
        self._files: dict[str, str] = {}
        self._order: list[str] = []

    @property
    def output_root(self) -> Path | None:
        return None

    def write(self, artifact: Artifact) -> ArtifactRef:
        rel = str(_safe_relpath(artifact.path))
        payload = artifact.content.encode("utf-8")
        self._files[rel] = artifact.content
        self._order.append(rel)
        return ArtifactRef(relpath=rel, sha256=_sha256_bytes(payload), bytes=len(payload))

    def read(self, relpath: str) -> str | None:
        return self._files.get(str(_safe_relpath(relpath)))

    @property
    def files(self) -> dict[str, str]:
        """Final content per path (a later write to the same path wins)."""
        return dict(self._files)

    @property
    def write_order(self) -> tuple[str, ...]:
        return tuple(self._order)

"""specsmith: generate Spring Boot project skeletons from API specifications."""

from .data.result import GenerationResult, RunStatus
from .pipeline import GenerationPipeline
from .sources import decode_sources, load_sources
from .store import FileArtifactStore, MemoryArtifactStore

__version__ = "0.1.0"

__all__ = [
    "FileArtifactStore",
    "GenerationPipeline",
    "GenerationResult",
    "MemoryArtifactStore",
    "RunStatus",
    "decode_sources",
    "load_sources",
]

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class SpecsmithError(RuntimeError):
    """Represents an expected, structured failure raised by the generator.

    The optional data payload carries machine-readable context (source name,
    entity name, partial gap list) so callers can report failures consistently.
    """

    message: str
    data: dict[str, object] | None = None

    def __str__(self) -> str:
        return self.message


class SourceDecodeError(SpecsmithError):
    """One supplied specification document could not be decoded.

    Recovered locally: the source is treated as absent and a gap is recorded.
    """


class EmissionError(SpecsmithError):
    """Artifacts for one entity could not be materialized. Fatal to the run."""


class ConfigError(SpecsmithError):
    """Settings file or environment values are invalid."""


class LLMError(SpecsmithError):
    """The completion collaborator failed (network, provider, or empty response).

    Recovered by the pipeline as a gap.
    """

# src/specsmith/pipeline.py
from __future__ import annotations

import logging
from collections.abc import Sequence

from .constants import (
    AI_RESPONSE_FILE_NAME,
    GAP_REPORT_FILE_NAME,
    SOURCE_DOMAIN,
    SOURCE_GRAPHQL,
    SOURCE_METADATA,
    SOURCE_OPENAPI,
    SOURCE_OUTPUT_PREFS,
)
from .data.descriptors import EndpointDescriptor, EntityDescriptor, SpecSources
from .data.result import Artifact, ArtifactKind, GenerationResult, RunStatus
from .emit.emitter import TemplateEmitter
from .emit.renderer import TemplateRenderer
from .emit.routes import related_endpoints
from .emit.scaffold import ProjectScaffolder, ProjectSettings, derive_project_settings
from .errors import EmissionError, LLMError, SpecsmithError
from .gaps.checks import (
    check_duplicate_entities,
    check_endpoint_completeness,
    check_entity_completeness,
    check_missing_sources,
    record_decode_failure,
    record_opaque_idl,
)
from .gaps.collector import GapCollector
from .gaps.report import render_gap_report
from .llm.llm_client import CompletionClient
from .llm.prompts import ProjectGenerationPrompt
from .llm.response import parse_file_mapping
from .normalize.extractors import (
    extract_endpoints_from_schema,
    extract_entities_from_domain_model,
    extract_entities_from_schema,
)
from .store import ArtifactStore

logger = logging.getLogger(__name__)

NO_LLM_CONFIGURED = "AI mode requested but no LLM client is configured"


class GenerationPipeline:
    """Drives one generation run from decoded sources to written artifacts.

    The deterministic path walks IDLE -> SOURCES_LOADED -> NORMALIZED ->
    VALIDATED -> EMITTING -> DONE. Gaps accumulate in one collector per run and
    never stop the run; only an emission failure does (state FAILED, raised as
    EmissionError carrying the gaps recorded so far).

    AI mode skips normalization and emission entirely: the source texts go to
    the completion collaborator in one prompt and its reply is written as-is.
    """

    def __init__(
        self,
        store: ArtifactStore,
        *,
        llm: CompletionClient | None = None,
        renderer: TemplateRenderer | None = None,
        prompt: ProjectGenerationPrompt | None = None,
    ) -> None:
        self.store = store
        self.llm = llm
        self.renderer = renderer or TemplateRenderer()
        self.prompt = prompt or ProjectGenerationPrompt()
        self.status = RunStatus.IDLE

    def _set_status(self, status: RunStatus) -> None:
        logger.info("pipeline: %s -> %s", self.status.value, status.value)
        self.status = status

    # -------------------- public entrypoint --------------------

    def run(self, sources: SpecSources, *, ai_mode: bool = False) -> GenerationResult:
        self.status = RunStatus.IDLE
        gaps = GapCollector()
        written: list[str] = []

        if ai_mode:
            return self._run_ai(sources, gaps, written)

        self._load(sources, gaps)
        self._set_status(RunStatus.SOURCES_LOADED)

        settings = derive_project_settings(
            metadata=sources.metadata,
            schema=sources.schema,
            output_prefs=sources.output_prefs,
            gaps=gaps,
        )
        entities, endpoints = self._normalize(sources)
        self._set_status(RunStatus.NORMALIZED)
        logger.info("Normalized %d entities and %d endpoints", len(entities), len(endpoints))

        self._validate(entities, endpoints, gaps)
        self._set_status(RunStatus.VALIDATED)

        self._set_status(RunStatus.EMITTING)
        self._emit(settings, entities, endpoints, gaps, written)

        self._set_status(RunStatus.DONE)
        return GenerationResult(
            output_root=self.store.output_root,
            entities=tuple(e.name for e in entities),
            gaps=gaps.all(),
            artifacts=tuple(written),
            status=self.status,
        )

    # -------------------- stages --------------------

    def _load(self, sources: SpecSources, gaps: GapCollector) -> None:
        def supplied(source: str, decoded: object) -> bool:
            return decoded is not None or sources.supplied(source)

        check_missing_sources(
            gaps,
            has_schema=supplied(SOURCE_OPENAPI, sources.schema),
            has_idl=supplied(SOURCE_GRAPHQL, sources.idl),
            has_domain_model=supplied(SOURCE_DOMAIN, sources.domain_model),
        )

        failures = dict(sources.decode_failures)
        for source in (SOURCE_OPENAPI, SOURCE_GRAPHQL, SOURCE_DOMAIN, SOURCE_METADATA, SOURCE_OUTPUT_PREFS):
            if source in failures:
                record_decode_failure(gaps, source, failures[source])
            elif source == SOURCE_GRAPHQL and sources.idl is not None:
                record_opaque_idl(gaps)

    def _normalize(self, sources: SpecSources) -> tuple[list[EntityDescriptor], list[EndpointDescriptor]]:
        entities = [
            *extract_entities_from_schema(sources.schema),
            *extract_entities_from_domain_model(sources.domain_model),
        ]
        endpoints = extract_endpoints_from_schema(sources.schema)
        return entities, endpoints

    def _validate(
        self,
        entities: Sequence[EntityDescriptor],
        endpoints: Sequence[EndpointDescriptor],
        gaps: GapCollector,
    ) -> None:
        for entity in entities:
            check_entity_completeness(gaps, entity)
        for endpoint in endpoints:
            check_endpoint_completeness(gaps, endpoint)
        check_duplicate_entities(gaps, entities)

    def _write(self, artifact: Artifact, written: list[str]) -> None:
        ref = self.store.write(artifact)
        written.append(ref.relpath)

    def _fail(self, message: str, gaps: GapCollector, *, entity: str | None, cause: BaseException) -> EmissionError:
        self._set_status(RunStatus.FAILED)
        logger.error("Emission failed%s: %s", f" for {entity}" if entity else "", cause)
        return EmissionError(message, data={"entity": entity, "gaps": list(gaps.all()), "error": str(cause)})

    def _emit(
        self,
        settings: ProjectSettings,
        entities: Sequence[EntityDescriptor],
        endpoints: Sequence[EndpointDescriptor],
        gaps: GapCollector,
        written: list[str],
    ) -> None:
        scaffolder = ProjectScaffolder(settings, renderer=self.renderer)
        try:
            for artifact in scaffolder.build_files():
                self._write(artifact, written)
        except (SpecsmithError, OSError, ValueError) as e:
            raise self._fail(f"Failed to write project scaffold: {e}", gaps, entity=None, cause=e) from e

        emitter = TemplateEmitter(settings.naming, renderer=self.renderer)
        for entity in entities:
            logger.info("Emitting artifacts for entity %s", entity.name)
            try:
                for artifact in emitter.emit(entity, related_endpoints(entity, endpoints)):
                    self._write(artifact, written)
            except (SpecsmithError, OSError, ValueError) as e:
                raise self._fail(
                    f"Failed to emit artifacts for entity '{entity.name}': {e}",
                    gaps,
                    entity=entity.name,
                    cause=e,
                ) from e

        final_gaps = gaps.all()
        try:
            self._write(scaffolder.readme([e.name for e in entities], final_gaps), written)
            self._write(scaffolder.gap_report(final_gaps), written)
        except (SpecsmithError, OSError, ValueError) as e:
            raise self._fail(f"Failed to write reports: {e}", gaps, entity=None, cause=e) from e

    # -------------------- AI mode --------------------

    def _run_ai(self, sources: SpecSources, gaps: GapCollector, written: list[str]) -> GenerationResult:
        if self.llm is None:
            gaps.record(NO_LLM_CONFIGURED)
        else:
            self._generate_with_llm(self.llm, sources, gaps, written)

        report = Artifact(GAP_REPORT_FILE_NAME, render_gap_report(gaps.all()), ArtifactKind.REPORT)
        try:
            self._write(report, written)
        except (SpecsmithError, OSError) as e:
            raise self._fail(f"Failed to write reports: {e}", gaps, entity=None, cause=e) from e

        self._set_status(RunStatus.DONE)
        return GenerationResult(
            output_root=self.store.output_root,
            entities=(),
            gaps=gaps.all(),
            artifacts=tuple(written),
            status=self.status,
        )

    def _generate_with_llm(
        self,
        llm: CompletionClient,
        sources: SpecSources,
        gaps: GapCollector,
        written: list[str],
    ) -> None:
        prompt = self.prompt.text(sources.raw_texts)
        logger.info("AI mode: sending %d source(s) to the LLM", len(sources.raw_texts))
        try:
            reply = llm.complete(prompt)
        except LLMError as e:
            logger.warning("LLM call failed: %s", e)
            gaps.record(f"OpenAI API call failed: {e}")
            return

        try:
            self._write(Artifact(AI_RESPONSE_FILE_NAME, reply, ArtifactKind.AI_OUTPUT), written)
        except EmissionError as e:
            raise self._fail(f"Failed to write {AI_RESPONSE_FILE_NAME}: {e}", gaps, entity=None, cause=e) from e

        try:
            files = parse_file_mapping(reply)
        except LLMError as e:
            logger.warning("LLM reply could not be parsed: %s", e)
            gaps.record(str(e))
            return

        for path, content in files.items():
            try:
                self._write(Artifact(path, content, ArtifactKind.AI_OUTPUT), written)
            except EmissionError as e:
                logger.warning("Skipped LLM file %s: %s", path, e)
                gaps.record(f"AI response file '{path}' was not written: {e}")
        logger.info("AI mode wrote %d file(s)", len(files))

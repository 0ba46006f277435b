# src/specsmith/app/upload_ui.py
from __future__ import annotations

import time
from pathlib import Path

import streamlit as st
import yaml

from specsmith.config import GeneratorSettings, load_settings
from specsmith.constants import ALL_SOURCES, GAP_REPORT_FILE_NAME, SOURCE_LABELS, SPEC_SOURCES
from specsmith.data.result import GenerationResult
from specsmith.errors import ConfigError, EmissionError
from specsmith.llm.factory import build_completion_client
from specsmith.pipeline import GenerationPipeline
from specsmith.sources import decode_sources
from specsmith.store import FileArtifactStore

_UPLOAD_TYPES = {
    "openapi": ["json", "yaml", "yml"],
    "graphql": ["graphql", "graphqls", "gql", "txt"],
    "domain": ["yaml", "yml"],
    "metadata": ["yaml", "yml"],
    "outputprefs": ["yaml", "yml"],
}


def _read_text(path: Path) -> str:
    if not path.exists():
        return ""
    return path.read_text(encoding="utf-8", errors="replace")


def _settings() -> GeneratorSettings:
    overrides = {
        "llm_provider": st.session_state.get("llm_provider"),
        "llm_model": st.session_state.get("llm_model"),
        "llm_timeout_s": st.session_state.get("llm_timeout_s"),
    }
    return load_settings(overrides=overrides)


def _uploaded_texts() -> dict[str, tuple[str, str]]:
    texts: dict[str, tuple[str, str]] = {}
    for source in ALL_SOURCES:
        f = st.session_state.get(f"upload_{source}")
        if f is None:
            continue
        texts[source] = (f.name, f.getvalue().decode("utf-8", errors="replace"))
    return texts


def _output_dir(base: str) -> Path:
    # One fresh directory per run, as the upload form always did.
    return Path(base).expanduser().resolve() / f"project-{int(time.time() * 1000)}"


def _run(*, base_dir: str, ai_mode: bool) -> GenerationResult:
    settings = _settings()
    sources = decode_sources(_uploaded_texts())
    store = FileArtifactStore(output_root=_output_dir(base_dir))
    llm = build_completion_client(settings) if ai_mode else None
    return GenerationPipeline(store, llm=llm).run(sources, ai_mode=ai_mode)


def _render_result(result: GenerationResult) -> None:
    st.subheader("Run result")
    if result.gaps:
        st.warning(f"Found {len(result.gaps)} gap(s) - see {GAP_REPORT_FILE_NAME}")
    else:
        st.success("No gaps found.")

    st.code(yaml.safe_dump(result.to_dict(), sort_keys=False, allow_unicode=True), language="yaml")

    if result.output_root is not None:
        st.caption(f"Output root: {result.output_root}")
        report = _read_text(result.output_root / GAP_REPORT_FILE_NAME)
        if report:
            with st.expander(GAP_REPORT_FILE_NAME, expanded=bool(result.gaps)):
                st.markdown(report)


def main() -> None:
    st.set_page_config(page_title="specsmith", layout="wide")
    st.title("Spec to Spring Boot generator")

    with st.sidebar:
        st.header("Output")
        base_dir = st.text_input("output base directory", value=str(Path("generated").resolve()))

        st.divider()
        st.header("AI mode")
        ai_mode = st.checkbox("Generate with the LLM instead of templates", value=False)
        st.selectbox("provider", options=["openai", "ollama"], key="llm_provider")
        st.text_input("model", value=st.session_state.get("llm_model", "gpt-4o-mini"), key="llm_model")
        st.number_input("timeout_s", min_value=5.0, max_value=600.0, value=60.0, step=5.0, key="llm_timeout_s")

    st.caption("Provide at least one of: " + ", ".join(SOURCE_LABELS[s] for s in SPEC_SOURCES))
    for source in ALL_SOURCES:
        st.file_uploader(SOURCE_LABELS[source], type=_UPLOAD_TYPES[source], key=f"upload_{source}")

    if st.button("Generate"):
        try:
            st.session_state["last_result"] = _run(base_dir=base_dir, ai_mode=ai_mode)
        except ConfigError as e:
            st.error(f"Invalid configuration: {e}")
        except EmissionError as e:
            st.error(f"Generation failed: {e}")
            gaps = (e.data or {}).get("gaps") or []
            if gaps:
                st.code("\n".join(str(g) for g in gaps))

    if "last_result" in st.session_state:
        _render_result(st.session_state["last_result"])


if __name__ == "__main__":
    main()

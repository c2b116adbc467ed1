"""
Job Data Extractor: Streamlit frontend.
No business logic in layout; extraction, structuring and reporting live in agents/services.
"""

import asyncio
from typing import Coroutine, List

import streamlit as st

from job_sheet_ai.agents.pipeline import export_batch, generate_job_description, preview_url
from job_sheet_ai.config import OPENROUTER_API_KEY
from job_sheet_ai.errors import BatchExportError, FetchError, GenerationError, RequestValidationError
from job_sheet_ai.schemas.payloads import BatchRequest, GenerationRequest, PreviewRequest


def _run(coro: Coroutine):
    """Run a coroutine on a fresh event loop (Streamlit reruns the script synchronously)."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _parse_urls(text: str) -> List[str]:
    """One URL per line; blank lines ignored, order kept."""
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def _render_preview(urls: List[str], api_key: str) -> None:
    if not urls:
        st.warning("Enter at least one URL to preview.")
        return
    with st.spinner("Fetching and extracting the first URL…"):
        try:
            result = _run(preview_url(PreviewRequest(url=urls[0], api_key=api_key or None)))
        except (FetchError, RequestValidationError) as e:
            st.error(f"Failed to fetch URL: {e.message}")
            return

    raw = result.raw_data
    st.session_state["preview_raw"] = raw
    st.markdown(f"### {raw.title or 'Untitled page'}")
    st.caption(f"**H1:** {raw.primary_heading or 'n/a'} · **Characters:** {raw.content_length}")
    if raw.sub_headings:
        st.markdown(" ".join(f"`{h}`" for h in raw.sub_headings if h))
    with st.expander("Extracted text"):
        st.text(raw.content[:3000])

    if result.credential_valid is False:
        st.error(result.error)
    elif result.error:
        st.warning(result.error)
    if result.structured_data is not None:
        st.success("Structured with AI")
        st.json(result.structured_data.model_dump(mode="json", by_alias=True))


def _render_generation(api_key: str) -> None:
    raw = st.session_state.get("preview_raw")
    if raw is None:
        st.warning("Preview a URL first; the introduction is written from its extracted text.")
        return
    with st.spinner("Writing a job introduction…"):
        try:
            result = _run(generate_job_description(GenerationRequest(extracted_data=raw, api_key=api_key or None)))
        except RequestValidationError as e:
            st.error(e.message)
            return
        except GenerationError as e:
            st.error(f"{e.message} (status {e.status_code})")
            return
    st.markdown(f"### Job introduction: {raw.title or raw.source_url}")
    st.markdown(result.generated_content)


def _render_export(urls: List[str], api_key: str) -> None:
    progress = st.progress(0.0, text="Starting…")

    def on_item(index: int, total: int, job) -> None:
        status = "⚠️ degraded" if job.is_degraded else "✓"
        progress.progress((index + 1) / total, text=f"{index + 1}/{total} {status} {job.source_url}")

    try:
        export = _run(export_batch(BatchRequest(urls=urls, api_key=api_key), on_item=on_item))
    except RequestValidationError as e:
        st.error(e.message)
        return
    except BatchExportError as e:
        st.error(f"{e.message} (status {e.status_code})")
        return

    st.session_state["export"] = export
    st.success(f"Extracted {export.record_count} job(s).")


def render_layout() -> None:
    """Streamlit page layout."""
    st.set_page_config(page_title="Job Data Extractor", layout="wide")
    st.title("Job Data Extractor")
    st.markdown("*Turn job posting pages into a structured Excel report using AI.*")
    st.divider()

    urls_text = st.text_area(
        "Job posting URLs",
        placeholder="https://example.com/jobs/123\nhttps://example.com/jobs/456",
        height=160,
        key="urls",
        help="One URL per line. Pages are processed in order, about one per second.",
    )
    api_key = st.text_input(
        "OpenRouter API key",
        value=OPENROUTER_API_KEY,
        type="password",
        key="api_key",
    )
    urls = _parse_urls(urls_text)

    col1, col2, col3 = st.columns(3)
    with col1:
        preview_clicked = st.button("Preview first URL", key="preview_btn")
    with col2:
        generate_clicked = st.button("Generate introduction", key="generate_btn")
    with col3:
        export_clicked = st.button("Extract to Excel", type="primary", key="export_btn")

    if preview_clicked:
        _render_preview(urls, api_key)
    if generate_clicked:
        _render_generation(api_key)
    if export_clicked:
        _render_export(urls, api_key)

    export = st.session_state.get("export")
    if export is not None:
        st.download_button(
            "Download Excel",
            data=export.content,
            file_name=export.filename,
            mime=export.media_type,
            key="download_xlsx",
        )


if __name__ == "__main__":
    render_layout()

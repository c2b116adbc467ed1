"""Entry points consumed by the UI: extraction, preview, batch export and job-introduction generation."""

from datetime import date
from typing import Callable, Optional

import httpx
import openai

from job_sheet_ai.agents.batch_agent import ItemCallback, run_batch
from job_sheet_ai.agents.structuring_agent import StructuringClient
from job_sheet_ai.config import BATCH_DELAY_SECONDS, REPORT_TIMEZONE
from job_sheet_ai.errors import (
    BatchExportError,
    GenerationError,
    RequestValidationError,
    StructuringError,
    describe_error,
)
from job_sheet_ai.schemas.payloads import (
    BatchRequest,
    ExtractionRequest,
    GenerationRequest,
    GenerationResponse,
    PreviewRequest,
    PreviewResponse,
    SpreadsheetExport,
)
from job_sheet_ai.schemas.raw_extraction import RawExtraction
from job_sheet_ai.services.content_extractor import extract_content
from job_sheet_ai.services.page_fetcher import fetch_page
from job_sheet_ai.services.report_builder import build_report
from job_sheet_ai.services.spreadsheet_writer import XLSX_MEDIA_TYPE, report_filename, write_workbook
from job_sheet_ai.utils.logger import get_logger

logger = get_logger(__name__)

# Lets tests and callers inject a preconfigured client (e.g. a mocked transport)
ClientFactory = Callable[[str], StructuringClient]


def _default_client_factory(api_key: str) -> StructuringClient:
    return StructuringClient(api_key)


async def extract_url(
    request: ExtractionRequest,
    http_client: Optional[httpx.AsyncClient] = None,
) -> RawExtraction:
    """Fetch and extract one page. FetchError propagates to the caller."""
    if not request.url:
        raise RequestValidationError("URL is required")
    html = await fetch_page(request.url, client=http_client)
    return extract_content(html, request.url)


async def preview_url(
    request: PreviewRequest,
    *,
    http_client: Optional[httpx.AsyncClient] = None,
    client_factory: ClientFactory = _default_client_factory,
) -> PreviewResponse:
    """
    Raw extraction, plus structured data when a credential is given and the
    probe says it is usable. Structuring problems land in `error`, not raised.
    """
    raw = await extract_url(ExtractionRequest(url=request.url), http_client=http_client)
    response = PreviewResponse(raw_data=raw)
    if not request.api_key:
        return response

    async with client_factory(request.api_key) as structurer:
        probe = await structurer.probe()
        if not probe.valid:
            return response.model_copy(
                update={
                    "credential_valid": False,
                    "error": probe.reason or "Invalid API key or insufficient credits",
                }
            )
        try:
            job = await structurer.structure(raw.content, raw.source_url)
        except StructuringError as e:
            return response.model_copy(
                update={"credential_valid": True, "error": f"Structuring error: {e.message}"}
            )
        except openai.APIError as e:
            message, _ = describe_error(e)
            return response.model_copy(update={"credential_valid": True, "error": message})
    return response.model_copy(update={"credential_valid": True, "structured_data": job})


def validate_batch_request(request: BatchRequest) -> None:
    if not request.urls:
        raise RequestValidationError("URLs array is required")
    if not request.api_key:
        raise RequestValidationError("OpenRouter API key is required")


async def export_batch(
    request: BatchRequest,
    *,
    delay_seconds: float = BATCH_DELAY_SECONDS,
    today: Optional[date] = None,
    tz: str = REPORT_TIMEZONE,
    http_client: Optional[httpx.AsyncClient] = None,
    client_factory: ClientFactory = _default_client_factory,
    on_item: Optional[ItemCallback] = None,
) -> SpreadsheetExport:
    """
    Validate, run the batch, build the three report tables and write the workbook.
    Per-URL failures are rows in the report; only an unexpected error escaping
    the batch raises BatchExportError, with the upstream status when known.
    """
    validate_batch_request(request)
    try:
        async with client_factory(request.api_key) as structurer:
            jobs = await run_batch(
                request.urls,
                structurer,
                delay_seconds=delay_seconds,
                http_client=http_client,
                on_item=on_item,
            )
        content = write_workbook(build_report(jobs, tz=tz))
    except Exception as e:
        logger.exception("Batch export failed")
        message, status = describe_error(e)
        if status is None:
            message = f"Processing error: {message}"
        raise BatchExportError(message, status_code=status or 500) from e

    return SpreadsheetExport(
        content=content,
        filename=report_filename(today or date.today()),
        media_type=XLSX_MEDIA_TYPE,
        record_count=len(jobs),
    )


async def generate_job_description(
    request: GenerationRequest,
    *,
    client_factory: ClientFactory = _default_client_factory,
) -> GenerationResponse:
    """Write a job introduction from an earlier extraction. Failures raise GenerationError."""
    if request.extracted_data is None or not request.api_key:
        raise RequestValidationError("Extracted data and API key are required")
    try:
        async with client_factory(request.api_key) as structurer:
            text = await structurer.generate_description(request.extracted_data)
    except (openai.APIError, StructuringError) as e:
        logger.warning("Generation failed for %s: %s", request.extracted_data.source_url, e)
        message, status = describe_error(e)
        raise GenerationError(message, status_code=status or 500) from e
    return GenerationResponse(generated_content=text, original_data=request.extracted_data)

"""Batch Agent: fetch, extract and structure a list of URLs, one record per URL."""

import asyncio
from collections import Counter
from enum import Enum
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

import httpx
import openai

from job_sheet_ai.agents.structuring_agent import StructuringClient
from job_sheet_ai.config import BATCH_DELAY_SECONDS, FALLBACK_EXCERPT_CHARS
from job_sheet_ai.errors import FetchError, StructuringError, describe_error
from job_sheet_ai.schemas.structured_job import StructuredJob
from job_sheet_ai.services.content_extractor import extract_content
from job_sheet_ai.services.page_fetcher import create_http_client, fetch_page
from job_sheet_ai.utils.helpers import truncate_with_marker
from job_sheet_ai.utils.logger import get_logger

logger = get_logger(__name__)

Sleep = Callable[[float], Awaitable[None]]
ItemCallback = Callable[[int, int, StructuredJob], None]


class ItemState(str, Enum):
    PENDING = "pending"
    FETCHED = "fetched"
    EXTRACTED = "extracted"
    STRUCTURED = "structured"
    DEGRADED = "degraded"


def fetch_failure_record(url: str, error: Exception) -> StructuredJob:
    message, _ = describe_error(error)
    return StructuredJob.degraded(url, f"Error processing URL: {message}")


def structuring_failure_record(url: str, error: Exception, content: str) -> StructuredJob:
    """Degraded record that still carries the start of the page text."""
    message, _ = describe_error(error)
    excerpt = truncate_with_marker(content, FALLBACK_EXCERPT_CHARS)
    return StructuredJob.degraded(
        url,
        f"AI structuring error: {message}\n\nRaw extracted content:\n{excerpt}",
    )


async def _process_one(
    url: str,
    structurer: StructuringClient,
    http_client: httpx.AsyncClient,
) -> Tuple[ItemState, StructuredJob]:
    state = ItemState.PENDING
    try:
        html = await fetch_page(url, client=http_client)
    except FetchError as e:
        logger.warning("Fetch failed for %s: %s", url, e.message)
        return ItemState.DEGRADED, fetch_failure_record(url, e)
    state = ItemState.FETCHED
    logger.debug("%s -> %s", url, state.value)

    extraction = extract_content(html, url)
    state = ItemState.EXTRACTED
    logger.debug("%s -> %s (%s chars)", url, state.value, extraction.content_length)
    if not extraction.content:
        logger.warning("No text content extracted from %s", url)

    try:
        job = await structurer.structure(extraction.content, url)
    except (StructuringError, openai.APIError) as e:
        logger.warning("Structuring failed for %s: %s", url, e)
        return ItemState.DEGRADED, structuring_failure_record(url, e, extraction.content)
    return ItemState.STRUCTURED, job


def summarize_states(states: List[ItemState]) -> Dict[str, int]:
    counts = Counter(s.value for s in states)
    return {s.value: counts.get(s.value, 0) for s in (ItemState.STRUCTURED, ItemState.DEGRADED)}


async def run_batch(
    urls: List[str],
    structurer: StructuringClient,
    *,
    delay_seconds: float = BATCH_DELAY_SECONDS,
    http_client: Optional[httpx.AsyncClient] = None,
    sleep: Sleep = asyncio.sleep,
    on_item: Optional[ItemCallback] = None,
) -> List[StructuredJob]:
    """
    Process URLs strictly in order, one at a time. Every URL yields exactly one
    record (structured or degraded), in input order. delay_seconds is awaited
    between consecutive items, after failures too.
    """
    own_client = http_client is None
    client = http_client or create_http_client()
    jobs: List[StructuredJob] = []
    states: List[ItemState] = []
    logger.info("Batch started: urls=%s delay=%ss", len(urls), delay_seconds)
    try:
        for index, url in enumerate(urls):
            if index > 0 and delay_seconds > 0:
                await sleep(delay_seconds)
            logger.info("Processing URL %s/%s: %s", index + 1, len(urls), url)
            state, job = await _process_one(url, structurer, client)
            states.append(state)
            jobs.append(job)
            if on_item is not None:
                on_item(index, len(urls), job)
    finally:
        if own_client:
            await client.aclose()

    summary = summarize_states(states)
    logger.info(
        "Batch finished: urls=%s structured=%s degraded=%s",
        len(urls),
        summary["structured"],
        summary["degraded"],
    )
    return jobs

"""Integration tests for the batch agent: ordering, pacing and per-item degradation."""

import httpx
import pytest

from conftest import JOB_PAGE, make_page_client, make_structurer, reply_handler, service_error
from job_sheet_ai.agents.batch_agent import ItemState, run_batch, summarize_states
from job_sheet_ai.schemas.structured_job import DEGRADED_MARKER

URLS = ["https://jobs.example/1", "https://jobs.example/2", "https://jobs.example/3"]


class SleepRecorder:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_timeout_on_second_url_degrades_only_that_record(structured_reply_text):
    pages = {
        URLS[0]: JOB_PAGE,
        URLS[1]: httpx.ReadTimeout("timed out"),
        URLS[2]: JOB_PAGE,
    }
    sleep = SleepRecorder()
    async with make_page_client(pages) as http_client, make_structurer(
        reply_handler(structured_reply_text)
    ) as structurer:
        jobs = await run_batch(URLS, structurer, delay_seconds=1.0, http_client=http_client, sleep=sleep)

    assert [j.source_url for j in jobs] == URLS
    assert jobs[0].job_title == "Backend Engineer"
    assert jobs[2].job_title == "Backend Engineer"
    assert jobs[1].is_degraded
    assert jobs[1].job_description.startswith(f"{DEGRADED_MARKER} Error processing URL:")
    assert "Timed out" in jobs[1].job_description
    assert jobs[1].job_title is None
    # pause between each consecutive pair, including after the failure
    assert sleep.calls == [1.0, 1.0]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_structuring_failure_keeps_raw_excerpt():
    long_page = "<html><body><main>" + "word " * 400 + "</main></body></html>"
    async with make_page_client({URLS[0]: long_page}) as http_client, make_structurer(
        lambda request: service_error(402, "no credits")
    ) as structurer:
        jobs = await run_batch(URLS[:1], structurer, delay_seconds=0, http_client=http_client)

    description = jobs[0].job_description
    assert description.startswith(f"{DEGRADED_MARKER} AI structuring error: OpenRouter API: Payment required")
    assert "Raw extracted content:\n" in description
    excerpt = description.split("Raw extracted content:\n", 1)[1]
    assert len(excerpt) == 1000 + len("...")
    assert excerpt.endswith("...")


@pytest.mark.integration
@pytest.mark.asyncio
async def test_short_content_excerpt_has_no_marker():
    async with make_page_client({URLS[0]: "<body><main>tiny</main></body>"}) as http_client, make_structurer(
        reply_handler("no json at all")
    ) as structurer:
        jobs = await run_batch(URLS[:1], structurer, delay_seconds=0, http_client=http_client)

    assert jobs[0].job_description.endswith("Raw extracted content:\ntiny")
    assert "No valid JSON found" in jobs[0].job_description


@pytest.mark.integration
@pytest.mark.asyncio
async def test_every_url_yields_one_record_in_order():
    urls = [f"https://jobs.example/{i}" for i in range(5)]
    pages = {u: (404 if i % 2 else JOB_PAGE) for i, u in enumerate(urls)}
    progress = []
    async with make_page_client(pages) as http_client, make_structurer(
        reply_handler('{"jobTitle": "Engineer"}')
    ) as structurer:
        jobs = await run_batch(
            urls,
            structurer,
            delay_seconds=0,
            http_client=http_client,
            on_item=lambda index, total, job: progress.append((index, total, job.source_url)),
        )

    assert len(jobs) == len(urls)
    assert [j.source_url for j in jobs] == urls
    assert all(j.extracted_at_utc is not None for j in jobs)
    assert [j.is_degraded for j in jobs] == [False, True, False, True, False]
    assert progress == [(i, 5, u) for i, u in enumerate(urls)]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_malformed_url_degrades_without_stopping_batch():
    urls = [URLS[0], "https://[::1/job", URLS[2]]
    async with make_page_client({URLS[0]: JOB_PAGE, URLS[2]: JOB_PAGE}) as http_client, make_structurer(
        reply_handler('{"jobTitle": "Engineer"}')
    ) as structurer:
        jobs = await run_batch(urls, structurer, delay_seconds=0, http_client=http_client)

    assert [j.source_url for j in jobs] == urls
    assert jobs[1].is_degraded
    assert "Invalid URL https://[::1/job" in jobs[1].job_description
    assert jobs[0].job_title == "Engineer"
    assert jobs[2].job_title == "Engineer"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_no_delay_for_single_url():
    sleep = SleepRecorder()
    async with make_page_client({URLS[0]: JOB_PAGE}) as http_client, make_structurer(
        reply_handler("{}")
    ) as structurer:
        await run_batch(URLS[:1], structurer, delay_seconds=1.0, http_client=http_client, sleep=sleep)
    assert sleep.calls == []


@pytest.mark.unit
def test_summarize_states():
    states = [ItemState.STRUCTURED, ItemState.DEGRADED, ItemState.STRUCTURED]
    assert summarize_states(states) == {"structured": 2, "degraded": 1}

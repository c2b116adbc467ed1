"""Shared fixtures: mocked HTTP transports for page fetches and the structuring service."""

import json
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

import httpx
import pytest
from openai import AsyncOpenAI

from job_sheet_ai.agents.structuring_agent import StructuringClient
from job_sheet_ai.schemas.structured_job import Requirements, Salary, StructuredJob
from job_sheet_ai.services.page_fetcher import create_http_client

SERVICE_BASE_URL = "https://openrouter.test/api/v1"

JOB_PAGE = """
<html>
  <head><title>Backend Engineer | Acme</title></head>
  <body>
    <header><h1>Acme Careers</h1></header>
    <nav>Home Jobs About</nav>
    <main>
      <h1>Backend Engineer</h1>
      <h2>Requirements</h2>
      <p>3+ years of Python. Salary 4,000,000 - 6,000,000 JPY per year.</p>
      <script>var tracking = 1;</script>
    </main>
    <footer>Copyright Acme</footer>
  </body>
</html>
"""

STRUCTURED_REPLY = {
    "jobTitle": "Backend Engineer",
    "companyName": "Acme",
    "location": "Tokyo",
    "salary": {"min": 4000000, "max": 6000000, "type": "annual", "details": None},
    "workingHours": "9:00-18:00",
    "holidays": None,
    "benefits": ["Remote work"],
    "requirements": {"experience": "3+ years", "skills": ["Python"], "education": None},
    "jobDescription": "Build APIs.",
    "applicationMethod": None,
    "employmentType": "Full-time",
}


def chat_completion(content: Optional[str]) -> Dict:
    """Minimal chat-completions response body."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": "test-model",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


def service_error(status: int, message: str) -> httpx.Response:
    return httpx.Response(status, json={"error": {"message": message, "code": status}})


Handler = Callable[[httpx.Request], httpx.Response]


def make_structurer(handler: Handler) -> StructuringClient:
    """StructuringClient whose transport is served by handler."""
    openai_client = AsyncOpenAI(
        api_key="sk-test",
        base_url=SERVICE_BASE_URL,
        max_retries=0,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    return StructuringClient("sk-test", client=openai_client)


def make_page_client(pages: Dict[str, object]) -> httpx.AsyncClient:
    """
    Page client serving a dict of url -> html (str), status (int) or exception instance.
    Unknown URLs answer 404.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        page = pages.get(str(request.url))
        if isinstance(page, Exception):
            raise page
        if isinstance(page, int):
            return httpx.Response(page, text="error")
        if page is None:
            return httpx.Response(404, text="not found")
        return httpx.Response(200, text=page, headers={"Content-Type": "text/html"})

    return create_http_client(transport=httpx.MockTransport(handler))


def reply_handler(reply: str) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=chat_completion(reply))

    return handler


@pytest.fixture
def structured_reply_text() -> str:
    return "Here is the data:\n" + json.dumps(STRUCTURED_REPLY) + "\nLet me know if you need more."


@pytest.fixture
def sample_jobs():
    """Three records: two structured, one degraded."""
    at = datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc)
    return [
        StructuredJob(
            job_title="Engineer",
            company_name="Acme",
            location="Tokyo",
            salary=Salary(min=300, max=500, type="annual"),
            benefits=["Remote", "Bonus"],
            requirements=Requirements(skills=["Python", "SQL"]),
            employment_type="Full-time",
            source_url="https://jobs.example/1",
            extracted_at_utc=at,
        ),
        StructuredJob(
            job_title="Engineer",
            location="Osaka",
            salary=Salary(min=0),
            employment_type="Contract",
            source_url="https://jobs.example/2",
            extracted_at_utc=at,
        ),
        StructuredJob.degraded("https://jobs.example/3", "Error processing URL: HTTP 500"),
    ]

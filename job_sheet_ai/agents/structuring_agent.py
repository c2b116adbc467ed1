"""Structuring Agent: coerce extracted page text into a StructuredJob via the LLM service."""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from openai import AsyncOpenAI
from pydantic import ValidationError

from job_sheet_ai.config import (
    APP_REFERER,
    APP_TITLE,
    GENERATION_MAX_TOKENS,
    GENERATION_TEMPERATURE,
    GENERATION_TITLE,
    MAX_CONTENT_CHARS,
    MODEL_NAME,
    OPENROUTER_BASE_URL,
    STRUCTURING_MAX_TOKENS,
    STRUCTURING_TEMPERATURE,
    STRUCTURING_TIMEOUT_SECONDS,
)
from job_sheet_ai.errors import InvalidJson, NoJsonFound, StructuringError
from job_sheet_ai.schemas.credential import ProbeResult
from job_sheet_ai.schemas.raw_extraction import RawExtraction
from job_sheet_ai.schemas.structured_job import StructuredJob
from job_sheet_ai.services.credential_prober import probe_credential
from job_sheet_ai.utils.helpers import find_json_object
from job_sheet_ai.utils.logger import get_logger

logger = get_logger(__name__)

STRUCTURING_PROMPT_TEMPLATE = """Analyze the text extracted from the job posting page below and structure the job information as JSON.

[Extracted text]
{content}

[Output format]
Answer with exactly one JSON object in the format below.
If a piece of information is not found, set it to null (or an empty array for lists); never omit a key.
Numeric fields must be JSON numbers, not strings.

{{
  "jobTitle": "job title",
  "companyName": "company name",
  "location": "work location",
  "salary": {{
    "min": minimum salary (number only, in units of 10,000 yen),
    "max": maximum salary (number only, in units of 10,000 yen),
    "type": "monthly / annual / hourly",
    "details": "salary details as written"
  }},
  "workingHours": "working hours",
  "holidays": "holidays and leave",
  "benefits": ["benefit", "..."],
  "requirements": {{
    "experience": "required experience",
    "skills": ["required skill", "..."],
    "education": "education requirement"
  }},
  "jobDescription": "description of the duties",
  "applicationMethod": "how to apply",
  "employmentType": "full-time / contract / temporary / part-time, etc."
}}

Return only the JSON. No explanation."""


def build_structuring_prompt(content: str) -> str:
    """Fill the fixed template with a bounded prefix of the page text."""
    return STRUCTURING_PROMPT_TEMPLATE.format(content=content[:MAX_CONTENT_CHARS])


DESCRIPTION_PROMPT_TEMPLATE = """Write an appealing, easy-to-read job introduction from the job information below.

[Original job information]
Title: {title}
Heading: {heading}
Sub-headings: {sub_headings}
Content: {content}

[Requirements for the introduction]
- Around 300-500 characters
- Attractive to job seekers
- Include the key facts: role, duties, conditions
- Friendly, readable tone
- Use bullet points and line breaks where they help

Job introduction:"""


def build_description_prompt(raw: RawExtraction) -> str:
    return DESCRIPTION_PROMPT_TEMPLATE.format(
        title=raw.title,
        heading=raw.primary_heading,
        sub_headings=", ".join(raw.sub_headings),
        content=raw.content,
    )


@dataclass(frozen=True)
class ReplyParse:
    """Tagged result of parsing a service reply: exactly one of job / error is set."""

    job: Optional[StructuredJob] = None
    error: Optional[StructuringError] = None

    @property
    def ok(self) -> bool:
        return self.job is not None


def parse_structuring_reply(
    reply: Optional[str],
    source_url: str,
    extracted_at: Optional[datetime] = None,
) -> ReplyParse:
    """
    Find the first balanced JSON object in the reply and validate it as a StructuredJob.
    source_url and the timestamp always come from the caller, never from the model.
    """
    span = find_json_object(reply or "")
    if span is None:
        return ReplyParse(error=NoJsonFound("No valid JSON found in AI response"))
    try:
        data = json.loads(span)
    except json.JSONDecodeError as e:
        return ReplyParse(error=InvalidJson(f"AI response JSON could not be parsed: {e.msg}"))

    data["sourceUrl"] = source_url
    data["extractedAtUtc"] = extracted_at or datetime.now(timezone.utc)
    try:
        job = StructuredJob.model_validate(data)
    except ValidationError as e:
        return ReplyParse(
            error=InvalidJson(f"AI response does not match the job schema ({e.error_count()} errors)")
        )
    return ReplyParse(job=job)


class StructuringClient:
    """
    Thin wrapper over the chat-completions transport used for both
    structuring and credential probes. Retries are disabled: failures
    propagate to the caller, which decides how to degrade.
    """

    def __init__(
        self,
        api_key: str,
        *,
        model: str = MODEL_NAME,
        base_url: str = OPENROUTER_BASE_URL,
        timeout: float = STRUCTURING_TIMEOUT_SECONDS,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.model = model
        self._client = client or AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
            default_headers={"HTTP-Referer": APP_REFERER, "X-Title": APP_TITLE},
        )

    async def __aenter__(self) -> "StructuringClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.close()

    async def probe(self) -> ProbeResult:
        return await probe_credential(self._client, self.model)

    async def structure(self, content: str, source_url: str) -> StructuredJob:
        """
        One completion call for one page. Raises StructuringError on an unusable
        reply; transport errors (openai.APIError) propagate unchanged.
        """
        response = await self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": build_structuring_prompt(content)}],
            max_tokens=STRUCTURING_MAX_TOKENS,
            temperature=STRUCTURING_TEMPERATURE,
        )
        choice = response.choices[0] if response.choices else None
        reply = choice.message.content if choice and choice.message else None

        parsed = parse_structuring_reply(reply, source_url)
        if not parsed.ok:
            logger.warning("Structuring reply rejected for %s: %s", source_url, parsed.error)
            raise parsed.error
        return parsed.job

    async def generate_description(self, raw: RawExtraction) -> str:
        """Free-text job introduction for one extracted page. Upstream errors propagate."""
        response = await self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": build_description_prompt(raw)}],
            max_tokens=GENERATION_MAX_TOKENS,
            temperature=GENERATION_TEMPERATURE,
            extra_headers={"X-Title": GENERATION_TITLE},
        )
        choice = response.choices[0] if response.choices else None
        text = choice.message.content if choice and choice.message else None
        if not text:
            raise StructuringError("Empty response from AI service")
        logger.info("Generated %d-character introduction for %s", len(text), raw.source_url)
        return text

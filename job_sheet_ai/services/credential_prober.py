"""Classify a structuring-service credential with one minimal completion call."""

from typing import Optional

import openai
from openai import AsyncOpenAI

from job_sheet_ai.config import MODEL_NAME, PROBE_MAX_TOKENS
from job_sheet_ai.errors import message_for_status, upstream_message
from job_sheet_ai.schemas.credential import CredentialStatus, ProbeResult
from job_sheet_ai.utils.logger import get_logger

logger = get_logger(__name__)

PROBE_PROMPT = "Hello"

_STATUS_KINDS = {
    402: CredentialStatus.PAYMENT_REQUIRED,
    401: CredentialStatus.UNAUTHORIZED,
    429: CredentialStatus.RATE_LIMITED,
}


def classify_status(status: Optional[int], detail: str) -> ProbeResult:
    """Map an upstream HTTP status to a credential classification with its reason string."""
    if status is None:
        return ProbeResult(status=CredentialStatus.UPSTREAM, reason=f"Network error: {detail}")
    kind = _STATUS_KINDS.get(status, CredentialStatus.UPSTREAM)
    return ProbeResult(status=kind, reason=message_for_status(status, detail), status_code=status)


async def probe_credential(client: AsyncOpenAI, model: str = MODEL_NAME) -> ProbeResult:
    """
    Issue the smallest possible completion and classify the outcome.
    Failures are returned as a classification, never raised.
    """
    try:
        await client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": PROBE_PROMPT}],
            max_tokens=PROBE_MAX_TOKENS,
        )
    except openai.APIStatusError as e:
        result = classify_status(e.status_code, upstream_message(e))
        logger.warning("Credential probe failed: %s (%s)", result.status.value, e.status_code)
        return result
    except openai.APIConnectionError as e:
        logger.warning("Credential probe could not reach the service: %s", e)
        return classify_status(None, str(e))
    logger.info("Credential probe succeeded")
    return ProbeResult(status=CredentialStatus.VALID)

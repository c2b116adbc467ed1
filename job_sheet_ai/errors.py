"""Error taxonomy and the user-facing diagnostic for every failure kind."""

from typing import Optional, Tuple

import openai

PAYMENT_REQUIRED_MESSAGE = (
    "OpenRouter API: Payment required. Please check your account balance and add credits."
)
UNAUTHORIZED_MESSAGE = "OpenRouter API: Invalid API key. Please check your API key."
RATE_LIMITED_MESSAGE = "OpenRouter API: Rate limit exceeded. Please wait and try again later."


class JobSheetError(Exception):
    """Base class for all Job Sheet AI errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FetchError(JobSheetError):
    """Page could not be retrieved: network failure, timeout or non-success status."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class StructuringError(JobSheetError):
    """The structuring service replied, but the reply is not a usable job object."""


class NoJsonFound(StructuringError):
    pass


class InvalidJson(StructuringError):
    pass


class RequestValidationError(JobSheetError):
    """A required request field is missing. Raised before any work starts."""

    status_code = 400


class BatchExportError(JobSheetError):
    """Unexpected failure while exporting a batch."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class GenerationError(JobSheetError):
    """Job-introduction generation failed; status_code mirrors the upstream status when known."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


def upstream_message(exc: openai.APIStatusError) -> str:
    """Best-effort error text from an upstream error body."""
    body = exc.body
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return exc.message


def message_for_status(status: int, detail: str) -> str:
    if status == 402:
        return PAYMENT_REQUIRED_MESSAGE
    if status == 401:
        return UNAUTHORIZED_MESSAGE
    if status == 429:
        return RATE_LIMITED_MESSAGE
    return f"OpenRouter API error ({status}): {detail}"


def describe_error(exc: BaseException) -> Tuple[str, Optional[int]]:
    """
    Map any exception to (diagnostic message, upstream HTTP status or None).
    Known upstream statuses get fixed messages; unknown errors fall back to str(exc).
    """
    if isinstance(exc, openai.APIStatusError):
        return message_for_status(exc.status_code, upstream_message(exc)), exc.status_code
    if isinstance(exc, openai.APIConnectionError):
        return f"Network error: {exc}", None
    if isinstance(exc, FetchError):
        return exc.message, exc.status
    if isinstance(exc, JobSheetError):
        return exc.message, None
    return str(exc) or exc.__class__.__name__, None

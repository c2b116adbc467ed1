"""Unit tests for error classification."""

import httpx
import openai
import pytest

from job_sheet_ai.errors import (
    PAYMENT_REQUIRED_MESSAGE,
    RATE_LIMITED_MESSAGE,
    UNAUTHORIZED_MESSAGE,
    FetchError,
    NoJsonFound,
    describe_error,
)

REQUEST = httpx.Request("POST", "https://openrouter.test/api/v1/chat/completions")


def _status_error(status: int, message: str = "upstream says no") -> openai.APIStatusError:
    response = httpx.Response(status, request=REQUEST)
    return openai.APIStatusError(f"Error code: {status}", response=response, body={"message": message})


@pytest.mark.unit
@pytest.mark.parametrize(
    "status, expected",
    [(402, PAYMENT_REQUIRED_MESSAGE), (401, UNAUTHORIZED_MESSAGE), (429, RATE_LIMITED_MESSAGE)],
)
def test_known_upstream_statuses(status, expected):
    assert describe_error(_status_error(status)) == (expected, status)


@pytest.mark.unit
def test_other_upstream_status_keeps_message():
    message, status = describe_error(_status_error(503, "overloaded"))
    assert status == 503
    assert message == "OpenRouter API error (503): overloaded"


@pytest.mark.unit
def test_connection_error():
    message, status = describe_error(openai.APITimeoutError(request=REQUEST))
    assert message.startswith("Network error:")
    assert status is None


@pytest.mark.unit
def test_own_errors():
    assert describe_error(FetchError("HTTP 404 fetching x", status=404)) == ("HTTP 404 fetching x", 404)
    assert describe_error(NoJsonFound("No valid JSON found in AI response")) == (
        "No valid JSON found in AI response",
        None,
    )


@pytest.mark.unit
def test_unknown_error():
    assert describe_error(ValueError("bad")) == ("bad", None)
    assert describe_error(RuntimeError()) == ("RuntimeError", None)

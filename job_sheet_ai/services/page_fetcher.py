"""Async HTTP page fetcher for public job URLs."""

from typing import Optional

import httpx

from job_sheet_ai.config import FETCH_TIMEOUT_SECONDS, USER_AGENT
from job_sheet_ai.errors import FetchError
from job_sheet_ai.utils.logger import get_logger

logger = get_logger(__name__)

BROWSER_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9,ja;q=0.8",
}


def create_http_client(
    timeout: float = FETCH_TIMEOUT_SECONDS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Client with the browser identity and a hard timeout. One per batch is enough."""
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=timeout,
        headers=BROWSER_HEADERS,
        transport=transport,
    )


async def fetch_page(
    url: str,
    timeout: float = FETCH_TIMEOUT_SECONDS,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """
    Fetch page markup. Single attempt, no retries.
    Raises FetchError on timeout, transport failure or a non-success status.
    """
    if client is None:
        async with create_http_client(timeout=timeout) as own_client:
            return await _get(own_client, url, timeout)
    return await _get(client, url, timeout)


async def _get(client: httpx.AsyncClient, url: str, timeout: float) -> str:
    try:
        response = await client.get(url, timeout=timeout)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.warning("HTTP error %s for %s", status, url)
        raise FetchError(f"HTTP {status} fetching {url}", status=status) from e
    except httpx.TimeoutException as e:
        logger.warning("Timed out after %ss fetching %s", timeout, url)
        raise FetchError(f"Timed out after {timeout:g}s fetching {url}") from e
    except httpx.HTTPError as e:
        logger.warning("Request failed for %s: %s", url, e)
        raise FetchError(f"Request failed for {url}: {e}") from e
    except httpx.InvalidURL as e:
        # Not an HTTPError subclass
        logger.warning("Invalid URL %s: %s", url, e)
        raise FetchError(f"Invalid URL {url}: {e}") from e
    return response.text

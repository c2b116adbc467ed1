"""Isolate the substantive text of a job page from navigation and decoration."""

import re
from typing import Iterable, Optional, Tuple

from bs4 import BeautifulSoup

from job_sheet_ai.config import (
    CONTENT_SELECTORS,
    MAX_SUB_HEADINGS,
    NOISE_SELECTORS,
    ContentSelector,
)
from job_sheet_ai.schemas.raw_extraction import RawExtraction
from job_sheet_ai.utils.logger import get_logger

logger = get_logger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_NEWLINES_RE = re.compile(r"\n+")


def normalize_text(text: str) -> str:
    """Collapse whitespace runs to one space, newline runs to one newline, and trim."""
    text = _WHITESPACE_RE.sub(" ", text)
    text = _NEWLINES_RE.sub("\n", text)
    return text.strip()


def remove_noise(soup: BeautifulSoup, selectors: Iterable[str] = NOISE_SELECTORS) -> None:
    """Drop boilerplate nodes in place. Must run before any text is read."""
    for node in soup.select(", ".join(selectors)):
        # Nested matches are already gone with their ancestor
        if not node.decomposed:
            node.decompose()


def select_main_text(
    soup: BeautifulSoup,
    selectors: Iterable[ContentSelector] = CONTENT_SELECTORS,
) -> Tuple[Optional[str], str]:
    """
    Evaluate candidate selectors and keep the longest text.

    A selector's text is the joined text of all its matches. A later candidate
    replaces the current one only when strictly longer, so ties go to the
    earlier selector. Returns (selector name, text), or (None, "") when no
    candidate has any text.
    """
    best_name: Optional[str] = None
    best_text = ""
    for selector in selectors:
        text = "".join(node.get_text() for node in soup.select(selector.css)).strip()
        if text and len(text) > len(best_text):
            best_name, best_text = selector.name, text
    return best_name, best_text


def extract_content(
    html: str,
    source_url: str,
    selectors: Iterable[ContentSelector] = CONTENT_SELECTORS,
) -> RawExtraction:
    """
    Pure transformation from markup to RawExtraction. No network access.
    Markup without a body yields empty content rather than an error.
    """
    soup = BeautifulSoup(html or "", "lxml")
    remove_noise(soup)

    title = soup.title.get_text().strip() if soup.title else ""
    h1 = soup.find("h1")
    primary_heading = h1.get_text().strip() if h1 else ""
    sub_headings = [h2.get_text().strip() for h2 in soup.find_all("h2", limit=MAX_SUB_HEADINGS)]

    selector_name, main_text = select_main_text(soup, selectors)
    if not main_text:
        main_text = soup.body.get_text().strip() if soup.body else ""
        logger.debug("No content selector matched for %s; using body text", source_url)
    else:
        logger.debug("Selected %s region for %s (%s chars)", selector_name, source_url, len(main_text))

    content = normalize_text(main_text)
    return RawExtraction(
        title=title,
        primary_heading=primary_heading,
        sub_headings=sub_headings,
        content=content,
        content_length=len(content),
        source_url=source_url,
    )

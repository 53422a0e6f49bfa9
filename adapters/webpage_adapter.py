"""Fetch a web page and reduce it to plain text for recipe extraction.
"""

import logging
import re
from typing import Optional

import bs4
import httpx

from app.config import settings
from app.exceptions import AIServiceError

logger = logging.getLogger("lechef.webpage")

USER_AGENT = "Mozilla/5.0 (compatible; RecipeBot/1.0; +https://lechef.app)"
_WHITESPACE = re.compile(r"\s+")


def html_to_text(html: str, limit: Optional[int] = None) -> str:
    """Strip scripts, styles and tags, collapse whitespace, truncate to ``limit`` chars."""
    limit = settings.webpage_text_limit if limit is None else limit
    soup = bs4.BeautifulSoup(html, features="html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    text = soup.get_text(separator=" ")
    text = _WHITESPACE.sub(" ", text).strip()
    return text[:limit]


def fetch_page_text(url: str, transport: Optional[httpx.BaseTransport] = None) -> str:
    """Download ``url`` and return its visible text.

    Raises:
        AIServiceError: non-2xx status or transport failure
    """
    logger.info("Fetching webpage %s", url)
    try:
        with httpx.Client(
            headers={"User-Agent": USER_AGENT},
            timeout=settings.webpage_fetch_timeout_sec,
            follow_redirects=True,
            transport=transport,
        ) as client:
            resp = client.get(url)
    except httpx.HTTPError as e:
        raise AIServiceError(f"Failed to fetch webpage: {e}")

    if not resp.is_success:
        raise AIServiceError(
            f"Failed to fetch webpage: Failed to fetch URL: {resp.status_code} {resp.reason_phrase}"
        )

    return html_to_text(resp.text)

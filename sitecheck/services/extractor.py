import logging
from typing import List

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from sitecheck.services.sanitizer import is_noisy, sanitize

logger = logging.getLogger(__name__)

MAX_TEXT_BYTES = 20_000
MIN_FRAGMENT_LENGTH = 10

# Content elements collected after title and description, in document order
_CONTENT_TAGS = ["h1", "h2", "h3", "p", "li"]


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run in *text* to a single space."""
    return " ".join(text.split())


def _extract_title(soup: BeautifulSoup) -> str:
    title_tag = soup.find("title")
    if title_tag:
        return title_tag.get_text().strip()
    return ""


def _extract_description(soup: BeautifulSoup) -> str:
    # Several description tags may exist; the last one wins.
    description = ""
    for meta in soup.select('meta[name="description"]'):
        content = meta.get("content")
        if content is not None:
            description = str(content).strip()
    return description


def _collect_fragments(soup: BeautifulSoup) -> List[str]:
    fragments: List[str] = []

    title = _extract_title(soup)
    if title and not is_noisy(title):
        fragments.append(normalize_whitespace(title))

    description = _extract_description(soup)
    if description and not is_noisy(description):
        fragments.append(normalize_whitespace(description))

    for node in soup.find_all(_CONTENT_TAGS):
        text = normalize_whitespace(node.get_text())
        if text and not is_noisy(text) and len(text) >= MIN_FRAGMENT_LENGTH:
            fragments.append(text)

    return fragments


def extract_visible_text(html: str) -> str:
    """Return the visible, human-readable text of *html* as one line.

    Title and meta description come first, followed by headings, paragraphs
    and list items in document order.  The result is capped at
    ``MAX_TEXT_BYTES`` bytes of UTF-8; a character split by the cut is
    dropped.  Markup the parser rejects yields an empty string so the caller
    can fall back to other signals.
    """
    try:
        soup = sanitize(html)
    except ParserRejectedMarkup as exc:
        logger.debug("Parser rejected markup: %s", exc)
        return ""

    text = " ".join(_collect_fragments(soup))
    return text.encode("utf-8")[:MAX_TEXT_BYTES].decode("utf-8", "ignore")

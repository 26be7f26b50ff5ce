from urllib.parse import urlparse

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from sitecheck.services.heuristics import SUMMARY_LABEL

# Below this many characters of extracted text the page is summarized from metadata only
SIGNIFICANT_TEXT_LENGTH = 40

UNDETERMINED_SUMMARY = "Не удалось определить тематику сайта"


def _metadata_summary(html: str) -> str:
    try:
        soup = BeautifulSoup(html, "lxml")
    except ParserRejectedMarkup:
        return ""

    title_tag = soup.find("title")
    if title_tag:
        title = title_tag.get_text().strip()
        if title:
            return SUMMARY_LABEL + title

    meta = soup.find("meta", attrs={"name": "description"})
    if meta and meta.get("content"):
        description = str(meta["content"]).strip()
        if description:
            return SUMMARY_LABEL + description
    return ""


def fallback_summary(url: str, html: str) -> str:
    """Build a minimal summary from the page title, description or hostname."""
    summary = _metadata_summary(html)
    if summary:
        return summary

    parsed = urlparse(url)
    host = parsed.hostname or parsed.netloc
    if host:
        return f"Сайт: {host}"
    return UNDETERMINED_SUMMARY

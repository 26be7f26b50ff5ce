"""Per-request classification pipeline.

Given a fetched page the pipeline moves through these states::

    extract text ─┬─ < SIGNIFICANT_TEXT_LENGTH ──► low-text fallback
                  │                                 (AI on domain + title, else metadata)
                  └─ otherwise ──► AI attempt ──► heuristic on failure
                                        └─ still empty ──► metadata / hostname fallback

AI timeouts and errors are treated as an empty answer, never as a failure
of the request.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Literal, Optional
from urllib.parse import urlparse

from sitecheck.config import Settings
from sitecheck.services.ai_summarizer import AISummary, AISummaryError, summarize_with_ai
from sitecheck.services.extractor import extract_visible_text
from sitecheck.services.fallback import SIGNIFICANT_TEXT_LENGTH, UNDETERMINED_SUMMARY, fallback_summary
from sitecheck.services.heuristics import heuristic_summarize

logger = logging.getLogger(__name__)

Source = Literal["ai", "heuristic"]


@dataclass
class ClassificationResult:
    summary: str
    source: Source
    keywords: List[str] = field(default_factory=list)
    negative_keywords: List[str] = field(default_factory=list)


def _hostname(url: str) -> str:
    parsed = urlparse(url)
    return parsed.hostname or parsed.netloc


async def _try_ai(text: str, settings: Settings, deadline: float) -> Optional[AISummary]:
    """Run the AI collaborator within the remaining budget; None means no usable answer."""
    remaining = deadline - asyncio.get_running_loop().time()
    timeout = min(settings.ai_timeout, remaining)
    if timeout <= 0:
        logger.warning("No time left for the AI call")
        return None

    try:
        result = await asyncio.wait_for(summarize_with_ai(text, settings, timeout=timeout), timeout)
    except asyncio.TimeoutError:
        logger.warning("AI call timed out after %.1fs", timeout)
        return None
    except AISummaryError as exc:
        logger.warning("AI call failed: %s", exc)
        return None

    if not result.summary.strip():
        logger.warning("AI returned an empty summary")
        return None
    return result


async def _classify_short_page(url: str, html: str, settings: Settings, deadline: float) -> ClassificationResult:
    brief = fallback_summary(url, html)
    host = _hostname(url)

    if settings.use_ai:
        prompt = f"Домен: {host}"
        if brief.strip():
            prompt += f"\nTitle/Meta: {brief.strip()}"
        result = await _try_ai(prompt, settings, deadline)
        if result is not None:
            return ClassificationResult(
                summary=result.summary,
                source="ai",
                keywords=result.keywords,
                negative_keywords=result.negative_keywords,
            )
        logger.info("AI short-text attempt failed, using page metadata")

    summary = brief if brief.strip() else f"Веб-сайт компании/сервиса {host}"
    return ClassificationResult(summary=summary, source="heuristic")


async def classify_page(url: str, html: str, settings: Settings, *, deadline: float) -> ClassificationResult:
    """Summarize the topic of the page at *url* whose markup is *html*.

    Args:
        url: The page URL; its hostname feeds the fallback summaries.
        html: Raw markup as fetched.
        settings: Decides whether the AI collaborator is consulted.
        deadline: Event-loop time (``loop.time()``) by which the request
            must finish; the AI call never runs past it.

    Returns:
        A :class:`ClassificationResult` whose summary is never empty.
    """
    text = extract_visible_text(html)
    logger.info("Extracted text", extra={"url": url, "length": len(text)})

    if len(text.strip()) < SIGNIFICANT_TEXT_LENGTH:
        return await _classify_short_page(url, html, settings, deadline)

    result = None
    if settings.use_ai:
        ai_result = await _try_ai(text, settings, deadline)
        if ai_result is not None:
            result = ClassificationResult(
                summary=ai_result.summary,
                source="ai",
                keywords=ai_result.keywords,
                negative_keywords=ai_result.negative_keywords,
            )
        else:
            logger.info("AI failed or empty, falling back to heuristic")

    if result is None:
        result = ClassificationResult(summary=heuristic_summarize(text), source="heuristic")

    if not result.summary.strip():
        logger.info("Summary is empty, using title/meta/host fallback")
        result.summary = fallback_summary(url, html) or UNDETERMINED_SUMMARY

    return result

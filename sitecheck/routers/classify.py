import asyncio
import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from sitecheck.config import Settings, get_settings
from sitecheck.models.request import ClassifyRequest
from sitecheck.models.response import ClassifyResponse
from sitecheck.services.classifier import classify_page
from sitecheck.services.fetcher import fetch_url

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


@router.post(
    "/classify",
    response_model=ClassifyResponse,
    response_model_exclude_none=True,
    summary="Describe what a website is about",
)
@limiter.limit(lambda: get_settings().rate_limit)
async def classify(
    request: Request,
    body: ClassifyRequest,
    settings: Settings = Depends(get_settings),
) -> ClassifyResponse:
    """Fetch *url* and return a one-line Russian summary of the site's topic.

    With ``USE_AI=true`` the summary and advertising keyword lists come from
    the chat model; otherwise, or whenever the model fails, built-in
    heuristics produce the summary and ``source`` is ``"heuristic"``.
    Once the page is fetched the endpoint always answers with a summary.
    """
    url = str(body.url)
    logger.info("Classify request received", extra={"url": url, "use_ai": settings.use_ai})

    deadline = asyncio.get_running_loop().time() + settings.request_timeout

    # ── Step 1: fetch HTML ────────────────────────────────────────────────────
    html = await _fetch(url, settings)

    # ── Step 2: classify; errors past this point degrade to fallbacks ────────
    result = await classify_page(url, html, settings, deadline=deadline)

    return ClassifyResponse(
        summary=result.summary,
        source=result.source,
        keywords=result.keywords or None,
        negative_keywords=result.negative_keywords or None,
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

async def _fetch(url: str, settings: Settings) -> str:
    """Fetch *url* within the request budget and map failures to HTTP errors."""
    try:
        return await asyncio.wait_for(
            fetch_url(url, timeout=settings.fetch_timeout), settings.request_timeout
        )
    except ValueError as exc:
        logger.warning("Invalid or blocked URL: %s – %s", url, exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except (httpx.TimeoutException, asyncio.TimeoutError):
        logger.error("Timeout fetching URL: %s", url)
        raise HTTPException(status_code=502, detail="fetch failed: the target URL timed out.")
    except httpx.HTTPStatusError as exc:
        logger.error("HTTP error fetching URL %s: %s", url, exc)
        raise HTTPException(
            status_code=502, detail=f"Target URL returned HTTP {exc.response.status_code}."
        )
    except (httpx.RequestError, RuntimeError) as exc:
        logger.error("Error fetching URL %s: %s", url, exc)
        raise HTTPException(status_code=502, detail=f"fetch failed: {exc}")

"""Site summaries and advertising keywords from an OpenAI chat model.

The model is asked for strict JSON::

    {"summary": "...", "keywords": [...], "negative_keywords": [...]}

A reply that is not a JSON object is still usable: the raw text becomes the
summary and both keyword lists stay empty.  Transport failures, empty
replies and responses without a text message raise :class:`AISummaryError`
so the caller can fall back to the heuristic summary.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import List

import httpx

from sitecheck.config import Settings

logger = logging.getLogger(__name__)

MAX_INPUT_LENGTH = 4000

_PROMPT = """Ты — сервис классификации сайтов.

1) Кратко, одной деловой фразой по-русски опиши тематику сайта (сфера/услуга/товар и, если явно есть, город/бренд).
   Не добавляй лишних слов, без пояснений, без ссылок.

2) Сгенерируй список ключевых слов и фраз для запуска рекламы в Яндекс.Директ (30–40 штук, только по этому контенту).

3) Сформируй список минус-слов (30–50), чтобы отсеять нерелевантные запросы.

Верни СТРОГО валидный JSON ровно такой структуры (без пояснений снаружи):
{
  "summary": "краткое описание одной фразой",
  "keywords": ["...", "..."],
  "negative_keywords": ["...", "..."]
}

Контент сайта:
"""


class AISummaryError(RuntimeError):
    """The AI service produced no usable answer."""


@dataclass
class AISummary:
    summary: str
    keywords: List[str] = field(default_factory=list)
    negative_keywords: List[str] = field(default_factory=list)


def _string_list(value) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def parse_reply(raw: str) -> AISummary:
    """Turn the model's reply into an :class:`AISummary`.

    Malformed JSON, or a summary that is not a string, degrades to the
    raw reply as the summary.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return AISummary(summary=raw)
    if not isinstance(data, dict):
        return AISummary(summary=raw)

    summary = data.get("summary", "")
    if not isinstance(summary, str):
        return AISummary(summary=raw)
    return AISummary(
        summary=summary.strip(),
        keywords=_string_list(data.get("keywords")),
        negative_keywords=_string_list(data.get("negative_keywords")),
    )


def _reply_content(body) -> str:
    """Return the first choice's message content from a Chat Completions body."""
    choices = body.get("choices") if isinstance(body, dict) else None
    if not isinstance(choices, list):
        raise AISummaryError("malformed AI response")
    if not choices:
        raise AISummaryError("no choices from AI")

    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if content is None:
        return ""
    if not isinstance(content, str):
        raise AISummaryError("malformed AI response")
    return content


async def summarize_with_ai(text: str, settings: Settings, *, timeout: float) -> AISummary:
    """Ask the configured chat model to describe the site behind *text*.

    Args:
        text: Page text or a short domain/title brief; cut to
            ``MAX_INPUT_LENGTH`` characters.
        settings: Provides the API key, base URL and model name.
        timeout: Seconds allowed for the whole request.

    Raises:
        AISummaryError: on a missing API key, transport or HTTP errors,
            timeouts, or a response without text content.
    """
    if not settings.openai_api_key:
        raise AISummaryError("OPENAI_API_KEY is not set.")

    payload = {
        "model": settings.openai_model,
        "messages": [{"role": "user", "content": _PROMPT + text[:MAX_INPUT_LENGTH]}],
        "max_tokens": 800,
        "temperature": 0.2,
        "seed": 42,
    }

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.post(
                f"{settings.openai_base_url.rstrip('/')}/chat/completions",
                headers={"Authorization": f"Bearer {settings.openai_api_key}"},
                json=payload,
            )
            response.raise_for_status()
            body = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise AISummaryError(f"AI request failed: {exc}") from exc

    raw = _reply_content(body).strip()
    if not raw:
        raise AISummaryError("empty AI response")

    result = parse_reply(raw)
    logger.debug(
        "AI reply parsed",
        extra={"keywords": len(result.keywords), "negative_keywords": len(result.negative_keywords)},
    )
    return result

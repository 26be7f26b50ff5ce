"""Rule-based topic summaries for extracted page text.

:func:`heuristic_summarize` works through four tiers and stops at the first
one that produces output:

1. **Topic rules** – an ordered table of keyword predicates (:data:`RULES`).
   The first matching rule supplies a fixed summary.
2. **First sentence** – the text up to the first terminator, if it reads
   like a sentence of reasonable length.
3. **Any sentence** – the first sentence from :func:`split_sentences` that
   passes the same test.
4. **Excerpt** – the whitespace-collapsed text, cut to ``EXCERPT_LENGTH``.

Every path returns a non-empty string.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from sitecheck.services.sentences import TERMINATORS, split_sentences

SUMMARY_LABEL = "Краткое описание по тексту сайта: "
UNKNOWN_SUMMARY = "Информация о сайте не определена"

MIN_SENTENCE_LENGTH = 30
MAX_SENTENCE_LENGTH = 220
EXCERPT_LENGTH = 180


def _has_any(*keys: str) -> Callable[[str], bool]:
    return lambda text: any(key in text for key in keys)


def _has_both(left: Callable[[str], bool], right: Callable[[str], bool]) -> Callable[[str], bool]:
    return lambda text: left(text) and right(text)


@dataclass(frozen=True)
class Rule:
    """A named topic rule: *predicate* runs on the lower-cased page text."""

    name: str
    predicate: Callable[[str], bool]
    summary: str


# Precedence matters: specific marketplace signals must beat the generic store rule.
RULES: List[Rule] = [
    Rule(
        "marketplace",
        _has_both(
            _has_any("маркетплейс", "продавцы", "продавцов", "отзывы", "рейтинг"),
            _has_any("товар", "каталог", "купить", "цены", "доставка"),
        ),
        "Маркетплейс: товары от разных продавцов.",
    ),
    Rule(
        "yandex_market",
        _has_any("яндекс маркет", "market.yandex", "яндекс‑маркет", "yandex market"),
        "Маркетплейс: Яндекс Маркет (онлайн‑покупки).",
    ),
    Rule(
        "online_store",
        _has_any("каталог", "товар", "купить", "заказать", "цены", "доставка", "корзина"),
        "Интернет‑магазин (каталог товаров, покупки онлайн).",
    ),
    Rule(
        "food_delivery",
        _has_any("доставка еды", "пицца", "суши", "роллы", "бургер", "заказ еды"),
        "Доставка готовой еды.",
    ),
    Rule(
        "services",
        _has_any("услуги", "заказать услугу", "портфолио", "наши услуги"),
        "Сайт компании‑услугодателя.",
    ),
]


def match_rule(text: str) -> Optional[Rule]:
    """Return the first rule in :data:`RULES` matching *text*, if any."""
    lowered = text.lower()
    for rule in RULES:
        if rule.predicate(lowered):
            return rule
    return None


def is_noisy_sentence(sentence: str) -> bool:
    """Return True when *sentence* is unfit to describe the site."""
    lowered = sentence.strip().lower()
    if not lowered:
        return True
    if "{" in lowered or "}" in lowered or "widgets" in lowered:
        return True
    return not MIN_SENTENCE_LENGTH <= len(lowered) <= MAX_SENTENCE_LENGTH


def _first_sentence(text: str) -> str:
    end = next((i for i, ch in enumerate(text) if ch in TERMINATORS), -1)
    if end > 0:
        return text[: end + 1].strip()
    return text


def heuristic_summarize(text: str) -> str:
    """Summarize *text* in one line without calling any external service."""
    if not text:
        return UNKNOWN_SUMMARY

    rule = match_rule(text)
    if rule is not None:
        return rule.summary

    candidate = _first_sentence(text)
    if not is_noisy_sentence(candidate):
        return SUMMARY_LABEL + candidate

    for sentence in split_sentences(text):
        if not is_noisy_sentence(sentence):
            return SUMMARY_LABEL + sentence

    excerpt = " ".join(text.split())
    if len(excerpt) > EXCERPT_LENGTH:
        excerpt = excerpt[:EXCERPT_LENGTH] + "…"
    return SUMMARY_LABEL + excerpt

"""Tests for extractor.extract_visible_text."""

from unittest.mock import patch

from bs4.builder import ParserRejectedMarkup

from sitecheck.services.extractor import MAX_TEXT_BYTES, extract_visible_text, normalize_whitespace


def _page(head: str = "", body: str = "") -> str:
    return f"<!DOCTYPE html><html><head>{head}</head><body>{body}</body></html>"


class TestNormalizeWhitespace:
    def test_collapses_runs(self):
        assert normalize_whitespace("  Магазин \n\t  цветов  ") == "Магазин цветов"

    def test_empty(self):
        assert normalize_whitespace("   ") == ""


class TestFragmentOrder:
    def test_title_then_description_then_body(self):
        html = _page(
            head=(
                "<title>  Магазин   цветов </title>"
                '<meta name="description" content="Букеты с доставкой">'
            ),
            body="<p>Свежие букеты каждый день</p>",
        )
        assert extract_visible_text(html) == (
            "Магазин цветов Букеты с доставкой Свежие букеты каждый день"
        )

    def test_body_elements_in_document_order(self):
        html = _page(
            body=(
                "<p>Параграф перед заголовком</p>"
                "<h2>Подзаголовок страницы</h2>"
                "<ul><li>Элемент списка один</li></ul>"
                "<h1>Главный заголовок сайта</h1>"
            )
        )
        assert extract_visible_text(html) == (
            "Параграф перед заголовком Подзаголовок страницы "
            "Элемент списка один Главный заголовок сайта"
        )

    def test_other_elements_are_ignored(self):
        html = _page(body="<div>Текст внутри блока div</div><h4>Заголовок четвёртого уровня</h4>")
        assert extract_visible_text(html) == ""


class TestFragmentFilters:
    def test_short_body_fragments_dropped(self):
        html = _page(body="<p>Короткий</p><p>Достаточно длинный абзац</p>")
        assert extract_visible_text(html) == "Достаточно длинный абзац"

    def test_short_title_and_description_kept(self):
        html = _page(head='<title>Цветы</title><meta name="description" content="Букеты">')
        assert extract_visible_text(html) == "Цветы Букеты"

    def test_noisy_paragraph_dropped(self):
        html = _page(body='<p>{"config": true, "mode": 1}</p><p>Обычный текст абзаца</p>')
        assert extract_visible_text(html) == "Обычный текст абзаца"

    def test_noisy_title_dropped(self):
        html = _page(head="<title>{{ page.title }}</title>", body="<p>Обычный текст абзаца</p>")
        assert extract_visible_text(html) == "Обычный текст абзаца"

    def test_blank_title_dropped(self):
        html = _page(head="<title>   </title>", body="<p>Обычный текст абзаца</p>")
        assert extract_visible_text(html) == "Обычный текст абзаца"

    def test_structural_noise_removed(self):
        html = _page(
            body=(
                "<nav><p>Главная страница сайта</p></nav>"
                "<p>Основной текст страницы</p>"
                "<footer><p>Все права защищены 2024</p></footer>"
            )
        )
        assert extract_visible_text(html) == "Основной текст страницы"


class TestMetaDescription:
    def test_last_description_wins(self):
        html = _page(
            head=(
                '<meta name="description" content="Первое описание">'
                '<meta name="description" content="Второе описание">'
            )
        )
        assert extract_visible_text(html) == "Второе описание"

    def test_description_without_content_is_skipped(self):
        html = _page(
            head='<meta name="description" content="Реальное описание"><meta name="description">'
        )
        assert extract_visible_text(html) == "Реальное описание"


class TestLimits:
    def test_ascii_output_capped(self):
        text = extract_visible_text(_page(body="<p>" + "word " * 5000 + "</p>"))
        assert len(text) == MAX_TEXT_BYTES

    def test_cyrillic_output_capped_in_bytes(self):
        text = extract_visible_text(_page(body="<p>" + "слово " * 5000 + "</p>"))
        assert len(text.encode("utf-8")) <= MAX_TEXT_BYTES
        assert len(text) < MAX_TEXT_BYTES
        assert text.startswith("слово слово")

    def test_split_character_dropped(self):
        text = extract_visible_text(_page(body="<p>a" + "ж" * 15000 + "</p>"))
        assert text == "a" + "ж" * 9999

    def test_many_fragments_capped(self):
        body = "".join(f"<p>Абзац номер {i} с текстом</p>" for i in range(3000))
        assert len(extract_visible_text(_page(body=body)).encode("utf-8")) <= MAX_TEXT_BYTES


class TestDegradation:
    def test_empty_markup(self):
        assert extract_visible_text("") == ""

    def test_parser_rejection_returns_empty_string(self):
        with patch(
            "sitecheck.services.extractor.sanitize",
            side_effect=ParserRejectedMarkup("broken"),
        ):
            assert extract_visible_text("<p>Anything at all here</p>") == ""

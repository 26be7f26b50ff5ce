"""Tests for sanitizer.is_noisy and sanitize."""

import pytest

from sitecheck.services.sanitizer import is_noisy, sanitize


class TestIsNoisyBrackets:
    def test_curly_braces_are_noisy(self):
        assert is_noisy('window.__DATA__ = {"page": "home"}')

    @pytest.mark.parametrize(
        "fragment",
        ["{}", "{{ title }}", "Цена {price} руб", "}{", "text { more } text"],
    )
    def test_any_fragment_with_both_braces_is_noisy(self, fragment):
        assert is_noisy(fragment)

    def test_single_brace_alone_is_not_noisy(self):
        assert not is_noisy("Открытая скобка { без пары")

    def test_square_brackets_are_noisy(self):
        assert is_noisy("[et_pb_section] Раздел сайта")

    def test_single_square_bracket_is_not_noisy(self):
        assert not is_noisy("Пункт первый] и продолжение")


class TestIsNoisyVocabulary:
    def test_cookie_banner(self):
        assert is_noisy("Мы используем cookie для работы сайта")

    def test_widgets(self):
        assert is_noisy("Loading widgets")

    def test_tracking_is_case_insensitive(self):
        assert is_noisy("TRACKING pixel enabled")

    def test_plain_prose_is_clean(self):
        assert not is_noisy("Добро пожаловать в наш цветочный магазин")


class TestIsNoisyLetterDensity:
    def test_code_like_fragment(self):
        assert is_noisy("a=1;b=2;c=3;")

    def test_cyrillic_letters_count_as_letters(self):
        assert not is_noisy("ЁЛКИ И ПАЛКИ")

    def test_latin_prose_is_clean(self):
        assert not is_noisy("Hello World from the site")

    def test_digits_only_is_not_noisy(self):
        # No letters at all: the density rule does not apply.
        assert not is_noisy("8 800 555 35 35")

    def test_spaces_do_not_count_as_symbols(self):
        assert is_noisy("a  -  -  -") == is_noisy("a---")

    def test_phone_with_label_is_symbol_heavy(self):
        assert is_noisy("Тел: +7 (495) 123-45-67")


class TestSanitize:
    def test_removes_script_tags(self):
        soup = sanitize("<p>Text</p><script>alert('xss')</script>")
        assert "alert" not in soup.get_text()

    def test_removes_style_tags(self):
        soup = sanitize("<style>body { color: red; }</style><p>Text</p>")
        assert "color" not in soup.get_text()

    def test_removes_svg_tags(self):
        soup = sanitize("<p>Hello</p><svg><text>M0 0 L100 100</text></svg>")
        text = soup.get_text()
        assert "M0 0" not in text
        assert "Hello" in text

    def test_removes_template_tags(self):
        soup = sanitize("<p>Real</p><template><div>tmpl js code</div></template>")
        assert "tmpl js code" not in soup.get_text()
        assert "Real" in soup.get_text()

    def test_removes_noscript_and_iframe(self):
        soup = sanitize("<noscript>Enable JS</noscript><iframe>frame</iframe><p>Body</p>")
        text = soup.get_text()
        assert "Enable JS" not in text
        assert "frame" not in text
        assert "Body" in text

    def test_normal_content_preserved(self):
        html = "<h1>Title</h1><p>Paragraph <strong>bold</strong> text.</p>"
        soup = sanitize(html)
        assert "Title" in soup.get_text()
        assert "Paragraph" in soup.get_text()
        assert "bold" in soup.get_text()


class TestSanitizeStructuralNoise:
    def test_removes_nav_tag(self):
        soup = sanitize("<nav><a href='/'>Home</a><a href='/about'>About</a></nav><p>Content</p>")
        assert "Home" not in soup.get_text()
        assert "Content" in soup.get_text()

    def test_removes_aside_tag(self):
        soup = sanitize("<p>Main content</p><aside><p>Sidebar block</p></aside>")
        assert "Sidebar block" not in soup.get_text()
        assert "Main content" in soup.get_text()

    def test_removes_every_header_and_footer(self):
        html = (
            "<body>"
            "<header><a href='/'>Site Logo</a></header>"
            "<article><header><h1>Article Title</h1></header><p>Article body text.</p>"
            "<footer><p>Tags</p></footer></article>"
            "<footer><p>Site copyright</p></footer>"
            "</body>"
        )
        text = sanitize(html).get_text()
        assert "Site Logo" not in text
        assert "Article Title" not in text
        assert "Site copyright" not in text
        assert "Tags" not in text
        assert "Article body text." in text

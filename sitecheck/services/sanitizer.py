from bs4 import BeautifulSoup

# Tags whose entire subtree is removed before any text is collected
_REMOVE_TAGS = [
    "script",
    "style",
    "noscript",
    "nav",
    "header",
    "footer",
    "template",
    # Vector graphics produce raw coordinate/path noise in plain text
    "svg",
    "iframe",
    "aside",
]

# Widget / consent-banner / analytics vocabulary that marks a fragment as boilerplate
NOISE_WORDS = ("widgets", "cookie", "tracking")

# Maximum ratio of non-letter to letter characters before a fragment looks like code
_SYMBOL_RATIO_LIMIT = 0.7


def _is_letter(ch: str) -> bool:
    return "a" <= ch <= "z" or "а" <= ch <= "я" or ch == "ё"


def is_noisy(fragment: str) -> bool:
    """Return True when *fragment* looks like markup residue rather than prose.

    The checks run on the lower-cased fragment:

    * both curly braces present (inline JSON / script),
    * both square brackets present (template or array syntax),
    * widget, cookie or tracking vocabulary,
    * too many symbols per letter (minified code, CSS, coordinates).
    """
    lowered = fragment.lower()
    if "{" in lowered and "}" in lowered:
        return True
    if "[" in lowered and "]" in lowered:
        return True
    if any(word in lowered for word in NOISE_WORDS):
        return True

    letters = 0
    others = 0
    for ch in lowered:
        if _is_letter(ch):
            letters += 1
        elif ch != " ":
            others += 1
    return letters > 0 and others / (letters + 1) > _SYMBOL_RATIO_LIMIT


def sanitize(html: str) -> BeautifulSoup:
    """Parse *html* and drop scripting, navigation and decoration subtrees."""
    soup = BeautifulSoup(html, "lxml")

    for tag in soup.find_all(_REMOVE_TAGS):
        # Nested matches (a nav inside a header) go with their ancestor
        if not tag.decomposed:
            tag.decompose()

    return soup

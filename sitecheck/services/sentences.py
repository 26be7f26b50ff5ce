from typing import List

TERMINATORS = ".!?…"


def split_sentences(text: str) -> List[str]:
    """Split *text* after every terminator character.

    Each sentence keeps its terminator and is stripped of surrounding
    whitespace; blank spans are skipped and any unterminated tail becomes
    the final sentence.
    """
    sentences: List[str] = []
    start = 0
    for i, ch in enumerate(text):
        if ch in TERMINATORS:
            part = text[start : i + 1].strip()
            if part:
                sentences.append(part)
            start = i + 1

    tail = text[start:].strip()
    if tail:
        sentences.append(tail)
    return sentences

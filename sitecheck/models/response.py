from typing import List, Literal, Optional

from pydantic import BaseModel


class ClassifyResponse(BaseModel):
    summary: str
    lang: Literal["ru"] = "ru"
    source: Literal["ai", "heuristic"]
    """Provenance of ``summary``: the AI model or the built-in heuristics."""
    keywords: Optional[List[str]] = None
    negative_keywords: Optional[List[str]] = None

from __future__ import annotations
import re
import unicodedata
from typing import Iterable, List

NUMBER_TOKEN = "num"

_DIGITS = re.compile(r"\d+")
_NON_LETTER = re.compile(r"[^a-z\s]")
_SPACES = re.compile(r"\s+")
_WORD = re.compile(r"\b[a-z]{4,}\b")
_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```$")


def normalize(text: str) -> str:
    """Canonical form of a problem text, used only for duplicate detection.

    Numbers collapse to a single placeholder, so "Buy 3 apples" and
    "Buy 57 apples" compare equal.
    """
    lowered = (text or "").lower()
    decomposed = unicodedata.normalize("NFKD", lowered)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    masked = _DIGITS.sub(NUMBER_TOKEN, stripped)
    letters = _NON_LETTER.sub(" ", masked)
    return _SPACES.sub(" ", letters).strip()


def unfence(text: str) -> str:
    # Models sometimes wrap JSON in ```json ... ``` despite being told not to
    return _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", (text or "").strip())).strip()


def banned_words(texts: Iterable[str], limit: int = 40) -> List[str]:
    seen: List[str] = []
    for word in _WORD.findall(" ".join(texts).lower()):
        if word not in seen:
            seen.append(word)
            if len(seen) >= limit:
                break
    return seen

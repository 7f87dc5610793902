"""Text normalization and boundary-aware keyword matching.

Every keyword and every piece of product text goes through the same
``normalize_text`` before matching:

    "Blusa Manga-Larga (Lino)"  ->  "blusa manga larga lino"

A single-word keyword matches only a whole token; a multi-word keyword
matches only a contiguous token sequence.
"""
import re
import unicodedata
from dataclasses import dataclass, field
from typing import Any, FrozenSet, Iterable, List, Optional, Sequence, Tuple


_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_HTML_TAG = re.compile(r"</?[a-zA-Z][^>]*>")


def normalize_text(value: Any) -> str:
    """Lower-case, strip accents, collapse non-alphanumerics to single spaces.

    Args:
        value: Any value; ``None`` becomes an empty string

    Returns:
        Normalized text with single spaces and no leading/trailing space
    """
    if value is None:
        return ""
    text = _HTML_TAG.sub(" ", str(value))
    text = unicodedata.normalize("NFD", text.lower())
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    return _NON_ALNUM.sub(" ", text).strip()


@dataclass(frozen=True)
class NormalizedText:
    """Normalized text prepared for repeated keyword lookups."""

    text: str
    tokens: Tuple[str, ...] = field(default=(), compare=False)
    token_set: FrozenSet[str] = field(default=frozenset(), compare=False)

    @classmethod
    def of(cls, *parts: Any) -> "NormalizedText":
        """Normalize and join any number of raw text parts."""
        joined = " ".join(p for p in (normalize_text(part) for part in parts) if p)
        tokens = tuple(joined.split()) if joined else ()
        return cls(text=joined, tokens=tokens, token_set=frozenset(tokens))

    @property
    def padded(self) -> str:
        return f" {self.text} "

    def __bool__(self) -> bool:
        return bool(self.text)

    def contains(self, keyword: str) -> bool:
        """Boundary-aware match of an already normalized keyword."""
        if not keyword:
            return False
        if " " not in keyword:
            return keyword in self.token_set
        return f" {keyword} " in self.padded

    def contains_any(self, keywords: Iterable[str]) -> bool:
        return any(self.contains(keyword) for keyword in keywords)

    def matched(self, keywords: Iterable[str]) -> List[str]:
        """Keywords present in the text, sorted for stable reasons."""
        return sorted({keyword for keyword in keywords if self.contains(keyword)})


def is_phrase(keyword: str) -> bool:
    return " " in keyword


def keyword_weight(keyword: str) -> int:
    """+1 for a single word, +2 for a phrase."""
    return 2 if is_phrase(keyword) else 1


def score_text(text: NormalizedText, keywords: Iterable[str]) -> Tuple[int, List[str]]:
    """Score text against a keyword set.

    Each keyword counts once, however often it appears.

    Returns:
        Tuple of (score, matched keywords)
    """
    matched = text.matched(keywords)
    return sum(keyword_weight(keyword) for keyword in matched), matched


def normalize_keywords(values: Iterable[Any]) -> Tuple[str, ...]:
    """Normalize and deduplicate keywords, keeping first-seen order."""
    seen = []
    for value in values:
        keyword = normalize_text(value)
        if keyword and keyword not in seen:
            seen.append(keyword)
    return tuple(seen)


def to_slug(value: Any) -> str:
    return normalize_text(value).replace(" ", "_")


def normalize_enum_value(value: Any, allowed: Sequence[str]) -> Optional[str]:
    """Exact slug match against an allow-list, else ``None``."""
    if value is None:
        return None
    slug = to_slug(value)
    if slug and slug in allowed:
        return slug
    return None

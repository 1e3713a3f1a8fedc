"""Keyword categorization of freeform market text into the fixed Category set."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from functools import lru_cache
from typing import Any

from predvenue.models.market import Category

# (category, keywords) in priority order; first match wins.
KeywordTable = Sequence[tuple[Category, Sequence[str]]]

DEFAULT_CATEGORY = Category.ENTERTAINMENT

# Keywords this long also match common inflections (polls, elections, presidential, voters).
# Shorter ones ("win", "eth", "fed") match only as the exact word.
INFLECT_MIN_LEN = 4
_INFLECTIONS = r"(?:s|es|d|ed|rs|ers|al|ial|ing|ships?)?"


@lru_cache(maxsize=None)
def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    suffix = _INFLECTIONS if len(keyword) >= INFLECT_MIN_LEN else ""
    return re.compile(rf"(?<![a-z0-9]){re.escape(keyword)}{suffix}(?![a-z0-9])")


def tag_labels(tags: Any) -> list[str]:
    """Lowercased tag labels. Accepts plain strings or Gamma tag objects ({label, slug})."""
    if not isinstance(tags, list):
        return []
    labels = []
    for tag in tags:
        if isinstance(tag, str):
            labels.append(tag.strip().lower())
        elif isinstance(tag, dict):
            for key in ("label", "slug"):
                value = tag.get(key)
                if isinstance(value, str) and value:
                    labels.append(value.strip().lower())
    return labels


def matches_keyword(text: str, keyword: str) -> bool:
    """Word match of a lowercase keyword (or an inflection of it) inside lowercase text."""
    return bool(_keyword_pattern(keyword).search(text))


def categorize(
    texts: Iterable[str | None],
    tags: Iterable[str],
    table: KeywordTable,
    default: Category = DEFAULT_CATEGORY,
) -> Category:
    """Return the first category whose keywords appear in any text or equal any tag."""
    haystack = " \n ".join(t.lower() for t in texts if t)
    tag_set = {t.lower() for t in tags}
    for category, keywords in table:
        for kw in keywords:
            if kw in tag_set or matches_keyword(haystack, kw):
                return category
    return default

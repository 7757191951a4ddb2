"""Placeholders for words that are used in code but were never translated."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Union

from .compactor import check_category_name
from .models import DEFAULT_CATEGORY, CodeWords, CompactTable

logger = logging.getLogger(__name__)


def _unique(words: Iterable[str]) -> List[str]:
    seen: set[str] = set()
    result: List[str] = []
    for word in words:
        if word not in seen:
            seen.add(word)
            result.append(word)
    return result


def _fill(table: CompactTable, category: str, words: Iterable[str]) -> int:
    unique = _unique(words)
    if not unique:
        return 0
    bucket = table.setdefault(category, {})
    added = 0
    for word in unique:
        if word not in bucket:
            bucket[word] = None
            added += 1
    return added


def fill_untranslated_words(
    table: CompactTable, code_words: Union[CodeWords, Mapping[str, Any]]
) -> CompactTable:
    """Add a ``None`` entry for every code word missing from ``table``.

    The table is extended in place and returned. Existing entries are never
    touched, even when no code references them any more.

    Raises:
        ConfigurationError: a category of ``code_words`` uses a reserved name.
    """
    if not isinstance(code_words, CodeWords):
        code_words = CodeWords.from_mapping(code_words)

    for category in code_words.categories:
        check_category_name(category)

    added = _fill(table, DEFAULT_CATEGORY, code_words.defaults)
    for category, words in code_words.categories.items():
        added += _fill(table, category, words)

    if added:
        logger.debug("Added %d placeholder words", added)
    return table

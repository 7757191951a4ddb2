"""Compaction of per-language translation results into a single table.

The table groups translations by category and source word. Each word maps to
a list with one slot per language (in sorted language order). A translation
that already occurred for an earlier language of the same word is stored as
the index of that earlier slot instead of repeating the string.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .models import (
    DEFAULT_CATEGORY,
    LANGUAGES_KEY,
    RESERVED_PREFIX,
    CompactTable,
    ConfigurationError,
    LanguageResult,
    TableStats,
    WordEntry,
)

logger = logging.getLogger(__name__)

_RESERVED_NAMES = {
    DEFAULT_CATEGORY: "`*` is a reserved category name",
    LANGUAGES_KEY: "`$` is a reserved category name",
}

TranslateData = Mapping[str, Union[LanguageResult, Mapping[str, Any]]]


def _as_result(value: Union[LanguageResult, Mapping[str, Any]]) -> LanguageResult:
    if isinstance(value, LanguageResult):
        return value
    return LanguageResult.from_mapping(value)


def reserved_name_reason(name: object) -> Optional[str]:
    """Return why ``name`` cannot be used as a category, or ``None`` if it can."""
    text = str(name)
    if text in _RESERVED_NAMES:
        return _RESERVED_NAMES[text]
    if text.startswith(RESERVED_PREFIX):
        return f"`$...` names are reserved (got {text!r})"
    return None


def check_category_name(name: object) -> None:
    """Raise :class:`ConfigurationError` if ``name`` is reserved."""
    reason = reserved_name_reason(name)
    if reason is not None:
        raise ConfigurationError(reason)


def _record(
    table: CompactTable,
    category: str,
    word: str,
    translation: str,
    lang_index: int,
    lang_count: int,
) -> None:
    words = table.setdefault(category, {})
    entry = words.get(word)
    if entry is None:
        entry = words[word] = [None] * lang_count
    else:
        for index, previous in enumerate(entry[:lang_index]):
            if isinstance(previous, str) and previous == translation:
                entry[lang_index] = index
                return
    entry[lang_index] = translation


def js_sort_key(text: str) -> bytes:
    """Sort key matching JavaScript's default sort (UTF-16 code units)."""
    return text.encode("utf-16-be", "surrogatepass")


def _check_translations(lang: str, words: Mapping[str, Any]) -> None:
    for word, translation in words.items():
        if translation is not None and not isinstance(translation, str):
            raise ValueError(
                f"Translation of {word!r} for {lang!r} must be a string, got {translation!r}"
            )


def to_translate_table(data: TranslateData) -> CompactTable:
    """Return the compact table for the per-language results in ``data``.

    Raises:
        ConfigurationError: a category is named ``*``, ``$`` or ``$...``.
            Nothing is built in that case.
        ValueError: a translation is neither a string nor ``None``; a number
            could not be told apart from a back-reference.
    """
    languages = sorted(data, key=js_sort_key)
    results = {lang: _as_result(data[lang]) for lang in languages}

    for lang, result in results.items():
        _check_translations(lang, result.defaults)
        for category, words in result.categories.items():
            check_category_name(category)
            _check_translations(lang, words)

    table: CompactTable = {}
    if languages:
        table[LANGUAGES_KEY] = list(languages)

    lang_count = len(languages)
    for lang_index, lang in enumerate(languages):
        result = results[lang]
        for word, translation in result.defaults.items():
            if translation is None:
                continue
            _record(table, DEFAULT_CATEGORY, word, translation, lang_index, lang_count)

        for category, words in result.categories.items():
            for word, translation in words.items():
                if translation is None:
                    continue
                _record(table, category, word, translation, lang_index, lang_count)

    logger.debug(
        "Compacted %d languages into %d categories",
        lang_count,
        len(table) - (1 if languages else 0),
    )
    return table


def resolve_entry(entry: Iterable[Any]) -> List[Optional[str]]:
    """Return ``entry`` with every back-reference replaced by its string."""
    slots = list(entry)
    resolved: List[Optional[str]] = []
    for position, slot in enumerate(slots):
        if isinstance(slot, bool):
            raise ValueError(f"Invalid slot value at {position}: {slot!r}")
        if isinstance(slot, int):
            if not 0 <= slot < position or not isinstance(slots[slot], str):
                raise ValueError(
                    f"Back-reference at {position} does not point to an earlier translation: {slot}"
                )
            resolved.append(slots[slot])
        elif slot is None or isinstance(slot, str):
            resolved.append(slot)
        else:
            raise ValueError(f"Invalid slot value at {position}: {slot!r}")
    return resolved


def expand_table(table: CompactTable) -> Dict[str, LanguageResult]:
    """Turn a compact table back into per-language results.

    Placeholders and absent slots carry no translation and are skipped.
    """
    languages = list(table.get(LANGUAGES_KEY) or [])
    results = {lang: LanguageResult() for lang in languages}

    for category, words in table.items():
        if category == LANGUAGES_KEY or not words:
            continue
        for word, entry in words.items():
            if entry is None:
                continue
            resolved = resolve_entry(entry)
            if len(resolved) > len(languages):
                raise ValueError(
                    f"Entry {category}/{word} has {len(resolved)} slots for {len(languages)} languages"
                )
            for lang, translation in zip(languages, resolved):
                if translation is None:
                    continue
                result = results[lang]
                if category == DEFAULT_CATEGORY:
                    result.defaults[word] = translation
                else:
                    result.categories.setdefault(category, {})[word] = translation
    return results


def table_stats(table: CompactTable) -> TableStats:
    """Count languages, categories, words, placeholders and back-references."""
    stats = TableStats(languages=len(table.get(LANGUAGES_KEY) or []))
    for category, words in table.items():
        if category == LANGUAGES_KEY:
            continue
        stats.categories += 1
        for entry in (words or {}).values():
            stats.words += 1
            if entry is None:
                stats.placeholders += 1
                continue
            stats.back_references += sum(
                1 for slot in entry if isinstance(slot, int) and not isinstance(slot, bool)
            )
    return stats

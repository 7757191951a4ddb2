"""Dataclasses and type aliases describing translation tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

DEFAULT_CATEGORY = "*"
LANGUAGES_KEY = "$"
RESERVED_PREFIX = "$"

# A slot holds the literal translation, a back-reference to an earlier slot of
# the same entry, or ``None`` when the language has no translation.
Slot = Union[str, int, None]
WordEntry = List[Slot]
# ``None`` marks a placeholder: the word is used in code but never translated.
CategoryWords = Dict[str, Optional[WordEntry]]
CompactTable = Dict[str, Any]


class ConfigurationError(ValueError):
    """Raised when the caller declares a category under a reserved name."""


@dataclass
class LanguageResult:
    """Resolved translations for one language.

    Attributes:
        defaults: Source word to translation for the uncategorized bucket.
        categories: Category name to a source word -> translation mapping.
    """

    defaults: Dict[str, str] = field(default_factory=dict)
    categories: Dict[str, Dict[str, str]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "LanguageResult":
        """Build a result from ``{"defaults": ..., "categories": ...}``.

        The upper-case keys ``DEFAULTS`` and ``SUBTYPES`` written by older
        caches are accepted as well.

        Raises:
            ValueError: a part has the wrong shape or a translation is
                neither a string nor ``None``.
        """
        defaults = raw.get("defaults", raw.get("DEFAULTS")) or {}
        categories = raw.get("categories", raw.get("SUBTYPES")) or {}
        if not isinstance(categories, Mapping):
            raise ValueError(f"Invalid categories: {categories!r}")
        return cls(
            defaults=_translations(defaults, "defaults"),
            categories={
                name: _translations(words or {}, f"category {name!r}")
                for name, words in categories.items()
            },
        )


def _translations(raw: object, where: str) -> Dict[str, str]:
    if not isinstance(raw, Mapping):
        raise ValueError(f"Invalid translations in {where}: {raw!r}")
    for word, translation in raw.items():
        if translation is not None and not isinstance(translation, str):
            raise ValueError(f"Invalid translation for {word!r} in {where}: {translation!r}")
    return dict(raw)


def _words(raw: object, where: str) -> List[str]:
    if not isinstance(raw, (list, tuple)):
        raise ValueError(f"Invalid word list in {where}: {raw!r}")
    for word in raw:
        if not isinstance(word, str):
            raise ValueError(f"Invalid word in {where}: {word!r}")
    return list(raw)


@dataclass
class CodeWords:
    """Words found in source code that need a translation.

    Attributes:
        defaults: Words of the uncategorized bucket.
        categories: Category name to the words used under that category.
    """

    defaults: List[str] = field(default_factory=list)
    categories: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "CodeWords":
        defaults = raw.get("defaults", raw.get("DEFAULTS")) or []
        categories = raw.get("categories", raw.get("SUBTYPES")) or {}
        if not isinstance(categories, Mapping):
            raise ValueError(f"Invalid categories: {categories!r}")
        return cls(
            defaults=_words(defaults, "defaults"),
            categories={
                name: _words(words or [], f"category {name!r}")
                for name, words in categories.items()
            },
        )


@dataclass
class TableStats:
    """Summary counts of a compact table."""

    languages: int = 0
    categories: int = 0
    words: int = 0
    placeholders: int = 0
    back_references: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {
            "languages": self.languages,
            "categories": self.categories,
            "words": self.words,
            "placeholders": self.placeholders,
            "back_references": self.back_references,
        }

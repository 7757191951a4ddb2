"""Conversion of a compact table into commented JavaScript source.

Keys are emitted in a fixed order so that regenerating the file after the
data set grew touches as few lines as possible: the language list ``$``
first, the default bucket ``*`` second, then all other categories sorted by
name. Words inside a category are sorted as well. Sorting compares UTF-16
code units, the order JavaScript tooling uses for the same keys.

Placeholder words (``None`` entries) are not emitted as data. They become
line comments attached to the next real property of their category, or to
the last one when no property follows. A category holding nothing but
placeholders gets a flagged carrier property ``'': null`` which is removed
from the rendered text again, leaving only the comments.
"""

from __future__ import annotations

import logging
import re
from types import ModuleType
from typing import Any, List, Mapping, Optional, Tuple

from . import jsast
from .compactor import js_sort_key
from .models import DEFAULT_CATEGORY, LANGUAGES_KEY, CompactTable

logger = logging.getLogger(__name__)

EMPTY_CODE = "{}"

# Carrier properties render on their own line as ``'': null``.
_PLACEHOLDER_RE = re.compile(r""",?\n[ \t]*(['"])\1[ \t]*:[ \t]*null(?=\n)""")

# (word, array node, comments collected before the word)
_Pending = Tuple[str, Any, List[Any]]


def _slot_to_ast(value: Any, backend: ModuleType) -> Any:
    if value is None:
        return None
    if isinstance(value, str) and value == "":
        return backend.ArrayExpression([])
    return backend.const_to_ast(value)


def _comment_for(word: str, quotes: str, backend: ModuleType) -> Any:
    key = backend.tocode(backend.const_to_ast(word), quotes=quotes)
    return backend.LineComment(" " + key + ":")


def _word_step(
    state: Tuple[List[Any], List[_Pending]],
    word: str,
    entry: Optional[List[Any]],
    quotes: str,
    backend: ModuleType,
) -> Tuple[List[Any], List[_Pending]]:
    pending, emitted = state
    if entry is None:
        return pending + [_comment_for(word, quotes, backend)], emitted

    value = backend.ArrayExpression([_slot_to_ast(slot, backend) for slot in entry])
    return [], emitted + [(word, value, pending)]


def words_to_ast(
    words: Optional[Mapping[str, Any]],
    quotes: str = "single",
    backend: ModuleType = jsast,
) -> Any:
    """Return the object node for the words of one category."""
    state: Tuple[List[Any], List[_Pending]] = ([], [])
    for word in sorted(words or {}, key=js_sort_key):
        state = _word_step(state, word, words[word], quotes, backend)

    pending, emitted = state
    if pending:
        logger.debug("%d trailing untranslated words emitted as comments", len(pending))
    if pending and emitted:
        word, value, comments = emitted[-1]
        emitted = emitted[:-1] + [(word, value, comments + pending)]
        pending = []

    properties = []
    for word, value, comments in emitted:
        prop = backend.Property(word, value)
        prop.leading_comments = comments
        properties.append(prop)

    if pending:
        carrier = backend.Property("", backend.const_to_ast(None))
        carrier.leading_comments = pending
        properties.append(backend.set_flag(carrier, backend.PLACEHOLDER_WORD))

    return backend.ObjectExpression(properties)


def table_to_ast(
    table: CompactTable,
    quotes: str = "single",
    backend: ModuleType = jsast,
) -> Optional[Any]:
    """Return the object node for ``table`` or ``None`` if it has no content."""
    properties = []

    languages = table.get(LANGUAGES_KEY)
    if languages:
        items = [backend.const_to_ast(lang) for lang in languages]
        properties.append(backend.Property(LANGUAGES_KEY, backend.ArrayExpression(items)))

    keys = sorted(
        (key for key in table if key not in (LANGUAGES_KEY, DEFAULT_CATEGORY)),
        key=js_sort_key,
    )
    if table.get(DEFAULT_CATEGORY) is not None:
        keys.insert(0, DEFAULT_CATEGORY)

    for key in keys:
        properties.append(
            backend.Property(key, words_to_ast(table[key], quotes=quotes, backend=backend))
        )

    if properties:
        return backend.ObjectExpression(properties)
    return None


def strip_placeholders(code: str) -> str:
    """Remove rendered carrier properties, keeping their comments."""
    return _PLACEHOLDER_RE.sub("", code)


def generate_code(
    table: CompactTable,
    indent: int = 4,
    quotes: str = "single",
    backend: ModuleType = jsast,
) -> str:
    """Render ``table`` as a JavaScript object literal.

    Returns ``"{}"`` for a table without content.
    """
    ast = table_to_ast(table, quotes=quotes, backend=backend)
    if ast is None:
        return EMPTY_CODE
    code = backend.tocode(ast, indent=indent, quotes=quotes)
    return strip_placeholders(code)

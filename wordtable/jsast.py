"""Minimal JavaScript expression tree and renderer.

Only the node types needed to emit object literals are supported: objects,
arrays (with holes), properties with leading line comments, and literal
constants. ``tocode`` turns a tree into source text; it takes care of
indentation and string escaping so callers never build text by hand.
"""

from __future__ import annotations

import contextlib
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Set, Union

PLACEHOLDER_WORD = "placeholder_word"

QUOTES = {"single": "'", "double": '"'}

_ESCAPES = {
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
    "\v": "\\v",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass
class Literal:
    value: Union[str, int, float, bool, None]


@dataclass
class LineComment:
    value: str


@dataclass
class ArrayExpression:
    # ``None`` elements are holes.
    elements: List[Optional["Node"]] = field(default_factory=list)


@dataclass
class Property:
    key: str
    value: "Node"
    leading_comments: List[LineComment] = field(default_factory=list)
    flags: Set[str] = field(default_factory=set)


@dataclass
class ObjectExpression:
    properties: List[Property] = field(default_factory=list)


Node = Union[Literal, ArrayExpression, ObjectExpression]


def const_to_ast(value: object) -> Literal:
    """Wrap a constant in a :class:`Literal` node."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return Literal(value)
    raise TypeError(f"Cannot express {type(value).__name__} as a literal")


def set_flag(node: Property, flag: str) -> Property:
    node.flags.add(flag)
    return node


def has_flag(node: Property, flag: str) -> bool:
    return flag in node.flags


def quote_string(text: str, quote: str = "'") -> str:
    """Return ``text`` as a quoted JavaScript string literal."""
    out = []
    for ch in text:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ch == quote:
            out.append("\\" + ch)
        elif ord(ch) < 0x20 or ch == "\x7f":
            out.append("\\x%02x" % ord(ch))
        else:
            out.append(ch)
    return quote + "".join(out) + quote


class _Writer:
    """Line builder tracking the current nesting level."""

    def __init__(self, indent: int, quote: str) -> None:
        self._lines: List[str] = [""]
        self._level = 0
        self._indent = " " * indent
        self.quote = quote

    @contextlib.contextmanager
    def block(self) -> Iterator[None]:
        self._level += 1
        yield
        self._level -= 1

    def write(self, text: str) -> None:
        self._lines[-1] += text

    def newline(self) -> None:
        self._lines.append(self._indent * self._level)

    def __str__(self) -> str:
        return "\n".join(line.rstrip() for line in self._lines)


def _literal(node: Literal, quote: str) -> str:
    value = node.value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return quote_string(value, quote)
    raise TypeError(f"Unsupported literal value: {value!r}")


def _emit(node: object, out: _Writer) -> None:
    if isinstance(node, Literal):
        out.write(_literal(node, out.quote))
    elif isinstance(node, ArrayExpression):
        out.write("[")
        for index, element in enumerate(node.elements):
            if index:
                out.write(", " if element is not None else ",")
            if element is not None:
                _emit(element, out)
        # A trailing hole needs its own comma to keep the array length.
        if node.elements and node.elements[-1] is None:
            out.write(",")
        out.write("]")
    elif isinstance(node, ObjectExpression):
        if not node.properties:
            out.write("{}")
            return
        out.write("{")
        with out.block():
            last = len(node.properties) - 1
            for index, prop in enumerate(node.properties):
                for comment in prop.leading_comments:
                    out.newline()
                    out.write("//" + comment.value)
                out.newline()
                out.write(quote_string(prop.key, out.quote) + ": ")
                _emit(prop.value, out)
                if index != last:
                    out.write(",")
        out.newline()
        out.write("}")
    else:
        raise TypeError(f"Unsupported node: {type(node).__name__}")


def tocode(node: object, indent: int = 4, quotes: str = "single") -> str:
    """Render ``node`` as JavaScript source text."""
    try:
        quote = QUOTES[quotes]
    except KeyError:
        raise ValueError(f"Unknown quote style: {quotes!r}") from None
    out = _Writer(indent, quote)
    _emit(node, out)
    return str(out)

from wordtable import jsast
from wordtable.compactor import to_translate_table
from wordtable.gap_filler import fill_untranslated_words
from wordtable.tree_builder import (
    generate_code,
    strip_placeholders,
    table_to_ast,
    words_to_ast,
)


def _lang(defaults=None, categories=None):
    return {"defaults": defaults or {}, "categories": categories or {}}


def test_simple_table():
    table = {"$": ["en", "fr"], "*": {"hello": ["Hello", "Bonjour"]}}
    assert generate_code(table) == (
        "{\n"
        "    '$': ['en', 'fr'],\n"
        "    '*': {\n"
        "        'hello': ['Hello', 'Bonjour']\n"
        "    }\n"
        "}"
    )


def test_untranslated_word_becomes_comment():
    data = {"en": _lang({"hello": "Hello"}), "fr": _lang({"hello": "Bonjour"})}
    table = fill_untranslated_words(to_translate_table(data), {"defaults": ["bye"]})
    code = generate_code(table)
    assert "// 'bye':" in code
    assert "'bye': " not in code
    assert code == (
        "{\n"
        "    '$': ['en', 'fr'],\n"
        "    '*': {\n"
        "        // 'bye':\n"
        "        'hello': ['Hello', 'Bonjour']\n"
        "    }\n"
        "}"
    )


def test_placeholder_only_category_leaves_only_comments():
    table = {
        "$": ["en"],
        "*": {"hello": ["Hello"]},
        "menu": {"open": None, "close": None},
    }
    code = generate_code(table)
    assert code == (
        "{\n"
        "    '$': ['en'],\n"
        "    '*': {\n"
        "        'hello': ['Hello']\n"
        "    },\n"
        "    'menu': {\n"
        "        // 'close':\n"
        "        // 'open':\n"
        "    }\n"
        "}"
    )
    assert "null" not in code


def test_trailing_placeholders_attach_to_last_property():
    table = {"$": ["en"], "tips": {"a": None, "b": ["B"], "c": None}}
    code = generate_code(table)
    assert code == (
        "{\n"
        "    '$': ['en'],\n"
        "    'tips': {\n"
        "        // 'a':\n"
        "        // 'c':\n"
        "        'b': ['B']\n"
        "    }\n"
        "}"
    )


def test_empty_table_gives_empty_object():
    table = fill_untranslated_words(to_translate_table({}), {"defaults": [], "categories": {}})
    assert table_to_ast(table) is None
    assert generate_code(table) == "{}"


def test_key_order_is_fixed():
    table = {
        "zeta": {"z": ["Z"]},
        "*": {"a": ["A"]},
        "alpha": {"b": ["B"]},
        "$": ["en"],
    }
    ast = table_to_ast(table)
    assert [prop.key for prop in ast.properties] == ["$", "*", "alpha", "zeta"]


def test_words_are_sorted():
    node = words_to_ast({"b": ["B"], "a": ["A"], "c": ["C"]})
    assert [prop.key for prop in node.properties] == ["a", "b", "c"]


def test_slots_render_holes_empty_arrays_and_references():
    table = {"$": ["de", "en", "fr", "it"], "*": {"x": [None, "", 1, None]}}
    code = generate_code(table)
    assert "'x': [, [], 1,,]" in code


def test_carrier_property_is_flagged():
    node = words_to_ast({"open": None})
    assert len(node.properties) == 1
    carrier = node.properties[0]
    assert carrier.key == ""
    assert jsast.has_flag(carrier, jsast.PLACEHOLDER_WORD)
    assert [c.value for c in carrier.leading_comments] == [" 'open':"]


def test_comment_escapes_word():
    node = words_to_ast({"it's\n": None, "z": ["Z"]})
    comment = node.properties[0].leading_comments[0]
    assert comment.value == " 'it\\'s\\n':"


def test_strip_placeholders_keeps_comments():
    code = "{\n    'm': {\n        // 'a':\n        '': null\n    }\n}"
    assert strip_placeholders(code) == "{\n    'm': {\n        // 'a':\n    }\n}"


def test_strip_placeholders_ignores_string_content():
    code = "{\n    '*': {\n        'a': ['say \"\": null']\n    }\n}"
    assert strip_placeholders(code) == code


def test_double_quotes_and_indent():
    table = {"$": ["en"], "menu": {"open": None, "it's": ["It's"]}}
    code = generate_code(table, indent=2, quotes="double")
    assert code == (
        "{\n"
        '  "$": ["en"],\n'
        '  "menu": {\n'
        '    // "open":\n'
        '    "it\'s": ["It\'s"]\n'
        "  }\n"
        "}"
    )


def test_output_is_deterministic():
    data = {
        "fr": _lang({"b": "B", "a": "A"}, {"m": {"x": "X"}}),
        "en": _lang({"a": "A"}, {"m": {"y": "Y"}}),
    }
    words = {"defaults": ["c", "a"], "categories": {"m": ["z"]}}
    first = generate_code(fill_untranslated_words(to_translate_table(data), words))
    second = generate_code(fill_untranslated_words(to_translate_table(dict(reversed(list(data.items())))), words))
    assert first == second


def test_words_sort_by_utf16_code_units():
    node = words_to_ast({"！": ["B"], "\U0001f600": ["A"], "a": ["C"]})
    assert [prop.key for prop in node.properties] == ["a", "\U0001f600", "！"]

import json

import pytest

from wordtable.models import CodeWords, LanguageResult
from wordtable.storage import (
    load_code_words,
    load_table,
    load_translate_data,
    save_code,
    save_table,
)


def test_load_missing_returns_empty(tmp_path):
    assert load_translate_data(tmp_path / "missing.json") == {}
    assert load_code_words(tmp_path / "missing.json") == CodeWords()
    assert load_table(tmp_path / "missing.json") == {}


def test_load_translate_data(tmp_path):
    data = {"de": {"defaults": {"hello": "Hallo"}, "categories": {"menu": {"open": "Öffnen"}}}}
    path = tmp_path / "data.json"
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    loaded = load_translate_data(path)
    assert loaded == {
        "de": LanguageResult(defaults={"hello": "Hallo"}, categories={"menu": {"open": "Öffnen"}})
    }


def test_load_utf16_file(tmp_path):
    path = tmp_path / "words.json"
    path.write_text(json.dumps({"defaults": ["Größe"]}, ensure_ascii=False), encoding="utf-16")
    assert load_code_words(path).defaults == ["Größe"]


def test_load_utf8_bom(tmp_path):
    path = tmp_path / "words.json"
    path.write_bytes(b"\xef\xbb\xbf" + json.dumps({"defaults": ["a"]}).encode("utf-8"))
    assert load_code_words(path).defaults == ["a"]


def test_load_with_control_chars(tmp_path):
    path = tmp_path / "table.json"
    path.write_bytes(b'{"$": ["en"]}\x00')
    assert load_table(path) == {"$": ["en"]}


def test_load_rejects_non_object(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_translate_data(path)


def test_load_rejects_non_object_language(tmp_path):
    path = tmp_path / "data.json"
    path.write_text('{"en": ["x"]}', encoding="utf-8")
    with pytest.raises(ValueError):
        load_translate_data(path)


def test_save_table_roundtrip(tmp_path):
    table = {"$": ["de", "en"], "*": {"dot": ["", 0], "größe": ["Größe", None]}, "m": {"x": None}}
    path = tmp_path / "table.json"
    save_table(table, path)
    assert "Größe" in path.read_text(encoding="utf-8")
    assert load_table(path) == table


def test_save_code(tmp_path):
    path = tmp_path / "out.js"
    save_code("{}", path)
    assert path.read_text(encoding="utf-8") == "{}\n"


def test_load_rejects_numeric_translation(tmp_path):
    path = tmp_path / "data.json"
    path.write_text('{"en": {"defaults": {"n": 0}}}', encoding="utf-8")
    with pytest.raises(ValueError):
        load_translate_data(path)

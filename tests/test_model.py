"""Tests for IniSection and IniDocument.

Query and mutation operations, read-only accessors, and the
round trip of serialized text (comments and blank lines included).
"""

import warnings

import pytest

from pyinidoc import (
    IniDocument,
    IniError,
    IniErrorKind,
    IniSection,
    InvalidIniRecord,
    LineKind,
    LineRecord,
)

COMMENTED = """\
; global comment

[database]
; connection settings
host = db.local
port = 5432

# credentials below
user = admin
password =

[cache]
ttl = 60
"""


@pytest.fixture
def doc() -> IniDocument:
    ret = IniDocument()
    ret.load_text(COMMENTED)
    return ret


# -- IniSection --------------------------------------------------------------


class TestSection:
    def test_add_line(self) -> None:
        sec = IniSection("s")
        sec.add_line("key1 = value1")
        sec.add_line(";comment")
        sec.add_line("key2 = value2")
        sec.add_line("")
        assert sec.to_dict() == {"key1": "value1", "key2": "value2"}
        assert sec.serialize() == [
            "key1 = value1", ";comment", "key2 = value2", ""]

    def test_add_line_without_separator(self) -> None:
        sec = IniSection("s")
        with pytest.raises(InvalidIniRecord) as info:
            sec.add_line("key value", lineno=7)
        assert info.value.kind is IniErrorKind.INVALID_FORMAT
        assert str(info.value) == "invalid ini file format: at line 7 'key value'"

    def test_get_value(self) -> None:
        sec = IniSection()
        sec.set_value("k", "v")
        assert sec.get_value("k") == ("v", True)
        assert sec.get_value("missing") == ("", False)

    def test_empty_section_reads_as_empty(self) -> None:
        sec = IniSection()
        assert len(sec) == 0
        assert sec.get_value("any") == ("", False)
        assert sec.serialize() == []

    def test_set_value_keeps_position(self) -> None:
        sec = IniSection()
        sec.add_line("a = 1")
        sec.add_line("; note")
        sec.add_line("b = 2")
        sec.set_value(" a ", " 10 ")
        sec.set_value("c", "3")
        assert sec.serialize() == ["a = 10", "; note", "b = 2", "c = 3"]

    def test_set_value_accepts_empty_key(self) -> None:
        sec = IniSection()
        sec.set_value("  ", "v")
        assert sec.get_value("") == ("v", True)
        assert sec._lines == [LineRecord(LineKind.KEY, "")]

    def test_mapping_protocol(self) -> None:
        sec = IniSection("s")
        sec["a"] = "1"
        sec["b"] = "2"
        del sec["a"]
        assert list(sec) == ["b"]
        assert "a" not in sec
        assert sec.serialize() == ["b = 2"]
        assert repr(sec) == "[s] { .cnt = 1 }"

    def test_keys_are_stripped_on_every_access(self) -> None:
        sec = IniSection("s")
        sec[" a "] = "1"
        assert sec[" a "] == "1"
        assert " a " in sec
        assert "a" in sec
        del sec[" a "]
        assert len(sec) == 0
        assert sec.serialize() == []

    @pytest.mark.parametrize("key", ["k=x", ";c", "#c", "[c"])
    def test_set_value_warns_on_keys_not_read_back(self, key: str) -> None:
        sec = IniSection("s")
        with pytest.warns(UserWarning):
            sec.set_value(key, "v")
        assert sec.get_value(key) == ("v", True)

    def test_set_value_plain_key_does_not_warn(self) -> None:
        sec = IniSection("s")
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            sec.set_value("url", "http://x?a=1")

    def test_comment_text_equal_to_key_is_kept_on_delete(self) -> None:
        sec = IniSection()
        sec.add_line(";k")
        sec.add_line("k = 1")
        del sec["k"]
        assert sec.serialize() == [";k"]


# -- IniDocument queries -----------------------------------------------------


class TestDocumentQueries:
    def test_empty_document(self) -> None:
        empty = IniDocument()
        assert empty.section_names() == []
        assert empty.sections() == {}
        assert empty.get_value("a", "b") == ("", False)
        assert empty.serialize() == ""

    def test_section_names_keep_declaration_order(self) -> None:
        d = IniDocument()
        d.load_text("[zeta]\n[alpha]\n[mid]\n")
        assert d.section_names() == ["zeta", "alpha", "mid"]
        assert list(d) == ["zeta", "alpha", "mid"]

    @pytest.mark.parametrize(
        ("section", "key"),
        [("nope", "host"), ("database", "nope"), ("", ""), ("cache", "host")],
    )
    def test_get_value_missing(
        self, doc: IniDocument, section: str, key: str
    ) -> None:
        assert doc.get_value(section, key) == ("", False)

    def test_sections_is_a_snapshot(self, doc: IniDocument) -> None:
        snap = doc.sections()
        snap["database"]["host"] = "changed"
        snap["new"] = {"x": "y"}
        assert doc.get_value("database", "host") == ("db.local", True)
        assert "new" not in doc

    def test_indexing_is_read_only(self, doc: IniDocument) -> None:
        view = doc["cache"]
        assert view["ttl"] == "60"
        with pytest.raises(TypeError):
            view["ttl"] = "0"  # type: ignore[index]

    def test_password_empty_value(self, doc: IniDocument) -> None:
        assert doc.get_value("database", "password") == ("", True)


# -- IniDocument mutation ----------------------------------------------------


class TestDocumentMutation:
    def test_set_value_creates_section(self) -> None:
        d = IniDocument()
        d.set_value(" a ", "k", "v")
        assert d.section_names() == ["a"]
        assert d.serialize() == "[a]\nk = v\n"

    def test_set_value_is_idempotent(self, doc: IniDocument) -> None:
        doc.set_value("a", "k", "v")
        once = (doc.serialize(), doc.sections())
        doc.set_value("a", "k", "v")
        assert (doc.serialize(), doc.sections()) == once

    def test_set_value_updates_in_place(self, doc: IniDocument) -> None:
        doc.set_value("database", "port", "6543")
        assert "port = 6543\n\n# credentials below" in doc.serialize()

    def test_new_section_is_separated(self) -> None:
        d = IniDocument()
        d.load_text("[a]\nk = 1\n")
        d.set_value("b", "x", "y")
        assert d.serialize() == "[a]\nk = 1\n\n[b]\nx = y\n"

    def test_new_section_after_blank_line(self) -> None:
        d = IniDocument()
        d.load_text("[a]\nk = 1\n\n")
        d.set_value("b", "x", "y")
        assert d.serialize() == "[a]\nk = 1\n\n[b]\nx = y\n"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_set_value_rejects_empty_section(self, name: str) -> None:
        d = IniDocument()
        with pytest.raises(IniError) as info:
            d.set_value(name, "k", "v")
        assert info.value.kind is IniErrorKind.EMPTY_SECTION_NAME
        assert len(d) == 0

    def test_assigned_section_is_separated(self) -> None:
        by_assign, by_set = IniDocument(), IniDocument()
        for d in (by_assign, by_set):
            d.load_text("[a]\nk = 1\n")
        by_assign["b"] = {"x": "y"}
        by_set.set_value("b", "x", "y")
        assert by_assign.serialize() == by_set.serialize()
        assert by_assign.serialize() == "[a]\nk = 1\n\n[b]\nx = y\n"

    def test_reassigned_section_keeps_place(self) -> None:
        d = IniDocument()
        d.load_text("[a]\nk = 1\n[b]\nj = 2\n")
        d["a"] = {"k": "10"}
        assert d.serialize() == "[a]\nk = 10\n[b]\nj = 2\n"

    def test_assign_section_copies(self) -> None:
        d = IniDocument()
        pairs = {"k": "v"}
        d["s"] = pairs
        pairs["k"] = "changed"
        assert d.get_value("s", "k") == ("v", True)
        with pytest.raises(IniError):
            d[" "] = {}

    def test_remove(self, doc: IniDocument) -> None:
        assert doc.remove_key("database", "user") is True
        assert doc.remove_key("database", "user") is False
        assert doc.remove_key("nope", "user") is False
        assert "user =" not in doc.serialize()
        del doc["cache"]
        assert doc.section_names() == ["database"]

    def test_clear(self, doc: IniDocument) -> None:
        doc.clear()
        assert doc.serialize() == ""


# -- round trip --------------------------------------------------------------


class TestRoundTrip:
    def test_text_is_reproduced(self, doc: IniDocument) -> None:
        assert doc.serialize() == COMMENTED.replace("password =\n", "password = \n")
        assert str(doc) == doc.serialize()

    def test_serialize_is_stable(self, doc: IniDocument) -> None:
        again = IniDocument()
        again.load_text(doc.serialize())
        assert again.serialize() == doc.serialize()
        assert again.section_names() == doc.section_names()
        assert again.sections() == doc.sections()

    def test_round_trip_after_mutation(self, doc: IniDocument) -> None:
        doc.set_value("cache", "backend", "redis")
        doc.set_value("logging", "level", "debug")
        again = IniDocument()
        again.load_text(doc.serialize())
        assert again.sections() == doc.sections()
        assert again.section_names() == ["database", "cache", "logging"]

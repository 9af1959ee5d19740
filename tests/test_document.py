"""Tests for regcheck.document."""

import pytest

from regcheck.document import Document, Entry, Section
from regcheck.reader import parse_text
from regcheck.values import VText, ValueKind


def _entry(name, text):
    return Entry(name, VText(text), ValueKind.String, raw=text)


def test_section_requires_path():
    with pytest.raises(ValueError):
        Section("")

def test_section_get_last_wins():
    s = Section("HKEY_CURRENT_USER\\T", (_entry("A", "1"), _entry("A", "2")))
    assert s.get("A").value == VText("2")
    assert s.get("B") is None

def test_document_is_immutable():
    doc = parse_text('[HKEY_CURRENT_USER\\T]\n"A"="1"')
    with pytest.raises(AttributeError):
        doc.sections = ()
    assert isinstance(doc.sections, tuple)
    assert isinstance(doc.sections[0].entries, tuple)

def test_document_section_lookup():
    doc = parse_text("[HKEY_CURRENT_USER\\Software\\X]\n")
    assert doc.section("hkey_current_user\\software\\x") is doc.sections[0]
    assert doc.section("HKEY_CURRENT_USER\\Other") is None

def test_walk_in_file_order():
    doc = Document((
        Section("HKEY_CURRENT_USER\\A", (_entry("1", "a"), _entry("2", "b"))),
        Section("HKEY_CURRENT_USER\\B", (_entry("3", "c"),)),
    ))
    assert [(s.path, e.name) for s, e in doc.walk()] == [
        ("HKEY_CURRENT_USER\\A", "1"),
        ("HKEY_CURRENT_USER\\A", "2"),
        ("HKEY_CURRENT_USER\\B", "3"),
    ]
    assert len(doc) == 2
    assert [s.path for s in doc] == doc.paths

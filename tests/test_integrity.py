"""Tests for the integrity check."""

import pytest

from regcheck.errors import ProviderError
from regcheck.integrity import DIFFERENT, MISSING, check, find_mismatch
from regcheck.provider import DictProvider, Found, NotFound
from regcheck.reader import parse_text
from regcheck.values import VNumber, VText, ValueKind


class RecordingProvider:
    """Wraps a DictProvider and records every lookup."""

    def __init__(self, data):
        self.inner = DictProvider(data)
        self.calls = []

    def lookup(self, path, name):
        self.calls.append((path, name))
        return self.inner.lookup(path, name)


class FailingProvider:
    def lookup(self, path, name):
        raise ProviderError("access denied")


DOC = parse_text(
    "[HKEY_LOCAL_MACHINE\\Software\\X]\n"
    '"A"="1"\n'
    '"B"="2"\n'
)


def test_check_all_match():
    provider = RecordingProvider({"HKLM\\Software\\X": {"A": "1", "B": "2"}})
    assert check(DOC, provider) is True
    assert provider.calls == [("HKLM\\Software\\X", "A"), ("HKLM\\Software\\X", "B")]

def test_check_short_circuits_on_missing():
    provider = RecordingProvider({"HKLM\\Software\\X": {"B": "2"}})
    assert check(DOC, provider) is False
    assert len(provider.calls) == 1

def test_check_short_circuits_on_different():
    provider = RecordingProvider({"HKLM\\Software\\X": {"A": "9", "B": "2"}})
    assert check(DOC, provider) is False
    assert provider.calls == [("HKLM\\Software\\X", "A")]

def test_check_empty_document():
    assert check(parse_text(""), RecordingProvider({})) is True

def test_unknown_hive_passed_through():
    doc = parse_text('[HKEY_USERS\\.DEFAULT\\X]\n"A"="1"')
    provider = RecordingProvider({"HKEY_USERS\\.DEFAULT\\X": {"A": "1"}})
    assert check(doc, provider)
    assert provider.calls == [("HKEY_USERS\\.DEFAULT\\X", "A")]

def test_kind_mismatch_with_equal_text_accepted():
    doc = parse_text('[HKEY_CURRENT_USER\\T]\n"N"="5"')
    provider = DictProvider({"HKCU\\T": {"N": Found(VNumber(5), ValueKind.Dword)}})
    assert check(doc, provider)

def test_dword_against_stored_int():
    doc = parse_text('[HKEY_CURRENT_USER\\T]\n"N"=dword:0000000a')
    assert check(doc, DictProvider({"HKCU\\T": {"N": 10}}))
    assert not check(doc, DictProvider({"HKCU\\T": {"N": 11}}))

def test_expand_string_hex_against_stored_text():
    doc = parse_text(
        '[HKEY_CURRENT_USER\\T]\n'
        '"P"=hex(2):25,00,50,00,25,00,00,00'
    )
    assert check(doc, DictProvider({"HKCU\\T": {"P": "%P%"}}))

def test_default_value():
    doc = parse_text('[HKEY_CURRENT_USER\\T]\n@="x"')
    provider = RecordingProvider({"HKCU\\T": {"": "x"}})
    assert check(doc, provider)
    assert provider.calls == [("HKCU\\T", "")]

def test_provider_error_propagates():
    with pytest.raises(ProviderError):
        check(DOC, FailingProvider())


# ---------------------------------------------------------------------------
# find_mismatch
# ---------------------------------------------------------------------------

def test_find_mismatch_none():
    assert find_mismatch(DOC, DictProvider({"HKLM\\Software\\X": {"A": "1", "B": "2"}})) is None

def test_find_mismatch_missing():
    m = find_mismatch(DOC, DictProvider({}))
    assert m.reason == MISSING
    assert m.entry.name == "A"
    assert m.section == "HKEY_LOCAL_MACHINE\\Software\\X"
    assert m.path == "HKLM\\Software\\X"
    assert m.actual is None
    assert "not found" in str(m)

def test_find_mismatch_different_reports_first():
    m = find_mismatch(DOC, DictProvider({"HKLM\\Software\\X": {"A": "1", "B": "3"}}))
    assert m.reason == DIFFERENT
    assert m.entry.name == "B"
    assert m.actual == VText("3")
    assert str(m) == "HKLM\\Software\\X\\B: expected 2, found 3"

def test_find_mismatch_logged(caplog):
    with caplog.at_level("INFO", logger="regcheck.integrity"):
        find_mismatch(DOC, DictProvider({}))
    assert "HKLM\\Software\\X\\A" in caplog.text

def test_not_found_is_not_found():
    class P:
        def lookup(self, path, name):
            return NotFound
    assert find_mismatch(DOC, P()).reason == MISSING

def test_explicit_aliases():
    provider = RecordingProvider({"LM\\Software\\X": {"A": "1", "B": "2"}})
    assert check(DOC, provider, aliases={"HKEY_LOCAL_MACHINE": "LM"})

def test_undecodable_dword_compared_as_text():
    doc = parse_text('[HKEY_CURRENT_USER\\T]\n"N"=dword:zz')
    assert check(doc, DictProvider({"HKCU\\T": {"N": "zz"}}))
    assert not check(doc, DictProvider({"HKCU\\T": {"N": 0}}))

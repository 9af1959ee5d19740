"""Value types for regcheck and the equality rules between them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union


class ValueKind(Enum):
    Unset = auto()
    Binary = auto()
    Dword = auto()
    ExpandString = auto()
    Link = auto()
    MultiString = auto()
    Qword = auto()
    String = auto()


# ---------------------------------------------------------------------------
# Unset — singleton for a value that carries no data
# ---------------------------------------------------------------------------

class _UnsetType:
    """Sentinel for a REG_NONE value (or a provider value of None)."""

    _instance: _UnsetType | None = None

    def __new__(cls) -> _UnsetType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Unset"

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return ""


Unset = _UnsetType()


# ---------------------------------------------------------------------------
# Value variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VText:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class VNumber:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class VBinary:
    value: bytes

    def __str__(self) -> str:
        return ",".join(f"{b:02x}" for b in self.value)


@dataclass(frozen=True)
class VList:
    items: tuple[str, ...]

    def __str__(self) -> str:
        return "\n".join(self.items)


Value = Union[VText, VNumber, VBinary, VList, _UnsetType]


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------

def from_native(data: object) -> Value:
    """Wrap a value as returned by a key-value store into a Value."""
    if data is None:
        return Unset
    if isinstance(data, bool):
        return VNumber(int(data))
    if isinstance(data, int):
        return VNumber(data)
    if isinstance(data, (bytes, bytearray)):
        return VBinary(bytes(data))
    if isinstance(data, (list, tuple)):
        return VList(tuple(str(item) for item in data))
    return VText(str(data))


def as_text(value: Value) -> str:
    """Normalized text form used when two values have no closer rule."""
    return str(value)


# ---------------------------------------------------------------------------
# Equality
# ---------------------------------------------------------------------------

def values_equal(expected: Value, actual: Value) -> bool:
    """Compare a parsed value against a stored one, ignoring ValueKind.

    Same variants compare directly. Mixed pairs:

    - VNumber / VText: the text is read as an integer (decimal or 0x-hex)
    - VBinary / VText: bytes are UTF-16-LE text, trailing NULs dropped
    - VBinary / VList: bytes are UTF-16-LE text split on NUL
    - VBinary / VNumber: bytes are a little-endian integer
    - anything else: normalized text forms are compared
    """
    if type(expected) is type(actual):
        return expected == actual

    pair = {type(expected), type(actual)}
    left, right = _order(expected, actual)

    if pair == {VNumber, VText}:
        number = _text_to_int(right.value)
        return number is not None and number == left.value
    if pair == {VBinary, VText}:
        text = _utf16(left.value)
        return text is not None and text.rstrip("\x00") == right.value
    if pair == {VBinary, VList}:
        text = _utf16(left.value)
        if text is None:
            return False
        return tuple(s for s in text.split("\x00") if s) == right.items
    if pair == {VBinary, VNumber}:
        if not left.value:
            return False
        return int.from_bytes(left.value, "little") == right.value

    return as_text(expected) == as_text(actual)


_ORDER = (VBinary, VNumber, VText, VList)


def _order(a: Value, b: Value) -> tuple:
    def rank(v: Value) -> int:
        return _ORDER.index(type(v)) if type(v) in _ORDER else len(_ORDER)
    return (a, b) if rank(a) <= rank(b) else (b, a)


def _text_to_int(text: str) -> int | None:
    s = text.strip()
    try:
        if s.lower().startswith("0x"):
            return int(s, 16)
        return int(s)
    except ValueError:
        return None


def _utf16(data: bytes) -> str | None:
    try:
        return data.decode("utf-16-le")
    except UnicodeDecodeError:
        return None

"""Key-value provider capability consumed by the integrity check."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Union, runtime_checkable

from .values import Value, ValueKind, from_native


@dataclass(frozen=True)
class Found:
    value: Value
    kind: ValueKind


# ---------------------------------------------------------------------------
# NotFound — singleton returned for a missing key or value
# ---------------------------------------------------------------------------

class _NotFoundType:
    _instance: _NotFoundType | None = None

    def __new__(cls) -> _NotFoundType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NotFound"

    def __bool__(self) -> bool:
        return False


NotFound = _NotFoundType()

LookupResult = Union[Found, _NotFoundType]


@runtime_checkable
class KeyValueProvider(Protocol):
    """Read-only access to a hierarchical key-value store.

    ``lookup`` returns Found or NotFound. Any other failure (permissions,
    transport) must raise ProviderError.
    """

    def lookup(self, path: str, name: str) -> LookupResult: ...


@dataclass
class DictProvider:
    """In-memory provider: ``{path: {name: native_value}}``.

    Paths and names are matched case-insensitively, like the registry.
    Native values are wrapped with ``from_native``; a value may also be
    given directly as a Found.
    """

    data: dict[str, dict[str, object]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._index = {
            path.lower(): {name.lower(): v for name, v in values.items()}
            for path, values in self.data.items()
        }

    def lookup(self, path: str, name: str) -> LookupResult:
        values = self._index.get(path.lower())
        if values is None or name.lower() not in values:
            return NotFound
        raw = values[name.lower()]
        if isinstance(raw, Found):
            return raw
        return Found(from_native(raw), _native_kind(raw))


def _native_kind(data: object) -> ValueKind:
    if data is None:
        return ValueKind.Unset
    if isinstance(data, int):
        return ValueKind.Dword if 0 <= data <= 0xFFFFFFFF else ValueKind.Qword
    if isinstance(data, (bytes, bytearray)):
        return ValueKind.Binary
    if isinstance(data, (list, tuple)):
        return ValueKind.MultiString
    return ValueKind.String

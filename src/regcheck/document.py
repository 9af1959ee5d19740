"""Document — the parsed form of one .reg file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from .values import Value, ValueKind


@dataclass(frozen=True)
class Entry:
    """One named value inside a section.

    ``name`` is ``""`` for the section's default value. ``raw`` is the
    unescaped text the value was decoded from; ``recovered`` marks an entry
    whose type tag was not understood and was kept as a plain string.
    """

    name: str
    value: Value
    kind: ValueKind
    raw: str = ""
    recovered: bool = False


@dataclass(frozen=True)
class Section:
    path: str
    entries: tuple[Entry, ...] = ()

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError("section path must not be empty")

    def get(self, name: str) -> Entry | None:
        """Return the last entry called *name* (later lines win), or None."""
        for entry in reversed(self.entries):
            if entry.name == name:
                return entry
        return None


@dataclass(frozen=True)
class Document:
    """Ordered sections of one parsed file."""

    sections: tuple[Section, ...] = ()
    source: Path | None = field(default=None, compare=False)

    # -- Convenience accessors ------------------------------------------

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)

    @property
    def paths(self) -> list[str]:
        return [s.path for s in self.sections]

    def section(self, path: str) -> Section | None:
        """Case-insensitive lookup of the first section with *path*."""
        wanted = path.lower()
        for s in self.sections:
            if s.path.lower() == wanted:
                return s
        return None

    def walk(self) -> Iterator[tuple[Section, Entry]]:
        """Yield every (section, entry) pair in file order."""
        for s in self.sections:
            for entry in s.entries:
                yield s, entry

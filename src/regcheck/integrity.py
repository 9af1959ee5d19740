"""Integrity check: does the store already hold what a Document describes?"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .document import Document, Entry
from .hives import translate_path
from .provider import Found, KeyValueProvider
from .values import Value, values_equal

logger = logging.getLogger(__name__)

MISSING = "missing"
DIFFERENT = "different"


@dataclass(frozen=True)
class Mismatch:
    """The first entry of a Document that the store does not match."""

    section: str
    path: str
    entry: Entry
    reason: str  # MISSING | DIFFERENT
    actual: Value | None = None

    def __str__(self) -> str:
        name = self.entry.name or "(default)"
        if self.reason == MISSING:
            return f"{self.path}\\{name}: not found"
        return f"{self.path}\\{name}: expected {self.entry.value}, found {self.actual}"


def find_mismatch(
    document: Document,
    provider: KeyValueProvider,
    aliases: dict[str, str] | None = None,
) -> Mismatch | None:
    """Walk *document* in file order and return the first mismatch.

    Stops at the first missing or different value. ProviderError from the
    provider is not caught.
    """
    for section, entry in document.walk():
        path = translate_path(section.path, aliases)
        result = provider.lookup(path, entry.name)
        if not isinstance(result, Found):
            mismatch = Mismatch(section.path, path, entry, MISSING)
        elif not values_equal(entry.value, result.value):
            mismatch = Mismatch(section.path, path, entry, DIFFERENT, result.value)
        else:
            continue
        logger.info("Integrity mismatch: %s", mismatch)
        return mismatch
    return None


def check(
    document: Document,
    provider: KeyValueProvider,
    aliases: dict[str, str] | None = None,
) -> bool:
    """True when every entry of *document* is present with an equal value."""
    return find_mismatch(document, provider, aliases) is None

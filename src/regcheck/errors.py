"""Exception hierarchy for regcheck."""

from __future__ import annotations


class RegCheckError(Exception):
    """Base class for all regcheck errors."""


class InputError(RegCheckError):
    """The input file is missing or cannot be read."""


class ParseError(RegCheckError):
    """Fatal error while parsing a .reg file."""

    reason = "parse error"

    def __init__(self, line_no: int, line: str) -> None:
        self.line_no = line_no
        self.line = line
        super().__init__(f"line {line_no}: {self.reason}: {line!r}")


class KeyBeforeSectionError(ParseError):
    reason = "value assignment before any [section] header"


class ContinuationBeforeKeyError(ParseError):
    reason = "continuation line without a value to extend"


class ProviderError(RegCheckError):
    """A key-value lookup failed for a reason other than absence."""


class ApplyError(RegCheckError):
    """Importing a .reg file into the store failed."""

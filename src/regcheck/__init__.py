"""regcheck — parse Windows .reg files and check them against a registry."""

from .document import Document, Entry, Section
from .errors import (
    ApplyError,
    ContinuationBeforeKeyError,
    InputError,
    KeyBeforeSectionError,
    ParseError,
    ProviderError,
    RegCheckError,
)
from .hives import translate_path
from .integrity import Mismatch, check, find_mismatch
from .provider import DictProvider, Found, KeyValueProvider, NotFound
from .reader import parse, parse_text, read_file, read_lines
from .applier import RegImporter
from .values import (
    Unset,
    Value,
    ValueKind,
    VBinary,
    VList,
    VNumber,
    VText,
    values_equal,
)

__all__ = [
    "parse",
    "parse_text",
    "read_file",
    "read_lines",
    "check",
    "find_mismatch",
    "Mismatch",
    "translate_path",
    "Document",
    "Section",
    "Entry",
    "Value",
    "ValueKind",
    "Unset",
    "VBinary",
    "VList",
    "VNumber",
    "VText",
    "values_equal",
    "KeyValueProvider",
    "DictProvider",
    "Found",
    "NotFound",
    "RegImporter",
    "RegCheckError",
    "ParseError",
    "KeyBeforeSectionError",
    "ContinuationBeforeKeyError",
    "InputError",
    "ProviderError",
    "ApplyError",
]

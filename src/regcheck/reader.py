"""Reader layer: turns the lines of a .reg file into a Document."""

from __future__ import annotations

import codecs
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable

from .document import Document, Entry, Section
from .errors import ContinuationBeforeKeyError, InputError, KeyBeforeSectionError
from .settings import get_settings
from .values import Value, VBinary, VNumber, VText, ValueKind

logger = logging.getLogger(__name__)

_SECTION_RE = re.compile(r"^\[(.+)\]$")
_ESCAPE_RE = re.compile(r'\\([\\"])')

CONTINUATION = "\\"
DEFAULT_NAME = "@"


# ---------------------------------------------------------------------------
# Literal handling
# ---------------------------------------------------------------------------

def unescape(text: str) -> str:
    r"""Resolve the ``\\`` and ``\"`` escapes of a quoted .reg string."""
    return _ESCAPE_RE.sub(r"\1", text)


def unquote(text: str) -> str:
    """Strip one pair of surrounding double quotes and unescape the inside.

    Text that is not quoted on both ends is returned as-is.
    """
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return unescape(text[1:-1])
    return text


def unwrap_name(raw: str) -> str:
    """Turn the left-hand side of an assignment into an entry name.

    ``@`` is the section's default value and becomes ``""``.
    """
    raw = raw.strip()
    if raw == DEFAULT_NAME:
        return ""
    if len(raw) >= 2 and raw.startswith("[") and raw.endswith("]"):
        return raw[1:-1]
    return unquote(raw)


def split_assignment(line: str) -> tuple[str, str] | None:
    """Split ``name = value`` on the first ``=`` outside double quotes.

    Returns None when the line is not an assignment.
    """
    in_quotes = False
    escaped = False
    for i, ch in enumerate(line):
        if escaped:
            escaped = False
            continue
        if ch == "\\" and in_quotes:
            escaped = True
        elif ch == '"':
            in_quotes = not in_quotes
        elif ch == "=" and not in_quotes:
            name = line[:i].strip()
            if not name:
                return None
            return name, line[i + 1:].strip()
    return None


# ---------------------------------------------------------------------------
# Value decoding
# ---------------------------------------------------------------------------

def _tag_base(tag: str) -> str:
    """``hex(2)`` → ``hex``; ``String`` → ``string``."""
    return tag.split("(", 1)[0].strip().lower()


def _hex_bytes(text: str) -> VBinary:
    return VBinary(bytes.fromhex(re.sub(r"[\s,]", "", text)))


def _decode(base: str, name: str, raw: str, convert: Callable[[str], Value]) -> Value:
    """Decode *raw*; undecodable text is kept as VText under the tag's kind."""
    try:
        return convert(raw)
    except ValueError:
        logger.warning("Undecodable %s value for %r, keeping text: %r", base, name, raw)
        return VText(raw)


def decode_value(name: str, text: str) -> Entry:
    """Build an Entry from the fully joined right-hand side of an assignment."""
    if text.startswith('"') or ":" not in text:
        return Entry(name, VText(unquote(text)), ValueKind.String, raw=unquote(text))

    tag, _, payload = text.partition(":")
    base = _tag_base(tag)
    raw = unquote(payload.strip())

    if base == "string":
        return Entry(name, VText(raw), ValueKind.String, raw=raw)
    if base == "dword":
        return Entry(name, _decode(base, name, raw, lambda s: VNumber(int(s, 16))),
                     ValueKind.Dword, raw=raw)
    if base == "hex":
        return Entry(name, _decode(base, name, raw, _hex_bytes), ValueKind.Binary, raw=raw)

    logger.warning("Unknown type tag %r for %r, keeping text: %r", tag, name, text)
    return Entry(name, VText(text), ValueKind.String, raw=text, recovered=True)


# ---------------------------------------------------------------------------
# Parser state
# ---------------------------------------------------------------------------

@dataclass
class PendingEntry:
    """An entry whose right-hand side may still be growing."""

    name: str
    parts: list[str]

    def finish(self) -> Entry:
        return decode_value(self.name, "".join(self.parts))


@dataclass
class ContinuationState:
    open: bool = False
    target: PendingEntry | None = None


@dataclass
class ParseState:
    sections: list[tuple[str, list[Entry]]] = field(default_factory=list)
    continuation: ContinuationState = field(default_factory=ContinuationState)
    line_no: int = 0

    @property
    def current(self) -> list[Entry] | None:
        return self.sections[-1][1] if self.sections else None

    def close_continuation(self) -> None:
        """Finalize the pending entry (if any) into the current section."""
        target = self.continuation.target
        if target is not None:
            self.sections[-1][1].append(target.finish())
        self.continuation = ContinuationState()

    def to_document(self, source: Path | None = None) -> Document:
        return Document(
            sections=tuple(Section(path, tuple(entries)) for path, entries in self.sections),
            source=source,
        )


# ---------------------------------------------------------------------------
# Line classifiers (evaluated in order; each returns True when it handled
# the line)
# ---------------------------------------------------------------------------

def _strip_marker(text: str) -> str:
    return text[: -len(CONTINUATION)].rstrip() if text.endswith(CONTINUATION) else text


def _section_header(state: ParseState, line: str) -> bool:
    m = _SECTION_RE.match(line)
    if not m:
        return False
    state.close_continuation()
    path = m.group(1)
    state.sections.append((path, []))
    logger.debug("line %d: section %s", state.line_no, path)
    return True


def _assignment(state: ParseState, line: str) -> bool:
    pair = split_assignment(line)
    if pair is None:
        return False
    if state.current is None:
        raise KeyBeforeSectionError(state.line_no, line)
    state.close_continuation()

    raw_name, value = pair
    pending = PendingEntry(unwrap_name(raw_name), [_strip_marker(value)])
    if value.endswith(CONTINUATION):
        state.continuation = ContinuationState(open=True, target=pending)
    else:
        state.current.append(pending.finish())
    return True


def _continuation_line(state: ParseState, line: str) -> bool:
    if not line.endswith(CONTINUATION) or line.startswith(";"):
        return False
    # A fragment ending in the marker with nothing open belongs to no entry;
    # ignoring it would silently drop part of a value, so it is fatal.
    if not state.continuation.open or state.continuation.target is None:
        raise ContinuationBeforeKeyError(state.line_no, line)
    state.continuation.target.parts.append(_strip_marker(line))
    return True


def _continuation_end(state: ParseState, line: str) -> bool:
    if not state.continuation.open:
        return False
    if state.continuation.target is None:
        raise ContinuationBeforeKeyError(state.line_no, line)
    state.continuation.target.parts.append(line)
    state.close_continuation()
    return True


Classifier = Callable[[ParseState, str], bool]

CLASSIFIERS: tuple[Classifier, ...] = (
    _section_header,
    _assignment,
    _continuation_line,
    _continuation_end,
)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def parse(lines: Iterable[str], source: Path | None = None) -> Document:
    """Parse .reg lines into a Document.

    Raises KeyBeforeSectionError or ContinuationBeforeKeyError; no partial
    Document is returned in that case.
    """
    state = ParseState()
    for line_no, raw in enumerate(lines, 1):
        state.line_no = line_no
        line = raw.rstrip("\r\n").strip()
        for classify in CLASSIFIERS:
            if classify(state, line):
                break
    if state.continuation.open:
        state.close_continuation()
    return state.to_document(source)


def parse_text(text: str) -> Document:
    return parse(text.splitlines())


def _detect_encoding(data: bytes) -> str | None:
    if data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return "utf-16"
    if data.startswith(codecs.BOM_UTF8):
        return "utf-8-sig"
    return None


def read_lines(path: str | Path, encoding: str | None = None) -> list[str]:
    """Read a .reg file into lines.

    A BOM decides the encoding. Without one, *encoding* (or the configured
    encoding) is tried first, then the configured ANSI fallback.
    """
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as exc:
        raise InputError(f"cannot read {p}: {exc}") from exc

    bom_encoding = _detect_encoding(data)
    if bom_encoding is not None:
        candidates = [bom_encoding]
    else:
        settings = get_settings()
        candidates = [encoding or settings.encoding, settings.fallback_encoding]

    for enc in candidates:
        try:
            return data.decode(enc).splitlines()
        except UnicodeDecodeError:
            logger.debug("%s is not valid %s", p, enc)
    raise InputError(f"cannot decode {p} as any of {', '.join(candidates)}")


def read_file(path: str | Path, encoding: str | None = None) -> Document:
    """Read and parse a .reg file; the path is kept on ``Document.source``."""
    p = Path(path)
    return parse(read_lines(p, encoding), source=p)

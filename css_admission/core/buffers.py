"""Input sanitization and scan buffer construction."""

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from ..utils.error import BufferBuildError
from .decoder import safe_sub, decode_escapes, normalize_scan
from .reasons import Rejection

# Whitespace removed around submitted CSS
TRIM_CHARS = ' \t\n\r\0\x0b'

BOM_RE = re.compile('^\ufeff')
CONTROL_CHARS_RE = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')
CHARSET_RE = re.compile(r'@charset', re.IGNORECASE)
LEADING_CHARSET_RE = re.compile(r'^\s*@charset\b', re.IGNORECASE | re.ASCII)
CHARSET_DECLARATION_RE = re.compile(
    r'^\s*@charset\s+(?:"utf-8"|\'utf-8\'|utf-8)\s*;\s*',
    re.IGNORECASE | re.ASCII
)
# Quote or backslash: where a string or an escape may begin
STRING_START_RE = re.compile(r'["\'\\]')
STRING_BODY_RE = {
    '"': re.compile(r'["\\]'),
    "'": re.compile(r"['\\]"),
}


@dataclass(frozen=True)
class ScanBuffers:
    """Derived views of one accepted input.

    Attributes:
        raw: Trimmed input, the only text ever returned to callers
        no_comments: ``raw`` without comments and leading ``@charset``
        no_strings: ``no_comments`` without quoted strings
        decoded: ``no_comments`` lower-cased with hex escapes resolved
        normalized: ``decoded`` narrowed to ``[a-z0-9:]``
    """

    raw: str = ''
    no_comments: str = ''
    no_strings: str = ''
    decoded: str = ''
    normalized: str = ''


def sanitize_input(css: Optional[str]) -> Tuple[str, Optional[Rejection]]:
    """Strip BOM and control characters, trim, and validate ``@charset``.

    Args:
        css: Submitted text; ``None`` is treated as empty

    Returns:
        Tuple of (raw, rejection). ``raw`` is empty when the input was
        empty or rejected.
    """
    css = BOM_RE.sub('', '' if css is None else str(css))
    css = CONTROL_CHARS_RE.sub('', css)
    css = css.strip(TRIM_CHARS)

    if css == '':
        return '', None

    if CHARSET_RE.search(css):
        if not LEADING_CHARSET_RE.match(css):
            return '', Rejection.CHARSET_PLACEMENT

        if not CHARSET_DECLARATION_RE.match(css):
            return '', Rejection.CHARSET_VALUE

        rest = CHARSET_DECLARATION_RE.sub('', css, count=1)
        if CHARSET_RE.search(rest):
            return '', Rejection.CHARSET_DUPLICATE

    return css, None


def strip_comments(css: str) -> str:
    """Remove ``/* ... */`` comments.

    An unterminated comment is left in place; once one is found no later
    comment can close either, so scanning stops there.
    """
    parts = []
    pos = 0
    while True:
        start = css.find('/*', pos)
        if start == -1:
            break
        end = css.find('*/', start + 2)
        if end == -1:
            break
        parts.append(css[pos:start])
        pos = end + 2
    parts.append(css[pos:])
    return ''.join(parts)


def _string_end(css: str, pos: int, quote: str) -> Optional[int]:
    pattern = STRING_BODY_RE[quote]
    while True:
        match = pattern.search(css, pos)
        if match is None:
            return None
        if css[match.start()] == quote:
            return match.end()
        # backslash escapes whatever follows it, newlines included
        pos = match.start() + 2


def strip_strings(css: str) -> str:
    """Remove single- and double-quoted string literals.

    Backslash escapes outside strings are kept as they are, so ``\\"``
    never opens a string. A quote without a closing partner stays in the
    text. If a quote of one kind has no partner, no later quote of that
    kind can have one, so it is not searched for again and the scan stays
    linear in the input length.
    """
    parts = []
    unclosed = set()
    pos = 0
    while True:
        match = STRING_START_RE.search(css, pos)
        if match is None:
            parts.append(css[pos:])
            break

        start = match.start()
        char = css[start]
        if char == '\\':
            parts.append(css[pos:start + 2])
            pos = start + 2
            continue

        end = None if char in unclosed else _string_end(css, start + 1, char)
        if end is None:
            unclosed.add(char)
            parts.append(css[pos:start + 1])
            pos = start + 1
            continue

        parts.append(css[pos:start])
        pos = end

    return ''.join(parts)


def build_buffers(raw: str) -> ScanBuffers:
    """Build all scan buffers from sanitized input.

    Args:
        raw: Output of :func:`sanitize_input`

    Returns:
        ScanBuffers for ``raw``

    Raises:
        BufferBuildError: If any buffer cannot be built safely
    """
    if raw == '':
        return ScanBuffers()

    no_comments = strip_comments(raw)
    no_comments = safe_sub(CHARSET_DECLARATION_RE, '', no_comments, count=1)

    no_strings = strip_strings(no_comments)
    if no_strings == '' and no_comments != '':
        raise BufferBuildError("String stripping left nothing to scan")

    decoded = decode_escapes(no_comments)

    return ScanBuffers(
        raw=raw,
        no_comments=no_comments,
        no_strings=no_strings,
        decoded=decoded,
        normalized=normalize_scan(decoded),
    )


__all__ = ['ScanBuffers', 'sanitize_input', 'strip_comments', 'strip_strings', 'build_buffers']

"""Admission filter for untrusted CSS."""

import re
import logging
from typing import Iterable, Iterator, Optional

from typing_extensions import Self

from ..utils.config import (
    DEFAULT_MAX_BYTES,
    DEFAULT_MAX_LINES,
    DEFAULT_BLOCKED_SCHEMES,
    DEFAULT_ALLOWED_AT_RULES,
)
from ..utils.error import BufferBuildError
from .buffers import ScanBuffers, sanitize_input, build_buffers, strip_strings
from .decoder import safe_sub, decode_escapes, normalize_scan, decode_url_payload
from .imports import has_import, find_import_targets, strip_imports, is_font_import
from .reasons import AdmissionState, Rejection

logger = logging.getLogger(__name__)

DANGER_RE = re.compile(
    r'(?:expression\s*\(|-moz-binding\s*:|behavior\s*:|javascript\s*:)',
    re.IGNORECASE | re.ASCII
)
URL_OPEN_RE = re.compile(r'url\s*\(\s*', re.IGNORECASE | re.ASCII)


def _as_names(values: Optional[Iterable[str]]) -> list:
    if values is None:
        return []
    if isinstance(values, str):
        return [values]
    return list(values)


def _url_payloads(buffer: str) -> Iterator[str]:
    """Yield the text between each ``url(`` and the next ``)``.

    Stops at the first ``url(`` with no closing parenthesis; no later one
    can have one either.
    """
    pos = 0
    while True:
        match = URL_OPEN_RE.search(buffer, pos)
        if match is None:
            return
        end = buffer.find(')', match.end())
        if end == -1:
            return
        yield buffer[match.end():end]
        pos = end + 1


def _allowed_at_rules_re(allowed: Optional[Iterable[str]]):
    names = [str(name).strip().lstrip('@') for name in _as_names(allowed)]
    names = [name for name in names if name]
    if not names:
        names = list(DEFAULT_ALLOWED_AT_RULES)
    alternatives = '|'.join(re.escape(name) for name in names)
    return re.compile(r'@\s*(?:' + alternatives + r')\b', re.IGNORECASE | re.ASCII)


class CSSValidator:
    """Decide whether an untrusted stylesheet may be stored and emitted.

    Scan buffers are built once on construction. Each ``reject_*`` check
    returns the validator so checks can be chained, and the first check
    that fails latches its reason; later checks do nothing.

    Example:
        css = CSSValidator(submitted)
        css.reject_excess_size(False).reject_html_open().reject_danger_tokens()
        safe = css.result()
    """

    def __init__(self, css: str, feedback: bool = True):
        """Initialize validator.

        Args:
            css: Submitted stylesheet
            feedback: Whether ``result()`` returns the rejection comment
        """
        self.feedback = bool(feedback)
        self._reason: Optional[Rejection] = None

        raw, rejection = sanitize_input(css)
        self._buffers = ScanBuffers(raw=raw)

        if rejection is not None:
            self._reject(rejection)
            return

        try:
            self._buffers = build_buffers(raw)
        except BufferBuildError as e:
            logger.warning(f"Could not build scan buffers: {e}")
            self._reject(Rejection.REGEX_ERROR)

    # Buffers

    @property
    def buffers(self) -> ScanBuffers:
        return self._buffers

    @property
    def raw(self) -> str:
        return self._buffers.raw

    @property
    def no_comments(self) -> str:
        return self._buffers.no_comments

    @property
    def no_strings(self) -> str:
        return self._buffers.no_strings

    @property
    def decoded(self) -> str:
        return self._buffers.decoded

    @property
    def normalized(self) -> str:
        return self._buffers.normalized

    # Verdict

    @property
    def reason(self) -> Optional[Rejection]:
        return self._reason

    @property
    def rejection(self) -> str:
        """Placeholder comment of the latched rejection, or ``''``."""
        return self._reason.placeholder if self._reason else ''

    @property
    def state(self) -> AdmissionState:
        return AdmissionState.REJECTED if self.rejected() else AdmissionState.ACCEPTED

    def result(self) -> str:
        """Return sanitized CSS, rejection feedback, or empty string."""
        if self.rejected():
            return self.rejection if self.feedback else ''
        return self.raw

    def rejected(self) -> bool:
        """Whether the input has been rejected."""
        return self._reason is not None

    def _reject(self, reason: Rejection) -> None:
        if self._reason is None:
            self._reason = reason
            logger.info(f"Rejected stylesheet: {reason.name} ({reason.category})")

    def _idle(self) -> bool:
        return self.rejected() or self.raw == ''

    # Checks

    def reject_excess_size(self, unfiltered: bool,
                           max_bytes: int = DEFAULT_MAX_BYTES,
                           max_lines: int = DEFAULT_MAX_LINES) -> Self:
        """Reject input above the byte or line limit.

        Args:
            unfiltered: Whether the author is trusted; skips the check
            max_bytes: Maximum UTF-8 size
            max_lines: Maximum number of lines
        """
        if self._idle() or unfiltered:
            return self

        if len(self.raw.encode('utf-8', 'surrogatepass')) > max_bytes:
            self._reject(Rejection.SIZE)
            return self

        lines = self.raw.replace('\r\n', '\n').replace('\r', '\n').count('\n') + 1
        if lines > max_lines:
            self._reject(Rejection.LINES)

        return self

    def reject_html_open(self) -> Self:
        """Reject any ``<`` outside of strings and comments."""
        if not self._idle() and '<' in self.no_strings:
            self._reject(Rejection.HTML_OPEN)
        return self

    def reject_danger_tokens(self) -> Self:
        """Reject legacy script-capable constructs, escapes resolved."""
        if not self._idle() and DANGER_RE.search(self.decoded):
            self._reject(Rejection.DANGER_TOKEN)
        return self

    def reject_invalid_imports(self, allow_fonts: bool = False) -> Self:
        """Reject ``@import`` unless it loads Google Fonts CSS.

        Args:
            allow_fonts: Whether Google Fonts imports are permitted at all
        """
        if self._idle() or self.no_comments == '':
            return self

        if not has_import(self.no_comments):
            return self

        if not allow_fonts:
            self._reject(Rejection.IMPORT)
            return self

        targets = find_import_targets(self.no_comments)
        if not targets or not all(is_font_import(url) for url in targets):
            self._reject(Rejection.IMPORT)
            return self

        # Anything import-like the pattern did not consume is malformed
        try:
            leftover = strip_imports(self.no_comments)
        except BufferBuildError:
            self._reject(Rejection.IMPORT)
            return self

        if has_import(leftover):
            self._reject(Rejection.IMPORT)

        return self

    def without_imports(self) -> str:
        """Return comment-free CSS with ``@import`` statements removed.

        Intended as the ``buffer`` of the url and at-rule checks.
        """
        if self.no_comments == '':
            return ''

        try:
            return strip_imports(self.no_comments)
        except BufferBuildError:
            self._reject(Rejection.REGEX_ERROR)
            return ''

    def _scan_buffer(self, buffer: Optional[str]) -> str:
        return self.without_imports() if buffer is None else str(buffer)

    def reject_url(self, allow_url: bool = False, buffer: Optional[str] = None) -> Self:
        """Reject any ``url(`` unless url() is allowed.

        Args:
            allow_url: Whether url() is allowed at all
            buffer: Scan buffer, defaults to ``without_imports()``
        """
        if self._idle() or allow_url:
            return self

        if 'url(' in self._scan_buffer(buffer).lower():
            self._reject(Rejection.URL)

        return self

    def reject_blocked_url_schemes(self, buffer: Optional[str] = None,
                                   schemes: Optional[Iterable[str]] = None) -> Self:
        """Reject url() payloads that reference a blocked scheme.

        Payloads are decoded and stripped of quotes, whitespace and
        punctuation before matching, so ``url( j\\61vascript:... )`` is
        caught.

        Args:
            buffer: Scan buffer, defaults to ``without_imports()``
            schemes: Schemes to block, defaults to javascript/vbscript/file
        """
        if self._idle():
            return self

        schemes = _as_names(schemes) or list(DEFAULT_BLOCKED_SCHEMES)
        buffer = self._scan_buffer(buffer)

        if buffer == '' or 'url(' not in buffer.lower():
            return self

        try:
            blocked = [normalize_scan(str(scheme).lower()) for scheme in schemes]
            for payload in _url_payloads(buffer):
                payload = decode_url_payload(payload)
                if payload == '':
                    continue
                if any(scheme and scheme in payload for scheme in blocked):
                    self._reject(Rejection.URL_SCHEME)
                    return self
        except BufferBuildError:
            self._reject(Rejection.REGEX_ERROR)

        return self

    def reject_unallowed_at_rules(self, buffer: Optional[str] = None,
                                  allowed: Optional[Iterable[str]] = None) -> Self:
        """Reject at-rules that are not on the allowlist.

        The buffer is scanned twice: strings stripped then escapes decoded,
        and escapes decoded then strings stripped. Allowed at-rules are
        neutralized in both, and an ``@`` left over in either rejects the
        input.

        Args:
            buffer: Scan buffer, defaults to ``without_imports()``
            allowed: At-rule names without ``@``, defaults to
                media/container/keyframes/supports
        """
        if self._idle():
            return self

        buffer = self._scan_buffer(buffer)
        if buffer == '':
            return self

        try:
            pattern = _allowed_at_rules_re(allowed)
            scans = [
                safe_sub(pattern, '.dummy', decode_escapes(strip_strings(buffer))),
                safe_sub(pattern, '.dummy', strip_strings(decode_escapes(buffer))),
            ]
        except BufferBuildError:
            self._reject(Rejection.REGEX_ERROR)
            return self

        if any('@' in scan for scan in scans):
            self._reject(Rejection.AT_RULE)

        return self

    def reject_unbalanced_braces(self) -> Self:
        """Reject input without braces or with unequal ``{`` and ``}``."""
        if self._idle():
            return self

        opening = self.raw.count('{')
        if opening < 1 or opening != self.raw.count('}'):
            self._reject(Rejection.BRACES)

        return self

    def __repr__(self):
        return f'<CSSValidator state={self.state.value} reason={self._reason and self._reason.name}>'


__all__ = ['CSSValidator']

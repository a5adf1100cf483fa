"""Standard admission chain and its configuration."""

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional, Tuple

import orjson

from ..utils.config import (
    DEFAULT_MAX_BYTES,
    DEFAULT_MAX_LINES,
    DEFAULT_BLOCKED_SCHEMES,
    DEFAULT_ALLOWED_AT_RULES,
)
from ..utils.error import ConfigurationError
from ..utils.file import safe_read_file
from .reasons import Rejection
from .validator import CSSValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdmissionPolicy:
    """Which checks the standard chain runs, and with what limits.

    Attributes:
        feedback: Return the rejection comment instead of an empty string
        unfiltered: Author is trusted; the size check is skipped
        max_bytes: Byte limit for untrusted input
        max_lines: Line limit for untrusted input
        allow_fonts: Permit Google Fonts ``@import`` statements
        allow_url: Permit ``url()``
        blocked_schemes: Schemes rejected inside ``url()``
        allowed_at_rules: At-rule names permitted, without ``@``
    """

    feedback: bool = True
    unfiltered: bool = False
    max_bytes: int = DEFAULT_MAX_BYTES
    max_lines: int = DEFAULT_MAX_LINES
    allow_fonts: bool = False
    allow_url: bool = False
    blocked_schemes: Tuple[str, ...] = DEFAULT_BLOCKED_SCHEMES
    allowed_at_rules: Tuple[str, ...] = DEFAULT_ALLOWED_AT_RULES

    def __post_init__(self):
        for name in ('max_bytes', 'max_lines'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'AdmissionPolicy':
        """Create a policy from a mapping of field names.

        Args:
            data: Mapping, typically parsed JSON

        Returns:
            AdmissionPolicy

        Raises:
            ConfigurationError: On unknown keys or invalid values
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError("Policy must be a JSON object")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown policy keys: {', '.join(unknown)}")

        values: Dict[str, Any] = dict(data)
        for name in ('blocked_schemes', 'allowed_at_rules'):
            if name in values:
                items = values[name]
                if isinstance(items, str) or not isinstance(items, (list, tuple)):
                    raise ConfigurationError(f"{name} must be a list of strings")
                values[name] = tuple(str(item) for item in items)

        for name in ('feedback', 'unfiltered', 'allow_fonts', 'allow_url'):
            if name in values and not isinstance(values[name], bool):
                raise ConfigurationError(f"{name} must be true or false")

        return cls(**values)

    @classmethod
    def from_file(cls, file_path: str) -> 'AdmissionPolicy':
        """Load a policy from a JSON file.

        Raises:
            ConfigurationError: If the file is not valid JSON or not a valid policy
            FileOperationError: If the file cannot be read
        """
        content = safe_read_file(file_path)
        try:
            data = orjson.loads(content)
        except orjson.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid policy file {file_path}: {e}") from e

        logger.debug(f"Loaded admission policy from {file_path}")
        return cls.from_dict(data)


def admit_css(css: str, policy: Optional[AdmissionPolicy] = None) -> CSSValidator:
    """Run the standard check chain over submitted CSS.

    Order: size, HTML, dangerous tokens, imports, url(), url schemes,
    at-rules, braces. The url and at-rule checks scan the stylesheet with
    its ``@import`` statements removed.

    Args:
        css: Submitted stylesheet
        policy: Policy to apply, defaults to AdmissionPolicy()

    Returns:
        The validator, already run; call ``result()`` for the output
    """
    policy = policy or AdmissionPolicy()

    validator = (
        CSSValidator(css, feedback=policy.feedback)
        .reject_excess_size(policy.unfiltered, policy.max_bytes, policy.max_lines)
        .reject_html_open()
        .reject_danger_tokens()
        .reject_invalid_imports(policy.allow_fonts)
    )

    scan = validator.without_imports()

    return (
        validator
        .reject_url(policy.allow_url, scan)
        .reject_blocked_url_schemes(scan, policy.blocked_schemes)
        .reject_unallowed_at_rules(scan, policy.allowed_at_rules)
        .reject_unbalanced_braces()
    )


@dataclass(frozen=True)
class AdmissionReport:
    """Summary of one admission run, suitable for JSON output."""

    accepted: bool
    reason: Optional[str]
    category: Optional[str]
    output: str
    bytes: int
    lines: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'accepted': self.accepted,
            'reason': self.reason,
            'category': self.category,
            'output': self.output,
            'bytes': self.bytes,
            'lines': self.lines,
        }

    def to_json(self, indent: bool = False) -> bytes:
        option = orjson.OPT_INDENT_2 if indent else 0
        return orjson.dumps(self.to_dict(), option=option)


def build_report(validator: CSSValidator) -> AdmissionReport:
    """Summarize a validator after its checks have run."""
    reason: Optional[Rejection] = validator.reason
    raw = validator.raw
    return AdmissionReport(
        accepted=not validator.rejected(),
        reason=reason.name.lower() if reason else None,
        category=reason.category if reason else None,
        output=validator.result(),
        bytes=len(raw.encode('utf-8', 'surrogatepass')),
        lines=raw.replace('\r\n', '\n').replace('\r', '\n').count('\n') + 1 if raw else 0,
    )


__all__ = ['AdmissionPolicy', 'AdmissionReport', 'admit_css', 'build_report']

"""Admission filter for untrusted, user-supplied CSS."""

from .utils.config import VERSION
from .core import (
    AdmissionPolicy,
    AdmissionReport,
    AdmissionState,
    CSSValidator,
    Rejection,
    admit_css,
    build_report,
)

__version__ = VERSION

__all__ = [
    'AdmissionPolicy',
    'AdmissionReport',
    'AdmissionState',
    'CSSValidator',
    'Rejection',
    'admit_css',
    'build_report',
]

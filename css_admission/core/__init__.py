"""Core CSS admission functionality."""

from .reasons import AdmissionState, Rejection
from .buffers import ScanBuffers, sanitize_input, build_buffers
from .decoder import decode_escapes, decode_url_payload, normalize_scan
from .validator import CSSValidator
from .policy import AdmissionPolicy, AdmissionReport, admit_css, build_report

__all__ = [
    'AdmissionState',
    'Rejection',
    'ScanBuffers',
    'sanitize_input',
    'build_buffers',
    'decode_escapes',
    'decode_url_payload',
    'normalize_scan',
    'CSSValidator',
    'AdmissionPolicy',
    'AdmissionReport',
    'admit_css',
    'build_report',
]

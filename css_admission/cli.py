#!/usr/bin/env python3
"""
Command-line interface for CSS Admission.
"""

import argparse
from dataclasses import asdict
import logging
import sys
from typing import List, Optional

import colorama
from colorama import Fore, Style

from css_admission.core.policy import AdmissionPolicy, admit_css, build_report
from css_admission.utils.config import ENABLE_COLOR, MAX_INPUT_FILE_SIZE, VERSION
from css_admission.utils.error import CSSAdmissionError, FileOperationError
from css_admission.utils.file import safe_read_file, safe_write_file
from css_admission.utils.logging import setup_logging

# Exit codes
EXIT_ACCEPTED = 0
EXIT_REJECTED = 1
EXIT_ERROR = 2

logger = logging.getLogger(__name__)

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='css-admission',
        description='Check an untrusted stylesheet before it is stored or emitted'
    )

    parser.add_argument(
        'file',
        help='Path to the CSS file, or - to read stdin'
    )

    # Output options
    parser.add_argument(
        '-o', '--output',
        help='Write the admitted CSS (or rejection comment) to this file'
    )
    parser.add_argument(
        '--json',
        help='Print a JSON report instead of text',
        action='store_true'
    )
    parser.add_argument(
        '--no-color',
        help='Disable coloured output',
        action='store_true'
    )

    # Policy options
    parser.add_argument(
        '--policy',
        help='JSON file with policy settings; flags below override it'
    )
    parser.add_argument(
        '--trusted',
        help='Treat the author as trusted and skip size limits',
        action='store_true'
    )
    parser.add_argument(
        '--max-bytes',
        help='Maximum size in bytes',
        type=int
    )
    parser.add_argument(
        '--max-lines',
        help='Maximum number of lines',
        type=int
    )
    parser.add_argument(
        '--allow-fonts',
        help='Allow @import of Google Fonts CSS',
        action='store_true'
    )
    parser.add_argument(
        '--allow-url',
        help='Allow url()',
        action='store_true'
    )
    parser.add_argument(
        '--block-scheme',
        help='Scheme to block inside url(), may be repeated',
        action='append',
        dest='blocked_schemes'
    )
    parser.add_argument(
        '--allow-at-rule',
        help='At-rule name to allow, may be repeated',
        action='append',
        dest='allowed_at_rules'
    )
    parser.add_argument(
        '--no-feedback',
        help='Return an empty result instead of the rejection comment',
        action='store_true'
    )

    # Other options
    parser.add_argument(
        '-v', '--verbose',
        help='Enable verbose output',
        action='store_true'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {VERSION}'
    )

    return parser.parse_args(argv)

def build_policy(args: argparse.Namespace) -> AdmissionPolicy:
    """Combine an optional policy file with command line overrides."""
    data = asdict(AdmissionPolicy.from_file(args.policy)) if args.policy else {}

    if args.trusted:
        data['unfiltered'] = True
    if args.max_bytes is not None:
        data['max_bytes'] = args.max_bytes
    if args.max_lines is not None:
        data['max_lines'] = args.max_lines
    if args.allow_fonts:
        data['allow_fonts'] = True
    if args.allow_url:
        data['allow_url'] = True
    if args.blocked_schemes:
        data['blocked_schemes'] = list(args.blocked_schemes)
    if args.allowed_at_rules:
        data['allowed_at_rules'] = list(args.allowed_at_rules)
    if args.no_feedback:
        data['feedback'] = False

    return AdmissionPolicy.from_dict(data)

def read_source(source: str) -> str:
    """Read CSS from a file path or stdin."""
    if source == '-':
        content = sys.stdin.read(MAX_INPUT_FILE_SIZE + 1)
        if len(content) > MAX_INPUT_FILE_SIZE:
            raise FileOperationError(f"Input too large (max {MAX_INPUT_FILE_SIZE} characters): stdin")
        return content
    return safe_read_file(source)

def print_verdict(report, color: bool) -> None:
    """Print a one-line human readable verdict."""
    if report.accepted:
        label, tint = 'ACCEPTED', Fore.GREEN
        detail = f"{report.bytes} bytes, {report.lines} lines"
    else:
        label, tint = 'REJECTED', Fore.RED
        detail = f"{report.reason} ({report.category})"

    if color:
        print(f"{tint}{Style.BRIGHT}{label}{Style.RESET_ALL} {detail}")
    else:
        print(f"{label} {detail}")

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    color = ENABLE_COLOR and not args.no_color and not args.json
    if color:
        colorama.just_fix_windows_console()

    try:
        policy = build_policy(args)
        css = read_source(args.file)
    except CSSAdmissionError as e:
        logger.error(f"Error: {e}")
        return EXIT_ERROR

    validator = admit_css(css, policy)
    report = build_report(validator)

    if args.output:
        try:
            safe_write_file(args.output, validator.result())
            logger.info(f"Result saved to {args.output}")
        except CSSAdmissionError as e:
            logger.error(f"Error: {e}")
            return EXIT_ERROR

    if args.json:
        sys.stdout.write(report.to_json(indent=True).decode('utf-8') + '\n')
    else:
        print_verdict(report, color)

    return EXIT_ACCEPTED if report.accepted else EXIT_REJECTED

if __name__ == '__main__':
    sys.exit(main())

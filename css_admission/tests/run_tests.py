#!/usr/bin/env python
"""Test runner for CSS Admission."""

import sys
import pytest
from pathlib import Path

def main():
    """Run the test suite."""
    # Get the project root directory
    project_root = Path(__file__).parent.parent.parent
    
    # Add project root to Python path
    sys.path.insert(0, str(project_root))
    
    # Configure pytest arguments
    args = [
        '--verbose',
        str(Path(__file__).parent),
    ]
    
    # Run tests
    return pytest.main(args)

if __name__ == '__main__':
    sys.exit(main())

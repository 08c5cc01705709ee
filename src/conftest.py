"""
Pytest Configuration
====================

Automatically loaded by pytest. Puts src/ on sys.path so conway_core and the
tests import without installing the package.

Usage:
    cd src
    pytest tests/ -v
"""

import sys
from pathlib import Path

SRC_ROOT = Path(__file__).parent


def pytest_configure(config):
    """Add src/ to path before any test module is imported."""
    if str(SRC_ROOT) not in sys.path:
        sys.path.insert(0, str(SRC_ROOT))


# Module level too, for imports that happen while collecting
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

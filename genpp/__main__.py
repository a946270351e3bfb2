"""
CLI entry point for genpp package.

Usage:
    python -m genpp [options] [FILE ...]
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())

"""
Entry point for running claw-readme as a module.

Usage:
    python -m claw_readme [path] [options]
"""

import sys

from claw_readme.cli import main

if __name__ == "__main__":
    sys.exit(main())

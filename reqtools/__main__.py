"""
Package entry point.

Allows running: python -m reqtools curl-parse command.txt
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())

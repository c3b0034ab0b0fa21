"""Package entry point for Screen Text Finder."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())

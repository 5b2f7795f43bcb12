"""
Module execution entry point.

Allows running with: python -m patricia_cli
"""

import sys
from patricia_cli.main import main

if __name__ == "__main__":
    sys.exit(main())

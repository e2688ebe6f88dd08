"""
Module execution entry point.

Allows running with: python -m allowtree_cli
"""

import sys
from allowtree_cli.main import main

if __name__ == "__main__":
    sys.exit(main())

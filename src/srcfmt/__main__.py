"""Entry point for ``python -m srcfmt``."""

import sys

from srcfmt.ui.cli import main

if __name__ == "__main__":
    sys.exit(main())

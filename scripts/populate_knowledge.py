"""Populate the knowledge base with the core UX dataset (or ``--file`` / ``--patterns``)."""

import sys

from ux_kb.cli import main

if __name__ == "__main__":
    main(["populate", *sys.argv[1:]])

"""Print the knowledge base verification report; exit 0 only on PASS."""

import sys

from ux_kb.cli import main

if __name__ == "__main__":
    main(["verify", *sys.argv[1:]])

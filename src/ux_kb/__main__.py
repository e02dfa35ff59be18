"""Entry point for ``python -m ux_kb``."""

from ux_kb.cli import main

if __name__ == "__main__":
    main()

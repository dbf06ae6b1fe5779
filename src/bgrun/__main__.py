"""Allow running bgrun as a module with python -m bgrun."""

from .cli import main

if __name__ == "__main__":
    import sys

    sys.exit(main())

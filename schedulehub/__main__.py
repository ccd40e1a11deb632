"""
Package entry point.

Allows running the application via:

    python -m schedulehub

This simply forwards execution to schedulehub.cli.main().
"""

from schedulehub.cli import main

if __name__ == "__main__":
    main()

"""Entry point for ``python -m ethwatch``."""

from ethwatch.cli.commands import app

if __name__ == "__main__":
    app()

"""Allow running taskgit as ``python -m taskgit``."""

from taskgit.cli import app

if __name__ == "__main__":
    app()

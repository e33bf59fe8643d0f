"""Allow ``python -m pingwire``."""

from pingwire.cli.commands import app

if __name__ == "__main__":
    app()

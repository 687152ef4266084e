"""Entry point for ``python -m blogweave``."""

from blogweave.cli.app import app


def main():
    """Entry point for the Typer CLI."""
    app()


if __name__ == "__main__":
    main()

"""Main entry point for the exampaper CLI."""

from exampaper.cli.app import app


def main():
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    main()

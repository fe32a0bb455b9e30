"""Entry point for running memegen as a module."""

from .cli import app


def main() -> None:
    """Main entry point for the memegen CLI application."""
    app()


if __name__ == "__main__":
    main()

"""Main entry point for batlights."""

from batlights.cli.main import cli

if __name__ == "__main__":
    cli()

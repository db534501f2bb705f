"""Main entry point for the redspawn command."""

from redspawn.cli.main import main


if __name__ == "__main__":
    main()

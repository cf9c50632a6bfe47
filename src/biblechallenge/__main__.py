"""Main entry point for the biblechallenge package."""

from biblechallenge.cli import main


if __name__ == "__main__":
    main()

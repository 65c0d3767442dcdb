"""Allow running BrewBase as `python -m brewbase`."""

from brewbase.cli import main

if __name__ == "__main__":
    main()

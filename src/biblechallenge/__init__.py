"""Group Bible reading challenge: reading logs, progress grids and monthly leaderboards."""

__version__ = "0.1.0"

"""org-stats: contribution and pull request statistics for GitHub organizations."""

__version__ = "0.1.0"

"""MDWiki: Korean-aware search for a personal markdown wiki."""

__version__ = "0.1.0"

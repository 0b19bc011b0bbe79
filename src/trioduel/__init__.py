"""Two-player, three-character turn-based battle engine."""

__version__ = "0.1.0"

"""Fantasy football lineup management analysis."""

__version__ = "0.1.0"

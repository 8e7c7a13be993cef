"""Leave accounting and scheduling core."""

__version__ = "1.0.0"

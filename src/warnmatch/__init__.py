"""Version-insensitive matching of static-analysis warnings."""

__version__ = "0.1.0"

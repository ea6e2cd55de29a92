"""smartlist - smart playlist rule editor."""

__version__ = "0.1.0"

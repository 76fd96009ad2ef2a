"""Screen component tree editing engine."""

__version__ = "0.1.0"

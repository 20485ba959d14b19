"""Norwegian legal citation extraction, parsing and validation."""

__version__ = "0.1.0"

"""Type Harvest - styled text to semantic HTML, grouped by font."""

__version__ = "0.1.0"

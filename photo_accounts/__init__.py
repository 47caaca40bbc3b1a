"""User account management for the photo server."""

__version__ = "1.0.0"

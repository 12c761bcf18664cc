"""School roles and permissions service."""

__version__ = "0.1.0"

"""Plugin settings service: validation, persistence and change notification of per-plugin settings."""

__version__ = "0.1.0"

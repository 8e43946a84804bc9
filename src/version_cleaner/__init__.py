"""version-cleaner: retention-driven cleanup of package registry versions."""

__version__ = "0.1.0"

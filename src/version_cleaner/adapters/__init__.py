"""Adapters (I/O).

Concrete implementations of `core.interfaces` contracts. Only this package
talks HTTP.
"""

from version_cleaner.adapters.github_registry import GitHubPackageRegistry

__all__ = ["GitHubPackageRegistry"]

"""Error taxonomy.

Every failure the pipeline can surface is a `VersionCleanerError`; the CLI
prints the message verbatim and exits non-zero. No-op outcomes are results,
never errors.
"""

from __future__ import annotations

from typing import Sequence

GENERIC_REMOTE_HINT = "verify input parameters are correct"


class VersionCleanerError(Exception):
    """Base class for errors surfaced to the caller."""


class ConfigurationError(VersionCleanerError):
    """No usable combination of explicit ids / oldest-N / keep-N inputs."""


class AuthenticationError(VersionCleanerError):
    """Credential missing or empty."""


class NotFoundError(VersionCleanerError):
    """The registry has no package with the given name in the repository."""

    def __init__(self, *, package_name: str, owner: str, repo: str) -> None:
        self.package_name = package_name
        self.owner = owner
        self.repo = repo
        super().__init__(f"package: {package_name} not found for owner: {owner} in repo: {repo}")


class TransportError(VersionCleanerError):
    """A remote call failed; message is `<operation> failed. <detail>`."""

    def __init__(self, operation: str, detail: str | None = None) -> None:
        self.operation = operation
        self.detail = detail or GENERIC_REMOTE_HINT
        super().__init__(f"{operation} failed. {self.detail}")


class RemoteCallError(Exception):
    """Raised by transport adapters for any failed remote call.

    `messages` holds the structured error detail the remote supplied, if any.
    """

    def __init__(self, messages: Sequence[str] = (), *, status_code: int | None = None) -> None:
        self.messages = [m for m in messages if m]
        self.status_code = status_code
        super().__init__(self.messages[0] if self.messages else "remote call failed")


def wrap_remote_failure(operation: str, exc: RemoteCallError) -> TransportError:
    """Translate a transport failure into the domain `TransportError`."""

    detail = exc.messages[0] if exc.messages else None
    return TransportError(operation, detail)

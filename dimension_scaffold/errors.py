"""Exceptions raised while scaffolding a workspace.

Every user-facing failure derives from ``ScaffoldError`` so the CLI can
report it and exit with a single failure code.  Internal defects (a registry
role lookup miss, an invalid dependency descriptor) are deliberately *not*
part of this hierarchy and surface as ordinary ``KeyError`` /
``ValidationError`` tracebacks.
"""

from __future__ import annotations

from pathlib import Path

FAILURE_EXIT_CODE = 101


class ScaffoldError(Exception):
    """Base class for fatal, user-visible scaffolding errors."""

    exit_code: int = FAILURE_EXIT_CODE


class DestinationExistsError(ScaffoldError):
    """Raised when the destination directory is already present."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"destination '{path}' already exists")


class OverrideConflictError(ScaffoldError):
    """Raised when the dependency override inputs do not form a valid selection."""


class ScaffoldFileSystemError(ScaffoldError):
    """Raised when creating a directory or writing a file fails."""

    def __init__(self, action: str, path: Path, cause: OSError) -> None:
        self.action = action
        self.path = path
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"failed to {action} '{path}': {reason}")


class PublishedIndexError(Exception):
    """Raised when the published crate index cannot be queried."""

"""Custom exception hierarchy for presence-core.

This module defines the fatal errors raised while compiling presences:
- PresenceError: Base exception for all presence-related errors
- DependencyInstallError: Raised when the package installer fails
- BundlerInvocationError: Raised when the bundling engine itself fails
- MetadataError: Raised when a metadata.json file is missing or invalid

Bundler diagnostics (type errors, syntax errors) are NOT exceptions. They are
returned as data from PresenceCompiler.compile().

User-facing messages are safe to display; technical details (installer
stderr, driver output) are logged internally via structlog.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)


class PresenceError(Exception):
    """Base exception for presence-build.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details for logging. This is
            logged internally but never part of the exception message.

    Example:
        >>> raise PresenceError(
        ...     "Presence name must not be empty",
        ...     internal_details="resolve() called with ''",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize PresenceError with user message and optional internal details.

        Args:
            user_message: Safe message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details

        if internal_details:
            logger.error(
                "presence_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class DependencyInstallError(PresenceError):
    """Raised when installing a presence's dependencies fails.

    The installer exited non-zero or could not be started. This aborts the
    current unit (single mode) or the remaining batch.

    Attributes:
        presence: Name of the presence being provisioned.
        exit_code: Installer exit code, or None if it never started.

    Example:
        >>> raise DependencyInstallError(
        ...     "YouTube",
        ...     exit_code=1,
        ...     internal_details="npm ERR! code E404",
        ... )
        # User sees: "Failed to install dependencies for YouTube (exit code 1)"
    """

    def __init__(
        self,
        presence: str,
        *,
        exit_code: int | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize DependencyInstallError.

        Args:
            presence: Name of the presence being provisioned.
            exit_code: Installer exit code, if the process ran.
            internal_details: Captured installer output for internal logging.
        """
        user_message = f"Failed to install dependencies for {presence}"
        if exit_code is not None:
            user_message = f"{user_message} (exit code {exit_code})"

        super().__init__(user_message, internal_details=internal_details)

        self.presence = presence
        self.exit_code = exit_code


class BundlerInvocationError(PresenceError):
    """Raised when the bundling engine could not run.

    This is distinct from diagnostics: the engine never produced a
    compilation result at all.

    Attributes:
        presence: Name of the presence being bundled, if known.
    """

    def __init__(
        self,
        user_message: str,
        *,
        presence: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize BundlerInvocationError.

        Args:
            user_message: Safe message to display to the user.
            presence: Name of the presence being bundled, if known.
            internal_details: Technical details for internal logging only.
        """
        if presence:
            user_message = f"{user_message} ({presence})"

        super().__init__(user_message, internal_details=internal_details)

        self.presence = presence


class MetadataError(PresenceError):
    """Raised when a presence's metadata.json cannot be read or validated.

    Attributes:
        file_path: Path to the metadata file (if known).
        field_path: Dot-separated path to the invalid field (e.g., "author.id").

    Example:
        >>> raise MetadataError(
        ...     "Invalid metadata",
        ...     file_path="websites/Y/YouTube/metadata.json",
        ...     field_path="version",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        field_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize MetadataError with context.

        Args:
            user_message: Safe message to display to the user.
            file_path: Path to the metadata file (optional).
            field_path: Dot-separated path to the field (optional).
            internal_details: Technical details for internal logging only.
        """
        context_parts: list[str] = []
        if file_path:
            context_parts.append(f"in {file_path}")
        if field_path:
            context_parts.append(f"field '{field_path}'")

        if context_parts:
            full_message = f"{user_message} ({', '.join(context_parts)})"
        else:
            full_message = user_message

        super().__init__(full_message, internal_details=internal_details)

        self.file_path = file_path
        self.field_path = field_path

"""CLI error handling for presence-cli.

Wraps presence-core exceptions into user-friendly messages with
appropriate exit codes.
"""

from __future__ import annotations

from typing import NoReturn

import click

from presence_cli import output
from presence_core.errors import PresenceError

# Exit codes
EXIT_DIAGNOSTICS = 1  # Build finished with diagnostics / invalid metadata
EXIT_FATAL = 2  # Installer or bundler could not run


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI.
    """

    def __init__(self, message: str, exit_code: int = EXIT_FATAL) -> None:
        """Initialize CLIError.

        Args:
            message: User-facing error message.
            exit_code: Exit code for the CLI.
        """
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        output.error(self.format_message())


def handle_presence_error(err: PresenceError, exit_code: int = EXIT_FATAL) -> NoReturn:
    """Convert a presence-core error into a CLIError.

    Only the user-facing message is shown; internal details were already
    logged when the error was raised.

    Raises:
        CLIError: Always.
    """
    raise CLIError(err.user_message, exit_code=exit_code) from err

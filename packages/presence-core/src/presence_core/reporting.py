"""Console and CI reporting for presence compilation.

Messages go to a Rich console. Under GitHub Actions, errors that carry a
source location are also emitted as workflow commands so they show up as
annotations on the pull request.

Reporting is fire-and-forget: nothing here influences compile results.
"""

from __future__ import annotations

from pathlib import PurePath
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from presence_core.config import is_ci

if TYPE_CHECKING:
    from presence_core.models import BuildDiagnostic


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


def workflow_command(
    command: str,
    message: str,
    *,
    file: str | None = None,
    line: int | None = None,
    column: int | None = None,
    title: str | None = None,
) -> str:
    """Build a GitHub Actions workflow command line.

    Args:
        command: Command name (error, warning, notice).
        message: Annotation message.
        file: Source file the annotation points at.
        line: 1-based line number.
        column: 1-based column number.
        title: Annotation title.

    Returns:
        The "::command props::message" line.

    Example:
        >>> workflow_command("error", "bad", file="a.ts", line=3)
        '::error file=a.ts,line=3::bad'
    """
    props: list[str] = []
    if file:
        props.append(f"file={_escape_property(file)}")
    if line is not None:
        props.append(f"line={line}")
    if column is not None:
        props.append(f"col={column}")
    if title:
        props.append(f"title={_escape_property(title)}")

    prop_text = f" {','.join(props)}" if props else ""
    return f"::{command}{prop_text}::{_escape_data(message)}"


def format_diagnostic(diagnostic: BuildDiagnostic) -> str:
    """Render a diagnostic as "dir/file:line:col - Error TS<code>: message".

    Args:
        diagnostic: Diagnostic to render.

    Returns:
        Single-line plain-text rendering.
    """
    location = "<unknown>"
    if diagnostic.file:
        path = PurePath(diagnostic.file)
        location = f"{path.parent.name}/{path.name}" if path.parent.name else path.name
        if diagnostic.line is not None:
            location = f"{location}:{diagnostic.line}"
            if diagnostic.column is not None:
                location = f"{location}:{diagnostic.column}"

    label = f"TS{diagnostic.code}" if diagnostic.code is not None else diagnostic.kind
    return f"{location} - Error {label}: {diagnostic.message}"


class Reporter:
    """Reporting sink for compile progress and diagnostics.

    Attributes:
        console: Rich console messages are printed to
        annotate: Whether GitHub Actions annotations are emitted

    Example:
        >>> reporter = Reporter()
        >>> reporter.success("Successfully compiled YouTube")
    """

    def __init__(self, console: Console | None = None, annotate: bool | None = None) -> None:
        """Initialize the reporter.

        Args:
            console: Rich console (creates one writing to stderr if not provided)
            annotate: Emit workflow commands; defaults to is_ci()
        """
        self.console = console or Console(stderr=True)
        self.annotate = is_ci() if annotate is None else annotate

    def info(self, message: str) -> None:
        """Report an informational message."""
        self.console.print(f"[yellow]{escape(message)}[/yellow]")

    def success(self, message: str) -> None:
        """Report a success message."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(
        self,
        message: str,
        *,
        file: str | None = None,
        line: int | None = None,
        column: int | None = None,
        title: str | None = None,
    ) -> None:
        """Report an error, annotating it in CI when a location is known."""
        self.console.print(f"[red]✗[/red] {escape(message)}")
        if self.annotate:
            self.console.out(
                workflow_command(
                    "error", message, file=file, line=line, column=column, title=title
                ),
                highlight=False,
            )

    def diagnostic(self, diagnostic: BuildDiagnostic) -> None:
        """Report a bundler diagnostic with its location."""
        title = f"TS {diagnostic.code}" if diagnostic.code is not None else diagnostic.kind
        self.error(
            format_diagnostic(diagnostic),
            file=diagnostic.file,
            line=diagnostic.line,
            column=diagnostic.column,
            title=title,
        )

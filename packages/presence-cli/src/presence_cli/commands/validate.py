"""presence validate command - Validate presence metadata.json files."""

from __future__ import annotations

from pathlib import Path

import click
from rich.markup import escape

from presence_cli.errors import EXIT_DIAGNOSTICS
from presence_cli.output import error, success


@click.command()
@click.argument("presences", nargs=-1, required=True)
@click.option(
    "--cwd",
    "cwd",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Repository root holding the websites directory [default: current directory]",
)
def validate(presences: tuple[str, ...], cwd: Path | None) -> None:
    """Validate the metadata.json of one or more presences.

    Examples:

        presence validate YouTube

        presence validate YouTube Netflix --cwd ../presences
    """
    from presence_core import PresenceError, PresenceResolver, load_metadata

    resolver = PresenceResolver(cwd or Path.cwd())
    failures = 0

    for presence in presences:
        try:
            metadata = load_metadata(resolver.folder(presence))
        except PresenceError as e:
            error(escape(f"{presence}: {e.user_message}"))
            failures += 1
            continue
        success(f"{presence}: {metadata.service} v{metadata.version}")

    if failures:
        raise SystemExit(EXIT_DIAGNOSTICS)

"""presence compile command - Build presences into bundles."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click

from presence_cli import output
from presence_cli.errors import EXIT_DIAGNOSTICS, handle_presence_error


@click.command("compile")
@click.argument("presences", nargs=-1, required=True)
@click.option(
    "--cwd",
    "cwd",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Repository root holding the websites directory [default: current directory]",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Output directory [default: each presence's own directory]",
)
@click.option(
    "--transpile-only",
    is_flag=True,
    default=False,
    help="Skip type-checking, only transform syntax.",
)
@click.option(
    "--emit/--no-emit",
    default=True,
    help="Write compiled bundles to disk [default: emit].",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level for structured logs [default: from settings].",
)
def compile_cmd(
    presences: tuple[str, ...],
    cwd: Path | None,
    output_path: Path | None,
    transpile_only: bool,
    emit: bool,
    log_level: str | None,
) -> None:
    """Compile one or more presences.

    A single presence is built with its own success message; several are built
    in order as one batch.

    Examples:

        presence compile YouTube

        presence compile YouTube Netflix --transpile-only

        presence compile YouTube --no-emit
    """
    # Import here to avoid heavy imports at CLI startup
    from presence_core import (
        CompileOptions,
        PresenceCompiler,
        PresenceError,
        Reporter,
        configure_logging,
        load_settings,
    )

    overrides: dict[str, object] = {}
    if cwd is not None:
        overrides["root"] = cwd
    if log_level is not None:
        overrides["log_level"] = log_level.upper()

    env_file = (cwd or Path.cwd()) / ".env"
    settings = load_settings(env_file=env_file, **overrides)
    configure_logging(log_level=settings.log_level, json_format=settings.log_json)

    compiler = PresenceCompiler(settings, reporter=Reporter(console=output.console))
    options = CompileOptions(output=output_path, transpile_only=transpile_only, emit=emit)
    target: str | list[str] = presences[0] if len(presences) == 1 else list(presences)

    try:
        diagnostics = asyncio.run(compiler.compile(target, options))
    except PresenceError as e:
        handle_presence_error(e)

    if diagnostics:
        output.error(f"{len(diagnostics)} error(s) found")
        raise SystemExit(EXIT_DIAGNOSTICS)

"""Ephemeral per-presence TypeScript configuration.

Each presence is built against a tsconfig.json that only extends the
repository-wide one. The file exists for the duration of the build and is
removed afterwards, whatever the outcome.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

TSCONFIG_FILENAME = "tsconfig.json"

# websites/<letter>/<name>/ is three levels below the root
TSCONFIG = json.dumps({"extends": "../../../tsconfig.json"})


def write_config(directory: Path) -> Path:
    """Write the ephemeral tsconfig.json into a presence directory."""
    path = directory / TSCONFIG_FILENAME
    path.write_text(TSCONFIG)
    logger.debug("ephemeral_config_written", path=str(path))
    return path


def remove_config(directory: Path) -> bool:
    """Remove the ephemeral tsconfig.json if present.

    Returns:
        True if a file was removed.
    """
    path = directory / TSCONFIG_FILENAME
    if not path.exists():
        return False
    path.unlink()
    logger.debug("ephemeral_config_removed", path=str(path))
    return True


@contextmanager
def ephemeral_config(directory: Path) -> Iterator[Path]:
    """Scope an ephemeral tsconfig.json to a block.

    The file is removed on exit, including when the block raises.

    Args:
        directory: Presence directory.

    Yields:
        Path of the written config.

    Example:
        >>> with ephemeral_config(unit.path):
        ...     await invoker.run(...)
    """
    path = write_config(directory)
    try:
        yield path
    finally:
        remove_config(directory)

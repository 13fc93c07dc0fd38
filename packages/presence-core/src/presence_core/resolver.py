"""Presence path resolution.

Presences live under <root>/websites/<letter>/<name>, where <letter> is the
upper-cased first character of the name, "0-9" for names starting with a
digit and "#" for anything else.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from presence_core.errors import PresenceError
from presence_core.models import MANIFEST_FILE, SECONDARY_ENTRY_FILE, PresenceUnit

logger = structlog.get_logger(__name__)

DIGIT_FOLDER = "0-9"
OTHER_FOLDER = "#"


def get_folder_letter(presence: str) -> str:
    """Return the category folder for a presence name.

    Args:
        presence: Presence name.

    Returns:
        Folder name under the websites directory.

    Raises:
        PresenceError: If the name is empty.

    Example:
        >>> get_folder_letter("youtube")
        'Y'
        >>> get_folder_letter("9GAG")
        '0-9'
    """
    if not presence:
        raise PresenceError("Presence name must not be empty")

    first = presence[0].upper()
    if "A" <= first <= "Z":
        return first
    if first.isdigit():
        return DIGIT_FOLDER
    return OTHER_FOLDER


class PresenceResolver:
    """Maps presence names to their source directories.

    Attributes:
        root: Repository root
        websites_dir: Directory under root holding the category folders
    """

    def __init__(self, root: Path, websites_dir: str = "websites") -> None:
        self.root = Path(root).resolve()
        self.websites_dir = websites_dir

    def folder(self, presence: str) -> Path:
        """Return the directory expected to hold a presence's sources.

        Pure path computation; the directory may not exist.
        """
        return self.root / self.websites_dir / get_folder_letter(presence) / presence

    def resolve(self, presence: str) -> PresenceUnit:
        """Resolve a presence name to a PresenceUnit.

        The iframe entry and dependency manifest are checked on every call.
        """
        path = self.folder(presence)
        unit = PresenceUnit(
            name=presence,
            path=path,
            has_iframe=(path / SECONDARY_ENTRY_FILE).exists(),
            has_manifest=(path / MANIFEST_FILE).exists(),
        )
        logger.debug(
            "presence_resolved",
            presence=presence,
            path=str(path),
            has_iframe=unit.has_iframe,
            has_manifest=unit.has_manifest,
        )
        return unit

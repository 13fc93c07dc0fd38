"""Presence metadata.json schema.

Every presence directory carries a metadata.json describing the service it
targets. This module validates it; it plays no part in bundling.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from presence_core.errors import MetadataError

if TYPE_CHECKING:
    from presence_core.models import PresenceUnit

METADATA_FILENAME = "metadata.json"

SCHEMA_PATTERN = r"^https://schemas\.premid\.app/metadata/\d+\.\d+$"
VERSION_PATTERN = r"^\d+\.\d+\.\d+$"
IMAGE_PATTERN = r"^https://i\.imgur\.com/[^/]+\.(png|jpeg|jpg|gif)$"
COLOR_PATTERN = r"^#[0-9A-Fa-f]{3,8}$"

Value = str | int | float | bool


class Contributor(BaseModel):
    """Author or contributor of a presence."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1, description="Display name")
    id: str = Field(..., pattern=r"^\d+$", description="Numeric user id")


class Setting(BaseModel):
    """A user-facing presence setting.

    Covers plain, string, boolean, list and multi-language settings; which
    fields are present depends on the kind of setting.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    id: str = Field(..., min_length=1, description="Setting id")
    title: str | None = Field(default=None, description="Setting title")
    icon: str | None = Field(default=None, description="Font Awesome icon")
    value: Value | None = Field(default=None, description="Default value")
    placeholder: str | None = Field(default=None, description="Input placeholder")
    values: list[Value] | None = Field(default=None, description="Choices")
    multi_language: bool | str | list[str] | None = Field(
        default=None, alias="multiLanguage", description="Multi-language setting"
    )
    if_: dict[str, Value] | None = Field(
        default=None, alias="if", description="Visibility conditions"
    )


class Metadata(BaseModel):
    """Validated contents of a presence's metadata.json.

    Example:
        >>> metadata = Metadata.model_validate_json(path.read_text())
        >>> metadata.service
        'YouTube'
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    schema_url: str = Field(..., alias="$schema", pattern=SCHEMA_PATTERN)
    author: Contributor
    contributors: list[Contributor] = Field(default_factory=list)
    service: str = Field(..., min_length=1)
    altnames: list[str] = Field(default_factory=list)
    description: dict[str, str] = Field(..., min_length=1)
    url: str | list[str]
    reg_exp: str | None = Field(default=None, alias="regExp")
    version: str = Field(..., pattern=VERSION_PATTERN)
    logo: str = Field(..., pattern=IMAGE_PATTERN)
    thumbnail: str = Field(..., pattern=IMAGE_PATTERN)
    color: str = Field(..., pattern=COLOR_PATTERN)
    tags: str | list[str]
    category: str = Field(..., min_length=1)
    iframe: bool = False
    iframe_reg_exp: str | None = Field(default=None, alias="iFrameRegExp")
    read_logs: bool = Field(default=False, alias="readLogs")
    settings: list[Setting] = Field(default_factory=list)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str | list[str]) -> str | list[str]:
        """Require host-like values ("example.com")."""
        for url in [v] if isinstance(v, str) else v:
            if "." not in url:
                raise ValueError(f"'{url}' is not a domain")
        return v


def load_metadata(unit: PresenceUnit | Path) -> Metadata:
    """Read and validate a presence's metadata.json.

    Args:
        unit: Presence unit or presence directory.

    Returns:
        Validated Metadata.

    Raises:
        MetadataError: If the file is missing, unreadable or invalid.
    """
    directory = unit if isinstance(unit, Path) else unit.path
    path = directory / METADATA_FILENAME

    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise MetadataError("Metadata file not found", file_path=str(path)) from None
    except OSError as e:
        raise MetadataError(
            "Metadata file could not be read", file_path=str(path), internal_details=str(e)
        ) from e

    try:
        return Metadata.model_validate_json(content)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(x) for x in first["loc"]) or None
        raise MetadataError(
            f"Invalid metadata: {first['msg']}",
            file_path=str(path),
            field_path=field,
            internal_details=str(e),
        ) from e

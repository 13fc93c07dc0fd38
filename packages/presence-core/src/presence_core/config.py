"""Compiler settings.

Settings are loaded once at process start by load_settings() and passed
into PresenceCompiler. Values come from PRESENCE_* environment variables and,
outside CI, from a .env file.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CI_ENV_VAR = "GITHUB_ACTIONS"
"""Environment variable that marks a CI run."""

DEFAULT_INSTALL_COMMAND = ["npm", "install", "--quiet", "--loglevel=error"]


class CompilerSettings(BaseSettings):
    """Settings for PresenceCompiler.

    Example:
        >>> # From environment
        >>> settings = CompilerSettings()
        >>>
        >>> # Explicit
        >>> settings = CompilerSettings(root=Path("/src/presences"))
    """

    model_config = SettingsConfigDict(
        env_prefix="PRESENCE_",
        extra="ignore",
        frozen=True,
    )

    root: Path = Field(
        default_factory=Path.cwd,
        description="Repository root holding the websites directory",
    )
    websites_dir: str = Field(
        default="websites",
        min_length=1,
        description="Directory (relative to root) holding the presences",
    )
    node_executable: str = Field(
        default="node",
        min_length=1,
        description="Node.js executable used to run the bundler",
    )
    install_command: list[str] = Field(
        default_factory=lambda: list(DEFAULT_INSTALL_COMMAND),
        min_length=1,
        description="Command that installs a presence's dependencies",
    )
    log_level: str = Field(default="WARNING", description="Minimum log level")
    log_json: bool = Field(default=False, description="Render logs as JSON")


def is_ci() -> bool:
    """Return True when running under GitHub Actions."""
    return bool(os.environ.get(CI_ENV_VAR))


def load_settings(
    env_file: Path | str | None = ".env",
    **overrides: object,
) -> CompilerSettings:
    """Load compiler settings.

    The .env file is only read outside CI; in CI the environment is the
    single source of configuration.

    Args:
        env_file: Path to the .env file, or None to skip it.
        **overrides: Explicit values that win over the environment.

    Returns:
        Loaded CompilerSettings.

    Example:
        >>> settings = load_settings(root="/src/presences")
    """
    if is_ci():
        env_file = None
    return CompilerSettings(_env_file=env_file, **overrides)  # type: ignore[call-arg]

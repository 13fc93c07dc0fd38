"""Shared test fixtures for presence-cli tests.

Provides CliRunner fixtures, a scripted compiler double and a presence
tree with metadata for testing CLI commands.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
import structlog
from click.testing import CliRunner

VALID_METADATA: dict[str, Any] = {
    "$schema": "https://schemas.premid.app/metadata/1.10",
    "author": {"name": "dev", "id": "123456789012345678"},
    "service": "YouTube",
    "description": {"en": "Watch videos"},
    "url": "www.youtube.com",
    "version": "1.2.3",
    "logo": "https://i.imgur.com/abc.png",
    "thumbnail": "https://i.imgur.com/def.jpg",
    "color": "#E40813",
    "tags": ["video"],
    "category": "videos",
}


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def outside_ci(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test as if outside GitHub Actions."""
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner.

    Returns:
        CliRunner instance for testing CLI commands.
    """
    return CliRunner()


class FakeCompiler:
    """Scripted stand-in for PresenceCompiler.

    Class-level state is reset by the fake_compiler fixture.
    """

    instances: list[FakeCompiler] = []
    calls: list[tuple[Any, Any]] = []
    scripted_result: list[Any] = []
    scripted_error: BaseException | None = None

    def __init__(self, settings: Any = None, reporter: Any = None, **kwargs: Any) -> None:
        self.settings = settings
        self.reporter = reporter
        type(self).instances.append(self)

    async def compile(self, target: Any, options: Any = None) -> list[Any]:
        type(self).calls.append((target, options))
        if type(self).scripted_error is not None:
            raise type(self).scripted_error
        return list(type(self).scripted_result)


@pytest.fixture
def fake_compiler() -> Generator[type[FakeCompiler], None, None]:
    """Patch PresenceCompiler and logging setup for compile command tests.

    Yields:
        The FakeCompiler class; set scripted_result or scripted_error on it.
    """
    FakeCompiler.instances = []
    FakeCompiler.calls = []
    FakeCompiler.scripted_result = []
    FakeCompiler.scripted_error = None
    with (
        patch("presence_core.PresenceCompiler", FakeCompiler),
        patch("presence_core.configure_logging"),
    ):
        yield FakeCompiler


@pytest.fixture
def make_presence(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture creating presences with a metadata.json.

    Returns:
        Function (name, metadata=None) -> presence directory.
    """

    def _make(name: str, metadata: dict[str, Any] | None = None) -> Path:
        path = tmp_path / "websites" / name[0].upper() / name
        path.mkdir(parents=True, exist_ok=True)
        data = VALID_METADATA if metadata is None else metadata
        (path / "metadata.json").write_text(json.dumps(data))
        return path

    return _make

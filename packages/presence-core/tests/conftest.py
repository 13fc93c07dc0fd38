"""Shared pytest fixtures for presence-core tests.

Provides a temporary presence tree, a scripted bundler double and a
recording reporter so orchestration can be tested without Node.js.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
import structlog

from presence_core.compiler import PresenceCompiler
from presence_core.config import CompilerSettings
from presence_core.ephemeral import TSCONFIG_FILENAME
from presence_core.models import BuildDiagnostic, CompilationResult, DiagnosticKind
from presence_core.provisioner import DependencyProvisioner
from presence_core.reporting import Reporter
from presence_core.resolver import get_folder_letter


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture(autouse=True)
def outside_ci(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test as if outside GitHub Actions."""
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)


@dataclass
class BundlerCall:
    """One recorded bundler invocation."""

    presence: str
    config: dict[str, Any]
    entries: dict[str, str]
    tsconfig_present: bool


@dataclass
class FakeBundler:
    """Bundler double keyed by presence directory name.

    Completes synchronously with the scripted diagnostics, or with the
    scripted invocation error.
    """

    diagnostics: dict[str, list[BuildDiagnostic]] = field(default_factory=dict)
    errors: dict[str, BaseException] = field(default_factory=dict)
    calls: list[BundlerCall] = field(default_factory=list)

    def invoke(
        self,
        config: dict[str, Any],
        entries: dict[str, str],
        on_complete: Callable[[BaseException | None, CompilationResult | None], None],
    ) -> None:
        context = Path(config["context"])
        presence = context.name
        self.calls.append(
            BundlerCall(
                presence=presence,
                config=config,
                entries=dict(entries),
                tsconfig_present=(context / TSCONFIG_FILENAME).exists(),
            )
        )
        if presence in self.errors:
            on_complete(self.errors[presence], None)
            return
        on_complete(
            None, CompilationResult(diagnostics=list(self.diagnostics.get(presence, [])))
        )

    @property
    def built(self) -> list[str]:
        return [call.presence for call in self.calls]


class RecordingReporter(Reporter):
    """Reporter that records messages instead of printing them."""

    def __init__(self) -> None:
        super().__init__(annotate=False)
        self.infos: list[str] = []
        self.successes: list[str] = []
        self.errors: list[str] = []
        self.diagnostics: list[BuildDiagnostic] = []

    def info(self, message: str) -> None:
        self.infos.append(message)

    def success(self, message: str) -> None:
        self.successes.append(message)

    def error(self, message: str, **kwargs: Any) -> None:
        self.errors.append(message)

    def diagnostic(self, diagnostic: BuildDiagnostic) -> None:
        self.diagnostics.append(diagnostic)
        super().diagnostic(diagnostic)


@pytest.fixture
def presence_root(tmp_path: Path) -> Path:
    """Return a repository root with an empty websites directory."""
    (tmp_path / "websites").mkdir()
    (tmp_path / "tsconfig.json").write_text(json.dumps({"compilerOptions": {}}))
    return tmp_path


@pytest.fixture
def make_presence(presence_root: Path) -> Callable[..., Path]:
    """Factory fixture creating presence directories.

    Returns:
        Function (name, iframe=False, manifest=False) -> presence directory.
    """

    def _make(name: str, *, iframe: bool = False, manifest: bool = False) -> Path:
        path = presence_root / "websites" / get_folder_letter(name) / name
        path.mkdir(parents=True, exist_ok=True)
        (path / "presence.ts").write_text("const presence = new Presence({});\n")
        if iframe:
            (path / "iframe.ts").write_text("const iframe = new iFrame();\n")
        if manifest:
            (path / "package.json").write_text(json.dumps({"dependencies": {}}))
        return path

    return _make


@pytest.fixture
def fake_bundler() -> FakeBundler:
    """Return a scripted bundler double."""
    return FakeBundler()


@pytest.fixture
def reporter() -> RecordingReporter:
    """Return a recording reporter."""
    return RecordingReporter()


@pytest.fixture
def provisioner() -> MagicMock:
    """Return a dependency provisioner mock."""
    return MagicMock(spec=DependencyProvisioner)


@pytest.fixture
def compiler(
    presence_root: Path,
    fake_bundler: FakeBundler,
    reporter: RecordingReporter,
    provisioner: MagicMock,
) -> PresenceCompiler:
    """Return a PresenceCompiler wired to the test doubles."""
    return PresenceCompiler(
        CompilerSettings(root=presence_root),
        bundler=fake_bundler,
        provisioner=provisioner,
        reporter=reporter,
    )


def make_diagnostic(
    kind: str = DiagnosticKind.TYPESCRIPT.value,
    message: str = "Cannot find name 'foo'.",
    file: str = "presence.ts",
    line: int = 1,
    column: int = 1,
    code: int | None = 2304,
) -> BuildDiagnostic:
    """Build a diagnostic with sensible defaults."""
    return BuildDiagnostic(
        kind=kind, message=message, file=file, line=line, column=column, code=code
    )


@pytest.fixture
def diagnostic() -> Callable[..., BuildDiagnostic]:
    """Factory fixture for BuildDiagnostic instances."""
    return make_diagnostic

"""Unit tests for compilation models."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from presence_core.models import (
    BuildDiagnostic,
    CompilationResult,
    CompileOptions,
    DiagnosticKind,
    PresenceUnit,
)


class TestPresenceUnit:
    """Tests for PresenceUnit."""

    def test_entries_without_iframe(self) -> None:
        """Only the presence entry is bundled by default."""
        unit = PresenceUnit(name="YouTube", path=Path("websites/Y/YouTube"))
        assert unit.entries == {"presence": "./presence.ts"}

    def test_entries_with_iframe(self) -> None:
        """The iframe entry is added when iframe.ts exists."""
        unit = PresenceUnit(name="YouTube", path=Path("websites/Y/YouTube"), has_iframe=True)
        assert unit.entries == {"presence": "./presence.ts", "iframe": "./iframe.ts"}

    def test_name_required(self) -> None:
        """An empty name is rejected."""
        with pytest.raises(ValidationError):
            PresenceUnit(name="", path=Path("."))

    def test_frozen(self) -> None:
        """Units are immutable."""
        unit = PresenceUnit(name="YouTube", path=Path("."))
        with pytest.raises(ValidationError):
            unit.name = "Netflix"  # type: ignore[misc]


class TestCompileOptions:
    """Tests for CompileOptions."""

    def test_defaults(self) -> None:
        """Defaults emit type-checked output next to the sources."""
        options = CompileOptions()
        assert options.output is None
        assert options.transpile_only is False
        assert options.emit is True
        assert options.verb == "compiled"

    def test_transpile_verb(self) -> None:
        """Transpile-only builds report as transpiled."""
        assert CompileOptions(transpile_only=True).verb == "transpiled"

    def test_extra_rejected(self) -> None:
        """Unknown options are rejected."""
        with pytest.raises(ValidationError):
            CompileOptions(watch=True)  # type: ignore[call-arg]


class TestBuildDiagnostic:
    """Tests for BuildDiagnostic and CompilationResult."""

    def test_parses_driver_payload(self) -> None:
        """Driver output with unknown keys is accepted."""
        result = CompilationResult.model_validate(
            {
                "diagnostics": [
                    {
                        "kind": "TypeScriptError",
                        "message": "Cannot find name 'foo'.",
                        "file": "/repo/websites/Y/YouTube/presence.ts",
                        "line": 3,
                        "column": 5,
                        "code": 2304,
                        "stack": "ignored",
                    }
                ],
                "stats": {},
            }
        )

        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].kind == DiagnosticKind.TYPESCRIPT.value
        assert result.diagnostics[0].code == 2304

    def test_location_optional(self) -> None:
        """Diagnostics without a location are valid."""
        diag = BuildDiagnostic(kind="ModuleNotFoundError", message="Can't resolve 'x'")
        assert diag.file is None
        assert diag.line is None

    def test_empty_result(self) -> None:
        """A clean build has no diagnostics."""
        assert CompilationResult().diagnostics == []

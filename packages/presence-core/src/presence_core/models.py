"""Compilation data models.

Models describing a presence being compiled, the options for a compile call,
and the diagnostics the bundler reports back.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

PRIMARY_ENTRY = "presence"
"""Entry name of the required presence script."""

SECONDARY_ENTRY = "iframe"
"""Entry name of the optional iframe script."""

PRIMARY_ENTRY_FILE = "presence.ts"
SECONDARY_ENTRY_FILE = "iframe.ts"
MANIFEST_FILE = "package.json"


class DiagnosticKind(str, Enum):
    """Stable tags for diagnostics produced by the bundler.

    Attributes:
        MODULE_BUILD: Wrapper emitted by the bundler around a loader failure.
            The underlying cause is always reported separately.
        TYPESCRIPT: A type or syntax error reported by the TypeScript loader.
        MODULE_NOT_FOUND: An import that could not be resolved.
    """

    MODULE_BUILD = "ModuleBuildError"
    TYPESCRIPT = "TypeScriptError"
    MODULE_NOT_FOUND = "ModuleNotFoundError"


class PresenceUnit(BaseModel):
    """One buildable presence, derived at compile time.

    Attributes:
        name: Presence name (its identity)
        path: Directory expected to hold the presence sources
        has_iframe: Whether iframe.ts exists in the directory
        has_manifest: Whether package.json exists in the directory

    Example:
        >>> unit = PresenceUnit(name="YouTube", path=Path("websites/Y/YouTube"))
        >>> unit.entries
        {'presence': './presence.ts'}
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1, description="Presence name")
    path: Path = Field(..., description="Presence source directory")
    has_iframe: bool = Field(default=False, description="iframe.ts exists")
    has_manifest: bool = Field(default=False, description="package.json exists")

    @property
    def entries(self) -> dict[str, str]:
        """Entry-point mapping handed to the bundler."""
        entries = {PRIMARY_ENTRY: f"./{PRIMARY_ENTRY_FILE}"}
        if self.has_iframe:
            entries[SECONDARY_ENTRY] = f"./{SECONDARY_ENTRY_FILE}"
        return entries


class CompileOptions(BaseModel):
    """Options for a compile call.

    Attributes:
        output: Destination directory (default: the presence's own directory)
        transpile_only: Skip type-checking, only transform syntax
        emit: Write compiled output to disk; False checks only
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    output: Path | None = Field(default=None, description="Output directory")
    transpile_only: bool = Field(default=False, description="Skip type-checking")
    emit: bool = Field(default=True, description="Write compiled output")

    @property
    def verb(self) -> str:
        """Past-tense verb used in success messages."""
        return "transpiled" if self.transpile_only else "compiled"


class BuildDiagnostic(BaseModel):
    """A non-fatal issue reported by the bundler.

    Attributes:
        kind: Diagnostic kind tag (see DiagnosticKind)
        message: Human-readable message
        file: Originating source file
        line: 1-based line number
        column: 1-based column number
        code: TypeScript error number, when the loader reports one

    Example:
        >>> diag = BuildDiagnostic(
        ...     kind=DiagnosticKind.TYPESCRIPT,
        ...     message="Cannot find name 'foo'.",
        ...     file="/repo/websites/Y/YouTube/presence.ts",
        ...     line=3,
        ...     column=5,
        ...     code=2304,
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    kind: str = Field(..., min_length=1, description="Diagnostic kind tag")
    message: str = Field(default="", description="Diagnostic message")
    file: str | None = Field(default=None, description="Source file")
    line: int | None = Field(default=None, ge=0, description="Line number")
    column: int | None = Field(default=None, ge=0, description="Column number")
    code: int | None = Field(default=None, description="TypeScript error code")


class CompilationResult(BaseModel):
    """Structured result of one bundler invocation.

    Attributes:
        diagnostics: Diagnostics in emission order
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    diagnostics: list[BuildDiagnostic] = Field(
        default_factory=list, description="Diagnostics in emission order"
    )

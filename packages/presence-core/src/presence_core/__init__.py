"""presence-core: Compilation of presences into distributable bundles.

This package provides:
- PresenceCompiler: Orchestrates dependency install and bundling per presence
- CompilerSettings / load_settings: Configuration from environment and .env
- BuildDiagnostic: Diagnostics returned from a compile call
- Metadata: Schema of a presence's metadata.json
"""

from __future__ import annotations

__version__ = "0.1.0"

# Bundling
from presence_core.bundler import (
    Bundler,
    BundleInvoker,
    WebpackBundler,
    build_bundler_config,
)

# Diagnostics
from presence_core.classifier import filter_diagnostics

# Orchestrator
from presence_core.compiler import PresenceCompiler

# Configuration
from presence_core.config import CompilerSettings, is_ci, load_settings

# Error types
from presence_core.errors import (
    BundlerInvocationError,
    DependencyInstallError,
    MetadataError,
    PresenceError,
)

# Metadata schema
from presence_core.metadata import Metadata, load_metadata

# Models
from presence_core.models import (
    BuildDiagnostic,
    CompilationResult,
    CompileOptions,
    DiagnosticKind,
    PresenceUnit,
)
from presence_core.observability import configure_logging
from presence_core.provisioner import DependencyProvisioner
from presence_core.reporting import Reporter, format_diagnostic
from presence_core.resolver import PresenceResolver, get_folder_letter

__all__ = [
    "__version__",
    # Orchestrator
    "PresenceCompiler",
    "PresenceResolver",
    "DependencyProvisioner",
    "get_folder_letter",
    # Bundling
    "Bundler",
    "BundleInvoker",
    "WebpackBundler",
    "build_bundler_config",
    "filter_diagnostics",
    # Models
    "BuildDiagnostic",
    "CompilationResult",
    "CompileOptions",
    "DiagnosticKind",
    "PresenceUnit",
    "Metadata",
    "load_metadata",
    # Configuration
    "CompilerSettings",
    "configure_logging",
    "is_ci",
    "load_settings",
    # Reporting
    "Reporter",
    "format_diagnostic",
    # Errors
    "PresenceError",
    "DependencyInstallError",
    "BundlerInvocationError",
    "MetadataError",
]

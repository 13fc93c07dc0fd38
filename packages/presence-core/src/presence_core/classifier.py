"""Diagnostic classification.

The bundler wraps every loader failure in a ModuleBuildError envelope and
also reports the underlying diagnostic on its own. Only the underlying
diagnostics are kept.
"""

from __future__ import annotations

from collections.abc import Iterable

from presence_core.models import BuildDiagnostic, DiagnosticKind


def is_wrapper(diagnostic: BuildDiagnostic) -> bool:
    """Return True for module-build envelope diagnostics."""
    return diagnostic.kind == DiagnosticKind.MODULE_BUILD.value


def filter_diagnostics(diagnostics: Iterable[BuildDiagnostic]) -> list[BuildDiagnostic]:
    """Drop wrapper diagnostics, preserving the order of the rest.

    Args:
        diagnostics: Raw diagnostics in emission order.

    Returns:
        Diagnostics without module-build envelopes.

    Example:
        >>> filter_diagnostics([wrapper, real])
        [real]
    """
    return [d for d in diagnostics if not is_wrapper(d)]

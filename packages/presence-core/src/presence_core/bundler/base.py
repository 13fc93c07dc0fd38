"""Bundler capability and its awaitable adapter.

A bundling engine is anything with an invoke(config, entries, on_complete)
method that calls on_complete(error, result) exactly once, possibly from
another thread. BundleInvoker turns that into a coroutine.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

import structlog

from presence_core.classifier import is_wrapper
from presence_core.errors import BundlerInvocationError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from presence_core.models import CompilationResult, CompileOptions, PresenceUnit
    from presence_core.reporting import Reporter

    CompletionCallback = Callable[[BaseException | None, CompilationResult | None], None]

logger = structlog.get_logger(__name__)

BundlerConfig = dict[str, Any]


class Bundler(Protocol):
    """Callback-style bundling engine."""

    def invoke(
        self,
        config: BundlerConfig,
        entries: Mapping[str, str],
        on_complete: CompletionCallback,
    ) -> None:
        """Start a build and call on_complete(error, result) once when done."""
        ...


def build_bundler_config(
    context: Path,
    options: CompileOptions,
    output: Path | None,
    overrides: Mapping[str, Any] | None = None,
    *,
    pin_output: bool = False,
) -> BundlerConfig:
    """Build the engine configuration for one presence.

    Args:
        context: Presence directory; entries are resolved relative to it.
        options: Compile options.
        output: Output directory, used only when emitting.
        overrides: Caller overrides, shallow-merged over the defaults.
            They never replace the context.
        pin_output: Apply the output section after the overrides, so every
            unit of a batch keeps its own output directory.

    Returns:
        JSON-serializable configuration.
    """
    output_section = (
        {"iife": False, "path": str(output or context), "filename": "[name].js"}
        if options.emit
        else None
    )
    config: BundlerConfig = {
        "mode": "production",
        "devtool": "inline-source-map",
        "resolve": {"extensions": [".ts"]},
        "output": output_section,
        "module": {
            "rules": [
                {
                    "test": r"\.ts$",
                    "loader": "ts-loader",
                    "exclude": "node_modules",
                    "options": {"transpileOnly": options.transpile_only},
                }
            ]
        },
    }
    if overrides:
        config.update(overrides)
    config["context"] = str(context)
    if pin_output:
        config["output"] = output_section
    return config


class BundleInvoker:
    """Awaitable adapter over a Bundler.

    Each diagnostic except module-build wrappers is reported as soon as the
    result arrives; the returned result is not altered by reporting.
    """

    def __init__(self, bundler: Bundler, reporter: Reporter | None = None) -> None:
        self.bundler = bundler
        self.reporter = reporter
        self._log = logger.bind(component="bundle_invoker")

    async def run(
        self,
        unit: PresenceUnit,
        config: BundlerConfig,
    ) -> CompilationResult:
        """Bundle a presence and wait for the engine's single completion.

        Args:
            unit: Presence being bundled.
            config: Engine configuration from build_bundler_config().

        Returns:
            The engine's CompilationResult.

        Raises:
            BundlerInvocationError: If the engine reported an invocation error
                or settled without a result.
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future[CompilationResult | None] = loop.create_future()

        def settle(error: BaseException | None, result: CompilationResult | None) -> None:
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(result)

        def on_complete(error: BaseException | None, result: CompilationResult | None) -> None:
            loop.call_soon_threadsafe(settle, error, result)

        entries = unit.entries
        self._log.info("bundle_started", presence=unit.name, entries=sorted(entries))

        try:
            self.bundler.invoke(config, entries, on_complete)
            result = await future
        except BundlerInvocationError:
            raise
        except Exception as e:
            raise BundlerInvocationError(
                "Bundler failed to run",
                presence=unit.name,
                internal_details=f"{type(e).__name__}: {e}",
            ) from e

        if result is None:
            raise BundlerInvocationError("Bundler returned no result", presence=unit.name)

        self._log.info(
            "bundle_completed",
            presence=unit.name,
            diagnostics=len(result.diagnostics),
        )

        if self.reporter is not None:
            for diagnostic in result.diagnostics:
                if not is_wrapper(diagnostic):
                    self.reporter.diagnostic(diagnostic)

        return result

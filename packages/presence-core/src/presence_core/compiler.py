"""Presence compilation orchestrator.

Drives the build of one presence or an ordered batch of presences:

    resolve -> write tsconfig.json -> install dependencies -> bundle
            -> remove tsconfig.json -> filter diagnostics -> report

Units are built strictly one after another. Diagnostics are returned as data;
installer and bundler invocation failures are raised.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from presence_core.bundler import BundleInvoker, WebpackBundler, build_bundler_config
from presence_core.classifier import filter_diagnostics
from presence_core.config import CompilerSettings
from presence_core.ephemeral import ephemeral_config
from presence_core.errors import PresenceError
from presence_core.models import BuildDiagnostic, CompileOptions, PresenceUnit
from presence_core.observability import span
from presence_core.provisioner import DependencyProvisioner
from presence_core.reporting import Reporter
from presence_core.resolver import PresenceResolver

if TYPE_CHECKING:
    from presence_core.bundler import Bundler

logger = structlog.get_logger(__name__)


class PresenceCompiler:
    """Compiles presences into bundles.

    Attributes:
        settings: Compiler settings
        resolver: Maps presence names to directories
        provisioner: Installs presence dependencies
        invoker: Awaitable bundler adapter
        reporter: Reporting sink
        bundler_overrides: Engine configuration merged over the defaults

    Example:
        >>> compiler = PresenceCompiler(load_settings())
        >>> diagnostics = asyncio.run(compiler.compile(["YouTube", "Netflix"]))
        >>> if not diagnostics:
        ...     print("All presences built")
    """

    def __init__(
        self,
        settings: CompilerSettings | None = None,
        *,
        cwd: Path | str | None = None,
        bundler_overrides: Mapping[str, Any] | None = None,
        bundler: Bundler | None = None,
        provisioner: DependencyProvisioner | None = None,
        reporter: Reporter | None = None,
    ) -> None:
        """Initialize the compiler.

        Args:
            settings: Compiler settings (defaults are read from the environment)
            cwd: Repository root override; wins over settings.root
            bundler_overrides: Engine configuration overrides
            bundler: Bundling engine (defaults to WebpackBundler)
            provisioner: Dependency provisioner (defaults to the configured installer)
            reporter: Reporting sink (defaults to a console Reporter)
        """
        self.settings = settings or CompilerSettings()
        root = Path(cwd) if cwd is not None else self.settings.root
        self.resolver = PresenceResolver(root, self.settings.websites_dir)
        self.reporter = reporter or Reporter()
        self.provisioner = provisioner or DependencyProvisioner(
            self.settings.install_command, reporter=self.reporter
        )
        self.invoker = BundleInvoker(
            bundler or WebpackBundler(self.settings.node_executable),
            reporter=self.reporter,
        )
        self.bundler_overrides: dict[str, Any] = dict(bundler_overrides or {})
        self._log = logger.bind(component="presence_compiler")

    @property
    def cwd(self) -> Path:
        """Repository root presences are resolved against."""
        return self.resolver.root

    def get_presence_folder(self, presence: str) -> Path:
        """Return the source directory of a presence."""
        return self.resolver.folder(presence)

    async def compile(
        self,
        target: str | Sequence[str],
        options: CompileOptions | None = None,
    ) -> list[BuildDiagnostic]:
        """Compile one presence or an ordered batch of presences.

        Args:
            target: Presence name, or a list of names built in order.
            options: Compile options.

        Returns:
            Diagnostics left after filtering; empty means success.

        Raises:
            DependencyInstallError: If installing dependencies fails.
            BundlerInvocationError: If the bundler itself cannot run.
            PresenceError: If a presence directory does not exist.
        """
        options = options or CompileOptions()
        if isinstance(target, str):
            return await self._compile_single(target, options)
        return await self._compile_batch(list(target), options)

    async def _compile_single(
        self, presence: str, options: CompileOptions
    ) -> list[BuildDiagnostic]:
        unit = self.resolver.resolve(presence)
        output = options.output or unit.path

        raw = await self._build_unit(unit, options, output, announce=True)
        diagnostics = filter_diagnostics(raw)

        if not diagnostics:
            self.reporter.success(f"Successfully {options.verb} {presence}")

        self._log.info(
            "presence_compiled",
            presence=presence,
            raw_diagnostics=len(raw),
            diagnostics=len(diagnostics),
        )
        return diagnostics

    async def _compile_batch(
        self, presences: list[str], options: CompileOptions
    ) -> list[BuildDiagnostic]:
        self.reporter.info(f"Compiling {len(presences)} Presence(s)")
        self._log.info("batch_started", count=len(presences))

        raw: list[BuildDiagnostic] = []
        for presence in presences:
            unit = self.resolver.resolve(presence)
            output = options.output / unit.name if options.output else unit.path
            raw.extend(await self._build_unit(unit, options, output, pin_output=True))

        diagnostics = filter_diagnostics(raw)

        if not diagnostics:
            self.reporter.success(f"Successfully {options.verb} {len(presences)} Presence(s)")

        self._log.info(
            "batch_completed",
            count=len(presences),
            raw_diagnostics=len(raw),
            diagnostics=len(diagnostics),
        )
        return diagnostics

    async def _build_unit(
        self,
        unit: PresenceUnit,
        options: CompileOptions,
        output: Path,
        *,
        announce: bool = False,
        pin_output: bool = False,
    ) -> list[BuildDiagnostic]:
        """Provision and bundle one unit inside its ephemeral config scope.

        Returns:
            Unfiltered diagnostics in emission order.
        """
        if not unit.path.is_dir():
            raise PresenceError(
                f"Presence '{unit.name}' not found",
                internal_details=f"missing directory {unit.path}",
            )

        config = build_bundler_config(
            unit.path, options, output, self.bundler_overrides, pin_output=pin_output
        )

        with span(
            "compile_presence",
            attributes={"presence": unit.name, "transpile_only": options.transpile_only},
        ), ephemeral_config(unit.path):
            self.provisioner.provision(unit)
            if announce:
                self.reporter.info(f"Compiling {unit.name}...")
            result = await self.invoker.run(unit, config)

        return list(result.diagnostics)

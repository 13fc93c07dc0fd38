"""webpack bundling engine.

Runs webpack with ts-loader through a small Node.js driver shipped with this
package. The driver reads {"config", "entries"} as JSON on stdin and writes
{"diagnostics": [...]} as JSON on stdout.

Driver exit codes:
    0: build finished without errors
    1: build finished with diagnostics
    anything else: webpack could not run
"""

from __future__ import annotations

import json
import subprocess
import threading
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from presence_core.errors import BundlerInvocationError
from presence_core.models import CompilationResult

if TYPE_CHECKING:
    from collections.abc import Mapping

    from presence_core.bundler.base import BundlerConfig, CompletionCallback

logger = structlog.get_logger(__name__)

DRIVER_NAME = "driver.cjs"
BUILD_EXIT_CODES = (0, 1)


def driver_path() -> Path:
    """Return the filesystem path of the bundled Node.js driver."""
    return Path(str(resources.files("presence_core.bundler").joinpath(DRIVER_NAME)))


class WebpackBundler:
    """Bundler running webpack in a Node.js subprocess.

    Each invocation runs on a worker thread and reports back through the
    completion callback exactly once.

    Attributes:
        node_executable: Node.js executable
        driver: Path to the driver script
    """

    def __init__(self, node_executable: str = "node", driver: Path | None = None) -> None:
        self.node_executable = node_executable
        self.driver = driver or driver_path()
        self._log = logger.bind(component="webpack_bundler")

    def invoke(
        self,
        config: BundlerConfig,
        entries: Mapping[str, str],
        on_complete: CompletionCallback,
    ) -> None:
        """Start a build on a worker thread."""
        payload = json.dumps({"config": config, "entries": dict(entries)})
        worker = threading.Thread(
            target=self._run,
            args=(payload, config.get("context"), on_complete),
            name="webpack-bundler",
            daemon=True,
        )
        worker.start()

    def _run(
        self,
        payload: str,
        context: str | None,
        on_complete: CompletionCallback,
    ) -> None:
        try:
            result = self.build(payload, context)
        except Exception as e:
            on_complete(e, None)
        else:
            on_complete(None, result)

    def build(self, payload: str, context: str | None = None) -> CompilationResult:
        """Run the driver synchronously.

        Args:
            payload: JSON request for the driver.
            context: Working directory for the driver.

        Returns:
            Parsed CompilationResult.

        Raises:
            BundlerInvocationError: If node is missing, webpack could not run,
                or the driver's reply cannot be parsed.
        """
        command = [self.node_executable, str(self.driver)]
        self._log.debug("driver_started", command=command, context=context)

        try:
            proc = subprocess.run(
                command,
                input=payload,
                cwd=context,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as e:
            raise BundlerInvocationError(
                "Could not start the bundler", internal_details=str(e)
            ) from e

        if proc.returncode not in BUILD_EXIT_CODES:
            raise BundlerInvocationError(
                "Bundler exited unexpectedly",
                internal_details=f"exit code {proc.returncode}: {proc.stderr.strip()}",
            )

        try:
            return CompilationResult.model_validate(json.loads(proc.stdout))
        except (json.JSONDecodeError, ValidationError) as e:
            raise BundlerInvocationError(
                "Bundler returned an unreadable result",
                internal_details=f"{e}; stdout={proc.stdout[:500]!r}",
            ) from e

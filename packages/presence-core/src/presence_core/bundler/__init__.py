"""Bundling engines and the awaitable invoker.

Exports:
    Bundler: Callback-style engine protocol
    BundleInvoker: Awaitable adapter over a Bundler
    WebpackBundler: webpack + ts-loader engine run through Node.js
    build_bundler_config: Per-presence engine configuration
"""

from __future__ import annotations

from presence_core.bundler.base import (
    Bundler,
    BundlerConfig,
    BundleInvoker,
    build_bundler_config,
)
from presence_core.bundler.webpack import WebpackBundler, driver_path

__all__ = [
    "Bundler",
    "BundlerConfig",
    "BundleInvoker",
    "WebpackBundler",
    "build_bundler_config",
    "driver_path",
]

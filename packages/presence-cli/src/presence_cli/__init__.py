"""presence-cli: Command line interface for presence-build."""

from __future__ import annotations

__version__ = "0.1.0"

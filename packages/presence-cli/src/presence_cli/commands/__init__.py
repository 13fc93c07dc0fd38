"""CLI commands for presence-cli."""

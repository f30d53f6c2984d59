"""Shared type aliases used across commodity_ledger."""

from pathlib import Path

# Path types
PathLike = str | Path

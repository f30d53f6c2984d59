"""
File I/O for the inventory file: atomic replace and timestamped backups.

All functions operate on explicit paths — no implicit directory lookups.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from datetime import datetime
from pathlib import Path

from loguru import logger


def atomic_write(filepath: str, content: str, encoding: str = "utf-8") -> None:
    """Replace ``filepath`` with ``content`` in one step.

    The content goes to a temporary file in the same directory, which is then
    renamed over the target. A failed write leaves the previous file intact.
    """
    directory = os.path.dirname(filepath) or "."
    os.makedirs(directory, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(prefix=f".{os.path.basename(filepath)}.", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, filepath)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        raise


def backup_file(file_path: str, backup_dir: str | None = None) -> str | None:
    """Copy ``file_path`` to ``<name>.backup.<YYYYmmdd_HHMMSS>``.

    Returns the backup path, or None when there was nothing to copy or the
    copy failed.
    """
    src = Path(file_path)
    if not src.is_file():
        return None

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    target_dir = Path(backup_dir) if backup_dir else src.parent
    target_dir.mkdir(parents=True, exist_ok=True)
    backup_path = target_dir / f"{src.name}.backup.{timestamp}"

    try:
        shutil.copy2(src, backup_path)
    except OSError as e:
        logger.warning(f"Could not back up {src}: {e}")
        return None
    return str(backup_path)

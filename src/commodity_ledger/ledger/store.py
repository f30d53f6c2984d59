"""JSON persistence for the ledger.

The state file is a single JSON object mapping asset name to
``{"inventory": <float>, "total_cost": <float>}``. It is read once at
startup and written once at shutdown.
"""

from __future__ import annotations

import json
import os

from loguru import logger

from commodity_ledger.core.exceptions import PersistenceReadError, PersistenceWriteError
from commodity_ledger.core.types import PathLike
from commodity_ledger.core.utils.file_io import atomic_write, backup_file

from .models import Ledger


class LedgerStore:
    """Loads and saves a Ledger at a fixed path.

    Args:
        path: Location of the JSON state file.
        backup_corrupt: Copy a file that failed to load aside before the
            next save overwrites it.
    """

    def __init__(self, path: PathLike, *, backup_corrupt: bool = True):
        self.path = os.path.expanduser(str(path))
        self.backup_corrupt = backup_corrupt
        self.discarded_corrupt = False

    def read(self) -> Ledger:
        """Read the state file strictly.

        Raises:
            PersistenceReadError: The file is absent, unreadable, not JSON,
                or not shaped like a ledger document.
        """
        try:
            with open(self.path, encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError as e:
            raise PersistenceReadError(f"{self.path} not found") from e
        except OSError as e:
            raise PersistenceReadError(f"Could not read {self.path}: {e}") from e
        except UnicodeDecodeError as e:
            raise PersistenceReadError(f"{self.path} is not UTF-8 text: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceReadError(f"Could not parse {self.path}: {e}") from e

        try:
            ledger = Ledger.from_dict(data)
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise PersistenceReadError(f"Unexpected ledger document in {self.path}: {e}") from e

        skipped = len(data) - len(ledger)
        if skipped:
            logger.debug(f"Skipped {skipped} entries with no units in {self.path}")
        return ledger

    def load(self) -> Ledger:
        """Read the state file, falling back to an empty ledger.

        A missing file is the normal first-run case. Anything else that
        prevents reading is logged and the file's contents are discarded.
        """
        if not os.path.exists(self.path):
            logger.info(f"{self.path} not found. Starting with empty inventory.")
            return Ledger()

        try:
            ledger = self.read()
        except PersistenceReadError as e:
            logger.warning(f"{e}. Starting with empty inventory.")
            self.discarded_corrupt = True
            return Ledger()

        logger.info(f"Inventory loaded from {self.path} ({len(ledger)} assets)")
        return ledger

    def save(self, ledger: Ledger) -> str | None:
        """Overwrite the state file with ``ledger``.

        Returns:
            Path of the backup taken of a previously discarded file, if any.

        Raises:
            PersistenceWriteError: The file could not be written.
        """
        backup_path = None
        if self.discarded_corrupt and self.backup_corrupt:
            backup_path = backup_file(self.path)
            if backup_path:
                logger.warning(f"Backed up unreadable {self.path} to {backup_path}")

        try:
            content = json.dumps(ledger.to_dict(), indent=2, sort_keys=True, allow_nan=False)
        except ValueError as e:
            raise PersistenceWriteError(f"Could not serialize inventory for {self.path}: {e}") from e

        try:
            atomic_write(self.path, content + "\n")
        except OSError as e:
            raise PersistenceWriteError(f"Could not write to {self.path}: {e}") from e

        self.discarded_corrupt = False
        logger.info(f"Inventory saved to {self.path}")
        return backup_path

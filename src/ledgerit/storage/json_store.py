"""JSON file snapshot store."""

import logging
import os
import tempfile
from pathlib import Path

from ledgerit.domain.ledger import Ledger
from ledgerit.storage.base import SnapshotStore, StorageError
from ledgerit.storage.snapshot import deserialize, serialize

logger = logging.getLogger(__name__)


class JsonSnapshotStore(SnapshotStore):
    """Keeps the ledger as a pretty-printed JSON text file."""

    def __init__(self, path: str | Path, create_missing: bool = True):
        """Initialize JSON snapshot store.

        Args:
            path: Path to the snapshot file
            create_missing: If True, loading a missing file yields an empty
                ledger instead of failing
        """
        self.path = Path(path)
        self.create_missing = create_missing

    def describe(self) -> str:
        return str(self.path)

    def load(self) -> Ledger:
        """Load the ledger from the JSON file."""
        if not self.path.exists():
            if self.create_missing:
                logger.info("No ledger at %s, starting empty", self.path)
                return Ledger()
            raise StorageError(f"Ledger file not found: {self.path}")

        try:
            blob = self.path.read_bytes()
        except OSError as e:
            raise StorageError(f"Could not read ledger file {self.path}: {e}") from e

        ledger = deserialize(blob)
        logger.info("Loaded ledger from %s", self.path)
        return ledger

    def save(self, ledger: Ledger) -> None:
        """Write the ledger, replacing the file only once fully written."""
        blob = serialize(ledger)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(blob)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StorageError(f"Could not write ledger file {self.path}: {e}") from e
        logger.info("Saved ledger to %s", self.path)

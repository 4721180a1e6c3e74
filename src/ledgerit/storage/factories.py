"""Store factory functions for creating snapshot stores."""

import os
from pathlib import Path
from typing import Optional

from ledgerit.storage.base import SnapshotStore
from ledgerit.storage.json_store import JsonSnapshotStore
from ledgerit.storage.sqlalchemy_store import SQLAlchemySnapshotStore

LEDGER_PATH_ENV = "LEDGERIT_LEDGER_PATH"
SQLITE_SUFFIXES = {".db", ".sqlite", ".sqlite3"}


def default_ledger_path() -> Path:
    """Return ~/.ledgerit/ledger.json, creating the directory if needed."""
    ledger_dir = Path.home() / ".ledgerit"
    ledger_dir.mkdir(exist_ok=True)
    return ledger_dir / "ledger.json"


def create_store(ledger_path: Optional[str] = None) -> SnapshotStore:
    """Create the snapshot store for a ledger location.

    Args:
        ledger_path: Path or SQLAlchemy URL of the ledger. If None, checks the
            LEDGERIT_LEDGER_PATH environment variable, then defaults to
            ~/.ledgerit/ledger.json

    Returns:
        SQLAlchemySnapshotStore for database URLs and .db/.sqlite/.sqlite3
        files, JsonSnapshotStore for anything else
    """
    if ledger_path is None:
        # Check environment variable
        ledger_path = os.environ.get(LEDGER_PATH_ENV)

    if ledger_path is None:
        return JsonSnapshotStore(default_ledger_path())

    if "://" in ledger_path:
        return SQLAlchemySnapshotStore(ledger_path)

    path = Path(ledger_path).expanduser()
    if path.suffix.lower() in SQLITE_SUFFIXES:
        path.parent.mkdir(parents=True, exist_ok=True)
        return SQLAlchemySnapshotStore(f"sqlite:///{path}")
    return JsonSnapshotStore(path)

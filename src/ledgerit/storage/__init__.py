"""Persistence layer for ledgerit application."""

from ledgerit.storage.base import SnapshotStore, StorageError
from ledgerit.storage.factories import create_store
from ledgerit.storage.snapshot import deserialize, serialize

__all__ = ["SnapshotStore", "StorageError", "create_store", "serialize", "deserialize"]

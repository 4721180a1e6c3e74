"""Abstract snapshot store interface."""

from abc import ABC, abstractmethod

from ledgerit.domain.ledger import Ledger


class StorageError(Exception):
    """Loading or saving a ledger snapshot failed."""


class SnapshotStore(ABC):
    """Persists a whole ledger at once.

    Stores never write incrementally: ``save`` replaces the previous snapshot
    entirely and ``load`` reads all of it, rebuilding the account indices.
    """

    @abstractmethod
    def load(self) -> Ledger:
        """Load the stored ledger.

        Raises:
            StorageError: If the snapshot is missing or malformed
        """
        pass

    @abstractmethod
    def save(self, ledger: Ledger) -> None:
        """Replace the stored snapshot with ``ledger``.

        Raises:
            StorageError: If the snapshot could not be written
        """
        pass

    @abstractmethod
    def describe(self) -> str:
        """Human-readable location of the snapshot."""
        pass

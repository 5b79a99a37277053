"""Abstract client interface (port) for a remote user resource collection."""

from abc import ABC, abstractmethod

from user_sync.domain.entities import DraftRecord, RecordId, UserRecord


class ResourceClient(ABC):
    """Port for a remote user collection — implemented in the infrastructure layer.

    Every call performs one round trip and either returns the server's
    result or raises a UserSyncError. Implementations never touch local state.
    """

    @abstractmethod
    async def list_records(self) -> list[UserRecord]:
        """Fetch the whole collection in server order."""
        ...

    @abstractmethod
    async def create(self, payload: DraftRecord) -> UserRecord:
        """Create a record and return it with its server-assigned id."""
        ...

    @abstractmethod
    async def update(self, record_id: RecordId, payload: DraftRecord) -> UserRecord:
        """Replace a record and return the server's version of it."""
        ...

    @abstractmethod
    async def delete(self, record_id: RecordId) -> None:
        """Delete a record."""
        ...

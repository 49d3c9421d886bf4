"""Abstract base class for record store readers."""

from abc import ABC, abstractmethod

from ..models.record import RawRecord
from ..models.schema import Collection, PropertyDescriptor
from ..query.builder import QueryFilter


class RecordStoreReader(ABC):
    """Abstract base class for record store readers."""

    @abstractmethod
    def fetch_schema(self, collection_id: str) -> list[PropertyDescriptor]:
        """
        Retrieve the schema of a collection.

        Args:
            collection_id: Collection identifier

        Returns:
            Property descriptors in stable declaration order

        Raises:
            RemoteError: On auth failure, not-found or transport failure
        """

    @abstractmethod
    def query_records(
        self, collection_id: str, query_filter: QueryFilter
    ) -> list[RawRecord]:
        """
        Query records matching a date range filter.

        Args:
            collection_id: Collection identifier
            query_filter: Inclusive date range filter

        Returns:
            Raw records from a single bounded query

        Raises:
            RemoteError: On auth or transport failure
        """

    @abstractmethod
    def list_collections(self) -> list[Collection]:
        """
        List collections visible to the credential.

        Raises:
            RemoteError: On auth or transport failure
        """

    @abstractmethod
    def check_credential(self) -> bool:
        """Return True if the credential can reach the record store."""

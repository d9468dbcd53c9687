"""Transaction boundary interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class TransactionManager(ABC):
    """Opens atomic units of work against the persistent store.

    Everything written inside ``atomic()`` commits together or not at all.
    Implementations translate store-specific failures into ``ConflictError``
    (serialization failure, duplicate key) and ``StoreUnavailableError``.
    """

    @abstractmethod
    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic unit of work.

        Usage:
            async with transactions.atomic():
                ...
        """
        pass

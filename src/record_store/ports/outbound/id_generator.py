"""Id Generator port for assigning identifiers to new records."""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from record_store.domain.value_objects import RecordKey


class IdGenerator(Protocol):
    """Protocol for record identifier generation.

    Every call must return an identifier never returned before for the
    same store, including across close/reopen.
    """

    @abstractmethod
    def next_id(self) -> RecordKey:
        """Return a fresh, unique identifier."""
        ...

    @abstractmethod
    def observe(self, key: RecordKey) -> None:
        """Note an identifier supplied by a caller.

        Generators must never later return an identifier they have observed.
        """
        ...

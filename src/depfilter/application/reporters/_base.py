"""Base reporter class for collection snapshots."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from depfilter.domain.model.snapshot import CollectionSnapshot


class BaseReporter(ABC):
    """Base class for reporters writing a CollectionSnapshot to a stream.

    Covers reporters whose report() writes and returns None. ConsoleReporter
    returns the rendered str instead and does not derive from this class.

    Example:
        class CountReporter(BaseReporter):
            def report(self, snapshot: CollectionSnapshot) -> None:
                print(f"Filters: {snapshot.filter_count}")
    """

    @abstractmethod
    def report(self, snapshot: CollectionSnapshot) -> None:
        """Report snapshot.

        Implementation decides output format and destination.
        """

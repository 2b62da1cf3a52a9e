from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from .entities import StylistProfile


class CatalogLookup(ABC):
    @abstractmethod
    def find_stylist(self, stylist_id: int) -> StylistProfile | None:
        """Get a stylist profile with its service catalog, or None."""
        raise NotImplementedError


class BookingConflictQuery(ABC):
    @abstractmethod
    def exists_active_booking(self, stylist_id: int, day: date, time: str) -> bool:
        """True iff a pending or confirmed booking holds exactly this slot."""
        raise NotImplementedError

from salonbook.booking.entities import StylistProfile
from salonbook.booking.errors import InfrastructureError
from salonbook.booking.ports import BookingConflictQuery, CatalogLookup


class MemoryCatalog(CatalogLookup):
    def __init__(self, *profiles: StylistProfile) -> None:
        self._profiles = {p.id: p for p in profiles}
        self.lookups = 0

    def find_stylist(self, stylist_id):
        self.lookups += 1
        return self._profiles.get(stylist_id)


class MemoryBookings(BookingConflictQuery):
    """Slots as (stylist_id, date, time, status) tuples."""

    def __init__(self, *slots) -> None:
        self.slots = list(slots)
        self.queries = 0

    def exists_active_booking(self, stylist_id, day, time):
        self.queries += 1
        return any(
            s == stylist_id and d == day and t == time and status in ("pending", "confirmed")
            for s, d, t, status in self.slots
        )


class BrokenBookings(BookingConflictQuery):
    def exists_active_booking(self, stylist_id, day, time):
        raise InfrastructureError("connection refused")

from __future__ import annotations

import logging
from datetime import date

from ..models import BookingStatus, Modality
from .entities import NewBooking
from .errors import ConflictError, NotFoundError, ValidationError
from .ports import BookingConflictQuery, CatalogLookup

# completed and cancelled are terminal
TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


def _blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def parse_modality(value: Modality | str) -> Modality:
    try:
        return Modality(value)
    except ValueError:
        raise ValidationError("invalid_modality", f"Unknown modality: {value}")


def advance_status(current: BookingStatus | str, target: BookingStatus | str) -> BookingStatus:
    current, target = BookingStatus(current), BookingStatus(target)
    if target not in TRANSITIONS[current]:
        raise ValidationError(
            "invalid_transition",
            f"Cannot move a {current.value} booking to {target.value}",
        )
    return target


class BookingEngine:
    def __init__(
        self,
        catalog: CatalogLookup,
        bookings: BookingConflictQuery,
        surcharge: int = 500,
    ) -> None:
        self._catalog = catalog
        self._bookings = bookings
        self._surcharge = surcharge
        self._logger = logging.getLogger(__name__)

    def request_booking(
        self,
        requester_id: int,
        stylist_id: int | None,
        service_name: str | None,
        day: date | None,
        time: str | None,
        modality: Modality | str | None,
        address: str | None = None,
    ) -> NewBooking:
        """
        Decide whether a booking request can be accepted.

        Checks run cheapest first: presence, stylist lookup, catalog match,
        address rule, then the slot query. The first failure is raised as a
        ``BookingError``; store failures propagate as they are. Nothing is
        written here, the caller persists the returned booking.
        """
        try:
            return self._decide(requester_id, stylist_id, service_name, day, time, modality, address)
        except (ValidationError, NotFoundError, ConflictError) as e:
            self._logger.info(
                "Booking rejected",
                extra={"stylist_id": stylist_id, "user_id": requester_id, "reason": e.reason},
            )
            raise

    def _decide(self, requester_id, stylist_id, service_name, day, time, modality, address) -> NewBooking:
        if any(_blank(v) for v in (stylist_id, service_name, day, time, modality)):
            raise ValidationError("missing_fields", "All fields are required")
        modality = parse_modality(modality)

        stylist = self._catalog.find_stylist(stylist_id)
        if stylist is None:
            raise NotFoundError("stylist_not_found", "Stylist not found")

        offering = stylist.find_service(service_name)
        if offering is None:
            raise ValidationError("service_not_offered", "Service not offered by this stylist")

        if modality is Modality.AT_HOME:
            if _blank(address):
                raise ValidationError("address_required", "Address is required for at-home bookings")
            address = address.strip()
            total = offering.price + self._surcharge
        else:
            address = None
            total = offering.price

        if self._bookings.exists_active_booking(stylist.id, day, time):
            raise ConflictError("slot_taken", "Time slot is already booked")

        self._logger.info(
            "Booking accepted",
            extra={"stylist_id": stylist.id, "user_id": requester_id},
        )
        return NewBooking(
            requester_id=requester_id,
            stylist_id=stylist.id,
            service=offering.name,
            date=day,
            time=time,
            modality=modality,
            address=address,
            total=total,
        )

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .. import models
from .entities import NewBooking, ServiceOffering, StylistProfile
from .errors import ConflictError, InfrastructureError
from .ports import BookingConflictQuery, CatalogLookup

logger = logging.getLogger(__name__)

SLOT_INDEX = "uq_bookings_active_slot"
# SQLite names the columns instead of the index
SQLITE_SLOT_MESSAGE = "UNIQUE constraint failed: bookings.stylist_id, bookings.date, bookings.time"


def _is_slot_violation(error: IntegrityError) -> bool:
    orig = getattr(error, "orig", None)
    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None) if diag is not None else None
    if constraint_name:
        return constraint_name == SLOT_INDEX
    text = str(orig)
    return SLOT_INDEX in text or SQLITE_SLOT_MESSAGE in text


class SqlCatalogStore(CatalogLookup):
    def __init__(self, db: Session) -> None:
        self._db = db

    def find_stylist(self, stylist_id: int) -> StylistProfile | None:
        try:
            row = self._db.get(models.StylistProfile, stylist_id)
            if row is None:
                return None
            return StylistProfile(
                id=row.id,
                specialty=row.specialty,
                zone=row.zone,
                services=tuple(ServiceOffering(name=s.name, price=s.price) for s in row.services),
            )
        except SQLAlchemyError as e:
            logger.exception("Catalog lookup failed", extra={"stylist_id": stylist_id})
            raise InfrastructureError("catalog store unavailable") from e


class SqlBookingStore(BookingConflictQuery):
    def __init__(self, db: Session) -> None:
        self._db = db

    def exists_active_booking(self, stylist_id: int, day: date, time: str) -> bool:
        q = select(models.Booking.id).where(
            models.Booking.stylist_id == stylist_id,
            models.Booking.date == day,
            models.Booking.time == time,
            models.Booking.status.in_(models.ACTIVE_STATUSES),
        )
        try:
            return self._db.execute(select(q.exists())).scalar()
        except SQLAlchemyError as e:
            logger.exception("Conflict query failed", extra={"stylist_id": stylist_id})
            raise InfrastructureError("booking store unavailable") from e

    def add(self, new_booking: NewBooking) -> models.Booking:
        """Insert and commit; a concurrent writer for the same slot gets ConflictError."""
        booking = models.Booking(
            customer_id=new_booking.requester_id,
            stylist_id=new_booking.stylist_id,
            service=new_booking.service,
            date=new_booking.date,
            time=new_booking.time,
            modality=new_booking.modality.value,
            address=new_booking.address,
            total=new_booking.total,
            status=new_booking.status.value,
        )
        self._db.add(booking)
        try:
            self._db.commit()
        except IntegrityError as e:
            self._db.rollback()
            if not _is_slot_violation(e):
                logger.exception("Booking insert violated a constraint", extra={"stylist_id": new_booking.stylist_id})
                raise InfrastructureError("booking store rejected the insert") from e
            logger.info(
                "Slot taken by a concurrent booking",
                extra={"stylist_id": new_booking.stylist_id, "reason": "slot_taken"},
            )
            raise ConflictError("slot_taken", "Time slot is already booked") from e
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.exception("Booking insert failed", extra={"stylist_id": new_booking.stylist_id})
            raise InfrastructureError("booking store unavailable") from e
        self._db.refresh(booking)
        logger.info("Booking created", extra={"booking_id": booking.id, "stylist_id": booking.stylist_id})
        return booking

    def set_status(self, booking: models.Booking, status: models.BookingStatus) -> models.Booking:
        booking.status = status.value
        try:
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.exception("Status update failed", extra={"booking_id": booking.id})
            raise InfrastructureError("booking store unavailable") from e
        self._db.refresh(booking)
        logger.info("Booking %s", status.value, extra={"booking_id": booking.id})
        return booking

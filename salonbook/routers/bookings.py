# salonbook/routers/bookings.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from ..database import get_db
from .. import schemas, models
from ..deps import get_current_user, get_booking_engine, get_booking_store, RequireStylist
from ..booking.engine import BookingEngine, advance_status
from ..booking.errors import NotFoundError
from ..booking.sql_store import SqlBookingStore

router = APIRouter(prefix="/bookings", tags=["bookings"])


def get_booking(db: Session, booking_id: int) -> models.Booking:
    booking = db.get(models.Booking, booking_id)
    if not booking:
        raise NotFoundError("booking_not_found", "Booking not found")
    return booking


def owns_as_stylist(user: models.User, booking: models.Booking) -> bool:
    profile = user.stylist_profile
    return profile is not None and profile.id == booking.stylist_id


@router.post("/", response_model=schemas.BookingOut, status_code=201)
def create_booking(
    payload: schemas.BookingCreate,
    user: models.User = Depends(get_current_user),
    engine: BookingEngine = Depends(get_booking_engine),
    store: SqlBookingStore = Depends(get_booking_store),
):
    new_booking = engine.request_booking(
        requester_id=user.id,
        stylist_id=payload.stylist_id,
        service_name=payload.service,
        day=payload.date,
        time=payload.time,
        modality=payload.modality,
        address=payload.address,
    )
    # The partial unique index rejects a second writer for the same slot
    return store.add(new_booking)


@router.get("/me", response_model=List[schemas.BookingDetailOut])
def my_bookings(user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    q = db.query(models.Booking).filter(models.Booking.customer_id == user.id)
    return q.order_by(models.Booking.date.desc(), models.Booking.time.desc()).all()


@router.get("/stylist", response_model=List[schemas.BookingOut])
def stylist_agenda(user: models.User = Depends(RequireStylist), db: Session = Depends(get_db)):
    profile = user.stylist_profile
    if not profile:
        raise HTTPException(status_code=404, detail="Stylist profile not found")
    q = db.query(models.Booking).filter(models.Booking.stylist_id == profile.id)
    return q.order_by(models.Booking.date.asc(), models.Booking.time.asc(), models.Booking.id.asc()).all()


def _transition(
    booking_id: int,
    target: models.BookingStatus,
    user: models.User,
    db: Session,
    store: SqlBookingStore,
    client_allowed: bool = False,
) -> models.Booking:
    booking = get_booking(db, booking_id)
    allowed = owns_as_stylist(user, booking) or (client_allowed and booking.customer_id == user.id)
    if not allowed:
        raise HTTPException(status_code=403, detail="Not authorized")
    return store.set_status(booking, advance_status(booking.status, target))


@router.put("/{booking_id}/confirm", response_model=schemas.BookingOut)
def confirm_booking(
    booking_id: int,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
    store: SqlBookingStore = Depends(get_booking_store),
):
    return _transition(booking_id, models.BookingStatus.CONFIRMED, user, db, store)


@router.put("/{booking_id}/complete", response_model=schemas.BookingOut)
def complete_booking(
    booking_id: int,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
    store: SqlBookingStore = Depends(get_booking_store),
):
    return _transition(booking_id, models.BookingStatus.COMPLETED, user, db, store)


@router.put("/{booking_id}/cancel", response_model=schemas.BookingOut)
def cancel_booking(
    booking_id: int,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
    store: SqlBookingStore = Depends(get_booking_store),
):
    return _transition(booking_id, models.BookingStatus.CANCELLED, user, db, store, client_allowed=True)

"""
Booking engine decisions against in-memory catalog and booking fakes.
"""

from datetime import date

import pytest

from fakes import BrokenBookings, MemoryBookings, MemoryCatalog
from salonbook.booking.engine import BookingEngine
from salonbook.booking.entities import ServiceOffering, StylistProfile
from salonbook.booking.errors import ConflictError, InfrastructureError, NotFoundError, ValidationError
from salonbook.models import BookingStatus, Modality

X = StylistProfile(id=7, specialty="Cortes", zone="Centro", services=(ServiceOffering("Haircut", 1000), ServiceOffering("Color", 2500)))
JUNE_1 = date(2024, 6, 1)


def make_engine(*slots):
    return BookingEngine(catalog=MemoryCatalog(X), bookings=MemoryBookings(*slots), surcharge=500)


def request(engine, **overrides):
    fields = dict(
        requester_id=1,
        stylist_id=X.id,
        service_name="Haircut",
        day=JUNE_1,
        time="10:00",
        modality="in-salon",
        address=None,
    )
    fields.update(overrides)
    return engine.request_booking(**fields)


def test_in_salon_booking_is_pending_at_catalog_price():
    booking = request(make_engine())
    assert booking.total == 1000
    assert booking.status is BookingStatus.PENDING
    assert booking.modality is Modality.IN_SALON
    assert booking.stylist_id == X.id
    assert booking.requester_id == 1


def test_in_salon_ignores_supplied_address():
    booking = request(make_engine(), address="Main St 123")
    assert booking.total == 1000
    assert booking.address is None


def test_at_home_adds_surcharge():
    booking = request(make_engine(), modality="at-home", address="Main St 123")
    assert booking.total == 1500
    assert booking.address == "Main St 123"


def test_surcharge_is_configurable():
    engine = BookingEngine(catalog=MemoryCatalog(X), bookings=MemoryBookings(), surcharge=750)
    assert request(engine, service_name="Color", modality="at-home", address="Calle 9").total == 3250


@pytest.mark.parametrize("address", [None, "", "   "])
def test_at_home_without_address_is_rejected(address):
    with pytest.raises(ValidationError) as exc:
        request(make_engine(), modality="at-home", address=address)
    assert exc.value.reason == "address_required"


@pytest.mark.parametrize("field", ["stylist_id", "service_name", "day", "time", "modality"])
def test_missing_field_is_rejected(field):
    with pytest.raises(ValidationError) as exc:
        request(make_engine(), **{field: None})
    assert exc.value.reason == "missing_fields"


def test_blank_string_counts_as_missing():
    with pytest.raises(ValidationError) as exc:
        request(make_engine(), time="  ")
    assert exc.value.reason == "missing_fields"


def test_unknown_modality_is_rejected():
    with pytest.raises(ValidationError) as exc:
        request(make_engine(), modality="drive-through")
    assert exc.value.reason == "invalid_modality"


def test_unknown_stylist_is_not_found():
    with pytest.raises(NotFoundError) as exc:
        request(make_engine(), stylist_id=999)
    assert exc.value.reason == "stylist_not_found"


def test_service_not_offered_skips_conflict_query():
    bookings = MemoryBookings()
    engine = BookingEngine(catalog=MemoryCatalog(X), bookings=bookings)
    with pytest.raises(ValidationError) as exc:
        request(engine, service_name="Perm")
    assert exc.value.reason == "service_not_offered"
    assert bookings.queries == 0


def test_service_match_is_exact():
    with pytest.raises(ValidationError):
        request(make_engine(), service_name="haircut")


def test_presence_is_checked_before_stylist_lookup():
    catalog = MemoryCatalog(X)
    engine = BookingEngine(catalog=catalog, bookings=MemoryBookings())
    with pytest.raises(ValidationError):
        request(engine, stylist_id=999, time="")
    assert catalog.lookups == 0


def test_repeated_invalid_request_gives_same_error():
    engine = make_engine()
    kinds = set()
    for _ in range(3):
        with pytest.raises(ValidationError) as exc:
            request(engine, modality="at-home", address="")
        kinds.add((type(exc.value), exc.value.reason))
    assert len(kinds) == 1


@pytest.mark.parametrize("status", ["pending", "confirmed"])
def test_active_booking_holds_the_slot(status):
    engine = make_engine((X.id, JUNE_1, "10:00", status))
    with pytest.raises(ConflictError) as exc:
        request(engine, requester_id=2, service_name="Color")
    assert exc.value.reason == "slot_taken"


@pytest.mark.parametrize("status", ["cancelled", "completed"])
def test_terminal_booking_frees_the_slot(status):
    booking = request(make_engine((X.id, JUNE_1, "10:00", status)))
    assert booking.status is BookingStatus.PENDING


def test_other_time_on_same_day_is_free():
    booking = request(make_engine((X.id, JUNE_1, "10:00", "pending")), time="11:00")
    assert booking.time == "11:00"


def test_infrastructure_error_propagates_unchanged():
    engine = BookingEngine(catalog=MemoryCatalog(X), bookings=BrokenBookings())
    with pytest.raises(InfrastructureError, match="connection refused"):
        request(engine)

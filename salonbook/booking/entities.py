from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..models import BookingStatus, Modality


@dataclass(frozen=True)
class ServiceOffering:
    name: str
    price: int  # minor units


@dataclass(frozen=True)
class StylistProfile:
    id: int
    specialty: str
    zone: str
    services: tuple[ServiceOffering, ...] = ()

    def find_service(self, name: str) -> ServiceOffering | None:
        for offering in self.services:
            if offering.name == name:
                return offering
        return None


@dataclass(frozen=True)
class NewBooking:
    """A booking the engine accepted, not yet persisted."""

    requester_id: int
    stylist_id: int
    service: str
    date: date
    time: str
    modality: Modality
    address: str | None
    total: int
    status: BookingStatus = BookingStatus.PENDING

# salonbook/models.py
import datetime as dt
from typing import List
from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
import enum

from .database import Base

class Role(str, enum.Enum):
    CLIENT = "client"
    STYLIST = "stylist"

class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

# Statuses that still hold a slot
ACTIVE_STATUSES = (BookingStatus.PENDING.value, BookingStatus.CONFIRMED.value)

class Modality(str, enum.Enum):
    AT_HOME = "at-home"
    IN_SALON = "in-salon"

class User(Base):
    __tablename__ = "users"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    phone: Mapped[str] = mapped_column(String, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(String, default=Role.CLIENT.value)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)

    stylist_profile = relationship("StylistProfile", back_populates="user", uselist=False)

class StylistProfile(Base):
    __tablename__ = "stylist_profiles"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), unique=True)
    specialty: Mapped[str] = mapped_column(String, nullable=False)
    zone: Mapped[str] = mapped_column(String, nullable=False)
    rating: Mapped[float] = mapped_column(default=0.0)
    reviews: Mapped[int] = mapped_column(Integer, default=0)

    user = relationship("User", back_populates="stylist_profile")
    services: Mapped[List["ServiceOffering"]] = relationship(
        back_populates="stylist",
        order_by="ServiceOffering.position",
        cascade="all, delete-orphan",
    )
    bookings = relationship("Booking", back_populates="stylist")

    @property
    def name(self) -> str:
        return self.user.name

class ServiceOffering(Base):
    __tablename__ = "service_offerings"
    __table_args__ = (UniqueConstraint("stylist_id", "name", name="uq_stylist_service_name"),)
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    stylist_id: Mapped[int] = mapped_column(ForeignKey("stylist_profiles.id"), index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    # Minor units
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0)

    stylist = relationship("StylistProfile", back_populates="services")

_active_slot = text("status IN ('pending', 'confirmed')")

class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        # One active booking per (stylist, date, time)
        Index(
            "uq_bookings_active_slot",
            "stylist_id", "date", "time",
            unique=True,
            sqlite_where=_active_slot,
            postgresql_where=_active_slot,
        ),
    )
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    customer_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    stylist_id: Mapped[int] = mapped_column(ForeignKey("stylist_profiles.id"), index=True)
    service: Mapped[str] = mapped_column(String, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time: Mapped[str] = mapped_column(String, nullable=False)
    modality: Mapped[str] = mapped_column(String, nullable=False)
    address: Mapped[str | None] = mapped_column(String, nullable=True)
    total: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String, default=BookingStatus.PENDING.value)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)

    stylist = relationship("StylistProfile", back_populates="bookings")

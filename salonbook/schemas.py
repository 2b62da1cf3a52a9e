import datetime as dt
from typing import Optional, List
from pydantic import BaseModel, EmailStr, Field

from .models import Role

class ServiceOfferingIn(BaseModel):
    name: str = Field(min_length=1)
    price: int = Field(ge=0)

class ServiceOfferingOut(BaseModel):
    name: str
    price: int
    class Config:
        from_attributes = True

class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    phone: str = Field(min_length=1)
    password: str = Field(min_length=8)
    role: Role = Role.CLIENT
    # Stylist registration only
    specialty: Optional[str] = None
    zone: Optional[str] = None
    services: List[ServiceOfferingIn] = []

class UserLogin(BaseModel):
    email: EmailStr
    password: str

class UserOut(BaseModel):
    id: int
    name: str
    email: EmailStr
    phone: str
    role: str
    class Config:
        from_attributes = True

class UserSummary(BaseModel):
    id: int
    name: str
    role: str

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class LoginOut(Token):
    user: UserSummary

class StylistOut(BaseModel):
    id: int
    name: str
    specialty: str
    zone: str
    rating: float
    reviews: int
    services: List[ServiceOfferingOut]
    class Config:
        from_attributes = True

class StylistSummary(BaseModel):
    id: int
    specialty: str
    zone: str
    class Config:
        from_attributes = True

class CatalogUpdate(BaseModel):
    services: List[ServiceOfferingIn]

class BookingCreate(BaseModel):
    # Presence is checked by the booking engine so a missing field is a 400, not a 422
    stylist_id: Optional[int] = None
    service: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[str] = None
    modality: Optional[str] = None
    address: Optional[str] = None

class BookingOut(BaseModel):
    id: int
    customer_id: int
    stylist_id: int
    service: str
    date: dt.date
    time: str
    modality: str
    address: Optional[str] = None
    total: int
    status: str
    class Config:
        from_attributes = True

class BookingDetailOut(BookingOut):
    stylist: StylistSummary

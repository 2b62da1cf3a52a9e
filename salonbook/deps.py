from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from .database import get_db
from .models import User, Role
from .auth import decode_token
from .config import settings
from .booking.engine import BookingEngine
from .booking.sql_store import SqlBookingStore, SqlCatalogStore

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")


def get_current_user(db: Session = Depends(get_db), token: str = Depends(oauth2_scheme)) -> User:
    payload = decode_token(token)
    if not payload or "sub" not in payload:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    user = db.get(User, int(payload["sub"]))
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return user


def require_role(required: Role):
    def checker(user: User = Depends(get_current_user)) -> User:
        if user.role != required.value:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return user
    return checker

RequireStylist = require_role(Role.STYLIST)


def get_booking_store(db: Session = Depends(get_db)) -> SqlBookingStore:
    return SqlBookingStore(db)


def get_booking_engine(
    db: Session = Depends(get_db),
    store: SqlBookingStore = Depends(get_booking_store),
) -> BookingEngine:
    return BookingEngine(
        catalog=SqlCatalogStore(db),
        bookings=store,
        surcharge=settings.AT_HOME_SURCHARGE,
    )

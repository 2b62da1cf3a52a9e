# salonbook/routers/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..database import get_db
from .. import schemas, models
from ..auth import get_password_hash, verify_password, create_access_token
from ..config import settings
from .stylists import duplicate_service_names

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=schemas.UserOut, status_code=201)
def register(user_in: schemas.UserCreate, db: Session = Depends(get_db)):
    existing = db.query(models.User).filter(models.User.email == user_in.email).first()
    if existing:
        raise HTTPException(status_code=400, detail="Email already registered")

    is_stylist = user_in.role == models.Role.STYLIST
    if is_stylist:
        dupes = duplicate_service_names(user_in.services)
        if dupes:
            raise HTTPException(status_code=400, detail=f"Duplicate service names: {', '.join(dupes)}")

    user = models.User(
        name=user_in.name,
        email=user_in.email,
        phone=user_in.phone,
        hashed_password=get_password_hash(user_in.password),
        role=user_in.role.value,
    )
    # Only stylists get a profile
    if is_stylist:
        user.stylist_profile = models.StylistProfile(
            specialty=user_in.specialty or settings.DEFAULT_SPECIALTY,
            zone=user_in.zone or settings.DEFAULT_ZONE,
            services=[
                models.ServiceOffering(name=s.name, price=s.price, position=i)
                for i, s in enumerate(user_in.services)
            ],
        )
    db.add(user)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Email already registered")
    db.refresh(user)

    logger.info("User registered", extra={"user_id": user.id})
    return user


def authenticate(db: Session, email: str, password: str) -> models.User:
    user = db.query(models.User).filter(models.User.email == email).first()
    if not user or not verify_password(password, user.hashed_password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    logger.info("User logged in", extra={"user_id": user.id})
    return user


def issue_token(user: models.User) -> str:
    return create_access_token({"sub": str(user.id), "role": user.role})


@router.post("/login", response_model=schemas.LoginOut)
def login(credentials: schemas.UserLogin, db: Session = Depends(get_db)):
    user = authenticate(db, credentials.email, credentials.password)
    return {
        "access_token": issue_token(user),
        "token_type": "bearer",
        "user": {"id": user.id, "name": user.name, "role": user.role},
    }


@router.post("/token", response_model=schemas.Token)
def token(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    user = authenticate(db, form_data.username, form_data.password)
    return {"access_token": issue_token(user), "token_type": "bearer"}

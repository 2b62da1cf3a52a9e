from collections import Counter
from typing import Iterable, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from ..database import get_db
from .. import schemas, models
from ..deps import RequireStylist

router = APIRouter(prefix="/stylists", tags=["stylists"])


def duplicate_service_names(services: Iterable[schemas.ServiceOfferingIn]) -> List[str]:
    counts = Counter(s.name for s in services)
    return sorted(name for name, n in counts.items() if n > 1)


@router.get("/", response_model=List[schemas.StylistOut])
def list_stylists(db: Session = Depends(get_db)):
    return db.query(models.StylistProfile).order_by(models.StylistProfile.id).all()


@router.put("/me/services", response_model=schemas.StylistOut)
def replace_services(
    payload: schemas.CatalogUpdate,
    user: models.User = Depends(RequireStylist),
    db: Session = Depends(get_db),
):
    profile = user.stylist_profile
    if not profile:
        raise HTTPException(status_code=404, detail="Stylist profile not found")

    dupes = duplicate_service_names(payload.services)
    if dupes:
        raise HTTPException(status_code=400, detail=f"Duplicate service names: {', '.join(dupes)}")

    # Existing bookings keep their computed totals
    profile.services.clear()
    db.flush()
    profile.services.extend(
        models.ServiceOffering(name=s.name, price=s.price, position=i)
        for i, s in enumerate(payload.services)
    )
    db.commit()
    db.refresh(profile)
    return profile


@router.get("/{stylist_id}", response_model=schemas.StylistOut)
def get_stylist(stylist_id: int, db: Session = Depends(get_db)):
    stylist = db.get(models.StylistProfile, stylist_id)
    if not stylist:
        raise HTTPException(status_code=404, detail="Stylist not found")
    return stylist

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from .. import models, schemas
from ..calculators.price_lookup import DEFAULT_PRICES
from ..database import get_db

router = APIRouter(prefix="/pricing", tags=["pricing"])


def seed_default_prices(db: Session) -> int:
    """Insert DEFAULT_PRICES rows that are missing. Never overwrites edited prices."""
    seeded = 0
    for key, data in DEFAULT_PRICES.items():
        existing = db.query(models.PriceEntry).filter(models.PriceEntry.pricing_key == key).first()
        if not existing:
            db.add(models.PriceEntry(pricing_key=key, **data))
            seeded += 1
    db.commit()
    return seeded


@router.get("/seed")
def seed_prices(db: Session = Depends(get_db)):
    """Seed default prices. Safe to run multiple times — skips existing."""
    return {"ok": True, "seeded": seed_default_prices(db)}


@router.get("/", response_model=List[schemas.PriceEntry])
def list_prices(db: Session = Depends(get_db)):
    return db.query(models.PriceEntry).order_by(models.PriceEntry.pricing_key).all()


@router.patch("/{pricing_key}", response_model=schemas.PriceEntry)
def update_price(pricing_key: str, update: schemas.PriceEntryUpdate, db: Session = Depends(get_db)):
    entry = db.query(models.PriceEntry).filter(models.PriceEntry.pricing_key == pricing_key).first()
    if not entry:
        raise HTTPException(status_code=404, detail="Pricing key not found — run /pricing/seed first")
    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(entry, field, value)
    db.commit()
    db.refresh(entry)
    return entry

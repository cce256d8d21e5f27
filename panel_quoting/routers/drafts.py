"""
Draft API — saved builder state.

GET /api/drafts/{builder}/{draft_key}  — Sanitized draft, or 404
PUT /api/drafts/{builder}/{draft_key}  — Sanitize and save; returns what was stored
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import schemas
from ..calculators.registry import has_calculator
from ..database import get_db
from ..drafts import DraftStore

router = APIRouter(prefix="/drafts", tags=["drafts"])


def _check_builder(builder: str):
    if not has_calculator(builder):
        raise HTTPException(status_code=404, detail=f"Unknown builder: {builder}")


@router.get("/{builder}/{draft_key}")
def load_draft(builder: str, draft_key: str, db: Session = Depends(get_db)):
    _check_builder(builder)
    draft = DraftStore(db).load(builder, draft_key)
    if draft is None:
        raise HTTPException(status_code=404, detail="Draft not found")
    return {"builder": builder, "draft_key": draft_key, "payload": draft}


@router.put("/{builder}/{draft_key}")
def save_draft(builder: str, draft_key: str, request: schemas.DraftPayload,
               db: Session = Depends(get_db)):
    _check_builder(builder)
    draft = DraftStore(db).save(builder, draft_key, request.payload)
    return {"builder": builder, "draft_key": draft_key, "payload": draft}

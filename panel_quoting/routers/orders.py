"""
Order API — price a whole order and submit it.

POST /api/orders/price   — Sides + single panels -> priced order with status
POST /api/orders/submit  — Price again, then submit down order_now or quote_review

Prices come from the price_entries table. A side that is started but not
measured yet counts as pending and keeps the order partially configured.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import schemas
from ..calculators.price_lookup import PriceLookup
from ..calculators.registry import compute_panel, compute_side
from ..config import settings
from ..database import get_db
from ..pricing_engine import OrderNotReadyError, compute_order, submit_order
from .panels import panel_inputs, side_inputs

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])


def collect_panels(request: schemas.OrderRequest) -> tuple:
    """
    (panel_specs, pending_sides) for an order request.

    Raises HTTPException 400 on options the calculators do not offer.
    """
    if len(request.sides) > settings.MAX_SIDES:
        raise HTTPException(status_code=400, detail=f"At most {settings.MAX_SIDES} sides per order")

    panels = []
    pending_sides = 0
    try:
        for side_request in request.sides:
            side_state, family = side_inputs(side_request)
            side_panels = compute_side(side_state, family)
            if not side_panels:
                pending_sides += 1
            panels.extend(side_panels)
        for panel_request in request.panels:
            measurement, options = panel_inputs(panel_request)
            panel = compute_panel(measurement, options)
            if panel is None:
                pending_sides += 1
            else:
                panels.append(panel)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return panels, pending_sides


@router.post("/price")
def price_order(request: schemas.OrderRequest, db: Session = Depends(get_db)):
    panels, pending_sides = collect_panels(request)
    return compute_order(panels, PriceLookup.from_session(db), pending_sides=pending_sides)


@router.post("/submit")
def submit(request: schemas.SubmitRequest, db: Session = Depends(get_db)):
    """
    Submit an order. Priced orders go through order_now, orders with an
    unknown cost through quote_review. Anything else is a 409.
    """
    panels, pending_sides = collect_panels(request)
    priced = compute_order(panels, PriceLookup.from_session(db), pending_sides=pending_sides)
    try:
        submitted = submit_order(priced, request.path)
    except OrderNotReadyError as e:
        raise HTTPException(status_code=409, detail=str(e))

    submitted["email"] = request.email
    submitted["notes"] = request.notes
    submitted["contact"] = {
        "company": settings.COMPANY_NAME,
        "email": settings.COMPANY_EMAIL,
        "phone": settings.COMPANY_PHONE,
    }
    logger.info(
        "Order submitted via %s: %d panels, total %s",
        submitted["submitted_via"], submitted["panel_count"], submitted["order_total"],
    )
    return submitted

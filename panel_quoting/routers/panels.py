"""
Panel API — dimensions only, no prices.

POST /api/panels/compute  — One raw measurement -> PanelSpec
POST /api/panels/side     — One measured side -> PanelSpecs, one per sub-panel
GET  /api/panels/families — Every family's options, layouts and size tiers
"""

from fastapi import APIRouter, HTTPException

from .. import schemas
from ..calculators.registry import compute_panel, compute_side, get_calculator, list_calculators
from ..drafts import upgrade_legacy_edge_ids

router = APIRouter(prefix="/panels", tags=["panels"])


def panel_inputs(request: schemas.PanelRequest) -> tuple:
    """(measurement, options) dicts from a panel request."""
    measurement = {
        "width_inches": request.width_inches,
        "height_inches": request.height_inches,
    }
    options = request.options.model_dump(mode="json", exclude_none=True)
    if options["family"] == "raw_netting":
        options = upgrade_legacy_edge_ids(options)
    return measurement, options


def side_inputs(request: schemas.SideRequest) -> tuple:
    """(side dict, family) from a side request."""
    side = request.model_dump(mode="json", exclude_none=True)
    family = side.pop("family")
    return side, family


@router.post("/compute")
def compute(request: schemas.PanelRequest):
    """Cut dimensions for one panel. ready=false until the measurement is usable."""
    measurement, options = panel_inputs(request)
    try:
        panel = compute_panel(measurement, options)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"ready": panel is not None, "panel": panel}


@router.post("/side")
def side(request: schemas.SideRequest):
    side_state, family = side_inputs(request)
    try:
        panels = compute_side(side_state, family)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"ready": bool(panels), "panels": panels}


@router.get("/families")
def families():
    return {family: get_calculator(family).describe() for family in list_calculators()}

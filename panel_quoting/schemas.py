from pydantic import BaseModel, Field
from typing import Optional, List, Union
from datetime import datetime
from .models import MaterialFamily, SubmissionPath

Number = Union[float, str]


class PriceEntryBase(BaseModel):
    pricing_key: str
    price: float
    unit: str = "linear_ft"
    notes: Optional[str] = None


class PriceEntryUpdate(BaseModel):
    price: Optional[float] = None
    unit: Optional[str] = None
    notes: Optional[str] = None


class PriceEntry(PriceEntryBase):
    id: int
    updated_at: datetime
    class Config:
        from_attributes = True


class PanelOptions(BaseModel):
    family: MaterialFamily
    material: Optional[str] = None
    top_attachment: Optional[str] = None
    left_edge: Optional[str] = None
    right_edge: Optional[str] = None
    bottom_edge: Optional[str] = None
    roll_width: Optional[int] = None
    color: Optional[str] = None
    side: Optional[int] = None


class PanelRequest(BaseModel):
    width_inches: Optional[Number] = None
    height_inches: Optional[Number] = None
    options: PanelOptions


class SideRequest(BaseModel):
    family: MaterialFamily
    side: Optional[int] = None
    total_width_inches: Optional[Number] = None
    left_height_inches: Optional[Number] = None
    right_height_inches: Optional[Number] = None
    layout: Optional[str] = None
    top_attachment: Optional[str] = None
    left_edge: Optional[str] = None
    right_edge: Optional[str] = None
    material: Optional[str] = None


class OrderRequest(BaseModel):
    sides: List[SideRequest] = Field(default_factory=list)
    panels: List[PanelRequest] = Field(default_factory=list)


class SubmitRequest(OrderRequest):
    path: SubmissionPath
    email: Optional[str] = None
    notes: Optional[str] = None


class DraftPayload(BaseModel):
    payload: dict = Field(default_factory=dict)

from sqlalchemy import Column, Integer, String, Float, DateTime, Text, JSON, UniqueConstraint
from datetime import datetime
from .database import Base
import enum


class MaterialFamily(str, enum.Enum):
    MESH = "mesh"
    CLEAR_VINYL = "clear_vinyl"
    RAW_NETTING = "raw_netting"


class OrderStatus(str, enum.Enum):
    UNCONFIGURED = "unconfigured"
    PARTIALLY_CONFIGURED = "partially_configured"   # at least one side is missing dimensions
    PRICED = "priced"
    NEEDS_QUOTE = "needs_quote"                      # at least one unknown cost
    SUBMITTED = "submitted"


class SubmissionPath(str, enum.Enum):
    ORDER_NOW = "order_now"
    QUOTE_REVIEW = "quote_review"


class PriceEntry(Base):
    """One row of the pricing table — pricing_key -> unit price."""
    __tablename__ = "price_entries"

    id = Column(Integer, primary_key=True, index=True)
    pricing_key = Column(String, unique=True, nullable=False, index=True)
    price = Column(Float, nullable=False, default=0.0)
    unit = Column(String, default="linear_ft")  # 'linear_ft' | 'each'
    notes = Column(Text, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class BuilderDraft(Base):
    """Saved builder state. Payload is sanitized on every load and save."""
    __tablename__ = "builder_drafts"
    __table_args__ = (UniqueConstraint("builder", "draft_key", name="uq_builder_draft"),)

    id = Column(Integer, primary_key=True, index=True)
    builder = Column(String, nullable=False)  # 'mesh' | 'clear_vinyl' | 'raw_netting'
    draft_key = Column(String, nullable=False, index=True)
    payload = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

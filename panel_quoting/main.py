from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .database import engine, Base
from .routers import pricing, panels, orders, drafts

logger = logging.getLogger("panel_quoting")

# Create tables (handles new tables but won't add columns to existing ones)
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Panel Quoting API",
    description="Cut dimensions and pricing for mesh, clear vinyl and raw netting panels",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(pricing.router, prefix="/api")
app.include_router(panels.router, prefix="/api")
app.include_router(orders.router, prefix="/api")
app.include_router(drafts.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "panel-quoting", "company": settings.COMPANY_NAME}


@app.on_event("startup")
def auto_seed():
    """Seed the price table on first run."""
    if not settings.SEED_DEFAULT_PRICES:
        return
    from .database import SessionLocal
    db = SessionLocal()
    try:
        seeded = pricing.seed_default_prices(db)
        if seeded:
            logger.info("Seeded %d default prices", seeded)
    finally:
        db.close()

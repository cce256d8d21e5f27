"""
Pricing table lookup.

The pricing table lives in the price_entries table (seeded from
DEFAULT_PRICES below, edited through /api/pricing). Calculators never talk
to the database — they get a PriceLookup built from a plain
{pricing_key: price} map.

Missing keys return the caller's fallback (default 0.0). The aggregator
treats 0.0 as "unknown", never as "free".
"""

import logging

from .size_tiers import CLEAR_VINYL_TIERS

logger = logging.getLogger(__name__)

# Seed values: market prices as of the last price sheet.
# Units: "linear_ft" unless noted.
DEFAULT_PRICES = {
    # Mesh panels: base rate per sqft, scaled by the mesh type multiplier
    "mesh_panel_base_sqft": {"price": 1.50, "unit": "sqft", "notes": "10 sqft minimum per panel"},
    "mesh_tracking_short": {"price": 2.00, "unit": "each", "notes": "Tracking top, panels under 10ft"},
    "mesh_tracking_tall": {"price": 4.00, "unit": "each", "notes": "Tracking top, panels 10ft and taller"},
    "mesh_door": {"price": 15.00, "unit": "each", "notes": "Magnetic door, per panel"},
    # Raw netting: per linear foot off the roll
    "raw_panel_hm_101": {"price": 6.30, "unit": "linear_ft", "notes": "Heavy mosquito, 101\" roll"},
    "raw_panel_hm_123": {"price": 7.70, "unit": "linear_ft", "notes": "Heavy mosquito, 123\" roll"},
    "raw_panel_hm_138": {"price": 8.65, "unit": "linear_ft", "notes": "Heavy mosquito, 138\" roll"},
    "raw_panel_nsu_101": {"price": 7.60, "unit": "linear_ft", "notes": "No-see-um, 101\" roll"},
    "raw_panel_nsu_123": {"price": 9.25, "unit": "linear_ft", "notes": "No-see-um, 123\" roll"},
    "raw_panel_shade_120": {"price": 8.25, "unit": "linear_ft", "notes": "Shade, 120\" roll"},
    "raw_panel_scrim_120": {"price": 9.00, "unit": "linear_ft", "notes": "Theater scrim, 120\" roll"},
    "raw_panel_scrim_140": {"price": 10.50, "unit": "linear_ft", "notes": "Theater scrim, 140\" roll"},
    "raw_panel_ind_65": {"price": 4.00, "unit": "linear_ft", "notes": "Industrial, 65\" roll"},
    "raw_panel_ind_full_roll": {"price": 1350.00, "unit": "each", "notes": "Industrial, full roll"},
    # Stucco strips: per strip
    "stucco_standard": {"price": 24.00, "unit": "each", "notes": "Standard stucco strip"},
    "stucco_zippered": {"price": 40.00, "unit": "each", "notes": "Zippered stucco strip"},
}

# Clear vinyl tier rates come from the tier table
for _tier in CLEAR_VINYL_TIERS:
    DEFAULT_PRICES[_tier.rate_key] = {
        "price": _tier.default_rate,
        "unit": "linear_ft",
        "notes": f"Clear vinyl {_tier.label} ({_tier.range_label})",
    }


class PriceLookup:
    """
    Looks up unit prices by pricing key.

    get_price() never raises: unknown keys and unusable values return the
    fallback. Instances are read-only after construction, so one lookup can
    be shared across concurrent requests.
    """

    def __init__(self, prices: dict = None):
        self._prices = dict(prices or {})

    def get_price(self, key: str, fallback: float = 0.0) -> float:
        value = self._prices.get(key)
        if value is None:
            return fallback
        try:
            return float(value)
        except (TypeError, ValueError):
            logger.warning("Pricing key %s has non-numeric value %r", key, value)
            return fallback

    __call__ = get_price

    def has_key(self, key: str) -> bool:
        return key in self._prices

    def keys(self) -> list:
        return sorted(self._prices.keys())

    @classmethod
    def from_defaults(cls) -> "PriceLookup":
        return cls({key: data["price"] for key, data in DEFAULT_PRICES.items()})

    @classmethod
    def from_session(cls, db) -> "PriceLookup":
        """Build a lookup from the price_entries table."""
        from ..models import PriceEntry
        rows = db.query(PriceEntry).all()
        logger.debug("Loaded %d price entries", len(rows))
        return cls({row.pricing_key: row.price for row in rows})

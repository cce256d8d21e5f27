"""
Clear vinyl panel calculator.

Same dimension rules as mesh with a different attachment set. Vinyl is cut
at most 72" tall; any remaining raw height is filled with Sunbrella canvas.
The tallest raw height in the order picks the size tier, and the tier sets
the per-linear-foot rate.
"""

from .base import BasePanelCalculator
from .size_tiers import CLEAR_VINYL_TIERS
from .splitter import SideLayout


class ClearVinylCalculator(BasePanelCalculator):

    FAMILY = "clear_vinyl"
    LABEL = "Clear Vinyl Panels"

    MAX_PRIMARY_HEIGHT = 72

    TOP_ATTACHMENTS = {
        "standard_track": {"label": "Standard Track", "height_add": 0, "track": True, "price_per_foot": 3.50},
        "heavy_track": {"label": "Heavy Track", "height_add": 0, "track": True, "price_per_foot": 4.90},
        "velcro": {"label": "Velcro", "height_add": 2, "track": False, "price_per_foot": 0.50},
        "binding_only": {"label": "Binding Only", "height_add": 0, "track": False, "price_per_foot": 0.0},
        # Custom mounting: priced by the sales team
        "special_rigging": {"label": "Special Rigging", "height_add": 0, "track": False, "price_per_foot": None},
    }

    # Snaps are sold as attachment hardware, not per panel
    EDGE_ATTACHMENTS = {
        "none": {"label": "None", "width_add": 0, "price_per_foot": 0.0},
        "marine_snaps": {"label": "Marine Snaps", "width_add": 1, "price_per_foot": 0.0},
        "zipper_door": {"label": "Zipper Door", "width_add": 1, "price_per_foot": 2.50},
        "zippered_stucco_strip": {"label": "Zippered Stucco Strip", "width_add": -1, "price_per_foot": 0.0,
                                  "unit_price_key": "stucco_zippered"},
    }

    MATERIALS = {
        "clear_vinyl": {"label": "Clear Vinyl"},
    }

    # Canvas border around the vinyl, medium and tall tiers only
    CANVAS_COLORS = (
        "tbd", "ashen_gray", "burgundy", "black", "cocoa_brown", "clear_top_to_bottom",
        "forest_green", "moss_green", "navy_blue", "royal_blue", "sandy_tan",
    )
    VELCRO_COLORS = ("black", "white")
    DEFAULT_CANVAS_COLOR = "tbd"
    DEFAULT_VELCRO_COLOR = "black"

    DEFAULT_TOP = "standard_track"
    DEFAULT_EDGE = "marine_snaps"
    DEFAULT_MATERIAL = "clear_vinyl"

    SIZE_TIERS = CLEAR_VINYL_TIERS

    SIDE_LAYOUTS = {
        "single": SideLayout("single", "1 Panel", 1, "none", "Full width, no split"),
        "2-zip": SideLayout("2-zip", "2 Panels", 2, "zipper_door", "Zipper doorway between"),
    }
    DEFAULT_LAYOUT = "2-zip"

    PRICED_EDGES = ("top", "left", "right")

    def material_key(self, panel: dict, tier) -> str:
        return tier.rate_key

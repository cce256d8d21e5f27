"""
Mesh panel calculator (mosquito / no-see-um / shade curtains).

Width: +1" per snapping edge (marine snaps, magnetic door), -1" per edge on
a stucco strip, +1" per 10ft on tracking. Height: +2" floor overlap, velcro
tops add another +2" for the fold-over.

Pricing is by area, not by run:
  max(cut_width x cut_height / 144, 10 sqft) x base $/sqft x mesh multiplier
plus per-panel adders for tracking and magnetic doors.
"""

from .base import BasePanelCalculator
from .size_tiers import MESH_TIERS
from .splitter import SideLayout


class MeshPanelCalculator(BasePanelCalculator):

    FAMILY = "mesh"
    LABEL = "Mosquito Curtain Panels"

    TOP_ATTACHMENTS = {
        "tracking": {"label": "Tracking", "height_add": 0, "track": True, "price_per_foot": 0.0},
        "velcro": {"label": "Velcro", "height_add": 2, "track": False, "price_per_foot": 0.0},
    }

    # Snaps and magnets are sold as attachment hardware, not per panel
    EDGE_ATTACHMENTS = {
        "none": {"label": "None", "width_add": 0, "price_per_foot": 0.0},
        "marine_snaps": {"label": "Marine Snaps", "width_add": 1, "price_per_foot": 0.0},
        "magnetic_door": {"label": "Magnetic Door", "width_add": 1, "price_per_foot": 0.0},
        "stucco_strip": {"label": "Stucco Strip", "width_add": -1, "price_per_foot": 0.0,
                         "unit_price_key": "stucco_standard"},
    }

    MATERIALS = {
        "heavy_mosquito": {"label": "Heavy Mosquito", "multiplier": 1.00},
        "no_see_um": {"label": "No-See-Um", "multiplier": 1.20},
        "shade": {"label": "Shade", "multiplier": 1.10},
    }

    DEFAULT_TOP = "tracking"
    DEFAULT_EDGE = "marine_snaps"
    DEFAULT_MATERIAL = "heavy_mosquito"

    SIZE_TIERS = MESH_TIERS

    SIDE_LAYOUTS = {
        "single": SideLayout("single", "1 Panel", 1, "none", "Full width, no split"),
        "2-magnet": SideLayout("2-magnet", "2 Panels", 2, "magnetic_door", "Magnetic doorway between"),
        "3-magnet": SideLayout("3-magnet", "3 Panels", 3, "magnetic_door", "Magnetic doorways between"),
    }

    PRICED_EDGES = ("left", "right")

    MATERIAL_UNIT = "sqft"
    MIN_SQFT = 10
    TALL_TRACK_HEIGHT = 120     # tracking on panels this tall or taller uses the tall adder

    def material_key(self, panel: dict, tier) -> str:
        return "mesh_panel_base_sqft"

    def material_rate(self, panel: dict, base_rate: float) -> float:
        return base_rate * self.MATERIALS[panel["material"]]["multiplier"]

    def material_quantity(self, panel: dict) -> float:
        return max(self.square_feet(panel), self.MIN_SQFT)

    def material_minimum_applied(self, panel: dict) -> bool:
        return self.square_feet(panel) < self.MIN_SQFT

    def square_feet(self, panel: dict) -> float:
        return panel["cut_width"] * panel["cut_height"] / 144.0

    def panel_adders(self, panel: dict) -> list:
        adders = []
        if self.is_track(panel["top_attachment"]):
            if panel["raw_height"] >= self.TALL_TRACK_HEIGHT:
                adders.append(("tracking", "mesh_tracking_tall"))
            else:
                adders.append(("tracking", "mesh_tracking_short"))
        # One door charge per panel, however many of its edges are magnetic
        if "magnetic_door" in (panel["left_edge"], panel["right_edge"]):
            adders.append(("door", "mesh_door"))
        return adders

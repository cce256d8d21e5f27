"""
Abstract base class for all material-family panel calculators.

The dimension, split and edge-pricing algorithms live here once. Each
family subclass only declares its constant tables (attachment adjustments,
overlap, tiers, layouts) and how its pricing key is built.

Input: a measurement dict + an options dict
Output: PanelSpec dict (see compute_panel)
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Optional

from .rounding import round_half_up, round_money
from .size_tiers import classify_height, tier_for_panels
from .splitter import SideLayout, split_side

logger = logging.getLogger(__name__)


class BasePanelCalculator(ABC):
    """All material-family calculators inherit from this."""

    FAMILY = ""
    LABEL = ""

    # Top attachment -> {"label", "height_add", "track", "price_per_foot"}
    TOP_ATTACHMENTS: dict = {}
    # Side/edge attachment -> {"label", "width_add", "price_per_foot", "unit_price_key"?}
    EDGE_ATTACHMENTS: dict = {}
    # Material option -> {"label", ...}
    MATERIALS: dict = {}

    DEFAULT_TOP = ""
    DEFAULT_EDGE = "none"
    DEFAULT_MATERIAL = ""

    OVERLAP_INCHES = 2          # base-of-panel overlap, always applied
    RELAXED_FIT_SPAN = 120      # +1" per 10ft on sliding track
    MIN_RAW_HEIGHT = 12
    MIN_CUT_INCHES = 1
    MAX_PRIMARY_HEIGHT = None   # dual-layer cap, None = single material
    MATERIAL_UNIT = "linear_ft"   # unit the material rate is quoted in

    SIZE_TIERS: tuple = ()
    SIDE_LAYOUTS: dict = {}     # layout id -> SideLayout
    DEFAULT_LAYOUT = "single"

    # Edges that carry a price, in output order
    PRICED_EDGES = ("left", "right")
    # Edge roles the family accepts as options
    EDGE_ROLES = ("left", "right")

    @abstractmethod
    def material_key(self, panel: dict, tier) -> str:
        """Pricing key for the panel's base material rate."""
        pass

    # --- Option handling ---

    def normalize_options(self, options: dict) -> dict:
        """
        Fill defaults and reject values outside the family's closed sets.
        Persisted drafts go through drafts.sanitize_* first, which maps legacy
        values to documented fallbacks; anything unknown here is a caller bug.
        """
        options = dict(options or {})
        normalized = {
            "material": options.get("material") or self.DEFAULT_MATERIAL,
            "top_attachment": options.get("top_attachment") or self.DEFAULT_TOP,
            "left_edge": options.get("left_edge") or self.DEFAULT_EDGE,
            "right_edge": options.get("right_edge") or self.DEFAULT_EDGE,
            "bottom_edge": None,
            "roll_width": options.get("roll_width"),
            "color": options.get("color"),
            "side": options.get("side"),
        }
        if "bottom" in self.EDGE_ROLES:
            normalized["bottom_edge"] = options.get("bottom_edge") or self.DEFAULT_EDGE

        if self.MATERIALS and normalized["material"] not in self.MATERIALS:
            raise ValueError(
                f"Unknown {self.FAMILY} material: {normalized['material']}. "
                f"Available: {list(self.MATERIALS.keys())}"
            )
        if normalized["top_attachment"] not in self.TOP_ATTACHMENTS:
            raise ValueError(
                f"Unknown {self.FAMILY} top attachment: {normalized['top_attachment']}. "
                f"Available: {list(self.TOP_ATTACHMENTS.keys())}"
            )
        for role in self.EDGE_ROLES:
            value = normalized[f"{role}_edge"]
            if value not in self.EDGE_ATTACHMENTS:
                raise ValueError(
                    f"Unknown {self.FAMILY} {role} edge: {value}. "
                    f"Available: {list(self.EDGE_ATTACHMENTS.keys())}"
                )
        return normalized

    def is_track(self, top_attachment: str) -> bool:
        return bool(self.TOP_ATTACHMENTS.get(top_attachment, {}).get("track"))

    def get_layout(self, layout_id: str) -> SideLayout:
        if layout_id not in self.SIDE_LAYOUTS:
            raise ValueError(
                f"Unknown {self.FAMILY} layout: {layout_id}. "
                f"Available: {list(self.SIDE_LAYOUTS.keys())}"
            )
        return self.SIDE_LAYOUTS[layout_id]

    # --- Dimension calculator ---

    def calculate_dimensions(self, raw_width: float, raw_height: float,
                             top_attachment: str, left_edge: str, right_edge: str) -> dict:
        """
        Cut dimensions plus every term that produced them.

        width  = round(raw + left + right + relaxed_fit)
        height = round(raw + overlap + top)
        Each breakdown's terms (all keys except "total") sum to its total.
        """
        left_add = self.EDGE_ATTACHMENTS[left_edge]["width_add"]
        right_add = self.EDGE_ATTACHMENTS[right_edge]["width_add"]
        relaxed_fit_add = 0
        if self.is_track(top_attachment):
            relaxed_fit_add = round_half_up(raw_width / self.RELAXED_FIT_SPAN)

        width_subtotal = raw_width + left_add + right_add + relaxed_fit_add
        width_rounded = round_half_up(width_subtotal)
        cut_width = max(self.MIN_CUT_INCHES, width_rounded)

        overlap_add = self.OVERLAP_INCHES
        top_add = self.TOP_ATTACHMENTS[top_attachment]["height_add"]
        height_subtotal = raw_height + overlap_add + top_add
        height_rounded = round_half_up(height_subtotal)
        cut_height = max(self.MIN_CUT_INCHES, height_rounded)

        return {
            "cut_width": cut_width,
            "cut_height": cut_height,
            "width_breakdown": {
                "base": raw_width,
                "left_edge_add": left_add,
                "right_edge_add": right_add,
                "relaxed_fit_add": relaxed_fit_add,
                "rounding_add": width_rounded - width_subtotal,
                "floor_add": cut_width - width_rounded,
                "total": cut_width,
            },
            "height_breakdown": {
                "base": raw_height,
                "overlap_add": overlap_add,
                "top_add": top_add,
                "rounding_add": height_rounded - height_subtotal,
                "floor_add": cut_height - height_rounded,
                "total": cut_height,
            },
        }

    def split_layers(self, raw_height: float) -> tuple:
        """(primary_height, secondary_height) from the raw height."""
        if self.MAX_PRIMARY_HEIGHT is None:
            return raw_height, 0
        primary = min(self.MAX_PRIMARY_HEIGHT, raw_height)
        secondary = max(0, raw_height - self.MAX_PRIMARY_HEIGHT)
        return primary, secondary

    def is_ready(self, width: float, height: float) -> bool:
        return width > 0 and height >= self.MIN_RAW_HEIGHT

    def compute_panel(self, measurement: dict, options: dict) -> Optional[dict]:
        """
        One panel from a raw measurement.

        measurement: {"width_inches", "height_inches"}
        options: {"material", "top_attachment", "left_edge", "right_edge",
                  "bottom_edge", "roll_width", "color", "side"}

        Returns a PanelSpec dict, or None when the measurement is not ready
        (missing, zero, or under the family minimum height).
        """
        opts = self.normalize_options(options)
        width = self.parse_inches((measurement or {}).get("width_inches"))
        height = self.raw_height_for(measurement or {}, opts)
        if not self.is_ready(width, height):
            return None
        return self._build_panel(width, height, opts, panel_index=0)

    def raw_height_for(self, measurement: dict, options: dict) -> float:
        return self.parse_inches(measurement.get("height_inches"))

    def _build_panel(self, width: float, height: float, opts: dict, panel_index: int) -> dict:
        dims = self.calculate_dimensions(
            width, height, opts["top_attachment"], opts["left_edge"], opts["right_edge"],
        )
        primary, secondary = self.split_layers(height)
        panel = {
            "family": self.FAMILY,
            "material": opts["material"],
            "roll_width": opts["roll_width"],
            "color": opts["color"],
            "side": opts["side"],
            "panel_index": panel_index,
            "raw_width": width,
            "raw_height": height,
            "cut_width": dims["cut_width"],
            "cut_height": dims["cut_height"],
            "top_attachment": opts["top_attachment"],
            "left_edge": opts["left_edge"],
            "right_edge": opts["right_edge"],
            "bottom_edge": opts["bottom_edge"],
            "primary_height": primary,
            "secondary_height": secondary,
            "width_breakdown": dims["width_breakdown"],
            "height_breakdown": dims["height_breakdown"],
        }
        logger.debug("%s panel %sx%s -> cut %sx%s", self.FAMILY, width, height,
                     panel["cut_width"], panel["cut_height"])
        return panel

    # --- Multi-panel sides ---

    def compute_side(self, side: dict) -> list:
        """
        All panels for one measured side.

        side: {"total_width_inches", "left_height_inches", "right_height_inches",
               "layout", "top_attachment", "left_edge", "right_edge",
               "material", "side"}

        Returns [] when the side's measurements are not ready.
        """
        if not self.SIDE_LAYOUTS:
            raise ValueError(f"{self.FAMILY} panels are not built from sides")
        layout = self.get_layout(side.get("layout") or self.DEFAULT_LAYOUT)
        opts = self.normalize_options(side)

        sub_panels = split_side(
            self.parse_inches(side.get("total_width_inches")),
            self.parse_inches(side.get("left_height_inches")),
            self.parse_inches(side.get("right_height_inches")),
            layout,
            opts["left_edge"],
            opts["right_edge"],
        )
        if any(not self.is_ready(p["width"], p["height"]) for p in sub_panels):
            return []

        panels = []
        for sub in sub_panels:
            sub_opts = dict(opts, left_edge=sub["left_edge"], right_edge=sub["right_edge"])
            panels.append(self._build_panel(sub["width"], sub["height"], sub_opts,
                                            panel_index=sub["panel_index"]))
        return panels

    # --- Tiers ---

    def classify(self, height: float):
        return classify_height(height, self.SIZE_TIERS)

    def tier_for(self, panels: list):
        return tier_for_panels(panels, self.SIZE_TIERS)

    # --- Pricing hooks (arithmetic lives in PricingEngine) ---

    def material_length_inches(self, panel: dict) -> float:
        """Dimension the material rate is priced along."""
        return panel["cut_width"]

    def material_rate(self, panel: dict, base_rate: float) -> float:
        """Rate per MATERIAL_UNIT from the looked-up base rate."""
        return base_rate

    def material_quantity(self, panel: dict) -> float:
        """How many MATERIAL_UNITs of material the panel uses."""
        return self.inches_to_feet(self.material_length_inches(panel))

    def material_minimum_applied(self, panel: dict) -> bool:
        return False

    def panel_adders(self, panel: dict) -> list:
        """Flat per-panel charges as (name, pricing_key) pairs."""
        return []

    def edge_length_inches(self, panel: dict, role: str) -> float:
        if role in ("top", "bottom"):
            return panel["cut_width"]
        return panel["cut_height"]

    def edge_rule(self, panel: dict, role: str) -> tuple:
        """(option value, pricing rule dict) for one edge of a panel."""
        if role == "top":
            option = panel["top_attachment"]
            return option, self.TOP_ATTACHMENTS[option]
        option = panel[f"{role}_edge"]
        return option, self.EDGE_ATTACHMENTS[option]

    def edge_cost(self, rule: dict, length_inches: float, price_lookup) -> Optional[float]:
        """
        Cost of one edge, or None when the edge requires a quote.
        A unit-priced part (stucco strip) whose key does not resolve is
        unknown, not free.
        """
        per_foot = rule.get("price_per_foot")
        if per_foot is None:
            return None
        cost = per_foot * self.inches_to_feet(length_inches)
        unit_key = rule.get("unit_price_key")
        if unit_key:
            unit_price = price_lookup(unit_key, 0.0)
            if unit_price <= 0:
                logger.warning("Unit price %s unresolved — edge needs quote", unit_key)
                return None
            cost += unit_price
        return round_money(cost)

    def secondary_required(self, panels: list, tier) -> bool:
        return bool(tier.has_secondary) and any(p.get("secondary_height", 0) > 0 for p in panels)

    # --- Catalog ---

    def describe(self) -> dict:
        """Options, layouts and tiers — what a builder UI needs to render."""
        return {
            "family": self.FAMILY,
            "label": self.LABEL,
            "materials": self.MATERIALS,
            "top_attachments": self.TOP_ATTACHMENTS,
            "edge_attachments": self.EDGE_ATTACHMENTS,
            "layouts": {
                key: {"label": layout.label, "panel_count": layout.panel_count,
                      "join": layout.join, "description": layout.description}
                for key, layout in self.SIDE_LAYOUTS.items()
            },
            "tiers": [
                {"name": t.name, "label": t.label, "range": t.range_label,
                 "rate_key": t.rate_key, "has_secondary": t.has_secondary}
                for t in self.SIZE_TIERS
            ],
            "overlap_inches": self.OVERLAP_INCHES,
            "min_raw_height": self.MIN_RAW_HEIGHT,
            "max_primary_height": self.MAX_PRIMARY_HEIGHT,
            "priced_edges": list(self.PRICED_EDGES),
            "material_unit": self.MATERIAL_UNIT,
        }

    # --- Helper methods ---

    def parse_inches(self, value, default: float = 0.0) -> float:
        """Parse an inches value from user input. Handles strings like '96', '96.5"'."""
        if value is None or isinstance(value, bool):
            return default
        try:
            parsed = float(str(value).strip().rstrip('"').rstrip("in").strip())
        except (ValueError, TypeError):
            return default
        return parsed if math.isfinite(parsed) else default

    def inches_to_feet(self, inches: float) -> float:
        """Convert inches to feet."""
        return inches / 12.0

"""
Raw netting panel calculator.

A raw netting panel is a length cut off a roll: the customer picks the
width, the roll width is the height. No attachment adjustments and no
overlap — the cut is exactly what was ordered. Each of the four edges gets
its own finish, priced per linear foot; webbing finishes are not
pre-priced and always need a quote.
"""

from .base import BasePanelCalculator
from .edge_finish import EDGE_FINISHES
from .size_tiers import RAW_NETTING_TIERS


def _finish_table(height_key: str) -> dict:
    table = {}
    for option_id, finish in EDGE_FINISHES.items():
        table[option_id] = {
            "label": finish.label,
            height_key: 0,
            "track": False,
            "price_per_foot": finish.price_per_foot,
            "group": finish.kind,
        }
    return table


# Pricing key abbreviations: raw_panel_{abbrev}_{roll_width}
MESH_KEY_ABBREV = {
    "heavy_mosquito": "hm",
    "no_see_um": "nsu",
    "shade": "shade",
    "theater_scrim": "scrim",
    "industrial": "ind",
}


class RawNettingCalculator(BasePanelCalculator):

    FAMILY = "raw_netting"
    LABEL = "Raw Netting Panels"

    OVERLAP_INCHES = 0
    MIN_RAW_HEIGHT = 1

    TOP_ATTACHMENTS = _finish_table("height_add")
    EDGE_ATTACHMENTS = _finish_table("width_add")

    MATERIALS = {
        "heavy_mosquito": {"label": "Heavy Mosquito", "colors": ["black", "white", "ivory"],
                           "roll_widths": [101, 123, 138]},
        "no_see_um": {"label": "No-See-Um", "colors": ["black", "white"], "roll_widths": [101, 123]},
        "shade": {"label": "Shade", "colors": ["black", "white"], "roll_widths": [120]},
        "theater_scrim": {"label": "Theater Scrim", "colors": ["white", "silver"], "roll_widths": [120, 140]},
        "industrial": {"label": "Industrial", "colors": ["olive_green"], "roll_widths": [65]},
    }

    DEFAULT_TOP = "binding_1in"
    DEFAULT_EDGE = "binding_1in"
    DEFAULT_MATERIAL = "heavy_mosquito"

    SIZE_TIERS = RAW_NETTING_TIERS

    PRICED_EDGES = ("top", "bottom", "left", "right")
    EDGE_ROLES = ("left", "right", "bottom")

    def normalize_options(self, options: dict) -> dict:
        options = dict(options or {})
        # Builder state names the top finish "top_edge"
        if not options.get("top_attachment") and options.get("top_edge"):
            options["top_attachment"] = options["top_edge"]
        normalized = super().normalize_options(options)
        material = self.MATERIALS[normalized["material"]]
        roll_width = normalized["roll_width"]
        if roll_width is None:
            roll_width = material["roll_widths"][0]
        try:
            roll_width = int(roll_width)
        except (TypeError, ValueError):
            raise ValueError(f"Roll width must be a number, got {roll_width!r}")
        if roll_width not in material["roll_widths"]:
            raise ValueError(
                f"{material['label']} is not made in a {roll_width}\" roll. "
                f"Available: {material['roll_widths']}"
            )
        normalized["roll_width"] = roll_width
        return normalized

    def raw_height_for(self, measurement: dict, options: dict) -> float:
        # Height is the roll width, whatever the measurement says
        return float(options["roll_width"])

    def material_key(self, panel: dict, tier) -> str:
        abbrev = MESH_KEY_ABBREV.get(panel["material"], panel["material"])
        return f"raw_panel_{abbrev}_{panel['roll_width']}"

    def material_length_inches(self, panel: dict) -> float:
        return panel["raw_width"]

    def edge_length_inches(self, panel: dict, role: str) -> float:
        # Top/bottom run the cut length, left/right run the roll width
        if role in ("top", "bottom"):
            return panel["raw_width"]
        return panel["raw_height"]

"""
Builder drafts — sanitation and storage.

Saved builder state can outlive the option sets it was written against.
Every draft is sanitized on load and on save: each field is type-checked,
and any value the builder no longer offers is replaced by a documented
fallback before it can reach a calculator.

Fallbacks:
  raw netting edge ids   -> legacy "binding_1in_grommets" / "binding_1in_velcro_grommets"
                            map to their 12" grommet versions, anything else -> "none"
  raw netting mesh type  -> heavy_mosquito
  raw netting roll/color -> first roll width / color offered for the mesh type
  side top/edges/layout  -> the family's default side state
  vinyl canvas color     -> tbd
  vinyl velcro color     -> black
"""

import logging
from datetime import datetime

from .calculators.edge_finish import EDGE_FINISHES
from .calculators.registry import get_calculator
from .config import settings
from .models import BuilderDraft

logger = logging.getLogger(__name__)

LEGACY_EDGE_IDS = {
    "binding_1in_grommets": "binding_1in_grommets_12",
    "binding_1in_velcro_grommets": "binding_1in_velcro_grommets_12",
}

RAW_EDGE_KEYS = ("top_edge", "right_edge", "bottom_edge", "left_edge")


def default_raw_netting_panel() -> dict:
    return {
        "mesh_type": "heavy_mosquito",
        "mesh_color": "black",
        "roll_width": 101,
        "width_inches": 120,
        "top_edge": "binding_1in",
        "right_edge": "binding_1in",
        "bottom_edge": "binding_1in",
        "left_edge": "binding_1in",
        "all_sides_same": True,
        "notes": "",
    }


def default_side_state(family: str) -> dict:
    if family == "clear_vinyl":
        return {
            "total_width_inches": 240, "left_height_inches": 96, "right_height_inches": 96,
            "layout": "2-zip", "top_attachment": "standard_track",
            "left_edge": "marine_snaps", "right_edge": "marine_snaps",
        }
    if family == "mesh":
        return {
            "total_width_inches": 96, "left_height_inches": 96, "right_height_inches": 96,
            "layout": "single", "top_attachment": "tracking",
            "left_edge": "marine_snaps", "right_edge": "marine_snaps",
        }
    raise ValueError(f"{family} drafts are not built from sides")


def sanitize_edge_id(value) -> str:
    """Map a stored edge id to a currently offered one."""
    if isinstance(value, str) and value in EDGE_FINISHES:
        return value
    if isinstance(value, str) and value in LEGACY_EDGE_IDS:
        return LEGACY_EDGE_IDS[value]
    logger.warning("Unknown raw netting edge id %r — using 'none'", value)
    return "none"


def _number(value, default):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return value


def _closed_choice(value, offered, fallback, label: str):
    if isinstance(value, str) and value in offered:
        return value
    if value is not None:
        logger.warning("Unknown %s %r — using %s", label, value, fallback)
    return fallback


def sanitize_raw_netting_panel(raw) -> dict:
    """Sanitize one stored raw netting panel, field by field."""
    if not isinstance(raw, dict):
        raw = {}
    default = default_raw_netting_panel()
    materials = get_calculator("raw_netting").MATERIALS

    mesh_type = raw.get("mesh_type")
    if mesh_type not in materials:
        if mesh_type is not None:
            logger.warning("Unknown mesh type %r — using %s", mesh_type, default["mesh_type"])
        mesh_type = default["mesh_type"]
    offered = materials[mesh_type]

    mesh_color = raw.get("mesh_color")
    if mesh_color not in offered["colors"]:
        if mesh_color is not None:
            logger.warning("%s is not offered in %r", mesh_type, mesh_color)
        mesh_color = offered["colors"][0]

    roll_width = _number(raw.get("roll_width"), None)
    if roll_width not in offered["roll_widths"]:
        if roll_width is not None:
            logger.warning("%s is not offered in a %r\" roll", mesh_type, roll_width)
        roll_width = offered["roll_widths"][0]

    panel = {
        "mesh_type": mesh_type,
        "mesh_color": mesh_color,
        "roll_width": roll_width,
        "width_inches": _number(raw.get("width_inches"), default["width_inches"]),
        "all_sides_same": raw["all_sides_same"] if isinstance(raw.get("all_sides_same"), bool)
        else default["all_sides_same"],
        "notes": raw["notes"] if isinstance(raw.get("notes"), str) else default["notes"],
    }
    for key in RAW_EDGE_KEYS:
        panel[key] = sanitize_edge_id(raw.get(key))
    return panel


def sanitize_side_state(raw, family: str) -> dict:
    """Sanitize one stored mesh / clear vinyl side."""
    if not isinstance(raw, dict):
        raw = {}
    calc = get_calculator(family)
    default = default_side_state(family)
    side = {}

    for key in ("total_width_inches", "left_height_inches", "right_height_inches"):
        value = raw.get(key)
        if isinstance(value, str):
            value = calc.parse_inches(value, default=None)
        side[key] = _number(value, default[key])

    checks = (
        ("layout", calc.SIDE_LAYOUTS),
        ("top_attachment", calc.TOP_ATTACHMENTS),
        ("left_edge", calc.EDGE_ATTACHMENTS),
        ("right_edge", calc.EDGE_ATTACHMENTS),
    )
    for key, offered in checks:
        value = raw.get(key)
        if value in offered:
            side[key] = value
        else:
            if value is not None:
                logger.warning("Unknown %s %s %r — using %s", family, key, value, default[key])
            side[key] = default[key]
    return side


def sanitize_draft(builder: str, payload) -> dict:
    """Sanitize a whole builder draft."""
    if not isinstance(payload, dict):
        payload = {}

    if builder == "raw_netting":
        panels = payload.get("panels")
        if not isinstance(panels, list) or not panels:
            panels = [default_raw_netting_panel()]
        return {"panels": [sanitize_raw_netting_panel(p) for p in panels]}

    calc = get_calculator(builder)  # unknown builder -> ValueError
    sides = payload.get("sides")
    if not isinstance(sides, list) or not sides:
        sides = [default_side_state(builder)]
    sides = sides[:settings.MAX_SIDES]
    draft = {"sides": [sanitize_side_state(s, builder) for s in sides]}

    if builder == "clear_vinyl":
        draft["canvas_color"] = _closed_choice(
            payload.get("canvas_color"), calc.CANVAS_COLORS, calc.DEFAULT_CANVAS_COLOR, "canvas color")
        draft["velcro_color"] = _closed_choice(
            payload.get("velcro_color"), calc.VELCRO_COLORS, calc.DEFAULT_VELCRO_COLOR, "velcro color")
    return draft


class DraftStore:
    """
    load()/save() for builder drafts, backed by the builder_drafts table.
    The pricing engine never calls this — routers load a draft, then compute.
    """

    def __init__(self, db):
        self.db = db

    def load(self, builder: str, draft_key: str):
        """Sanitized payload, or None if nothing is saved under this key."""
        row = self._get(builder, draft_key)
        if row is None:
            return None
        return sanitize_draft(builder, row.payload)

    def save(self, builder: str, draft_key: str, payload) -> dict:
        clean = sanitize_draft(builder, payload)
        row = self._get(builder, draft_key)
        if row is None:
            row = BuilderDraft(builder=builder, draft_key=draft_key, payload=clean)
            self.db.add(row)
        else:
            row.payload = clean
            row.updated_at = datetime.utcnow()
        self.db.commit()
        logger.debug("Saved %s draft %s", builder, draft_key)
        return clean

    def _get(self, builder: str, draft_key: str):
        return self.db.query(BuilderDraft).filter(
            BuilderDraft.builder == builder,
            BuilderDraft.draft_key == draft_key,
        ).first()


def raw_netting_panel_options(panel: dict) -> tuple:
    """(measurement, options) for a sanitized raw netting panel state."""
    measurement = {"width_inches": panel["width_inches"], "height_inches": panel["roll_width"]}
    options = {
        "family": "raw_netting",
        "material": panel["mesh_type"],
        "color": panel["mesh_color"],
        "roll_width": panel["roll_width"],
        "top_attachment": panel["top_edge"],
        "bottom_edge": panel["bottom_edge"],
        "left_edge": panel["left_edge"],
        "right_edge": panel["right_edge"],
    }
    return measurement, options


def upgrade_legacy_edge_ids(options: dict) -> dict:
    """
    Raw netting options with retired edge ids mapped to their replacements.
    Ids that were never offered are left alone for the calculator to reject.
    """
    upgraded = dict(options)
    for key in ("top_attachment", "top_edge", "left_edge", "right_edge", "bottom_edge"):
        value = upgraded.get(key)
        if isinstance(value, str) and value in LEGACY_EDGE_IDS:
            logger.warning("Legacy raw netting edge id %r — using %s", value, LEGACY_EDGE_IDS[value])
            upgraded[key] = LEGACY_EDGE_IDS[value]
    return upgraded

"""
Multi-panel splitter — divides one measured side into N physical panels.

Widths are an equal division of the side, each rounded on its own. The
rounding remainder is not redistributed, so the summed panel widths can
drift from the side width by up to N-1 inches.
"""

from dataclasses import dataclass

from .rounding import round_half_up


@dataclass(frozen=True)
class SideLayout:
    id: str
    label: str
    panel_count: int
    join: str           # edge attachment used at every interior join
    description: str = ""


def split_side(total_width: float, left_height: float, right_height: float,
               layout: SideLayout, outer_left: str, outer_right: str) -> list:
    """
    Split a side into layout.panel_count sub-panels.

    Returns a list of {"panel_index", "width", "height", "left_edge",
    "right_edge"} dicts, left to right. Returns [] when any measurement is
    missing or zero.
    """
    if not total_width or total_width <= 0:
        return []
    if not left_height or left_height <= 0 or not right_height or right_height <= 0:
        return []

    n = layout.panel_count
    panel_width = round_half_up(total_width / n)
    slope = right_height - left_height

    panels = []
    for i in range(n):
        center = (i + 0.5) / n
        panels.append({
            "panel_index": i,
            "width": panel_width,
            "height": round_half_up(left_height + slope * center),
            "left_edge": outer_left if i == 0 else layout.join,
            "right_edge": outer_right if i == n - 1 else layout.join,
        })
    return panels

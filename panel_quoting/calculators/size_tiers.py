"""
Size-tier classifier.

Tiers are declared as an ordered tuple of upper bounds. The last tier has no
upper bound, so every height maps to exactly one tier.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SizeTier:
    name: str
    label: str
    range_label: str
    upper_bound: Optional[float]      # None = unbounded (last tier)
    upper_inclusive: bool = False
    rate_key: Optional[str] = None    # pricing key for the per-linear-foot rate
    default_rate: float = 0.0         # seed value for the pricing table
    has_secondary: bool = False       # secondary/infill material eligible

    def contains_below(self, height: float) -> bool:
        if self.upper_bound is None:
            return True
        if self.upper_inclusive:
            return height <= self.upper_bound
        return height < self.upper_bound


# Clear vinyl: tallest raw height decides the tier for the whole order
CLEAR_VINYL_TIERS = (
    SizeTier("short", "Short", 'Under 48"', 48, upper_inclusive=False,
             rate_key="clear_vinyl_short", default_rate=28.0, has_secondary=False),
    SizeTier("medium", "Medium", '48" - 96"', 96, upper_inclusive=True,
             rate_key="clear_vinyl_medium", default_rate=34.0, has_secondary=True),
    SizeTier("tall", "Tall", 'Over 96"', None,
             rate_key="clear_vinyl_tall", default_rate=41.0, has_secondary=True),
)

MESH_TIERS = (
    SizeTier("standard", "Standard", "All heights", None),
)

RAW_NETTING_TIERS = (
    SizeTier("roll", "Cut from roll", "Roll width", None),
)


def classify_height(height: float, tiers: tuple) -> SizeTier:
    """Returns the first tier whose upper bound admits the height."""
    for tier in tiers:
        if tier.contains_below(height):
            return tier
    # registry runs validate_tiers at import, so the last tier is unbounded
    raise ValueError(f"No tier admits height {height}")


def tier_for_panels(panels: list, tiers: tuple) -> SizeTier:
    """Tier for a set of panels — classified on the maximum raw height."""
    max_height = max((p.get("raw_height", 0) for p in panels), default=0)
    return classify_height(max_height, tiers)


def validate_tiers(tiers: tuple) -> None:
    """Raise ValueError unless bounds ascend and only the last tier is unbounded."""
    if not tiers:
        raise ValueError("Tier table is empty")
    previous = None
    for tier in tiers[:-1]:
        if tier.upper_bound is None:
            raise ValueError(f"Tier {tier.name} is unbounded but not last")
        if previous is not None and tier.upper_bound <= previous:
            raise ValueError(f"Tier {tier.name} bound {tier.upper_bound} does not ascend")
        previous = tier.upper_bound
    if tiers[-1].upper_bound is not None:
        raise ValueError(f"Last tier {tiers[-1].name} must be unbounded")


def get_tier(name: str, tiers: tuple) -> Optional[SizeTier]:
    for tier in tiers:
        if tier.name == name:
            return tier
    return None

"""
Calculator registry — maps material family strings to calculator classes.

The family tables are checked once at import: a broken tier or layout table
fails loudly here instead of mispricing an order later.
"""

from .base import BasePanelCalculator
from .clear_vinyl import ClearVinylCalculator
from .mesh_panel import MeshPanelCalculator
from .raw_netting import RawNettingCalculator
from .size_tiers import validate_tiers

CALCULATOR_REGISTRY: dict[str, type] = {
    "mesh": MeshPanelCalculator,
    "clear_vinyl": ClearVinylCalculator,
    "raw_netting": RawNettingCalculator,
}


def get_calculator(family: str) -> BasePanelCalculator:
    """Returns an instance of the calculator for a family, or raises ValueError."""
    if family not in CALCULATOR_REGISTRY:
        raise ValueError(
            f"No calculator registered for material family: {family}. "
            f"Available: {list(CALCULATOR_REGISTRY.keys())}"
        )
    return CALCULATOR_REGISTRY[family]()


def has_calculator(family: str) -> bool:
    """Check if a calculator exists for a family."""
    return family in CALCULATOR_REGISTRY


def list_calculators() -> list[str]:
    """List all registered material families."""
    return list(CALCULATOR_REGISTRY.keys())


def validate_registry(registry: dict = None) -> None:
    """Raise ValueError if any family's tier or layout table is inconsistent."""
    registry = CALCULATOR_REGISTRY if registry is None else registry
    for family, calc_class in registry.items():
        try:
            validate_tiers(calc_class.SIZE_TIERS)
        except ValueError as e:
            raise ValueError(f"{family}: {e}")
        if calc_class.SIDE_LAYOUTS and calc_class.DEFAULT_LAYOUT not in calc_class.SIDE_LAYOUTS:
            raise ValueError(f"{family}: default layout {calc_class.DEFAULT_LAYOUT} is not declared")
        for layout_id, layout in calc_class.SIDE_LAYOUTS.items():
            if layout.panel_count < 1:
                raise ValueError(f"{family}: layout {layout_id} has no panels")
            if layout.join not in calc_class.EDGE_ATTACHMENTS:
                raise ValueError(f"{family}: layout {layout_id} joins with unknown edge {layout.join}")


def compute_panel(measurement: dict, options: dict):
    """Compute one PanelSpec. options["family"] picks the calculator."""
    return get_calculator(options.get("family", "")).compute_panel(measurement, options)


def compute_side(side: dict, family: str) -> list:
    """Compute every PanelSpec for one measured side."""
    return get_calculator(family).compute_side(side)


validate_registry()

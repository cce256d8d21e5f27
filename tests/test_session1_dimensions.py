"""
Session 1 acceptance tests — dimension calculator.

Tests:
1-4.   Worked examples (width with relaxed fit, height with fold-over)
5-8.   Breakdown terms, monotonicity, minimum cut size
9-11.  Clear vinyl 72" cap and canvas infill
12-15. Not-ready measurements and unknown options
16-18. Raw netting panels cut from the roll
"""

import itertools

import pytest

from panel_quoting.calculators.base import BasePanelCalculator
from panel_quoting.calculators.clear_vinyl import ClearVinylCalculator
from panel_quoting.calculators.mesh_panel import MeshPanelCalculator
from panel_quoting.calculators.raw_netting import RawNettingCalculator
from panel_quoting.calculators.registry import (
    compute_panel, get_calculator, has_calculator, list_calculators,
)
from panel_quoting.calculators.rounding import round_half_up


def _mesh_options(**overrides):
    options = {
        "family": "mesh",
        "material": "heavy_mosquito",
        "top_attachment": "tracking",
        "left_edge": "marine_snaps",
        "right_edge": "none",
    }
    options.update(overrides)
    return options


def _breakdown_sum(breakdown: dict) -> float:
    return sum(value for key, value in breakdown.items() if key != "total")


# ============================================================
# Worked examples
# ============================================================

def test_track_width_gets_relaxed_fit():
    """120" on tracking, snaps left (+1), none right → 120+1+0+1 = 122."""
    panel = compute_panel({"width_inches": 120, "height_inches": 96}, _mesh_options())
    assert panel["cut_width"] == 122
    assert panel["width_breakdown"]["relaxed_fit_add"] == 1
    assert panel["width_breakdown"]["left_edge_add"] == 1
    assert panel["width_breakdown"]["right_edge_add"] == 0


def test_velcro_height_adds_fold_over_and_overlap():
    """96" with velcro top (+2) and floor overlap (+2) → 100."""
    panel = compute_panel({"width_inches": 120, "height_inches": 96},
                          _mesh_options(top_attachment="velcro"))
    assert panel["cut_height"] == 100
    assert panel["height_breakdown"]["overlap_add"] == 2
    assert panel["height_breakdown"]["top_add"] == 2


def test_non_track_top_has_no_relaxed_fit():
    panel = compute_panel({"width_inches": 240, "height_inches": 96},
                          _mesh_options(top_attachment="velcro"))
    assert panel["width_breakdown"]["relaxed_fit_add"] == 0
    assert panel["cut_width"] == 241


def test_relaxed_fit_rounds_half_up():
    calc = MeshPanelCalculator()
    # 180 / 120 = 1.5 → 2, 179 / 120 = 1.49 → 1
    assert calc.calculate_dimensions(180, 96, "tracking", "none", "none")["cut_width"] == 182
    assert calc.calculate_dimensions(179, 96, "tracking", "none", "none")["cut_width"] == 180
    assert round_half_up(2.5) == 3
    assert round_half_up(0.49) == 0


# ============================================================
# Breakdown terms, monotonicity, minimum cut size
# ============================================================

@pytest.mark.parametrize("calc", [MeshPanelCalculator(), ClearVinylCalculator()])
def test_breakdown_terms_sum_to_total(calc):
    """Every option combination: breakdown terms add up to the cut size."""
    for top, left, right in itertools.product(
        calc.TOP_ATTACHMENTS, calc.EDGE_ATTACHMENTS, calc.EDGE_ATTACHMENTS,
    ):
        for width, height in [(1, 12), (59.5, 47.5), (120, 96), (173.3, 130.25)]:
            dims = calc.calculate_dimensions(width, height, top, left, right)
            assert _breakdown_sum(dims["width_breakdown"]) == pytest.approx(dims["cut_width"])
            assert _breakdown_sum(dims["height_breakdown"]) == pytest.approx(dims["cut_height"])
            assert dims["width_breakdown"]["total"] == dims["cut_width"]
            assert isinstance(dims["cut_width"], int)
            assert isinstance(dims["cut_height"], int)


def test_cut_width_monotonic_in_raw_width():
    calc = ClearVinylCalculator()
    previous = 0
    for width in range(1, 600):
        cut = calc.calculate_dimensions(width, 96, "standard_track", "marine_snaps", "zipper_door")["cut_width"]
        assert cut >= previous
        previous = cut


def test_cut_height_monotonic_in_raw_height():
    calc = MeshPanelCalculator()
    previous = 0
    for height in range(12, 300):
        cut = calc.calculate_dimensions(96, height, "velcro", "none", "none")["cut_height"]
        assert cut >= previous
        previous = cut


def test_cut_width_never_below_minimum():
    """Two stucco strips on a 1" panel would go negative — clamped to 1."""
    calc = MeshPanelCalculator()
    dims = calc.calculate_dimensions(1, 12, "velcro", "stucco_strip", "stucco_strip")
    assert dims["cut_width"] == 1
    assert dims["width_breakdown"]["floor_add"] == 2
    assert _breakdown_sum(dims["width_breakdown"]) == pytest.approx(1)


# ============================================================
# Clear vinyl cap and canvas infill
# ============================================================

def test_vinyl_under_cap_is_single_material():
    panel = compute_panel({"width_inches": 120, "height_inches": 60}, {"family": "clear_vinyl"})
    assert panel["primary_height"] == 60
    assert panel["secondary_height"] == 0


def test_vinyl_over_cap_splits_into_canvas():
    panel = compute_panel({"width_inches": 120, "height_inches": 100}, {"family": "clear_vinyl"})
    assert panel["primary_height"] == 72
    assert panel["secondary_height"] == 28
    assert panel["primary_height"] + panel["secondary_height"] == panel["raw_height"]


def test_mesh_has_no_secondary_layer():
    panel = compute_panel({"width_inches": 120, "height_inches": 140}, _mesh_options())
    assert panel["primary_height"] == 140
    assert panel["secondary_height"] == 0


# ============================================================
# Not-ready measurements and unknown options
# ============================================================

def test_missing_or_zero_measurement_is_not_ready():
    assert compute_panel({"width_inches": 0, "height_inches": 96}, _mesh_options()) is None
    assert compute_panel({"height_inches": 96}, _mesh_options()) is None
    assert compute_panel({"width_inches": 120}, _mesh_options()) is None
    assert compute_panel({"width_inches": "", "height_inches": "abc"}, _mesh_options()) is None


def test_height_below_minimum_is_not_ready():
    assert compute_panel({"width_inches": 120, "height_inches": 11}, _mesh_options()) is None
    assert compute_panel({"width_inches": 120, "height_inches": 12}, _mesh_options()) is not None


def test_string_measurements_are_parsed():
    panel = compute_panel({"width_inches": '120"', "height_inches": "96.5"}, _mesh_options())
    assert panel["raw_width"] == 120
    assert panel["raw_height"] == 96.5


def test_unknown_option_raises():
    with pytest.raises(ValueError, match="top attachment"):
        compute_panel({"width_inches": 120, "height_inches": 96},
                      _mesh_options(top_attachment="standard_track"))
    with pytest.raises(ValueError, match="left edge"):
        compute_panel({"width_inches": 120, "height_inches": 96},
                      _mesh_options(left_edge="zipper_door"))
    with pytest.raises(ValueError, match="material"):
        compute_panel({"width_inches": 120, "height_inches": 96},
                      _mesh_options(material="burlap"))
    with pytest.raises(ValueError, match="No calculator"):
        compute_panel({"width_inches": 120, "height_inches": 96}, {"family": "canvas"})


def test_defaults_fill_missing_options():
    panel = compute_panel({"width_inches": 120, "height_inches": 96}, {"family": "clear_vinyl"})
    assert panel["top_attachment"] == "standard_track"
    assert panel["left_edge"] == "marine_snaps"
    assert panel["right_edge"] == "marine_snaps"
    assert panel["material"] == "clear_vinyl"
    assert panel["bottom_edge"] is None


# ============================================================
# Raw netting
# ============================================================

def test_raw_netting_height_is_roll_width():
    panel = compute_panel(
        {"width_inches": 120, "height_inches": 50},
        {"family": "raw_netting", "material": "heavy_mosquito", "roll_width": 123},
    )
    assert panel["raw_height"] == 123
    assert panel["cut_height"] == 123
    assert panel["cut_width"] == 120
    assert panel["bottom_edge"] == "binding_1in"


def test_raw_netting_roll_width_must_be_offered():
    with pytest.raises(ValueError, match="roll"):
        compute_panel({"width_inches": 120},
                      {"family": "raw_netting", "material": "heavy_mosquito", "roll_width": 140})


def test_raw_netting_defaults_to_first_roll_width():
    panel = compute_panel({"width_inches": 60}, {"family": "raw_netting", "material": "theater_scrim"})
    assert panel["roll_width"] == 120
    assert panel["raw_height"] == 120


def test_raw_netting_accepts_top_edge_name():
    calc = RawNettingCalculator()
    normalized = calc.normalize_options({"top_edge": "webbing_3in_12"})
    assert normalized["top_attachment"] == "webbing_3in_12"


# ============================================================
# Registry
# ============================================================

def test_registry_lists_all_families():
    assert set(list_calculators()) == {"mesh", "clear_vinyl", "raw_netting"}
    assert has_calculator("mesh")
    assert not has_calculator("canvas")
    for family in list_calculators():
        assert isinstance(get_calculator(family), BasePanelCalculator)


def test_describe_lists_options_and_tiers():
    info = get_calculator("clear_vinyl").describe()
    assert info["max_primary_height"] == 72
    assert "2-zip" in info["layouts"]
    assert [t["name"] for t in info["tiers"]] == ["short", "medium", "tall"]

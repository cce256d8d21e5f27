"""
Price Aggregator — prices PanelSpecs and rolls them up into an order.

Pure math. Material rate × quantity (linear feet, or sqft for mesh), plus one
cost per priced edge and any flat per-panel adders (tracking, doors).
Any unknown cost (unresolved rate, edge or adder that needs a quote) makes
the panel total None, and any None panel total makes the order total None.
Unknown is never rounded down to $0.

Input: list of PanelSpec dicts + a price lookup callable
Output: PricedOrder dict
"""

import logging
from typing import Optional

from .calculators.registry import get_calculator
from .calculators.rounding import round_money
from .models import OrderStatus, SubmissionPath

logger = logging.getLogger(__name__)


class OrderNotReadyError(ValueError):
    """Raised when an order is submitted down a path its status does not allow."""


# Which submission path each status may take
ALLOWED_PATHS = {
    OrderStatus.PRICED: SubmissionPath.ORDER_NOW,
    OrderStatus.NEEDS_QUOTE: SubmissionPath.QUOTE_REVIEW,
}


class PricingEngine:
    """
    Assembles the priced order from computed panels.

    price_lookup: callable (key, fallback=0.0) -> float. Must not raise.
    """

    def __init__(self, price_lookup):
        self.price_lookup = price_lookup

    def build_priced_order(self, panels: list, pending_sides: int = 0) -> dict:
        """
        Price every panel and total the order.

        Args:
            panels: PanelSpec dicts from compute_panel / compute_side
            pending_sides: sides the customer started but has not measured

        Returns:
            {
                "panels": [PriceBreakdown, ...],   # same order as input
                "order_total": float | None,
                "needs_quote": bool,
                "status": OrderStatus value,
                "submission_path": SubmissionPath value | None,
                "tiers": {family: {...}},
                "panel_count": int,
                "pending_sides": int,
                "assumptions": [str, ...],
            }
        """
        tiers = self._resolve_tiers(panels)

        priced = [
            self.price_panel(panel, tiers[panel["family"]]["tier"])
            for panel in panels
        ]
        order_total = self._calculate_order_total(priced)
        needs_quote = any(p["panel_total"] is None for p in priced)
        status = resolve_order_status(len(panels), pending_sides, order_total)
        path = submission_path_for(status)

        if needs_quote:
            logger.info("Order with %d panels needs a quote (%d unpriced)",
                        len(priced), sum(1 for p in priced if p["panel_total"] is None))

        return {
            "panels": priced,
            "order_total": order_total,
            "needs_quote": needs_quote,
            "status": status.value,
            "submission_path": path.value if path else None,
            "tiers": {
                family: {key: value for key, value in info.items() if key != "tier"}
                for family, info in tiers.items()
            },
            "panel_count": len(priced),
            "pending_sides": pending_sides,
            "assumptions": self._build_assumptions(priced, tiers),
        }

    def price_panel(self, panel: dict, tier) -> dict:
        """
        PriceBreakdown for one panel.

        material_cost = material_rate × material_quantity, in the family's
                        MATERIAL_UNIT (linear feet, or sqft for mesh)
        panel_total   = material_cost + sum(edge_costs) + sum(adders), or None
                        if any part is unknown
        """
        calc = get_calculator(panel["family"])

        material_key = calc.material_key(panel, tier)
        base_rate = self.price_lookup(material_key, 0.0)
        rate_resolved = base_rate > 0
        quantity = calc.material_quantity(panel)
        rate = calc.material_rate(panel, base_rate) if rate_resolved else None
        material_cost = round_money(rate * quantity) if rate_resolved else None

        edges = []
        for role in calc.PRICED_EDGES:
            option, rule = calc.edge_rule(panel, role)
            edge_length = calc.edge_length_inches(panel, role)
            edges.append({
                "role": role,
                "option": option,
                "length_inches": edge_length,
                "cost": calc.edge_cost(rule, edge_length, self.price_lookup),
            })
        edge_costs = [e["cost"] for e in edges]
        edge_total = self._sum_known(edge_costs)

        adders = []
        for name, key in calc.panel_adders(panel):
            price = self.price_lookup(key, 0.0)
            adders.append({"name": name, "pricing_key": key,
                           "cost": round_money(price) if price > 0 else None})
        adder_total = self._sum_known([a["cost"] for a in adders])

        quote_reasons = []
        if not rate_resolved:
            logger.warning("No rate for pricing key %s — panel needs quote", material_key)
            quote_reasons.append(f"No price on file for {material_key}")
        for edge in edges:
            if edge["cost"] is None:
                quote_reasons.append(f"{edge['role'].capitalize()} edge '{edge['option']}' requires a quote")
        for adder in adders:
            if adder["cost"] is None:
                logger.warning("No price for pricing key %s — panel needs quote", adder["pricing_key"])
                quote_reasons.append(f"No price on file for {adder['pricing_key']}")

        panel_total = None
        if rate_resolved and edge_total is not None and adder_total is not None:
            panel_total = round_money(material_cost + edge_total + adder_total)

        return {
            "family": panel["family"],
            "side": panel.get("side"),
            "panel_index": panel.get("panel_index", 0),
            "cut_width": panel["cut_width"],
            "cut_height": panel["cut_height"],
            "tier": tier.name,
            "material_key": material_key,
            "material_rate": round_money(rate) if rate_resolved else None,
            "material_unit": calc.MATERIAL_UNIT,
            "material_quantity": round(quantity, 4),
            "material_minimum_applied": calc.material_minimum_applied(panel),
            "material_cost": material_cost,
            "edges": edges,
            "edge_costs": edge_costs,
            "edge_total": edge_total,
            "adders": adders,
            "adder_total": adder_total,
            "panel_total": panel_total,
            "needs_quote": panel_total is None,
            "quote_reasons": quote_reasons,
        }

    def _resolve_tiers(self, panels: list) -> dict:
        """One tier per family, classified on that family's tallest raw height."""
        by_family = {}
        for panel in panels:
            by_family.setdefault(panel["family"], []).append(panel)

        tiers = {}
        for family, family_panels in by_family.items():
            calc = get_calculator(family)
            tier = calc.tier_for(family_panels)
            tiers[family] = {
                "tier": tier,
                "name": tier.name,
                "label": tier.label,
                "range": tier.range_label,
                "rate_key": tier.rate_key,
                "max_raw_height": max(p["raw_height"] for p in family_panels),
                "secondary_required": calc.secondary_required(family_panels, tier),
            }
        return tiers

    def _sum_known(self, costs: list) -> Optional[float]:
        """Sum of costs, or None if any cost is None."""
        if any(c is None for c in costs):
            return None
        return round_money(sum(costs))

    def _calculate_order_total(self, priced_panels: list) -> Optional[float]:
        if not priced_panels:
            return None
        return self._sum_known([p["panel_total"] for p in priced_panels])

    def _build_assumptions(self, priced_panels: list, tiers: dict) -> list:
        assumptions = []
        for family, info in tiers.items():
            if info["rate_key"]:
                assumptions.append(
                    f"{family} size tier {info['label']} ({info['range']}) from tallest "
                    f"measured height {info['max_raw_height']}\"."
                )
            if info["secondary_required"]:
                assumptions.append(
                    f"{family}: panels taller than the vinyl cap are filled with canvas — "
                    f"canvas color must be selected."
                )
        minimum = sum(1 for p in priced_panels if p["material_minimum_applied"])
        if minimum:
            assumptions.append(f"{minimum} panel(s) priced at the minimum square footage.")
        unpriced = sum(1 for p in priced_panels if p["panel_total"] is None)
        if unpriced:
            assumptions.append(
                f"{unpriced} panel(s) include options without a set price — "
                f"order goes to our team for a custom quote."
            )
        return assumptions


def compute_order(panel_specs: list, price_lookup, pending_sides: int = 0) -> dict:
    """Price an order. See PricingEngine.build_priced_order."""
    return PricingEngine(price_lookup).build_priced_order(panel_specs, pending_sides=pending_sides)


def resolve_order_status(panel_count: int, pending_sides: int,
                         order_total: Optional[float]) -> OrderStatus:
    """
    Unconfigured -> Partially Configured -> Priced | NeedsQuote.
    Submitted is only reached through submit_order().
    """
    if panel_count == 0 and pending_sides == 0:
        return OrderStatus.UNCONFIGURED
    if pending_sides > 0 or panel_count == 0:
        return OrderStatus.PARTIALLY_CONFIGURED
    if order_total is None:
        return OrderStatus.NEEDS_QUOTE
    return OrderStatus.PRICED


def submission_path_for(status: OrderStatus) -> Optional[SubmissionPath]:
    return ALLOWED_PATHS.get(status)


def submit_order(priced_order: dict, path: SubmissionPath) -> dict:
    """
    Move a priced order to Submitted.

    Priced orders go straight to order_now; orders that need a quote go to
    quote_review. Any other combination raises OrderNotReadyError.
    """
    status = OrderStatus(priced_order["status"])
    allowed = submission_path_for(status)
    path = SubmissionPath(path)
    if allowed is None:
        raise OrderNotReadyError(f"Order is {status.value} — nothing to submit yet")
    if path != allowed:
        raise OrderNotReadyError(
            f"Order is {status.value} — submit via {allowed.value}, not {path.value}"
        )
    submitted = dict(priced_order)
    submitted["status"] = OrderStatus.SUBMITTED.value
    submitted["submitted_via"] = path.value
    return submitted

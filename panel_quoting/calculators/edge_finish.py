"""
Raw netting edge finishes.

Option ids like "binding_1in_velcro_grommets_12" pack several attributes
into one string. parse_edge_finish() turns them into an EdgeFinish at the
boundary; everything downstream works with the structured form.
"""

import re
from dataclasses import dataclass
from typing import Optional, Union

FIVE_EQUAL = "five-equal"

GROMMET_SPACINGS = (6, 12, 24)

# Per-linear-foot rates. None = not pre-priced, requires a quote.
BINDING_PER_FOOT = 1.00
BINDING_VELCRO_PER_FOOT = 1.50
WEBBING_PER_FOOT = None

WEBBING_WIDTHS = (3, 4, 6)

_BINDING_RE = re.compile(r"^binding_(\d+)in(_velcro)?(?:_grommets_(\d+|5eq))?$")
_WEBBING_RE = re.compile(r"^webbing_(\d+)in_(\d+|5eq)$")


@dataclass(frozen=True)
class EdgeFinish:
    kind: str                                   # 'none' | 'binding' | 'webbing'
    width_in: int = 0
    grommet_spacing: Union[int, str, None] = None   # inches, FIVE_EQUAL, or None
    has_velcro: bool = False

    @property
    def price_per_foot(self) -> Optional[float]:
        if self.kind == "none":
            return 0.0
        if self.kind == "webbing":
            return WEBBING_PER_FOOT
        return BINDING_VELCRO_PER_FOOT if self.has_velcro else BINDING_PER_FOOT

    @property
    def label(self) -> str:
        if self.kind == "none":
            return "None (raw edge)"
        if self.kind == "webbing":
            return f'{self.width_in}" Webbing — {_grommet_label(self.grommet_spacing)}'
        base = f'{self.width_in}" Binding'
        if self.has_velcro and self.grommet_spacing is not None:
            return f"{base} + Velcro — {_grommet_label(self.grommet_spacing)}"
        if self.has_velcro:
            return f"{base} with Velcro"
        if self.grommet_spacing is not None:
            return f"{base} — {_grommet_label(self.grommet_spacing)}"
        return base

    @property
    def option_id(self) -> str:
        if self.kind == "none":
            return "none"
        spacing = _spacing_token(self.grommet_spacing)
        if self.kind == "webbing":
            return f"webbing_{self.width_in}in_{spacing}"
        option_id = f"binding_{self.width_in}in"
        if self.has_velcro:
            option_id += "_velcro"
        if spacing:
            option_id += f"_grommets_{spacing}"
        return option_id


def _spacing_token(spacing) -> str:
    if spacing is None:
        return ""
    if spacing == FIVE_EQUAL:
        return "5eq"
    return str(spacing)


def _parse_spacing(token: Optional[str]):
    if token is None:
        return None
    if token == "5eq":
        return FIVE_EQUAL
    return int(token)


def _grommet_label(spacing) -> str:
    if spacing == FIVE_EQUAL:
        return "5 Equally Spaced Grommets"
    return f'Grommets every {spacing}"'


def parse_edge_finish(option_id: str) -> Optional[EdgeFinish]:
    """
    Parse an edge option id into an EdgeFinish.
    Returns None for ids that are not part of the offered set.
    """
    if option_id == "none":
        return EdgeFinish(kind="none")
    if not isinstance(option_id, str):
        return None

    match = _BINDING_RE.match(option_id)
    if match:
        width_in = int(match.group(1))
        spacing = _parse_spacing(match.group(3))
        if width_in != 1:
            return None
        if spacing not in (None, FIVE_EQUAL) and spacing not in GROMMET_SPACINGS:
            return None
        return EdgeFinish(kind="binding", width_in=width_in,
                          grommet_spacing=spacing, has_velcro=bool(match.group(2)))

    match = _WEBBING_RE.match(option_id)
    if match:
        width_in = int(match.group(1))
        spacing = _parse_spacing(match.group(2))
        if width_in not in WEBBING_WIDTHS:
            return None
        if spacing != FIVE_EQUAL and spacing not in GROMMET_SPACINGS:
            return None
        return EdgeFinish(kind="webbing", width_in=width_in, grommet_spacing=spacing)

    return None


def _all_finishes() -> list:
    finishes = [EdgeFinish(kind="none"), EdgeFinish(kind="binding", width_in=1)]
    for spacing in GROMMET_SPACINGS + (FIVE_EQUAL,):
        finishes.append(EdgeFinish(kind="binding", width_in=1, grommet_spacing=spacing))
    finishes.append(EdgeFinish(kind="binding", width_in=1, has_velcro=True))
    for spacing in GROMMET_SPACINGS + (FIVE_EQUAL,):
        finishes.append(EdgeFinish(kind="binding", width_in=1, grommet_spacing=spacing,
                                   has_velcro=True))
    for width_in in WEBBING_WIDTHS:
        for spacing in GROMMET_SPACINGS + (FIVE_EQUAL,):
            finishes.append(EdgeFinish(kind="webbing", width_in=width_in, grommet_spacing=spacing))
    return finishes


EDGE_FINISHES = {f.option_id: f for f in _all_finishes()}

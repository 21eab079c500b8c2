"""
Layer selection: picks the next layer of a pallet.

Every distinct orientation height that still fits under the remaining height
budget is packed into a candidate layer. Candidates are filtered in tiers,
each used only when the previous one is empty:

  1. perfectly divisible layers (full footprint, height divides what is left)
  2. perfect-fit layers (full footprint)
  3. all candidates

and the chosen tier is ranked by efficiency, then waste, then height, then
weight.
"""

import logging
from typing import List, Optional, Sequence

from pallet_planner.algorithms.evaluator import LayerCandidate, build_candidate
from pallet_planner.config import DIMENSION_PRECISION, PalletConfig
from pallet_planner.core.models import PackingItem

logger = logging.getLogger(__name__)


def candidate_heights(
    items: Sequence[PackingItem],
    remaining_height: float,
    tolerance: float,
) -> List[float]:
    """Distinct achievable orientation heights, tallest first."""
    heights: dict = {}
    for item in items:
        if item.remaining <= 0:
            continue
        for option in item.orientations:
            if option.height > remaining_height + tolerance:
                continue
            key = round(option.height, DIMENSION_PRECISION)
            heights.setdefault(key, option.height)
    return [heights[k] for k in sorted(heights, reverse=True)]


def choose_candidate(candidates: Sequence[LayerCandidate]) -> Optional[LayerCandidate]:
    """Apply the tier filter and ranking; None for no candidates."""
    if not candidates:
        return None
    tier = [c for c in candidates if c.perfectly_divisible]
    if not tier:
        tier = [c for c in candidates if c.perfect_fit]
    if not tier:
        tier = list(candidates)
    return min(tier, key=LayerCandidate.rank_key)


def select_layer(
    items: Sequence[PackingItem],
    remaining_height: float,
    remaining_weight_lbs: float,
    config: PalletConfig,
) -> Optional[LayerCandidate]:
    """
    Best next layer for the current pallet.

    Returns None when no height yields a layer, which means the pallet is
    complete.
    """
    candidates: List[LayerCandidate] = []
    for height in candidate_heights(items, remaining_height, config.tolerance):
        candidate = build_candidate(
            height, items, remaining_height, remaining_weight_lbs, config,
        )
        if candidate is not None:
            candidates.append(candidate)

    best = choose_candidate(candidates)
    if best is not None:
        logger.debug(
            "Selected layer h=%.3f from %d candidate(s): eff=%.3f fit=%s divisible=%s",
            best.height, len(candidates), best.efficiency,
            best.perfect_fit, best.perfectly_divisible,
        )
    return best

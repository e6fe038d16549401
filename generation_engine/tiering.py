"""Tier classification and grouping of extracted ideas."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from .models import EXCELLENT_THRESHOLD, GOOD_THRESHOLD, IdeaRecord, Tier

logger = logging.getLogger(__name__)


def tier_for_total(total: Optional[int]) -> Tier:
    """Map a total score onto its tier; a missing total counts as Normal."""
    if total is None:
        return Tier.NORMAL
    if total >= EXCELLENT_THRESHOLD:
        return Tier.EXCELLENT
    if total >= GOOD_THRESHOLD:
        return Tier.GOOD
    return Tier.NORMAL


def classify(ideas: Iterable[IdeaRecord]) -> List[IdeaRecord]:
    """Return copies of *ideas* with ``tier`` attached, in input order."""
    classified: List[IdeaRecord] = []
    for idea in ideas:
        if idea.scores.total is None:
            logger.warning(f"'{idea.product_name or idea.topic}' has no usable total score, treating as normal")
        elif not idea.scores.is_consistent:
            logger.warning(
                f"'{idea.product_name or idea.topic}' total {idea.scores.total} "
                f"differs from sub-score sum {idea.scores.component_sum}"
            )
        classified.append(idea.model_copy(update={"tier": tier_for_total(idea.scores.total)}))
    return classified


def group_by_tier(ideas: Iterable[IdeaRecord]) -> Dict[Tier, List[IdeaRecord]]:
    """Group classified ideas by tier.

    Keys follow tier order (Excellent, Good, Normal) and empty tiers are
    omitted. Ideas without a tier are classified on the fly.
    """
    buckets: Dict[Tier, List[IdeaRecord]] = {tier: [] for tier in Tier}
    for idea in ideas:
        tier = idea.tier if idea.tier is not None else tier_for_total(idea.scores.total)
        buckets[tier].append(idea)
    return {tier: members for tier, members in buckets.items() if members}

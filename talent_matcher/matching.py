# talent_matcher/matching.py
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, Mapping, Optional, Sequence

from talent_matcher.config import DEFAULT_CONFIG, EngineConfig, RecommendationThresholds, WeightTable
from talent_matcher.models import (
    BreakdownEntry,
    Dimension,
    MatchResult,
    RankedMatch,
    Recommendation,
)
from talent_matcher.normalize import (
    OpportunityInput,
    TalentInput,
    normalize_opportunity,
    normalize_talent,
)
from talent_matcher.scoring import score_dimensions
from talent_matcher.utils import clamp, round_half_up

logger = logging.getLogger(__name__)


# ----------------------------
# Aggregation
# ----------------------------

def recommend(score: int, thresholds: RecommendationThresholds) -> Recommendation:
    if score >= thresholds.strong:
        return Recommendation.STRONG
    if score >= thresholds.good:
        return Recommendation.GOOD
    if score >= thresholds.moderate:
        return Recommendation.MODERATE
    return Recommendation.WEAK


def aggregate(
    dimension_scores: Mapping[Dimension, float],
    weight_table: WeightTable,
    thresholds: Optional[RecommendationThresholds] = None,
    neutral_score: float = 50.0,
) -> MatchResult:
    """
    Weighted sum of sub-scores. The breakdown always lists every configured
    dimension in canonical order; a configured dimension without a sub-score
    counts as `neutral_score`.
    """
    thresholds = thresholds or RecommendationThresholds()

    breakdown: List[BreakdownEntry] = []
    for dim in weight_table.dimensions():
        score = clamp(float(dimension_scores.get(dim, neutral_score)))
        weight = weight_table.weight(dim)
        breakdown.append(
            BreakdownEntry(dimension=dim, score=score, weight=weight, weighted_score=score * weight)
        )

    total = sum(b.weighted_score for b in breakdown)
    overall = int(clamp(round_half_up(total)))

    return MatchResult(
        overall_score=overall,
        breakdown=breakdown,
        recommendation=recommend(overall, thresholds),
    )


def calculate_match(
    talent: TalentInput,
    opportunity: OpportunityInput,
    config: Optional[EngineConfig] = None,
) -> MatchResult:
    """
    Score one talent against one opportunity. Accepts raw records or
    normalized profiles; never raises on incomplete data.
    """
    cfg = config or DEFAULT_CONFIG
    t = normalize_talent(talent)
    o = normalize_opportunity(opportunity)

    scores = score_dimensions(t, o, cfg.scoring, cfg.weights.dimensions())
    result = aggregate(
        scores,
        cfg.weights,
        thresholds=cfg.recommendation,
        neutral_score=cfg.scoring.neutral_score,
    )
    logger.debug("Match talent=%s opportunity=%s -> %d", t.id, o.id, result.overall_score)
    return result


# ----------------------------
# Batch ranking
# ----------------------------

def _rank(
    subjects: Sequence[Any],
    score_one: Callable[[Any], MatchResult],
    limit: Optional[int],
    workers: Optional[int],
) -> List[RankedMatch]:
    if workers and workers > 1 and len(subjects) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            matches = list(pool.map(score_one, subjects))
    else:
        matches = [score_one(s) for s in subjects]

    ranked = [RankedMatch(subject=s, match=m) for s, m in zip(subjects, matches)]
    # sort is stable: ties keep input order
    ranked.sort(key=lambda r: r.match.overall_score, reverse=True)
    return ranked[:limit] if limit is not None else ranked


def find_top_matches(
    talent: TalentInput,
    opportunities: Sequence[OpportunityInput],
    limit: Optional[int] = 10,
    config: Optional[EngineConfig] = None,
    workers: Optional[int] = None,
) -> List[RankedMatch]:
    """Best opportunities for one talent."""
    t = normalize_talent(talent)
    return _rank(opportunities, lambda o: calculate_match(t, o, config), limit, workers)


def find_top_candidates(
    opportunity: OpportunityInput,
    talents: Sequence[TalentInput],
    limit: Optional[int] = 10,
    config: Optional[EngineConfig] = None,
    workers: Optional[int] = None,
) -> List[RankedMatch]:
    """Best talents for one opportunity."""
    o = normalize_opportunity(opportunity)
    return _rank(talents, lambda t: calculate_match(t, o, config), limit, workers)

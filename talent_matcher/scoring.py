# talent_matcher/scoring.py
"""
One pure scorer per match dimension: (talent, opportunity, params) -> 0..100.

Scorers never look at each other's output and never raise. Each one states
what it returns when its inputs are absent.
"""
from typing import Callable, Dict, FrozenSet, Iterable, Mapping, Optional

from talent_matcher.config import ScoringParams
from talent_matcher.models import (
    AssessmentDimension,
    Dimension,
    Location,
    Mobility,
    OpportunityProfile,
    RoleLevel,
    TalentProfile,
)
from talent_matcher.utils import clamp

Scorer = Callable[[TalentProfile, OpportunityProfile, ScoringParams], float]


# ----------------------------
# Role level
# ----------------------------

def role_level_distance(level: RoleLevel, accepted: Iterable[RoleLevel]) -> Optional[int]:
    gaps = [abs(level.rank - a.rank) for a in accepted]
    return min(gaps) if gaps else None


def role_level_fit(talent: TalentProfile, opportunity: OpportunityProfile, params: ScoringParams) -> float:
    """
    100 when the opportunity's level is one the talent targets, otherwise
    100 - distance * step against the nearest accepted level.
    Without targets the talent's current level is the only accepted level.
    """
    level = opportunity.role_level
    if level is None:
        return params.neutral_score

    accepted: FrozenSet[RoleLevel] = talent.preferences.target_role_levels
    if not accepted and talent.role_level is not None:
        accepted = frozenset({talent.role_level})
    if level in accepted:
        return 100.0

    distance = role_level_distance(level, accepted)
    if distance is None:
        return params.neutral_score
    return max(0.0, 100.0 - distance * params.role_level_step)


# ----------------------------
# Geography
# ----------------------------

def _in_target_locations(opp: Location, targets: Iterable[str]) -> bool:
    if opp.city is None:
        return False
    # targets may be "city" or "city, country"
    return any(t.split(",")[0].strip() == opp.city for t in targets)


def geography_fit(talent: TalentProfile, opportunity: OpportunityProfile, params: ScoringParams) -> float:
    opp = opportunity.location
    if opp.is_absent:
        return 100.0  # no location constraint

    if _in_target_locations(opp, talent.preferences.target_locations):
        return 100.0

    here = talent.location
    if here.is_absent:
        return params.neutral_score

    if here.city is not None and here.city == opp.city:
        return 100.0

    mobility = talent.preferences.mobility
    if mobility is Mobility.LOCAL:
        return 0.0

    same_country = here.country is not None and here.country == opp.country
    if same_country:
        return params.same_country_score
    if mobility is Mobility.INTERNATIONAL:
        return params.same_country_score
    return params.cross_country_score


# ----------------------------
# Division
# ----------------------------

def jaccard(a: FrozenSet[str], b: FrozenSet[str]) -> float:
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def division_fit(talent: TalentProfile, opportunity: OpportunityProfile, params: ScoringParams) -> float:
    if opportunity.division is None:
        return 100.0  # no division requirement
    if not talent.divisions:
        return 0.0
    return 100.0 * jaccard(talent.divisions, frozenset({opportunity.division}))


# ----------------------------
# Experience
# ----------------------------

def experience_fit(talent: TalentProfile, opportunity: OpportunityProfile, params: ScoringParams) -> float:
    required = opportunity.required_experience_years
    if required is None or required <= 0:
        return 100.0
    years = talent.years_experience
    if years is None:
        return params.neutral_score
    return clamp(100.0 * min(1.0, years / required))


# ----------------------------
# Languages
# ----------------------------

def language_fit(talent: TalentProfile, opportunity: OpportunityProfile, params: ScoringParams) -> float:
    required = opportunity.required_languages
    if not required:
        return 100.0
    covered = len(talent.languages & required)
    return 100.0 * covered / len(required)


# ----------------------------
# Assessment
# ----------------------------

def assessment_targets(opportunity: OpportunityProfile, params: ScoringParams) -> Dict[AssessmentDimension, float]:
    """
    Explicit competency thresholds win; otherwise the emphasis implied by
    the opportunity's level band and division.
    """
    explicit = {d: t for d, t in opportunity.required_competencies.items() if t > 0}
    if explicit:
        return explicit
    return params.assessment_emphasis.targets_for(opportunity.role_level, opportunity.division)


def _component(score: Optional[float], target: float, neutral: float) -> float:
    if score is None:
        return neutral
    return 100.0 * min(1.0, score / target)


def assessment_fit(talent: TalentProfile, opportunity: OpportunityProfile, params: ScoringParams) -> float:
    scores: Mapping[AssessmentDimension, float] = talent.assessment_scores
    if not scores:
        return params.neutral_score

    targets = assessment_targets(opportunity, params)
    if not targets:
        return params.neutral_score

    # fixed iteration order keeps the float sum reproducible
    parts = [
        _component(scores.get(dim), targets[dim], params.neutral_score)
        for dim in AssessmentDimension
        if dim in targets
    ]
    return clamp(sum(parts) / len(parts))


SCORERS: Dict[Dimension, Scorer] = {
    Dimension.ROLE_LEVEL: role_level_fit,
    Dimension.GEOGRAPHY: geography_fit,
    Dimension.DIVISION: division_fit,
    Dimension.EXPERIENCE: experience_fit,
    Dimension.LANGUAGE: language_fit,
    Dimension.ASSESSMENT: assessment_fit,
}


def score_dimensions(
    talent: TalentProfile,
    opportunity: OpportunityProfile,
    params: ScoringParams,
    dimensions: Optional[Iterable[Dimension]] = None,
) -> Dict[Dimension, float]:
    dims = list(dimensions) if dimensions is not None else list(Dimension)
    return {d: SCORERS[d](talent, opportunity, params) for d in dims}

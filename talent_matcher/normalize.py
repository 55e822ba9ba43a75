# talent_matcher/normalize.py
"""
Raw talent/opportunity records -> canonical profiles.

Records arrive as mappings shaped like the marketplace's storage rows. Nothing
here raises on bad data: unknown enum values become None/UNKNOWN, unparsable
numbers become None, and free text is trimmed and lower-cased.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, FrozenSet, Mapping, Optional, Union

from talent_matcher.currency import parse_currency
from talent_matcher.locations import build_location, parse_location
from talent_matcher.models import (
    AssessmentDimension,
    CareerPreferences,
    CompensationBudget,
    CompensationExpectation,
    Location,
    Mobility,
    OpportunityProfile,
    RoleLevel,
    TalentProfile,
)
from talent_matcher.utils import clamp, normalize_text, optional_text, parse_number, unique_lower

logger = logging.getLogger(__name__)

TalentInput = Union[TalentProfile, Mapping[str, Any]]
OpportunityInput = Union[OpportunityProfile, Mapping[str, Any]]

# Assessment summaries store two axes under shorter names.
_ASSESSMENT_ALIASES = {
    "clienteling": AssessmentDimension.CLIENTELING_MASTERY,
    "cultural_fluency": AssessmentDimension.CULTURAL_ALIGNMENT,
}


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        v = raw.get(k)
        if v is not None:
            return v
    return None


def _id(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    s = str(value).strip()
    return s or None


def parse_role_level(value: Any) -> Optional[RoleLevel]:
    if not isinstance(value, str):
        return None
    v = value.strip().upper()
    try:
        return RoleLevel(v)
    except ValueError:
        if v:
            logger.debug("Unrecognized role level %r treated as absent", value)
        return None


def parse_mobility(value: Any) -> Mobility:
    v = normalize_text(value)
    try:
        return Mobility(v)
    except ValueError:
        return Mobility.UNKNOWN


def _non_negative_int(value: Any) -> Optional[int]:
    x = parse_number(value)
    if x is None or x < 0:
        return None
    return int(x)


def _positive_amount(value: Any) -> Optional[float]:
    x = parse_number(value)
    if x is None or x <= 0:
        return None
    return x


def _text_set(value: Any) -> FrozenSet[str]:
    return frozenset(unique_lower(value or []))


def _role_levels(value: Any) -> FrozenSet[RoleLevel]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple, set, frozenset)):
        return frozenset()
    levels = (parse_role_level(v) for v in value)
    return frozenset(lvl for lvl in levels if lvl is not None)


def _assessment_scores(value: Any) -> Dict[AssessmentDimension, float]:
    scores: Dict[AssessmentDimension, float] = {}
    for key, raw_score in _mapping(value).items():
        k = normalize_text(key)
        dim = _ASSESSMENT_ALIASES.get(k)
        if dim is None:
            try:
                dim = AssessmentDimension(k)
            except ValueError:
                continue
        x = parse_number(raw_score)
        if x is None:
            continue
        scores[dim] = clamp(x)
    return scores


def _expectation(raw: Mapping[str, Any]) -> Optional[CompensationExpectation]:
    comp = _mapping(raw.get("compensation_profile"))
    if not comp:
        return None

    amount = _positive_amount(comp.get("expectations"))
    if amount is None:
        amount = _positive_amount(_mapping(comp.get("salary_expectations")).get("min"))
    if amount is None:
        amount = _positive_amount(comp.get("current_base"))
    if amount is None:
        return None

    code = comp.get("currency")
    return CompensationExpectation(
        amount=amount,
        currency=parse_currency(code),
        currency_code=code.strip().upper() if isinstance(code, str) and code.strip() else None,
        hidden=bool(comp.get("hide_exact_figures", False)),
    )


def _budget(raw: Mapping[str, Any]) -> Optional[CompensationBudget]:
    rng = _mapping(raw.get("compensation_range"))
    if rng:
        lo, hi, code = rng.get("min"), rng.get("max"), rng.get("currency")
    else:
        lo, hi, code = raw.get("salary_min"), raw.get("salary_max"), raw.get("salary_currency")

    lo_x, hi_x = _positive_amount(lo), _positive_amount(hi)
    if lo_x is None and hi_x is None:
        return None
    return CompensationBudget(
        min_amount=lo_x,
        max_amount=hi_x,
        currency=parse_currency(code),
        currency_code=code.strip().upper() if isinstance(code, str) and code.strip() else None,
    )


def normalize_talent(raw: TalentInput) -> TalentProfile:
    if isinstance(raw, TalentProfile):
        return raw
    raw = _mapping(raw)
    prefs = _mapping(raw.get("career_preferences"))

    return TalentProfile(
        id=_id(raw.get("id")),
        role_level=parse_role_level(raw.get("current_role_level")),
        location=parse_location(raw.get("current_location")),
        divisions=_text_set(raw.get("divisions_expertise")),
        years_experience=_non_negative_int(_first(raw, "years_in_luxury", "years_experience")),
        languages=_text_set(raw.get("languages")),
        preferences=CareerPreferences(
            target_role_levels=_role_levels(prefs.get("target_role_levels")),
            target_locations=tuple(unique_lower(prefs.get("target_locations") or [])),
            mobility=parse_mobility(prefs.get("mobility")),
        ),
        assessment_scores=_assessment_scores(_first(raw, "assessment_scores", "assessment_summary")),
        compensation=_expectation(raw),
    )


def _opportunity_location(raw: Mapping[str, Any]) -> Location:
    city, country = raw.get("city"), raw.get("country")
    if city is not None or country is not None:
        return build_location(city, country)
    return parse_location(raw.get("location"))


def normalize_opportunity(raw: OpportunityInput) -> OpportunityProfile:
    if isinstance(raw, OpportunityProfile):
        return raw
    raw = _mapping(raw)

    return OpportunityProfile(
        id=_id(raw.get("id")),
        role_level=parse_role_level(raw.get("role_level")),
        division=optional_text(raw.get("division")),
        location=_opportunity_location(raw),
        required_experience_years=_non_negative_int(raw.get("required_experience_years")),
        required_languages=_text_set(raw.get("required_languages")),
        required_competencies=_assessment_scores(raw.get("required_competencies")),
        budget=_budget(raw),
    )

# talent_matcher/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class RoleLevel(str, Enum):
    L0 = "L0"
    L1 = "L1"
    L2 = "L2"
    L3 = "L3"
    L4 = "L4"
    L5 = "L5"
    L6 = "L6"
    L7 = "L7"
    L8 = "L8"

    @property
    def rank(self) -> int:
        return int(self.value[1:])


class Mobility(str, Enum):
    LOCAL = "local"
    NATIONAL = "national"
    INTERNATIONAL = "international"
    UNKNOWN = "unknown"


class Currency(str, Enum):
    EUR = "EUR"
    GBP = "GBP"
    USD = "USD"
    CHF = "CHF"
    AED = "AED"
    JPY = "JPY"
    HKD = "HKD"
    SGD = "SGD"
    CNY = "CNY"


class AlignmentCategory(str, Enum):
    WITHIN_RANGE = "within_range"
    ABOVE_RANGE = "above_range"
    BELOW_RANGE = "below_range"
    UNKNOWN = "unknown"


class Dimension(str, Enum):
    """Match breakdown dimensions. Declaration order is the breakdown order."""
    ROLE_LEVEL = "role_level"
    GEOGRAPHY = "geography"
    DIVISION = "division"
    EXPERIENCE = "experience"
    LANGUAGE = "language"
    ASSESSMENT = "assessment"


class AssessmentDimension(str, Enum):
    PRODUCT_KNOWLEDGE = "product_knowledge"
    CLIENTELING_MASTERY = "clienteling_mastery"
    CULTURAL_ALIGNMENT = "cultural_alignment"
    SALES_PERFORMANCE = "sales_performance"
    LEADERSHIP = "leadership"
    OPERATIONS = "operations"


class Recommendation(str, Enum):
    STRONG = "strong"
    GOOD = "good"
    MODERATE = "moderate"
    WEAK = "weak"


# ----------------------------
# Canonical profiles (normalizer output)
# ----------------------------

@dataclass(frozen=True)
class Location:
    city: Optional[str] = None
    country: Optional[str] = None

    @property
    def is_absent(self) -> bool:
        return self.city is None and self.country is None


@dataclass(frozen=True)
class CareerPreferences:
    target_role_levels: FrozenSet[RoleLevel] = frozenset()
    target_locations: Tuple[str, ...] = ()
    mobility: Mobility = Mobility.UNKNOWN


@dataclass(frozen=True)
class CompensationExpectation:
    amount: float
    currency: Optional[Currency]
    # raw code as entered, kept so an unrecognized currency stays visible
    currency_code: Optional[str] = None
    hidden: bool = False


@dataclass(frozen=True)
class CompensationBudget:
    min_amount: Optional[float]
    max_amount: Optional[float]
    currency: Optional[Currency]
    currency_code: Optional[str] = None


@dataclass(frozen=True)
class TalentProfile:
    """
    Canonical talent record. Optional values are None or empty, never zero.
    """
    id: Optional[str] = None
    role_level: Optional[RoleLevel] = None
    location: Location = field(default_factory=Location)
    divisions: FrozenSet[str] = frozenset()
    years_experience: Optional[int] = None
    languages: FrozenSet[str] = frozenset()
    preferences: CareerPreferences = field(default_factory=CareerPreferences)
    assessment_scores: Mapping[AssessmentDimension, float] = field(default_factory=dict)
    compensation: Optional[CompensationExpectation] = None


@dataclass(frozen=True)
class OpportunityProfile:
    """
    Canonical opportunity record.
    """
    id: Optional[str] = None
    role_level: Optional[RoleLevel] = None
    division: Optional[str] = None
    location: Location = field(default_factory=Location)
    required_experience_years: Optional[int] = None
    required_languages: FrozenSet[str] = frozenset()
    required_competencies: Mapping[AssessmentDimension, float] = field(default_factory=dict)
    budget: Optional[CompensationBudget] = None


# ----------------------------
# Results
# ----------------------------

class BreakdownEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    dimension: Dimension
    score: float
    weight: float
    weighted_score: float


class MatchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall_score: int
    breakdown: List[BreakdownEntry]
    recommendation: Recommendation

    def dimension_scores(self) -> Dict[str, float]:
        return {b.dimension.value: b.score for b in self.breakdown}


class CompensationAlignmentResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    alignment: AlignmentCategory
    # amounts below are in the reference currency; None when not computable
    reference_currency: Currency
    expectation: Optional[float] = None
    min_budget: Optional[float] = None
    max_budget: Optional[float] = None


class BadgeInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    icon: str
    label: str
    color: str


@dataclass(frozen=True)
class RankedMatch:
    """
    One row of a batch ranking. `subject` is the opportunity (for
    find_top_matches) or the talent (for find_top_candidates).
    """
    subject: object
    match: MatchResult

# talent_matcher/config.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError, field_validator, model_validator

from talent_matcher.currency import ExchangeRateTable
from talent_matcher.errors import ConfigurationError
from talent_matcher.models import (
    AlignmentCategory,
    AssessmentDimension,
    BadgeInfo,
    Dimension,
    RoleLevel,
)
from talent_matcher.utils import FrozenDict, normalize_text

logger = logging.getLogger(__name__)

WEIGHT_TOLERANCE = 1e-6


def _check_targets(targets: Mapping[AssessmentDimension, float]) -> FrozenDict:
    for dim, t in targets.items():
        if not (0.0 < t <= 100.0):
            raise ValueError(f"Target for {dim.value} must be within (0, 100] (got {t})")
    return FrozenDict(targets)


class WeightTable(RootModel[Dict[Dimension, float]]):
    """Dimension -> importance. Only dimensions listed here appear in the breakdown."""
    model_config = ConfigDict(frozen=True)

    root: Dict[Dimension, float] = Field(
        default_factory=lambda: {
            Dimension.ROLE_LEVEL: 0.20,
            Dimension.GEOGRAPHY: 0.15,
            Dimension.DIVISION: 0.20,
            Dimension.EXPERIENCE: 0.15,
            Dimension.LANGUAGE: 0.10,
            Dimension.ASSESSMENT: 0.20,
        },
        validate_default=True,
    )

    @field_validator("root")
    @classmethod
    def _freeze(cls, v: Dict[Dimension, float]) -> Dict[Dimension, float]:
        return FrozenDict(v)

    @model_validator(mode="after")
    def _check_weights(self) -> "WeightTable":
        if not self.root:
            raise ValueError("Weight table must configure at least one dimension")
        for dim, w in self.root.items():
            if not (0.0 <= w <= 1.0):
                raise ValueError(f"Weight for {dim.value} must be within [0, 1] (got {w})")
        total = sum(self.root.values())
        if abs(total - 1.0) > WEIGHT_TOLERANCE:
            raise ValueError(f"Scoring weights must sum to 1.0 (got {total})")
        return self

    def dimensions(self) -> List[Dimension]:
        """Configured dimensions in canonical breakdown order."""
        return [d for d in Dimension if d in self.root]

    def weight(self, dimension: Dimension) -> float:
        return self.root.get(dimension, 0.0)


class EmphasisBand(BaseModel):
    model_config = ConfigDict(frozen=True)

    levels: Tuple[RoleLevel, ...]
    targets: Dict[AssessmentDimension, float]

    @field_validator("targets")
    @classmethod
    def _targets_in_range(cls, v: Dict[AssessmentDimension, float]) -> Dict[AssessmentDimension, float]:
        return _check_targets(v)


def _default_bands() -> Tuple[EmphasisBand, ...]:
    A = AssessmentDimension
    return (
        # client-facing roles
        EmphasisBand(
            levels=[RoleLevel.L0, RoleLevel.L1, RoleLevel.L2, RoleLevel.L3],
            targets={A.CLIENTELING_MASTERY: 70, A.SALES_PERFORMANCE: 70, A.PRODUCT_KNOWLEDGE: 65},
        ),
        # floor and department management
        EmphasisBand(
            levels=[RoleLevel.L4, RoleLevel.L5],
            targets={A.CLIENTELING_MASTERY: 70, A.SALES_PERFORMANCE: 70, A.LEADERSHIP: 65, A.OPERATIONS: 60},
        ),
        # store and area leadership
        EmphasisBand(
            levels=[RoleLevel.L6, RoleLevel.L7, RoleLevel.L8],
            targets={A.LEADERSHIP: 75, A.OPERATIONS: 70, A.CULTURAL_ALIGNMENT: 65},
        ),
    )


class AssessmentEmphasis(BaseModel):
    """
    Which assessment dimensions an opportunity stresses, and the target score for each.
    Band targets come from the role level; division overrides are merged on top.
    """
    model_config = ConfigDict(frozen=True)

    bands: Tuple[EmphasisBand, ...] = Field(default_factory=_default_bands)
    division_overrides: Dict[str, Dict[AssessmentDimension, float]] = Field(
        default_factory=lambda: {
            "watches": {AssessmentDimension.PRODUCT_KNOWLEDGE: 80},
            "high_jewelry": {AssessmentDimension.PRODUCT_KNOWLEDGE: 80},
        },
        validate_default=True,
    )
    # used when the opportunity has no recognizable role level
    default_targets: Dict[AssessmentDimension, float] = Field(
        default_factory=lambda: {
            AssessmentDimension.CLIENTELING_MASTERY: 70,
            AssessmentDimension.SALES_PERFORMANCE: 70,
        },
        validate_default=True,
    )

    @field_validator("division_overrides")
    @classmethod
    def _normalize_division_keys(cls, v: Dict[str, Dict[AssessmentDimension, float]]):
        return FrozenDict({normalize_text(k): _check_targets(targets) for k, targets in v.items()})

    @field_validator("default_targets")
    @classmethod
    def _check_default_targets(cls, v: Dict[AssessmentDimension, float]):
        return _check_targets(v)

    @model_validator(mode="after")
    def _levels_unique(self) -> "AssessmentEmphasis":
        seen = set()
        for band in self.bands:
            for lvl in band.levels:
                if lvl in seen:
                    raise ValueError(f"Role level {lvl.value} appears in more than one emphasis band")
                seen.add(lvl)
        return self

    def targets_for(self, level: Optional[RoleLevel], division: Optional[str]) -> Dict[AssessmentDimension, float]:
        targets: Dict[AssessmentDimension, float] = dict(self.default_targets)
        if level is not None:
            for band in self.bands:
                if level in band.levels:
                    targets = dict(band.targets)
                    break
        if division:
            targets.update(self.division_overrides.get(division, {}))
        return targets


class ScoringParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    role_level_step: float = Field(default=15.0, ge=0.0, le=100.0)
    same_country_score: float = Field(default=60.0, ge=0.0, le=100.0)
    cross_country_score: float = Field(default=20.0, ge=0.0, le=100.0)
    neutral_score: float = Field(default=50.0, ge=0.0, le=100.0)
    assessment_emphasis: AssessmentEmphasis = Field(default_factory=AssessmentEmphasis)


class RecommendationThresholds(BaseModel):
    model_config = ConfigDict(frozen=True)

    strong: int = 80
    good: int = 65
    moderate: int = 50

    @model_validator(mode="after")
    def _descending(self) -> "RecommendationThresholds":
        if not (100 >= self.strong >= self.good >= self.moderate >= 0):
            raise ValueError(
                f"Recommendation thresholds must satisfy 100 >= strong >= good >= moderate >= 0 "
                f"(got {self.strong}/{self.good}/{self.moderate})"
            )
        return self


class CompensationParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    tolerance: float = Field(default=0.10, ge=0.0, lt=1.0)


def _default_badges() -> Dict[AlignmentCategory, BadgeInfo]:
    return {
        AlignmentCategory.WITHIN_RANGE: BadgeInfo(icon="✅", label="Within budget", color="text-green-600"),
        AlignmentCategory.ABOVE_RANGE: BadgeInfo(icon="⬆️", label="Above budget", color="text-orange-500"),
        AlignmentCategory.BELOW_RANGE: BadgeInfo(icon="⬇️", label="Below budget", color="text-blue-600"),
        AlignmentCategory.UNKNOWN: BadgeInfo(icon="❔", label="Not enough data", color="text-gray-400"),
    }


class BadgeTable(RootModel[Dict[AlignmentCategory, BadgeInfo]]):
    model_config = ConfigDict(frozen=True)

    root: Dict[AlignmentCategory, BadgeInfo] = Field(default_factory=_default_badges, validate_default=True)

    @field_validator("root")
    @classmethod
    def _freeze(cls, v: Dict[AlignmentCategory, BadgeInfo]) -> Dict[AlignmentCategory, BadgeInfo]:
        return FrozenDict(v)

    @model_validator(mode="after")
    def _covers_every_category(self) -> "BadgeTable":
        missing = [c.value for c in AlignmentCategory if c not in self.root]
        if missing:
            raise ValueError(f"Badge table is missing alignment categories: {', '.join(missing)}")
        return self

    def resolve(self, alignment: AlignmentCategory) -> BadgeInfo:
        return self.root[alignment]


class EngineConfig(BaseModel):
    """
    Everything the engine reads. Built once at start-up and passed by reference.
    """
    model_config = ConfigDict(frozen=True)

    version: int = 1
    weights: WeightTable = Field(default_factory=WeightTable)
    scoring: ScoringParams = Field(default_factory=ScoringParams)
    recommendation: RecommendationThresholds = Field(default_factory=RecommendationThresholds)
    compensation: CompensationParams = Field(default_factory=CompensationParams)
    exchange_rates: ExchangeRateTable = Field(default_factory=ExchangeRateTable)
    badges: BadgeTable = Field(default_factory=BadgeTable)

    def with_exchange_rates(self, table: ExchangeRateTable) -> "EngineConfig":
        """New config with a refreshed FX table. `self` is left untouched."""
        return self.model_copy(update={"exchange_rates": table})


def build_config(data: Optional[Dict[str, Any]] = None) -> EngineConfig:
    """Validate a config mapping over the built-in defaults."""
    try:
        return EngineConfig(**(data or {}))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid engine configuration: {e}") from e


def load_config(path: Union[str, Path]) -> EngineConfig:
    p = Path(path)
    if not p.exists():
        raise ConfigurationError(
            f"Configuration file not found: {p}\n"
            f"Please copy config/config.example.yaml to {p} and customize it."
        )

    try:
        with p.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in {p}: {e}") from e

    if raw is None:
        raise ConfigurationError(f"Configuration file {p} is empty")
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Configuration file {p} must be a YAML mapping")

    try:
        cfg = EngineConfig(**raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration structure in {p}: {e}") from e

    logger.info(
        "Loaded engine config v%s from %s (dimensions: %s, fx %s)",
        cfg.version,
        p,
        ", ".join(d.value for d in cfg.weights.dimensions()),
        cfg.exchange_rates.version,
    )
    return cfg


DEFAULT_CONFIG = EngineConfig()

# talent_matcher/__init__.py
from talent_matcher.compensation import (
    align_profiles,
    calculate_compensation_alignment,
    get_compensation_badge_info,
)
from talent_matcher.config import DEFAULT_CONFIG, EngineConfig, build_config, load_config
from talent_matcher.currency import ExchangeRateTable, load_exchange_rates
from talent_matcher.errors import ConfigurationError
from talent_matcher.matching import calculate_match, find_top_candidates, find_top_matches
from talent_matcher.models import (
    AlignmentCategory,
    BadgeInfo,
    CompensationAlignmentResult,
    MatchResult,
)
from talent_matcher.normalize import normalize_opportunity, normalize_talent

__all__ = [
    "AlignmentCategory",
    "BadgeInfo",
    "CompensationAlignmentResult",
    "ConfigurationError",
    "DEFAULT_CONFIG",
    "EngineConfig",
    "ExchangeRateTable",
    "MatchResult",
    "align_profiles",
    "build_config",
    "calculate_compensation_alignment",
    "calculate_match",
    "find_top_candidates",
    "find_top_matches",
    "get_compensation_badge_info",
    "load_config",
    "load_exchange_rates",
    "normalize_opportunity",
    "normalize_talent",
]

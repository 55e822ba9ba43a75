# talent_matcher/compensation.py
"""
Salary expectation vs. budget range, across currencies.

Every amount is converted into the FX table's reference currency before any
comparison. Missing or unconvertible data classifies as `unknown`.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Union

from talent_matcher.config import DEFAULT_CONFIG, EngineConfig
from talent_matcher.currency import ExchangeRateTable
from talent_matcher.models import (
    AlignmentCategory,
    BadgeInfo,
    CompensationAlignmentResult,
    Currency,
)
from talent_matcher.normalize import (
    OpportunityInput,
    TalentInput,
    normalize_opportunity,
    normalize_talent,
)
from talent_matcher.utils import parse_number

logger = logging.getLogger(__name__)

CurrencyInput = Union[Currency, str, None]


def _positive(value: Any) -> Optional[float]:
    x = parse_number(value)
    return x if x is not None and x > 0 else None


def _code(currency: CurrencyInput, reference: Currency) -> CurrencyInput:
    # an absent code means the reference currency
    if currency is None or (isinstance(currency, str) and not currency.strip()):
        return reference
    return currency


def classify(
    expectation: Any,
    min_budget: Any,
    max_budget: Any,
    expectation_currency: CurrencyInput,
    budget_currency: CurrencyInput,
    rates: ExchangeRateTable,
    tolerance: float,
) -> CompensationAlignmentResult:
    ref = rates.reference

    def unknown() -> CompensationAlignmentResult:
        return CompensationAlignmentResult(alignment=AlignmentCategory.UNKNOWN, reference_currency=ref)

    e_raw = _positive(expectation)
    lo_raw, hi_raw = _positive(min_budget), _positive(max_budget)
    if e_raw is None or (lo_raw is None and hi_raw is None):
        return unknown()

    e = rates.normalize(e_raw, _code(expectation_currency, ref))
    bcur = _code(budget_currency, ref)
    lo = rates.normalize(lo_raw, bcur) if lo_raw is not None else None
    hi = rates.normalize(hi_raw, bcur) if hi_raw is not None else None
    if e is None or (lo is None and hi is None):
        logger.debug(
            "Compensation alignment unknown: unrecognized currency (%r / %r)",
            expectation_currency,
            budget_currency,
        )
        return unknown()

    if lo is not None and hi is not None and lo > hi:
        lo, hi = hi, lo

    if hi is not None and e > hi * (1.0 + tolerance):
        alignment = AlignmentCategory.ABOVE_RANGE
    elif lo is not None and e < lo * (1.0 - tolerance):
        alignment = AlignmentCategory.BELOW_RANGE
    else:
        alignment = AlignmentCategory.WITHIN_RANGE

    return CompensationAlignmentResult(
        alignment=alignment,
        reference_currency=ref,
        expectation=e,
        min_budget=lo,
        max_budget=hi,
    )


def calculate_compensation_alignment(
    expectation: Any,
    min_budget: Any,
    max_budget: Any,
    expectation_currency: CurrencyInput = None,
    budget_currency: CurrencyInput = None,
    config: Optional[EngineConfig] = None,
) -> CompensationAlignmentResult:
    cfg = config or DEFAULT_CONFIG
    return classify(
        expectation,
        min_budget,
        max_budget,
        expectation_currency,
        budget_currency,
        rates=cfg.exchange_rates,
        tolerance=cfg.compensation.tolerance,
    )


def align_profiles(
    talent: TalentInput,
    opportunity: OpportunityInput,
    config: Optional[EngineConfig] = None,
) -> CompensationAlignmentResult:
    """Pull the expectation and budget out of two profiles and classify them."""
    t = normalize_talent(talent)
    o = normalize_opportunity(opportunity)
    exp = t.compensation
    budget = o.budget

    # keep the raw code so an unrecognized currency classifies as unknown, not as the reference
    return calculate_compensation_alignment(
        exp.amount if exp else None,
        budget.min_amount if budget else None,
        budget.max_amount if budget else None,
        (exp.currency or exp.currency_code) if exp else None,
        (budget.currency or budget.currency_code) if budget else None,
        config=config,
    )


def get_compensation_badge_info(
    alignment: Union[AlignmentCategory, str, None],
    config: Optional[EngineConfig] = None,
) -> BadgeInfo:
    cfg = config or DEFAULT_CONFIG
    if not isinstance(alignment, AlignmentCategory):
        try:
            alignment = AlignmentCategory(str(alignment).strip().lower())
        except ValueError:
            alignment = AlignmentCategory.UNKNOWN
    return cfg.badges.resolve(alignment)

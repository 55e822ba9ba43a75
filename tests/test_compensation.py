import pytest

from talent_matcher.compensation import (
    align_profiles,
    calculate_compensation_alignment,
    get_compensation_badge_info,
)
from talent_matcher.config import DEFAULT_CONFIG, build_config
from talent_matcher.currency import ExchangeRateTable
from talent_matcher.errors import ConfigurationError
from talent_matcher.models import AlignmentCategory, BadgeInfo, Currency


@pytest.mark.parametrize(
    "expectation, expected",
    [
        (60000, AlignmentCategory.WITHIN_RANGE),
        (85000, AlignmentCategory.ABOVE_RANGE),
        (40000, AlignmentCategory.BELOW_RANGE),
        # inside the 10% tolerance band on either side
        (75000, AlignmentCategory.WITHIN_RANGE),
        (46000, AlignmentCategory.WITHIN_RANGE),
    ],
)
def test_alignment_against_eur_range(expectation, expected):
    result = calculate_compensation_alignment(expectation, 50000, 70000, "EUR", "EUR")
    assert result.alignment is expected


def test_missing_budget_is_unknown():
    result = calculate_compensation_alignment(60000, None, None, "EUR", "EUR")
    assert result.alignment is AlignmentCategory.UNKNOWN
    assert result.expectation is None


def test_missing_expectation_is_unknown():
    assert calculate_compensation_alignment(None, 50000, 70000, "EUR", "EUR").alignment is AlignmentCategory.UNKNOWN
    assert calculate_compensation_alignment(0, 50000, 70000, "EUR", "EUR").alignment is AlignmentCategory.UNKNOWN


def test_unrecognized_currency_is_unknown():
    assert calculate_compensation_alignment(60000, 50000, 70000, "XYZ", "EUR").alignment is AlignmentCategory.UNKNOWN
    assert calculate_compensation_alignment(60000, 50000, 70000, "EUR", "ZZZ").alignment is AlignmentCategory.UNKNOWN


def test_conversion_keeps_classification_stable():
    rates = ExchangeRateTable(version="test", rates={Currency.EUR: 1.0, Currency.USD: 60000 / 65000})
    cfg = DEFAULT_CONFIG.with_exchange_rates(rates)

    converted = calculate_compensation_alignment(65000, 50000, 70000, "USD", "EUR", config=cfg)
    direct = calculate_compensation_alignment(60000, 50000, 70000, "EUR", "EUR", config=cfg)

    assert converted.alignment is direct.alignment is AlignmentCategory.WITHIN_RANGE
    assert converted.expectation == pytest.approx(60000)


def test_budget_in_other_currency_is_converted():
    rates = ExchangeRateTable(rates={Currency.EUR: 1.0, Currency.CHF: 1.05})
    cfg = DEFAULT_CONFIG.with_exchange_rates(rates)

    result = calculate_compensation_alignment(100000, 60000, 80000, "EUR", "CHF", config=cfg)

    assert result.alignment is AlignmentCategory.ABOVE_RANGE
    assert result.max_budget == pytest.approx(84000)
    assert result.reference_currency is Currency.EUR


def test_absent_currency_means_reference_currency():
    a = calculate_compensation_alignment(60000, 50000, 70000)
    b = calculate_compensation_alignment(60000, 50000, 70000, "EUR", "EUR")
    assert a == b


def test_single_bound_limits_one_side_only():
    assert calculate_compensation_alignment(90000, None, 70000).alignment is AlignmentCategory.ABOVE_RANGE
    assert calculate_compensation_alignment(20000, None, 70000).alignment is AlignmentCategory.WITHIN_RANGE
    assert calculate_compensation_alignment(30000, 50000, None).alignment is AlignmentCategory.BELOW_RANGE
    assert calculate_compensation_alignment(900000, 50000, None).alignment is AlignmentCategory.WITHIN_RANGE


def test_reversed_range_is_swapped():
    result = calculate_compensation_alignment(60000, 70000, 50000)
    assert result.alignment is AlignmentCategory.WITHIN_RANGE
    assert (result.min_budget, result.max_budget) == (50000, 70000)


def test_tolerance_is_configurable():
    strict = build_config({"compensation": {"tolerance": 0.0}})
    assert calculate_compensation_alignment(72000, 50000, 70000, config=strict).alignment is AlignmentCategory.ABOVE_RANGE
    assert calculate_compensation_alignment(72000, 50000, 70000).alignment is AlignmentCategory.WITHIN_RANGE


def test_align_profiles(raw_talent, raw_opportunity):
    assert align_profiles(raw_talent, raw_opportunity).alignment is AlignmentCategory.WITHIN_RANGE

    raw_talent["compensation_profile"] = {"expectations": 95000, "currency": "EUR"}
    assert align_profiles(raw_talent, raw_opportunity).alignment is AlignmentCategory.ABOVE_RANGE

    raw_talent["compensation_profile"] = {"expectations": 60000, "currency": "XYZ"}
    assert align_profiles(raw_talent, raw_opportunity).alignment is AlignmentCategory.UNKNOWN

    del raw_opportunity["compensation_range"]
    assert align_profiles(raw_talent, raw_opportunity).alignment is AlignmentCategory.UNKNOWN


# ----------------------------
# Badges
# ----------------------------

def test_every_category_has_a_badge():
    for category in AlignmentCategory:
        badge = get_compensation_badge_info(category)
        assert isinstance(badge, BadgeInfo)
        assert badge.label


def test_badge_accepts_string_values():
    assert get_compensation_badge_info("above_range") == get_compensation_badge_info(AlignmentCategory.ABOVE_RANGE)
    assert get_compensation_badge_info("nonsense") == get_compensation_badge_info(AlignmentCategory.UNKNOWN)
    assert get_compensation_badge_info(None) == get_compensation_badge_info(AlignmentCategory.UNKNOWN)


def test_badge_table_missing_a_category_fails_at_build_time():
    badges = {
        "within_range": {"icon": "✅", "label": "Within budget", "color": "green"},
        "above_range": {"icon": "⬆️", "label": "Above budget", "color": "orange"},
        "unknown": {"icon": "❔", "label": "Unknown", "color": "grey"},
    }
    with pytest.raises(ConfigurationError, match="below_range"):
        build_config({"badges": badges})


@pytest.mark.parametrize(
    "expectation, expected",
    [
        # budget 40k-80k with a 25% band: edges at exactly 30000 and 100000
        (100000, AlignmentCategory.WITHIN_RANGE),
        (100000.01, AlignmentCategory.ABOVE_RANGE),
        (30000, AlignmentCategory.WITHIN_RANGE),
        (29999.99, AlignmentCategory.BELOW_RANGE),
    ],
)
def test_tolerance_band_edges(expectation, expected):
    cfg = build_config({"compensation": {"tolerance": 0.25}})
    result = calculate_compensation_alignment(expectation, 40000, 80000, "EUR", "EUR", config=cfg)
    assert result.alignment is expected

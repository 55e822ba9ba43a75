import pytest

from talent_matcher.config import ScoringParams
from talent_matcher.models import (
    AssessmentDimension as A,
    CareerPreferences,
    Location,
    Mobility,
    OpportunityProfile,
    RoleLevel,
    TalentProfile,
)
from talent_matcher.scoring import (
    assessment_fit,
    division_fit,
    experience_fit,
    geography_fit,
    language_fit,
    role_level_fit,
)

PARAMS = ScoringParams()


def _talent(**kw):
    return TalentProfile(**kw)


def _opp(**kw):
    return OpportunityProfile(**kw)


# ----------------------------
# Role level
# ----------------------------

def test_role_level_in_targets_is_full_score():
    t = _talent(role_level=RoleLevel.L2, preferences=CareerPreferences(target_role_levels=frozenset({RoleLevel.L4})))
    assert role_level_fit(t, _opp(role_level=RoleLevel.L4), PARAMS) == 100.0


def test_role_level_penalizes_distance_to_nearest_target():
    prefs = CareerPreferences(target_role_levels=frozenset({RoleLevel.L3, RoleLevel.L7}))
    t = _talent(role_level=RoleLevel.L3, preferences=prefs)
    assert role_level_fit(t, _opp(role_level=RoleLevel.L5), PARAMS) == 70.0
    assert role_level_fit(t, _opp(role_level=RoleLevel.L8), PARAMS) == 85.0


def test_role_level_falls_back_to_current_level():
    t = _talent(role_level=RoleLevel.L4)
    assert role_level_fit(t, _opp(role_level=RoleLevel.L4), PARAMS) == 100.0
    assert role_level_fit(t, _opp(role_level=RoleLevel.L6), PARAMS) == 70.0


def test_role_level_floors_at_zero():
    t = _talent(role_level=RoleLevel.L0)
    assert role_level_fit(t, _opp(role_level=RoleLevel.L8), PARAMS) == 0.0


def test_role_level_step_is_configurable():
    t = _talent(role_level=RoleLevel.L1)
    assert role_level_fit(t, _opp(role_level=RoleLevel.L3), ScoringParams(role_level_step=10)) == 80.0


def test_role_level_absent_data_is_neutral():
    assert role_level_fit(_talent(role_level=RoleLevel.L3), _opp(), PARAMS) == 50.0
    assert role_level_fit(_talent(), _opp(role_level=RoleLevel.L3), PARAMS) == 50.0


# ----------------------------
# Geography
# ----------------------------

PARIS = Location(city="paris", country="france")
LYON = Location(city="lyon", country="france")
LONDON = Location(city="london", country="united kingdom")


def _mover(mobility, location=PARIS, targets=()):
    return _talent(location=location, preferences=CareerPreferences(mobility=mobility, target_locations=targets))


def test_same_city_is_full_score():
    assert geography_fit(_mover(Mobility.LOCAL), _opp(location=PARIS), PARAMS) == 100.0


@pytest.mark.parametrize(
    "mobility, location, expected",
    [
        (Mobility.NATIONAL, LYON, 60.0),
        (Mobility.LOCAL, LYON, 0.0),
        (Mobility.LOCAL, LONDON, 0.0),
        (Mobility.NATIONAL, LONDON, 20.0),
        (Mobility.UNKNOWN, LONDON, 20.0),
        (Mobility.INTERNATIONAL, LYON, 60.0),
        (Mobility.INTERNATIONAL, LONDON, 60.0),
    ],
)
def test_cross_city_depends_on_mobility(mobility, location, expected):
    assert geography_fit(_mover(mobility), _opp(location=location), PARAMS) == expected


def test_target_location_is_full_score():
    t = _mover(Mobility.LOCAL, targets=("london",))
    assert geography_fit(t, _opp(location=LONDON), PARAMS) == 100.0


def test_geography_absent_data():
    assert geography_fit(_mover(Mobility.NATIONAL), _opp(), PARAMS) == 100.0
    assert geography_fit(_talent(), _opp(location=PARIS), PARAMS) == 50.0


# ----------------------------
# Division
# ----------------------------

def test_division_jaccard():
    opp = _opp(division="watches")
    assert division_fit(_talent(divisions=frozenset({"watches"})), opp, PARAMS) == 100.0
    assert division_fit(_talent(divisions=frozenset({"watches", "high_jewelry"})), opp, PARAMS) == 50.0
    assert division_fit(_talent(divisions=frozenset({"beauty"})), opp, PARAMS) == 0.0


def test_division_empty_talent_set_scores_zero():
    assert division_fit(_talent(), _opp(division="watches"), PARAMS) == 0.0


def test_division_absent_on_opportunity_is_satisfied():
    assert division_fit(_talent(), _opp(), PARAMS) == 100.0
    assert division_fit(_talent(divisions=frozenset({"beauty"})), _opp(), PARAMS) == 100.0


# ----------------------------
# Experience
# ----------------------------

def test_experience_requirement_absent_is_satisfied():
    assert experience_fit(_talent(years_experience=0), _opp(), PARAMS) == 100.0
    assert experience_fit(_talent(years_experience=0), _opp(required_experience_years=0), PARAMS) == 100.0


def test_experience_is_proportional():
    opp = _opp(required_experience_years=6)
    assert experience_fit(_talent(years_experience=3), opp, PARAMS) == 50.0
    assert experience_fit(_talent(years_experience=0), opp, PARAMS) == 0.0
    assert experience_fit(_talent(years_experience=10), opp, PARAMS) == 100.0


def test_experience_missing_years_is_neutral():
    assert experience_fit(_talent(), _opp(required_experience_years=5), PARAMS) == 50.0


def test_experience_is_monotonic():
    opp = _opp(required_experience_years=7)
    scores = [experience_fit(_talent(years_experience=y), opp, PARAMS) for y in range(0, 15)]
    assert scores == sorted(scores)


# ----------------------------
# Languages
# ----------------------------

def test_language_partial_coverage():
    t = _talent(languages=frozenset({"english"}))
    assert language_fit(t, _opp(required_languages=frozenset({"french", "english"})), PARAMS) == 50.0


def test_language_empty_requirement_is_vacuous():
    assert language_fit(_talent(), _opp(), PARAMS) == 100.0
    assert language_fit(_talent(languages=frozenset({"arabic"})), _opp(), PARAMS) == 100.0


def test_language_no_overlap():
    t = _talent(languages=frozenset({"italian"}))
    assert language_fit(t, _opp(required_languages=frozenset({"french"})), PARAMS) == 0.0


# ----------------------------
# Assessment
# ----------------------------

def test_assessment_without_scores_is_neutral():
    assert assessment_fit(_talent(), _opp(role_level=RoleLevel.L3), PARAMS) == 50.0


def test_assessment_uses_explicit_competencies():
    t = _talent(assessment_scores={A.LEADERSHIP: 60.0, A.OPERATIONS: 90.0})
    o = _opp(required_competencies={A.LEADERSHIP: 80.0})
    assert assessment_fit(t, o, PARAMS) == pytest.approx(75.0)


def test_assessment_meeting_band_targets_is_full_score():
    t = _talent(
        assessment_scores={A.CLIENTELING_MASTERY: 70.0, A.SALES_PERFORMANCE: 90.0, A.PRODUCT_KNOWLEDGE: 65.0}
    )
    assert assessment_fit(t, _opp(role_level=RoleLevel.L2), PARAMS) == 100.0


def test_assessment_division_override_raises_target():
    t = _talent(
        assessment_scores={A.CLIENTELING_MASTERY: 70.0, A.SALES_PERFORMANCE: 70.0, A.PRODUCT_KNOWLEDGE: 60.0}
    )
    # product_knowledge target is 80 for watches: 60/80 = 75 on that axis
    score = assessment_fit(t, _opp(role_level=RoleLevel.L2, division="watches"), PARAMS)
    assert score == pytest.approx((100.0 + 100.0 + 75.0) / 3)


def test_assessment_missing_axis_counts_as_neutral():
    t = _talent(assessment_scores={A.LEADERSHIP: 75.0})
    # L6 band: leadership 75, operations 70, cultural_alignment 65
    score = assessment_fit(t, _opp(role_level=RoleLevel.L6), PARAMS)
    assert score == pytest.approx((50.0 + 100.0 + 50.0) / 3)

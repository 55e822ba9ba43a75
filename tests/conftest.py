import copy

import pytest

from talent_matcher.config import DEFAULT_CONFIG


_OPPORTUNITY = {
    "id": "opp-paris-watches",
    "title": "Watch Specialist",
    "role_level": "L3",
    "division": "watches",
    "city": "Paris",
    "country": "France",
    "required_experience_years": 3,
    "required_languages": ["French", "English"],
    "compensation_range": {"min": 50000, "max": 70000, "currency": "EUR"},
}

# satisfies every requirement of _OPPORTUNITY
_TALENT = {
    "id": "talent-1",
    "current_role_level": "L3",
    "current_location": "Paris, France",
    "divisions_expertise": ["watches"],
    "years_in_luxury": 5,
    "languages": ["English", "French", "Italian"],
    "career_preferences": {
        "target_role_levels": ["L3", "L4"],
        "target_locations": ["Paris"],
        "mobility": "national",
    },
    "assessment_scores": {
        "product_knowledge": 85,
        "clienteling_mastery": 80,
        "cultural_alignment": 70,
        "sales_performance": 75,
        "leadership": 55,
        "operations": 60,
    },
    "compensation_profile": {"expectations": 60000, "currency": "EUR"},
}


@pytest.fixture
def config():
    return DEFAULT_CONFIG


@pytest.fixture
def raw_opportunity():
    """A fresh copy per test so mutation checks are meaningful."""
    return copy.deepcopy(_OPPORTUNITY)


@pytest.fixture
def raw_talent():
    return copy.deepcopy(_TALENT)

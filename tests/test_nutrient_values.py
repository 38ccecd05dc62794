"""
Field selection per guideline source.

Run with:
    pytest tests/test_nutrient_values.py -v
"""

import pytest

from micronutrients.models import Gender, GuidelineSource, NutrientValue
from micronutrients.utils import (
    get_lower_limit,
    get_primary_value,
    get_upper_limit,
    parse_client_gender,
    parse_guideline_source,
    primary_field,
    set_primary_value,
)


# =============================================================================
# Primary field
# =============================================================================

@pytest.mark.parametrize("source, field", [
    (GuidelineSource.UK, "rni"),
    (GuidelineSource.US, "rda"),
    (GuidelineSource.INDIA, "rda"),
])
def test_primary_field_single_candidate(source, field):
    nutrient = NutrientValue(rni=1, rda=2, pri=3, ai=4)
    assert primary_field(nutrient, source) == field


def test_eu_prefers_pri_then_ai():
    assert primary_field(NutrientValue(pri=330, ai=300), GuidelineSource.EU) == "pri"
    assert primary_field(NutrientValue(ai=15), GuidelineSource.EU) == "ai"


def test_who_prefers_rni_then_ai():
    assert primary_field(NutrientValue(rni=5, ai=4), GuidelineSource.WHO) == "rni"
    assert primary_field(NutrientValue(ai=4), GuidelineSource.WHO) == "ai"


def test_uk_primary_value_ignores_rda():
    assert get_primary_value(NutrientValue(rda=18), GuidelineSource.UK) is None


def test_set_primary_value_leaves_other_fields():
    nutrient = NutrientValue(pri=330, ai=300, ul=1000)
    set_primary_value(nutrient, GuidelineSource.EU, 495)

    assert nutrient.pri == 495
    assert nutrient.ai == 300
    assert nutrient.ul == 1000


# =============================================================================
# Limits
# =============================================================================

def test_uk_limits():
    nutrient = NutrientValue(rni=14.8, lrni=8.0, sul=17)
    assert get_lower_limit(nutrient, GuidelineSource.UK) == 8.0
    assert get_upper_limit(nutrient, GuidelineSource.UK) == 17


def test_uk_upper_limit_falls_back_to_ul():
    assert get_upper_limit(NutrientValue(rni=700, ul=2500), GuidelineSource.UK) == 2500


def test_us_lower_limit_is_ear():
    nutrient = NutrientValue(rda=18, ear=8.1, ul=45)
    assert get_lower_limit(nutrient, GuidelineSource.US) == 8.1
    assert get_upper_limit(nutrient, GuidelineSource.US) == 45


def test_who_has_no_lower_limit():
    assert get_lower_limit(NutrientValue(rni=10, lrni=5), GuidelineSource.WHO) is None


# =============================================================================
# Boundary parsing
# =============================================================================

def test_parse_guideline_source():
    assert parse_guideline_source("India") is GuidelineSource.INDIA
    assert parse_guideline_source(GuidelineSource.EU) is GuidelineSource.EU


@pytest.mark.parametrize("value", ["Canada", "uk", ""])
def test_parse_guideline_source_rejects_unknown(value):
    with pytest.raises(ValueError, match="Unknown guideline source"):
        parse_guideline_source(value)


def test_parse_client_gender():
    assert parse_client_gender("female") is Gender.FEMALE
    with pytest.raises(ValueError):
        parse_client_gender("common")
    with pytest.raises(ValueError):
        parse_client_gender("other")

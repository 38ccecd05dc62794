"""
Guideline Resolver Tests

Each test loads only the rows it needs so the winning tier is unambiguous.

Run with:
    pytest tests/test_guideline_resolver.py -v
"""

import pytest

from micronutrients.database import insert_guideline
from micronutrients.models import Gender, GuidelineRow, GuidelineSource, NutrientValue
from micronutrients.services import is_condition_specific, resolve_guideline


async def _add(db_path, gender, notes=None, age_min=19, age_max=30, country=GuidelineSource.US):
    return await insert_guideline(
        GuidelineRow(
            country=country,
            gender=gender,
            age_min=age_min,
            age_max=age_max,
            guideline_type="DRI",
            notes=notes,
            micronutrients={"folate": NutrientValue(rda=400)},
        ),
        db_path=db_path,
    )


@pytest.fixture
async def all_tiers(db_path):
    """One row per tier for US females aged 19-30."""
    return {
        "pregnancy": await _add(db_path, Gender.FEMALE, "Pregnancy"),
        "lactation": await _add(db_path, Gender.FEMALE, "Lactation, 0-6 months postpartum"),
        "female": await _add(db_path, Gender.FEMALE),
        "common": await _add(db_path, Gender.COMMON),
        "female_notes": await _add(db_path, Gender.FEMALE, "Vegetarian diet"),
        "common_notes": await _add(db_path, Gender.COMMON, "Vegetarian diet"),
    }


# =============================================================================
# Tier order
# =============================================================================

async def test_pregnancy_row_preferred(db_path, all_tiers):
    row = await resolve_guideline("US", "female", 25, pregnancy=True, db_path=db_path)
    assert row.id == all_tiers["pregnancy"]
    assert is_condition_specific(row)


async def test_lactation_row_preferred(db_path, all_tiers):
    row = await resolve_guideline("US", "female", 25, lactation=True, db_path=db_path)
    assert row.id == all_tiers["lactation"]


async def test_pregnancy_wins_when_both_flags_set(db_path, all_tiers):
    row = await resolve_guideline("US", "female", 25, pregnancy=True, lactation=True, db_path=db_path)
    assert row.id == all_tiers["pregnancy"]


async def test_gender_specific_without_notes(db_path, all_tiers):
    row = await resolve_guideline("US", "female", 25, db_path=db_path)
    assert row.id == all_tiers["female"]
    assert not is_condition_specific(row)


async def test_common_without_notes(db_path, all_tiers):
    # No male rows at all, so the common row is next
    row = await resolve_guideline("US", "male", 25, db_path=db_path)
    assert row.id == all_tiers["common"]


async def test_gender_specific_with_notes(db_path):
    female_notes = await _add(db_path, Gender.FEMALE, "Vegetarian diet")
    await _add(db_path, Gender.COMMON, "Vegetarian diet")

    row = await resolve_guideline("US", "female", 25, db_path=db_path)
    assert row.id == female_notes


async def test_common_with_notes(db_path):
    common_notes = await _add(db_path, Gender.COMMON, "Vegetarian diet")
    row = await resolve_guideline("US", "male", 25, db_path=db_path)
    assert row.id == common_notes


async def test_missing_pregnancy_row_falls_back(db_path):
    female = await _add(db_path, Gender.FEMALE)
    row = await resolve_guideline("US", "female", 25, pregnancy=True, db_path=db_path)
    assert row.id == female


async def test_male_pregnancy_flag_ignored(db_path):
    await _add(db_path, Gender.MALE, "Pregnancy")
    male = await _add(db_path, Gender.MALE)

    row = await resolve_guideline("US", "male", 25, pregnancy=True, db_path=db_path)
    assert row.id == male


# =============================================================================
# Notes handling
# =============================================================================

async def test_condition_rows_never_used_as_fallback(db_path):
    await _add(db_path, Gender.FEMALE, "Pregnancy")
    await _add(db_path, Gender.COMMON, "lactation")

    assert await resolve_guideline("US", "female", 25, db_path=db_path) is None


async def test_condition_match_is_case_insensitive(db_path):
    pregnancy = await _add(db_path, Gender.FEMALE, "PREGNANCY (2nd trimester)")
    await _add(db_path, Gender.FEMALE)

    row = await resolve_guideline("US", "female", 25, pregnancy=True, db_path=db_path)
    assert row.id == pregnancy


async def test_blank_notes_count_as_absent(db_path):
    blank = await _add(db_path, Gender.FEMALE, "   ")
    row = await resolve_guideline("US", "female", 25, db_path=db_path)
    assert row.id == blank


# =============================================================================
# Filters and edge cases
# =============================================================================

async def test_age_range_is_inclusive(db_path):
    female = await _add(db_path, Gender.FEMALE, age_min=19, age_max=30)

    assert (await resolve_guideline("US", "female", 19, db_path=db_path)).id == female
    assert (await resolve_guideline("US", "female", 30, db_path=db_path)).id == female
    assert await resolve_guideline("US", "female", 30.5, db_path=db_path) is None


async def test_age_outside_all_rows_is_not_found(db_path, all_tiers):
    assert await resolve_guideline("US", "female", 75, db_path=db_path) is None


async def test_country_is_filtered(db_path):
    await _add(db_path, Gender.FEMALE, country=GuidelineSource.UK)
    assert await resolve_guideline("US", "female", 25, db_path=db_path) is None


async def test_lowest_id_wins_within_tier(db_path):
    first = await _add(db_path, Gender.FEMALE)
    await _add(db_path, Gender.FEMALE)

    row = await resolve_guideline("US", "female", 25, db_path=db_path)
    assert row.id == first


async def test_resolved_row_matches_request(seeded_db_path):
    for country in ("US", "UK"):
        for gender in ("male", "female"):
            row = await resolve_guideline(country, gender, 27, db_path=seeded_db_path)
            assert row.age_min <= 27 <= row.age_max
            assert row.country.value == country
            assert row.gender in (Gender(gender), Gender.COMMON)
            assert row.micronutrients


async def test_common_row_serves_both_genders(seeded_db_path):
    female = await resolve_guideline(GuidelineSource.EU, "female", 40, db_path=seeded_db_path)
    male = await resolve_guideline(GuidelineSource.EU, "male", 40, db_path=seeded_db_path)
    assert female.id == male.id
    assert female.gender is Gender.COMMON


@pytest.mark.parametrize("country, gender", [
    ("Canada", "female"),
    ("US", "common"),
    ("US", "nonbinary"),
])
async def test_invalid_inputs_rejected(db_path, country, gender):
    with pytest.raises(ValueError):
        await resolve_guideline(country, gender, 25, db_path=db_path)

"""
Database Layer Tests

Run with:
    pytest tests/test_database.py -v
"""

import sqlite3

import pytest

from micronutrients.database import (
    NotesFilter,
    find_guideline,
    get_country_guideline_source,
    get_country_mapping,
    get_database_stats,
    get_db,
    list_guidelines,
    reset_database,
    upsert_country_mapping,
)
from micronutrients.database.seed_data import DEFAULT_COUNTRY_GUIDELINE_MAPPING, SAMPLE_GUIDELINES
from micronutrients.models import Gender, GuidelineSource


async def test_seeded_stats(seeded_db_path):
    stats = await get_database_stats(seeded_db_path)

    assert stats["guidelines"] == len(SAMPLE_GUIDELINES)
    assert stats["country_mappings"] == len({name.lower() for name in DEFAULT_COUNTRY_GUIDELINE_MAPPING})
    assert stats["active_client_requirements"] == 0
    assert stats["database_path"] == str(seeded_db_path)


async def test_guidelines_round_trip(seeded_db_path):
    rows = await list_guidelines(GuidelineSource.US, db_path=seeded_db_path)

    assert [row.gender for row in rows] == [Gender.FEMALE, Gender.FEMALE, Gender.MALE]
    assert rows[1].notes == "Pregnancy"
    assert rows[0].micronutrients["folate"].unit == "mcg"
    assert rows[0].micronutrients["folate"].rni is None


async def test_find_guideline_requires_condition(db_path):
    with pytest.raises(ValueError):
        await find_guideline(GuidelineSource.US, Gender.FEMALE, 25, NotesFilter.CONDITION, db_path=db_path)


async def test_country_mapping_lookup(seeded_db_path):
    assert await get_country_guideline_source("  Germany ", db_path=seeded_db_path) is GuidelineSource.EU
    assert await get_country_guideline_source("USA", db_path=seeded_db_path) is GuidelineSource.US
    assert await get_country_guideline_source("india", db_path=seeded_db_path) is GuidelineSource.INDIA
    assert await get_country_guideline_source("Kenya", db_path=seeded_db_path) is GuidelineSource.WHO


async def test_country_mapping_upsert(db_path):
    await upsert_country_mapping("Norway", GuidelineSource.WHO, db_path=db_path)
    await upsert_country_mapping("NORWAY", GuidelineSource.EU, "NNR", db_path=db_path)

    mapping = await get_country_mapping("norway", db_path=db_path)
    assert mapping == {"country_name": "norway", "guideline_source": "EU", "guideline_type": "NNR"}


async def test_second_active_row_rejected(db_path):
    insert = """
        INSERT INTO client_micronutrient_requirements
            (client_id, micronutrient_recommendations, country_guideline, is_active)
        VALUES (?, '{}', 'US', ?)
    """
    async with get_db(db_path) as db:
        await db.execute(insert, ("client-1", 1))
        await db.execute(insert, ("client-1", 0))
        await db.commit()

        with pytest.raises(sqlite3.IntegrityError):
            await db.execute(insert, ("client-1", 1))


async def test_reset_database(seeded_db_path):
    await reset_database(seeded_db_path)
    stats = await get_database_stats(seeded_db_path)
    assert stats["guidelines"] == 0
    assert stats["country_mappings"] == 0

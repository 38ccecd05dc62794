"""
Shared fixtures: a fresh SQLite database per test.
"""

import pytest

from micronutrients.database import initialize_database
from micronutrients.database.seed_data import seed_country_mappings, seed_sample_guidelines


@pytest.fixture
async def db_path(tmp_path):
    """Empty database with all tables created."""
    path = tmp_path / "micronutrients_test.db"
    await initialize_database(path)
    return path


@pytest.fixture
async def seeded_db_path(db_path):
    """Database with the default country mapping and sample guidelines."""
    await seed_country_mappings(db_path)
    await seed_sample_guidelines(db_path)
    return db_path

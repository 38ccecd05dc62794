"""
Database Setup and Initialization

Creates the SQLite tables for reference guidelines, the country mapping and
client requirement history. Uses aiosqlite for async operations.
"""

import aiosqlite
import logging
from pathlib import Path
from typing import Optional
from contextlib import asynccontextmanager

from micronutrients import config

logger = logging.getLogger(__name__)


def _resolve_path(db_path: Optional[Path]) -> Path:
    return Path(db_path) if db_path else config.DB_PATH


async def initialize_database(db_path: Optional[Path] = None) -> None:
    """
    Initialize SQLite database with all required tables.

    Creates tables for:
    - micronutrient_guidelines: Reference values per source/gender/age band
    - country_guideline_mapping: Country name -> guideline source
    - client_micronutrient_requirements: Adjusted targets per client

    Args:
        db_path: Optional custom database path
    """
    path = _resolve_path(db_path)
    logger.info(f"Initializing database at: {path}")

    async with aiosqlite.connect(path) as db:
        # Reference guideline rows
        await db.execute("""
            CREATE TABLE IF NOT EXISTS micronutrient_guidelines (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                country TEXT NOT NULL CHECK(country IN ('UK', 'US', 'India', 'EU', 'WHO')),
                gender TEXT NOT NULL CHECK(gender IN ('male', 'female', 'common')),
                age_min REAL NOT NULL,
                age_max REAL NOT NULL,
                guideline_type TEXT,
                notes TEXT,
                micronutrients TEXT NOT NULL,
                created_at TEXT DEFAULT CURRENT_TIMESTAMP,
                CHECK(age_min <= age_max)
            )
        """)

        # Country name to guideline source
        await db.execute("""
            CREATE TABLE IF NOT EXISTS country_guideline_mapping (
                country_name TEXT PRIMARY KEY,
                guideline_source TEXT NOT NULL CHECK(guideline_source IN ('UK', 'US', 'India', 'EU', 'WHO')),
                guideline_type TEXT
            )
        """)

        # Client requirement history ("active" marks the current record)
        await db.execute("""
            CREATE TABLE IF NOT EXISTS client_micronutrient_requirements (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                client_id TEXT NOT NULL,
                micronutrient_recommendations TEXT NOT NULL,
                country_guideline TEXT NOT NULL CHECK(country_guideline IN ('UK', 'US', 'India', 'EU', 'WHO')),
                guideline_type TEXT,
                calculation_method TEXT DEFAULT 'standard',
                calculation_factors TEXT,
                is_ai_generated BOOLEAN DEFAULT 0,
                is_active BOOLEAN DEFAULT 1,
                created_at TEXT DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Create indexes for faster queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_guidelines_country_gender
            ON micronutrient_guidelines(country, gender, age_min, age_max)
        """)

        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_client_requirements_client
            ON client_micronutrient_requirements(client_id, created_at)
        """)

        # At most one active requirements record per client
        await db.execute("""
            CREATE UNIQUE INDEX IF NOT EXISTS idx_client_requirements_one_active
            ON client_micronutrient_requirements(client_id)
            WHERE is_active = 1
        """)

        await db.commit()
        logger.info("✓ Database tables created successfully")


@asynccontextmanager
async def get_db(db_path: Optional[Path] = None):
    """
    Async context manager for database connections.

    Usage:
        async with get_db() as db:
            await db.execute(...)

    Args:
        db_path: Optional custom database path

    Yields:
        aiosqlite.Connection: Database connection
    """
    path = _resolve_path(db_path)
    db = await aiosqlite.connect(path)
    db.row_factory = aiosqlite.Row  # Enable dict-like row access

    try:
        yield db
    finally:
        await db.close()


async def reset_database(db_path: Optional[Path] = None) -> None:
    """
    Drop all tables and reinitialize database.

    WARNING: This deletes all data, reference guidelines included!

    Args:
        db_path: Optional custom database path
    """
    path = _resolve_path(db_path)
    logger.warning(f"⚠️ Resetting database at: {path}")

    async with aiosqlite.connect(path) as db:
        await db.execute("DROP TABLE IF EXISTS client_micronutrient_requirements")
        await db.execute("DROP TABLE IF EXISTS country_guideline_mapping")
        await db.execute("DROP TABLE IF EXISTS micronutrient_guidelines")
        await db.commit()

    # Reinitialize
    await initialize_database(db_path)
    logger.info("✓ Database reset complete")


async def get_database_stats(db_path: Optional[Path] = None) -> dict:
    """
    Get statistics about the database.

    Returns:
        dict: Row counts for each table
    """
    async with get_db(db_path) as db:
        cursor = await db.execute("SELECT COUNT(*) as count FROM micronutrient_guidelines")
        guideline_count = (await cursor.fetchone())["count"]

        cursor = await db.execute("SELECT COUNT(*) as count FROM country_guideline_mapping")
        mapping_count = (await cursor.fetchone())["count"]

        cursor = await db.execute(
            "SELECT COUNT(*) as count FROM client_micronutrient_requirements WHERE is_active = 1"
        )
        active_count = (await cursor.fetchone())["count"]

        return {
            "guidelines": guideline_count,
            "country_mappings": mapping_count,
            "active_client_requirements": active_count,
            "database_path": str(_resolve_path(db_path)),
        }


# =============================================================================
# CLI Testing
# =============================================================================

if __name__ == "__main__":
    import asyncio

    config.configure_logging()

    async def test_database():
        """Create tables, seed the country mapping and print row counts"""
        from micronutrients.database.seed_data import seed_country_mappings

        print("\n" + "="*60)
        print("Testing Database Setup")
        print("="*60 + "\n")

        await initialize_database()
        await seed_country_mappings()

        stats = await get_database_stats()
        print("\nDatabase Statistics:")
        for key, value in stats.items():
            print(f"  {key}: {value}")

        print("\n✓ Database setup test complete!\n")

    asyncio.run(test_database())

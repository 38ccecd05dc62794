"""
Reference Guideline Database Operations

Read access to the micronutrient guideline table and the country mapping,
plus the inserts used to load reference data.
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from micronutrients.models import Gender, GuidelineRow, GuidelineSource
from .db_setup import get_db

logger = logging.getLogger(__name__)

DEFAULT_GUIDELINE_SOURCE = GuidelineSource.WHO

# Notes keywords that mark a physiological-state specific row
CONDITION_KEYWORDS = ("pregnancy", "lactation")


class NotesFilter(str, Enum):
    """How a guideline query constrains the free-text notes column"""
    EMPTY = "empty"          # no notes at all
    CONDITION = "condition"  # notes mention the given condition
    OTHER = "other"          # notes present but not pregnancy/lactation


def _row_to_guideline(row) -> GuidelineRow:
    data = dict(row)
    data["micronutrients"] = json.loads(data["micronutrients"] or "{}")
    data.pop("created_at", None)
    return GuidelineRow.model_validate(data)


# =============================================================================
# Guideline Lookups
# =============================================================================

async def find_guideline(
    country: GuidelineSource,
    gender: Gender,
    age: float,
    notes_filter: NotesFilter,
    condition: Optional[str] = None,
    db_path: Optional[Path] = None
) -> Optional[GuidelineRow]:
    """
    Find one guideline row covering age for the given source and gender.

    Args:
        country: Guideline source
        gender: Row gender to match ('male', 'female' or 'common')
        age: Client age in years (inclusive range match)
        notes_filter: Constraint on the notes column
        condition: Keyword the notes must contain (NotesFilter.CONDITION only)
        db_path: Optional custom database path

    Returns:
        GuidelineRow or None if nothing matches. When several rows match,
        the one with the lowest id is returned.
    """
    query = """
        SELECT * FROM micronutrient_guidelines
        WHERE country = ? AND gender = ? AND age_min <= ? AND age_max >= ?
    """
    params: List[Any] = [country.value, gender.value, float(age), float(age)]

    if notes_filter is NotesFilter.EMPTY:
        query += " AND (notes IS NULL OR TRIM(notes) = '')"
    elif notes_filter is NotesFilter.CONDITION:
        if not condition:
            raise ValueError("condition is required when filtering notes by condition")
        # LIKE is case-insensitive for ASCII in SQLite
        query += " AND notes LIKE ?"
        params.append(f"%{condition}%")
    else:
        query += " AND notes IS NOT NULL AND TRIM(notes) != ''"
        for keyword in CONDITION_KEYWORDS:
            query += " AND notes NOT LIKE ?"
            params.append(f"%{keyword}%")

    query += " ORDER BY id LIMIT 1"

    async with get_db(db_path) as db:
        cursor = await db.execute(query, params)
        row = await cursor.fetchone()

    if not row:
        return None
    return _row_to_guideline(row)


async def insert_guideline(guideline: GuidelineRow, db_path: Optional[Path] = None) -> int:
    """
    Insert a reference guideline row.

    Returns:
        int: id of the new row
    """
    micronutrients = {
        key: value.model_dump(exclude_none=True)
        for key, value in guideline.micronutrients.items()
    }

    async with get_db(db_path) as db:
        cursor = await db.execute(
            """
            INSERT INTO micronutrient_guidelines (
                country, gender, age_min, age_max, guideline_type, notes, micronutrients
            )
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                guideline.country.value,
                guideline.gender.value,
                guideline.age_min,
                guideline.age_max,
                guideline.guideline_type,
                guideline.notes,
                json.dumps(micronutrients),
            )
        )
        await db.commit()
        guideline_id = cursor.lastrowid

    logger.debug(
        f"Inserted guideline {guideline_id}: {guideline.country.value} {guideline.gender.value} "
        f"{guideline.age_min}-{guideline.age_max}"
    )
    return guideline_id


async def list_guidelines(
    country: Optional[GuidelineSource] = None,
    db_path: Optional[Path] = None
) -> List[GuidelineRow]:
    """List reference rows, optionally for a single source, ordered by id"""
    async with get_db(db_path) as db:
        if country is None:
            cursor = await db.execute("SELECT * FROM micronutrient_guidelines ORDER BY id")
        else:
            cursor = await db.execute(
                "SELECT * FROM micronutrient_guidelines WHERE country = ? ORDER BY id",
                (country.value,)
            )
        return [_row_to_guideline(row) async for row in cursor]


# =============================================================================
# Country Mapping
# =============================================================================

def _normalize_country_name(country_name: str) -> str:
    return " ".join(country_name.split()).lower()


async def get_country_mapping(
    country_name: str,
    db_path: Optional[Path] = None
) -> Optional[Dict[str, Any]]:
    """
    Get the mapping row for a country name (case-insensitive).

    Returns:
        dict with country_name, guideline_source, guideline_type or None
    """
    async with get_db(db_path) as db:
        cursor = await db.execute(
            "SELECT * FROM country_guideline_mapping WHERE country_name = ?",
            (_normalize_country_name(country_name),)
        )
        row = await cursor.fetchone()

    return dict(row) if row else None


async def get_country_guideline_source(
    country_name: str,
    db_path: Optional[Path] = None
) -> GuidelineSource:
    """
    Map a country name to the guideline source its clients are assessed against.

    Countries without a mapping fall back to WHO reference values.
    """
    mapping = await get_country_mapping(country_name, db_path)
    if not mapping:
        logger.warning(
            f"No guideline mapping for country {country_name!r}, "
            f"using {DEFAULT_GUIDELINE_SOURCE.value}"
        )
        return DEFAULT_GUIDELINE_SOURCE

    return GuidelineSource(mapping["guideline_source"])


async def upsert_country_mapping(
    country_name: str,
    guideline_source: GuidelineSource,
    guideline_type: Optional[str] = None,
    db_path: Optional[Path] = None
) -> None:
    """Create or replace the mapping for a country name"""
    async with get_db(db_path) as db:
        await db.execute(
            """
            INSERT INTO country_guideline_mapping (country_name, guideline_source, guideline_type)
            VALUES (?, ?, ?)
            ON CONFLICT(country_name) DO UPDATE SET
                guideline_source = excluded.guideline_source,
                guideline_type = excluded.guideline_type
            """,
            (_normalize_country_name(country_name), guideline_source.value, guideline_type)
        )
        await db.commit()

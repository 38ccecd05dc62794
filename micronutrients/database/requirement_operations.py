"""
Client Requirements Database Operations

Persistence for derived micronutrient requirements. Each client has a history
of records; at most one of them is active.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

from micronutrients.models import ClientRequirements
from .db_setup import get_db

logger = logging.getLogger(__name__)


def _row_to_requirements(row) -> ClientRequirements:
    data = dict(row)
    data["micronutrient_recommendations"] = json.loads(data["micronutrient_recommendations"])
    factors = data.get("calculation_factors")
    data["calculation_factors"] = json.loads(factors) if factors else None
    data["is_ai_generated"] = bool(data["is_ai_generated"])
    data["is_active"] = bool(data["is_active"])
    return ClientRequirements.model_validate(data)


async def save_client_requirements(
    requirements: ClientRequirements,
    db_path: Optional[Path] = None
) -> ClientRequirements:
    """
    Save requirements as the client's active record.

    Previously active records for the client are deactivated in the same
    transaction as the insert.

    Args:
        requirements: Requirements to store (id/created_at are ignored)
        db_path: Optional custom database path

    Returns:
        ClientRequirements: The stored record with id and created_at

    Raises:
        aiosqlite.Error: If the store rejects the write (rolled back first)
    """
    recommendations = {
        key: value.model_dump(exclude_none=True)
        for key, value in requirements.micronutrient_recommendations.items()
    }
    factors = (
        requirements.calculation_factors.model_dump(mode="json")
        if requirements.calculation_factors else None
    )

    async with get_db(db_path) as db:
        try:
            await db.execute("BEGIN IMMEDIATE")

            await db.execute(
                """
                UPDATE client_micronutrient_requirements
                SET is_active = 0
                WHERE client_id = ? AND is_active = 1
                """,
                (requirements.client_id,)
            )

            cursor = await db.execute(
                """
                INSERT INTO client_micronutrient_requirements (
                    client_id, micronutrient_recommendations, country_guideline,
                    guideline_type, calculation_method, calculation_factors,
                    is_ai_generated, is_active
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, 1)
                """,
                (
                    requirements.client_id,
                    json.dumps(recommendations),
                    requirements.country_guideline.value,
                    requirements.guideline_type,
                    requirements.calculation_method,
                    json.dumps(factors) if factors is not None else None,
                    1 if requirements.is_ai_generated else 0,
                )
            )
            requirements_id = cursor.lastrowid

            await db.commit()
        except Exception:
            await db.rollback()
            logger.error(f"Error saving requirements for client {requirements.client_id}")
            raise

        cursor = await db.execute(
            "SELECT * FROM client_micronutrient_requirements WHERE id = ?",
            (requirements_id,)
        )
        saved = _row_to_requirements(await cursor.fetchone())

    logger.info(f"✓ Saved requirements {saved.id} for client {saved.client_id}")
    return saved


async def get_active_client_requirements(
    client_id: str,
    db_path: Optional[Path] = None
) -> Optional[ClientRequirements]:
    """
    Get the client's active requirements record.

    Returns:
        ClientRequirements or None if the client has no active record
    """
    async with get_db(db_path) as db:
        cursor = await db.execute(
            """
            SELECT * FROM client_micronutrient_requirements
            WHERE client_id = ? AND is_active = 1
            ORDER BY id DESC
            LIMIT 1
            """,
            (client_id,)
        )
        row = await cursor.fetchone()

    if not row:
        return None
    return _row_to_requirements(row)


async def get_client_requirements_history(
    client_id: str,
    limit: int = 20,
    offset: int = 0,
    db_path: Optional[Path] = None
) -> List[ClientRequirements]:
    """
    Get a client's requirement records, newest first.

    Args:
        client_id: Client identifier
        limit: Number of records to return
        offset: Number of records to skip
    """
    async with get_db(db_path) as db:
        cursor = await db.execute(
            """
            SELECT * FROM client_micronutrient_requirements
            WHERE client_id = ?
            ORDER BY id DESC
            LIMIT ? OFFSET ?
            """,
            (client_id, limit, offset)
        )
        return [_row_to_requirements(row) async for row in cursor]

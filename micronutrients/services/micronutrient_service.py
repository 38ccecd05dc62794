"""
Micronutrient Requirements Service

Caller-facing entry point tying the resolver, adjuster, comparator and stores
together:

    service = MicronutrientService()
    requirements = await service.calculate_client_requirements_by_country_name(
        "client-1", "United Kingdom", "female", 29,
        {"pregnancy": True, "activity_level": "active"},
    )
    await service.save_client_requirements(requirements)
"""

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from micronutrients.database import (
    get_active_client_requirements,
    get_client_requirements_history,
    get_country_guideline_source,
    save_client_requirements,
)
from micronutrients.models import (
    AdjustmentFactors,
    ClientRequirements,
    Gender,
    GuidelineRow,
    GuidelineSource,
    NutrientComparison,
)
from .guideline_resolver import is_condition_specific, resolve_guideline
from .intake_comparator import compare_intake
from .requirement_adjuster import adjust_requirements

logger = logging.getLogger(__name__)


class MicronutrientService:
    """Guideline lookup, requirement calculation and intake comparison"""

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = db_path

    # =========================================================================
    # Guidelines
    # =========================================================================

    async def get_guidelines(
        self,
        country: Union[str, GuidelineSource],
        gender: Union[str, Gender],
        age: float,
        pregnancy: bool = False,
        lactation: bool = False
    ) -> Optional[GuidelineRow]:
        """Get the reference guideline row for a demographic"""
        return await resolve_guideline(
            country, gender, age, pregnancy, lactation, db_path=self.db_path
        )

    async def get_guidelines_by_country_name(
        self,
        country_name: str,
        gender: Union[str, Gender],
        age: float,
        pregnancy: bool = False,
        lactation: bool = False
    ) -> Optional[GuidelineRow]:
        """Get the reference guideline row using a country name (e.g. "France")"""
        source = await get_country_guideline_source(country_name, db_path=self.db_path)
        return await self.get_guidelines(source, gender, age, pregnancy, lactation)

    # =========================================================================
    # Requirements
    # =========================================================================

    async def calculate_client_requirements(
        self,
        client_id: str,
        country: Union[str, GuidelineSource],
        gender: Union[str, Gender],
        age: float,
        adjustment_factors: Optional[Union[AdjustmentFactors, dict]] = None
    ) -> Optional[ClientRequirements]:
        """
        Calculate (but do not save) micronutrient requirements for a client.

        Pregnancy/lactation multipliers are skipped when the resolved row is
        already a pregnancy or lactation row.

        Args:
            client_id: Client identifier
            country: Guideline source
            gender: 'male' or 'female'
            age: Age in years
            adjustment_factors: pregnancy, lactation, activity_level, health_conditions

        Returns:
            ClientRequirements or None if no guideline matches

        Raises:
            ValueError: Unknown source, gender or activity level
        """
        factors = (
            AdjustmentFactors.model_validate(adjustment_factors)
            if adjustment_factors is not None else None
        )

        guideline = await self.get_guidelines(
            country,
            gender,
            age,
            pregnancy=factors.pregnancy if factors else False,
            lactation=factors.lactation if factors else False,
        )
        if not guideline:
            return None

        applied = factors
        if factors and is_condition_specific(guideline):
            logger.debug(f"Guideline {guideline.id} is condition-specific, skipping pregnancy/lactation multipliers")
            applied = factors.model_copy(update={"pregnancy": False, "lactation": False})

        adjusted = adjust_requirements(guideline.micronutrients, guideline.country, applied)

        return ClientRequirements(
            client_id=client_id,
            micronutrient_recommendations=adjusted,
            country_guideline=guideline.country,
            guideline_type=guideline.guideline_type,
            calculation_method="standard",
            calculation_factors=factors,
            is_ai_generated=False,
            is_active=True,
        )

    async def calculate_client_requirements_by_country_name(
        self,
        client_id: str,
        country_name: str,
        gender: Union[str, Gender],
        age: float,
        adjustment_factors: Optional[Union[AdjustmentFactors, dict]] = None
    ) -> Optional[ClientRequirements]:
        """Calculate requirements using a country name instead of a guideline source"""
        source = await get_country_guideline_source(country_name, db_path=self.db_path)
        return await self.calculate_client_requirements(
            client_id, source, gender, age, adjustment_factors
        )

    async def save_client_requirements(self, requirements: ClientRequirements) -> ClientRequirements:
        """Store requirements as the client's only active record"""
        return await save_client_requirements(requirements, db_path=self.db_path)

    async def get_active_client_requirements(self, client_id: str) -> Optional[ClientRequirements]:
        return await get_active_client_requirements(client_id, db_path=self.db_path)

    async def get_client_requirements_history(
        self,
        client_id: str,
        limit: int = 20,
        offset: int = 0
    ) -> List[ClientRequirements]:
        return await get_client_requirements_history(
            client_id, limit=limit, offset=offset, db_path=self.db_path
        )

    # =========================================================================
    # Intake
    # =========================================================================

    def compare_intake_with_requirements(
        self,
        requirements: ClientRequirements,
        daily_intake: Mapping[str, float]
    ) -> Dict[str, NutrientComparison]:
        """Compare one day's intake with the client's requirements"""
        return compare_intake(requirements, daily_intake)

"""
Reference Data Seeding

Default country -> guideline source mapping, and a small set of adult
reference rows (US DRI, UK DRV, EFSA) for local runs and tests.

Run this ONCE against a fresh database:
    python -m micronutrients.database.seed_data
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from micronutrients.models import Gender, GuidelineRow, GuidelineSource, NutrientValue
from .guideline_operations import insert_guideline, upsert_country_mapping

logger = logging.getLogger(__name__)


# =============================================================================
# Country Mapping
# country name -> (guideline source, guideline type)
# =============================================================================

_EU_MEMBER_STATES = (
    "Austria", "Belgium", "Bulgaria", "Croatia", "Cyprus", "Czech Republic",
    "Denmark", "Estonia", "Finland", "France", "Germany", "Greece", "Hungary",
    "Ireland", "Italy", "Latvia", "Lithuania", "Luxembourg", "Malta",
    "Netherlands", "Poland", "Portugal", "Romania", "Slovakia", "Slovenia",
    "Spain", "Sweden",
)

DEFAULT_COUNTRY_GUIDELINE_MAPPING: Dict[str, Tuple[GuidelineSource, str]] = {
    "United Kingdom": (GuidelineSource.UK, "DRV"),
    "UK": (GuidelineSource.UK, "DRV"),
    "England": (GuidelineSource.UK, "DRV"),
    "Scotland": (GuidelineSource.UK, "DRV"),
    "Wales": (GuidelineSource.UK, "DRV"),
    "Northern Ireland": (GuidelineSource.UK, "DRV"),
    "United States": (GuidelineSource.US, "DRI"),
    "USA": (GuidelineSource.US, "DRI"),
    "India": (GuidelineSource.INDIA, "ICMR-NIN"),
    **{name: (GuidelineSource.EU, "EFSA DRV") for name in _EU_MEMBER_STATES},
}


async def seed_country_mappings(db_path: Optional[Path] = None) -> int:
    """Upsert the default country mapping; returns the number of rows written"""
    for country_name, (source, guideline_type) in DEFAULT_COUNTRY_GUIDELINE_MAPPING.items():
        await upsert_country_mapping(country_name, source, guideline_type, db_path=db_path)

    logger.info(f"✓ Seeded {len(DEFAULT_COUNTRY_GUIDELINE_MAPPING)} country mappings")
    return len(DEFAULT_COUNTRY_GUIDELINE_MAPPING)


# =============================================================================
# Reference Guidelines
# =============================================================================

def _us(rda: float, unit: str, ul: Optional[float] = None, ear: Optional[float] = None) -> NutrientValue:
    return NutrientValue(rda=rda, ear=ear, ul=ul, unit=unit)


def _uk(rni: float, lrni: float, unit: str) -> NutrientValue:
    return NutrientValue(rni=rni, lrni=lrni, unit=unit)


SAMPLE_GUIDELINES: List[GuidelineRow] = [
    GuidelineRow(
        country=GuidelineSource.US, gender=Gender.FEMALE, age_min=19, age_max=30,
        guideline_type="DRI",
        micronutrients={
            "vitamin_a": _us(700, "mcg", ul=3000, ear=500),
            "vitamin_c": _us(75, "mg", ul=2000, ear=60),
            "vitamin_d": _us(15, "mcg", ul=100, ear=10),
            "thiamin": _us(1.1, "mg", ear=0.9),
            "riboflavin": _us(1.1, "mg", ear=0.9),
            "niacin": _us(14, "mg", ul=35, ear=11),
            "vitamin_b6": _us(1.3, "mg", ul=100, ear=1.1),
            "folate": _us(400, "mcg", ul=1000, ear=320),
            "vitamin_b12": _us(2.4, "mcg", ear=2.0),
            "calcium": _us(1000, "mg", ul=2500, ear=800),
            "iron": _us(18, "mg", ul=45, ear=8.1),
            "magnesium": _us(310, "mg", ul=350, ear=255),
            "zinc": _us(8, "mg", ul=40, ear=6.8),
            "iodine": _us(150, "mcg", ul=1100, ear=95),
        },
    ),
    GuidelineRow(
        country=GuidelineSource.US, gender=Gender.FEMALE, age_min=19, age_max=30,
        guideline_type="DRI", notes="Pregnancy",
        micronutrients={
            "vitamin_a": _us(770, "mcg", ul=3000, ear=550),
            "vitamin_c": _us(85, "mg", ul=2000, ear=70),
            "vitamin_d": _us(15, "mcg", ul=100, ear=10),
            "thiamin": _us(1.4, "mg", ear=1.2),
            "riboflavin": _us(1.4, "mg", ear=1.2),
            "niacin": _us(18, "mg", ul=35, ear=14),
            "vitamin_b6": _us(1.9, "mg", ul=100, ear=1.6),
            "folate": _us(600, "mcg", ul=1000, ear=520),
            "vitamin_b12": _us(2.6, "mcg", ear=2.2),
            "calcium": _us(1000, "mg", ul=2500, ear=800),
            "iron": _us(27, "mg", ul=45, ear=22),
            "magnesium": _us(350, "mg", ul=350, ear=290),
            "zinc": _us(11, "mg", ul=40, ear=9.5),
            "iodine": _us(220, "mcg", ul=1100, ear=160),
        },
    ),
    GuidelineRow(
        country=GuidelineSource.US, gender=Gender.MALE, age_min=19, age_max=30,
        guideline_type="DRI",
        micronutrients={
            "vitamin_a": _us(900, "mcg", ul=3000, ear=625),
            "vitamin_c": _us(90, "mg", ul=2000, ear=75),
            "vitamin_d": _us(15, "mcg", ul=100, ear=10),
            "thiamin": _us(1.2, "mg", ear=1.0),
            "riboflavin": _us(1.3, "mg", ear=1.1),
            "niacin": _us(16, "mg", ul=35, ear=12),
            "vitamin_b6": _us(1.3, "mg", ul=100, ear=1.1),
            "folate": _us(400, "mcg", ul=1000, ear=320),
            "vitamin_b12": _us(2.4, "mcg", ear=2.0),
            "calcium": _us(1000, "mg", ul=2500, ear=800),
            "iron": _us(8, "mg", ul=45, ear=6),
            "magnesium": _us(400, "mg", ul=350, ear=330),
            "zinc": _us(11, "mg", ul=40, ear=9.4),
            "iodine": _us(150, "mcg", ul=1100, ear=95),
        },
    ),
    GuidelineRow(
        country=GuidelineSource.UK, gender=Gender.FEMALE, age_min=19, age_max=50,
        guideline_type="DRV",
        micronutrients={
            "vitamin_a": _uk(600, 250, "mcg"),
            "vitamin_c": _uk(40, 10, "mg"),
            "vitamin_d": NutrientValue(rni=10, unit="mcg"),
            "thiamin": _uk(0.8, 0.45, "mg"),
            "riboflavin": _uk(1.1, 0.8, "mg"),
            "niacin": _uk(13.2, 8.8, "mg"),
            "vitamin_b6": _uk(1.2, 0.9, "mg"),
            "folate": _uk(200, 100, "mcg"),
            "vitamin_b12": _uk(1.5, 1.0, "mcg"),
            "calcium": _uk(700, 400, "mg"),
            "iron": _uk(14.8, 8.0, "mg"),
            "magnesium": _uk(270, 150, "mg"),
            "zinc": _uk(7.0, 4.0, "mg"),
            "iodine": _uk(140, 70, "mcg"),
        },
    ),
    GuidelineRow(
        country=GuidelineSource.UK, gender=Gender.MALE, age_min=19, age_max=50,
        guideline_type="DRV",
        micronutrients={
            "vitamin_a": _uk(700, 300, "mcg"),
            "vitamin_c": _uk(40, 10, "mg"),
            "vitamin_d": NutrientValue(rni=10, unit="mcg"),
            "thiamin": _uk(1.0, 0.6, "mg"),
            "riboflavin": _uk(1.3, 0.8, "mg"),
            "niacin": _uk(16.5, 11.0, "mg"),
            "vitamin_b6": _uk(1.4, 1.0, "mg"),
            "folate": _uk(200, 100, "mcg"),
            "vitamin_b12": _uk(1.5, 1.0, "mcg"),
            "calcium": _uk(700, 400, "mg"),
            "iron": _uk(8.7, 4.7, "mg"),
            "magnesium": _uk(300, 190, "mg"),
            "zinc": _uk(9.5, 5.5, "mg"),
            "iodine": _uk(140, 70, "mcg"),
        },
    ),
    GuidelineRow(
        country=GuidelineSource.EU, gender=Gender.COMMON, age_min=18, age_max=120,
        guideline_type="EFSA DRV",
        micronutrients={
            "vitamin_d": NutrientValue(ai=15, ul=100, unit="mcg"),
            "folate": NutrientValue(pri=330, ar=250, ul=1000, unit="mcg"),
            "calcium": NutrientValue(pri=950, ar=750, ul=2500, unit="mg"),
            "iodine": NutrientValue(ai=150, ul=600, unit="mcg"),
            "magnesium": NutrientValue(ai=300, ul=250, unit="mg"),
            "vitamin_b12": NutrientValue(ai=4.0, unit="mcg"),
        },
    ),
]


async def seed_sample_guidelines(db_path: Optional[Path] = None) -> List[int]:
    """Insert SAMPLE_GUIDELINES; returns the new row ids"""
    ids = [await insert_guideline(row, db_path=db_path) for row in SAMPLE_GUIDELINES]
    logger.info(f"✓ Seeded {len(ids)} reference guideline rows")
    return ids


if __name__ == "__main__":
    import asyncio

    from micronutrients.config import configure_logging
    from .db_setup import initialize_database

    configure_logging()

    async def seed():
        await initialize_database()
        await seed_country_mappings()
        await seed_sample_guidelines()

    asyncio.run(seed())

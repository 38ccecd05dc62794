"""
Guideline Resolver

Picks the single best reference row for a client. Lookups run through a
priority-ordered list of tiers and stop at the first tier that matches:

1. Pregnancy/lactation rows (female clients in that state only)
2. Gender-specific rows without notes
3. Common-gender rows without notes
4. Gender-specific rows with other notes
5. Common-gender rows with other notes
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from micronutrients.database import NotesFilter, find_guideline
from micronutrients.database.guideline_operations import CONDITION_KEYWORDS
from micronutrients.models import Gender, GuidelineRow, GuidelineSource
from micronutrients.utils import parse_client_gender, parse_guideline_source

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GuidelineTier:
    """One step of the lookup order"""
    name: str
    client_gender: bool  # False -> match 'common' rows
    notes_filter: NotesFilter


LOOKUP_TIERS = (
    GuidelineTier("pregnancy/lactation", True, NotesFilter.CONDITION),
    GuidelineTier("gender-specific", True, NotesFilter.EMPTY),
    GuidelineTier("common gender", False, NotesFilter.EMPTY),
    GuidelineTier("gender-specific with notes", True, NotesFilter.OTHER),
    GuidelineTier("common gender with notes", False, NotesFilter.OTHER),
)


def physiological_condition(gender: Gender, pregnancy: bool, lactation: bool) -> Optional[str]:
    """Notes keyword to prefer for this client, if any (pregnancy wins over lactation)"""
    if gender is not Gender.FEMALE:
        return None
    if pregnancy:
        return "pregnancy"
    if lactation:
        return "lactation"
    return None


def is_condition_specific(guideline: GuidelineRow) -> bool:
    """True if the row's notes mark it as a pregnancy or lactation row"""
    notes = (guideline.notes or "").lower()
    return any(keyword in notes for keyword in CONDITION_KEYWORDS)


async def resolve_guideline(
    country: Union[str, GuidelineSource],
    gender: Union[str, Gender],
    age: float,
    pregnancy: bool = False,
    lactation: bool = False,
    db_path: Optional[Path] = None
) -> Optional[GuidelineRow]:
    """
    Resolve the reference guideline row for a client.

    Args:
        country: Guideline source ('UK', 'US', 'India', 'EU', 'WHO')
        gender: 'male' or 'female'
        age: Age in years (fractional ages allowed)
        pregnancy: Client is pregnant
        lactation: Client is lactating
        db_path: Optional custom database path

    Returns:
        GuidelineRow or None if no tier matches

    Raises:
        ValueError: Unknown guideline source or gender
    """
    source = parse_guideline_source(country)
    client_gender = parse_client_gender(gender)
    client_age = float(age)
    condition = physiological_condition(client_gender, pregnancy, lactation)

    logger.debug(
        f"Resolving guideline: country={source.value}, gender={client_gender.value}, "
        f"age={client_age}, pregnancy={pregnancy}, lactation={lactation}"
    )

    for tier in LOOKUP_TIERS:
        if tier.notes_filter is NotesFilter.CONDITION and condition is None:
            continue

        row_gender = client_gender if tier.client_gender else Gender.COMMON
        guideline = await find_guideline(
            source,
            row_gender,
            client_age,
            tier.notes_filter,
            condition=condition,
            db_path=db_path,
        )

        if guideline:
            logger.info(
                f"✓ Found {tier.name} guideline {guideline.id} for {client_gender.value}, "
                f"age {client_age}, country {source.value}"
            )
            return guideline

        if tier.notes_filter is NotesFilter.CONDITION:
            logger.warning(
                f"No specific {condition} guideline for {client_gender.value}, age {client_age}, "
                f"country {source.value}; falling back to regular guidelines"
            )
        else:
            logger.debug(f"No {tier.name} guideline, trying next tier")

    logger.info(f"No guidelines found for {client_gender.value}, age {client_age}, country {source.value}")
    return None

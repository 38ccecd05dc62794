"""
Intake Comparator

Compares logged daily intake with a client's requirements and classifies each
nutrient as deficient, low, adequate, high or excessive.
"""

import math
from typing import Dict, Mapping, Optional

from micronutrients.models import ClientRequirements, GuidelineSource, IntakeStatus, NutrientComparison
from micronutrients.utils import get_lower_limit, get_primary_value, get_upper_limit

# Share of the requirement below which intake counts as deficient when the
# guideline has no lower reference value
DEFICIENT_RATIO = 0.7
# Share of the requirement above which intake counts as high
HIGH_RATIO = 1.5


def classify_intake(
    intake: float,
    required: Optional[float],
    country: GuidelineSource,
    upper_limit: Optional[float] = None,
    lower_limit: Optional[float] = None
) -> IntakeStatus:
    """
    Classify intake against the requirement.

    UK guidelines carry an LRNI, which is used as the deficiency threshold.
    Other sources use 70% of the requirement instead.

    Example:
        >>> classify_intake(40, 100, GuidelineSource.UK, lower_limit=50)
        <IntakeStatus.DEFICIENT: 'deficient'>
    """
    target = required or 0

    if country is GuidelineSource.UK and lower_limit:
        deficient = intake < lower_limit
    else:
        deficient = intake < target * DEFICIENT_RATIO

    if deficient:
        return IntakeStatus.DEFICIENT
    if intake < target:
        return IntakeStatus.LOW
    if upper_limit and intake > upper_limit:
        return IntakeStatus.EXCESSIVE
    if intake > target * HIGH_RATIO:
        return IntakeStatus.HIGH
    return IntakeStatus.ADEQUATE


def _intake_amount(value) -> float:
    """Logged amount as a float; missing or non-numeric values count as 0"""
    try:
        amount = float(value or 0)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(amount) else amount


def compare_intake(
    requirements: ClientRequirements,
    daily_intake: Mapping[str, float]
) -> Dict[str, NutrientComparison]:
    """
    Compare daily intake with every nutrient in the requirements.

    Args:
        requirements: Client requirements (adjusted recommendations)
        daily_intake: Nutrient key -> amount eaten; missing or non-numeric
            amounts count as 0

    Returns:
        Dict of nutrient key -> NutrientComparison
    """
    country = requirements.country_guideline
    comparison: Dict[str, NutrientComparison] = {}

    for key, nutrient in requirements.micronutrient_recommendations.items():
        required = get_primary_value(nutrient, country)
        intake = _intake_amount(daily_intake.get(key))
        upper_limit = get_upper_limit(nutrient, country)
        lower_limit = get_lower_limit(nutrient, country)

        percentage = (intake / required) * 100 if required else 0.0

        comparison[key] = NutrientComparison(
            required=required,
            intake=intake,
            percentage=percentage,
            status=classify_intake(intake, required, country, upper_limit, lower_limit),
            upper_limit=upper_limit,
            lower_limit=lower_limit,
        )

    return comparison

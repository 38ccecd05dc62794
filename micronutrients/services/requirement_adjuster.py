"""
Requirement Adjuster

Scales a guideline's reference values for activity level, pregnancy and
lactation. Passes run in that order and multiply the already-adjusted value,
always on the source's primary field (RNI, RDA, PRI/AI, ...).
"""

import logging
from typing import Dict, Mapping, Optional, Union

from pydantic import ValidationError

from micronutrients.models import ActivityLevel, AdjustmentFactors, GuidelineSource, NutrientValue
from micronutrients.utils import get_primary_value, parse_guideline_source, set_primary_value

logger = logging.getLogger(__name__)


# =============================================================================
# Multiplier Tables
# =============================================================================

# Typical increases during pregnancy
PREGNANCY_MULTIPLIERS: Dict[str, float] = {
    "folate": 1.5,          # neural tube development
    "iron": 1.5,
    "vitamin_d": 1.0,
    "vitamin_c": 1.1,
    "calcium": 1.0,         # absorption adapts
    "iodine": 1.5,
    "vitamin_b12": 1.1,
    "zinc": 1.2,
    "vitamin_a": 1.1,
    "thiamin": 1.2,
    "riboflavin": 1.2,
    "niacin": 1.1,
    "vitamin_b6": 1.5,
}

LACTATION_MULTIPLIERS: Dict[str, float] = {
    "vitamin_a": 1.4,
    "vitamin_c": 1.5,
    "calcium": 1.0,
    "iodine": 1.5,
    "zinc": 1.3,
    "vitamin_b12": 1.2,
    "riboflavin": 1.3,
}

ACTIVITY_FACTORS: Dict[ActivityLevel, float] = {
    ActivityLevel.VERY_ACTIVE: 1.2,
    ActivityLevel.ACTIVE: 1.1,
}
DEFAULT_ACTIVITY_FACTOR = 1.05

# B vitamins and minerals lost with higher activity
ACTIVITY_NUTRIENTS = ("thiamin", "riboflavin", "niacin", "iron", "magnesium")
ZINC_ACTIVITY_SCALE = 0.9


def activity_multipliers(activity_level: ActivityLevel) -> Dict[str, float]:
    """
    Multipliers for an activity level (empty for sedentary).

    Example:
        >>> activity_multipliers(ActivityLevel.ACTIVE)["iron"]
        1.1
    """
    if activity_level is ActivityLevel.SEDENTARY:
        return {}

    factor = ACTIVITY_FACTORS.get(activity_level, DEFAULT_ACTIVITY_FACTOR)
    multipliers = {nutrient: factor for nutrient in ACTIVITY_NUTRIENTS}
    multipliers["zinc"] = factor * ZINC_ACTIVITY_SCALE
    return multipliers


def apply_multipliers(
    micronutrients: Dict[str, NutrientValue],
    country: GuidelineSource,
    multipliers: Mapping[str, float]
) -> None:
    """Scale primary values in place; missing nutrients and empty values are skipped"""
    for key, multiplier in multipliers.items():
        nutrient = micronutrients.get(key)
        if nutrient is None:
            continue

        primary_value = get_primary_value(nutrient, country)
        if primary_value:
            set_primary_value(nutrient, country, primary_value * multiplier)


def _copy_nutrients(base_micronutrients: Mapping[str, Union[NutrientValue, dict]]) -> Dict[str, NutrientValue]:
    """Deep copy of the base values; null or malformed entries are dropped"""
    copied: Dict[str, NutrientValue] = {}
    for key, value in base_micronutrients.items():
        if value is None:
            continue
        try:
            copied[key] = NutrientValue.model_validate(value).model_copy(deep=True)
        except ValidationError:
            logger.debug(f"Skipping malformed reference values for {key!r}")
    return copied


def adjust_requirements(
    base_micronutrients: Mapping[str, Union[NutrientValue, dict]],
    country: Union[str, GuidelineSource],
    factors: Optional[Union[AdjustmentFactors, dict]] = None
) -> Dict[str, NutrientValue]:
    """
    Apply activity, pregnancy and lactation adjustments to reference values.

    The input mapping is never modified; a deep copy is adjusted and returned.
    Null or malformed nutrient entries are left out of the result.
    health_conditions is accepted with the factors but has no adjustment.

    Args:
        base_micronutrients: Nutrient key -> reference values
        country: Guideline source deciding which field is primary
        factors: Adjustment factors (None -> plain copy)

    Returns:
        Dict of nutrient key -> adjusted NutrientValue

    Raises:
        ValueError: Unknown guideline source or activity level

    Example:
        >>> adjusted = adjust_requirements({"folate": {"rda": 400}}, "US", {"pregnancy": True})
        >>> adjusted["folate"].rda
        600.0
    """
    source = parse_guideline_source(country)
    adjusted = _copy_nutrients(base_micronutrients)

    if factors is None:
        return adjusted
    factors = AdjustmentFactors.model_validate(factors)

    if factors.activity_level and factors.activity_level is not ActivityLevel.SEDENTARY:
        apply_multipliers(adjusted, source, activity_multipliers(factors.activity_level))

    if factors.pregnancy:
        apply_multipliers(adjusted, source, PREGNANCY_MULTIPLIERS)

    if factors.lactation:
        apply_multipliers(adjusted, source, LACTATION_MULTIPLIERS)

    return adjusted

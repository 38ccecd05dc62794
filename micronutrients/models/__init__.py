"""
Micronutrient data models
"""

from .micronutrient_models import (
    GuidelineSource,
    Gender,
    ActivityLevel,
    IntakeStatus,
    NutrientValue,
    GuidelineRow,
    AdjustmentFactors,
    ClientRequirements,
    NutrientComparison,
)

__all__ = [
    "GuidelineSource",
    "Gender",
    "ActivityLevel",
    "IntakeStatus",
    "NutrientValue",
    "GuidelineRow",
    "AdjustmentFactors",
    "ClientRequirements",
    "NutrientComparison",
]

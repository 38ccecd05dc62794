"""
Micronutrients Services Package

- Guideline resolution (five-tier lookup)
- Requirement adjustment (activity, pregnancy, lactation)
- Intake comparison
- MicronutrientService facade
"""

from .guideline_resolver import LOOKUP_TIERS, resolve_guideline, is_condition_specific
from .requirement_adjuster import (
    PREGNANCY_MULTIPLIERS,
    LACTATION_MULTIPLIERS,
    activity_multipliers,
    adjust_requirements,
)
from .intake_comparator import classify_intake, compare_intake
from .micronutrient_service import MicronutrientService

__all__ = [
    "LOOKUP_TIERS",
    "resolve_guideline",
    "is_condition_specific",
    "PREGNANCY_MULTIPLIERS",
    "LACTATION_MULTIPLIERS",
    "activity_multipliers",
    "adjust_requirements",
    "classify_intake",
    "compare_intake",
    "MicronutrientService",
]

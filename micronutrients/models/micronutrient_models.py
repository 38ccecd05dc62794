"""
Pydantic Models for Micronutrient Guidelines and Client Requirements

Reference guideline rows, derived client requirement records, and the
per-nutrient intake comparison returned to callers.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Enumerations
# ============================================================================

class GuidelineSource(str, Enum):
    """Country/organisation whose reference values a guideline row carries"""
    UK = "UK"
    US = "US"
    INDIA = "India"
    EU = "EU"
    WHO = "WHO"


class Gender(str, Enum):
    """Gender tag on guideline rows ('common' applies to both)"""
    MALE = "male"
    FEMALE = "female"
    COMMON = "common"


class ActivityLevel(str, Enum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class IntakeStatus(str, Enum):
    DEFICIENT = "deficient"
    LOW = "low"
    ADEQUATE = "adequate"
    HIGH = "high"
    EXCESSIVE = "excessive"


# ============================================================================
# Reference Data
# ============================================================================

class NutrientValue(BaseModel):
    """
    Reference amounts for one nutrient.

    Which field is populated depends on the guideline source:
    - UK: rni (Reference Nutrient Intake), lrni (Lower RNI), sul (Safe Upper Level)
    - US/India: rda (Recommended Dietary Allowance), ear (Estimated Average Requirement)
    - EU: pri (Population Reference Intake), ar (Average Requirement)
    - WHO: rni
    - Any source: ai (Adequate Intake), ul (Tolerable Upper Intake Level)
    """
    rni: Optional[float] = None
    lrni: Optional[float] = None
    rda: Optional[float] = None
    ear: Optional[float] = None
    pri: Optional[float] = None
    ar: Optional[float] = None
    ai: Optional[float] = None
    ul: Optional[float] = None
    sul: Optional[float] = None
    unit: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class GuidelineRow(BaseModel):
    """One row of the reference guideline table"""
    id: Optional[int] = None
    country: GuidelineSource
    gender: Gender
    age_min: float
    age_max: float
    guideline_type: Optional[str] = None
    notes: Optional[str] = None
    micronutrients: Dict[str, NutrientValue] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


# ============================================================================
# Client Requirements
# ============================================================================

class AdjustmentFactors(BaseModel):
    """Physiological and activity factors applied on top of a guideline"""
    pregnancy: bool = False
    lactation: bool = False
    activity_level: Optional[ActivityLevel] = None
    health_conditions: List[str] = Field(
        default_factory=list,
        description="Recorded with the requirements; no adjustment is derived from it"
    )


class ClientRequirements(BaseModel):
    """Adjusted micronutrient targets for a single client"""
    id: Optional[int] = None
    client_id: str
    micronutrient_recommendations: Dict[str, NutrientValue]
    country_guideline: GuidelineSource
    guideline_type: Optional[str] = None
    calculation_method: str = "standard"
    calculation_factors: Optional[AdjustmentFactors] = None
    is_ai_generated: bool = False
    is_active: bool = True
    created_at: Optional[str] = None


class NutrientComparison(BaseModel):
    """Intake versus requirement for one nutrient"""
    required: Optional[float] = None
    intake: float = 0.0
    percentage: float = 0.0
    status: IntakeStatus
    upper_limit: Optional[float] = None
    lower_limit: Optional[float] = None

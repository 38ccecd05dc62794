"""
Micronutrients Utilities Package

Helper functions shared by the services:
- Guideline-source field selection (primary value, upper/lower limits)
- Boundary parsing of source and gender inputs
"""

from .nutrient_values import (
    primary_field,
    get_primary_value,
    get_upper_limit,
    get_lower_limit,
    set_primary_value,
    parse_guideline_source,
    parse_client_gender,
)

__all__ = [
    "primary_field",
    "get_primary_value",
    "get_upper_limit",
    "get_lower_limit",
    "set_primary_value",
    "parse_guideline_source",
    "parse_client_gender",
]

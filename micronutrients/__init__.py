"""
Micronutrients - Personalised Micronutrient Requirements

Computes recommended micronutrient intake targets from national reference
guidelines (UK, US, India, EU, WHO) and compares logged intake against them.

Components:
- Guideline Resolver: Best-matching reference row for a client's demographics
- Requirement Adjuster: Activity, pregnancy and lactation multipliers
- Comparator: Intake status per nutrient (deficient ... excessive)

MicronutrientService: Coordinates lookup, adjustment and persistence
"""

from micronutrients.services import MicronutrientService

__version__ = "0.1.0"

__all__ = [
    "MicronutrientService",
    "__version__",
]

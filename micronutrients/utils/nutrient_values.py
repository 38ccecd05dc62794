"""
Guideline Field Selection

Each guideline source names its reference values differently (RNI, RDA, PRI,
...). These tables map a source to the NutrientValue field that holds the
recommended amount and its upper/lower safe limits, so the rest of the code
never branches on the country.
"""

from typing import Dict, Optional, Tuple, Union

from micronutrients.models import Gender, GuidelineSource, NutrientValue


# =============================================================================
# Field Tables
# Candidates are tried in order; the first non-null one wins, otherwise the
# last candidate is used.
# =============================================================================

PRIMARY_FIELDS: Dict[GuidelineSource, Tuple[str, ...]] = {
    GuidelineSource.UK: ("rni",),
    GuidelineSource.EU: ("pri", "ai"),
    GuidelineSource.WHO: ("rni", "ai"),
    GuidelineSource.US: ("rda",),
    GuidelineSource.INDIA: ("rda",),
}

UPPER_LIMIT_FIELDS: Dict[GuidelineSource, Tuple[str, ...]] = {
    GuidelineSource.UK: ("sul", "ul"),
    GuidelineSource.EU: ("ul",),
    GuidelineSource.WHO: ("ul",),
    GuidelineSource.US: ("ul",),
    GuidelineSource.INDIA: ("ul",),
}

LOWER_LIMIT_FIELDS: Dict[GuidelineSource, Tuple[str, ...]] = {
    GuidelineSource.UK: ("lrni",),
    GuidelineSource.EU: ("ar",),
    GuidelineSource.WHO: (),
    GuidelineSource.US: ("ear",),
    GuidelineSource.INDIA: ("ear",),
}


# =============================================================================
# Boundary Parsing
# =============================================================================

def parse_guideline_source(value: Union[str, GuidelineSource]) -> GuidelineSource:
    """Return the GuidelineSource for value, raising ValueError if unknown"""
    try:
        return GuidelineSource(value)
    except ValueError:
        allowed = ", ".join(s.value for s in GuidelineSource)
        raise ValueError(f"Unknown guideline source {value!r} (expected one of: {allowed})") from None


def parse_client_gender(value: Union[str, Gender]) -> Gender:
    """Clients are 'male' or 'female'; 'common' only appears on guideline rows"""
    try:
        gender = Gender(value)
    except ValueError:
        raise ValueError(f"Unknown gender {value!r} (expected 'male' or 'female')") from None

    if gender is Gender.COMMON:
        raise ValueError("Client gender must be 'male' or 'female', not 'common'")
    return gender


# =============================================================================
# Field Lookup
# =============================================================================

def _select_field(nutrient: NutrientValue, candidates: Tuple[str, ...]) -> Optional[str]:
    if not candidates:
        return None
    for name in candidates[:-1]:
        if getattr(nutrient, name, None) is not None:
            return name
    return candidates[-1]


def _read_field(nutrient: NutrientValue, candidates: Tuple[str, ...]) -> Optional[float]:
    name = _select_field(nutrient, candidates)
    return getattr(nutrient, name, None) if name else None


def primary_field(nutrient: NutrientValue, source: GuidelineSource) -> str:
    """
    Name of the field holding the recommended amount for this source.

    Example:
        >>> primary_field(NutrientValue(ai=10), GuidelineSource.EU)
        'ai'
        >>> primary_field(NutrientValue(pri=11, ai=10), GuidelineSource.EU)
        'pri'
    """
    return _select_field(nutrient, PRIMARY_FIELDS[source])


def get_primary_value(nutrient: NutrientValue, source: GuidelineSource) -> Optional[float]:
    return _read_field(nutrient, PRIMARY_FIELDS[source])


def get_upper_limit(nutrient: NutrientValue, source: GuidelineSource) -> Optional[float]:
    return _read_field(nutrient, UPPER_LIMIT_FIELDS[source])


def get_lower_limit(nutrient: NutrientValue, source: GuidelineSource) -> Optional[float]:
    return _read_field(nutrient, LOWER_LIMIT_FIELDS[source])


def set_primary_value(nutrient: NutrientValue, source: GuidelineSource, value: float) -> None:
    """Overwrite the primary field in place; other fields are untouched"""
    setattr(nutrient, primary_field(nutrient, source), value)

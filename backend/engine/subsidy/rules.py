"""BEG EM heat-pump funding rules: rates, caps and classification sets.

Rates are percentages of the eligible costs.  The base rate and the
efficiency bonus apply to the building as a whole; the climate-speed and
income bonuses are personal bonuses for self-occupiers.
"""

from __future__ import annotations

from enum import Enum

# ======================================================================
# Enumerations
# ======================================================================


class BuildingType(str, Enum):
    SINGLE_FAMILY = "single_family_home"
    MULTI_FAMILY = "multi_family_home"
    CONDOMINIUM = "condominium_assoc"


class HeatSource(str, Enum):
    AIR = "air"
    GROUND = "ground"
    WATER = "water"


class PriorHeating(str, Enum):
    OIL = "oil"
    GAS_FLOOR = "gas_floor"
    COAL = "coal"
    NIGHT_STORAGE = "night_storage"
    GAS_BOILER = "gas_boiler"
    BIOMASS = "biomass"
    OTHER = "other"


class HeatingAge(str, Enum):
    OLDER_20 = "older_20"
    YOUNGER_20 = "younger_20"


class IncomeBracket(str, Enum):
    UNDER_40K = "under_40k"
    OVER_40K = "over_40k"


class DenialReason(str, Enum):
    """Why a bonus was not granted."""

    REQUIREMENTS_NOT_MET = "requirements_not_met"
    MORE_INFORMATION_REQUIRED = "more_information_required"
    SELF_OCCUPIER_ONLY = "self_occupier_only"
    HEATING_NOT_ELIGIBLE = "heating_not_eligible"
    INCOME_ABOVE_THRESHOLD = "income_above_threshold"


class ValidationReason(str, Enum):
    """Why a funding request cannot be computed."""

    BUILDING_TYPE_MISSING = "building_type_missing"
    INVALID_TOTAL_COSTS = "invalid_total_costs"
    INSUFFICIENT_UNITS = "insufficient_units"
    OWNERSHIP_SHARE_MISSING = "ownership_share_missing"
    INVALID_OWNERSHIP_SHARE = "invalid_ownership_share"
    PRIOR_HEATING_MISSING = "prior_heating_missing"
    HEATING_AGE_MISSING = "heating_age_missing"


# ======================================================================
# Rates (%)
# ======================================================================

BASE_RATE: float = 30.0
EFFICIENCY_BONUS_RATE: float = 5.0
SPEED_BONUS_RATE: float = 20.0
INCOME_BONUS_RATE: float = 30.0

MAX_RATE_SELF_OCCUPIER: float = 70.0
MAX_RATE_LANDLORD: float = 35.0

INCOME_THRESHOLD_EUR: int = 40_000

# ======================================================================
# Eligible-cost cap (EUR)
# ======================================================================

FIRST_UNIT_COST_CAP: float = 30_000.0
UNITS_2_TO_6_INCREMENT: float = 15_000.0
MAX_MID_TIER_INCREMENTS: int = 5
UNITS_ABOVE_6_INCREMENT: float = 8_000.0

MIN_SHARED_BUILDING_UNITS: int = 2

# ======================================================================
# Classification sets
# ======================================================================

EFFICIENT_HEAT_SOURCES = frozenset({HeatSource.GROUND, HeatSource.WATER})

# Replacing these always qualifies for the climate-speed bonus.
QUICK_BONUS_HEATING = frozenset(
    {PriorHeating.GAS_FLOOR, PriorHeating.OIL, PriorHeating.COAL, PriorHeating.NIGHT_STORAGE}
)

# Replacing these qualifies only when the system is at least 20 years old.
AGE_DEPENDENT_HEATING = frozenset({PriorHeating.GAS_BOILER, PriorHeating.BIOMASS})

SHARED_BUILDING_TYPES = frozenset({BuildingType.MULTI_FAMILY, BuildingType.CONDOMINIUM})


def is_self_occupier(building_type: BuildingType | None, self_use: bool) -> bool:
    """Whether the applicant lives in the building.

    Multi-family owners count only when they use a unit themselves.
    """
    if building_type in (BuildingType.SINGLE_FAMILY, BuildingType.CONDOMINIUM):
        return True
    if building_type is BuildingType.MULTI_FAMILY:
        return self_use
    return False


def max_rate(self_occupier: bool) -> float:
    """Ceiling of the combined funding rate for the occupancy class."""
    return MAX_RATE_SELF_OCCUPIER if self_occupier else MAX_RATE_LANDLORD


def max_eligible_costs(units: int) -> float:
    """Eligible-cost cap for a building with *units* residential units.

    30 000 EUR for the first unit, 15 000 EUR for each of units 2-6 and
    8 000 EUR for every further unit.
    """
    if units <= 1:
        return FIRST_UNIT_COST_CAP
    costs = FIRST_UNIT_COST_CAP + min(MAX_MID_TIER_INCREMENTS, units - 1) * UNITS_2_TO_6_INCREMENT
    if units > 6:
        costs += (units - 6) * UNITS_ABOVE_6_INCREMENT
    return costs

"""Heat-pump subsidy calculator (BEG EM).

Validates a funding request, determines the efficiency, climate-speed and
income bonuses, stacks them under the occupancy-class cap and allocates
the funding according to the building type:

* single-family homes and rented multi-family homes receive one rate on
  the eligible costs;
* owner-occupied multi-family homes split into a common part (base +
  efficiency on the full eligible costs) and a personal part (speed +
  income on the eligible costs of one unit);
* condominium owners receive their ownership share of the common part
  plus the personal part.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from .rules import (
    AGE_DEPENDENT_HEATING,
    BASE_RATE,
    EFFICIENCY_BONUS_RATE,
    EFFICIENT_HEAT_SOURCES,
    INCOME_BONUS_RATE,
    MAX_RATE_SELF_OCCUPIER,
    MIN_SHARED_BUILDING_UNITS,
    QUICK_BONUS_HEATING,
    SHARED_BUILDING_TYPES,
    SPEED_BONUS_RATE,
    BuildingType,
    DenialReason,
    HeatingAge,
    HeatSource,
    IncomeBracket,
    PriorHeating,
    ValidationReason,
    is_self_occupier,
    max_eligible_costs,
    max_rate,
)

logger = logging.getLogger(__name__)


class FundingValidationError(ValueError):
    """The funding request is incomplete or inconsistent.

    Parameters
    ----------
    reason : ValidationReason
        Machine-readable cause, rendered into a message by the host.
    params : dict
        Values referenced by the message (e.g. ``{"min_units": 2}``).
    """

    def __init__(self, reason: ValidationReason, params: dict[str, Any] | None = None) -> None:
        self.reason = reason
        self.params = params or {}
        super().__init__(reason.value)


# ======================================================================
# Data classes
# ======================================================================


@dataclass(frozen=True)
class FundingInputs:
    building_type: BuildingType | None
    total_costs: float
    residential_units: int = 1
    self_use: bool = False
    ownership_share: float = 0.0
    heat_source: HeatSource = HeatSource.AIR
    prior_heating: PriorHeating | None = None
    prior_heating_age: HeatingAge | None = None
    income_bracket: IncomeBracket = IncomeBracket.OVER_40K
    natural_refrigerant: bool = False

    @property
    def is_self_occupier(self) -> bool:
        return is_self_occupier(self.building_type, self.self_use)

    @property
    def units(self) -> int:
        """Residential units counted for the cost cap."""
        if self.building_type is BuildingType.SINGLE_FAMILY:
            return 1
        return self.residential_units


@dataclass(frozen=True)
class BonusData:
    rate: float
    granted: bool
    reason: DenialReason | None = None

    @classmethod
    def grant(cls, rate: float) -> BonusData:
        return cls(rate=rate, granted=True)

    @classmethod
    def deny(cls, reason: DenialReason) -> BonusData:
        return cls(rate=0.0, granted=False, reason=reason)


@dataclass(frozen=True)
class Bonuses:
    efficiency: BonusData
    speed: BonusData
    income: BonusData


@dataclass(frozen=True)
class FundingAllocation:
    """Common/personal split for multi-family and condominium buildings."""

    common_funding: float
    personal_funding: float
    user_share_of_common: float | None = None


@dataclass(frozen=True)
class FundingResult:
    total_funding: float
    eligible_costs: float
    max_eligible_costs: float
    final_rate: float
    max_rate: float
    is_self_occupier: bool
    bonuses: Bonuses
    allocation: FundingAllocation | None = None


# ======================================================================
# Validation
# ======================================================================


def validate_funding_inputs(inputs: FundingInputs) -> None:
    """Raise :class:`FundingValidationError` for the first failed precondition."""
    if inputs.building_type is None:
        raise FundingValidationError(ValidationReason.BUILDING_TYPE_MISSING)

    if not inputs.total_costs or inputs.total_costs <= 0:
        raise FundingValidationError(ValidationReason.INVALID_TOTAL_COSTS)

    if (
        inputs.building_type in SHARED_BUILDING_TYPES
        and inputs.residential_units < MIN_SHARED_BUILDING_UNITS
    ):
        raise FundingValidationError(
            ValidationReason.INSUFFICIENT_UNITS, {"min_units": MIN_SHARED_BUILDING_UNITS}
        )

    if inputs.building_type is BuildingType.CONDOMINIUM:
        if inputs.ownership_share <= 0:
            raise FundingValidationError(ValidationReason.OWNERSHIP_SHARE_MISSING)
        if inputs.ownership_share > 100:
            raise FundingValidationError(
                ValidationReason.INVALID_OWNERSHIP_SHARE, {"max_share": 100}
            )

    if inputs.is_self_occupier:
        if inputs.prior_heating is None:
            raise FundingValidationError(ValidationReason.PRIOR_HEATING_MISSING)
        if inputs.prior_heating in AGE_DEPENDENT_HEATING and inputs.prior_heating_age is None:
            raise FundingValidationError(ValidationReason.HEATING_AGE_MISSING)


# ======================================================================
# Bonuses
# ======================================================================


def _speed_bonus_eligible(inputs: FundingInputs) -> bool:
    if inputs.prior_heating in QUICK_BONUS_HEATING:
        return True
    return (
        inputs.prior_heating in AGE_DEPENDENT_HEATING
        and inputs.prior_heating_age is HeatingAge.OLDER_20
    )


def determine_bonuses(inputs: FundingInputs) -> Bonuses:
    """Decide which bonuses apply.

    Bonuses are only assessed for self-occupiers; landlords are told the
    efficiency bonus needs further information and that the personal
    bonuses are reserved for self-occupiers.
    """
    if not inputs.is_self_occupier:
        return Bonuses(
            efficiency=BonusData.deny(DenialReason.MORE_INFORMATION_REQUIRED),
            speed=BonusData.deny(DenialReason.SELF_OCCUPIER_ONLY),
            income=BonusData.deny(DenialReason.SELF_OCCUPIER_ONLY),
        )

    if inputs.heat_source in EFFICIENT_HEAT_SOURCES or inputs.natural_refrigerant:
        efficiency = BonusData.grant(EFFICIENCY_BONUS_RATE)
    else:
        efficiency = BonusData.deny(DenialReason.REQUIREMENTS_NOT_MET)

    if _speed_bonus_eligible(inputs):
        speed = BonusData.grant(SPEED_BONUS_RATE)
    else:
        speed = BonusData.deny(DenialReason.HEATING_NOT_ELIGIBLE)

    if inputs.income_bracket is IncomeBracket.UNDER_40K:
        income = BonusData.grant(INCOME_BONUS_RATE)
    else:
        income = BonusData.deny(DenialReason.INCOME_ABOVE_THRESHOLD)

    return Bonuses(efficiency=efficiency, speed=speed, income=income)


# ======================================================================
# Allocation strategies
# ======================================================================


def _common_and_personal(
    inputs: FundingInputs, bonuses: Bonuses, eligible_costs: float
) -> tuple[float, float]:
    common_rate = BASE_RATE + bonuses.efficiency.rate
    common_funding = eligible_costs * common_rate / 100.0

    personal_rate = min(
        bonuses.speed.rate + bonuses.income.rate,
        MAX_RATE_SELF_OCCUPIER - common_rate,
    )
    personal_funding = eligible_costs / inputs.units * personal_rate / 100.0
    return common_funding, personal_funding


def _allocate_single_owner(
    inputs: FundingInputs, bonuses: Bonuses, eligible_costs: float, final_rate: float
) -> tuple[float, FundingAllocation | None]:
    return eligible_costs * final_rate / 100.0, None


def _allocate_multi_family(
    inputs: FundingInputs, bonuses: Bonuses, eligible_costs: float, final_rate: float
) -> tuple[float, FundingAllocation | None]:
    if not inputs.is_self_occupier:
        return _allocate_single_owner(inputs, bonuses, eligible_costs, final_rate)
    common, personal = _common_and_personal(inputs, bonuses, eligible_costs)
    return common + personal, FundingAllocation(common_funding=common, personal_funding=personal)


def _allocate_condominium(
    inputs: FundingInputs, bonuses: Bonuses, eligible_costs: float, final_rate: float
) -> tuple[float, FundingAllocation | None]:
    common, personal = _common_and_personal(inputs, bonuses, eligible_costs)
    user_share = common * inputs.ownership_share / 100.0
    allocation = FundingAllocation(
        common_funding=common,
        personal_funding=personal,
        user_share_of_common=user_share,
    )
    return user_share + personal, allocation


_Allocator = Callable[
    [FundingInputs, Bonuses, float, float], tuple[float, FundingAllocation | None]
]

ALLOCATION_STRATEGIES: dict[BuildingType, _Allocator] = {
    BuildingType.SINGLE_FAMILY: _allocate_single_owner,
    BuildingType.MULTI_FAMILY: _allocate_multi_family,
    BuildingType.CONDOMINIUM: _allocate_condominium,
}


# ======================================================================
# Entry point
# ======================================================================


def compute_subsidy(inputs: FundingInputs) -> FundingResult:
    """Compute the heat-pump funding for one request.

    Raises
    ------
    FundingValidationError
        If a precondition fails; nothing is computed in that case.
    """
    validate_funding_inputs(inputs)

    self_occupier = inputs.is_self_occupier
    bonuses = determine_bonuses(inputs)

    cap = max_eligible_costs(inputs.units)
    eligible_costs = min(inputs.total_costs, cap)

    total_rate = (
        BASE_RATE + bonuses.efficiency.rate + bonuses.speed.rate + bonuses.income.rate
    )
    rate_cap = max_rate(self_occupier)
    final_rate = min(total_rate, rate_cap)

    allocate = ALLOCATION_STRATEGIES[inputs.building_type]
    total_funding, allocation = allocate(inputs, bonuses, eligible_costs, final_rate)

    logger.debug(
        "Subsidy: type=%s units=%d eligible=%.0f EUR rate=%.0f%% funding=%.0f EUR",
        inputs.building_type.value,
        inputs.units,
        eligible_costs,
        final_rate,
        total_funding,
    )

    return FundingResult(
        total_funding=total_funding,
        eligible_costs=eligible_costs,
        max_eligible_costs=cap,
        final_rate=final_rate,
        max_rate=rate_cap,
        is_self_occupier=self_occupier,
        bonuses=bonuses,
        allocation=allocation,
    )

"""Pydantic schemas for the heat-pump subsidy calculation."""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.core.messages import denial_message
from engine.subsidy import (
    BonusData,
    BuildingType,
    FundingInputs,
    FundingResult,
    HeatingAge,
    HeatSource,
    IncomeBracket,
    PriorHeating,
)


class FundingRequest(BaseModel):
    building_type: BuildingType | None = None
    residential_units: int = 1
    self_use: bool = False
    ownership_share: float = Field(default=0.0, description="Ownership share (%)")
    total_costs: float = Field(default=0.0, description="Total costs (EUR)")
    heat_source: HeatSource = HeatSource.AIR
    prior_heating: PriorHeating | None = None
    prior_heating_age: HeatingAge | None = None
    income_bracket: IncomeBracket = IncomeBracket.OVER_40K
    natural_refrigerant: bool = False

    def to_engine(self) -> FundingInputs:
        return FundingInputs(**dict(self))


class ReasonResponse(BaseModel):
    code: str
    message: str


class BonusResponse(BaseModel):
    rate: float
    granted: bool
    reason: ReasonResponse | None = None

    @classmethod
    def from_bonus(cls, bonus: BonusData) -> BonusResponse:
        reason = None
        if bonus.reason is not None:
            reason = ReasonResponse(code=bonus.reason.value, message=denial_message(bonus.reason))
        return cls(rate=bonus.rate, granted=bonus.granted, reason=reason)


class BonusesResponse(BaseModel):
    efficiency: BonusResponse
    speed: BonusResponse
    income: BonusResponse


class AllocationResponse(BaseModel):
    common_funding: float
    personal_funding: float
    user_share_of_common: float | None = None


class FundingResponse(BaseModel):
    total_funding: float
    eligible_costs: float
    max_eligible_costs: float
    final_rate: float
    max_rate: float
    is_self_occupier: bool
    bonuses: BonusesResponse
    allocation: AllocationResponse | None = None

    @classmethod
    def from_result(cls, result: FundingResult) -> FundingResponse:
        allocation = None
        if result.allocation is not None:
            allocation = AllocationResponse(
                common_funding=result.allocation.common_funding,
                personal_funding=result.allocation.personal_funding,
                user_share_of_common=result.allocation.user_share_of_common,
            )
        return cls(
            total_funding=result.total_funding,
            eligible_costs=result.eligible_costs,
            max_eligible_costs=result.max_eligible_costs,
            final_rate=result.final_rate,
            max_rate=result.max_rate,
            is_self_occupier=result.is_self_occupier,
            bonuses=BonusesResponse(
                efficiency=BonusResponse.from_bonus(result.bonuses.efficiency),
                speed=BonusResponse.from_bonus(result.bonuses.speed),
                income=BonusResponse.from_bonus(result.bonuses.income),
            ),
            allocation=allocation,
        )

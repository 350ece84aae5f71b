"""Pydantic schemas for the energy-economics calculation."""

from __future__ import annotations

from dataclasses import asdict

from pydantic import BaseModel, Field

from engine.energy import CalculationResults, CustomerInputs, ExpertSettings


class CustomerInputsSchema(BaseModel):
    household_consumption: float = Field(ge=0, description="Household electricity demand (kWh/yr)")
    heating_consumption: float = Field(ge=0, description="Gas/oil heating demand (kWh/yr)")
    has_e_car: bool = False
    e_car_km: float = Field(default=0.0, ge=0, description="Annual EV distance (km)")
    pv_size: float = Field(gt=0, description="PV capacity (kWp)")
    battery_size: float = Field(default=0.0, ge=0, description="Battery capacity (kWh)")
    has_ems: bool = False
    total_investment: float = Field(ge=0, description="Total system cost (EUR)")
    electricity_price: float = Field(ge=0, description="Electricity price (ct/kWh)")
    gas_price: float = Field(ge=0, description="Gas price (ct/kWh)")

    def to_engine(self) -> CustomerInputs:
        return CustomerInputs(**self.model_dump())


class CO2TaxEntrySchema(BaseModel):
    year: int = Field(ge=2000, le=2100)
    price_per_ton: float = Field(ge=0)


class ExpertSettingsSchema(BaseModel):
    pv_yield_per_kwp: float = Field(ge=0, description="kWh/kWp/yr")
    heat_pump_jaz: float = Field(gt=0, description="Seasonal performance factor")
    base_autarky: float = Field(ge=0, le=100)
    battery_autarky_boost: float = Field(ge=0, le=100)
    ems_autarky_boost: float = Field(ge=0, le=100)
    feed_in_tariff: float = Field(ge=0, description="ct/kWh")
    electricity_price_increase: float = Field(ge=0, le=100)
    gas_price_increase: float = Field(ge=0, le=100)
    co2_tax_schedule: list[CO2TaxEntrySchema]
    co2_emissions_gas: float = Field(ge=0, description="kg CO2/kWh")
    max_autarky_rate: float = Field(default=85.0, ge=0, le=100)
    battery_saturation_kwh: float = Field(default=5.0, gt=0)
    battery_throughput_share: float = Field(default=0.6, ge=0, le=1)
    battery_round_trip_loss: float = Field(default=0.1, ge=0, le=1)

    @classmethod
    def from_engine(cls, expert: ExpertSettings) -> ExpertSettingsSchema:
        return cls.model_validate(expert.to_record())

    def to_engine(self) -> ExpertSettings:
        return ExpertSettings.from_record(self.model_dump())


class EnergyEconomicsRequest(BaseModel):
    customer: CustomerInputsSchema
    expert_settings: ExpertSettingsSchema | None = None
    co2_preset: str | None = Field(
        default=None, description="Named CO2 schedule applied to the expert settings"
    )


# --- Response ---

class SavingsResponse(BaseModel):
    electricity_savings: int
    feed_in_revenue: int
    ems_bonus: int
    heating_savings: int
    total: int


class PerformanceResponse(BaseModel):
    pv_production: int
    self_consumption: int
    feed_in: int
    autarky_rate: int
    self_consumption_rate: int


class ConsumptionResponse(BaseModel):
    e_car: int
    heat_pump: int
    total_demand: int
    grid_electricity: int


class HeatingCostRowResponse(BaseModel):
    year: int
    gas_costs: int
    heat_pump_costs: int
    savings: int


class EnergyEconomicsResponse(BaseModel):
    savings: SavingsResponse
    performance: PerformanceResponse
    consumption: ConsumptionResponse
    heating_comparison: list[HeatingCostRowResponse]
    amortizable: bool
    amortization_years: float | None = Field(
        description="Payback time in years; null when the system never pays back"
    )
    profit_after_20_years: int
    battery_losses: int
    current_gas_costs: int

    @classmethod
    def from_result(cls, result: CalculationResults) -> EnergyEconomicsResponse:
        data = asdict(result)
        data["amortizable"] = result.is_amortizable
        if not result.is_amortizable:
            data["amortization_years"] = None
        return cls.model_validate(data)

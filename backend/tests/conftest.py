"""Shared test fixtures for WattPlan engine and API tests."""

from __future__ import annotations

import pytest

from engine.energy import DEFAULT_EXPERT_SETTINGS, CustomerInputs, ExpertSettings
from engine.subsidy import (
    BuildingType,
    FundingInputs,
    HeatSource,
    IncomeBracket,
    PriorHeating,
)


# ======================================================================
# Energy fixtures
# ======================================================================

@pytest.fixture
def expert_settings() -> ExpertSettings:
    return DEFAULT_EXPERT_SETTINGS


@pytest.fixture
def reference_customer() -> CustomerInputs:
    """Detached house with 10 kWp, 10 kWh battery and EMS replacing gas heating."""
    return CustomerInputs(
        household_consumption=4000,
        heating_consumption=24000,
        has_e_car=False,
        e_car_km=0,
        pv_size=10,
        battery_size=10,
        has_ems=True,
        total_investment=35000,
        electricity_price=28,
        gas_price=11,
    )


@pytest.fixture
def customer_payload() -> dict:
    """JSON body equivalent of ``reference_customer``."""
    return {
        "household_consumption": 4000,
        "heating_consumption": 24000,
        "has_e_car": False,
        "e_car_km": 0,
        "pv_size": 10,
        "battery_size": 10,
        "has_ems": True,
        "total_investment": 35000,
        "electricity_price": 28,
        "gas_price": 11,
    }


# ======================================================================
# Subsidy fixtures
# ======================================================================

@pytest.fixture
def single_family_inputs() -> FundingInputs:
    """Self-occupied house replacing oil heating with a ground-source heat pump."""
    return FundingInputs(
        building_type=BuildingType.SINGLE_FAMILY,
        total_costs=35000,
        heat_source=HeatSource.GROUND,
        prior_heating=PriorHeating.OIL,
        income_bracket=IncomeBracket.UNDER_40K,
    )

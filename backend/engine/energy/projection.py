"""Multi-year heating-cost projection, amortization and profit.

Gas heating is priced with annual price escalation plus the CO2 tax of
each calendar year; the heat pump is priced with the electricity it draws
from the grid.  The heat pump's pro-rata share of PV self-consumption is
taken from the base-year energy balance and held constant over the
horizon.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .balance import EnergyBalance
from .settings import ExpertSettings

# ======================================================================
# Constants
# ======================================================================

HEATING_PROJECTION_YEARS: int = 10
HEATING_PROJECTION_BASE_YEAR: int = 2025
PROFIT_HORIZON_YEARS: int = 20


@dataclass(frozen=True)
class HeatingCostRow:
    """Heating costs of one calendar year in whole EUR."""

    year: int
    gas_costs: int
    heat_pump_costs: int
    savings: int


# ======================================================================
# Internal helpers
# ======================================================================


def _escalation(rate_pct: float, years: NDArray[np.int64]) -> NDArray[np.float64]:
    """Return ``(1 + rate/100) ** (y - 1)`` for each projection year ``y``."""
    return (1.0 + rate_pct / 100.0) ** (years - 1)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to *digits* decimals with exact halves going up, not to even."""
    scale = 10.0**digits
    return math.floor(float(value) * scale + 0.5) / scale


def _round(value: float) -> int:
    return int(round_half_up(value))


# ======================================================================
# CO2 tax
# ======================================================================


def co2_tax_per_kwh(
    calendar_years: NDArray[np.int64], settings: ExpertSettings
) -> NDArray[np.float64]:
    """CO2 tax (EUR/kWh of gas) for each calendar year.

    Years without a schedule entry carry no tax.
    """
    prices = settings.schedule_lookup()
    price_per_ton = np.array(
        [prices.get(int(year), 0.0) for year in calendar_years], dtype=np.float64
    )
    return settings.co2_emissions_gas * price_per_ton / 1000.0


# ======================================================================
# Heating comparison
# ======================================================================


def heat_pump_grid_electricity(balance: EnergyBalance) -> float:
    """Heat-pump electricity not covered by its share of self-consumption."""
    covered = balance.self_consumption * balance.heat_pump_share
    return max(0.0, balance.heat_pump_consumption - covered)


def heating_cost_comparison(
    heating_consumption: float,
    gas_price: float,
    electricity_price: float,
    balance: EnergyBalance,
    settings: ExpertSettings,
    base_year: int = HEATING_PROJECTION_BASE_YEAR,
    years: int = HEATING_PROJECTION_YEARS,
) -> list[HeatingCostRow]:
    """Project gas vs. heat-pump heating costs year by year.

    Parameters
    ----------
    heating_consumption : float
        Gas heating demand (kWh/yr).
    gas_price, electricity_price : float
        Base-year prices (ct/kWh).
    balance : EnergyBalance
        Base-year energy balance of the planned system.
    settings : ExpertSettings
        Escalation rates, CO2 schedule and emission factor.
    base_year : int
        Calendar year of the first projection year.
    years : int
        Projection horizon.

    Returns
    -------
    list of HeatingCostRow
        One row per year with consecutive calendar years.
    """
    offsets = np.arange(1, years + 1, dtype=np.int64)
    calendar_years = base_year + offsets - 1

    gas_unit_price = gas_price / 100.0 * _escalation(settings.gas_price_increase, offsets)
    gas_costs = (gas_unit_price + co2_tax_per_kwh(calendar_years, settings)) * heating_consumption

    electricity_unit_price = (
        electricity_price / 100.0 * _escalation(settings.electricity_price_increase, offsets)
    )
    heat_pump_costs = heat_pump_grid_electricity(balance) * electricity_unit_price

    savings = gas_costs - heat_pump_costs

    return [
        HeatingCostRow(
            year=int(calendar_years[i]),
            gas_costs=_round(gas_costs[i]),
            heat_pump_costs=_round(heat_pump_costs[i]),
            savings=_round(savings[i]),
        )
        for i in range(years)
    ]


# ======================================================================
# Amortization & profit
# ======================================================================


def average_heating_savings(rows: list[HeatingCostRow]) -> float:
    """Mean yearly heating savings over the projection."""
    if not rows:
        return 0.0
    return float(np.mean([row.savings for row in rows]))


def amortization_years(total_investment: float, total_yearly_savings: float) -> float:
    """Simple payback time in years, rounded to one decimal.

    Returns ``float("inf")`` when the system never pays back, i.e. the
    yearly savings are zero or negative.
    """
    if total_yearly_savings <= 0:
        return float("inf")
    return round_half_up(total_investment / total_yearly_savings, 1)


def profit_after_years(
    total_investment: float,
    total_yearly_savings: float,
    years: int = PROFIT_HORIZON_YEARS,
) -> float:
    """Cumulative profit after *years*, extrapolating flat yearly savings."""
    return total_yearly_savings * years - total_investment

"""Energy-economics engine: savings, heating comparison and payback.

:func:`compute_energy_economics` combines the annual energy balance with
the heating-cost projection into a single :class:`CalculationResults`.
Monetary values are in whole EUR, energies in whole kWh/yr and rates in
whole percent; only the amortization time keeps one decimal.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .balance import CustomerInputs, EnergyBalance, compute_energy_balance
from .projection import (
    PROFIT_HORIZON_YEARS,
    HeatingCostRow,
    amortization_years,
    average_heating_savings,
    heating_cost_comparison,
    profit_after_years,
    round_half_up,
)
from .settings import ExpertSettings

logger = logging.getLogger(__name__)


# ======================================================================
# Result records
# ======================================================================


@dataclass(frozen=True)
class SavingsBreakdown:
    electricity_savings: int
    feed_in_revenue: int
    ems_bonus: int
    heating_savings: int
    total: int


@dataclass(frozen=True)
class SystemPerformance:
    pv_production: int
    self_consumption: int
    feed_in: int
    autarky_rate: int
    self_consumption_rate: int


@dataclass(frozen=True)
class ConsumptionBreakdown:
    e_car: int
    heat_pump: int
    total_demand: int
    grid_electricity: int


@dataclass(frozen=True)
class CalculationResults:
    """Outcome of one energy-economics calculation.

    ``amortization_years`` is ``inf`` when the yearly savings never
    recover the investment; check :attr:`is_amortizable` before display.
    """

    savings: SavingsBreakdown
    performance: SystemPerformance
    consumption: ConsumptionBreakdown
    heating_comparison: tuple[HeatingCostRow, ...]
    amortization_years: float
    profit_after_20_years: int
    battery_losses: int
    current_gas_costs: int

    @property
    def is_amortizable(self) -> bool:
        return math.isfinite(self.amortization_years)


# ======================================================================
# Savings
# ======================================================================


def ems_bonus(
    balance: EnergyBalance, customer: CustomerInputs, settings: ExpertSettings
) -> float:
    """Value (EUR/yr) of the self-consumption attributable to the EMS alone.

    Already contained in the electricity savings; reported separately.
    """
    if not customer.has_ems:
        return 0.0
    ems_self_consumption = min(
        balance.pv_production,
        balance.total_demand * settings.ems_autarky_boost / 100.0,
    )
    return ems_self_consumption * customer.electricity_price / 100.0


def _whole(value: float) -> int:
    return int(round_half_up(value))


# ======================================================================
# Entry point
# ======================================================================


def compute_energy_economics(
    customer: CustomerInputs, settings: ExpertSettings
) -> CalculationResults:
    """Run the full energy-economics model for one customer.

    Parameters
    ----------
    customer : CustomerInputs
        Household profile and planned system.
    settings : ExpertSettings
        Model parameters, typically :data:`DEFAULT_EXPERT_SETTINGS` or a
        record loaded from the host's settings store.

    Returns
    -------
    CalculationResults
    """
    balance = compute_energy_balance(customer, settings)

    electricity_savings = balance.self_consumption * customer.electricity_price / 100.0
    feed_in_revenue = balance.feed_in * settings.feed_in_tariff / 100.0
    pv_savings = electricity_savings + feed_in_revenue

    rows = heating_cost_comparison(
        heating_consumption=customer.heating_consumption,
        gas_price=customer.gas_price,
        electricity_price=customer.electricity_price,
        balance=balance,
        settings=settings,
    )
    heating_savings = average_heating_savings(rows)
    total_yearly_savings = pv_savings + heating_savings

    payback = amortization_years(customer.total_investment, total_yearly_savings)
    profit = profit_after_years(
        customer.total_investment, total_yearly_savings, PROFIT_HORIZON_YEARS
    )

    if math.isinf(payback):
        logger.info(
            "System not amortizable: yearly savings %.0f EUR for %.0f EUR investment",
            total_yearly_savings,
            customer.total_investment,
        )
    logger.debug(
        "Energy economics: savings=%.0f EUR/yr payback=%s years profit=%.0f EUR",
        total_yearly_savings,
        payback,
        profit,
    )

    return CalculationResults(
        savings=SavingsBreakdown(
            electricity_savings=_whole(electricity_savings),
            feed_in_revenue=_whole(feed_in_revenue),
            ems_bonus=_whole(ems_bonus(balance, customer, settings)),
            heating_savings=_whole(heating_savings),
            total=_whole(total_yearly_savings),
        ),
        performance=SystemPerformance(
            pv_production=_whole(balance.pv_production),
            self_consumption=_whole(balance.self_consumption),
            feed_in=_whole(balance.feed_in),
            autarky_rate=_whole(balance.autarky_rate),
            self_consumption_rate=_whole(balance.self_consumption_rate),
        ),
        consumption=ConsumptionBreakdown(
            e_car=_whole(balance.e_car_consumption),
            heat_pump=_whole(balance.heat_pump_consumption),
            total_demand=_whole(balance.total_demand),
            grid_electricity=_whole(balance.grid_electricity),
        ),
        heating_comparison=tuple(rows),
        amortization_years=payback,
        profit_after_20_years=_whole(profit),
        battery_losses=_whole(balance.battery_losses),
        current_gas_costs=_whole(customer.gas_price / 100.0 * customer.heating_consumption),
    )

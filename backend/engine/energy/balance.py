"""Annual energy balance of a PV + heat-pump household.

Derives PV production, electrical demand (household, electric vehicle and
heat pump), the achievable autarky rate and the resulting split of PV
energy into self-consumption and grid feed-in.

The battery contribution to autarky follows an exponential saturation
curve: small batteries give fast gains, larger ones approach the
configured boost asymptotically.  Energy cycled through the battery is
subject to a round-trip loss.

All energies are annual values in kWh.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .settings import ExpertSettings

logger = logging.getLogger(__name__)

# ======================================================================
# Constants
# ======================================================================

E_CAR_KWH_PER_100KM: float = 20.0
DAYS_PER_YEAR: int = 365  # one full battery cycle per day at most


# ======================================================================
# Data classes
# ======================================================================


@dataclass(frozen=True)
class CustomerInputs:
    """Household profile and planned system.

    Parameters
    ----------
    household_consumption : float
        Household electricity demand (kWh/yr).
    heating_consumption : float
        Current gas/oil heating demand (kWh/yr).
    has_e_car : bool
        Whether an electric vehicle is charged at home.
    e_car_km : float
        Annual distance of the electric vehicle (km).
    pv_size : float
        Installed PV capacity (kWp).
    battery_size : float
        Battery capacity (kWh); 0 for no battery.
    has_ems : bool
        Whether an energy management system is installed.
    total_investment : float
        Total system cost (EUR).
    electricity_price, gas_price : float
        Current prices (ct/kWh).
    """

    household_consumption: float
    heating_consumption: float
    has_e_car: bool
    e_car_km: float
    pv_size: float
    battery_size: float
    has_ems: bool
    total_investment: float
    electricity_price: float
    gas_price: float

    def __post_init__(self) -> None:
        if self.pv_size <= 0:
            raise ValueError(f"pv_size must be > 0, got {self.pv_size}")
        for name in (
            "household_consumption",
            "heating_consumption",
            "e_car_km",
            "battery_size",
            "total_investment",
            "electricity_price",
            "gas_price",
        ):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")


@dataclass(frozen=True)
class EnergyBalance:
    """Annual energy flows (kWh) and rates (%) of the planned system."""

    pv_production: float
    e_car_consumption: float
    heat_pump_consumption: float
    total_demand: float
    autarky_rate: float
    self_consumption: float
    battery_losses: float
    self_consumption_rate: float
    grid_electricity: float
    feed_in: float

    @property
    def heat_pump_share(self) -> float:
        """Fraction of total demand caused by the heat pump."""
        if self.total_demand <= 0:
            return 0.0
        return self.heat_pump_consumption / self.total_demand


# ======================================================================
# Demand
# ======================================================================


def e_car_consumption(has_e_car: bool, e_car_km: float) -> float:
    """Annual charging demand of an electric vehicle (kWh)."""
    if not has_e_car:
        return 0.0
    return e_car_km / 100.0 * E_CAR_KWH_PER_100KM


def heat_pump_consumption(heating_consumption: float, jaz: float) -> float:
    """Electricity a heat pump needs to replace *heating_consumption* of gas."""
    return heating_consumption / jaz


# ======================================================================
# Autarky
# ======================================================================


def battery_autarky_boost(battery_size: float, settings: ExpertSettings) -> float:
    """Autarky gain (%) from a battery of *battery_size* kWh.

    ``boost * (1 - exp(-size / saturation))``: monotonically
    non-decreasing in battery size and never above the configured boost.
    """
    if battery_size <= 0:
        return 0.0
    saturation = 1.0 - math.exp(-battery_size / settings.battery_saturation_kwh)
    return settings.battery_autarky_boost * saturation


def ems_autarky_boost(has_ems: bool, settings: ExpertSettings) -> float:
    """Autarky gain (%) from an energy management system."""
    return settings.ems_autarky_boost if has_ems else 0.0


def autarky_rate(battery_size: float, has_ems: bool, settings: ExpertSettings) -> float:
    """Annual autarky rate (%), capped at ``settings.max_autarky_rate``.

    Winter production deficits make full autarky unattainable over a
    year, hence the ceiling.
    """
    rate = (
        settings.base_autarky
        + battery_autarky_boost(battery_size, settings)
        + ems_autarky_boost(has_ems, settings)
    )
    return max(0.0, min(rate, settings.max_autarky_rate))


def battery_losses(
    gross_self_consumption: float, battery_size: float, settings: ExpertSettings
) -> float:
    """Round-trip losses (kWh/yr) of the energy cycled through the battery.

    The cycled energy is a fixed share of self-consumption, bounded by one
    full cycle per day.
    """
    if battery_size <= 0:
        return 0.0
    cycled = min(
        gross_self_consumption * settings.battery_throughput_share,
        battery_size * DAYS_PER_YEAR,
    )
    return cycled * settings.battery_round_trip_loss


# ======================================================================
# Balance
# ======================================================================


def compute_energy_balance(customer: CustomerInputs, settings: ExpertSettings) -> EnergyBalance:
    """Compute the annual energy balance for *customer* under *settings*."""
    pv_production = customer.pv_size * settings.pv_yield_per_kwp
    e_car = e_car_consumption(customer.has_e_car, customer.e_car_km)
    heat_pump = heat_pump_consumption(customer.heating_consumption, settings.heat_pump_jaz)
    total_demand = customer.household_consumption + e_car + heat_pump

    rate = autarky_rate(customer.battery_size, customer.has_ems, settings)
    gross = min(pv_production, total_demand * rate / 100.0)
    losses = battery_losses(gross, customer.battery_size, settings)
    self_consumption = gross - losses

    if pv_production > 0:
        self_consumption_rate = self_consumption / pv_production * 100.0
    else:
        self_consumption_rate = 0.0

    # Battery losses leave self-consumption and are counted as export
    feed_in = max(0.0, pv_production - self_consumption)

    logger.debug(
        "Energy balance: production=%.0f kWh demand=%.0f kWh autarky=%.1f%% losses=%.0f kWh",
        pv_production,
        total_demand,
        rate,
        losses,
    )

    return EnergyBalance(
        pv_production=pv_production,
        e_car_consumption=e_car,
        heat_pump_consumption=heat_pump,
        total_demand=total_demand,
        autarky_rate=rate,
        self_consumption=self_consumption,
        battery_losses=losses,
        self_consumption_rate=self_consumption_rate,
        grid_electricity=total_demand - self_consumption,
        feed_in=feed_in,
    )

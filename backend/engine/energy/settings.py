"""Expert-tunable model parameters and the shipped CO2-tax presets.

The expert settings are configuration data, not user input.  They are owned
by the host application (which keeps them in a client-local store) and are
passed into every calculation by value.  ``from_record`` / ``to_record``
convert to and from the plain serialized form used by that store.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any

# ======================================================================
# CO2-tax schedules
# ======================================================================


@dataclass(frozen=True)
class CO2TaxEntry:
    """CO2 price for one calendar year.

    Parameters
    ----------
    year : int
        Four-digit calendar year.
    price_per_ton : float
        CO2 price in EUR per tonne.
    """

    year: int
    price_per_ton: float


def _schedule(prices: dict[int, float]) -> tuple[CO2TaxEntry, ...]:
    return tuple(CO2TaxEntry(year, float(price)) for year, price in sorted(prices.items()))


# Linear path of +15 EUR/t per year from 2025.
DEFAULT_CO2_TAX_SCHEDULE = _schedule(
    {year: 50 + 15 * i for i, year in enumerate(range(2025, 2035))}
)

CO2_TAX_PRESETS: dict[str, tuple[CO2TaxEntry, ...]] = {
    "default": DEFAULT_CO2_TAX_SCHEDULE,
    # National fixed prices only; later years carry no tax contribution.
    "behg": _schedule({2025: 55, 2026: 65}),
    # Fixed national prices followed by a steep EU ETS2 path.
    "ets2_high": _schedule(
        {2025: 55, 2026: 65, **{year: 100 + 25 * i for i, year in enumerate(range(2027, 2035))}}
    ),
}


# ======================================================================
# Expert settings
# ======================================================================

_PERCENT_FIELDS = (
    "base_autarky",
    "battery_autarky_boost",
    "ems_autarky_boost",
    "electricity_price_increase",
    "gas_price_increase",
    "max_autarky_rate",
)

_FRACTION_FIELDS = ("battery_throughput_share", "battery_round_trip_loss")


@dataclass(frozen=True)
class ExpertSettings:
    """Parameters of the energy-economics model.

    Parameters
    ----------
    pv_yield_per_kwp : float
        Specific annual PV yield (kWh/kWp/yr).
    heat_pump_jaz : float
        Seasonal performance factor of the heat pump.
    base_autarky : float
        Autarky rate without battery or EMS (%).
    battery_autarky_boost : float
        Asymptotic autarky gain from a battery (%).
    ems_autarky_boost : float
        Autarky gain from an energy management system (%).
    feed_in_tariff : float
        Feed-in remuneration (ct/kWh).
    electricity_price_increase, gas_price_increase : float
        Annual price escalation (%/yr).
    co2_tax_schedule : tuple of CO2TaxEntry
        CO2 price per calendar year.  Years without an entry carry no tax.
    co2_emissions_gas : float
        Emission factor of gas heating (kg CO2/kWh).
    max_autarky_rate : float
        Ceiling of the annual autarky rate (%).
    battery_saturation_kwh : float
        Capacity at which the battery has delivered ~63 % of its boost.
    battery_throughput_share : float
        Fraction of self-consumption that passes through the battery (0-1).
    battery_round_trip_loss : float
        Energy lost per kWh cycled through the battery (0-1).
    """

    pv_yield_per_kwp: float = 1200.0
    heat_pump_jaz: float = 4.0
    base_autarky: float = 30.0
    battery_autarky_boost: float = 25.0
    ems_autarky_boost: float = 15.0
    feed_in_tariff: float = 8.0
    electricity_price_increase: float = 3.0
    gas_price_increase: float = 2.0
    co2_tax_schedule: tuple[CO2TaxEntry, ...] = DEFAULT_CO2_TAX_SCHEDULE
    co2_emissions_gas: float = 0.2
    max_autarky_rate: float = 85.0
    battery_saturation_kwh: float = 5.0
    battery_throughput_share: float = 0.6
    battery_round_trip_loss: float = 0.1

    def __post_init__(self) -> None:
        # Accept any iterable of entries but store an immutable tuple.
        object.__setattr__(self, "co2_tax_schedule", tuple(self.co2_tax_schedule))

        if self.pv_yield_per_kwp < 0:
            raise ValueError(f"pv_yield_per_kwp must be >= 0, got {self.pv_yield_per_kwp}")
        if self.heat_pump_jaz <= 0:
            raise ValueError(f"heat_pump_jaz must be > 0, got {self.heat_pump_jaz}")
        if self.feed_in_tariff < 0:
            raise ValueError(f"feed_in_tariff must be >= 0, got {self.feed_in_tariff}")
        if self.co2_emissions_gas < 0:
            raise ValueError(f"co2_emissions_gas must be >= 0, got {self.co2_emissions_gas}")
        if self.battery_saturation_kwh <= 0:
            raise ValueError(
                f"battery_saturation_kwh must be > 0, got {self.battery_saturation_kwh}"
            )
        for name in _PERCENT_FIELDS:
            value = getattr(self, name)
            if not 0.0 <= value <= 100.0:
                raise ValueError(f"{name} must be within [0, 100], got {value}")
        for name in _FRACTION_FIELDS:
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")

        years = [entry.year for entry in self.co2_tax_schedule]
        if len(years) != len(set(years)):
            raise ValueError(f"co2_tax_schedule has duplicate years: {sorted(years)}")
        for entry in self.co2_tax_schedule:
            if entry.price_per_ton < 0:
                raise ValueError(
                    f"CO2 price for {entry.year} must be >= 0, got {entry.price_per_ton}"
                )

    # ------------------------------------------------------------------
    # Schedule helpers
    # ------------------------------------------------------------------

    def schedule_lookup(self) -> dict[int, float]:
        """Return the CO2 schedule as a ``{year: price_per_ton}`` mapping."""
        return {entry.year: entry.price_per_ton for entry in self.co2_tax_schedule}

    def with_co2_price(self, year: int, price_per_ton: float) -> ExpertSettings:
        """Return a copy with the CO2 price for *year* set to *price_per_ton*."""
        prices = self.schedule_lookup()
        prices[year] = price_per_ton
        return replace(self, co2_tax_schedule=_schedule(prices))

    def with_co2_preset(self, name: str) -> ExpertSettings:
        """Return a copy using the named preset schedule."""
        return replace(self, co2_tax_schedule=CO2_TAX_PRESETS[name])

    # ------------------------------------------------------------------
    # Settings-store records
    # ------------------------------------------------------------------

    def to_record(self) -> dict[str, Any]:
        record = asdict(self)
        record["co2_tax_schedule"] = [dict(entry) for entry in record["co2_tax_schedule"]]
        return record

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> ExpertSettings:
        """Build settings from a stored record.

        Keys missing from *record* fall back to the shipped defaults;
        unknown keys are ignored.
        """
        known = set(cls.__dataclass_fields__)
        values = {k: v for k, v in record.items() if k in known}
        if "co2_tax_schedule" in values:
            values["co2_tax_schedule"] = tuple(
                CO2TaxEntry(int(item["year"]), float(item["price_per_ton"]))
                for item in values["co2_tax_schedule"]
            )
        return cls(**values)


DEFAULT_EXPERT_SETTINGS = ExpertSettings()


def expert_settings_for_preset(
    name: str, base: ExpertSettings = DEFAULT_EXPERT_SETTINGS
) -> ExpertSettings:
    """Return *base* with the CO2 schedule of preset *name*.

    Raises
    ------
    KeyError
        If *name* is not one of :data:`CO2_TAX_PRESETS`.
    """
    if name not in CO2_TAX_PRESETS:
        raise KeyError(f"Unknown CO2 tax preset: {name!r}")
    return base.with_co2_preset(name)

"""PV + heat-pump energy-economics engine."""

from .balance import CustomerInputs, compute_energy_balance
from .economics import CalculationResults, compute_energy_economics
from .settings import (
    CO2_TAX_PRESETS,
    DEFAULT_EXPERT_SETTINGS,
    CO2TaxEntry,
    ExpertSettings,
    expert_settings_for_preset,
)

__all__ = [
    "CO2_TAX_PRESETS",
    "CO2TaxEntry",
    "CalculationResults",
    "CustomerInputs",
    "DEFAULT_EXPERT_SETTINGS",
    "ExpertSettings",
    "compute_energy_balance",
    "compute_energy_economics",
    "expert_settings_for_preset",
]

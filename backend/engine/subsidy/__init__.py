"""BEG EM heat-pump subsidy engine."""

from .funding import (
    BonusData,
    FundingInputs,
    FundingResult,
    FundingValidationError,
    compute_subsidy,
)
from .rules import (
    BuildingType,
    DenialReason,
    HeatingAge,
    HeatSource,
    IncomeBracket,
    PriorHeating,
    ValidationReason,
)

__all__ = [
    "BonusData",
    "BuildingType",
    "DenialReason",
    "FundingInputs",
    "FundingResult",
    "FundingValidationError",
    "HeatSource",
    "HeatingAge",
    "IncomeBracket",
    "PriorHeating",
    "ValidationReason",
    "compute_subsidy",
]

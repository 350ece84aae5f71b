"""Energy-economics endpoints: PV + heat-pump savings and payback."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from app.config import settings
from app.schemas.energy import (
    CO2TaxEntrySchema,
    EnergyEconomicsRequest,
    EnergyEconomicsResponse,
    ExpertSettingsSchema,
)
from engine.energy import (
    CO2_TAX_PRESETS,
    DEFAULT_EXPERT_SETTINGS,
    ExpertSettings,
    compute_energy_economics,
    expert_settings_for_preset,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _resolve_expert_settings(body: EnergyEconomicsRequest) -> ExpertSettings:
    if body.expert_settings is not None:
        expert = body.expert_settings.to_engine()
        if body.co2_preset is None:
            return expert
        return expert_settings_for_preset(body.co2_preset, base=expert)
    return expert_settings_for_preset(body.co2_preset or settings.default_co2_preset)


@router.post(
    "/economics",
    response_model=EnergyEconomicsResponse,
    summary="PV + heat-pump economics",
    description="Compute self-consumption, yearly savings, a 10-year heating-cost "
    "comparison, amortization time and 20-year profit.",
)
async def energy_economics(body: EnergyEconomicsRequest):
    try:
        expert = _resolve_expert_settings(body)
        customer = body.customer.to_engine()
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unknown CO2 preset: {body.co2_preset}",
        )
    except ValueError as exc:
        logger.info("Rejected energy calculation: %s", exc, extra={"calculation": "energy"})
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        )

    result = compute_energy_economics(customer, expert)
    return EnergyEconomicsResponse.from_result(result)


@router.get(
    "/expert-settings/default",
    response_model=ExpertSettingsSchema,
    summary="Default expert settings",
)
async def default_expert_settings():
    return ExpertSettingsSchema.from_engine(DEFAULT_EXPERT_SETTINGS)


@router.get(
    "/co2-presets",
    response_model=dict[str, list[CO2TaxEntrySchema]],
    summary="Named CO2 tax schedules",
)
async def co2_presets():
    return {
        name: [
            CO2TaxEntrySchema(year=entry.year, price_per_ton=entry.price_per_ton)
            for entry in schedule
        ]
        for name, schedule in CO2_TAX_PRESETS.items()
    }

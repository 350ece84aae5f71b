"""User-facing (German) texts for the engines' reason codes."""

from __future__ import annotations

from typing import Any

from engine.subsidy.rules import INCOME_THRESHOLD_EUR, DenialReason, ValidationReason

DENIAL_MESSAGES: dict[DenialReason, str] = {
    DenialReason.REQUIREMENTS_NOT_MET: "Voraussetzungen nicht erfüllt",
    DenialReason.MORE_INFORMATION_REQUIRED: (
        "Für eine Prüfung sind weitere Angaben nötig (im Rechner nur für Selbstnutzer)."
    ),
    DenialReason.SELF_OCCUPIER_ONLY: "Nur für Selbstnutzer anwendbar",
    DenialReason.HEATING_NOT_ELIGIBLE: "Heizungstyp/-alter nicht bonusrelevant",
    DenialReason.INCOME_ABOVE_THRESHOLD: "Einkommen > {threshold} €",
}

VALIDATION_MESSAGES: dict[ValidationReason, str] = {
    ValidationReason.BUILDING_TYPE_MISSING: "Bitte wählen Sie einen Gebäudetyp aus.",
    ValidationReason.INVALID_TOTAL_COSTS: "Bitte geben Sie gültige Gesamtkosten an.",
    ValidationReason.INSUFFICIENT_UNITS: (
        "Bitte geben Sie für ein MFH/WEG mind. {min_units} Wohneinheiten an."
    ),
    ValidationReason.OWNERSHIP_SHARE_MISSING: "Bitte geben Sie Ihren Miteigentumsanteil an.",
    ValidationReason.INVALID_OWNERSHIP_SHARE: (
        "Der Miteigentumsanteil darf höchstens {max_share} % betragen."
    ),
    ValidationReason.PRIOR_HEATING_MISSING: "Bitte geben Sie die bestehende Heizung an.",
    ValidationReason.HEATING_AGE_MISSING: (
        "Bitte geben Sie das Alter Ihrer Gas-/Biomasseheizung an."
    ),
}


def _format_eur(amount: int) -> str:
    # German thousands separator
    return f"{amount:,}".replace(",", ".")


def denial_message(reason: DenialReason) -> str:
    return DENIAL_MESSAGES[reason].format(threshold=_format_eur(INCOME_THRESHOLD_EUR))


def validation_message(reason: ValidationReason, params: dict[str, Any] | None = None) -> str:
    return VALIDATION_MESSAGES[reason].format(**(params or {}))

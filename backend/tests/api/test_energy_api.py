"""Tests for the energy-economics API endpoints."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


class TestEnergyEconomics:
    async def test_default_settings(self, client: AsyncClient, customer_payload):
        resp = await client.post("/api/v1/energy/economics", json={"customer": customer_payload})
        assert resp.status_code == 200
        data = resp.json()
        assert data["amortizable"] is True
        assert 0 < data["amortization_years"] < 20
        assert data["savings"]["total"] > 0
        assert data["performance"]["pv_production"] == 12000
        assert len(data["heating_comparison"]) == 10
        assert data["heating_comparison"][0]["year"] == 2025

    async def test_explicit_settings(self, client: AsyncClient, customer_payload):
        settings_resp = await client.get("/api/v1/energy/expert-settings/default")
        expert = settings_resp.json()
        expert["pv_yield_per_kwp"] = 900

        resp = await client.post(
            "/api/v1/energy/economics",
            json={"customer": customer_payload, "expert_settings": expert},
        )
        assert resp.status_code == 200
        assert resp.json()["performance"]["pv_production"] == 9000

    async def test_co2_preset(self, client: AsyncClient, customer_payload):
        default = await client.post(
            "/api/v1/energy/economics", json={"customer": customer_payload}
        )
        behg = await client.post(
            "/api/v1/energy/economics",
            json={"customer": customer_payload, "co2_preset": "behg"},
        )
        assert behg.status_code == 200
        # No CO2 tax after 2026 makes gas cheaper in the last projection year
        assert (
            behg.json()["heating_comparison"][9]["gas_costs"]
            < default.json()["heating_comparison"][9]["gas_costs"]
        )

    async def test_unknown_preset(self, client: AsyncClient, customer_payload):
        resp = await client.post(
            "/api/v1/energy/economics",
            json={"customer": customer_payload, "co2_preset": "nope"},
        )
        assert resp.status_code == 422

    async def test_not_amortizable_is_null(self, client: AsyncClient, customer_payload):
        settings_resp = await client.get("/api/v1/energy/expert-settings/default")
        expert = settings_resp.json()
        expert["feed_in_tariff"] = 0
        expert["co2_tax_schedule"] = []
        customer_payload.update(electricity_price=0, gas_price=0)

        resp = await client.post(
            "/api/v1/energy/economics",
            json={"customer": customer_payload, "expert_settings": expert},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["amortizable"] is False
        assert data["amortization_years"] is None
        assert data["profit_after_20_years"] == -35000

    async def test_rejects_zero_pv(self, client: AsyncClient, customer_payload):
        customer_payload["pv_size"] = 0
        resp = await client.post("/api/v1/energy/economics", json={"customer": customer_payload})
        assert resp.status_code == 422

    async def test_rejects_duplicate_schedule_years(self, client: AsyncClient, customer_payload):
        settings_resp = await client.get("/api/v1/energy/expert-settings/default")
        expert = settings_resp.json()
        expert["co2_tax_schedule"] = [
            {"year": 2025, "price_per_ton": 50},
            {"year": 2025, "price_per_ton": 70},
        ]
        resp = await client.post(
            "/api/v1/energy/economics",
            json={"customer": customer_payload, "expert_settings": expert},
        )
        assert resp.status_code == 422
        assert "duplicate" in resp.json()["detail"]


class TestSettingsEndpoints:
    async def test_default_expert_settings(self, client: AsyncClient):
        resp = await client.get("/api/v1/energy/expert-settings/default")
        assert resp.status_code == 200
        data = resp.json()
        assert data["max_autarky_rate"] == 85
        assert len(data["co2_tax_schedule"]) == 10

    async def test_co2_presets(self, client: AsyncClient):
        resp = await client.get("/api/v1/energy/co2-presets")
        assert resp.status_code == 200
        data = resp.json()
        assert set(data) == {"default", "behg", "ets2_high"}
        assert data["behg"] == [
            {"year": 2025, "price_per_ton": 55.0},
            {"year": 2026, "price_per_ton": 65.0},
        ]

    async def test_health(self, client: AsyncClient):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
        assert "x-request-id" in resp.headers

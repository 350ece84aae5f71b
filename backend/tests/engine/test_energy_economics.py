"""Tests for engine.energy.economics: the full energy-economics model."""

from __future__ import annotations

from dataclasses import replace

import pytest

from engine.energy import compute_energy_economics
from engine.energy.balance import compute_energy_balance
from engine.energy.economics import ems_bonus
from engine.energy.settings import ExpertSettings


class TestReferenceScenario:
    """10 kWp, 10 kWh battery, EMS, 24 MWh gas heating, 35 kEUR investment."""

    def test_positive_savings(self, reference_customer, expert_settings):
        result = compute_energy_economics(reference_customer, expert_settings)
        assert result.savings.total > 0

    def test_autarky_within_ceiling(self, reference_customer, expert_settings):
        result = compute_energy_economics(reference_customer, expert_settings)
        assert 0 <= result.performance.autarky_rate <= expert_settings.max_autarky_rate

    def test_amortizes_within_20_years(self, reference_customer, expert_settings):
        result = compute_energy_economics(reference_customer, expert_settings)
        assert result.is_amortizable
        assert 0 < result.amortization_years < 20
        assert result.profit_after_20_years > 0

    def test_ten_year_table(self, reference_customer, expert_settings):
        result = compute_energy_economics(reference_customer, expert_settings)
        years = [row.year for row in result.heating_comparison]
        assert len(years) == 10
        assert years == list(range(years[0], years[0] + 10))

    def test_performance_figures(self, reference_customer, expert_settings):
        result = compute_energy_economics(reference_customer, expert_settings)
        perf = result.performance
        assert perf.pv_production == 12000
        assert perf.self_consumption <= perf.pv_production
        assert abs(perf.feed_in - (perf.pv_production - perf.self_consumption)) <= 1
        assert result.consumption.heat_pump == 6000
        assert result.consumption.total_demand == 10000
        assert result.battery_losses > 0

    def test_current_gas_costs(self, reference_customer, expert_settings):
        result = compute_energy_economics(reference_customer, expert_settings)
        assert result.current_gas_costs == 2640


class TestSavingsComposition:
    def test_total_is_pv_plus_heating(self, reference_customer, expert_settings):
        result = compute_energy_economics(reference_customer, expert_settings)
        s = result.savings
        # Components are rounded individually
        assert abs(s.total - (s.electricity_savings + s.feed_in_revenue + s.heating_savings)) <= 2

    def test_ems_bonus_not_added_to_total(self, reference_customer, expert_settings):
        result = compute_energy_economics(reference_customer, expert_settings)
        s = result.savings
        assert s.ems_bonus > 0
        assert s.total < s.electricity_savings + s.feed_in_revenue + s.heating_savings + s.ems_bonus

    def test_electricity_savings(self, reference_customer, expert_settings):
        balance = compute_energy_balance(reference_customer, expert_settings)
        result = compute_energy_economics(reference_customer, expert_settings)
        assert result.savings.electricity_savings == round(balance.self_consumption * 0.28)

    def test_feed_in_revenue(self, reference_customer, expert_settings):
        balance = compute_energy_balance(reference_customer, expert_settings)
        result = compute_energy_economics(reference_customer, expert_settings)
        assert result.savings.feed_in_revenue == round(balance.feed_in * 0.08)

    def test_heating_savings_is_table_mean(self, reference_customer, expert_settings):
        result = compute_energy_economics(reference_customer, expert_settings)
        mean = sum(row.savings for row in result.heating_comparison) / 10
        assert result.savings.heating_savings == round(mean)


class TestEMS:
    def test_disabled_ems_has_no_bonus(self, reference_customer, expert_settings):
        customer = replace(reference_customer, has_ems=False)
        result = compute_energy_economics(customer, expert_settings)
        assert result.savings.ems_bonus == 0

    def test_disabled_ems_lowers_autarky(self, reference_customer, expert_settings):
        with_ems = compute_energy_economics(reference_customer, expert_settings)
        without = compute_energy_economics(
            replace(reference_customer, has_ems=False), expert_settings
        )
        assert with_ems.performance.autarky_rate - without.performance.autarky_rate == 15

    def test_bonus_value(self, reference_customer, expert_settings):
        balance = compute_energy_balance(reference_customer, expert_settings)
        # min(12000, 10000 * 15 %) kWh at 28 ct
        assert ems_bonus(balance, reference_customer, expert_settings) == pytest.approx(420)


class TestDegenerateCases:
    def test_not_amortizable(self, reference_customer):
        """Free electricity and gas: nothing to save, payback never happens."""
        customer = replace(reference_customer, electricity_price=0, gas_price=0)
        settings = ExpertSettings(feed_in_tariff=0, co2_tax_schedule=())
        result = compute_energy_economics(customer, settings)
        assert not result.is_amortizable
        assert result.amortization_years == float("inf")
        assert result.profit_after_20_years == -35000

    def test_zero_production(self, reference_customer):
        result = compute_energy_economics(reference_customer, ExpertSettings(pv_yield_per_kwp=0))
        assert result.performance.pv_production == 0
        assert result.performance.self_consumption_rate == 0

    def test_zero_investment(self, reference_customer, expert_settings):
        result = compute_energy_economics(
            replace(reference_customer, total_investment=0), expert_settings
        )
        assert result.amortization_years == 0.0


    def test_half_euro_rounds_up(self, reference_customer):
        """2500 kWh exported at 0.02 ct/kWh is exactly 0.50 EUR."""
        customer = replace(
            reference_customer,
            household_consumption=0,
            heating_consumption=0,
            pv_size=2.5,
            battery_size=0,
            has_ems=False,
        )
        settings = ExpertSettings(pv_yield_per_kwp=1000, feed_in_tariff=0.02)
        result = compute_energy_economics(customer, settings)
        assert result.performance.feed_in == 2500
        assert result.savings.feed_in_revenue == 1


class TestDeterminism:
    def test_repeated_calls_identical(self, reference_customer, expert_settings):
        first = compute_energy_economics(reference_customer, expert_settings)
        second = compute_energy_economics(reference_customer, expert_settings)
        assert first == second

    def test_settings_round_trip(self, reference_customer, expert_settings):
        restored = ExpertSettings.from_record(expert_settings.to_record())
        assert compute_energy_economics(reference_customer, restored) == compute_energy_economics(
            reference_customer, expert_settings
        )

"""Tests for the cost calculator and yearly schedule."""

import pytest

from car_tco.calculator import TCOCalculator, calculate
from car_tco.models import VehicleProfile, fuel_cost_per_km

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _sample_profile(**overrides) -> VehicleProfile:
    """Return the reference ICE profile (fuel cost 33 / 15 km/L = 2.2 per km)."""
    values = dict(
        name="Reference",
        powertrain="ICE",
        car_price=1_000_000,
        discount=0,
        other_discount=0,
        resale_pct=30,
        km_per_year=20_000,
        years=10,
        insurance=22_000,
        maintenance=8_000,
        registration=2_500,
        miscellaneous=0,
        maintenance_at_end=0,
        fuel_mode="custom",
        fuel_consumption=15,
        fuel_price=33,
    )
    values.update(overrides)
    return VehicleProfile(**values)


# ---------------------------------------------------------------------------
# Fuel cost formula
# ---------------------------------------------------------------------------


def test_ev_fuel_cost_uses_kwh_per_100km() -> None:
    assert fuel_cost_per_km("EV", fuel_price=5, fuel_consumption=15) == pytest.approx(0.75)


def test_combustion_fuel_cost_uses_km_per_liter() -> None:
    assert fuel_cost_per_km("ICE", fuel_price=30, fuel_consumption=14) == pytest.approx(
        2.142857, rel=1e-6
    )
    assert fuel_cost_per_km("Hybrid", fuel_price=30, fuel_consumption=20) == pytest.approx(1.5)


def test_zero_consumption_is_guarded() -> None:
    """Zero km/L must give zero cost, not inf or NaN."""
    assert fuel_cost_per_km("ICE", fuel_price=30, fuel_consumption=0) == 0.0
    assert fuel_cost_per_km("EV", fuel_price=5, fuel_consumption=0) == 0.0


def test_zero_consumption_keeps_total_finite() -> None:
    result = calculate(_sample_profile(fuel_consumption=0))
    assert result.fuel_per_year == 0.0
    assert result.total_cost == pytest.approx(1_000_000 + 32_500 * 10 - 300_000)


# ---------------------------------------------------------------------------
# calculate()
# ---------------------------------------------------------------------------


def test_reference_scenario_with_direct_fuel_cost() -> None:
    result = calculate(_sample_profile(), fuel_per_km=2.2)
    assert result.net_car_price == 1_000_000
    assert result.fuel_per_year == pytest.approx(44_000)
    assert result.yearly_cost == pytest.approx(76_500)
    assert result.resale_value == pytest.approx(300_000)
    assert result.total_cost == pytest.approx(1_465_000)


def test_reference_scenario_with_derived_fuel_cost() -> None:
    profile = _sample_profile()
    assert profile.fuel_per_km == pytest.approx(2.2)
    assert calculate(profile).total_cost == pytest.approx(1_465_000)


def test_calculate_is_pure() -> None:
    profile = _sample_profile(discount=12_345.67, maintenance_at_end=150_000)
    first = calculate(profile)
    second = calculate(profile)
    assert first == second


def test_net_price_is_not_clamped() -> None:
    """Discounts larger than the price give a negative net price."""
    result = calculate(_sample_profile(car_price=100_000, discount=80_000, other_discount=50_000))
    assert result.net_car_price == -30_000


def test_total_cost_can_be_negative() -> None:
    profile = _sample_profile(
        car_price=1_000_000,
        discount=900_000,
        resale_pct=100,
        km_per_year=0,
        insurance=0,
        maintenance=0,
        registration=0,
        years=1,
    )
    assert calculate(profile).total_cost == pytest.approx(-900_000)


def test_end_of_term_maintenance_added_once() -> None:
    base = calculate(_sample_profile()).total_cost
    with_end = calculate(_sample_profile(maintenance_at_end=300_000)).total_cost
    assert with_end - base == pytest.approx(300_000)


# ---------------------------------------------------------------------------
# TCOCalculator
# ---------------------------------------------------------------------------


def test_yearly_schedule_ends_at_total_cost() -> None:
    profile = _sample_profile(maintenance_at_end=150_000, discount=50_000)
    schedule = TCOCalculator().yearly_schedule(profile)

    assert [yc.year for yc in schedule] == list(range(11))
    assert schedule[0].purchase == 950_000
    assert schedule[-1].end_of_term == 150_000
    assert schedule[-1].resale == pytest.approx(300_000)
    assert schedule[-1].cumulative == pytest.approx(calculate(profile).total_cost)


def test_yearly_schedule_is_non_decreasing_before_final_year() -> None:
    schedule = TCOCalculator().yearly_schedule(_sample_profile())
    cumulative = [yc.cumulative for yc in schedule[:-1]]
    assert cumulative == sorted(cumulative)


def test_compare_finds_cheapest_vehicle() -> None:
    ice = _sample_profile(name="ICE")
    ev = _sample_profile(
        name="EV",
        powertrain="EV",
        fuel_consumption=15,
        fuel_price=5,
        insurance=32_000,
        maintenance=4_000,
        registration=1_000,
        resale_pct=10,
        maintenance_at_end=300_000,
    )
    comparison = TCOCalculator().compare([ice, ev])

    totals = [r.total_cost for r in comparison.results]
    assert comparison.cheapest_index == totals.index(min(totals))
    extra = comparison.savings_vs_cheapest()
    assert extra[comparison.cheapest_index] == 0
    assert min(extra) == 0

    df = comparison.to_dataframe()
    assert list(df["Vehicle"]) == ["ICE", "EV"]
    assert df["Total Cost"].tolist() == pytest.approx(totals)
    assert comparison.summary()["Vehicles"] == 2

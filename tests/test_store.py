"""Tests for the session vehicle store."""

import pytest

from car_tco.calculator import calculate
from car_tco.store import VehicleStore


def test_store_starts_with_one_default_vehicle() -> None:
    store = VehicleStore()
    assert len(store) == 1
    assert store[0].name == "Car 1"
    assert not store.can_remove


def test_add_appends_default_vehicles() -> None:
    store = VehicleStore()
    added = store.add()
    store.add()
    assert len(store) == 3
    assert added.name == "Car 2"
    assert [p.name for p in store] == ["Car 1", "Car 2", "Car 3"]


def test_removing_only_vehicle_is_noop() -> None:
    store = VehicleStore()
    before = store.profiles
    assert store.remove(0) is False
    assert len(store) == 1
    assert store.profiles == before


def test_remove_by_position() -> None:
    store = VehicleStore()
    store.add()
    store.add()
    store.update_field(1, "name", "Middle")
    assert store.remove(1) is True
    assert [p.name for p in store] == ["Car 1", "Car 3"]


def test_remove_out_of_range_raises() -> None:
    store = VehicleStore()
    store.add()
    with pytest.raises(IndexError):
        store.remove(5)


def test_update_touches_only_one_vehicle() -> None:
    store = VehicleStore()
    store.add()
    store.update_field(0, "car_price", 750_000)
    store.select_powertrain(0, "EV")
    assert store[0].car_price == 750_000
    assert store[0].powertrain == "EV"
    assert store[1].car_price == 1_000_000
    assert store[1].powertrain == "ICE"
    assert store[1].insurance == 22_000


def test_snapshots_are_not_mutated() -> None:
    """Readers holding an old snapshot keep seeing the old values."""
    store = VehicleStore()
    snapshot = store.profiles
    store.update_field(0, "insurance", 1)
    store.add()
    assert snapshot[0].insurance == 22_000
    assert len(snapshot) == 1
    assert store[0].insurance == 1


def test_update_field_routes_fuel_fields_through_presets() -> None:
    store = VehicleStore()
    store.update_field(0, "powertrain", "EV")
    assert store[0].insurance == 32_000
    assert store[0].fuel_price == 5

    store.update_field(0, "fuel_mode", "highway")
    assert store[0].fuel_consumption == 14

    store.update_field(0, "fuel_consumption", 16)
    assert store[0].fuel_mode == "custom"
    assert store[0].fuel_per_km == pytest.approx(0.8)

    store.update_field(0, "fuel_price", 7.5)
    assert store[0].fuel_per_km == pytest.approx(1.2)


def test_update_field_coerces_years_to_int() -> None:
    store = VehicleStore()
    store.update_field(0, "years", 7.0)
    assert store[0].years == 7
    assert isinstance(store[0].years, int)


def test_update_unknown_field_raises() -> None:
    store = VehicleStore()
    with pytest.raises(ValueError):
        store.update_field(0, "colour", "red")


def test_results_follow_store_updates() -> None:
    store = VehicleStore()
    before = calculate(store[0]).total_cost
    store.update_field(0, "discount", 100_000)
    assert calculate(store[0]).total_cost == pytest.approx(before - 100_000)

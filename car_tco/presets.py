"""
Preset resolution for vehicle profiles.

Every function here takes a profile and returns a new one with the
selected field and all fields that depend on it changed together.
"""

from dataclasses import replace
from typing import Optional

from .loader import PresetLoader, default_loader
from .models import FUEL_MODES, POWERTRAINS, VehicleProfile


def _presets(loader: Optional[PresetLoader]) -> PresetLoader:
    return loader if loader is not None else default_loader()


def default_profile(index: int, loader: Optional[PresetLoader] = None) -> VehicleProfile:
    """
    Build the profile used when a vehicle is added.

    Args:
        index: Position the vehicle will take in the collection
        loader: Preset tables; the packaged presets when omitted

    Returns:
        VehicleProfile named 'Car <index + 1>' with preset costs applied
    """
    presets = _presets(loader)
    defaults = presets.default_vehicle
    powertrain = defaults["powertrain"]
    fuel_mode = defaults["fuel_mode"]
    cost = presets.get_cost_preset(powertrain)

    return VehicleProfile(
        name=f"Car {index + 1}",
        powertrain=powertrain,
        car_price=defaults["car_price"],
        resale_pct=cost.resale_pct,
        km_per_year=defaults["km_per_year"],
        years=defaults["years"],
        insurance=cost.insurance,
        maintenance=cost.maintenance,
        registration=cost.registration,
        miscellaneous=cost.miscellaneous,
        maintenance_at_end=cost.maintenance_at_end,
        fuel_mode=fuel_mode,
        fuel_consumption=presets.get_fuel_consumption(fuel_mode, powertrain),
        fuel_price=cost.fuel_price,
    )


def apply_powertrain(
    profile: VehicleProfile, powertrain: str, loader: Optional[PresetLoader] = None
) -> VehicleProfile:
    """
    Switch a profile to another powertrain.

    Overwrites the recurring costs, resale percentage, end-of-term
    maintenance and fuel price with the powertrain's preset, and resolves
    fuel consumption from the current fuel mode. In custom mode the custom
    preset is used because the consumption unit differs between EV and
    combustion vehicles.
    """
    if powertrain not in POWERTRAINS:
        raise ValueError(f"Unknown powertrain '{powertrain}'")
    presets = _presets(loader)
    cost = presets.get_cost_preset(powertrain)

    return replace(
        profile,
        powertrain=powertrain,
        insurance=cost.insurance,
        maintenance=cost.maintenance,
        registration=cost.registration,
        resale_pct=cost.resale_pct,
        miscellaneous=cost.miscellaneous,
        maintenance_at_end=cost.maintenance_at_end,
        fuel_price=cost.fuel_price,
        fuel_consumption=presets.get_fuel_consumption(profile.fuel_mode, powertrain),
    )


def apply_fuel_mode(
    profile: VehicleProfile, fuel_mode: str, loader: Optional[PresetLoader] = None
) -> VehicleProfile:
    """Select a driving mode; custom keeps the consumption already entered."""
    if fuel_mode not in FUEL_MODES:
        raise ValueError(f"Unknown fuel mode '{fuel_mode}'")
    if fuel_mode == "custom":
        return replace(profile, fuel_mode=fuel_mode)

    consumption = _presets(loader).get_fuel_consumption(fuel_mode, profile.powertrain)
    return replace(profile, fuel_mode=fuel_mode, fuel_consumption=consumption)


def set_fuel_price(profile: VehicleProfile, fuel_price: float) -> VehicleProfile:
    return replace(profile, fuel_price=fuel_price)


def set_fuel_consumption(profile: VehicleProfile, fuel_consumption: float) -> VehicleProfile:
    """Enter consumption by hand; a preset mode becomes custom."""
    return replace(profile, fuel_mode="custom", fuel_consumption=fuel_consumption)

"""
Session-scoped collection of vehicle profiles.

The store holds an immutable tuple of profiles. Every operation builds a
new tuple and swaps it in, so a reader always sees a complete snapshot.
"""

import logging
from dataclasses import fields, replace
from typing import Callable, Optional, Tuple

from .loader import PresetLoader, default_loader
from .models import VehicleProfile
from .presets import (
    apply_fuel_mode,
    apply_powertrain,
    default_profile,
    set_fuel_consumption,
    set_fuel_price,
)

_logger = logging.getLogger(__name__)

# Fields whose edits must go through a preset-aware operation
_PRESET_FIELDS = {
    "powertrain": "select_powertrain",
    "fuel_mode": "select_fuel_mode",
    "fuel_price": "set_fuel_price",
    "fuel_consumption": "set_fuel_consumption",
}

_EDITABLE_FIELDS = frozenset(f.name for f in fields(VehicleProfile)) - set(_PRESET_FIELDS)


class VehicleStore:
    """Ordered, never-empty collection of vehicle profiles."""

    def __init__(self, loader: Optional[PresetLoader] = None):
        """
        Create a store holding one default vehicle.

        Args:
            loader: Preset tables; the packaged presets when omitted
        """
        self.loader = loader if loader is not None else default_loader()
        self._profiles: Tuple[VehicleProfile, ...] = (default_profile(0, self.loader),)

    @property
    def profiles(self) -> Tuple[VehicleProfile, ...]:
        return self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def __getitem__(self, index: int) -> VehicleProfile:
        return self._profiles[index]

    def __iter__(self):
        return iter(self._profiles)

    @property
    def can_remove(self) -> bool:
        return len(self._profiles) > 1

    def add(self) -> VehicleProfile:
        """Append a default vehicle and return it."""
        profile = default_profile(len(self._profiles), self.loader)
        self._profiles = self._profiles + (profile,)
        _logger.debug("Added vehicle %r at position %d", profile.name, len(self._profiles) - 1)
        return profile

    def remove(self, index: int) -> bool:
        """
        Remove the vehicle at a position.

        Args:
            index: Position in the collection

        Returns:
            True if removed; False when it is the only vehicle left
        """
        self._check_index(index)
        if not self.can_remove:
            _logger.info("Refusing to remove the only vehicle in the comparison")
            return False

        removed = self._profiles[index]
        self._profiles = self._profiles[:index] + self._profiles[index + 1:]
        _logger.debug("Removed vehicle %r from position %d", removed.name, index)
        return True

    def update_field(self, index: int, name: str, value) -> VehicleProfile:
        """
        Set a single input field on one vehicle.

        Fuel and powertrain fields are routed through their preset-aware
        operations so dependent values change together.

        Args:
            index: Position in the collection
            name: VehicleProfile field name
            value: New value

        Returns:
            The updated profile
        """
        if name in _PRESET_FIELDS:
            return getattr(self, _PRESET_FIELDS[name])(index, value)
        if name not in _EDITABLE_FIELDS:
            raise ValueError(f"Unknown vehicle field '{name}'")
        if name == "years":
            value = int(value)
        return self._apply(index, lambda p: replace(p, **{name: value}))

    def select_powertrain(self, index: int, powertrain: str) -> VehicleProfile:
        return self._apply(index, lambda p: apply_powertrain(p, powertrain, self.loader))

    def select_fuel_mode(self, index: int, fuel_mode: str) -> VehicleProfile:
        return self._apply(index, lambda p: apply_fuel_mode(p, fuel_mode, self.loader))

    def set_fuel_price(self, index: int, fuel_price: float) -> VehicleProfile:
        return self._apply(index, lambda p: set_fuel_price(p, fuel_price))

    def set_fuel_consumption(self, index: int, fuel_consumption: float) -> VehicleProfile:
        return self._apply(index, lambda p: set_fuel_consumption(p, fuel_consumption))

    def _apply(
        self, index: int, update: Callable[[VehicleProfile], VehicleProfile]
    ) -> VehicleProfile:
        self._check_index(index)
        profile = update(self._profiles[index])
        profiles = list(self._profiles)
        profiles[index] = profile
        self._profiles = tuple(profiles)
        _logger.debug("Updated vehicle %r at position %d", profile.name, index)
        return profile

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._profiles):
            raise IndexError(
                f"Vehicle position {index} out of range (0..{len(self._profiles) - 1})"
            )

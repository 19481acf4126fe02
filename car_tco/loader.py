"""
Preset loader for TCO calculations.
Loads drivetrain cost presets and fuel consumption tables from YAML.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional, Union

import yaml

from .models import FUEL_MODES, POWERTRAINS

_logger = logging.getLogger(__name__)

PRESETS_PATH: Path = Path(__file__).resolve().parent / "data" / "presets.yaml"

_COST_FIELDS = (
    "insurance",
    "maintenance",
    "registration",
    "resale_pct",
    "miscellaneous",
    "maintenance_at_end",
    "fuel_price",
)

_DEFAULT_VEHICLE_FIELDS = ("powertrain", "car_price", "km_per_year", "years", "fuel_mode")


@dataclass(frozen=True)
class CostPreset:
    """Default costs applied when a powertrain is selected."""

    insurance: float
    maintenance: float
    registration: float
    resale_pct: float
    miscellaneous: float
    maintenance_at_end: float
    fuel_price: float


def _number(value, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{where} must be a number, got {value!r}")
    if value < 0:
        raise ValueError(f"{where} must be >= 0, got {value}")
    return float(value)


class PresetLoader:
    """Load and manage preset tables from a YAML file."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """
        Initialize preset loader.

        Args:
            path: Path to a presets YAML file; the packaged file when omitted

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If a table is missing entries or holds invalid values
        """
        self.path = Path(path) if path is not None else PRESETS_PATH
        if not self.path.exists():
            raise FileNotFoundError(f"Presets file not found: {self.path}")

        self._load_all_data()

    def _load_all_data(self):
        """Load and validate every table in the file."""
        with open(self.path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Presets file {self.path} must contain a mapping")

        self.cost_presets = self._parse_cost_presets(data.get("powertrains"))
        self.fuel_consumption = self._parse_fuel_consumption(data.get("fuel_consumption"))
        self.default_vehicle = self._parse_default_vehicle(data.get("default_vehicle"))

        _logger.debug("Loaded presets from %s", self.path)

    def _parse_cost_presets(self, table) -> Dict[str, CostPreset]:
        if not isinstance(table, dict):
            raise ValueError("Presets file is missing the 'powertrains' table")

        presets = {}
        for powertrain in POWERTRAINS:
            entry = table.get(powertrain)
            if not isinstance(entry, dict):
                raise ValueError(f"Powertrain preset '{powertrain}' is missing")
            values = {}
            for name in _COST_FIELDS:
                if name not in entry:
                    raise ValueError(
                        f"Powertrain preset '{powertrain}' is missing field '{name}'"
                    )
                values[name] = _number(entry[name], f"powertrains.{powertrain}.{name}")
            presets[powertrain] = CostPreset(**values)
        return presets

    def _parse_fuel_consumption(self, table) -> Dict[str, Dict[str, float]]:
        if not isinstance(table, dict):
            raise ValueError("Presets file is missing the 'fuel_consumption' table")

        consumption = {}
        for mode in FUEL_MODES:
            row = table.get(mode)
            if not isinstance(row, dict):
                raise ValueError(f"Fuel consumption preset for mode '{mode}' is missing")
            consumption[mode] = {}
            for powertrain in POWERTRAINS:
                where = f"fuel_consumption.{mode}.{powertrain}"
                if powertrain not in row:
                    raise ValueError(f"{where} is missing")
                value = _number(row[powertrain], where)
                if value == 0:
                    raise ValueError(f"{where} must be > 0")
                consumption[mode][powertrain] = value
        return consumption

    def _parse_default_vehicle(self, entry) -> Dict:
        if not isinstance(entry, dict):
            raise ValueError("Presets file is missing the 'default_vehicle' section")
        for name in _DEFAULT_VEHICLE_FIELDS:
            if name not in entry:
                raise ValueError(f"default_vehicle is missing field '{name}'")

        powertrain = entry["powertrain"]
        if powertrain not in POWERTRAINS:
            raise ValueError(f"default_vehicle.powertrain '{powertrain}' is unknown")
        fuel_mode = entry["fuel_mode"]
        if fuel_mode not in FUEL_MODES:
            raise ValueError(f"default_vehicle.fuel_mode '{fuel_mode}' is unknown")
        years = entry["years"]
        if isinstance(years, bool) or not isinstance(years, int) or years < 1:
            raise ValueError(f"default_vehicle.years must be a positive integer, got {years!r}")

        return {
            "powertrain": powertrain,
            "car_price": _number(entry["car_price"], "default_vehicle.car_price"),
            "km_per_year": _number(entry["km_per_year"], "default_vehicle.km_per_year"),
            "years": years,
            "fuel_mode": fuel_mode,
        }

    def get_cost_preset(self, powertrain: str) -> CostPreset:
        """
        Get the cost preset for a powertrain.

        Args:
            powertrain: 'ICE', 'Hybrid' or 'EV'

        Returns:
            CostPreset for that powertrain
        """
        if powertrain not in self.cost_presets:
            raise ValueError(f"Unknown powertrain '{powertrain}'")
        return self.cost_presets[powertrain]

    def get_fuel_consumption(self, fuel_mode: str, powertrain: str) -> float:
        """
        Get the preset fuel consumption for a driving mode.

        Args:
            fuel_mode: 'city', 'highway' or 'custom'
            powertrain: 'ICE', 'Hybrid' or 'EV'

        Returns:
            km per liter, or kWh per 100 km for an EV
        """
        if fuel_mode not in self.fuel_consumption:
            raise ValueError(f"Unknown fuel mode '{fuel_mode}'")
        row = self.fuel_consumption[fuel_mode]
        if powertrain not in row:
            raise ValueError(f"Unknown powertrain '{powertrain}'")
        return row[powertrain]


@lru_cache(maxsize=None)
def default_loader() -> PresetLoader:
    """Presets from the packaged file, loaded once."""
    return PresetLoader()

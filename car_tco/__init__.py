"""
Car TCO - Total Cost of Ownership comparison for cars.

A Python package for comparing what ICE, Hybrid and EV cars cost to own
over a holding period: purchase after discounts, yearly running costs,
end-of-term maintenance and resale.
"""

from .calculator import TCOCalculator, calculate
from .loader import PresetLoader
from .models import VehicleProfile, CostResult, ComparisonResult, YearCosts, fuel_cost_per_km
from .parsing import parse_number, format_number, format_input
from .store import VehicleStore

__version__ = "0.1.0"
__all__ = [
    "TCOCalculator",
    "calculate",
    "PresetLoader",
    "VehicleProfile",
    "CostResult",
    "ComparisonResult",
    "YearCosts",
    "fuel_cost_per_km",
    "parse_number",
    "format_number",
    "format_input",
    "VehicleStore",
]

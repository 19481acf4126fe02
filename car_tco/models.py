"""
Data models for TCO calculations.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
import pandas as pd


POWERTRAINS: Tuple[str, ...] = ("ICE", "Hybrid", "EV")
FUEL_MODES: Tuple[str, ...] = ("city", "highway", "custom")


def fuel_cost_per_km(powertrain: str, fuel_price: float, fuel_consumption: float) -> float:
    """
    Energy cost of driving one km.

    Args:
        powertrain: 'ICE', 'Hybrid' or 'EV'
        fuel_price: Price per liter, or per kWh for an EV
        fuel_consumption: km per liter, or kWh per 100 km for an EV

    Returns:
        Cost per km; 0.0 when a combustion vehicle has zero consumption
    """
    if powertrain == "EV":
        return (fuel_consumption / 100) * fuel_price
    if fuel_consumption == 0:
        return 0.0
    return fuel_price / fuel_consumption


@dataclass(frozen=True)
class VehicleProfile:
    """Inputs for one vehicle under comparison."""

    name: str
    powertrain: str = "ICE"

    # Purchase
    car_price: float = 0.0
    discount: float = 0.0
    other_discount: float = 0.0
    resale_pct: float = 0.0

    # Usage
    km_per_year: float = 0.0
    years: int = 1

    # Annual recurring costs
    insurance: float = 0.0
    maintenance: float = 0.0
    registration: float = 0.0
    miscellaneous: float = 0.0

    # One-time cost at the end of the holding period
    maintenance_at_end: float = 0.0

    # Energy
    fuel_mode: str = "custom"
    fuel_consumption: float = 0.0  # km/L, or kWh/100km for EV
    fuel_price: float = 0.0

    def __post_init__(self) -> None:
        if self.powertrain not in POWERTRAINS:
            raise ValueError(f"Unknown powertrain '{self.powertrain}'")
        if self.fuel_mode not in FUEL_MODES:
            raise ValueError(f"Unknown fuel mode '{self.fuel_mode}'")

    @property
    def fuel_per_km(self) -> float:
        """Energy cost per km for the current powertrain, price and consumption."""
        return fuel_cost_per_km(self.powertrain, self.fuel_price, self.fuel_consumption)

    @property
    def consumption_unit(self) -> str:
        return "kWh/100km" if self.powertrain == "EV" else "km/L"


@dataclass(frozen=True)
class CostResult:
    """Derived costs for a single vehicle."""

    net_car_price: float
    fuel_per_year: float
    yearly_cost: float
    resale_value: float
    total_cost: float

    def to_dict(self) -> Dict[str, float]:
        """Return results keyed by display label."""
        return {
            'Net Car Price': self.net_car_price,
            'Fuel / Year': self.fuel_per_year,
            'Yearly Cost': self.yearly_cost,
            'Resale Value': self.resale_value,
            'Total Cost': self.total_cost,
        }


@dataclass
class YearCosts:
    """Cost breakdown for one year of the holding period."""

    year: int
    purchase: float = 0.0
    recurring: float = 0.0
    end_of_term: float = 0.0
    resale: float = 0.0
    cumulative: float = 0.0

    @property
    def total(self) -> float:
        """Net cost incurred in this year."""
        return self.purchase + self.recurring + self.end_of_term - self.resale


@dataclass
class ComparisonResult:
    """Results for every vehicle in a comparison, in collection order."""

    profiles: List[VehicleProfile]
    results: List[CostResult]
    cheapest_index: Optional[int] = None

    def __post_init__(self):
        """Find the vehicle with the lowest total cost."""
        if len(self.profiles) != len(self.results):
            raise ValueError("profiles and results must have the same length")
        if self.results:
            totals = [r.total_cost for r in self.results]
            self.cheapest_index = totals.index(min(totals))

    def savings_vs_cheapest(self) -> List[float]:
        """Extra cost of each vehicle over the cheapest one."""
        if self.cheapest_index is None:
            return []
        best = self.results[self.cheapest_index].total_cost
        return [r.total_cost - best for r in self.results]

    def to_dataframe(self) -> pd.DataFrame:
        """Convert results to pandas DataFrame, one row per vehicle."""
        data = []
        for profile, result, extra in zip(self.profiles, self.results, self.savings_vs_cheapest()):
            row = {
                'Vehicle': profile.name,
                'Powertrain': profile.powertrain,
                'Years': profile.years,
                'Fuel / km': profile.fuel_per_km,
            }
            row.update(result.to_dict())
            row['Extra vs Cheapest'] = extra
            data.append(row)
        return pd.DataFrame(data)

    def summary(self) -> Dict:
        """Return summary of the comparison."""
        if self.cheapest_index is None:
            return {'Vehicles': 0, 'Cheapest': None, 'Cheapest Total Cost': None}
        cheapest = self.profiles[self.cheapest_index]
        return {
            'Vehicles': len(self.profiles),
            'Cheapest': cheapest.name,
            'Cheapest Total Cost': self.results[self.cheapest_index].total_cost,
        }

"""
TCO Calculator - Core calculation engine.
Implements the ownership cost model for a single vehicle and comparisons.
"""

import numpy as np
from typing import Iterable, List, Optional
from .models import VehicleProfile, CostResult, YearCosts, ComparisonResult


def calculate(profile: VehicleProfile, fuel_per_km: Optional[float] = None) -> CostResult:
    """
    Calculate ownership costs for one vehicle.

    Args:
        profile: VehicleProfile with purchase, usage and cost inputs
        fuel_per_km: Energy cost per km to use instead of the value
            derived from the profile's fuel price and consumption

    Returns:
        CostResult in full precision
    """
    if fuel_per_km is None:
        fuel_per_km = profile.fuel_per_km

    net_car_price = profile.car_price - profile.discount - profile.other_discount
    fuel_per_year = fuel_per_km * profile.km_per_year
    yearly_cost = (profile.insurance + profile.maintenance + profile.registration +
                   profile.miscellaneous + fuel_per_year)
    resale_value = profile.car_price * (profile.resale_pct / 100)
    total_cost = (net_car_price + yearly_cost * profile.years +
                  profile.maintenance_at_end - resale_value)

    return CostResult(
        net_car_price=net_car_price,
        fuel_per_year=fuel_per_year,
        yearly_cost=yearly_cost,
        resale_value=resale_value,
        total_cost=total_cost,
    )


class TCOCalculator:
    """Calculate total cost of ownership for vehicles."""

    def calculate(self, profile: VehicleProfile) -> CostResult:
        """Calculate ownership costs for one vehicle."""
        return calculate(profile)

    def compare(self, profiles: Iterable[VehicleProfile]) -> ComparisonResult:
        """
        Calculate every vehicle in a comparison.

        Args:
            profiles: Vehicles in display order

        Returns:
            ComparisonResult with one CostResult per vehicle
        """
        profiles = list(profiles)
        return ComparisonResult(
            profiles=profiles,
            results=[calculate(p) for p in profiles],
        )

    def yearly_schedule(self, profile: VehicleProfile) -> List[YearCosts]:
        """
        Break the total cost down by year.

        Year 0 carries the net purchase price. Years 1..N carry the
        yearly running cost; the last year also carries the end-of-term
        maintenance and the resale credit. The final cumulative value
        equals the profile's total cost.

        Args:
            profile: VehicleProfile to break down

        Returns:
            List of YearCosts, one per year from 0 to profile.years
        """
        result = calculate(profile)
        years = max(int(profile.years), 0)

        schedule = [YearCosts(year=0, purchase=result.net_car_price)]
        for year in range(1, years + 1):
            schedule.append(YearCosts(year=year, recurring=result.yearly_cost))

        # End-of-term items land in the last year (year 0 when years is 0)
        schedule[-1].end_of_term = profile.maintenance_at_end
        schedule[-1].resale = result.resale_value

        cumulative = np.cumsum([yc.total for yc in schedule])
        for yc, value in zip(schedule, cumulative):
            yc.cumulative = float(value)

        return schedule

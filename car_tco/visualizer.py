"""
Visualization module for TCO results.
"""

import matplotlib.pyplot as plt
import numpy as np
from .calculator import TCOCalculator
from .models import ComparisonResult


def _money_formatter():
    return plt.FuncFormatter(lambda x, p: f'{x/1e3:,.0f}k')


class TCOVisualizer:
    """Create visualizations for TCO comparisons."""

    @staticmethod
    def plot_cumulative(result: ComparisonResult, show: bool = True) -> plt.Figure:
        """
        Plot cumulative cost over each vehicle's holding period.

        Args:
            result: ComparisonResult object
            show: Whether to display the plot

        Returns:
            Matplotlib figure
        """
        calculator = TCOCalculator()
        fig, ax = plt.subplots(figsize=(10, 6))

        for profile in result.profiles:
            schedule = calculator.yearly_schedule(profile)
            years = [yc.year for yc in schedule]
            cumulative = [yc.cumulative for yc in schedule]
            ax.plot(years, cumulative, marker='o', linewidth=2,
                    label=f'{profile.name} ({profile.powertrain})')

        ax.set_xlabel('Year')
        ax.set_ylabel('Cumulative Cost')
        ax.set_title('Cumulative Cost Over Holding Period')
        ax.legend()
        ax.grid(True, alpha=0.3)
        ax.yaxis.set_major_formatter(_money_formatter())

        plt.tight_layout()
        if show:
            plt.show()

        return fig

    @staticmethod
    def plot_cost_breakdown(result: ComparisonResult, show: bool = True) -> plt.Figure:
        """
        Stacked bars of what makes up each vehicle's total cost.

        Resale value is drawn below zero since it is credited back.

        Args:
            result: ComparisonResult object
            show: Whether to display the plot

        Returns:
            Matplotlib figure
        """
        fig, ax = plt.subplots(figsize=(10, 6))

        names = [p.name for p in result.profiles]
        x = np.arange(len(names))
        components = {
            'Net Car Price': [r.net_car_price for r in result.results],
            'Fuel': [r.fuel_per_year * p.years for p, r in zip(result.profiles, result.results)],
            'Other Running Costs': [
                (r.yearly_cost - r.fuel_per_year) * p.years
                for p, r in zip(result.profiles, result.results)
            ],
            'Maintenance at End': [p.maintenance_at_end for p in result.profiles],
        }

        bottom = np.zeros(len(names))
        colors = plt.cm.Set3(range(len(components) + 1))
        for (label, values), color in zip(components.items(), colors):
            ax.bar(x, values, bottom=bottom, label=label, color=color)
            bottom += np.array(values, dtype=float)

        resale = [-r.resale_value for r in result.results]
        ax.bar(x, resale, label='Resale Value', color=colors[-1])

        totals = [r.total_cost for r in result.results]
        ax.scatter(x, totals, color='black', zorder=3, label='Total Cost')
        for xi, total in zip(x, totals):
            ax.annotate(f'{total:,.0f}', (xi, total), textcoords='offset points',
                        xytext=(0, 8), ha='center', fontsize=9)

        ax.axhline(0, color='grey', linewidth=0.8)
        ax.set_xticks(x)
        ax.set_xticklabels(names)
        ax.set_ylabel('Cost')
        ax.set_title('Total Cost Breakdown')
        ax.legend(loc='upper left', fontsize=9)
        ax.yaxis.set_major_formatter(_money_formatter())

        plt.tight_layout()
        if show:
            plt.show()

        return fig

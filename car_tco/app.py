"""Car TCO comparison dashboard.

Interactive Streamlit front end over the ``car_tco`` package. Each column
is one vehicle; every edit goes through the session's
:class:`~car_tco.store.VehicleStore` and results are recalculated on the
next rerun.

Launch with::

    streamlit run car_tco/app.py

Environment:
    CAR_TCO_PRESETS: path to an alternative presets YAML file.
    CAR_TCO_LOG_LEVEL: logging level name (default ``WARNING``).
"""

import logging
import os

import matplotlib.pyplot as plt
import streamlit as st

from car_tco.calculator import TCOCalculator
from car_tco.loader import PresetLoader
from car_tco.models import FUEL_MODES, POWERTRAINS, VehicleProfile
from car_tco.parsing import format_input, format_number, parse_int, parse_number
from car_tco.store import VehicleStore
from car_tco.visualizer import TCOVisualizer

_logger = logging.getLogger(__name__)

_STORE_KEY = "vehicle_store"
_KEY_PREFIX = "vehicle:"

_POWERTRAIN_LABELS = {"ICE": "ICE (petrol/diesel)", "Hybrid": "Hybrid", "EV": "EV"}
_FUEL_MODE_LABELS = {
    "city": "Mostly city driving",
    "highway": "Mostly highway driving",
    "custom": "Custom",
}

# Grouped free-text inputs, echoed back with thousands separators
_TEXT_FIELDS = {
    "car_price": "Car price",
    "discount": "Discount",
    "other_discount": "Other discounts",
    "km_per_year": "Distance per year (km)",
    "insurance": "Insurance per year",
    "maintenance": "Maintenance per year",
    "registration": "Registration and tax per year",
    "miscellaneous": "Other costs per year",
    "maintenance_at_end": "Maintenance at end of term (one-time)",
}
_FLOAT_FIELDS = ("resale_pct", "fuel_price", "fuel_consumption")
_SELECT_FIELDS = ("powertrain", "fuel_mode")

_MONEY_COLUMNS = (
    "Net Car Price",
    "Fuel / Year",
    "Yearly Cost",
    "Resale Value",
    "Total Cost",
    "Extra vs Cheapest",
)


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------


def _key(index: int, field: str) -> str:
    return f"{_KEY_PREFIX}{index}.{field}"


def _widget_value(profile: VehicleProfile, field: str):
    value = getattr(profile, field)
    if field in _TEXT_FIELDS:
        return format_input(value)
    if field in _FLOAT_FIELDS:
        return float(value)
    return value


def _sync_widgets(store: VehicleStore) -> None:
    """Write every profile's values into its widget keys."""
    all_fields = ("name", "years") + tuple(_TEXT_FIELDS) + _FLOAT_FIELDS + _SELECT_FIELDS
    for index, profile in enumerate(store):
        for field in all_fields:
            st.session_state[_key(index, field)] = _widget_value(profile, field)

    # Drop keys left behind by removed vehicles
    stale = [
        k for k in st.session_state
        if isinstance(k, str) and k.startswith(_KEY_PREFIX)
        and int(k[len(_KEY_PREFIX):].split(".", 1)[0]) >= len(store)
    ]
    for k in stale:
        del st.session_state[k]


def _get_store() -> VehicleStore:
    if _STORE_KEY not in st.session_state:
        presets_path = os.environ.get("CAR_TCO_PRESETS")
        loader = PresetLoader(presets_path) if presets_path else None
        _logger.info("Starting session with presets from %s", presets_path or "package defaults")
        store = VehicleStore(loader)
        st.session_state[_STORE_KEY] = store
        _sync_widgets(store)
    return st.session_state[_STORE_KEY]


# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------


def _on_change(index: int, field: str) -> None:
    store = _get_store()
    raw = st.session_state[_key(index, field)]
    if field in _TEXT_FIELDS:
        value = parse_number(raw)
    elif field == "years":
        value = parse_int(raw)
    else:
        value = raw
    store.update_field(index, field, value)
    _sync_widgets(store)


def _on_add() -> None:
    store = _get_store()
    store.add()
    _sync_widgets(store)


def _on_remove(index: int) -> None:
    store = _get_store()
    store.remove(index)
    _sync_widgets(store)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _text_input(index: int, field: str) -> None:
    st.text_input(
        _TEXT_FIELDS[field],
        key=_key(index, field),
        on_change=_on_change,
        args=(index, field),
    )


def _render_vehicle(store: VehicleStore, calculator: TCOCalculator, index: int) -> None:
    profile = store[index]
    result = calculator.calculate(profile)

    head, remove = st.columns([3, 1])
    with head:
        st.text_input(
            "Name",
            key=_key(index, "name"),
            on_change=_on_change,
            args=(index, "name"),
        )
    with remove:
        st.button(
            "Remove",
            key=f"remove-{index}",
            disabled=not store.can_remove,
            on_click=_on_remove,
            args=(index,),
        )

    st.selectbox(
        "Powertrain",
        options=POWERTRAINS,
        format_func=_POWERTRAIN_LABELS.get,
        key=_key(index, "powertrain"),
        on_change=_on_change,
        args=(index, "powertrain"),
    )
    st.divider()

    for field in ("car_price", "discount", "other_discount"):
        _text_input(index, field)
    st.markdown(f"Net purchase price: **{format_number(result.net_car_price)}**")
    st.divider()

    st.number_input(
        "Resale value (%)",
        min_value=0.0,
        step=1.0,
        key=_key(index, "resale_pct"),
        on_change=_on_change,
        args=(index, "resale_pct"),
    )
    st.markdown(f"Resale value: **{format_number(result.resale_value)}**")
    st.divider()

    price_unit = "per kWh" if profile.powertrain == "EV" else "per liter"
    st.number_input(
        f"Energy price ({price_unit})",
        min_value=0.0,
        step=0.5,
        key=_key(index, "fuel_price"),
        on_change=_on_change,
        args=(index, "fuel_price"),
    )
    st.selectbox(
        "Driving pattern",
        options=FUEL_MODES,
        format_func=_FUEL_MODE_LABELS.get,
        key=_key(index, "fuel_mode"),
        on_change=_on_change,
        args=(index, "fuel_mode"),
    )
    if profile.fuel_mode == "custom":
        st.number_input(
            f"Energy consumption ({profile.consumption_unit})",
            min_value=0.0,
            step=0.5,
            key=_key(index, "fuel_consumption"),
            on_change=_on_change,
            args=(index, "fuel_consumption"),
        )
    st.markdown(
        f"Consumption: **{format_number(profile.fuel_consumption, 2)}** "
        f"{profile.consumption_unit}  \n"
        f"Energy cost per km: **{format_number(profile.fuel_per_km, 2)}**  \n"
        f"Energy cost per year: **{format_number(result.fuel_per_year)}**"
    )
    st.divider()

    for field in ("km_per_year", "insurance", "maintenance", "registration", "miscellaneous"):
        _text_input(index, field)
    st.markdown(f"Cost per year: **{format_number(result.yearly_cost)}**")
    st.divider()

    st.number_input(
        "Years of ownership",
        min_value=1,
        step=1,
        key=_key(index, "years"),
        on_change=_on_change,
        args=(index, "years"),
    )
    _text_input(index, "maintenance_at_end")
    st.divider()

    st.subheader(f"Total over {profile.years} years: {format_number(result.total_cost)}")


def _render_comparison(store: VehicleStore, calculator: TCOCalculator) -> None:
    comparison = calculator.compare(store.profiles)

    st.header("Comparison")
    df = comparison.to_dataframe()
    for column in _MONEY_COLUMNS:
        df[column] = df[column].map(format_number)
    df["Fuel / km"] = df["Fuel / km"].map(lambda v: format_number(v, 2))
    st.dataframe(df, hide_index=True, use_container_width=True)

    summary = comparison.summary()
    if len(store) > 1:
        st.success(
            f"Cheapest to own: **{summary['Cheapest']}** "
            f"({format_number(summary['Cheapest Total Cost'])})"
        )

    col_cum, col_breakdown = st.columns(2)
    with col_cum:
        fig = TCOVisualizer.plot_cumulative(comparison, show=False)
        st.pyplot(fig)
        plt.close(fig)
    with col_breakdown:
        fig = TCOVisualizer.plot_cost_breakdown(comparison, show=False)
        st.pyplot(fig)
        plt.close(fig)


def main() -> None:
    """Entry point for the Streamlit dashboard."""
    logging.basicConfig(level=os.environ.get("CAR_TCO_LOG_LEVEL", "WARNING").upper())

    st.set_page_config(page_title="Car Cost of Ownership", layout="wide")

    head, add = st.columns([5, 1])
    with head:
        st.title("Car Cost of Ownership Comparison")
    with add:
        st.button("Add vehicle", on_click=_on_add)

    store = _get_store()
    calculator = TCOCalculator()

    columns = st.columns(len(store))
    for index, column in enumerate(columns):
        with column, st.container(border=True):
            _render_vehicle(store, calculator, index)

    _render_comparison(store, calculator)


if __name__ == "__main__":
    main()

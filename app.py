import streamlit as st

from rocket_telemetry.analyze import analyze
from rocket_telemetry.config import load_config, setup_logging
from rocket_telemetry.domain import DEFAULT_WINDOW
from rocket_telemetry.parse import records_to_frame
from rocket_telemetry.render import (
    METRIC_GROUPS,
    make_metric_figure,
    make_performance_figure,
    stats_card_items,
    stats_title,
)

config = load_config()
setup_logging(config.log_level, config.log_file)


# -----------------------------
# Streamlit page setup
# -----------------------------
st.set_page_config(page_title="Rocket Telemetry Analysis", layout="wide")
st.title("Rocket Telemetry Analysis")


# -----------------------------
# Load + parse (one synchronous pass per rerun)
# -----------------------------
with st.spinner("Loading telemetry data..."):
    result, err = analyze(config.source, window=DEFAULT_WINDOW, timeout_s=config.timeout_s)

if err or result is None:
    st.error(err or "Failed to load data")
    st.stop()

records, stats = result
frame = records_to_frame(records)


# -----------------------------
# Display helpers
# -----------------------------
def show_group(name: str) -> None:
    st.pyplot(make_metric_figure(frame, METRIC_GROUPS[name]), clear_figure=True)


def show_group_grid(names: list[str]) -> None:
    # two charts per row, like the wide layout of the other tabs
    for i in range(0, len(names), 2):
        cols = st.columns(2)
        for col, name in zip(cols, names[i:i + 2]):
            with col:
                show_group(name)


def show_stats_card() -> None:
    st.subheader(stats_title(DEFAULT_WINDOW))
    items = stats_card_items(stats)
    if not items:
        st.info("No telemetry rows inside the analysis window.")
        return
    cols = st.columns(3)
    for i, (label, value) in enumerate(items):
        cols[i % 3].metric(label, value)


# -----------------------------
# Tabs
# -----------------------------
overview, motion, control, performance = st.tabs(["Overview", "Motion", "Control", "Performance"])

with overview:
    show_stats_card()
    show_group_grid(["acceleration", "position"])

with motion:
    show_group_grid(["acceleration", "gyroscope", "velocity", "position"])

with control:
    show_group_grid(["control", "servos"])

with performance:
    st.pyplot(make_performance_figure(frame), clear_figure=True)

import streamlit as st

# Add src to path
import sys
import os
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from exporter import export_history
from history_store import HistoryStore
from settings import load_settings
from visualization.data_loader import load_history_frame
from visualization.visualizer import Visualizer

# --- Config ---
st.set_page_config(
    page_title="YouTube Watch History Dashboard",
    page_icon="📺",
    layout="wide"
)

TAKEOUT_STEPS = [
    'Go to [Google Takeout](https://takeout.google.com/)',
    'Click "Deselect all" and then scroll down to select only "YouTube and YouTube Music"',
    'Click the button "All YouTube data included" and uncheck everything except "history"',
    'Click "OK" and then "Next step"',
    'Choose delivery method, frequency, and file type (ZIP is recommended)',
    'Click "Create export"',
    "Wait for Google to create your export (you'll get an email)",
    'Download the ZIP file and extract it',
    'Open the Takeout/YouTube and YouTube Music/history/watch-history.html file',
    'Copy the content and paste it into the text area above',
]

# --- State ---
if "store" not in st.session_state:
    st.session_state["store"] = HistoryStore(load_settings())
if "history_input" not in st.session_state:
    st.session_state["history_input"] = ""

store = st.session_state["store"]


def on_load_sample():
    store.load_sample()
    st.session_state["history_input"] = store.input_text


def on_clear():
    store.clear_input()
    st.session_state["history_input"] = ""


def on_analyze():
    store.parse(st.session_state["history_input"])


# --- Input Section ---
st.title("📺 YouTube Watch History Dashboard")
st.markdown("Analyze and visualize your YouTube viewing habits")

st.subheader("Paste Your YouTube Watch History")
st.markdown(
    "To use this dashboard, copy and paste entries from your Google Takeout "
    "YouTube watch history HTML file."
)
st.button("Load sample data", on_click=on_load_sample)

st.text_area(
    "Watch history",
    key="history_input",
    height=256,
    placeholder="Paste your YouTube watch history here...",
    label_visibility="collapsed",
)
store.set_input(st.session_state["history_input"])

col1, col2, col3 = st.columns([1, 1, 4])
col1.button(
    "Processing..." if store.busy else "Analyze Watch History",
    on_click=on_analyze,
    disabled=not store.can_parse(),
    type="primary",
)
col2.button("Clear", on_click=on_clear, disabled=not store.can_parse())
col3.caption(store.summary())

if store.error:
    st.error(f"**Error:**\n\n{store.error}")

# --- Results Section ---
if store.processed:
    viz = Visualizer(store.views)

    left, right = st.columns(2)
    with left:
        st.subheader("Top Channels")
        st.caption("Distribution of videos watched by channel")
        fig_channels = viz.plot_channel_distribution()
        if fig_channels:
            st.plotly_chart(fig_channels, use_container_width=True)

    with right:
        st.subheader("Monthly Activity")
        st.caption("Number of videos watched per month")
        fig_monthly = viz.plot_monthly_activity()
        if fig_monthly:
            st.plotly_chart(fig_monthly, use_container_width=True)

    left, right = st.columns(2)
    with left:
        st.subheader("Activity by Hour of Day")
        st.caption("Number of videos watched by hour")
        fig_hourly = viz.plot_hourly_activity()
        if fig_hourly:
            st.plotly_chart(fig_hourly, use_container_width=True)

    with right:
        st.subheader("Videos Watched Multiple Times")
        st.caption("Videos that appear multiple times")
        fig_recurring = viz.plot_recurring_content()
        if fig_recurring:
            st.plotly_chart(fig_recurring, use_container_width=True)
        else:
            st.markdown("*No videos watched multiple times*")

    st.subheader("Recent Watch History")
    st.caption("Your most recently watched videos")
    st.dataframe(load_history_frame(store), hide_index=True, use_container_width=True)

    st.subheader("Export Data")
    col1, col2, _ = st.columns([1, 1, 4])
    col1.download_button(
        "Export to CSV",
        data=export_history(store, "csv"),
        file_name="youtube_history.csv",
        mime="text/csv",
    )
    col2.download_button(
        "Export to JSON",
        data=export_history(store, "json"),
        file_name="youtube_history.json",
        mime="application/json",
    )

# --- Instructions Section ---
else:
    st.subheader("How to Get Your YouTube Watch History")
    st.markdown("\n".join(f"{i}. {step}" for i, step in enumerate(TAKEOUT_STEPS, start=1)))

st.markdown("---")
st.caption("This dashboard visualizes YouTube watch history data from Google Takeout.")

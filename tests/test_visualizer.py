"""Tests for chart building and the history table loader."""

import pytest

from aggregation import compute_views
from conftest import record
from visualization.data_loader import TABLE_COLUMNS, load_history_frame
from visualization.visualizer import Visualizer, format_hour_label, shorten_label


@pytest.mark.parametrize("hour, expected", [
    ("00", "12 AM"),
    ("01", "1 AM"),
    ("11", "11 AM"),
    ("12", "12 PM"),
    ("13", "1 PM"),
    ("23", "11 PM"),
])
def test_format_hour_label(hour, expected):
    assert format_hour_label(hour) == expected


def test_shorten_label():
    assert shorten_label("Prof. John Gallaugher") == "Prof. John G..."
    assert shorten_label("Climate Town") == "Climate Town"


class TestVisualizer:
    def test_all_figures(self, sample_store):
        figures = Visualizer(sample_store.views).figures()
        assert all(fig is not None for fig in figures.values())

    def test_empty_views(self):
        figures = Visualizer(compute_views([])).figures()
        assert all(fig is None for fig in figures.values())

    def test_hourly_hides_empty_hours(self, sample_store):
        fig = Visualizer(sample_store.views).plot_hourly_activity()
        assert list(fig.data[0].x) == ["5 AM", "8 AM", "9 AM", "2 PM"]

    def test_recurring_hover_has_full_title(self, sample_store):
        fig = Visualizer(sample_store.views).plot_recurring_content()
        full_title = sample_store.recurring_content.iloc[0]['full_title']
        assert fig.data[0].customdata[0][0] == full_title

    def test_recurring_titles_with_shared_prefix(self):
        prefix = "x" * 45
        records = [record(title=prefix + suffix) for suffix in ("-one", "-two", "-one", "-two")]
        fig = Visualizer(compute_views(records)).plot_recurring_content()
        assert list(fig.data[0].y) == [prefix + "-one", prefix + "-two"]
        assert list(fig.data[0].x) == [2, 2]
        assert list(fig.layout.yaxis.ticktext) == [prefix + "...", prefix + "..."]

    def test_channel_labels_shortened(self, sample_store):
        fig = Visualizer(sample_store.views).plot_channel_distribution()
        labels = [row[0] for row in fig.data[0].customdata]
        assert labels == ["Prof. John G...", "Climate Town"]

    def test_no_recurring(self):
        views = compute_views([record(title="a"), record(title="b")])
        assert Visualizer(views).plot_recurring_content() is None


class TestLoadHistoryFrame:
    def test_recent_rows(self, sample_store):
        df = load_history_frame(sample_store, limit=2)
        assert list(df.columns) == TABLE_COLUMNS
        assert len(df) == 2
        assert df.iloc[0]['Date'] == "1/29/2025 08:00 AM"
        assert df.iloc[1]['Date'] == "10/16/2024 09:05 AM"

    def test_empty_store(self, store):
        df = load_history_frame(store)
        assert df.empty
        assert list(df.columns) == TABLE_COLUMNS

"""
Tests for the long-to-wide pivot.
"""
import math

import pandas as pd
import pytest

from market_climate.pipeline.config import PipelineConfig
from market_climate.pipeline.models import RawRow, WideRecord
from market_climate.pipeline.pivot import (
    parse_date_keys,
    pivot_rows,
    records_to_frame,
    sort_date_keys,
)


@pytest.fixture
def config():
    return PipelineConfig()


def test_pivot_groups_by_date(config):
    """Two dates, first with A and B, second with A only."""
    rows = [
        RawRow("2024-01-01", "A", 1000.0),
        RawRow("2024-01-01", "B", 2.0),
        RawRow("2024-01-02", "A", 900.0),
    ]

    records = pivot_rows(rows, config)

    assert [r.date for r in records] == ["2024-01-01", "2024-01-02"]
    assert dict(records[0].values) == {"A": 1000.0, "B": 2.0}
    assert dict(records[1].values) == {"A": 900.0}
    assert records[1].get("B") is None


def test_pivot_orders_chronologically_not_lexically(config):
    rows = [
        RawRow("12/01/2023", "A", 3.0),
        RawRow("1/15/2024", "A", 4.0),
        RawRow("2/1/2023", "A", 1.0),
    ]

    records = pivot_rows(rows, config)

    assert [r.date for r in records] == ["2/1/2023", "12/01/2023", "1/15/2024"]


def test_pivot_output_is_monotonic(config):
    dates = ["2024-03-01", "2024-01-15", "2024-02-10", "2024-01-01", "2024-02-29"]
    rows = [RawRow(d, "A", float(i)) for i, d in enumerate(dates)]

    records = pivot_rows(rows, config)
    stamps = [pd.Timestamp(r.date) for r in records]

    assert all(a <= b for a, b in zip(stamps, stamps[1:]))


def test_later_rows_win(config):
    rows = [
        RawRow("2024-01-01", "A", 1.0),
        RawRow("2024-01-01", "A", 5.0),
        RawRow("2024-01-01", "B", 3.0),
        RawRow("2024-01-01", "B", None),
    ]

    records = pivot_rows(rows, config)

    assert records[0].get("A") == 5.0
    assert "B" in records[0].values
    assert records[0].get("B") is None


def test_all_null_date_is_retained(config):
    rows = [
        RawRow("2024-01-01", "A", 1.0),
        RawRow("2024-01-02", "A", None),
        RawRow("2024-01-03", "A", 3.0),
    ]

    records = pivot_rows(rows, config)

    assert [r.date for r in records] == ["2024-01-01", "2024-01-02", "2024-01-03"]
    assert records[1].get("A") is None


def test_empty_input(config):
    assert pivot_rows([], config) == []


def test_unparseable_dates_sort_last_in_first_seen_order(config):
    rows = [
        RawRow("later", "A", 1.0),
        RawRow("2024-01-02", "A", 2.0),
        RawRow("unknown", "A", 3.0),
        RawRow("2024-01-01", "A", 4.0),
    ]

    records = pivot_rows(rows, config)

    assert [r.date for r in records] == ["2024-01-01", "2024-01-02", "later", "unknown"]


def test_lexical_order_for_iso_dates():
    config = PipelineConfig(date_order="lexical")
    rows = [RawRow("2024-02", "A", 2.0), RawRow("2023-12", "A", 1.0)]

    records = pivot_rows(rows, config)

    assert [r.date for r in records] == ["2023-12", "2024-02"]


def test_explicit_date_format_day_first():
    config = PipelineConfig(date_format="%d/%m/%Y")
    rows = [RawRow("02/01/2024", "A", 2.0), RawRow("10/12/2023", "A", 1.0)]

    records = pivot_rows(rows, config)

    assert [r.date for r in records] == ["10/12/2023", "02/01/2024"]


def test_pivot_is_idempotent(config):
    rows = [
        RawRow("2024-01-02", "A", 2.0),
        RawRow("2024-01-01", "B", 1.0),
        RawRow("2024-01-01", "A", 1.5),
    ]

    assert pivot_rows(rows, config) == pivot_rows(list(rows), config)


class TestMonthlyGranularity:

    @pytest.fixture
    def monthly(self):
        return PipelineConfig(granularity="monthly")

    def test_last_observation_in_month_wins(self, monthly):
        rows = [
            RawRow("2024-01-31", "A", 3.0),
            RawRow("2024-01-02", "A", 1.0),
            RawRow("2024-02-01", "A", 4.0),
            RawRow("2024-01-15", "A", 2.0),
        ]

        records = pivot_rows(rows, monthly)

        assert [r.date for r in records] == ["2024-01", "2024-02"]
        assert records[0].get("A") == 3.0
        assert records[1].get("A") == 4.0

    def test_null_does_not_replace_number(self, monthly):
        rows = [
            RawRow("2024-01-10", "A", 7.0),
            RawRow("2024-01-20", "A", None),
            RawRow("2024-01-20", "B", None),
        ]

        records = pivot_rows(rows, monthly)

        assert records[0].get("A") == 7.0
        assert "B" in records[0].values

    def test_months_ordered_chronologically(self, monthly):
        rows = [
            RawRow("2024-03-05", "A", 3.0),
            RawRow("2023-11-05", "A", 1.0),
            RawRow("2024-01-05", "A", 2.0),
        ]

        records = pivot_rows(rows, monthly)

        assert [r.date for r in records] == ["2023-11", "2024-01", "2024-03"]


def test_sort_date_keys_lexical_vs_calendar():
    keys = ["10/1/2024", "9/1/2024"]

    assert sort_date_keys(keys, PipelineConfig(date_order="lexical")) == ["10/1/2024", "9/1/2024"]
    assert sort_date_keys(keys, PipelineConfig()) == ["9/1/2024", "10/1/2024"]


def test_parse_date_keys_marks_failures():
    stamps = parse_date_keys(["2024-01-01", "garbage"])

    assert stamps[0] is not None
    assert stamps[1] is None


def test_records_to_frame():
    records = [
        WideRecord("2024-01-01", {"A": 1000.0, "B": 2.0}),
        WideRecord("2024-01-02", {"A": 900.0}),
    ]

    frame = records_to_frame(records)

    assert list(frame.columns) == ["A", "B"]
    assert frame.index.name == "date"
    assert frame.loc["2024-01-01", "A"] == 1000.0
    assert math.isnan(frame.loc["2024-01-02", "B"])


def test_records_to_frame_empty():
    frame = records_to_frame([])

    assert frame.empty

import pytest

from pacy.agg.summary import (
    distance_weighted_average_heart_rate,
    drop_trailing_split,
    overall_average_pace,
    summarize_workout,
)
from pacy.models import Split


def _splits(*rows: tuple[float, float, float]) -> list[Split]:
    return [
        Split(index=i, distance=d, duration=t, average_heart_rate=hr)
        for i, (d, t, hr) in enumerate(rows, start=1)
    ]


def test_overall_average_pace():
    assert overall_average_pace(5000, 1500) == "5'00''"
    assert overall_average_pace(10000, 2843) == "4'44''"


def test_overall_average_pace_zero_distance():
    assert overall_average_pace(0, 1800) == "0'00''"


def test_distance_weighted_average_heart_rate():
    splits = _splits((1000, 300, 150), (1000, 290, 160), (500, 140, 170))
    expected = (150 * 1000 + 160 * 1000 + 170 * 500) / 2500
    assert distance_weighted_average_heart_rate(splits) == pytest.approx(expected)


def test_distance_weighted_average_heart_rate_no_value():
    assert distance_weighted_average_heart_rate([]) is None


def test_distance_weighted_average_heart_rate_real_zero():
    splits = _splits((1000, 300, 0))
    assert distance_weighted_average_heart_rate(splits) == 0


def test_drop_trailing_split():
    splits = _splits((1000, 300, 150), (99, 30, 160))
    assert drop_trailing_split(splits) == splits[:1]


def test_drop_trailing_split_keeps_long_enough_final_split():
    splits = _splits((1000, 300, 150), (100, 30, 160))
    assert drop_trailing_split(splits) == splits
    assert drop_trailing_split([]) == []


def test_summarize_workout(activity_factory):
    record = activity_factory.make()
    splits = _splits(
        (1000, 300, 150),
        (1000, 300, 150),
        (1000, 300, 160),
        (1000, 300, 160),
        (1000, 300, 155),
        (20, 10, 190),
    )

    summary = summarize_workout(record, splits, max_pulse=200)

    assert summary.average_pace == "5'00''"
    assert summary.average_pace_seconds_per_km == pytest.approx(300)
    # The 20 m tail is not part of the average.
    assert summary.average_heart_rate == pytest.approx(155)
    assert summary.heart_rate_percentage == pytest.approx(77.5)
    assert summary.elevation_gain_meters == 42.0


def test_summarize_workout_without_splits(activity_factory):
    record = activity_factory.make(update={"total_distance_meters": 0})
    summary = summarize_workout(record, [])
    assert summary.average_pace == "0'00''"
    assert summary.average_pace_seconds_per_km is None
    assert summary.average_heart_rate is None
    assert summary.heart_rate_percentage is None

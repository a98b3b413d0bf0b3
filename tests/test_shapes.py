"""Unit tests for line, bar and bubble geometry."""

from __future__ import annotations

import pytest

from insights.formatting import format_currency
from insights.settings import BarChartSettings, LineChartSettings, Padding
from insights.shapes import (
    NO_DATA,
    NOT_ENOUGH_DATA,
    ChartPoint,
    build_bar_chart,
    build_bubble_map,
    build_line_chart,
    build_region_markers,
    line_path,
    path_to_svg,
    x_tick_indices,
)

pytestmark = pytest.mark.unit

POSITIONS = {"Dubai": (653, 226), "Riyadh": (630, 227), "Cairo": (586, 209)}


def _points(values: list[float]) -> list[ChartPoint]:
    return [ChartPoint(x=f"w{i}", y=v) for i, v in enumerate(values)]


def test_line_path_moves_then_draws_in_order() -> None:
    """First segment is a move, the rest are straight lines."""

    segments = line_path([(60, 260), (265, 150), (470, 40)])

    assert [s.command for s in segments] == ["M", "L", "L"]
    assert path_to_svg(segments) == "M 60,260 L 265,150 L 470,40"


def test_path_coordinates_are_trimmed() -> None:
    """Fractional coordinates keep at most two decimals."""

    segments = line_path([(60.0, 133.3333), (62.5, 0.0)])

    assert path_to_svg(segments) == "M 60,133.33 L 62.5,0"


@pytest.mark.parametrize(
    ("n", "expected"),
    [
        (2, [0, 1]),
        (6, [0, 1, 2, 3, 4, 5]),
        (7, [0, 2, 4, 6]),
        (13, [0, 3, 6, 9, 12]),
        (20, [0, 4, 8, 12, 16, 19]),
    ],
)
def test_x_tick_subsampling(n: int, expected: list[int]) -> None:
    """Every ceil(n/6)-th label is kept, plus the last one."""

    assert x_tick_indices(n) == expected


def test_line_chart_geometry() -> None:
    """Points are spread across the padded width and measured from a zero baseline."""

    settings = LineChartSettings(width=500, height=300, padding=Padding(top=40, right=30, bottom=40, left=60))

    chart = build_line_chart(_points([0, 50, 100]), settings, format_y=lambda v: f"{v:.0f}")

    assert chart.status == "ok"
    assert [(s.x, s.y) for s in chart.segments] == [(60, 260), (265, 150), (470, 40)]
    assert chart.path == "M 60,260 L 265,150 L 470,40"
    assert [t.label for t in chart.y_ticks] == ["0", "25", "50", "75", "100"]
    assert [t.position for t in chart.y_ticks] == [260, 205, 150, 95, 40]
    assert [t.label for t in chart.x_ticks] == ["w0", "w1", "w2"]
    assert chart.markers[1].tooltip == "w1: 50"


def test_line_chart_all_zero_series_uses_midpoint() -> None:
    """A flat zero series sits on the vertical midpoint instead of dividing by zero."""

    chart = build_line_chart(_points([0, 0]), LineChartSettings())

    assert chart.status == "ok"
    assert {s.y for s in chart.segments} == {150}


@pytest.mark.parametrize("values", [[], [42]])
def test_line_chart_needs_two_points(values: list[float]) -> None:
    """Short series render the not-enough-data state."""

    chart = build_line_chart(_points(values))

    assert chart.status == "insufficient_data"
    assert chart.message == NOT_ENOUGH_DATA
    assert chart.segments == ()


def test_bar_chart_heights() -> None:
    """Bars scale from zero to the inner height of the chart."""

    settings = BarChartSettings(width=220, height=140, padding=Padding(top=20, right=10, bottom=20, left=10), bar_gap=0.0)

    chart = build_bar_chart(
        [ChartPoint("Mobile", 50), ChartPoint("Desktop", 100)],
        settings,
        colors={"Desktop": "#10B981"},
        format_value=format_currency,
    )

    mobile, desktop = chart.bars
    assert mobile.height == 50 and desktop.height == 100
    assert mobile.y == 70 and desktop.y == 20
    assert mobile.x == 10 and desktop.x == 110
    assert mobile.width == 100
    assert desktop.value_label == "$100"
    assert desktop.color == "#10B981"
    assert mobile.color == "#3B82F6"


def test_bar_chart_all_zero_values_have_no_height() -> None:
    """A degenerate domain falls back to the range minimum for bars."""

    chart = build_bar_chart([ChartPoint("a", 0), ChartPoint("b", 0)])

    assert [b.height for b in chart.bars] == [0, 0]


def test_bar_chart_empty() -> None:
    """No bars means the no-data state."""

    chart = build_bar_chart([])

    assert chart.status == "no_data"
    assert chart.message == NO_DATA


def test_bubbles_are_sorted_descending() -> None:
    """Largest bubble first so smaller ones are drawn on top."""

    chart = build_bubble_map([("Dubai", 10), ("Riyadh", 50), ("Cairo", 20)], positions=POSITIONS)

    assert [b.value for b in chart.bubbles] == [50, 20, 10]
    assert [b.region for b in chart.bubbles] == ["Riyadh", "Cairo", "Dubai"]


def test_bubbles_without_coordinates_are_dropped() -> None:
    """Regions outside the lookup table are left out silently."""

    chart = build_bubble_map([("Dubai", 10), ("Atlantis", 500)], positions=POSITIONS, format_value=format_currency)

    assert [b.region for b in chart.bubbles] == ["Dubai"]
    assert chart.excluded == ("Atlantis",)
    # Scales only see located regions, so a single bubble is degenerate.
    assert chart.bubbles[0].radius == 8
    assert chart.bubbles[0].color == chart.high_color
    assert chart.bubbles[0].label == "Dubai: $10"


def test_bubble_colors_and_radii_span_the_range() -> None:
    """Min and max values get the configured colors; max gets the largest radius."""

    chart = build_bubble_map(
        [("Dubai", 10), ("Riyadh", 30), ("Cairo", 20)],
        positions=POSITIONS,
        low_color="#F59E0B",
        high_color="#10B981",
    )

    by_region = {b.region: b for b in chart.bubbles}
    assert by_region["Dubai"].color == "#F59E0B"
    assert by_region["Riyadh"].color == "#10B981"
    assert by_region["Riyadh"].radius > by_region["Cairo"].radius > by_region["Dubai"].radius
    assert (by_region["Dubai"].x, by_region["Dubai"].y) == (653, 226)
    assert by_region["Dubai"].lat == pytest.approx(25.276987)


def test_bubble_map_empty() -> None:
    """No input at all means the no-data state."""

    chart = build_bubble_map([], positions=POSITIONS)

    assert chart.status == "no_data"
    assert chart.message == NO_DATA
    assert chart.bubbles == ()


def test_bubble_map_with_only_unlocated_regions_is_an_empty_map() -> None:
    """Data that cannot be placed still renders the map, just without bubbles."""

    chart = build_bubble_map([("Atlantis", 1), ("Lemuria", 2)], positions=POSITIONS)

    assert chart.status == "ok"
    assert chart.bubbles == ()
    assert chart.excluded == ("Atlantis", "Lemuria")


def test_bubble_colors_keep_palette_case_for_any_series() -> None:
    """A lower-case palette is returned as given whether or not the domain is degenerate."""

    single = build_bubble_map([("Dubai", 10)], positions=POSITIONS, low_color="#f59e0b", high_color="#10b981")
    spread = build_bubble_map([("Dubai", 10), ("Cairo", 20)], positions=POSITIONS, low_color="#f59e0b", high_color="#10b981")

    assert single.bubbles[0].color == "#10b981"
    assert [b.color for b in spread.bubbles] == ["#10b981", "#f59e0b"]


def test_region_markers_geometry() -> None:
    """Markers keep input order, grow linearly and switch color above the midpoint."""

    coordinates = {"Dubai": (25.2, 55.3), "Riyadh": (24.7, 46.7), "Cairo": (30.0, 31.2)}

    chart = build_region_markers(
        [("Dubai", 0), ("Riyadh", 100), ("Cairo", 50), ("Doha", 80)],
        coordinates=coordinates,
        low_color="#F59E0B",
        high_color="#10B981",
        format_value=format_currency,
    )

    assert chart.status == "ok"
    assert [m.region for m in chart.markers] == ["Dubai", "Riyadh", "Cairo"]
    assert [m.radius for m in chart.markers] == [10, 30, 20]
    assert [m.color for m in chart.markers] == ["#F59E0B", "#10B981", "#F59E0B"]
    assert (chart.markers[1].lat, chart.markers[1].lng) == (24.7, 46.7)
    assert chart.markers[2].label == "Cairo: $50"
    assert chart.excluded == ("Doha",)
    assert (chart.center, chart.zoom) == ((25.0, 45.0), 4)


def test_region_markers_flat_values() -> None:
    """Equal values all take the low color at the maximum radius."""

    chart = build_region_markers([("Dubai", 5), ("Cairo", 5)], low_color="#F59E0B", high_color="#10B981")

    assert {m.color for m in chart.markers} == {"#F59E0B"}
    assert {m.radius for m in chart.markers} == {30}


def test_region_markers_empty_and_unlocated() -> None:
    """No input is no-data; unplaceable input is an empty but valid map."""

    assert build_region_markers([]).status == "no_data"
    unlocated = build_region_markers([("Atlantis", 3)])
    assert unlocated.status == "ok"
    assert unlocated.markers == ()
    assert unlocated.excluded == ("Atlantis",)

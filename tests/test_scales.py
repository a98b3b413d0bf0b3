"""Unit tests for the scale engine."""

from __future__ import annotations

import math

import pytest

from insights.scales import (
    blend_channel,
    color_scale,
    index_scale,
    linear_scale,
    marker_radius_scale,
    parse_hex_color,
    radius_scale,
    series_domain,
    threshold_color_scale,
    to_hex_color,
)

pytestmark = pytest.mark.unit

LOW = "#F59E0B"
HIGH = "#10B981"


def test_linear_scale_maps_domain_onto_range() -> None:
    """Endpoints and midpoints map linearly, including inverted ranges."""

    scale = linear_scale((0, 100), (260, 40))

    assert scale(0) == 260
    assert scale(100) == 40
    assert scale(50) == 150


def test_linear_scale_degenerate_domain() -> None:
    """A zero-width domain returns the midpoint, or the minimum when asked."""

    assert linear_scale((5, 5), (0, 100))(5) == 50
    assert linear_scale((0, 0), (260, 40))(123) == 150
    assert linear_scale((5, 5), (0, 100), degenerate="min")(5) == 0


def test_series_domain_zero_baseline() -> None:
    """Line charts measure from zero, not from the series minimum."""

    assert series_domain([10, 20, 30]) == (10, 30)
    assert series_domain([10, 20, 30], zero_baseline=True) == (0, 30)
    with pytest.raises(ValueError):
        series_domain([])


def test_index_scale() -> None:
    """Ordinal positions are spread evenly between the paddings."""

    scale = index_scale(5, 60, 470)

    assert scale(0) == 60
    assert scale(4) == 470
    assert scale(2) == pytest.approx(265)


def test_index_scale_needs_two_points() -> None:
    """One point has no spacing to compute."""

    with pytest.raises(ValueError):
        index_scale(1, 60, 470)


def test_radius_scale_uses_log_compression() -> None:
    """Radius grows with log1p of the value relative to the max."""

    radius = radius_scale([10, 50, 100])

    assert radius(100) == pytest.approx(3 + math.log1p(1) * 20)
    assert radius(10) == pytest.approx(3 + math.log1p(0.1) * 20)
    assert radius(0) == pytest.approx(3)


def test_radius_scale_degenerate_series() -> None:
    """Equal values all get the fallback radius."""

    radius = radius_scale([5, 5, 5])

    assert radius(5) == 8
    assert radius_scale([5, 5], fallback_radius=11)(5) == 11


def test_color_scale_boundaries_are_exact() -> None:
    """The series min and max reproduce the configured colors."""

    color = color_scale([10, 20, 30], LOW, HIGH)

    assert color(10) == LOW
    assert color(30) == HIGH


def test_color_scale_blends_each_channel() -> None:
    """The midpoint is a per-channel half-up rounded blend."""

    color = color_scale([0, 100], "#000000", "#FFFFFF")

    assert color(50) == "#808080"
    assert color(25) == to_hex_color((64, 64, 64))


def test_color_scale_degenerate_series_returns_high_color() -> None:
    """Equal values map to the high color untouched."""

    color = color_scale([5, 5, 5], LOW, "#abcdef")

    assert color(5) == "#abcdef"


def test_color_scale_clamps_outside_values() -> None:
    """Values outside the series range stay within the two colors."""

    color = color_scale([10, 20], LOW, HIGH)

    assert color(0) == LOW
    assert color(99) == HIGH


def test_hex_helpers() -> None:
    """Hex parsing and formatting round out the color scale."""

    assert parse_hex_color("#10B981") == (16, 185, 129)
    assert to_hex_color((16, 185, 129)) == "#10B981"
    assert blend_channel(0, 255, 0.5) == 128
    with pytest.raises(ValueError):
        parse_hex_color("#FFF")


def test_color_scale_returns_palette_strings_as_given() -> None:
    """Lower-case palettes come back unchanged at both ends and when degenerate."""

    color = color_scale([10, 20, 30], "#3b82f6", "#10b981")

    assert (color(10), color(30)) == ("#3b82f6", "#10b981")
    assert color(-5) == "#3b82f6"
    assert color_scale([7, 7], "#3b82f6", "#10b981")(7) == "#10b981"
    assert color(20) == to_hex_color((38, 158, 188))


def test_marker_radius_scale_is_linear() -> None:
    """Marker radius runs from base to base + factor across [0, max]."""

    radius = marker_radius_scale([0, 50, 100])

    assert [radius(v) for v in (0, 50, 100)] == [10, 20, 30]
    assert marker_radius_scale([0, 0])(0) == 10


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0, LOW), (10, LOW), (11, HIGH), (20, HIGH)],
)
def test_threshold_color_scale(value: float, expected: str) -> None:
    """Only ratios strictly above one half take the high color."""

    assert threshold_color_scale([0, 10, 20], LOW, HIGH)(value) == expected


def test_threshold_color_scale_flat_domain() -> None:
    """A flat domain divides by one, so every value sits at ratio zero."""

    color = threshold_color_scale([5, 5, 5], LOW, HIGH)

    assert color(5) == LOW

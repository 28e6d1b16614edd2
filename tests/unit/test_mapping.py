"""Tests for map point extraction and urgency read-back."""

from fieldreport.core.types import SubmissionRow, UrgencyLevel
from fieldreport.pipeline.mapping import (
    UNKNOWN_COLOR,
    URGENCY_COLORS,
    map_points,
    parse_location,
    urgency_tier,
)


def _log(location_xy: str, urgency: str = "") -> SubmissionRow:
    return SubmissionRow("R1", "P1", "C1", "D1", urgency=urgency, location_xy=location_xy)


class TestParseLocation:
    def test_valid(self):
        assert parse_location("34.020882,-6.841650") == (34.020882, -6.84165)

    def test_spaces(self):
        assert parse_location(" 34.1 , -5.2 ") == (34.1, -5.2)

    def test_not_a_number(self):
        assert parse_location("not-a-number,12.3") is None

    def test_single_value(self):
        assert parse_location("34.1") is None

    def test_empty(self):
        assert parse_location("") is None

    def test_non_finite(self):
        assert parse_location("nan,1") is None
        assert parse_location("inf,1") is None


class TestUrgencyTier:
    def test_form_labels(self):
        assert urgency_tier("1- منخفض") is UrgencyLevel.LOW
        assert urgency_tier("2- متوسط") is UrgencyLevel.MEDIUM
        assert urgency_tier("3- مرتفع") is UrgencyLevel.HIGH
        assert urgency_tier("4- حرج جداً") is UrgencyLevel.CRITICAL

    def test_arabic_indic_digits(self):
        assert urgency_tier("٤") is UrgencyLevel.CRITICAL
        assert urgency_tier("٢") is UrgencyLevel.MEDIUM

    def test_enum_names(self):
        assert urgency_tier("high") is UrgencyLevel.HIGH

    def test_unknown(self):
        assert urgency_tier("") is None

    def test_colors(self):
        assert URGENCY_COLORS[UrgencyLevel.CRITICAL] == "#ef4444"
        assert URGENCY_COLORS[UrgencyLevel.LOW] == "#10b981"


class TestMapPoints:
    def test_malformed_point_skipped(self):
        """A row with an unparseable position is left off the map."""
        logs = [_log("not-a-number,12.3"), _log("34.0,-5.0", "3- مرتفع")]
        points = map_points(logs)
        assert len(points) == 1
        assert points[0].lat == 34.0
        assert points[0].urgency is UrgencyLevel.HIGH
        assert points[0].color == "#f97316"
        assert points[0].row is logs[1]

    def test_empty_location_skipped(self):
        assert map_points([_log("")]) == []

    def test_unknown_urgency_grey(self):
        points = map_points([_log("1,2", "??")])
        assert points[0].urgency is None
        assert points[0].color == UNKNOWN_COLOR

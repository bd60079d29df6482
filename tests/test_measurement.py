"""Tests for the box-metrics measurement adapter."""

from __future__ import annotations

import pytest

from resume_layout.constants import HEADER_SECTION_ID
from resume_layout.models.layout import MeasurementError, SectionMeasurement
from resume_layout.services.measurement import (
    BoxMetrics,
    MeasurementSession,
    collapse_margins,
    measurements_from_boxes,
)


class TestCollapseMargins:
    def test_larger_margin_wins(self):
        assert collapse_margins(20, 12) == 20

    def test_symmetric(self):
        assert collapse_margins(12, 20) == 20

    def test_zero_margins(self):
        assert collapse_margins(0, 0) == 0


class TestMeasurementsFromBoxes:
    def test_margins_collapse_against_previous_box(self):
        boxes = [
            BoxMetrics("a", 100, margin_top=0, margin_bottom=20),
            BoxMetrics("b", 150, margin_top=12, margin_bottom=12),
        ]

        result = measurements_from_boxes(boxes, ["a", "b"])

        assert result == [SectionMeasurement("a", 100, 0), SectionMeasurement("b", 150, 20)]

    def test_first_section_collapses_against_header(self):
        header = BoxMetrics(HEADER_SECTION_ID, 180, margin_bottom=16)
        boxes = [BoxMetrics("a", 100, margin_top=8)]

        result = measurements_from_boxes(boxes, ["a"], header)

        assert result[0].collapsed_margin == 16

    def test_header_found_among_boxes(self):
        boxes = [
            BoxMetrics("a", 100, margin_top=4),
            BoxMetrics(HEADER_SECTION_ID, 180, margin_bottom=10),
        ]

        result = measurements_from_boxes(boxes, ["a"])

        assert result[0].collapsed_margin == 10

    def test_follows_requested_order_not_report_order(self):
        boxes = [BoxMetrics("b", 50), BoxMetrics("a", 100)]

        result = measurements_from_boxes(boxes, ["a", "b"])

        assert [m.section_id for m in result] == ["a", "b"]

    def test_extra_boxes_ignored(self):
        boxes = [BoxMetrics("a", 100), BoxMetrics("stray", 999)]

        result = measurements_from_boxes(boxes, ["a"])

        assert len(result) == 1

    def test_missing_container_raises(self):
        with pytest.raises(MeasurementError, match="not mounted"):
            measurements_from_boxes([BoxMetrics("a", 100)], ["a", "b"])

    def test_unmounted_container_raises(self):
        boxes = [BoxMetrics("a", 100), BoxMetrics("b", 0, mounted=False)]

        with pytest.raises(MeasurementError):
            measurements_from_boxes(boxes, ["a", "b"])

    def test_empty_section_list(self):
        assert measurements_from_boxes([], []) == []


class TestBoxMetricsFromDict:
    def test_camel_case_keys(self):
        box = BoxMetrics.from_dict({"sectionId": "projects", "height": 120, "marginTop": 4, "marginBottom": 12})

        assert box == BoxMetrics("projects", 120.0, 4.0, 12.0, True)

    def test_snake_case_keys(self):
        box = BoxMetrics.from_dict({"section_id": "awards", "height": "80", "mounted": False})

        assert box.height == 80.0
        assert box.mounted is False


class TestMeasurementSession:
    def test_revisions_increase(self):
        session = MeasurementSession()

        assert session.begin_pass() == 1
        assert session.begin_pass() == 2
        assert session.revision == 2

    def test_stale_pass_is_discarded(self):
        session = MeasurementSession()
        stale = session.begin_pass()
        current = session.begin_pass()
        boxes = [BoxMetrics("a", 100)]

        assert session.accept(stale, boxes, ["a"]) is None
        assert session.accept(current, boxes, ["a"]) == [SectionMeasurement("a", 100, 0)]

    def test_current_pass_with_missing_container_raises(self):
        session = MeasurementSession()
        revision = session.begin_pass()

        with pytest.raises(MeasurementError):
            session.accept(revision, [], ["a"])


class TestSectionMeasurement:
    def test_negative_height_rejected(self):
        with pytest.raises(ValueError, match="Negative"):
            SectionMeasurement("a", -1)

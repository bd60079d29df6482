"""Tests for modern-template sidebar distribution."""

from __future__ import annotations

import logging

import pytest

from resume_layout.services.geometry import resolve_geometry
from resume_layout.services.sidebar import distribute_sidebar, sidebar_capacity, sidebar_item_height
from resume_layout.services.style_config import StyleConfig

STYLE = StyleConfig(template="modern")
GEOMETRY = resolve_geometry(STYLE)
# Letter page height minus sidebar padding top and bottom.
FULL_CAPACITY = 1056 - 48


def _skills(count: int) -> list[dict]:
    return [{"skill_name": f"Skill {i}", "rating": 0} for i in range(count)]


def _interests(count: int) -> list[dict]:
    return [{"name": f"Interest {i}", "icon": ""} for i in range(count)]


class TestSidebarHelpers:
    def test_capacity_reserves_first_page(self):
        assert sidebar_capacity(GEOMETRY, 200, 0) == pytest.approx(FULL_CAPACITY - 200)
        assert sidebar_capacity(GEOMETRY, 200, 1) == pytest.approx(FULL_CAPACITY)

    def test_capacity_never_negative(self):
        assert sidebar_capacity(GEOMETRY, 5000, 0) == 0

    def test_category_takes_two_lines(self):
        single = sidebar_item_height({"skill_name": "Python"}, STYLE)
        category = sidebar_item_height({"title": "Tools", "skills": ["Git"]}, STYLE)

        assert single == pytest.approx(11 * 1.2 + 4)
        assert category == pytest.approx(2 * 11 * 1.2 + 4)


class TestDistributeSidebar:
    def test_one_column_per_page(self):
        columns = distribute_sidebar([], [], 3, STYLE, GEOMETRY)

        assert len(columns) == 3
        assert all(column.is_empty for column in columns)

    def test_at_least_one_column(self):
        assert len(distribute_sidebar(_skills(1), [], 0, STYLE, GEOMETRY)) == 1

    def test_everything_fits_on_first_page(self):
        columns = distribute_sidebar(_skills(3), _interests(2), 2, STYLE, GEOMETRY)

        assert len(columns[0].skills) == 3
        assert len(columns[0].interests) == 2
        assert columns[1].is_empty

    def test_skills_resume_on_next_page(self):
        # Room for the heading plus two entries on page 1.
        columns = distribute_sidebar(
            _skills(3),
            _interests(1),
            2,
            STYLE,
            GEOMETRY,
            first_page_reserved=FULL_CAPACITY - 100,
        )

        assert [s["skill_name"] for s in columns[0].skills] == ["Skill 0", "Skill 1"]
        assert [s["skill_name"] for s in columns[1].skills] == ["Skill 2"]
        assert [i["name"] for i in columns[1].interests] == ["Interest 0"]

    def test_full_first_page_pushes_everything_down(self):
        columns = distribute_sidebar(
            _skills(2), [], 2, STYLE, GEOMETRY, first_page_reserved=FULL_CAPACITY
        )

        assert columns[0].is_empty
        assert len(columns[1].skills) == 2

    def test_overflow_stays_on_last_page(self, caplog):
        with caplog.at_level(logging.WARNING, logger="resume_layout.services.sidebar"):
            columns = distribute_sidebar([], _interests(100), 1, STYLE, GEOMETRY)

        assert len(columns[0].interests) == 100
        assert "overflows" in caplog.text

    def test_order_preserved_across_pages(self):
        columns = distribute_sidebar(
            _skills(40), _interests(40), 3, STYLE, GEOMETRY, first_page_reserved=300
        )

        skills = [item["skill_name"] for column in columns for item in column.skills]
        interests = [item["name"] for column in columns for item in column.interests]
        assert skills == [f"Skill {i}" for i in range(40)]
        assert interests == [f"Interest {i}" for i in range(40)]

    def test_heights_within_capacity_before_last_page(self):
        columns = distribute_sidebar(
            _skills(60), _interests(30), 3, STYLE, GEOMETRY, first_page_reserved=300
        )

        for index, column in enumerate(columns[:-1]):
            assert column.height <= sidebar_capacity(GEOMETRY, 300, index) + 1e-9

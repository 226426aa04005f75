"""
Standard rate cascade and role summary tests.
"""

import pytest

from src.models import Employee, LeadershipData, RoleAssignment
from src.salary import (
    RateContext,
    calculate_standard_rate,
    calculate_standard_salary,
    find_leadership_standard_salary,
    find_standard_rate_for_role,
    salary_difference,
    salary_difference_percent,
    summarize_roles,
)


# ============================================================================
# Midpoint
# ============================================================================

class TestStandardRate:
    """Tests for the salary range midpoint."""

    @pytest.mark.parametrize("low,high,expected", [
        (100, 140, 120),
        (100, 100, 100),
        (0, 0, 0),
        (90000, 150000, 120000),
    ])
    def test_calculate_standard_rate(self, low, high, expected):
        assert calculate_standard_rate(low, high) == expected


# ============================================================================
# Leadership table
# ============================================================================

class TestLeadershipLookup:
    """Tests for the leadership table lookup tiers."""

    def test_exact_match(self, leadership_table):
        assert find_leadership_standard_salary("Sales", "3", leadership_table) == 450000

    def test_prefixed_type(self, leadership_table):
        assert find_leadership_standard_salary("ftSales", "1", leadership_table) == 300000

    def test_query_inside_compound_type(self, leadership_table):
        """Discovery finds the Delivery & Discovery row."""
        assert find_leadership_standard_salary("Discovery", "2", leadership_table) == 380000

    def test_entry_inside_query(self, leadership_table):
        assert find_leadership_standard_salary("Sales Team", "1", leadership_table) == 300000

    def test_count_only_fallback(self, leadership_table):
        assert find_leadership_standard_salary("Platform", "4", leadership_table) == 500000

    def test_unspecified_type(self, leadership_table):
        assert find_leadership_standard_salary("Не указано", "3", leadership_table) == 450000

    def test_general_row_for_unspecified_type(self):
        table = [LeadershipData(role_name="Общий (2 кругов)", standard_salary=250000,
                                leadership_type="Общий", circle_count="2")]
        assert find_leadership_standard_salary("Не указано", "2", table) == 250000

    @pytest.mark.parametrize("functional_type,count", [
        ("Sales", "0"),
        ("Sales", None),
        ("Sales", ""),
        (None, "3"),
        ("Sales", "5"),
    ])
    def test_no_match(self, leadership_table, functional_type, count):
        assert find_leadership_standard_salary(functional_type, count, leadership_table) is None

    def test_empty_table(self):
        assert find_leadership_standard_salary("Sales", "3", []) is None


# ============================================================================
# Rate cascade
# ============================================================================

class TestRateCascade:
    """Tests for the ordered standard rate resolution."""

    @pytest.fixture
    def context(self, leader_roles, leadership_table):
        return RateContext(
            role_assignments=leader_roles,
            employees=[Employee(name="Петров Иван", salary=400000)],
            custom_salaries={"Лидер": 1000, "Разработчик": 200000},
            leadership_data=leadership_table,
            circle_type="Sales",
            circle_count=3,
        )

    def test_leadership_table_beats_override(self, context):
        assert find_standard_rate_for_role("Лидер", context) == 450000

    def test_override_beats_midpoint(self, context):
        assert find_standard_rate_for_role("Разработчик", context) == 200000

    def test_midpoint_without_override(self, context):
        context.custom_salaries = {}
        assert find_standard_rate_for_role("Разработчик", context) == 400000

    def test_leader_without_table_match_uses_override(self, context):
        leader = context.for_leader("Sales", 7)
        assert find_standard_rate_for_role("Лидер", leader) == 1000

    def test_no_incumbents(self, context):
        assert find_standard_rate_for_role("Дизайнер", context) == 0.0

    def test_empty_role(self, context):
        assert find_standard_rate_for_role("", context) == 0.0

    def test_for_leader_shares_salary_index(self, context):
        context.salaries_for("Разработчик")
        leader = context.for_leader("Delivery", 1)

        assert leader._salary_index is context._salary_index
        assert leader.circle_type == "Delivery"


class TestStandardSalary:
    """Tests for the FTE-weighted standard salary."""

    def test_weighted_sum(self):
        rates = {"A": 100, "B": 200}
        assert calculate_standard_salary({"A": 0.25, "B": 0.75}, rates.get) == pytest.approx(175)

    def test_no_roles(self):
        assert calculate_standard_salary({}, lambda role: 100) == 0

    def test_salary_difference(self):
        assert salary_difference(110, 120) == -10
        assert salary_difference_percent(110, 120) == pytest.approx(-8.3333, rel=1e-3)
        assert salary_difference_percent(110, 0) == 0.0


# ============================================================================
# Role summaries
# ============================================================================

class TestSummarizeRoles:
    """Tests for the per-role salary table."""

    def test_scenario(self, scenario_employees, scenario_roles):
        summaries = summarize_roles(scenario_roles, scenario_employees)

        assert len(summaries) == 1
        summary = summaries[0]
        assert summary.role_name == "Аналитик"
        assert summary.min_salary == 100
        assert summary.max_salary == 140
        assert summary.standard_salary == 120
        assert sorted(summary.salaries) == [100, 110, 110, 140]
        assert summary.is_custom is False

    def test_custom_override(self, scenario_employees, scenario_roles):
        summaries = summarize_roles(scenario_roles, scenario_employees, {"Аналитик": 130})

        assert summaries[0].standard_salary == 130
        assert summaries[0].is_custom is True

    def test_sorted_and_ceo_excluded(self, scenario_employees, scenario_roles):
        extra = [
            RoleAssignment(participant_name="Сидорова Анна", role_name="CEO", fte=0.1),
            RoleAssignment(participant_name="Орлов Павел", role_name="Тестировщик", fte=1),
        ]
        summaries = summarize_roles(extra + scenario_roles, scenario_employees)

        assert [s.role_name for s in summaries] == ["Аналитик", "Тестировщик"]
        assert summaries[1].standard_salary == 0.0
        assert summaries[1].salaries == []

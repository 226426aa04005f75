"""
Role cleaning, leader collapse and FTE normalization tests.
"""

import pytest

from src.fte import aggregate_roles_fte, calculate_total_fte, fte_adjustment, normalize_roles_fte
from src.models import RoleAssignment
from src.roles import canonical_role_name, clean_role_name, is_leader_role


# ============================================================================
# Role names
# ============================================================================

class TestRoleNames:
    """Tests for role name cleaning and the leader alias collapse."""

    def test_clean_role_name(self):
        assert clean_role_name(' "аНАЛИТИК данных" ') == "Аналитик данных"

    @pytest.mark.parametrize("role", [
        "лидер",
        " ЛИДЕР ",
        "Лидер операционного круга",
        "Лидер стратегического круга",
        "Старший лидер операционного круга продаж",
    ])
    def test_leader_aliases(self, role):
        assert is_leader_role(role)
        assert canonical_role_name(role) == "Лидер"

    @pytest.mark.parametrize("role", ["лидер отдела", "Лидер мнений", "Разработчик"])
    def test_not_leader(self, role):
        """Only the exact generic label collapses; other roles mentioning it do not."""
        assert not is_leader_role(role)
        assert canonical_role_name(role) != "Лидер"

    def test_non_leader_is_cleaned(self):
        assert canonical_role_name("лидер отдела") == "Лидер отдела"


# ============================================================================
# Aggregation
# ============================================================================

class TestAggregateRolesFte:
    """Tests for per-employee role/FTE aggregation."""

    def test_same_role_different_case(self, scenario_roles):
        roles_fte = aggregate_roles_fte("Иванов", "Петр", scenario_roles)

        assert list(roles_fte) == ["Аналитик"]
        assert roles_fte["Аналитик"] == pytest.approx(0.8)

    def test_leader_roles_collapse(self, leader_roles):
        roles_fte = aggregate_roles_fte("Петров", "Иван", leader_roles)

        assert list(roles_fte) == ["Лидер", "Разработчик"]
        assert roles_fte["Лидер"] == pytest.approx(0.5)
        assert calculate_total_fte(roles_fte) == pytest.approx(1.0)

    def test_missing_fte_counts_as_zero(self):
        assignments = [
            RoleAssignment(participant_name="Иванов Петр", role_name="Аналитик"),
            RoleAssignment(participant_name="Иванов Петр", role_name="Тестировщик", fte=float("nan")),
        ]
        assert aggregate_roles_fte("Иванов", "Петр", assignments) == {"Аналитик": 0.0, "Тестировщик": 0.0}

    def test_participant_with_patronymic(self):
        assignments = [RoleAssignment(participant_name="Иванов Петр Сергеевич", role_name="Аналитик", fte=1)]
        assert aggregate_roles_fte("Иванов", "Петр", assignments) == {"Аналитик": 1.0}

    def test_other_people_ignored(self, scenario_roles):
        assert aggregate_roles_fte("Иванова", "Мария", scenario_roles) == {}

    def test_empty_last_name(self, scenario_roles):
        assert aggregate_roles_fte("", "", scenario_roles) == {}


# ============================================================================
# Normalization
# ============================================================================

class TestNormalizeRolesFte:
    """Tests for FTE normalization."""

    def test_sums_to_one(self):
        normalized = normalize_roles_fte({"A": 0.6, "B": 0.9}, 1.5)

        assert normalized["A"] == pytest.approx(0.4)
        assert normalized["B"] == pytest.approx(0.6)
        assert sum(normalized.values()) == pytest.approx(1.0)

    def test_idempotent(self):
        once = normalize_roles_fte({"A": 0.2, "B": 0.3}, 0.5)
        twice = normalize_roles_fte(once, calculate_total_fte(once))

        assert twice == pytest.approx(once)

    def test_zero_total_unchanged(self):
        roles_fte = {"A": 0.0}
        normalized = normalize_roles_fte(roles_fte, 0)

        assert normalized == {"A": 0.0}
        assert normalized is not roles_fte

    @pytest.mark.parametrize("total,expected", [
        (1.5, "reduced"),
        (0.5, "increased"),
        (1.0, "none"),
        (0, "none"),
    ])
    def test_fte_adjustment(self, total, expected):
        assert fte_adjustment(total) == expected

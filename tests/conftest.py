"""
Pytest configuration and shared fixtures for the Salary Benchmark Dashboard tests.

This file provides:
- Sample CSV exports for every file kind
- Parsed records for the end-to-end scenario
"""

import pytest

from src.models import CircleData, Employee, LeadershipData, RoleAssignment


# ============================================================================
# CSV Fixtures
# ============================================================================

@pytest.fixture
def employees_csv() -> str:
    return (
        "ФИО;Оклад;Должность\r\n"
        "Иванов Петр;110 000;Аналитик\r\n"
        "Сидорова Анна Сергеевна;100000\r\n"
        "Кузнецов Олег;140000\r\n"
        "\r\n"
        "Смирнов Илья;н/д\r\n"
    )


@pytest.fixture
def roles_csv() -> str:
    return (
        "Участник роли;Название роли;FTE;Круг\n"
        "Иванов Петр;Аналитик;0,5;Sales Circle\n"
        "Иванов Петр;аналитик;0.3;Delivery Circle\n"
        "Сидорова Анна;Аналитик;1;Sales Circle\n"
        "Кузнецов Олег;Аналитик;1;Delivery Circle\n"
    )


@pytest.fixture
def circles_csv() -> str:
    return (
        "Название круга;Функциональная принадлежность\n"
        "Sales Circle;Sales\n"
        "\"Delivery Circle\";Delivery\n"
    )


@pytest.fixture
def leadership_csv() -> str:
    return (
        "Тип лидерства,1,2,3\n"
        "Sales,300000,380000,450000\n"
        "Delivery & Discovery,310000,,470000\n"
        "Общий,200000,n/a,\n"
    )


# ============================================================================
# Record Fixtures
# ============================================================================

@pytest.fixture
def scenario_employees():
    """Иванов plus two other analysts earning 100 and 140."""
    return [
        Employee(name="Иванов Петр", salary=110, id="emp-1"),
        Employee(name="Сидорова Анна", salary=100, id="emp-2"),
        Employee(name="Кузнецов Олег", salary=140, id="emp-3"),
    ]


@pytest.fixture
def scenario_roles():
    return [
        RoleAssignment(participant_name="Иванов Петр", role_name="Аналитик", fte=0.5, circle_name="Sales Circle"),
        RoleAssignment(participant_name="Иванов Петр", role_name="Аналитик", fte=0.3, circle_name="Delivery Circle"),
        RoleAssignment(participant_name="Сидорова Анна", role_name="Аналитик", fte=1.0, circle_name="Sales Circle"),
        RoleAssignment(participant_name="Кузнецов Олег", role_name="Аналитик", fte=1.0, circle_name="Delivery Circle"),
    ]


@pytest.fixture
def leader_roles():
    """Петров leads three sales circles and is also a developer."""
    return [
        RoleAssignment(participant_name="Петров Иван", role_name="Лидер операционного круга",
                       fte=0.2, circle_name="Sales North"),
        RoleAssignment(participant_name="Петров Иван", role_name="лидер",
                       fte=0.2, circle_name="Sales South"),
        RoleAssignment(participant_name="Петров Иван", role_name="Лидер стратегического круга основной",
                       fte=0.1, circle_name="Sales West"),
        RoleAssignment(participant_name="Петров Иван", role_name="Разработчик",
                       fte=0.5, circle_name="Sales North"),
    ]


@pytest.fixture
def sales_circles():
    return [
        CircleData(name="Sales North", functional_type="Sales"),
        CircleData(name="Sales South", functional_type="Sales"),
        CircleData(name="Sales West", functional_type="Sales"),
    ]


@pytest.fixture
def leadership_table():
    return [
        LeadershipData(role_name="Sales (3 кругов)", standard_salary=450000,
                       leadership_type="Sales", circle_count="3"),
        LeadershipData(role_name="Sales (1 кругов)", standard_salary=300000,
                       leadership_type="Sales", circle_count="1"),
        LeadershipData(role_name="Delivery & Discovery (2 кругов)", standard_salary=380000,
                       leadership_type="Delivery & Discovery", circle_count="2"),
        LeadershipData(role_name="Общий (4 кругов)", standard_salary=500000,
                       leadership_type="Общий", circle_count="4"),
    ]

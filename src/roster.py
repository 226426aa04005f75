"""Derived employee roster and the dashboard snapshot.

Everything here is a pure function of the five inputs (employees, role
assignments, circles, leadership table, custom overrides); the host calls
it again whenever any of them changes.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from src.analysis import analyze_salary_deviation, circle_budgets, find_unmatched_participants, organization_budget
from src.circles import find_circle_leadership_info
from src.fte import aggregate_roles_fte, calculate_total_fte, normalize_roles_fte
from src.models import (
    BudgetSummary,
    CircleData,
    Employee,
    EmployeeWithRoles,
    LeadershipData,
    NameCollision,
    RoleAssignment,
    RoleSummary,
)
from src.names import find_name_collisions, split_name
from src.salary import RateContext, calculate_standard_salary, find_standard_rate_for_role, summarize_roles

logger = logging.getLogger(__name__)


def derive_employee(employee: Employee, role_assignments: Sequence[RoleAssignment],
                    circles: Sequence[CircleData], context: RateContext) -> EmployeeWithRoles:
    last_name, first_name = split_name(employee.name)

    roles_fte = aggregate_roles_fte(last_name, first_name, role_assignments)
    total_fte = calculate_total_fte(roles_fte)
    normalized = normalize_roles_fte(roles_fte, total_fte)

    leadership = find_circle_leadership_info(last_name, first_name, role_assignments, circles)
    employee_context = context.for_leader(leadership.circle_type, leadership.circle_count)

    standard_salary = calculate_standard_salary(
        normalized,
        lambda role: find_standard_rate_for_role(role, employee_context),
    )

    return EmployeeWithRoles(
        name=employee.name,
        salary=employee.salary,
        id=employee.id,
        position=employee.position,
        department=employee.department,
        extra=dict(employee.extra),
        roles=list(roles_fte),
        total_fte=total_fte,
        normalized_roles_fte=normalized,
        standard_salary=standard_salary,
        operational_circle_count=leadership.circle_count,
        operational_circle_type=leadership.circle_type,
        lead_circles=list(leadership.lead_circles),
    )


def derive_employee_roster(employees: Sequence[Employee],
                           role_assignments: Sequence[RoleAssignment],
                           circles: Sequence[CircleData] = (),
                           leadership_data: Sequence[LeadershipData] = (),
                           custom_salaries: Optional[Mapping[str, float]] = None) -> List[EmployeeWithRoles]:
    """Recompute every employee's roles, FTE split, leadership and standard salary."""
    context = RateContext(
        role_assignments=role_assignments,
        employees=employees,
        custom_salaries=dict(custom_salaries or {}),
        leadership_data=list(leadership_data),
    )
    return [derive_employee(emp, role_assignments, circles, context) for emp in employees]


@dataclass
class Dashboard:
    roster: List[EmployeeWithRoles] = field(default_factory=list)
    role_summaries: List[RoleSummary] = field(default_factory=list)
    circle_budgets: Dict[str, BudgetSummary] = field(default_factory=dict)
    organization_budget: BudgetSummary = field(default_factory=lambda: BudgetSummary(0.0, 0.0, 0.0))
    deviation: Dict = field(default_factory=dict)
    collisions: List[NameCollision] = field(default_factory=list)
    unmatched_participants: List[str] = field(default_factory=list)
    leadership_data: List[LeadershipData] = field(default_factory=list)


def build_dashboard(employees: Sequence[Employee],
                    role_assignments: Sequence[RoleAssignment],
                    circles: Sequence[CircleData] = (),
                    leadership_data: Sequence[LeadershipData] = (),
                    custom_salaries: Optional[Mapping[str, float]] = None) -> Dashboard:
    roster = derive_employee_roster(employees, role_assignments, circles, leadership_data, custom_salaries)
    dashboard = Dashboard(
        roster=roster,
        role_summaries=summarize_roles(role_assignments, employees, custom_salaries),
        circle_budgets=circle_budgets(circles, role_assignments, roster),
        organization_budget=organization_budget(roster),
        deviation=analyze_salary_deviation(roster),
        collisions=find_name_collisions(employees, role_assignments),
        unmatched_participants=find_unmatched_participants(role_assignments, employees),
        leadership_data=list(leadership_data),
    )
    logger.info("Dashboard rebuilt: %d employees, %d roles, %d circles",
                len(dashboard.roster), len(dashboard.role_summaries), len(dashboard.circle_budgets))
    return dashboard


def safe_build_dashboard(previous: Optional[Dashboard], *args, **kwargs) -> Tuple[Optional[Dashboard], Optional[str]]:
    """Rebuild the dashboard, or keep the previous snapshot when recomputation fails."""
    try:
        return build_dashboard(*args, **kwargs), None
    except Exception as e:
        logger.exception("Dashboard recomputation failed")
        return previous, f"Recalculation failed: {e}"

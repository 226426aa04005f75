"""Budget rollups and salary deviation statistics for the Salary Benchmark Dashboard."""

import logging
import math
from typing import Dict, List, Sequence

import numpy as np
from scipy import stats as stats_module

from src.config import DEVIATION_TOLERANCE, EXCLUDED_CIRCLES, SIGNIFICANCE_LEVEL
from src.models import (
    WITH_ROLES,
    BudgetSummary,
    CircleData,
    CircleDetail,
    CircleRole,
    Employee,
    RoleAssignment,
    RoleParticipant,
    RoleSummary,
)
from src.names import find_employee_by_name, format_name, strip_quotes
from src.roles import clean_role_name, is_leader_role

logger = logging.getLogger(__name__)


def percentage_difference(standard: float, actual: float) -> float:
    """Actual vs standard in percent, two decimals with halves rounded up."""
    if standard == 0:
        return 0.0
    return math.floor(((actual - standard) / standard) * 10000 + 0.5) / 100


def standard_or_actual_salary(employee: Employee) -> float:
    if employee.kind == WITH_ROLES and employee.standard_salary:
        return employee.standard_salary
    return employee.salary


def circle_assignments(circle_name: str, role_assignments: Sequence[RoleAssignment],
                       leaders: bool = False) -> List[RoleAssignment]:
    """Assignments in a circle: non-leader roles by default, leader roles with leaders=True."""
    wanted = strip_quotes(circle_name)
    return [
        assignment for assignment in role_assignments
        if assignment.role_name and strip_quotes(assignment.circle_name) == wanted
        and is_leader_role(assignment.role_name) == leaders
    ]


def circle_budget(circle_name: str, role_assignments: Sequence[RoleAssignment],
                  employees: Sequence[Employee]) -> BudgetSummary:
    """Standard vs actual cost of a circle's operating (non-leader) roles."""
    total_standard = 0.0
    total_actual = 0.0

    for assignment in circle_assignments(circle_name, role_assignments):
        fte = assignment.fte or 0.0
        employee = find_employee_by_name(employees, assignment.participant_name)
        if employee is None or fte <= 0:
            continue
        total_standard += standard_or_actual_salary(employee) * fte
        total_actual += employee.salary * fte

    return BudgetSummary(
        total_standard_income=total_standard,
        total_actual_income=total_actual,
        percentage_difference=percentage_difference(total_standard, total_actual),
    )


def circle_budgets(circles: Sequence[CircleData], role_assignments: Sequence[RoleAssignment],
                   employees: Sequence[Employee]) -> Dict[str, BudgetSummary]:
    budgets = {}
    for circle in circles:
        name = strip_quotes(circle.name)
        if not name or name in budgets or name in EXCLUDED_CIRCLES:
            continue
        budgets[name] = circle_budget(name, role_assignments, employees)
    return budgets


def organization_budget(employees: Sequence[Employee]) -> BudgetSummary:
    total_standard = float(np.sum([standard_or_actual_salary(emp) for emp in employees])) if employees else 0.0
    total_actual = float(np.sum([emp.salary for emp in employees])) if employees else 0.0
    return BudgetSummary(
        total_standard_income=total_standard,
        total_actual_income=total_actual,
        percentage_difference=percentage_difference(total_standard, total_actual),
    )


def circle_detail(circle_name: str, role_assignments: Sequence[RoleAssignment],
                  employees: Sequence[Employee], summaries: Sequence[RoleSummary]) -> CircleDetail:
    """Leader, roles and participants of one circle, with its budget."""
    leaders = circle_assignments(circle_name, role_assignments, leaders=True)
    leader = leaders[0] if leaders else None
    rates = {summary.role_name.lower(): summary.standard_salary for summary in summaries}

    grouped: Dict[str, Dict[str, float]] = {}
    for assignment in circle_assignments(circle_name, role_assignments):
        role = clean_role_name(assignment.role_name)
        participants = grouped.setdefault(role, {})
        name = format_name(assignment.participant_name)
        participants[name] = participants.get(name, 0.0) + (assignment.fte or 0.0)

    roles = []
    for role in sorted(grouped, key=str.lower):
        rate = rates.get(role.lower(), 0.0)
        participants = []
        for name in sorted(grouped[role], key=str.lower):
            fte = grouped[role][name]
            employee = find_employee_by_name(employees, name)
            participants.append(RoleParticipant(
                name=name,
                fte=fte,
                standard_income=fte * rate,
                actual_income=employee.salary * fte if employee and fte > 0 else 0.0,
            ))
        roles.append(CircleRole(role_name=role, standard_salary=rate, participants=participants))

    return CircleDetail(
        circle_name=strip_quotes(circle_name),
        leader_name=format_name(leader.participant_name) if leader else None,
        leader_fte=(leader.fte or 0.0) if leader else 0.0,
        roles=roles,
        budget=circle_budget(circle_name, role_assignments, employees),
    )


def analyze_salary_deviation(employees: Sequence[Employee],
                             tolerance: float = DEVIATION_TOLERANCE) -> Dict:
    """Distribution of (actual - standard) / standard over benchmarked employees."""
    benchmarked = [emp for emp in employees if emp.kind == WITH_ROLES and emp.standard_salary]
    if not benchmarked:
        return {
            'count': 0, 'mean': 0.0, 'std': 0.0,
            'p10': 0.0, 'p50': 0.0, 'p90': 0.0,
            'overpaid_count': 0, 'underpaid_count': 0,
            'p_value': 1.0, 'systematic': False,
            'deviations': np.array([]),
        }

    deviations = np.array([(emp.salary - emp.standard_salary) / emp.standard_salary for emp in benchmarked])

    if len(deviations) >= 2 and np.std(deviations) > 0:
        _, p_value = stats_module.ttest_1samp(deviations, 0.0)
        p_value = float(p_value)
    else:
        p_value = 1.0

    result = {
        'count': len(deviations),
        'mean': float(np.mean(deviations)),
        'std': float(np.std(deviations)),
        'p10': float(np.percentile(deviations, 10)),
        'p50': float(np.percentile(deviations, 50)),
        'p90': float(np.percentile(deviations, 90)),
        'overpaid_count': int(np.sum(deviations > tolerance)),
        'underpaid_count': int(np.sum(deviations < -tolerance)),
        'p_value': p_value,
        'systematic': p_value < SIGNIFICANCE_LEVEL,
        'deviations': deviations,
    }
    logger.info("Salary deviation over %d employees: mean %.3f, p=%.3f",
                result['count'], result['mean'], p_value)
    return result


def find_unmatched_participants(role_assignments: Sequence[RoleAssignment],
                                employees: Sequence[Employee]) -> List[str]:
    """Participants named in the roles file who are not on the roster."""
    missing: List[str] = []
    for assignment in role_assignments:
        name = format_name(assignment.participant_name)
        if name and name not in missing and find_employee_by_name(employees, name) is None:
            missing.append(name)
    return missing

"""Standard rate resolution and standard salary composition.

A role's standard rate is resolved by an ordered cascade; the first tier
that yields a value wins:

1. leadership table, for the canonical leader role, keyed by the
   employee's circle type and the number of circles led;
2. a custom override entered for the exact role name;
3. the midpoint between the lowest and highest actual salary of the
   role's incumbents (0 when nobody holds the role).
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence

import numpy as np

from src.circles import clean_functional_type, is_unspecified_type
from src.config import EXCLUDED_ROLES, GENERAL_LEADERSHIP_TYPES
from src.models import Employee, LeadershipData, RoleAssignment, RoleSummary
from src.names import find_incumbents
from src.roles import canonical_role_name, is_leader_role

logger = logging.getLogger(__name__)


def calculate_standard_rate(min_salary: float, max_salary: float) -> float:
    """Midpoint of the salary range; equals max when the range is a single value."""
    if min_salary == max_salary:
        return max_salary
    return min_salary + (max_salary - min_salary) * 0.5


# Leadership table lookup

def _exact_match(query: str, count: str, entries: Sequence[LeadershipData]) -> Optional[float]:
    for entry in entries:
        if entry.circle_count == count and clean_functional_type(entry.leadership_type).lower() == query:
            return entry.standard_salary
    return None


def _query_in_entry(query: str, count: str, entries: Sequence[LeadershipData]) -> Optional[float]:
    # "Discovery" finds "Delivery & Discovery"
    for entry in entries:
        entry_type = clean_functional_type(entry.leadership_type).lower()
        if entry.circle_count == count and entry_type and query in entry_type:
            return entry.standard_salary
    return None


def _entry_in_query(query: str, count: str, entries: Sequence[LeadershipData]) -> Optional[float]:
    for entry in entries:
        entry_type = clean_functional_type(entry.leadership_type).lower()
        if entry.circle_count == count and entry_type and entry_type in query:
            return entry.standard_salary
    return None


def _count_only(query: str, count: str, entries: Sequence[LeadershipData]) -> Optional[float]:
    for entry in entries:
        if entry.circle_count == count:
            return entry.standard_salary
    return None


def _general_type(query: str, count: str, entries: Sequence[LeadershipData]) -> Optional[float]:
    for entry in entries:
        if entry.circle_count == count and (entry.leadership_type or '').lower() in GENERAL_LEADERSHIP_TYPES:
            return entry.standard_salary
    return None


LEADERSHIP_MATCHERS = [_exact_match, _query_in_entry, _entry_in_query, _count_only]
UNSPECIFIED_TYPE_MATCHERS = [_count_only, _general_type]


def find_leadership_standard_salary(functional_type: Optional[str], circle_count: Optional[str],
                                    leadership_data: Sequence[LeadershipData]) -> Optional[float]:
    """Look up the benchmark salary for (functional type, number of circles led)."""
    count = str(circle_count).strip() if circle_count is not None else ''
    if not functional_type or not count or count == "0" or not leadership_data:
        return None

    query = clean_functional_type(functional_type).lower()
    matchers = UNSPECIFIED_TYPE_MATCHERS if is_unspecified_type(functional_type) else LEADERSHIP_MATCHERS
    for matcher in matchers:
        salary = matcher(query, count, leadership_data)
        if salary is not None:
            logger.debug("Leadership salary for %s/%s via %s: %s", query, count, matcher.__name__, salary)
            return salary

    logger.debug("No leadership salary for %s/%s", query, count)
    return None


# Role rate resolution

def build_role_salary_index(role_assignments: Sequence[RoleAssignment],
                            employees: Sequence[Employee]) -> Dict[str, List[float]]:
    """Actual salaries of every incumbent, keyed by lower-cased canonical role name."""
    index: Dict[str, List[float]] = {}
    for assignment in role_assignments:
        if not assignment.participant_name or not assignment.role_name:
            continue
        role = canonical_role_name(assignment.role_name).lower()
        for employee in find_incumbents(assignment.participant_name, employees):
            index.setdefault(role, []).append(employee.salary)
    return index


@dataclass
class RateContext:
    """Everything a rate lookup needs, rebuilt on every recomputation."""
    role_assignments: Sequence[RoleAssignment]
    employees: Sequence[Employee]
    custom_salaries: Mapping[str, float] = field(default_factory=dict)
    leadership_data: Sequence[LeadershipData] = field(default_factory=list)
    circle_type: Optional[str] = None
    circle_count: int = 0
    _salary_index: Optional[Dict[str, List[float]]] = field(default=None, repr=False)

    def salaries_for(self, role_name: str) -> List[float]:
        if self._salary_index is None:
            self._salary_index = build_role_salary_index(self.role_assignments, self.employees)
        return self._salary_index.get(role_name.lower(), [])

    def for_leader(self, circle_type: Optional[str], circle_count: int) -> 'RateContext':
        """Same inputs and salary index, scoped to one employee's circles."""
        if self._salary_index is None:
            self._salary_index = build_role_salary_index(self.role_assignments, self.employees)
        return RateContext(
            role_assignments=self.role_assignments,
            employees=self.employees,
            custom_salaries=self.custom_salaries,
            leadership_data=self.leadership_data,
            circle_type=circle_type,
            circle_count=circle_count,
            _salary_index=self._salary_index,
        )


def _leadership_rate(role_name: str, context: RateContext) -> Optional[float]:
    if not (is_leader_role(role_name) and context.leadership_data
            and context.circle_type and context.circle_count):
        return None
    return find_leadership_standard_salary(context.circle_type, str(context.circle_count),
                                           context.leadership_data)


def _custom_rate(role_name: str, context: RateContext) -> Optional[float]:
    if role_name in context.custom_salaries:
        return context.custom_salaries[role_name] or 0.0
    return None


def _midpoint_rate(role_name: str, context: RateContext) -> Optional[float]:
    salaries = context.salaries_for(role_name)
    if not salaries:
        return 0.0
    return calculate_standard_rate(float(np.min(salaries)), float(np.max(salaries)))


RATE_RESOLVERS: List[Callable[[str, RateContext], Optional[float]]] = [
    _leadership_rate,
    _custom_rate,
    _midpoint_rate,
]


def find_standard_rate_for_role(role_name: str, context: RateContext) -> float:
    if not role_name:
        return 0.0
    for resolver in RATE_RESOLVERS:
        rate = resolver(role_name, context)
        if rate is not None:
            return rate
    return 0.0


def calculate_standard_salary(normalized_roles_fte: Mapping[str, float],
                              rate_for: Callable[[str], float]) -> float:
    """FTE-weighted sum of role rates; unrounded."""
    return sum(fraction * rate_for(role) for role, fraction in normalized_roles_fte.items())


def summarize_roles(role_assignments: Sequence[RoleAssignment], employees: Sequence[Employee],
                    custom_salaries: Optional[Mapping[str, float]] = None) -> List[RoleSummary]:
    """Salary range and standard salary for every canonical role."""
    custom_salaries = custom_salaries or {}
    context = RateContext(role_assignments=role_assignments, employees=employees,
                          custom_salaries=custom_salaries)

    role_names = []
    for assignment in role_assignments:
        if not assignment.role_name:
            continue
        role = canonical_role_name(assignment.role_name)
        if role and role not in role_names and role.lower() not in EXCLUDED_ROLES:
            role_names.append(role)

    summaries = []
    for role in sorted(role_names, key=str.lower):
        salaries = context.salaries_for(role)
        min_salary = float(np.min(salaries)) if salaries else 0.0
        max_salary = float(np.max(salaries)) if salaries else 0.0
        computed = calculate_standard_rate(min_salary, max_salary) if salaries else 0.0
        is_custom = role in custom_salaries

        summaries.append(RoleSummary(
            role_name=role,
            min_salary=min_salary,
            max_salary=max_salary,
            standard_salary=custom_salaries[role] if is_custom else computed,
            salaries=list(salaries),
            is_custom=is_custom,
        ))
    return summaries


def salary_difference(actual: float, standard: float) -> float:
    return actual - standard


def salary_difference_percent(actual: float, standard: float) -> float:
    if not standard:
        return 0.0
    return (actual - standard) / standard * 100

"""Role/FTE aggregation and normalization per employee."""

import math
from typing import Dict, Sequence

from src.models import RoleAssignment
from src.names import holds_name, name_tokens
from src.roles import canonical_role_name


def _fte_contribution(fte) -> float:
    if fte is None:
        return 0.0
    try:
        value = float(fte)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(value) else value


def aggregate_roles_fte(last_name: str, first_name: str,
                        role_assignments: Sequence[RoleAssignment]) -> Dict[str, float]:
    """Sum FTE per canonical role over every assignment naming the employee.

    Roles without a usable FTE are still recorded with 0. Insertion order
    follows the assignment order.
    """
    roles_fte: Dict[str, float] = {}
    if not last_name or not role_assignments:
        return roles_fte

    for assignment in role_assignments:
        if not assignment.participant_name or not assignment.role_name:
            continue
        if not holds_name(name_tokens(assignment.participant_name), last_name, first_name):
            continue

        role = canonical_role_name(assignment.role_name)
        roles_fte[role] = roles_fte.get(role, 0.0) + _fte_contribution(assignment.fte)

    return roles_fte


def calculate_total_fte(roles_fte: Dict[str, float]) -> float:
    return sum(roles_fte.values())


def normalize_roles_fte(roles_fte: Dict[str, float], total_fte: float) -> Dict[str, float]:
    """Rescale so the fractions sum to 1.0; a zero total is returned unchanged."""
    if total_fte == 0:
        return dict(roles_fte)
    return {role: fte / total_fte for role, fte in roles_fte.items()}


def fte_adjustment(total_fte: float) -> str:
    """How normalization changed the nominal workload: 'reduced', 'increased' or 'none'."""
    if total_fte == 0 or math.isclose(total_fte, 1.0):
        return 'none'
    return 'reduced' if total_fte > 1 else 'increased'

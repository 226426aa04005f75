"""Circle functional types and circle leadership attribution."""

import logging
from typing import Callable, Dict, List, Optional, Sequence

from src.config import FUNCTIONAL_TYPE_KEYWORDS, UNSPECIFIED_TYPE, UNSPECIFIED_TYPE_ALIASES
from src.models import CircleData, LeadershipInfo, RoleAssignment
from src.names import holds_name, name_tokens, strip_quotes
from src.roles import is_leader_role

logger = logging.getLogger(__name__)


def clean_functional_type(functional_type: Optional[str]) -> str:
    """Normalize a functional type label ("ftSales", '"sales"' -> "Sales")."""
    normalized = strip_quotes(functional_type).lower()
    if not normalized:
        return ''
    if normalized.startswith('ft'):
        return normalized[2:3].upper() + normalized[3:]
    return normalized[0].upper() + normalized[1:]


def is_unspecified_type(functional_type: Optional[str]) -> bool:
    return strip_quotes(functional_type).lower() in UNSPECIFIED_TYPE_ALIASES + ['']


def derive_functional_type(circle_name: Optional[str]) -> Optional[str]:
    """Best-effort type from keywords in the circle's own name."""
    name = strip_quotes(circle_name).lower()
    if not name:
        return None
    for functional_type, keywords in FUNCTIONAL_TYPE_KEYWORDS:
        if all(keyword in name for keyword in keywords):
            return functional_type
    return None


def find_circle(circles: Sequence[CircleData], circle_name: str) -> Optional[CircleData]:
    wanted = strip_quotes(circle_name).lower()
    for circle in circles:
        if circle.name and strip_quotes(circle.name).lower() == wanted:
            return circle
    return None


def unique_circles(circles: Sequence[CircleData]) -> List[CircleData]:
    """Deduplicate by exact cleaned name; the first occurrence wins."""
    seen: Dict[str, CircleData] = {}
    for circle in circles:
        name = strip_quotes(circle.name)
        if name and name not in seen:
            seen[name] = CircleData(name=name, functional_type=strip_quotes(circle.functional_type))
    return list(seen.values())


def _type_from_roster(circle_name: str, circles: Sequence[CircleData]) -> Optional[str]:
    circle = find_circle(circles, circle_name)
    if circle is None or is_unspecified_type(circle.functional_type):
        return None
    return strip_quotes(circle.functional_type)


def _type_from_name(circle_name: str, circles: Sequence[CircleData]) -> Optional[str]:
    return derive_functional_type(circle_name)


CIRCLE_TYPE_RESOLVERS: List[Callable[[str, Sequence[CircleData]], Optional[str]]] = [
    _type_from_roster,
    _type_from_name,
]


def resolve_circle_type(circle_name: str, circles: Sequence[CircleData]) -> Optional[str]:
    for resolver in CIRCLE_TYPE_RESOLVERS:
        circle_type = resolver(circle_name, circles)
        if circle_type:
            return circle_type
    return None


def find_leader_assignments(last_name: str, first_name: str,
                            role_assignments: Sequence[RoleAssignment]) -> List[RoleAssignment]:
    return [
        assignment for assignment in role_assignments
        if assignment.participant_name and assignment.role_name
        and is_leader_role(assignment.role_name)
        and holds_name(name_tokens(assignment.participant_name), last_name, first_name)
    ]


def find_circle_leadership_info(last_name: str, first_name: str,
                                role_assignments: Sequence[RoleAssignment],
                                circles: Sequence[CircleData]) -> LeadershipInfo:
    """Which circles an employee leads, how many, and their functional type.

    Circles are counted once per distinct (case-insensitive) name; leader
    assignments without a circle name count once each.
    """
    leader_assignments = find_leader_assignments(last_name, first_name, role_assignments)
    if not leader_assignments:
        return LeadershipInfo(circle_type=None, circle_count=0, lead_circles=[])

    circle_count = 0
    seen = set()
    lead_circles: List[CircleData] = []
    circle_type: Optional[str] = None

    for assignment in leader_assignments:
        circle_name = strip_quotes(assignment.circle_name)
        if not circle_name:
            circle_count += 1
            continue
        if circle_name.lower() in seen:
            continue
        seen.add(circle_name.lower())
        circle_count += 1

        if circle_type is None:
            circle_type = resolve_circle_type(circle_name, circles)

        circle = find_circle(circles, circle_name)
        if circle is None:
            circle = CircleData(name=circle_name, functional_type=derive_functional_type(circle_name) or '')
        lead_circles.append(CircleData(name=circle.name, functional_type=circle.functional_type))

    if circle_type is None:
        circle_type = UNSPECIFIED_TYPE

    logger.debug("%s %s leads %d circle(s) of type %s", last_name, first_name, circle_count, circle_type)
    return LeadershipInfo(circle_type=circle_type, circle_count=circle_count, lead_circles=lead_circles)

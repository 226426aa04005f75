"""Participant name normalization and matching across uploaded files."""

import logging
import re
from typing import Dict, List, Optional, Sequence, Tuple

from src.models import Employee, NameCollision, RoleAssignment

logger = logging.getLogger(__name__)

_QUOTES = re.compile(r"[\"']")


def strip_quotes(text: Optional[str]) -> str:
    """Remove quote characters and surrounding whitespace."""
    if not text:
        return ''
    return _QUOTES.sub('', text).strip()


def format_name(raw_name: Optional[str]) -> str:
    """Canonical display form: quotes stripped, tokens joined by single spaces.

    Token order is preserved ("LastName FirstName Patronymic").
    """
    return ' '.join(strip_quotes(raw_name).split())


def name_tokens(raw_name: Optional[str]) -> List[str]:
    return [token.lower() for token in strip_quotes(raw_name).split()]


def split_name(raw_name: Optional[str]) -> Tuple[str, str]:
    """Return (last_name, first_name); first name is empty for one-token names."""
    parts = format_name(raw_name).split(' ')
    last_name = parts[0] if parts else ''
    first_name = parts[1] if len(parts) > 1 else ''
    return last_name, first_name


def holds_name(tokens: Sequence[str], last_name: str, first_name: str = '') -> bool:
    """Token-set membership test used to join people across files.

    The token list must contain the last name and, when given, the first name.
    """
    if not last_name:
        return False
    if last_name.lower() not in tokens:
        return False
    return not first_name or first_name.lower() in tokens


def find_incumbents(participant_name: str, employees: Sequence[Employee]) -> List[Employee]:
    """Employees whose name contains the participant's last and first name tokens."""
    participant = name_tokens(participant_name)
    if len(participant) < 2:
        return []
    last_name, first_name = participant[0], participant[1]
    return [emp for emp in employees if holds_name(name_tokens(emp.name), last_name, first_name)]


def find_employee_by_name(employees: Sequence[Employee], participant_name: str) -> Optional[Employee]:
    """Find the roster entry for a participant: exact formatted match first, then token match."""
    if not employees or not participant_name:
        return None

    wanted = format_name(participant_name).lower()
    for emp in employees:
        if format_name(emp.name).lower() == wanted:
            return emp

    participant = name_tokens(participant_name)
    for emp in employees:
        last_name, first_name = split_name(emp.name)
        if holds_name(participant, last_name, first_name):
            return emp
    return None


def find_name_collisions(employees: Sequence[Employee],
                         role_assignments: Sequence[RoleAssignment]) -> List[NameCollision]:
    """Report names that resolve to more than one roster employee."""
    collisions = []

    by_name: Dict[str, List[str]] = {}
    for emp in employees:
        key = format_name(emp.name).lower()
        if key:
            by_name.setdefault(key, []).append(format_name(emp.name))
    for names in by_name.values():
        if len(names) > 1:
            collisions.append(NameCollision(name=names[0], matched_employees=names, source='roster'))

    seen = set()
    for assignment in role_assignments:
        participant = format_name(assignment.participant_name)
        if not participant or participant.lower() in seen:
            continue
        seen.add(participant.lower())

        tokens = name_tokens(participant)
        matched = []
        for emp in employees:
            last_name, first_name = split_name(emp.name)
            if holds_name(tokens, last_name, first_name):
                matched.append(format_name(emp.name))
        if len(matched) > 1:
            collisions.append(NameCollision(name=participant, matched_employees=matched, source='roles'))

    for collision in collisions:
        logger.warning("Ambiguous name '%s' (%s): %s", collision.name, collision.source,
                       ', '.join(collision.matched_employees))
    return collisions

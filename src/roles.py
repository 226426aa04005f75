"""Role name cleaning and the leader alias collapse."""

from src.config import (
    GENERIC_LEADER_ROLE,
    NORMALIZED_LEADER_ROLE,
    OPERATIONAL_CIRCLE_LEADER,
    STRATEGIC_CIRCLE_LEADER,
)
from src.names import strip_quotes


def clean_role_name(role_name: str) -> str:
    """Strip quotes, trim, capitalize the first letter and lower-case the rest."""
    cleaned = strip_quotes(role_name)
    if not cleaned:
        return ''
    return cleaned[0].upper() + cleaned[1:].lower()


def is_leader_role(role_name: str) -> bool:
    """Exact match for the generic label, substring match for the circle leader labels."""
    name = strip_quotes(role_name).lower()
    return (name == GENERIC_LEADER_ROLE
            or OPERATIONAL_CIRCLE_LEADER in name
            or STRATEGIC_CIRCLE_LEADER in name)


def canonical_role_name(role_name: str) -> str:
    if is_leader_role(role_name):
        return NORMALIZED_LEADER_ROLE
    return clean_role_name(role_name)

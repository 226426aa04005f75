"""Roles CSV export."""

from datetime import date
from typing import Optional, Sequence

from src.config import EXPORT_DELIMITER, EXPORT_FILENAME_PREFIX, EXPORT_HEADERS
from src.models import RoleSummary


def format_export_number(value: Optional[float]) -> str:
    """Shortest decimal form with a decimal comma; "0" when unset."""
    if not value:
        return "0"
    number = float(value)
    text = str(int(number)) if number.is_integer() else repr(number)
    return text.replace('.', ',')


def export_roles_csv(summaries: Sequence[RoleSummary]) -> str:
    rows = [EXPORT_DELIMITER.join(EXPORT_HEADERS)]
    for summary in summaries:
        rows.append(EXPORT_DELIMITER.join([summary.role_name, format_export_number(summary.standard_salary)]))
    return '\n'.join(rows)


def export_filename(day: Optional[date] = None) -> str:
    day = day or date.today()
    return f"{EXPORT_FILENAME_PREFIX}{day.isoformat()}.csv"

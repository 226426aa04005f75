"""CSV ingestion and file classification for the Salary Benchmark Dashboard."""

import csv
import logging
import re
from typing import Dict, List, Optional, Sequence, Tuple

from src.circles import derive_functional_type, unique_circles
from src.config import (
    CIRCLE_NAME_ALIASES,
    DEPARTMENT_COLUMN_ALIASES,
    FTE_COLUMN_ALIASES,
    FUNCTIONAL_TYPE_ALIASES,
    LEADERSHIP_FILE_NAME_HINTS,
    LEADERSHIP_HEADER_HINTS,
    NAME_COLUMN_ALIASES,
    POSITION_COLUMN_ALIASES,
    ROLE_NAME_ALIASES,
    ROLE_PARTICIPANT_ALIASES,
    SALARY_COLUMN_ALIASES,
    UNSPECIFIED_TYPE,
)
from src.models import CircleData, Employee, FileParseResult, LeadershipData, RoleAssignment
from src.names import strip_quotes

logger = logging.getLogger(__name__)

_LEADING_FLOAT = re.compile(r'\s*([-+]?(?:\d+\.?\d*|\.\d+))')


def normalize_csv_content(content: str) -> str:
    return content.replace('\r\n', '\n').replace('\r', '\n').strip()


def split_lines(content: str) -> List[str]:
    return [line for line in normalize_csv_content(content).split('\n') if line.strip()]


def detect_delimiter(first_line: str) -> str:
    """Semicolon or tab when the header has no comma; comma otherwise."""
    if ';' in first_line and ',' not in first_line:
        return ';'
    if '\t' in first_line and ',' not in first_line:
        return '\t'
    return ','


def split_row(line: str, delimiter: str) -> List[str]:
    """Split one line; quoted cells may contain the delimiter."""
    row = next(csv.reader([line], delimiter=delimiter), [])
    return [value.strip() for value in row]


def find_column_index(headers: Sequence[str], aliases: Sequence[str],
                      exclude: Sequence[int] = ()) -> int:
    """Index of the first header containing any alias, or -1."""
    for index, header in enumerate(headers):
        if index in exclude:
            continue
        header = header.lower()
        if any(alias in header for alias in aliases):
            return index
    return -1


def _leading_float(text: str) -> Optional[float]:
    match = _LEADING_FLOAT.match(text)
    return float(match.group(1)) if match else None


def parse_salary_value(text: str) -> Optional[float]:
    """Parse "150 000,50 руб." style amounts; None when nothing numeric remains."""
    cleaned = re.sub(r'[^0-9.,]', '', text).replace(',', '.', 1)
    return _leading_float(cleaned)


def parse_fte_value(text: str) -> Optional[float]:
    """Parse an FTE cell accepting both decimal comma and dot."""
    if not text or not text.strip():
        return None
    value = _leading_float(text.strip().replace(',', '.', 1))
    if value is not None:
        return value
    cleaned = re.sub(r'[^0-9.,]', '', text).replace(',', '.', 1)
    return _leading_float(cleaned)


def _read_table(content: str) -> Tuple[List[str], List[str], str]:
    lines = split_lines(content)
    if not lines:
        return [], [], ','
    delimiter = detect_delimiter(lines[0])
    headers = [header.lower() for header in split_row(lines[0], delimiter)]
    return lines, headers, delimiter


def parse_employees_csv(content: str) -> Tuple[List[Employee], List[str]]:
    """Parse an employee roster; requires name and salary columns."""
    warnings: List[str] = []
    lines, headers, delimiter = _read_table(content)
    if not lines:
        logger.error("Employee CSV has no data")
        return [], warnings

    name_index = find_column_index(headers, NAME_COLUMN_ALIASES)
    salary_index = find_column_index(headers, SALARY_COLUMN_ALIASES, exclude=[name_index])
    if name_index == -1 or salary_index == -1:
        logger.info("Not an employee file, headers: %s", headers)
        return [], warnings

    position_index = find_column_index(headers, POSITION_COLUMN_ALIASES,
                                       exclude=[name_index, salary_index])
    department_index = find_column_index(headers, DEPARTMENT_COLUMN_ALIASES,
                                         exclude=[name_index, salary_index, position_index])
    known = {name_index, salary_index, position_index, department_index}
    required = max(name_index, salary_index)

    employees = []
    for line_number, line in enumerate(lines[1:], start=2):
        values = split_row(line, delimiter)
        if all(value == '' for value in values):
            continue
        if len(values) < required + 1:
            warnings.append(f"Line {line_number}: not enough values, skipped")
            continue

        salary = parse_salary_value(values[salary_index])
        if salary is None:
            warnings.append(f"Line {line_number}: invalid salary '{values[salary_index]}', using 0")
            salary = 0.0

        employees.append(Employee(
            id=f"emp-{line_number - 1}",
            name=values[name_index] or 'Без имени',
            salary=salary,
            position=_cell(values, position_index),
            department=_cell(values, department_index),
            extra={
                headers[i]: value for i, value in enumerate(values)
                if i < len(headers) and i not in known and value
            },
        ))

    _log_warnings(warnings)
    logger.info("Parsed %d employees", len(employees))
    return employees, warnings


def parse_roles_csv(content: str) -> Tuple[List[RoleAssignment], List[str]]:
    """Parse role assignments; requires participant and role name columns."""
    warnings: List[str] = []
    lines, headers, delimiter = _read_table(content)
    if not lines:
        logger.error("Roles CSV has no data")
        return [], warnings

    participant_index = find_column_index(headers, ROLE_PARTICIPANT_ALIASES)
    role_index = find_column_index(headers, ROLE_NAME_ALIASES, exclude=[participant_index])
    if participant_index == -1 or role_index == -1:
        logger.info("Not a roles file, headers: %s", headers)
        return [], warnings

    fte_index = find_column_index(headers, FTE_COLUMN_ALIASES, exclude=[participant_index, role_index])
    circle_index = find_column_index(headers, CIRCLE_NAME_ALIASES,
                                     exclude=[participant_index, role_index, fte_index])
    required = max(participant_index, role_index)

    assignments = []
    for line_number, line in enumerate(lines[1:], start=2):
        values = split_row(line, delimiter)
        if all(value == '' for value in values):
            continue
        if len(values) < required + 1:
            warnings.append(f"Line {line_number}: not enough values, skipped")
            continue

        participant = values[participant_index]
        role_name = values[role_index]
        if not participant or not role_name:
            warnings.append(f"Line {line_number}: missing participant or role, skipped")
            continue

        fte = None
        fte_text = _cell(values, fte_index)
        if fte_text:
            fte = parse_fte_value(fte_text)
            if fte is None or fte < 0:
                warnings.append(f"Line {line_number}: invalid FTE '{fte_text}' for {participant}, using 0")
                fte = None

        assignments.append(RoleAssignment(
            participant_name=participant,
            role_name=role_name,
            fte=fte,
            circle_name=_cell(values, circle_index),
        ))

    _log_warnings(warnings)
    logger.info("Parsed %d role assignments", len(assignments))
    return assignments, warnings


def parse_circles_csv(content: str) -> Tuple[List[CircleData], List[str]]:
    """Parse circles; requires a circle name column.

    Without a labeled functional type column the last column of each row is
    taken as the type.
    """
    warnings: List[str] = []
    lines, headers, delimiter = _read_table(content)
    if not lines:
        logger.error("Circles CSV has no data")
        return [], warnings

    type_index = find_column_index(headers, FUNCTIONAL_TYPE_ALIASES)
    circle_index = find_column_index(headers, CIRCLE_NAME_ALIASES, exclude=[type_index])
    if circle_index == -1:
        logger.info("Not a circles file, headers: %s", headers)
        return [], warnings

    circles = []
    for line_number, line in enumerate(lines[1:], start=2):
        values = split_row(line, delimiter)
        if all(value == '' for value in values):
            continue
        name = strip_quotes(_cell(values, circle_index))
        if not name:
            warnings.append(f"Line {line_number}: no circle name, skipped")
            continue

        if type_index != -1:
            functional_type = strip_quotes(_cell(values, type_index))
        elif len(values) > circle_index + 1:
            functional_type = strip_quotes(values[-1])
        else:
            functional_type = ''

        circles.append(CircleData(
            name=name,
            functional_type=functional_type or derive_functional_type(name) or UNSPECIFIED_TYPE,
        ))

    _log_warnings(warnings)
    logger.info("Parsed %d circles", len(circles))
    return circles, warnings


def parse_leadership_csv(content: str) -> Tuple[List[LeadershipData], List[str]]:
    """Parse the leadership matrix: rows are leadership types, columns circle counts."""
    warnings: List[str] = []
    lines = split_lines(content)
    if not lines:
        return [], warnings

    delimiter = detect_delimiter(lines[0])
    headers = [strip_quotes(header) for header in split_row(lines[0], delimiter)]
    if len(headers) < 2:
        warnings.append("Leadership table needs at least two columns")
        return [], warnings

    records = []
    for line_number, line in enumerate(lines[1:], start=2):
        columns = split_row(line, delimiter)
        if len(columns) < 2:
            continue
        leadership_type = strip_quotes(columns[0])
        if not leadership_type:
            continue

        for j in range(1, len(columns)):
            circle_count = headers[j] if j < len(headers) else ''
            salary_text = re.sub(r'[^\d.-]', '', columns[j].replace(',', '.'))
            if not circle_count or not salary_text:
                continue
            try:
                salary = float(salary_text)
            except ValueError:
                warnings.append(f"Line {line_number}: invalid salary '{columns[j]}', skipped")
                continue

            records.append(LeadershipData(
                role_name=f"{leadership_type} ({circle_count} кругов)",
                standard_salary=salary,
                description=f'Лидерство типа "{leadership_type}" с {circle_count} кругами',
                leadership_type=leadership_type,
                circle_count=circle_count,
            ))

    _log_warnings(warnings)
    logger.info("Parsed %d leadership entries", len(records))
    return records, warnings


def has_leadership_header(content: str) -> bool:
    lines = split_lines(content)
    header = lines[0].lower() if lines else ''
    return any(hint in header for hint in LEADERSHIP_HEADER_HINTS)


def has_leadership_file_name(file_name: str) -> bool:
    name = (file_name or '').lower()
    return any(hint in name for hint in LEADERSHIP_FILE_NAME_HINTS)


# Order matters: the more specific schemas come first
CLASSIFIERS = [
    ('roles', parse_roles_csv),
    ('circles', parse_circles_csv),
    ('employees', parse_employees_csv),
]


def _parse_leadership_file(file_name: str, content: str) -> Optional[FileParseResult]:
    records, warnings = parse_leadership_csv(content)
    if not records:
        return None
    logger.info("%s recognized as leadership table (%d entries)", file_name, len(records))
    return FileParseResult(file_name, 'leadership', records, warnings)


def classify_file(file_name: str, content: str) -> FileParseResult:
    """Parse a file with the first schema it satisfies.

    A leadership header is checked before the data schemas; a leadership
    file name only after all of them have failed.
    """
    if has_leadership_header(content):
        result = _parse_leadership_file(file_name, content)
        if result:
            return result

    for kind, parser in CLASSIFIERS:
        records, warnings = parser(content)
        if records:
            logger.info("%s recognized as %s (%d records)", file_name, kind, len(records))
            return FileParseResult(file_name, kind, records, warnings)

    if has_leadership_file_name(file_name):
        result = _parse_leadership_file(file_name, content)
        if result:
            return result

    logger.error("%s matches no known schema", file_name)
    return FileParseResult(
        file_name, None, [], [],
        error=f"Файл {file_name} не содержит корректных данных о сотрудниках, ролях или кругах."
    )


def load_files(files: Sequence[Tuple[str, str]]) -> Dict:
    """Classify every (name, content) pair and merge records by kind."""
    loaded: Dict = {'employees': [], 'roles': [], 'circles': [], 'leadership': [], 'results': []}

    for file_name, content in files:
        result = classify_file(file_name, content)
        loaded['results'].append(result)
        if result.parsed:
            loaded[result.kind].extend(result.records)

    for index, employee in enumerate(loaded['employees'], start=1):
        employee.id = f"emp-{index}"
    loaded['circles'] = unique_circles(loaded['circles'])
    return loaded


def validate_data(employees: list, roles: list) -> Tuple[bool, str]:
    """Validate that the loaded data is enough to compute standard salaries."""
    errors = []

    if not employees:
        errors.append("No employees found in uploaded files")
    if not roles:
        errors.append("No role assignments found in uploaded files")

    if errors:
        return False, "\n".join(errors)
    return True, f"✅ Loaded {len(employees)} employees and {len(roles)} role assignments"


def _cell(values: List[str], index: int) -> Optional[str]:
    if index == -1 or index >= len(values) or not values[index]:
        return None
    return values[index]


def _log_warnings(warnings: List[str]) -> None:
    for warning in warnings:
        logger.warning(warning)

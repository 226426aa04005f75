"""Configuration constants for the Salary Benchmark Dashboard."""

import os

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
AI_MODEL = os.environ.get("AI_MODEL", "anthropic/claude-sonnet-4")

# Column aliases, matched as substrings of the lower-cased header
NAME_COLUMN_ALIASES = [
    'name', 'имя', 'employee name', 'полное имя', 'фио',
    'ф.и.о.', 'ф. и. о.', 'full name', 'employee', 'сотрудник'
]

SALARY_COLUMN_ALIASES = [
    'salary', 'зарплата', 'current salary', 'текущая зарплата',
    'оклад', 'заработная плата', 'зп', 'з/п', 'з.п.', 'з. п.',
    'wage', 'pay', 'payment'
]

POSITION_COLUMN_ALIASES = ['должность', 'position', 'title']

DEPARTMENT_COLUMN_ALIASES = ['отдел', 'подразделение', 'department']

ROLE_PARTICIPANT_ALIASES = [
    'участник роли', 'участник', 'employee', 'сотрудник',
    'исполнитель роли', 'исполнитель', 'role participant'
]

ROLE_NAME_ALIASES = [
    'название роли', 'роль', 'role', 'role name', 'наименование роли'
]

FTE_COLUMN_ALIASES = [
    'fte сотрудника', 'fte', 'объем fte', 'доля ставки', 'загрузка',
    'загрузка сотрудника', 'полная занятость', 'workload'
]

CIRCLE_NAME_ALIASES = [
    'название', 'название круга', 'круг', 'circle', 'circle name', 'наименование круга'
]

FUNCTIONAL_TYPE_ALIASES = [
    'функциональная принадлежность', 'тип', 'функциональный тип', 'functional type', 'type',
    'функция', 'function', 'принадлежность', 'категория', 'category'
]

# Leader roles
GENERIC_LEADER_ROLE = "лидер"
OPERATIONAL_CIRCLE_LEADER = "лидер операционного круга"
STRATEGIC_CIRCLE_LEADER = "лидер стратегического круга"
NORMALIZED_LEADER_ROLE = "Лидер"

UNSPECIFIED_TYPE = "Не указано"
UNSPECIFIED_TYPE_ALIASES = ["не указано", "not specified"]
GENERAL_LEADERSHIP_TYPES = ["общий", "general"]

# Ordered: the first matching entry wins
FUNCTIONAL_TYPE_KEYWORDS = [
    ("Delivery & Discovery", ["delivery", "discovery"]),
    ("Delivery", ["delivery"]),
    ("Discovery", ["discovery"]),
    ("Platform", ["platform"]),
    ("Enablement", ["enablement"]),
    ("Marketing", ["marketing"]),
    ("Marketing", ["маркетинг"]),
    ("Sales", ["sales"]),
    ("Sales", ["продаж"]),
]

LEADERSHIP_FILE_NAME_HINTS = ['lead', 'лидер']
LEADERSHIP_HEADER_HINTS = ['лидерство', 'leadership', 'тип лидерства']

EXCLUDED_CIRCLES = ["Офис СЕО", "Otherside"]
EXCLUDED_ROLES = ["ceo"]

# Export
EXPORT_HEADERS = ["Название роли", "Стандартный оклад"]
EXPORT_DELIMITER = ";"
EXPORT_FILENAME_PREFIX = "roles-export-"

CURRENCY_SYMBOL = "₽"

# Findings
DEVIATION_TOLERANCE = 0.10
FTE_TOLERANCE = 0.01
SIGNIFICANCE_LEVEL = 0.05

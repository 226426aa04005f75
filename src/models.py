"""Data models for the Salary Benchmark Dashboard."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

BASE = "base"
WITH_ROLES = "with_roles"


@dataclass
class Employee:
    name: str
    salary: float
    id: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    extra: Dict[str, str] = field(default_factory=dict)
    kind: str = field(default=BASE, init=False)


@dataclass
class RoleAssignment:
    participant_name: str
    role_name: str
    fte: Optional[float] = None
    circle_name: Optional[str] = None


@dataclass
class CircleData:
    name: str
    functional_type: str


@dataclass
class LeadershipData:
    role_name: str
    standard_salary: float
    description: Optional[str] = None
    leadership_type: Optional[str] = None
    circle_count: Optional[str] = None


@dataclass
class EmployeeWithRoles(Employee):
    roles: List[str] = field(default_factory=list)
    total_fte: float = 0.0
    normalized_roles_fte: Dict[str, float] = field(default_factory=dict)
    standard_salary: float = 0.0
    operational_circle_count: int = 0
    operational_circle_type: Optional[str] = None
    lead_circles: List[CircleData] = field(default_factory=list)
    kind: str = field(default=WITH_ROLES, init=False)

    @property
    def is_leader(self) -> bool:
        return self.operational_circle_count > 0


@dataclass
class LeadershipInfo:
    circle_type: Optional[str]
    circle_count: int
    lead_circles: List[CircleData]


@dataclass
class RoleSummary:
    role_name: str
    min_salary: float
    max_salary: float
    standard_salary: float
    salaries: List[float]
    is_custom: bool = False


@dataclass
class BudgetSummary:
    total_standard_income: float
    total_actual_income: float
    percentage_difference: float


@dataclass
class RoleParticipant:
    name: str
    fte: float
    standard_income: float
    actual_income: float


@dataclass
class CircleRole:
    role_name: str
    standard_salary: float
    participants: List[RoleParticipant]


@dataclass
class CircleDetail:
    circle_name: str
    leader_name: Optional[str]
    leader_fte: float
    roles: List[CircleRole]
    budget: BudgetSummary


@dataclass
class NameCollision:
    name: str
    matched_employees: List[str]
    source: str


@dataclass
class FileParseResult:
    file_name: str
    kind: Optional[str]
    records: list
    warnings: List[str]
    error: Optional[str] = None

    @property
    def parsed(self) -> bool:
        return self.kind is not None

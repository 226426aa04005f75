"""Findings generation for the Salary Benchmark Dashboard."""

from typing import Dict, List

from src.config import DEVIATION_TOLERANCE, FTE_TOLERANCE
from src.fte import fte_adjustment
from src.salary import find_leadership_standard_salary


def generate_recommendations(dashboard) -> List[Dict]:
    """Generate actionable findings from a dashboard snapshot."""
    recommendations = []
    roster = dashboard.roster

    # 1. Ambiguous names
    for collision in dashboard.collisions:
        recommendations.append({
            'type': 'name_collision',
            'priority': 'High',
            'title': f"Ambiguous name: {collision.name}",
            'description': f"**{collision.name}** matches {len(collision.matched_employees)} employees; "
                           f"roles and salaries may be attributed to the wrong person",
            'details': {
                'source': collision.source,
                'matched_employees': collision.matched_employees
            }
        })

    # 2. Systematic deviation from the benchmark
    deviation = dashboard.deviation
    if deviation.get('systematic'):
        direction = 'above' if deviation['mean'] > 0 else 'below'
        recommendations.append({
            'type': 'systematic_deviation',
            'priority': 'High',
            'title': f"Salaries are systematically {direction} standard",
            'description': f"Average deviation is {deviation['mean']*100:+.1f}% across "
                           f"{deviation['count']} employees (p={deviation['p_value']:.3f})",
            'details': {
                'overpaid_count': deviation['overpaid_count'],
                'underpaid_count': deviation['underpaid_count']
            }
        })

    # 3. Circles over budget
    over_budget = {
        name: budget for name, budget in dashboard.circle_budgets.items()
        if budget.percentage_difference > DEVIATION_TOLERANCE * 100
    }
    for name, budget in sorted(over_budget.items(), key=lambda item: -item[1].percentage_difference):
        recommendations.append({
            'type': 'circle_budget',
            'priority': 'High',
            'title': f"Circle {name} is over its standard budget",
            'description': f"Actual cost exceeds standard by {budget.percentage_difference:.2f}%",
            'details': {
                'standard': budget.total_standard_income,
                'actual': budget.total_actual_income
            }
        })

    # 4. Roles without a standard rate
    undetermined = [s.role_name for s in dashboard.role_summaries if not s.standard_salary and not s.is_custom]
    if undetermined:
        recommendations.append({
            'type': 'undetermined_rate',
            'priority': 'Medium',
            'title': f"{len(undetermined)} role(s) have no standard salary",
            'description': 'Nobody on the roster holds these roles; set a custom standard salary',
            'details': {
                'roles': undetermined
            }
        })

    # 5. Leaders without a leadership table entry
    if dashboard.leadership_data:
        unmatched_leaders = [
            emp.name for emp in roster
            if emp.is_leader and find_leadership_standard_salary(
                emp.operational_circle_type, str(emp.operational_circle_count), dashboard.leadership_data
            ) is None
        ]
        if unmatched_leaders:
            recommendations.append({
                'type': 'leadership_gap',
                'priority': 'Medium',
                'title': f"{len(unmatched_leaders)} leader(s) have no leadership table match",
                'description': 'Their leader role falls back to the custom or computed rate',
                'details': {
                    'employees': unmatched_leaders
                }
            })

    # 6. Participants missing from the roster
    if dashboard.unmatched_participants:
        recommendations.append({
            'type': 'unmatched_participants',
            'priority': 'Medium',
            'title': f"{len(dashboard.unmatched_participants)} role participant(s) are not on the roster",
            'description': 'Their roles do not contribute to any salary range',
            'details': {
                'participants': dashboard.unmatched_participants[:10]
            }
        })

    # 7. FTE normalization
    adjusted = [emp for emp in roster if emp.total_fte > 0 and abs(emp.total_fte - 1.0) > FTE_TOLERANCE]
    if adjusted:
        recommendations.append({
            'type': 'fte',
            'priority': 'Low',
            'title': f"{len(adjusted)} employee(s) have workload that does not sum to 1.0 FTE",
            'description': 'Role shares were reduced or increased proportionally',
            'details': {
                'employees': {emp.name: (round(emp.total_fte, 2), fte_adjustment(emp.total_fte)) for emp in adjusted[:10]}
            }
        })

    # 8. Employees without roles
    without_roles = [emp.name for emp in roster if not emp.roles]
    if without_roles:
        recommendations.append({
            'type': 'no_roles',
            'priority': 'Low',
            'title': f"{len(without_roles)} employee(s) hold no roles",
            'description': 'Their standard salary is not determined',
            'details': {
                'employees': without_roles[:10]
            }
        })

    return recommendations

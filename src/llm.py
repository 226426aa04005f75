"""LLM integration using OpenRouter for an AI compensation review."""

import os
from typing import Dict, List, Optional

from openai import OpenAI

from src.config import AI_MODEL
from src.salary import salary_difference


def get_ai_review(
    dashboard,
    findings: List[Dict],
    api_key: Optional[str] = None,
    model: str = AI_MODEL
) -> tuple[Optional[str], Optional[str]]:
    """
    Generate an AI-written compensation review using OpenRouter.

    Args:
        dashboard: Dashboard snapshot with roster, roles and budgets
        findings: Rule-based findings for the same snapshot
        api_key: OpenRouter API key (or from env OPENROUTER_API_KEY)
        model: Model to use

    Returns:
        Tuple of (response_content, error_message)
    """
    api_key = api_key or os.environ.get("OPENROUTER_API_KEY")

    if not api_key:
        return None, "No API key provided"

    context = _build_context(dashboard, findings)

    system_prompt = """You are a compensation analyst. Review standard (benchmark) salaries against actual pay.
Be specific. Reference actual role names, circle names, and numbers from the data.
Format your response in clean markdown."""

    user_prompt = f"""## Current Situation

{context}

## Your Task

Based on this data, provide:

1. **Executive Summary** (2-3 sentences)
2. **Top 3 Pay Gaps** - Roles or people furthest from standard, with amounts
3. **Circle Budgets** - Which circles need attention and why
4. **Data Quality** - Which input problems distort the benchmark
5. **Next Steps** - Which standard salaries should be reviewed or overridden"""

    try:
        client = OpenAI(
            base_url="https://openrouter.ai/api/v1",
            api_key=api_key
        )

        response = client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt}
            ],
            max_tokens=1500,
            temperature=0.3
        )

        return response.choices[0].message.content, None

    except Exception as e:
        error_msg = str(e)
        if "401" in error_msg:
            return None, "Invalid API key. Check your OpenRouter API key."
        elif "404" in error_msg:
            return None, f"Model '{model}' not found. Try a different model."
        elif "timeout" in error_msg.lower():
            return None, "Request timed out. Try a faster model."
        elif "connection" in error_msg.lower():
            return None, "Connection error. Check your internet connection."
        else:
            return None, f"Error: {error_msg}"


def _build_context(dashboard, findings: List[Dict]) -> str:
    """Build context string for the LLM prompt."""
    org = dashboard.organization_budget
    deviation = dashboard.deviation

    context = f"""### Organization
- **Employees:** {len(dashboard.roster)}
- **Roles:** {len(dashboard.role_summaries)}
- **Standard payroll:** {org.total_standard_income:,.0f}
- **Actual payroll:** {org.total_actual_income:,.0f} ({org.percentage_difference:+.2f}%)
- **Benchmarked employees:** {deviation.get('count', 0)}, mean deviation {deviation.get('mean', 0.0)*100:+.1f}%

### Roles
"""

    for summary in dashboard.role_summaries[:20]:
        source = "custom" if summary.is_custom else "computed"
        context += (f"- **{summary.role_name}**: standard {summary.standard_salary:,.0f} ({source}), "
                    f"range {summary.min_salary:,.0f}-{summary.max_salary:,.0f}, "
                    f"{len(summary.salaries)} incumbent(s)\n")

    if dashboard.circle_budgets:
        context += "\n### Circle Budgets\n"
        for name, budget in dashboard.circle_budgets.items():
            context += (f"- **{name}**: standard {budget.total_standard_income:,.0f}, "
                        f"actual {budget.total_actual_income:,.0f} ({budget.percentage_difference:+.2f}%)\n")

    gaps = sorted(
        (emp for emp in dashboard.roster if emp.standard_salary),
        key=lambda emp: -abs(salary_difference(emp.salary, emp.standard_salary))
    )[:5]
    if gaps:
        context += "\n### Largest Individual Gaps\n"
        for emp in gaps:
            context += (f"- **{emp.name}**: actual {emp.salary:,.0f}, standard {emp.standard_salary:,.0f}, "
                        f"roles: {', '.join(emp.roles) or 'none'}\n")

    if findings:
        context += "\n### Findings\n"
        for finding in findings[:8]:
            context += f"- [{finding['priority']}] {finding['title']}\n"

    return context

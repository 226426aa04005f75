"""
Salary Benchmark Dashboard - Standard vs Actual Compensation
Upload CSV exports of employees, role assignments, circles and the leadership table.

Standard salary model:
- Role/FTE: every employee's role shares are normalized to one full-time position
- Standard rate per role: leadership table -> custom override -> midpoint of incumbents' salaries
- Standard salary: FTE-weighted sum of the role rates
"""

import logging
from datetime import date

import pandas as pd
import streamlit as st

from src.analysis import circle_detail
from src.config import CURRENCY_SYMBOL, LOG_LEVEL, NORMALIZED_LEADER_ROLE
from src.data_loader import load_files, validate_data
from src.export import export_filename, export_roles_csv
from src.fte import fte_adjustment
from src.llm import get_ai_review
from src.models import LeadershipData
from src.recommendations import generate_recommendations
from src.roster import safe_build_dashboard
from src.salary import salary_difference, salary_difference_percent

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def format_salary(value: float) -> str:
    """ru-RU style: space-separated thousands, no decimals, ruble sign."""
    return f"{value:,.0f}".replace(",", " ") + f" {CURRENCY_SYMBOL}"


def format_difference(value: float) -> str:
    return ("+" if value > 0 else "") + format_salary(value) if value else f"0 {CURRENCY_SYMBOL}"


# =============================================================================
# STREAMLIT APP
# =============================================================================

st.set_page_config(
    page_title="Salary Benchmark Dashboard",
    page_icon="💼",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .main-header {
        text-align: center;
        padding: 1.5rem 0;
        border-bottom: 1px solid rgba(255,255,255,0.1);
        margin-bottom: 1.5rem;
    }

    .main-header h1 {
        font-size: 2.5rem;
        font-weight: 700;
        margin-bottom: 0.5rem;
    }

    .section-header {
        font-size: 1.4rem;
        font-weight: 600;
        padding-bottom: 0.5rem;
        border-bottom: 1px solid rgba(255,255,255,0.1);
        margin-bottom: 1rem;
    }

    .recommendation-card {
        border: 1px solid rgba(255,255,255,0.1);
        border-radius: 12px;
        padding: 1rem 1.25rem;
        margin-bottom: 0.75rem;
    }

    .recommendation-card.high { border-left: 4px solid #f43f5e; }
    .recommendation-card.medium { border-left: 4px solid #f59e0b; }
    .recommendation-card.low { border-left: 4px solid #10b981; }
</style>
""", unsafe_allow_html=True)

st.markdown("""
<div class="main-header">
    <h1>Salary Benchmark Dashboard</h1>
    <p style="color: #94a3b8;">Standard vs actual compensation by role, circle and leadership · {}</p>
</div>
""".format(date.today().strftime('%d.%m.%Y')), unsafe_allow_html=True)

if 'custom_salaries' not in st.session_state:
    st.session_state.custom_salaries = {}
if 'leadership_override' not in st.session_state:
    st.session_state.leadership_override = None
if 'dashboard' not in st.session_state:
    st.session_state.dashboard = None

# =============================================================================
# UPLOAD
# =============================================================================

uploaded_files = st.file_uploader(
    "Upload CSV files (employees, roles, circles, leadership table)",
    type=["csv", "txt"],
    accept_multiple_files=True
)

if not uploaded_files:
    st.info("Please upload CSV files to begin.")
    st.stop()

files = [(f.name, f.getvalue().decode("utf-8-sig", errors="replace")) for f in uploaded_files]
loaded = load_files(files)

with st.expander("📂 File classification", expanded=False):
    for result in loaded['results']:
        if result.parsed:
            st.success(f"**{result.file_name}** → {result.kind} ({len(result.records)} records)")
        else:
            st.error(result.error)
        for warning in result.warnings[:20]:
            st.caption(f"⚠️ {warning}")

ok, message = validate_data(loaded['employees'], loaded['roles'])
if not ok:
    st.warning(message)
    st.stop()
st.caption(message)

leadership_data = st.session_state.leadership_override or loaded['leadership']

with st.spinner('🔄 Calculating standard salaries...'):
    dashboard, error = safe_build_dashboard(
        st.session_state.dashboard,
        loaded['employees'],
        loaded['roles'],
        loaded['circles'],
        leadership_data,
        st.session_state.custom_salaries,
    )

if error:
    st.error(error)
if dashboard is None:
    st.stop()
st.session_state.dashboard = dashboard

recommendations = generate_recommendations(dashboard)
org = dashboard.organization_budget

# Sidebar
with st.sidebar:
    st.markdown("### 📊 Quick Summary")

    if org.percentage_difference > 0:
        st.error(f"**Actual vs standard:** {org.percentage_difference:+.2f}%")
    else:
        st.success(f"**Actual vs standard:** {org.percentage_difference:+.2f}%")

    st.metric("👥 Employees", len(dashboard.roster))
    st.metric("🧩 Roles", len(dashboard.role_summaries))
    st.metric("⭕ Circles", len(dashboard.circle_budgets))
    if dashboard.collisions:
        st.metric("⚠️ Ambiguous names", len(dashboard.collisions))

    st.markdown("---")
    st.markdown("### ⚙️ Configuration")
    st.caption(f"**Custom salaries:** {len(st.session_state.custom_salaries)}")
    st.caption(f"**Leadership entries:** {len(leadership_data)}")
    if st.button("Reset custom salaries"):
        st.session_state.custom_salaries = {}
        st.rerun()

# =============================================================================
# TABS
# =============================================================================

tab1, tab2, tab3, tab4, tab5 = st.tabs(
    ["👥 Employees", "🧩 Roles", "⭕ Circles", "🏅 Leadership", "💡 Findings"]
)

# =============================================================================
# TAB 1: EMPLOYEES
# =============================================================================

with tab1:
    st.markdown('<div class="section-header">👥 Employees</div>', unsafe_allow_html=True)

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Standard payroll", format_salary(org.total_standard_income))
    with col2:
        st.metric("Actual payroll", format_salary(org.total_actual_income))
    with col3:
        st.metric("Difference", f"{org.percentage_difference:+.2f}%")

    search = st.text_input("Search employee", "")
    rows = []
    for emp in dashboard.roster:
        if search and search.lower() not in emp.name.lower():
            continue
        rows.append({
            'Name': emp.name,
            'Roles': ', '.join(emp.roles),
            'FTE': round(emp.total_fte, 2),
            'Salary': format_salary(emp.salary),
            'Standard': format_salary(emp.standard_salary) if emp.standard_salary else '—',
            'Difference': format_difference(salary_difference(emp.salary, emp.standard_salary)) if emp.standard_salary else '—',
            'Diff %': round(salary_difference_percent(emp.salary, emp.standard_salary), 1),
            'Circles led': emp.operational_circle_count,
        })
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

    names = [emp.name for emp in dashboard.roster]
    selected = st.selectbox("Employee details", names) if names else None
    employee = next((emp for emp in dashboard.roster if emp.name == selected), None)
    if employee:
        st.markdown(f"#### {employee.name}")
        adjustment = fte_adjustment(employee.total_fte)
        if adjustment != 'none':
            st.caption(f"Total FTE {employee.total_fte:.2f}: shares {adjustment} proportionally")
        st.dataframe(pd.DataFrame([
            {'Role': role, 'Share': round(share, 3)}
            for role, share in employee.normalized_roles_fte.items()
        ]), use_container_width=True, hide_index=True)
        if employee.is_leader:
            st.markdown(f"**Leads {employee.operational_circle_count} circle(s)**, "
                        f"type: {employee.operational_circle_type}")
            for circle in employee.lead_circles:
                st.caption(f"• {circle.name} ({circle.functional_type or '—'})")

# =============================================================================
# TAB 2: ROLES
# =============================================================================

with tab2:
    st.markdown('<div class="section-header">🧩 Roles</div>', unsafe_allow_html=True)

    roles_df = pd.DataFrame([{
        'Role': s.role_name,
        'Min': s.min_salary,
        'Max': s.max_salary,
        'Standard': s.standard_salary,
        'Incumbents': len(s.salaries),
        'Custom': s.is_custom,
    } for s in dashboard.role_summaries])

    if roles_df.empty:
        st.info("No roles found.")
    else:
        edited = st.data_editor(
            roles_df,
            disabled=['Role', 'Min', 'Max', 'Incumbents', 'Custom'],
            use_container_width=True,
            hide_index=True,
            key="roles_editor"
        )
        if st.button("Save standard salaries"):
            custom = dict(st.session_state.custom_salaries)
            for summary, (_, row) in zip(dashboard.role_summaries, edited.iterrows()):
                if float(row['Standard']) != summary.standard_salary:
                    custom[summary.role_name] = float(row['Standard'])
            st.session_state.custom_salaries = custom
            st.rerun()

        st.caption(f"{NORMALIZED_LEADER_ROLE}: leadership table values take precedence for circle leaders.")

        st.download_button(
            "Download roles CSV",
            export_roles_csv(dashboard.role_summaries).encode("utf-8"),
            export_filename(),
            "text/csv"
        )

# =============================================================================
# TAB 3: CIRCLES
# =============================================================================

with tab3:
    st.markdown('<div class="section-header">⭕ Circles</div>', unsafe_allow_html=True)

    if not dashboard.circle_budgets:
        st.info("Upload a circles file to see circle budgets.")
    else:
        types = {c.name: c.functional_type for c in loaded['circles']}
        st.dataframe(pd.DataFrame([{
            'Circle': name,
            'Type': types.get(name, ''),
            'Standard budget': format_salary(budget.total_standard_income),
            'Actual budget': format_salary(budget.total_actual_income),
            'Difference %': budget.percentage_difference,
        } for name, budget in dashboard.circle_budgets.items()]), use_container_width=True, hide_index=True)

        circle_name = st.selectbox("Circle details", list(dashboard.circle_budgets))
        detail = circle_detail(circle_name, loaded['roles'], dashboard.roster, dashboard.role_summaries)

        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Standard", format_salary(detail.budget.total_standard_income))
        with col2:
            st.metric("Actual", format_salary(detail.budget.total_actual_income))
        with col3:
            st.metric("Difference", f"{detail.budget.percentage_difference:+.2f}%")

        if detail.leader_name:
            st.markdown(f"**Leader:** {detail.leader_name} (FTE {detail.leader_fte:.2f})")
        for role in detail.roles:
            st.markdown(f"**{role.role_name}**, standard {format_salary(role.standard_salary)}")
            st.dataframe(pd.DataFrame([{
                'Participant': p.name,
                'FTE': round(p.fte, 2),
                'Standard income': format_salary(p.standard_income),
                'Actual income': format_salary(p.actual_income) if p.actual_income else '',
            } for p in role.participants]), use_container_width=True, hide_index=True)

# =============================================================================
# TAB 4: LEADERSHIP
# =============================================================================

with tab4:
    st.markdown('<div class="section-header">🏅 Leadership Table</div>', unsafe_allow_html=True)

    if not leadership_data:
        st.info("Upload a leadership table (rows: leadership type, columns: number of circles).")
    else:
        table = pd.DataFrame([{
            'Type': entry.leadership_type,
            'Circles': entry.circle_count,
            'Standard salary': entry.standard_salary,
        } for entry in leadership_data])
        edited = st.data_editor(table, disabled=['Type', 'Circles'], use_container_width=True,
                                hide_index=True, key="leadership_editor")
        if st.button("Apply leadership table"):
            st.session_state.leadership_override = [
                LeadershipData(
                    role_name=f"{row['Type']} ({row['Circles']} кругов)",
                    standard_salary=float(row['Standard salary']),
                    description=f'Лидерство типа "{row["Type"]}" с {row["Circles"]} кругами',
                    leadership_type=row['Type'],
                    circle_count=row['Circles'],
                )
                for _, row in edited.iterrows()
            ]
            st.rerun()

# =============================================================================
# TAB 5: FINDINGS
# =============================================================================

with tab5:
    st.markdown('<div class="section-header">💡 Findings</div>', unsafe_allow_html=True)

    deviation = dashboard.deviation
    if deviation.get('count'):
        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Mean deviation", f"{deviation['mean']*100:+.1f}%")
        with col2:
            st.metric("Overpaid", deviation['overpaid_count'])
        with col3:
            st.metric("Underpaid", deviation['underpaid_count'])

    if not recommendations:
        st.success("No issues found! 🎉")
    for rec in recommendations:
        st.markdown(f"""
<div class="recommendation-card {rec['priority'].lower()}">
    <strong>{rec['title']}</strong> <small>({rec['priority']})</small>
    <p>{rec['description']}</p>
</div>
""", unsafe_allow_html=True)

    st.markdown("---")
    st.markdown("#### 🤖 AI Review")
    api_key = st.text_input("OpenRouter API key", type="password")
    if st.button("Generate AI review"):
        with st.spinner("Asking the model..."):
            content, ai_error = get_ai_review(dashboard, recommendations, api_key=api_key or None)
        if ai_error:
            st.error(ai_error)
        else:
            st.markdown(content)

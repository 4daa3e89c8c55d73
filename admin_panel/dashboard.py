import sys
from pathlib import Path
import logging

import plotly.express as px
import streamlit as st

# Gyökérkönyvtár a PYTHONPATH-ba (streamlit run admin_panel/dashboard.py)
BASE_DIR = Path(__file__).resolve().parent.parent
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from app.core.database import SessionLocal, engine
from app.core.exceptions import DomainError
from app.models import base
from app.services.calendar_helper import iso_week, local_now, local_today
from app.services.classifiers import CATEGORIES, MISSING_STATUSES, ROLE_KEYS
from app.services.employee_service import EmployeeService
from app.services.export_service import export_to_csv, export_to_pdf, load_return_items, load_schedules
from app.services.shift_rules import ROLES
from app.services.summary_service import generate_dashboard_summary
from admin_panel.filters import apply_filters, display_filter_stats, load_data

# Oldal beállítások
st.set_page_config(
    page_title="Bolti Napló - Admin",
    page_icon="🛒",
    layout="wide"
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def init_database():
    """Táblák létrehozása, ha még nem léteznek"""
    try:
        base.Base.metadata.create_all(bind=engine)
        return True
    except Exception as e:
        logger.error(f"Hiba az adatbázis inicializálásakor: {e}")
        return False


def role_label(role_key):
    return ROLES.get(role_key, {}).get("label", role_key)


# Adatbázis inicializálás
if not init_database():
    st.error("❌ Nem sikerült kapcsolódni az adatbázishoz!")
    st.stop()

# ======================
# FŐ FELÜLET
# ======================
st.title("🛒 Bolti Napló - Adminisztráció")
st.caption("A bolt napi állapota, munkavállalói törzs és heti exportok")

tab1, tab2, tab3, tab4 = st.tabs(["📋 Áttekintés", "👥 Munkavállalók", "📦 Hiánycikkek", "📤 Export"])

with tab1:
    db = SessionLocal()
    try:
        summary = generate_dashboard_summary(db)
    finally:
        db.close()

    st.subheader(f"{summary['greeting']}! {summary['headline']}")

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Mai feladatok", len(summary["today_tasks"]))
    with col2:
        st.metric("Lejárt feladatok", len(summary["overdue_tasks"]))
    with col3:
        st.metric("Nyitott hiánycikkek", summary["open_missing_products"])
    with col4:
        st.metric(
            "Ellenőrzött elosztás",
            f"{summary['checked_distributions']}/{summary['total_distributions']}"
        )

    if summary["all_tasks_complete"]:
        st.success("✅ Minden mai feladat elvégezve!")

    for task in summary["overdue_tasks"]:
        st.warning(f"⏰ {task.title} (határidő: {task.deadline:%Y.%m.%d %H:%M})")
    for task in summary["today_tasks"]:
        st.write(f"⏳ **{task.title}**")

    if st.button("🔄 Frissítés", type="primary"):
        st.rerun()

with tab2:
    st.subheader("Munkavállalói törzs")

    with st.form(key="add_employee_form", clear_on_submit=True):
        name_input = st.text_input("Név", placeholder="Kovács János")
        role_input = st.selectbox("Szerepkör", ROLE_KEYS, index=len(ROLE_KEYS) - 1, format_func=role_label)
        submitted = st.form_submit_button("Hozzáadás", type="primary")

        if submitted:
            if name_input.strip():
                db = SessionLocal()
                try:
                    EmployeeService(db).create(name_input.strip(), role_input)
                    st.success(f"{name_input.strip()} hozzáadva")
                except DomainError as e:
                    st.error(str(e))
                finally:
                    db.close()
            else:
                st.error("Add meg a nevet!")

    db = SessionLocal()
    try:
        grouped = EmployeeService(db).list_grouped()
        for label, employees in (("Aktív", grouped["active"]), ("Inaktív", grouped["inactive"])):
            st.write(f"**{label}:** {len(employees)}")
            for employee in employees:
                col1, col2, col3, col4 = st.columns([3, 2, 1, 1])
                with col1:
                    st.write(f"{'✅' if employee.active else '❌'} **{employee.name}**")
                with col2:
                    st.caption(role_label(employee.role))
                with col3:
                    action_text = "Inaktivál" if employee.active else "Aktivál"
                    if st.button(action_text, key=f"toggle_{employee.id}"):
                        EmployeeService(db).toggle_active(employee.id)
                        st.rerun()
                with col4:
                    if st.button("🗑️", key=f"delete_{employee.id}", help="Munkavállaló törlése"):
                        EmployeeService(db).delete(employee.id)
                        st.rerun()
            st.divider()
    finally:
        db.close()

with tab3:
    st.subheader("Hiánycikkek")
    missing_df = load_data("missing_products")
    if missing_df.empty:
        st.info("Nincs rögzített hiánycikk.")
    else:
        filtered_df, selected_date, selected_status, selected_category, keyword = apply_filters(missing_df)
        display_filter_stats(missing_df, filtered_df, selected_date, selected_status, selected_category, keyword)

        view = filtered_df[["date", "article_number", "product_name", "category", "status", "notes"]].copy()
        view["category"] = view["category"].map(lambda c: CATEGORIES.get(c, c))
        view["status"] = view["status"].map(lambda s: MISSING_STATUSES.get(s, s))
        st.dataframe(view, use_container_width=True)

        st.subheader("📈 Hiánycikkek naponta")
        daily_counts = missing_df.groupby(["date", "status"]).size().reset_index(name="count")
        daily_counts["status"] = daily_counts["status"].map(lambda s: MISSING_STATUSES.get(s, s))
        fig = px.bar(daily_counts, x="date", y="count", color="status", title="Rögzített hiánycikkek napi bontásban")
        fig.update_layout(
            plot_bgcolor="rgba(0,0,0,0)",
            paper_bgcolor="rgba(0,0,0,0)",
            title_x=0.5,
            legend_title_text="Állapot",
        )
        st.plotly_chart(fig, use_container_width=True)

with tab4:
    st.subheader("Heti export")
    week_number = st.number_input("Hét", min_value=1, max_value=53, value=iso_week(local_today()))

    db = SessionLocal()
    try:
        returns_df = load_return_items(db, int(week_number))
        schedules_df = load_schedules(db, int(week_number))
    finally:
        db.close()

    col1, col2 = st.columns(2)
    with col1:
        st.write(f"**NF visszaküldés** ({len(returns_df)} tétel)")
        st.download_button(
            "⬇️ CSV", export_to_csv(returns_df),
            file_name=f"returns_{week_number}.csv", mime="text/csv"
        )
        st.download_button(
            "⬇️ PDF", export_to_pdf(returns_df, f"NF visszaküldés - {week_number}. hét"),
            file_name=f"returns_{week_number}.pdf", mime="application/pdf"
        )
    with col2:
        st.write(f"**Beosztás** ({len(schedules_df)} sor)")
        st.download_button(
            "⬇️ CSV", export_to_csv(schedules_df),
            file_name=f"schedules_{week_number}.csv", mime="text/csv", key="schedules_csv"
        )
        st.download_button(
            "⬇️ PDF", export_to_pdf(schedules_df, f"Beosztás - {week_number}. hét"),
            file_name=f"schedules_{week_number}.pdf", mime="application/pdf", key="schedules_pdf"
        )

# Oldalsáv
with st.sidebar:
    st.header("ℹ️ Információ")
    st.write("""
    **Oldalak:**

    - 📋 Áttekintés: mai és lejárt feladatok
    - 👥 Munkavállalók: a beosztás import névegyeztetéséhez
    - 📦 Hiánycikkek: szűrés napra, állapotra, kategóriára
    - 📤 Export: heti visszáru lista és beosztás
    """)

    st.divider()

    st.write("**Helyi idő:**")
    st.write(local_now().strftime("%Y-%m-%d %H:%M:%S"))

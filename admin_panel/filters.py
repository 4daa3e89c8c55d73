import pandas as pd
from datetime import date
import streamlit as st
from typing import Tuple, Optional, List
from sqlalchemy.exc import SQLAlchemyError

from app.core.database import engine
from app.services.classifiers import CATEGORIES, MISSING_STATUSES

ALL = "Mind"


def load_data(table: str = "missing_products") -> pd.DataFrame:
    """Tábla betöltése DataFrame-be hibakezeléssel"""
    try:
        return pd.read_sql_table(table, engine)
    except ValueError:
        st.error(f"A(z) {table} tábla nem található! Futtasd: python start_system.py init")
        return pd.DataFrame()
    except SQLAlchemyError as e:
        st.error(f"Adatbázis hiba: {str(e)}")
        return pd.DataFrame()


def filter_frame(
    df: pd.DataFrame,
    selected_date: Optional[date] = None,
    status: str = ALL,
    category: str = ALL,
    keyword: Optional[str] = None,
    date_col: str = "date",
    text_cols: Tuple[str, ...] = ("product_name", "article_number"),
) -> pd.DataFrame:
    """Szűrés dátumra, állapotra, kategóriára és kulcsszóra (Streamlit nélkül is hívható)"""
    filtered_df = df.copy()
    if filtered_df.empty:
        return filtered_df

    if selected_date:
        filtered_df[date_col] = pd.to_datetime(filtered_df[date_col]).dt.date
        filtered_df = filtered_df[filtered_df[date_col] == selected_date]

    if status != ALL:
        filtered_df = filtered_df[filtered_df["status"] == status]

    if category != ALL:
        filtered_df = filtered_df[filtered_df["category"] == category]

    if keyword:
        mask = pd.Series(False, index=filtered_df.index)
        for col in text_cols:
            mask |= filtered_df[col].astype(str).str.contains(keyword, case=False, na=False, regex=False)
        filtered_df = filtered_df[mask]

    return filtered_df


def apply_filters(df: pd.DataFrame) -> Tuple[pd.DataFrame, Optional[date], str, str, Optional[str]]:
    """Szűrők az oldalsávon, a hiánycikk táblára"""
    st.sidebar.header("🔎 Szűrők")

    selected_date = st.sidebar.date_input("Nap", value=None)
    selected_status = st.sidebar.selectbox("Állapot", options_for(MISSING_STATUSES))
    selected_category = st.sidebar.selectbox("Kategória", options_for(CATEGORIES))
    keyword = st.sidebar.text_input("Keresés névre vagy cikkszámra")

    filtered_df = filter_frame(df, selected_date, selected_status, selected_category, keyword)
    return filtered_df, selected_date, selected_status, selected_category, keyword


def display_filter_stats(
    df: pd.DataFrame,
    filtered_df: pd.DataFrame,
    selected_date: Optional[date],
    selected_status: str,
    selected_category: str,
    keyword: Optional[str]
) -> None:
    stats = []
    if selected_date:
        stats.append(f"📅 Nap: {selected_date}")
    if selected_status != ALL:
        stats.append(f"📌 Állapot: {selected_status}")
    if selected_category != ALL:
        stats.append(f"🗂️ Kategória: {selected_category}")
    if keyword:
        stats.append(f"🔍 Kulcsszó: '{keyword}'")

    if stats:
        st.info(
            f"Találatok: {len(filtered_df)} / {len(df)}. Szűrők: {', '.join(stats)}"
        )


def options_for(values) -> List[str]:
    return [ALL] + list(values)

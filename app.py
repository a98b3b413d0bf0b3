import pandas as pd
import streamlit as st
from contextlib import contextmanager
from html import escape
from typing import Any, Dict, List, Optional

from insights.data import DataSourceError, load_marketing_data
from insights.formatting import format_count, format_currency
from insights.settings import normalize_settings
from insights.view_demographic import compute_demographic_view
from insights.view_device import compute_device_view
from insights.view_region import compute_region_view
from insights.view_weekly import compute_weekly_view


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #374151;margin-bottom: 10px;}
        .app-top-bar .breadcrumb {color: #9ca3af;font-size: 0.9rem;margin-bottom: 2px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;}
        .card {border: 1px solid #374151;border-radius: 12px;padding: 16px;background: #1f2937;
               box-shadow: 0 1px 2px rgba(0,0,0,0.2); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #f9fafb;margin-bottom: 8px;}
        .chart-empty {color: #9ca3af;text-align: center;padding: 80px 0;}
        .chart-note {color: #6b7280;font-size: 0.75rem;margin-top: 6px;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{escape(title)}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def render_page_header(title: str, breadcrumb: str, export_df: Optional[pd.DataFrame] = None, export_name: str = "export.csv"):
    inject_base_styles()
    c1, c2 = st.columns([8, 2])
    with c1:
        st.markdown(
            f"<div class='app-top-bar'><div class='breadcrumb'>{breadcrumb}</div><div class='page-title'>{title}</div></div>",
            unsafe_allow_html=True,
        )
    with c2:
        if export_df is not None and not export_df.empty:
            st.download_button(
                "Export CSV",
                data=export_df.to_csv(index=False).encode("utf-8"),
                file_name=export_name,
                mime="text/csv",
            )


def render_empty(chart: Dict[str, Any]):
    st.markdown(f"<div class='chart-empty'>{escape(chart.get('message') or '')}</div>", unsafe_allow_html=True)


def line_chart_svg(chart: Dict[str, Any]) -> str:
    width, height, color = chart["width"], chart["height"], chart["color"]
    first_x = chart["markers"][0]["x"] if chart["markers"] else 0
    last_x = chart["markers"][-1]["x"] if chart["markers"] else width
    parts: List[str] = [f"<svg viewBox='0 0 {width} {height}' width='100%' height='{height}'>"]
    for tick in chart["y_ticks"]:
        parts.append(
            f"<line x1='{first_x}' y1='{tick['position']}' x2='{last_x}' y2='{tick['position']}' "
            "stroke='#6b7280' stroke-width='0.5' stroke-dasharray='2,2'/>"
            f"<text x='{first_x - 8}' y='{tick['position']}' dy='0.32em' text-anchor='end' font-size='10' fill='#9ca3af'>"
            f"{escape(tick['label'])}</text>"
        )
    baseline = chart["y_ticks"][0]["position"] if chart["y_ticks"] else height
    for tick in chart["x_ticks"]:
        parts.append(
            f"<text x='{tick['position']}' y='{baseline + 15}' text-anchor='middle' font-size='10' fill='#9ca3af'>"
            f"{escape(tick['label'])}</text>"
        )
    parts.append(f"<path d='{chart['path']}' fill='none' stroke='{color}' stroke-width='2'/>")
    for m in chart["markers"]:
        parts.append(f"<circle cx='{m['x']}' cy='{m['y']}' r='{m['radius']}' fill='{color}'><title>{escape(m['tooltip'])}</title></circle>")
    parts.append("</svg>")
    return "".join(parts)


def bubble_map_svg(chart: Dict[str, Any]) -> str:
    parts: List[str] = [f"<svg viewBox='0 0 {chart['width']} {chart['height']}' width='100%'>"]
    parts.append(f"<rect x='0' y='0' width='{chart['width']}' height='{chart['height']}' fill='#111827'/>")
    for b in chart["bubbles"]:
        parts.append(
            f"<g><circle cx='{b['x']}' cy='{b['y']}' r='{b['radius']}' fill='{b['color']}' fill-opacity='0.6' "
            f"stroke='{b['color']}' stroke-width='1'/><title>{escape(b['label'])}</title></g>"
        )
    parts.append("</svg>")
    return "".join(parts)


def render_line_chart(chart: Dict[str, Any]):
    with card(chart["title"]):
        if chart["status"] != "ok":
            render_empty(chart)
        else:
            st.markdown(line_chart_svg(chart), unsafe_allow_html=True)


def render_bubble_map(chart: Dict[str, Any]):
    with card(chart["title"]):
        if chart["status"] != "ok":
            render_empty(chart)
            return
        st.markdown(bubble_map_svg(chart), unsafe_allow_html=True)
        st.markdown(f"<div class='chart-note'>*Note: {escape(chart['note'])}</div>", unsafe_allow_html=True)


def render_region_markers(chart: Dict[str, Any]):
    with card(chart["title"]):
        if chart["status"] != "ok" or not chart["markers"]:
            render_empty({"message": chart.get("message") or "No data available"})
            return
        df = pd.DataFrame(chart["markers"])
        # st.map sizes are metres; scale marker radii up to city-sized dots.
        df["size"] = df["radius"] * 5000
        st.map(df, latitude="lat", longitude="lng", size="size", color="color", zoom=chart["zoom"])


def render_vega(title: str, spec: Optional[Dict[str, Any]]):
    with card(title):
        if not spec:
            st.info("No data available")
        else:
            st.vega_lite_chart(spec, use_container_width=True)


# ---------- UI setup ----------
st.set_page_config(page_title="Marketing Insights Dashboard", layout="wide")
inject_base_styles()
st.title("Marketing Insights Dashboard")

try:
    marketing_data = load_marketing_data()
except DataSourceError as exc:
    st.error(str(exc))
    st.stop()

with st.sidebar:
    st.markdown("### Navigate")
    nav_choice = st.radio("Navigate", ["Demographic View", "Device View", "Region View", "Weekly View"], index=0)
    st.markdown("---")
    with st.expander("Chart settings", expanded=False):
        line_height = st.slider("Line chart height", min_value=200, max_value=600, value=300, step=20)
        max_x_labels = st.slider("Max week labels", min_value=2, max_value=12, value=6)

settings = normalize_settings({"line": {"height": line_height, "max_x_labels": max_x_labels}})


def render_demographic_page():
    payload = compute_demographic_view(marketing_data, settings)
    render_page_header("Demographic View", "Home / Demographic", pd.DataFrame(payload["age_groups"]), "demographic.csv")
    st.subheader("Performance by Gender")
    for row in payload["gender_totals"]:
        label = "Males" if row["gender"] == "Male" else ("Females" if row["gender"] == "Female" else str(row["gender"]))
        cols = st.columns(3)
        cols[0].metric(f"Total Clicks by {label}", format_count(row["clicks"]))
        cols[1].metric(f"Total Spend by {label}", format_currency(row["spend"], decimals=2))
        cols[2].metric(f"Total Revenue by {label}", format_currency(row["revenue"], decimals=2))

    st.subheader("Performance by Age Group")
    chart_cols = st.columns(2)
    with chart_cols[0]:
        render_vega("Total Spend by Age Group", payload["charts"].get("spend_by_age"))
    with chart_cols[1]:
        render_vega("Total Revenue by Age Group", payload["charts"].get("revenue_by_age"))

    table_cols = st.columns(2)
    with table_cols[0]:
        with card("Campaign Performance by Male Age Groups"):
            st.dataframe(pd.DataFrame(payload["male_age_table"]), hide_index=True)
    with table_cols[1]:
        with card("Campaign Performance by Female Age Groups"):
            st.dataframe(pd.DataFrame(payload["female_age_table"]), hide_index=True)


def render_device_page():
    payload = compute_device_view(marketing_data, settings)
    render_page_header("Device View", "Home / Device", pd.DataFrame(payload["table"]), "device.csv")
    devices = payload["devices"]
    cols = st.columns(4)
    cols[0].metric("Mobile Revenue", format_currency(devices["Mobile"]["total_revenue"]))
    cols[1].metric("Mobile Spend", format_currency(devices["Mobile"]["total_spend"]))
    cols[2].metric("Desktop Revenue", format_currency(devices["Desktop"]["total_revenue"]))
    cols[3].metric("Desktop Spend", format_currency(devices["Desktop"]["total_spend"]))

    chart_cols = st.columns(2)
    with chart_cols[0]:
        render_vega("Revenue: Mobile vs Desktop", payload["charts"].get("revenue"))
    with chart_cols[1]:
        render_vega("Conversions: Mobile vs Desktop", payload["charts"].get("conversions"))

    with card("Detailed Device Performance"):
        st.dataframe(pd.DataFrame(payload["table"]), hide_index=True)


def render_region_page():
    payload = compute_region_view(marketing_data, settings)
    render_page_header("Region View", "Home / Region", pd.DataFrame(payload["regions"]), "region.csv")
    map_cols = st.columns(2)
    with map_cols[0]:
        render_bubble_map(payload["maps"]["revenue"])
    with map_cols[1]:
        render_bubble_map(payload["maps"]["spend"])
    marker_cols = st.columns(2)
    with marker_cols[0]:
        render_region_markers(payload["region_markers"]["revenue"])
    with marker_cols[1]:
        render_region_markers(payload["region_markers"]["spend"])
    if payload["excluded_regions"]:
        st.caption("Not shown on the map (no coordinates): " + ", ".join(payload["excluded_regions"]))


def render_weekly_page():
    payload = compute_weekly_view(marketing_data, settings)
    render_page_header("Weekly View", "Home / Weekly", pd.DataFrame(payload["weeks"]), "weekly.csv")
    chart_cols = st.columns(2)
    with chart_cols[0]:
        render_line_chart(payload["charts"]["revenue"])
    with chart_cols[1]:
        render_line_chart(payload["charts"]["spend"])


if nav_choice == "Demographic View":
    render_demographic_page()
elif nav_choice == "Device View":
    render_device_page()
elif nav_choice == "Region View":
    render_region_page()
else:
    render_weekly_page()

import streamlit as st

PRIMARY_ACCENT = "#1E3A8A"  # navy
GREEN = "#059669"  # emerald-600
YELLOW = "#D97706"  # amber-600
RED = "#DC2626"  # red-600
CHIP_BG = "#374151"

GREEN_STATUSES = {"active", "paid", "completed"}
RED_STATUSES = {"overdue"}


def inject_base_css():
    if getattr(inject_base_css, "_applied", False):
        return
    inject_base_css._applied = True
    st.markdown(
        f"""
        <style>
        .badge {{
            display:inline-block; padding:2px 8px; border-radius:12px;
            font-size:12px; line-height:16px; font-weight:600;
            background:{CHIP_BG}; color:#F9FAFB; margin-right:4px; margin-bottom:4px;
        }}
        .badge.green {{background:{GREEN};}}
        .badge.yellow {{background:{YELLOW};}}
        .badge.red {{background:{RED};}}
        .table-title {{font-weight:600; font-size:1.1rem; color:{PRIMARY_ACCENT};}}
        .rtl {{direction:rtl; text-align:right;}}
        </style>
        """,
        unsafe_allow_html=True,
    )


def status_badge(status: str, count=None) -> str:
    key = (status or "").lower()
    if key in GREEN_STATUSES:
        cls = "green"
    elif key in RED_STATUSES:
        cls = "red"
    else:
        cls = "yellow"
    text = status if count is None else f"{status} {count}"
    return f'<span class="badge {cls}">{text}</span>'

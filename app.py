# /app.py
import streamlit as st
from logging_config import setup_logging

st.set_page_config(page_title="Card Score Tracker", page_icon="🎴", layout="wide")
setup_logging()

# ---- Dark-green site theme ----
def _inject_site_theme():
    st.markdown(
        """
        <style>
        :root{
          --bg:#0b3d2e; --panel:#0e4b38; --sidebar:#0a2f24;
          --accent:#2ecc71; --accent2:#27ae60; --text:#e6f4ea;
        }
        .stApp { background: var(--bg); color: var(--text); }
        [data-testid="stSidebar"] { background: var(--sidebar); color: var(--text); }
        header[data-testid="stHeader"] {
          background: var(--bg);
          border-bottom: 1px solid rgba(255,255,255,0.06);
        }
        .block-container { padding-top: 2.4rem; }
        div[data-testid="stButton"] > button {
          border-radius: 12px; font-weight: 700;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )

_inject_site_theme()

if "current_app" not in st.session_state:
    st.session_state.current_app = "Scores"

st.sidebar.title("Card Score Tracker")
st.sidebar.radio("Go to", ["Scores", "History"], key="current_app")

if st.session_state.current_app == "Scores":
    from games.score_app import render_scores
    render_scores()
elif st.session_state.current_app == "History":
    from games.score_app import render_history
    render_history()
else:
    st.error(f"Unknown page: {st.session_state.current_app}")

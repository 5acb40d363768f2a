import streamlit as st

from persistence.engine import ping_db
from services.config import configure_logging, get_ranking_settings

settings = get_ranking_settings()
configure_logging(settings.log_level)

st.set_page_config(page_title="Student Achievement Rankings", layout="wide")

st.title("Student Achievement Rankings")
st.caption("Verified profiles ranked with TOPSIS, WSM, SAW or AHP")

st.session_state.setdefault("ranking_method", settings.method.value)

with st.sidebar:
    st.header("Status")
    ok = ping_db()
    st.write("DB:", "✅" if ok else "❌")
    if not ok:
        st.warning("Database not reachable. Fix DATABASE_URL then refresh.")
        st.stop()

    st.divider()
    st.subheader("Quick jump")
    if st.button("Rankings"):
        st.switch_page("pages/1_rankings.py")
    if st.button("Leaderboards"):
        st.switch_page("pages/2_leaderboards.py")

st.write("Pick a page from the sidebar. Only approved profiles are ranked.")

import plotly.express as px
import streamlit as st

from core.errors import RankingError
from persistence.engine import get_engine
from services.config import get_ranking_settings
from services.leaderboard_service import all_leaderboards, leaderboard_frame, ranking_stats
from services.ranking_service import RankingService

st.title("Leaderboards")

settings = get_ranking_settings()
service = RankingService(get_engine(), settings)

profiles, candidates = service.load_candidates()
if not profiles:
    st.info("No rankings available yet.")
    st.stop()

result = None
try:
    result = service.rank(candidates, st.session_state.get("ranking_method"))
except RankingError as e:
    st.warning(f"Overall ranking unavailable, showing CGPA order: {e}")

stats = ranking_stats(profiles)
c1, c2, c3 = st.columns(3)
c1.metric("Students", stats.total_students)
c2.metric("Average CGPA", f"{stats.avg_cgpa:.2f}")
c3.metric("Achievements", stats.total_achievements)

boards = all_leaderboards(profiles, result)
tabs = st.tabs([c.value.title() for c in boards])
for tab, ordered in zip(tabs, boards.values()):
    with tab:
        board = leaderboard_frame(ordered)
        if board.empty:
            st.info("No rankings available yet.")
            continue
        st.dataframe(board, use_container_width=True, hide_index=True)

st.divider()
fig_cgpa = px.histogram(leaderboard_frame(profiles), x="cgpa", nbins=20, title="CGPA distribution")
st.plotly_chart(fig_cgpa, use_container_width=True)

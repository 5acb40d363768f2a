import pandas as pd
import plotly.express as px
import streamlit as st

from core.errors import RankingError
from core.models import RankingMethod
from core.profiles import PROFILE_CRITERIA
from persistence.engine import get_engine
from services.config import get_ranking_settings
from services.ranking_service import RankingService

st.title("Rankings")

settings = get_ranking_settings()
service = RankingService(get_engine(), settings)

methods = [m.value for m in RankingMethod]
default_method = st.session_state.get("ranking_method", settings.method.value)
method = st.selectbox("Algorithm", options=methods, index=methods.index(default_method))
st.session_state["ranking_method"] = method

with st.expander("Criterion weights"):
    weights_df = pd.DataFrame(
        {"criterion": list(PROFILE_CRITERIA), "weight": [settings.weights.get(k, 0.0) for k in PROFILE_CRITERIA]}
    )
    edited = st.data_editor(weights_df, use_container_width=True, hide_index=True, disabled=["criterion"])
    weights = {r["criterion"]: float(r["weight"] or 0.0) for r in edited.to_dict("records")}

profiles, candidates = service.load_candidates()
ok, issues = service.validate(candidates, weights)
if not ok:
    for msg in issues:
        st.warning(msg)
    st.stop()

try:
    result = service.rank(candidates, method, weights)
except RankingError as e:
    st.error(f"Ranking calculation failed: {e}")
    st.stop()

scores_df = service.results_frame(result)
st.subheader(f"{result.method.value} ranking")
st.dataframe(scores_df[["rank", "label", "score"]], use_container_width=True, hide_index=True)

st.download_button(
    "Download Ranking CSV",
    data=scores_df.to_csv(index=False).encode("utf-8"),
    file_name=f"ranking_{result.method.value.lower()}.csv",
    mime="text/csv",
)

st.download_button(
    "Download Ranking JSON",
    data=service.results_json(result).encode("utf-8"),
    file_name=f"ranking_{result.method.value.lower()}.json",
    mime="application/json",
)

st.divider()
st.subheader("Charts")

fig_scores = px.bar(
    scores_df.sort_values("rank", ascending=True),
    x="label",
    y="score",
    hover_data=["rank"],
    title=f"{result.method.value} score by student",
)
st.plotly_chart(fig_scores, use_container_width=True)

contrib_cols = [c for c in scores_df.columns if c.startswith("contribution.") or c.startswith("weighted.")]
if contrib_cols:
    long_df = scores_df.melt(id_vars=["label"], value_vars=contrib_cols, var_name="criterion", value_name="value")
    long_df["criterion"] = long_df["criterion"].str.split(".", n=1).str[1]
    fig_contrib = px.bar(
        long_df,
        x="label",
        y="value",
        color="criterion",
        title="Weighted value per criterion",
    )
    st.plotly_chart(fig_contrib, use_container_width=True)

if "d_best" in scores_df.columns:
    fig_scatter = px.scatter(
        scores_df,
        x="d_best",
        y="d_worst",
        text="label",
        hover_data=["score"],
        title="Distance to ideal best vs ideal worst",
    )
    fig_scatter.update_traces(textposition="top center")
    st.plotly_chart(fig_scatter, use_container_width=True)

import streamlit as st

from src.quiz.domain.models import ScoreBand
from src.quiz.presentation.viewmodel import QuizViewModel


def render(vm: QuizViewModel) -> None:
    summary = vm.summary
    session = vm.session
    if summary is None or session is None:
        return

    if summary.band == ScoreBand.PERFECT:
        st.balloons()

    st.title("🏁 Finished")
    st.subheader(f"{session.topic.icon} {session.topic.title}")

    col1, col2, col3 = st.columns(3)
    col1.metric("Score", f"{summary.score} / {summary.total}")
    col2.metric("Accuracy", f"{summary.percent}%")
    col3.metric("Rating", summary.band.value)

    if summary.band in (ScoreBand.PERFECT, ScoreBand.EXCELLENT, ScoreBand.GOOD):
        st.success(summary.message)
    else:
        st.info(summary.message)

    st.markdown("---")

    if st.button("🔄 Back to Topics", type="primary", use_container_width=True):
        vm.back_to_topics()
        st.rerun()

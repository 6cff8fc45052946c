import html

import streamlit as st

from src.quiz.presentation.viewmodel import QuizViewModel


def render(vm: QuizViewModel) -> None:
    st.title("iQuiz")

    if not vm.topics:
        st.info("No quizzes available yet. Check the data URL in Settings.")
        return

    for topic in vm.topics:
        col_icon, col_text, col_go = st.columns([1, 6, 2])
        col_icon.markdown(f"## {topic.icon}")
        with col_text:
            st.markdown(
                f"<b>{html.escape(topic.title)}</b>"
                f'<div class="topic-desc">{html.escape(topic.description)}</div>',
                unsafe_allow_html=True,
            )
        if col_go.button("Start", key=f"topic_{topic.id}", use_container_width=True):
            vm.select_topic(topic.id)
            st.rerun()

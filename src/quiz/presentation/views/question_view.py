import html

import streamlit as st

from src.quiz.presentation.viewmodel import QuizViewModel
from src.quiz.presentation.views import components


def render_active(vm: QuizViewModel) -> None:
    session = vm.session
    question = vm.current_question
    if session is None or question is None:
        return

    st.subheader(f"{session.topic.icon} {session.topic.title}")
    components.render_progress(
        session.progress_text, session.current_index, session.total
    )
    st.markdown(
        f'<div class="question-text">{html.escape(question.text)}</div>',
        unsafe_allow_html=True,
    )

    choice = st.radio(
        "Answers",
        options=list(range(len(question.answers))),
        format_func=lambda i: question.answers[i],
        index=vm.selected_option,
        label_visibility="collapsed",
        key=f"answers_{session.current_index}",
    )
    if choice is not None and choice != vm.selected_option:
        vm.choose_option(choice)

    col_back, col_submit = st.columns(2)
    with col_back:
        if st.button("⬅️ Topics", use_container_width=True):
            vm.back_to_topics()
            st.rerun()
    with col_submit:
        if st.button("Submit", type="primary", use_container_width=True):
            vm.submit()
            st.rerun()


def render_feedback(vm: QuizViewModel) -> None:
    session = vm.session
    question = vm.current_question
    if session is None or question is None:
        return

    st.subheader(f"{session.topic.icon} {session.topic.title}")
    components.render_progress(
        session.progress_text, session.current_index + 1, session.total
    )
    st.markdown(
        f'<div class="question-text">{html.escape(question.text)}</div>',
        unsafe_allow_html=True,
    )

    if session.last_answer_correct:
        st.success("Correct! ✅")
    else:
        st.error("Wrong ❌")
        st.markdown(
            f"You answered: <s>{html.escape(question.answers[session.last_selection])}</s>",
            unsafe_allow_html=True,
        )
    st.markdown(
        f"Correct answer: <b>{html.escape(question.correct_answer)}</b>",
        unsafe_allow_html=True,
    )
    st.caption(f"Score so far: {session.score}/{session.current_index + 1}")

    if st.button("Next ➡️", type="primary", use_container_width=True):
        vm.next_question()
        st.rerun()

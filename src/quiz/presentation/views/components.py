import streamlit as st

from src.shared.telemetry import Telemetry


def apply_styles():
    st.markdown("""
        <style>
            .block-container { padding-top: 2rem !important; }
            .topic-desc { color: #6b7280; font-size: 0.9rem; margin-top: -0.6rem; }
            .question-text { font-size: 1.2rem; font-weight: 600; margin-bottom: 1rem; }
        </style>
    """, unsafe_allow_html=True)


def render_settings(current_url: str) -> tuple[str, bool]:
    """Sidebar settings panel. Returns (url, check_now_clicked)."""
    st.sidebar.header("⚙️ Settings")

    url = st.sidebar.text_input("Quiz data URL", value=current_url)
    check_now = st.sidebar.button("Check Now", use_container_width=True)

    with st.sidebar.expander("🕵️‍♂️ Telemetry"):
        st.caption("Trace ID: " + Telemetry.get_trace_id())

    return url.strip(), check_now


def render_messages(load_error: str | None, notice: str | None) -> None:
    if load_error:
        st.error(load_error, icon="⚠️")
    if notice:
        st.warning(notice, icon="📴")


def render_progress(progress_text: str, answered: int, total: int) -> None:
    st.caption(f"Question {progress_text}")
    st.progress(answered / total if total else 0.0)

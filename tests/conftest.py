import json

import pytest
import streamlit as st

from src.quiz.adapters.db_manager import DatabaseManager
from src.quiz.adapters.file_cache import FileDocumentCache
from src.quiz.adapters.sqlite_store import SQLitePreferenceStore
from src.quiz.domain.models import Question
from tests.factories import make_topic


class MockSessionState(dict):
    """
    Mock for st.session_state that behaves like both a dict and an object.
    """

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError as err:
            raise AttributeError(
                f"'MockSessionState' object has no attribute '{name}'"
            ) from err

    def __setattr__(self, name, value):
        self[name] = value

    def __delattr__(self, name):
        try:
            del self[name]
        except KeyError as err:
            raise AttributeError(
                f"'MockSessionState' object has no attribute '{name}'"
            ) from err


@pytest.fixture(autouse=True)
def mock_streamlit_session():
    """Every test gets a fresh, Streamlit-free session_state."""
    original_session_state = getattr(st, "session_state", None)
    st.session_state = MockSessionState()

    yield st.session_state

    st.session_state.clear()
    if original_session_state is not None:
        st.session_state = original_session_state


@pytest.fixture
def sample_question():
    return Question(
        text="What is 2+2?",
        answers=("4", "22", "An irrational number"),
        correct_index=0,
    )


@pytest.fixture
def four_question_topic():
    """Correct answers: 0, 1, 2, 0."""
    return make_topic([0, 1, 2, 0])


@pytest.fixture
def wire_document():
    return [
        {
            "title": "Mathematics",
            "desc": "Did you pass the third grade?",
            "questions": [
                {"text": "What is 2+2?", "answer": "1", "answers": ["4", "22", "5"]},
                {"text": "What is 3*3?", "answer": "3", "answers": ["6", "33", "9"]},
            ],
        },
        {
            "title": "Marvel Super Heroes",
            "desc": "Avengers, Assemble!",
            "questions": [
                {"text": "Who is Iron Man?", "answer": "2", "answers": ["Thor", "Tony Stark"]},
            ],
        },
    ]


@pytest.fixture
def wire_bytes(wire_document):
    return json.dumps(wire_document).encode("utf-8")


@pytest.fixture
def db_manager():
    manager = DatabaseManager(db_path=":memory:")
    yield manager
    manager.close()


@pytest.fixture
def preference_store(db_manager):
    return SQLitePreferenceStore(db_manager)


@pytest.fixture
def file_cache(tmp_path):
    return FileDocumentCache(str(tmp_path / "cache" / "quiz.json"))

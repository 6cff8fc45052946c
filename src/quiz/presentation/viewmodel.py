from enum import Enum

from src.fsm import QuizPhase
from src.quiz.application.service import DocumentOrigin, QuizService
from src.quiz.domain.errors import DecodeError, FetchError
from src.quiz.domain.models import Question, ScoreSummary, Topic
from src.quiz.domain.session import QuizSession
from src.quiz.presentation.state_provider import IStateProvider
from src.shared.telemetry import Telemetry


class Screen(Enum):
    TOPICS = "topics"
    QUIZ = "quiz"


class QuizViewModel:
    """
    Turns user intents into service/session calls and keeps the UI state
    (topic list, active session, pending choice, messages) in the state provider.
    """

    def __init__(self, service: QuizService, state_provider: IStateProvider):
        self.service = service
        self.state = state_provider
        self.telemetry = Telemetry("ViewModel")

    # --- Properties ---
    @property
    def screen(self) -> Screen:
        return self.state.get("screen", Screen.TOPICS)

    @property
    def topics(self) -> list[Topic]:
        return self.state.get("topics", [])

    @property
    def session(self) -> QuizSession | None:
        return self.state.get("session")

    @property
    def phase(self) -> QuizPhase | None:
        return self.session.phase if self.session else None

    @property
    def current_question(self) -> Question | None:
        if self.session is None or self.session.is_finished:
            return None
        return self.session.current_question()

    @property
    def selected_option(self) -> int | None:
        return self.state.get("selected_option")

    @property
    def load_error(self) -> str | None:
        return self.state.get("load_error")

    @property
    def notice(self) -> str | None:
        return self.state.get("notice")

    @property
    def source_url(self) -> str:
        return self.state.get("source_url") or self.service.source_url

    @property
    def summary(self) -> ScoreSummary | None:
        return self.state.get("summary")

    @property
    def has_loaded(self) -> bool:
        return self.state.get("has_loaded", False)

    # --- Actions (Traced) ---
    def refresh(self, source_url: str | None = None) -> bool:
        """
        Reloads the topic list. On failure the previous list stays and
        `load_error` explains why. Returns True when topics were replaced.
        """
        Telemetry.start_trace()
        self.dismiss_messages()
        self.state.set("has_loaded", True)

        try:
            result = self.service.load_topics(source_url)
        except (DecodeError, FetchError) as e:
            self.telemetry.log_error("Topic refresh failed", e)
            self.state.set("load_error", f"Could not load quiz: {e}")
            return False

        self.state.set("topics", result.topics)
        self.state.set("source_url", result.source_url)
        if result.origin == DocumentOrigin.CACHE:
            self.state.set("notice", result.warning)
        return True

    def select_topic(self, topic_id: str) -> None:
        Telemetry.start_trace()
        topic = next((t for t in self.topics if t.id == topic_id), None)
        if topic is None:
            raise KeyError(f"Unknown topic: {topic_id}")

        self.state.set("session", self.service.start_session(topic))
        self.state.set("selected_option", None)
        self.state.set("screen", Screen.QUIZ)

    def choose_option(self, index: int) -> None:
        self.state.set("selected_option", index)

    def submit(self) -> None:
        """No choice yet -> the session ignores it and the question stays."""
        Telemetry.start_trace()
        session = self._require_session()
        session.submit_answer(self.selected_option)

    def next_question(self) -> None:
        Telemetry.start_trace()
        session = self._require_session()
        session.advance()
        self.state.set("selected_option", None)

        if session.is_finished:
            self.state.set("summary", self.service.finish_session(session))

    def back_to_topics(self) -> None:
        Telemetry.start_trace()
        self.state.delete("session")
        self.state.delete("summary")
        self.state.set("selected_option", None)
        self.state.set("screen", Screen.TOPICS)

    def dismiss_messages(self) -> None:
        self.state.delete("load_error")
        self.state.delete("notice")

    def _require_session(self) -> QuizSession:
        if self.session is None:
            raise RuntimeError("No quiz in progress")
        return self.session

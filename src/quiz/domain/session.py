from src.fsm import QuizAction, QuizPhase, QuizStateMachine
from src.quiz.domain.errors import (
    IndexOutOfRangeError,
    SessionFinishedError,
    SessionInProgressError,
)
from src.quiz.domain.models import Question, ScoreBand, ScoreSummary, Topic


class QuizSession:
    """
    One attempt at a topic's questions.

    Mutated only through `submit_answer` and `advance`; everything else is a read.
    Invariants, checked in tests after every call:
        score <= len(recorded_answers) <= total
        phase is FINISHED  <=>  current_index == total
    """

    def __init__(self, topic: Topic) -> None:
        self._topic = topic
        self._fsm = QuizStateMachine(initial_state=QuizPhase.AWAITING_ANSWER)
        self._current_index = 0
        self._recorded_answers: list[int] = []
        self._score = 0

    # --- Properties ---
    @property
    def topic(self) -> Topic:
        return self._topic

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def recorded_answers(self) -> tuple[int, ...]:
        return tuple(self._recorded_answers)

    @property
    def score(self) -> int:
        return self._score

    @property
    def phase(self) -> QuizPhase:
        return self._fsm.current_state

    @property
    def total(self) -> int:
        return len(self._topic.questions)

    @property
    def is_finished(self) -> bool:
        return self.phase == QuizPhase.FINISHED

    @property
    def last_selection(self) -> int | None:
        return self._recorded_answers[-1] if self._recorded_answers else None

    @property
    def last_answer_correct(self) -> bool | None:
        if not self._recorded_answers:
            return None
        return self.is_correct(len(self._recorded_answers) - 1)

    @property
    def progress_text(self) -> str:
        shown = min(self.current_index + 1, self.total)
        return f"{shown}/{self.total}"

    # --- Queries ---
    def current_question(self) -> Question:
        if self.is_finished:
            raise SessionFinishedError(
                f"All {self.total} questions of '{self._topic.title}' are answered"
            )
        return self._topic.questions[self._current_index]

    def is_correct(self, for_index: int) -> bool:
        if not 0 <= for_index < len(self._recorded_answers):
            raise IndexOutOfRangeError(f"Question {for_index} has no recorded answer")
        question = self._topic.questions[for_index]
        return self._recorded_answers[for_index] == question.correct_index

    def final_score_summary(self) -> ScoreSummary:
        if not self.is_finished:
            raise SessionInProgressError(
                f"Quiz still running ({self.current_index}/{self.total} answered)"
            )
        return ScoreSummary(
            score=self.score,
            total=self.total,
            band=ScoreBand.for_fraction(self.score / self.total),
        )

    # --- Transitions ---
    def submit_answer(self, selected_index: int | None) -> None:
        """
        Records the selection and scores it.
        None means "Next" was pressed with nothing chosen: nothing happens.
        """
        if not self._fsm.can(QuizAction.SUBMIT_ANSWER):
            # Let the FSM raise InvalidTransitionError
            self._fsm.transition(QuizAction.SUBMIT_ANSWER)

        if selected_index is None:
            return

        question = self.current_question()
        if not 0 <= selected_index < len(question.answers):
            raise IndexOutOfRangeError(
                f"Answer {selected_index} outside 0..{len(question.answers) - 1}"
            )

        self._fsm.transition(QuizAction.SUBMIT_ANSWER)
        self._recorded_answers.append(selected_index)
        if selected_index == question.correct_index:
            self._score += 1

    def advance(self) -> None:
        is_last = self.current_index + 1 == self.total
        self._fsm.transition(
            QuizAction.FINISH_QUIZ if is_last else QuizAction.NEXT_QUESTION
        )
        self._current_index += 1

import pytest

from src.fsm import QuizAction, QuizPhase, QuizStateMachine
from src.quiz.domain.errors import InvalidTransitionError


class TestQuizStateMachine:
    def test_starts_awaiting_answer(self):
        assert QuizStateMachine().current_state == QuizPhase.AWAITING_ANSWER

    def test_submit_then_next(self):
        fsm = QuizStateMachine()
        assert fsm.transition(QuizAction.SUBMIT_ANSWER) == QuizPhase.SHOWING_FEEDBACK
        assert fsm.transition(QuizAction.NEXT_QUESTION) == QuizPhase.AWAITING_ANSWER

    def test_submit_then_finish(self):
        fsm = QuizStateMachine()
        fsm.transition(QuizAction.SUBMIT_ANSWER)
        assert fsm.transition(QuizAction.FINISH_QUIZ) == QuizPhase.FINISHED

    @pytest.mark.parametrize(
        "state, action",
        [
            (QuizPhase.AWAITING_ANSWER, QuizAction.NEXT_QUESTION),
            (QuizPhase.AWAITING_ANSWER, QuizAction.FINISH_QUIZ),
            (QuizPhase.SHOWING_FEEDBACK, QuizAction.SUBMIT_ANSWER),
            (QuizPhase.FINISHED, QuizAction.SUBMIT_ANSWER),
            (QuizPhase.FINISHED, QuizAction.NEXT_QUESTION),
            (QuizPhase.FINISHED, QuizAction.FINISH_QUIZ),
        ],
    )
    def test_illegal_transitions_raise_and_keep_state(self, state, action):
        fsm = QuizStateMachine(initial_state=state)

        assert fsm.can(action) is False
        with pytest.raises(InvalidTransitionError):
            fsm.transition(action)
        assert fsm.current_state == state

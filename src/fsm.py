import logging
from enum import Enum, auto

from src.quiz.domain.errors import InvalidTransitionError

logger = logging.getLogger(__name__)


class QuizPhase(Enum):
    AWAITING_ANSWER = auto()  # Question shown, waiting for a selection
    SHOWING_FEEDBACK = auto()  # Answer recorded, showing right/wrong
    FINISHED = auto()  # All questions answered (terminal)


class QuizAction(Enum):
    SUBMIT_ANSWER = auto()
    NEXT_QUESTION = auto()
    FINISH_QUIZ = auto()


class QuizStateMachine:
    """
    Pure FSM Logic.
    Knows which phase follows which action; knows nothing about questions or scores.
    """

    def __init__(self, initial_state: QuizPhase = QuizPhase.AWAITING_ANSWER):
        self._state = initial_state

    @property
    def current_state(self) -> QuizPhase:
        return self._state

    def can(self, action: QuizAction) -> bool:
        return self._next_state(action) is not None

    def transition(self, action: QuizAction) -> QuizPhase:
        """
        Applies the action or raises InvalidTransitionError, leaving the phase untouched.
        """
        previous = self._state
        target = self._next_state(action)

        if target is None:
            logger.error(f"⛔ INVALID TRANSITION: {previous.name} + {action.name}")
            raise InvalidTransitionError(
                f"Cannot {action.name.lower()} while {previous.name.lower()}"
            )

        self._state = target
        logger.debug(f"🔄 FSM: {previous.name} --[{action.name}]--> {target.name}")
        return target

    def _next_state(self, action: QuizAction) -> QuizPhase | None:
        # The Transition Table
        match (self._state, action):
            # AWAITING -> FEEDBACK
            case (QuizPhase.AWAITING_ANSWER, QuizAction.SUBMIT_ANSWER):
                return QuizPhase.SHOWING_FEEDBACK

            # FEEDBACK -> AWAITING (Next) or FINISHED (last question)
            case (QuizPhase.SHOWING_FEEDBACK, QuizAction.NEXT_QUESTION):
                return QuizPhase.AWAITING_ANSWER
            case (QuizPhase.SHOWING_FEEDBACK, QuizAction.FINISH_QUIZ):
                return QuizPhase.FINISHED

            case _:
                return None

class QuizError(Exception):
    """Base class for everything the quiz core raises."""


# --- Document decoding (user-visible: "could not load quiz") ---
class DecodeError(QuizError):
    pass


class MalformedDocumentError(DecodeError):
    """Payload is not well-formed JSON or does not have the expected shape."""


class SchemaViolationError(DecodeError):
    """Payload is well-formed but breaks a quiz rule (empty topic, bad answer key...)."""


# --- Caller contract violations (programming errors) ---
class InputError(QuizError):
    pass


class IndexOutOfRangeError(InputError):
    pass


class StateError(QuizError):
    pass


class InvalidTransitionError(StateError):
    pass


class SessionFinishedError(StateError):
    pass


class SessionInProgressError(StateError):
    pass


# --- Data provider ---
class FetchError(QuizError):
    def __init__(self, message: str, source_id: str | None = None) -> None:
        super().__init__(message)
        self.source_id = source_id


class NetworkUnavailableError(FetchError):
    """The source could not be reached at all; a cached copy may stand in."""

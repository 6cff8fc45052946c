"""
Decodes the remote quiz document into validated Topic/Question values.

Wire format::

    [ { "title": str, "desc": str,
        "questions": [ { "text": str, "answer": "1", "answers": [str, ...] } ] } ]

The 1-based "answer" digit string becomes a 0-based `correct_index` here,
once, so nothing downstream ever parses it again.
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from src.config import TopicIcon
from src.quiz.domain.errors import MalformedDocumentError, SchemaViolationError
from src.quiz.domain.models import Question, Topic


# --- Wire Models (shape only, no quiz rules) ---
class WireQuestion(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str
    answer: str
    answers: list[str]


class WireTopic(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: str
    description: str = Field("", alias="desc")
    questions: list[WireQuestion]


_DOCUMENT = TypeAdapter(list[WireTopic])


def parse_document(raw: bytes | str) -> list[Topic]:
    """
    All or nothing: either every topic validates or the call raises.

    Raises:
        MalformedDocumentError: not JSON, not UTF-8, or the wrong shape.
        SchemaViolationError: an empty topic, fewer than two answers,
            or an answer key that is not a digit string in range.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MalformedDocumentError(f"Document is not UTF-8: {e}") from e

    try:
        wire_topics = _DOCUMENT.validate_json(raw)
    except ValidationError as e:
        raise MalformedDocumentError(_describe(e)) from e

    return [_to_topic(t_idx, wt) for t_idx, wt in enumerate(wire_topics, start=1)]


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    return f"{first.get('msg', 'invalid document')} at {location}"


def _to_topic(t_idx: int, wire: WireTopic) -> Topic:
    if not wire.questions:
        raise SchemaViolationError(f"Topic {t_idx} ('{wire.title}') has no questions")

    questions = tuple(
        _to_question(t_idx, q_idx, wq)
        for q_idx, wq in enumerate(wire.questions, start=1)
    )
    return Topic(
        id=str(uuid.uuid4()),
        title=wire.title,
        description=wire.description,
        questions=questions,
        icon=TopicIcon.get_icon(wire.title),
    )


def _to_question(t_idx: int, q_idx: int, wire: WireQuestion) -> Question:
    where = f"topic {t_idx}, question {q_idx}"

    if len(wire.answers) < 2:
        raise SchemaViolationError(
            f"{where}: needs at least 2 answers, got {len(wire.answers)}"
        )

    key = wire.answer.strip()
    # isdecimal() rejects '+1', '-1', '1.0' and superscripts
    if not key.isdecimal():
        raise SchemaViolationError(
            f"{where}: answer key {wire.answer!r} is not a 1-based number"
        )

    position = int(key)
    if not 1 <= position <= len(wire.answers):
        raise SchemaViolationError(
            f"{where}: answer key {position} outside 1..{len(wire.answers)}"
        )

    return Question(
        text=wire.text, answers=tuple(wire.answers), correct_index=position - 1
    )

"""
Parsing and validation of incoming quiz representations.

Create and update requests carry the complete quiz: scalars plus the
full question/option tree. An identifier of 0 (or a missing one) marks
an entity that does not exist yet.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from factify.quiz.models import AnswerOption, Question, Quiz

NEW_ID = 0


@dataclass
class OptionPayload:
    option_id: int
    text: str
    is_correct: bool


@dataclass
class QuestionPayload:
    question_id: int
    question_text: str
    points: int
    options: List[OptionPayload] = field(default_factory=list)


@dataclass
class QuizPayload:
    quiz_id: Optional[int]
    title: str
    description: Optional[str]
    is_public: bool
    questions: List[QuestionPayload] = field(default_factory=list)


def is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_id(value, key: str, errors: dict) -> int:
    if value is None:
        return NEW_ID
    if not is_int(value) or value < 0:
        errors.setdefault(key, []).append("Identifier must be a non-negative integer")
        return NEW_ID
    return value


def _parse_text(value, key: str, label: str, max_length: int, errors: dict) -> str:
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        errors.setdefault(key, []).append(f"{label} is required")
    elif len(text) > max_length:
        errors.setdefault(key, []).append(f"{label} must be at most {max_length} characters")
    return text


def _parse_option(raw, prefix: str, errors: dict) -> OptionPayload:
    if not isinstance(raw, dict):
        errors.setdefault(prefix, []).append("Option must be an object")
        return OptionPayload(NEW_ID, "", False)

    option_id = _parse_id(raw.get("optionId"), f"{prefix}.optionId", errors)
    text = _parse_text(raw.get("text"), f"{prefix}.text", "Option text",
                       AnswerOption.TEXT_MAX_LENGTH, errors)
    is_correct = raw.get("isCorrect", False)
    if not isinstance(is_correct, bool):
        errors.setdefault(f"{prefix}.isCorrect", []).append("isCorrect must be a boolean")
        is_correct = False
    return OptionPayload(option_id, text, is_correct)


def _parse_question(raw, prefix: str, errors: dict) -> QuestionPayload:
    if not isinstance(raw, dict):
        errors.setdefault(prefix, []).append("Question must be an object")
        return QuestionPayload(NEW_ID, "", 1)

    question_id = _parse_id(raw.get("questionId"), f"{prefix}.questionId", errors)
    text = _parse_text(raw.get("questionText"), f"{prefix}.questionText", "Question text",
                       Question.TEXT_MAX_LENGTH, errors)

    points = raw.get("points", 1)
    if points is None:
        points = 1
    if not is_int(points) or points < 1:
        errors.setdefault(f"{prefix}.points", []).append("Points must be a positive integer")
        points = 1

    raw_options = raw.get("options")
    if not isinstance(raw_options, list) or not raw_options:
        errors.setdefault(f"{prefix}.options", []).append("At least one answer option is required")
        raw_options = []

    options = [_parse_option(o, f"{prefix}.options[{i}]", errors) for i, o in enumerate(raw_options)]
    if options and not any(o.is_correct for o in options):
        errors.setdefault(f"{prefix}.options", []).append("At least one option must be marked correct")

    seen = [o.option_id for o in options if o.option_id != NEW_ID]
    if len(seen) != len(set(seen)):
        errors.setdefault(f"{prefix}.options", []).append("Option identifiers must be unique")

    return QuestionPayload(question_id, text, points, options)


def parse_quiz_payload(data) -> Tuple[Optional[QuizPayload], dict]:
    """
    Turn a request body into a QuizPayload.

    Returns (payload, errors). ``payload`` is None whenever ``errors``
    is non-empty; errors map a field path to its messages.
    """
    errors: dict = {}
    if not isinstance(data, dict):
        return None, {"body": ["Request body must be a JSON object"]}

    quiz_id = data.get("quizId")
    if quiz_id is not None and not is_int(quiz_id):
        errors.setdefault("quizId", []).append("quizId must be an integer")
        quiz_id = None

    title = _parse_text(data.get("title"), "title", "Quiz title", Quiz.TITLE_MAX_LENGTH, errors)

    description = data.get("description")
    if description is not None and not isinstance(description, str):
        errors.setdefault("description", []).append("Description must be a string")
        description = None
    description = (description or "").strip() or None
    if description and len(description) > Quiz.DESCRIPTION_MAX_LENGTH:
        errors.setdefault("description", []).append(
            f"Description must be at most {Quiz.DESCRIPTION_MAX_LENGTH} characters"
        )

    is_public = data.get("isPublic", False)
    if not isinstance(is_public, bool):
        errors.setdefault("isPublic", []).append("isPublic must be a boolean")
        is_public = False

    raw_questions = data.get("questions", [])
    if raw_questions is None:
        raw_questions = []
    if not isinstance(raw_questions, list):
        errors.setdefault("questions", []).append("questions must be a list")
        raw_questions = []

    questions = [_parse_question(q, f"questions[{i}]", errors) for i, q in enumerate(raw_questions)]

    seen = [q.question_id for q in questions if q.question_id != NEW_ID]
    if len(seen) != len(set(seen)):
        errors.setdefault("questions", []).append("Question identifiers must be unique")

    if errors:
        return None, errors
    return QuizPayload(quiz_id, title, description, is_public, questions), {}

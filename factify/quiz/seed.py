from flask import current_app

from factify import db
from factify.quiz.models import Quiz
from factify.quiz.payloads import parse_quiz_payload
from factify.quiz.repository import QuizRepository

DEMO_QUIZ = {
    "title": "Demo Quiz",
    "description": "A sample quiz to test functionality.",
    "isPublic": True,
    "questions": [
        {
            "questionText": "What is 2 + 2?",
            "points": 1,
            "options": [
                {"text": "3", "isCorrect": False},
                {"text": "4", "isCorrect": True},
                {"text": "5", "isCorrect": False},
            ],
        }
    ],
}


def seed_demo_quiz() -> bool:
    """Insert the public demo quiz when the store has no quizzes. Returns True if seeded."""
    if db.session.query(Quiz.id).first() is not None:
        return False

    payload, errors = parse_quiz_payload(DEMO_QUIZ)
    if errors:
        raise ValueError(f"Invalid demo quiz definition: {errors}")

    quiz = QuizRepository().add_quiz(payload, owner_id=None)
    current_app.logger.info(f"Seeded demo quiz {quiz.id}")
    return True

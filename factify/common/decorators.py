from functools import wraps

from flask import current_app, jsonify, request
from flask_login import current_user
from sqlalchemy.exc import SQLAlchemyError

from factify import db
from factify.quiz.repository import QuizRepository
from factify.security import SecurityLogger


def quiz_owner_required(f):
    """
    Decorator that loads the quiz named by ``quiz_id`` and requires the
    authenticated user to own it. The view receives the Quiz instead of
    the id. Apply below ``login_required``.
    """
    @wraps(f)
    def decorated_function(quiz_id, *args, **kwargs):
        quiz = QuizRepository().get_quiz(quiz_id)
        if quiz is None:
            return jsonify({'message': 'Quiz not found'}), 404
        if not quiz.is_owned_by(current_user.id):
            SecurityLogger.log_forbidden(f"{request.method} quiz {quiz_id}", current_user.id)
            return jsonify({'message': 'You do not own this quiz'}), 403
        return f(quiz, *args, **kwargs)
    return decorated_function


def handle_db_errors(action: str):
    """Decorator that turns database failures into a logged, generic 500."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except SQLAlchemyError:
                db.session.rollback()
                current_app.logger.exception(f"Database error while trying to {action}")
                return jsonify({'message': f'An error occurred while trying to {action}'}), 500
        return decorated_function
    return decorator

"""
Quiz module for building, sharing and taking quizzes.

``quiz_bp`` serves quiz management and the public listing;
``take_quiz_bp`` serves quizzes for taking and grades submissions.
"""
from flask import Blueprint

quiz_bp = Blueprint('quiz', __name__, url_prefix='/api/quiz')
take_quiz_bp = Blueprint('take_quiz', __name__, url_prefix='/api/takequiz')

from factify.quiz import routes, take_routes  # noqa: E402,F401

"""
Routes for taking quizzes.

Anyone with a quiz's id can take it: the quiz is served without its
correctness flags and submissions are graded server-side.
"""
from flask import current_app, jsonify, request

from factify.common.decorators import handle_db_errors
from factify.quiz import take_quiz_bp
from factify.quiz.grading import grade_submission
from factify.quiz.payloads import is_int
from factify.quiz.repository import QuizRepository


@take_quiz_bp.route('/<int:quiz_id>', methods=['GET'])
@handle_db_errors("load the quiz")
def get_quiz_for_taking(quiz_id):
    quiz = QuizRepository().get_quiz(quiz_id)
    if quiz is None:
        return jsonify({'message': 'Quiz not found'}), 404
    return jsonify(quiz.to_dict(include_answers=False)), 200


@take_quiz_bp.route('/submit', methods=['POST'])
@handle_db_errors("grade the submission")
def submit_answers():
    """
    Grade a submission.

    Request body:
    {
        "quizId": 1,
        "selectedAnswers": [3, 7]  // option ids, from any question
    }
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({
            'message': 'Validation failed',
            'errors': {'body': ['Request body must be a JSON object']},
        }), 400
    errors = {}

    quiz_id = data.get('quizId')
    if not is_int(quiz_id):
        errors['quizId'] = ['quizId is required and must be an integer']

    selected = data.get('selectedAnswers', [])
    if selected is None:
        selected = []
    if not isinstance(selected, list) or not all(is_int(s) for s in selected):
        errors['selectedAnswers'] = ['selectedAnswers must be a list of option ids']

    if errors:
        return jsonify({'message': 'Validation failed', 'errors': errors}), 400

    repository = QuizRepository()
    quiz = repository.get_quiz(quiz_id)
    if quiz is None:
        return jsonify({'message': 'Quiz not found'}), 404

    result = grade_submission(quiz, selected)
    repository.touch(quiz)

    current_app.logger.info(
        f"Quiz {quiz_id} submitted: score={result.score}/{result.total}, "
        f"points={result.points}/{result.max_points}"
    )
    return jsonify(result.to_dict()), 200

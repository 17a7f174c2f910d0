"""
Routes for quiz management.

Authenticated users can:
- List, create, update and delete their own quizzes
- Duplicate any quiz into their own collection

Anyone can view a quiz by id or browse the public quizzes.
"""
from flask import current_app, jsonify, request
from flask_login import login_required, current_user

from factify.common.decorators import handle_db_errors, quiz_owner_required
from factify.quiz import quiz_bp
from factify.quiz.payloads import parse_quiz_payload
from factify.quiz.repository import QuizRepository, ReconciliationError


def _validation_error(errors: dict):
    return jsonify({'message': 'Validation failed', 'errors': errors}), 400


@quiz_bp.route('', methods=['GET'])
@login_required
@handle_db_errors("list quizzes")
def list_quizzes():
    """List the quizzes owned by the caller, newest first."""
    quizzes = QuizRepository().get_quizzes_by_user(current_user.id)
    return jsonify([q.to_dict() for q in quizzes]), 200


@quiz_bp.route('/<int:quiz_id>', methods=['GET'])
@handle_db_errors("load the quiz")
def get_quiz(quiz_id):
    quiz = QuizRepository().get_quiz(quiz_id)
    if quiz is None:
        return jsonify({'message': 'Quiz not found'}), 404
    return jsonify(quiz.to_dict()), 200


@quiz_bp.route('/public', methods=['GET'])
@handle_db_errors("list public quizzes")
def list_public_quizzes():
    quizzes = QuizRepository().get_public_quizzes()
    return jsonify([q.to_dict() for q in quizzes]), 200


@quiz_bp.route('/public/<int:quiz_id>', methods=['GET'])
@handle_db_errors("load the quiz")
def get_public_quiz(quiz_id):
    quiz = QuizRepository().get_quiz(quiz_id)
    if quiz is None:
        return jsonify({'message': 'Quiz not found'}), 404
    if not quiz.is_public:
        return jsonify({'message': 'This quiz is not public'}), 403
    return jsonify(quiz.to_dict()), 200


@quiz_bp.route('', methods=['POST'])
@login_required
@handle_db_errors("create the quiz")
def create_quiz():
    """
    Create a quiz owned by the caller.

    Request body:
    {
        "title": "Capitals",
        "description": "Optional description",
        "isPublic": false,
        "questions": [
            {"questionText": "...", "points": 1,
             "options": [{"text": "...", "isCorrect": true}, ...]}
        ]
    }
    """
    payload, errors = parse_quiz_payload(request.get_json(silent=True))
    if errors:
        return _validation_error(errors)

    quiz = QuizRepository().add_quiz(payload, owner_id=current_user.id)
    current_app.logger.info(f"Quiz {quiz.id} created by user {current_user.id}")

    response = jsonify(quiz.to_dict())
    response.headers['Location'] = f"{quiz_bp.url_prefix}/{quiz.id}"
    return response, 201


@quiz_bp.route('/<int:quiz_id>', methods=['PUT'])
@login_required
@handle_db_errors("update the quiz")
@quiz_owner_required
def update_quiz(quiz):
    """Replace the quiz with the complete representation in the body."""
    payload, errors = parse_quiz_payload(request.get_json(silent=True))
    if errors:
        return _validation_error(errors)
    if payload.quiz_id is not None and payload.quiz_id != quiz.id:
        return jsonify({'message': 'Quiz ID mismatch.'}), 400

    try:
        QuizRepository().update_quiz(quiz, payload)
    except ReconciliationError as e:
        current_app.logger.info(f"Rejected update of quiz {quiz.id}: {e}")
        return jsonify(e.to_dict()), 400

    current_app.logger.info(f"Quiz {quiz.id} updated by user {current_user.id}")
    return jsonify(quiz.to_dict()), 200


@quiz_bp.route('/<int:quiz_id>', methods=['DELETE'])
@login_required
@handle_db_errors("delete the quiz")
@quiz_owner_required
def delete_quiz(quiz):
    quiz_id = quiz.id
    QuizRepository().delete_quiz(quiz)
    current_app.logger.info(f"Quiz {quiz_id} deleted by user {current_user.id}")
    return '', 204


@quiz_bp.route('/<int:quiz_id>/duplicate', methods=['POST'])
@login_required
@handle_db_errors("duplicate the quiz")
def duplicate_quiz(quiz_id):
    """Copy a quiz, with all its questions and options, into the caller's collection."""
    repository = QuizRepository()
    source = repository.get_quiz(quiz_id)
    if source is None:
        return jsonify({'message': 'Quiz not found'}), 404

    copy = repository.duplicate_quiz(source, owner_id=current_user.id)
    current_app.logger.info(f"Quiz {quiz_id} duplicated as {copy.id} by user {current_user.id}")

    response = jsonify(copy.to_dict())
    response.headers['Location'] = f"{quiz_bp.url_prefix}/{copy.id}"
    return response, 201

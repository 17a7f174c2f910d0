from flask import current_app, jsonify, request
from flask_login import login_required, current_user
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from factify import db
from factify.auth import account_bp
from factify.auth.models import User
from factify.auth.tokens import generate_jwt_token
from factify.auth.utils import (
    hash_password,
    validate_forgot_password_request,
    validate_login_request,
    validate_register_request,
    verify_password,
)
from factify.security import SecurityLogger

INVALID_CREDENTIALS = "Invalid email or password"
FORGOT_PASSWORD_MESSAGE = (
    "If an account exists with this email, password reset instructions have been sent."
)


def _auth_response(user: User):
    return jsonify({
        "userId": user.id,
        "username": user.username,
        "email": user.email,
        "token": generate_jwt_token(user),
    }), 200


@account_bp.route("/register", methods=["POST"])
def register():
    data = request.get_json(silent=True) or {}
    values, errors = validate_register_request(data)
    if errors:
        return jsonify({"message": "Validation failed", "errors": errors}), 400

    email, username = values["email"], values["username"]

    try:
        if db.session.query(User.id).filter_by(email=email).first():
            SecurityLogger.log_rejected_registration(email, "email in use")
            return jsonify({"message": "Email already registered"}), 400

        if db.session.query(User.id).filter_by(username=username).first():
            SecurityLogger.log_rejected_registration(email, "username in use")
            return jsonify({"message": "Username already taken"}), 400

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(values["password"]),
        )
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        # A concurrent registration won the unique constraint
        db.session.rollback()
        SecurityLogger.log_rejected_registration(email, "unique constraint")
        return jsonify({"message": "Email or username already registered"}), 400
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error while registering user")
        return jsonify({"message": "An error occurred during registration"}), 500

    SecurityLogger.log_registration(user.id, user.email)
    return _auth_response(user)


@account_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True) or {}
    values, errors = validate_login_request(data)
    if errors:
        return jsonify({"message": "Validation failed", "errors": errors}), 400

    email = values["email"]
    try:
        user = User.query.filter_by(email=email).first()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error during login")
        return jsonify({"message": "An error occurred during login"}), 500

    # Same response for unknown email and wrong password
    if not user:
        SecurityLogger.log_failed_login(email, "unknown email")
        return jsonify({"message": INVALID_CREDENTIALS}), 401
    if not verify_password(values["password"], user.password_hash):
        SecurityLogger.log_failed_login(email, "password mismatch")
        return jsonify({"message": INVALID_CREDENTIALS}), 401

    SecurityLogger.log_successful_login(user.id, user.email)
    return _auth_response(user)


@account_bp.route("/forgot-password", methods=["POST"])
def forgot_password():
    """
    Acknowledge a password reset request.
    The response never reveals whether the email belongs to an account.
    """
    data = request.get_json(silent=True) or {}
    values, errors = validate_forgot_password_request(data)
    if errors:
        return jsonify({"message": "Validation failed", "errors": errors}), 400

    email = values["email"]
    try:
        known = db.session.query(User.id).filter_by(email=email).first() is not None
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error while handling forgot-password request")
        known = False

    SecurityLogger.log_password_reset_request(email, known)
    return jsonify({"message": FORGOT_PASSWORD_MESSAGE}), 200


@account_bp.route("/me", methods=["GET"])
@login_required
def me():
    """Return the account behind the bearer token."""
    return jsonify(current_user.to_dict()), 200

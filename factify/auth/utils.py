import re

from flask import current_app
from passlib.hash import bcrypt

from factify.security import PasswordValidator


EMAIL_REGEX = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
USERNAME_REGEX = re.compile(r"^[A-Za-z0-9_]+$")


def _truncate_password(plain_password: str) -> str:
    """Helper to consistently truncate password to its first 72 UTF-8 bytes."""
    # Encode to bytes, take the first 72 bytes, and decode back to a string,
    # ignoring any incomplete multi-byte characters at the truncation point.
    password_bytes = plain_password.encode('utf-8')[:72]
    return password_bytes.decode('utf-8', errors='ignore')


def hash_password(plain_password: str) -> str:
    """
    Hash password using bcrypt with the configured work factor. It is
    truncated to the first 72 bytes of its UTF-8 encoding before hashing.
    """
    rounds = current_app.config.get("BCRYPT_ROUNDS", 12)
    truncated = _truncate_password(plain_password)
    return bcrypt.using(rounds=rounds).hash(truncated)


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Verify a password against a hash, using the same truncation as hash_password."""
    truncated = _truncate_password(plain_password)
    try:
        return bcrypt.verify(truncated, password_hash)
    except (ValueError, TypeError):
        # Malformed or foreign hash format
        return False


def is_valid_email(email: str) -> bool:
    return bool(email and EMAIL_REGEX.match(email))


def _add(errors: dict, field: str, message: str) -> None:
    errors.setdefault(field, []).append(message)


def _body_errors(data) -> dict:
    if not isinstance(data, dict):
        return {"body": ["Request body must be a JSON object"]}
    return {}


def _string_field(data: dict, field: str, errors: dict) -> str:
    """Read ``field`` as a string; a missing value reads as ''."""
    value = data.get(field)
    if value is None:
        return ""
    if not isinstance(value, str):
        _add(errors, field, f"{field.capitalize()} must be a string")
        return ""
    return value


def _check_email(email: str, errors: dict) -> None:
    if "email" in errors:
        return
    if not email:
        _add(errors, "email", "Email is required")
    elif not is_valid_email(email):
        _add(errors, "email", "Email must be a valid email address")


def validate_register_request(data: dict) -> tuple[dict, dict]:
    """
    Validate a registration payload.
    Returns (cleaned_values, field_errors); every failing rule is reported.
    """
    errors = _body_errors(data)
    if errors:
        return {}, errors

    cfg = current_app.config
    email = _string_field(data, "email", errors).strip().lower()
    username = _string_field(data, "username", errors).strip()
    password = _string_field(data, "password", errors)

    _check_email(email, errors)

    min_len, max_len = cfg["USERNAME_MIN_LENGTH"], cfg["USERNAME_MAX_LENGTH"]
    if "username" not in errors and not username:
        _add(errors, "username", "Username is required")
    elif username:
        if not (min_len <= len(username) <= max_len):
            _add(errors, "username", f"Username must be between {min_len} and {max_len} characters")
        if not USERNAME_REGEX.match(username):
            _add(errors, "username", "Username may only contain letters, numbers and underscores")

    if "password" not in errors:
        ok, password_errors = PasswordValidator.from_config(cfg).validate(password)
        if not ok:
            errors["password"] = password_errors

    return {"email": email, "username": username, "password": password}, errors


def validate_login_request(data: dict) -> tuple[dict, dict]:
    errors = _body_errors(data)
    if errors:
        return {}, errors

    email = _string_field(data, "email", errors).strip().lower()
    password = _string_field(data, "password", errors)

    _check_email(email, errors)
    if "password" not in errors and not password:
        _add(errors, "password", "Password is required")

    return {"email": email, "password": password}, errors


def validate_forgot_password_request(data: dict) -> tuple[dict, dict]:
    errors = _body_errors(data)
    if errors:
        return {}, errors

    email = _string_field(data, "email", errors).strip().lower()
    _check_email(email, errors)

    return {"email": email}, errors

"""
Security logging module.

This module provides specialized logging for security events
such as failed logins, invalid tokens and ownership violations.
"""

from flask import request, current_app
from datetime import datetime, timezone


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SecurityLogger:
    """
    Security event logger.

    Logs security-related events for monitoring and auditing.
    """

    @staticmethod
    def log_failed_login(email: str, reason: str = "Invalid credentials"):
        """
        Log a failed login attempt.

        Args:
            email: Email address used in login attempt
            reason: Reason for failure (never sent to the client)
        """
        current_app.logger.warning(
            f"SECURITY: Failed login attempt - Email: {email}, "
            f"IP: {request.remote_addr}, Reason: {reason}, "
            f"Time: {_now()}"
        )

    @staticmethod
    def log_successful_login(user_id: int, email: str):
        current_app.logger.info(
            f"SECURITY: Successful login - User ID: {user_id}, "
            f"Email: {email}, IP: {request.remote_addr}, "
            f"Time: {_now()}"
        )

    @staticmethod
    def log_registration(user_id: int, email: str):
        current_app.logger.info(
            f"SECURITY: New user registered - User ID: {user_id}, "
            f"Email: {email}, IP: {request.remote_addr}, "
            f"Time: {_now()}"
        )

    @staticmethod
    def log_rejected_registration(email: str, reason: str):
        current_app.logger.info(
            f"SECURITY: Registration rejected - Email: {email}, "
            f"IP: {request.remote_addr}, Reason: {reason}, "
            f"Time: {_now()}"
        )

    @staticmethod
    def log_invalid_token(path: str):
        """
        Log a bearer token that failed verification.

        Args:
            path: Request path the token was presented to
        """
        current_app.logger.warning(
            f"SECURITY: Invalid or expired token - Path: {path}, "
            f"IP: {request.remote_addr}, Time: {_now()}"
        )

    @staticmethod
    def log_forbidden(resource: str, user_id: int):
        """
        Log an attempt to modify a resource the caller does not own.

        Args:
            resource: Resource that was accessed
            user_id: Authenticated user ID
        """
        current_app.logger.warning(
            f"SECURITY: Forbidden access - User ID: {user_id}, "
            f"Resource: {resource}, IP: {request.remote_addr}, "
            f"Time: {_now()}"
        )

    @staticmethod
    def log_password_reset_request(email: str, known: bool):
        status = "known account" if known else "unknown account"
        current_app.logger.info(
            f"SECURITY: Password reset requested - Email: {email} ({status}), "
            f"IP: {request.remote_addr}, Time: {_now()}"
        )

"""
Password strength validation module.

This module provides password composition checks applied at registration.
"""

import re
from typing import List, Tuple


class PasswordValidator:
    """
    Password strength validator.

    A password needs a minimum length, an uppercase letter and a digit.
    Every rule it breaks is reported, not just the first one.
    """

    def __init__(self, min_length: int = 8):
        """
        Initialize password validator with requirements.

        Args:
            min_length: Minimum password length
        """
        self.min_length = min_length

    @classmethod
    def from_config(cls, app_config) -> "PasswordValidator":
        return cls(min_length=app_config.get("MIN_PASSWORD_LENGTH", 8))

    def validate(self, password: str) -> Tuple[bool, List[str]]:
        """
        Validate password strength.

        Args:
            password: Password to validate

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        if not password or not isinstance(password, str):
            return False, ['Password is required']

        errors = []

        if len(password) < self.min_length:
            errors.append(f"Password must be at least {self.min_length} characters long")

        if not re.search(r'[A-Z]', password):
            errors.append("Password must contain at least one uppercase letter")

        if not re.search(r'\d', password):
            errors.append("Password must contain at least one number")

        return len(errors) == 0, errors

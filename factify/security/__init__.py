"""
Security module for the application.

This module provides the API's security features:
- Password strength validation
- Security headers
- Security logging
"""

from .password_validator import PasswordValidator
from .security_headers import SecurityHeaders
from .security_logger import SecurityLogger
from .security_init import init_security

__all__ = [
    'PasswordValidator',
    'SecurityHeaders',
    'SecurityLogger',
    'init_security',
]

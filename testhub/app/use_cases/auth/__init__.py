"""
Authentication Use Cases
"""

from .dtos import LoginResponse, SignupCommand, SignupResponse, UserInfo
from .login_use_case import LoginUseCase
from .signup_use_case import SignupUseCase

__all__ = [
    "SignupUseCase",
    "LoginUseCase",
    "SignupCommand",
    "SignupResponse",
    "LoginResponse",
    "UserInfo",
]

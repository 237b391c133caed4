"""
Authentication Use Case DTOs (Data Transfer Objects)

Command/Response pattern for clean architecture separation.
"""

from typing import Optional

from pydantic import BaseModel


class SignupCommand(BaseModel):
    """
    Signup command - represents validated signup intent

    Created by API layer after request validation passes.
    """

    email: str
    password: str
    name: Optional[str] = None


class UserInfo(BaseModel):
    """User information in authentication responses"""

    id: str
    email: str
    name: Optional[str] = None
    role: str
    team_id: Optional[str] = None


class SignupResponse(BaseModel):
    user: UserInfo
    access_token: str
    token_type: str = "bearer"


class LoginResponse(BaseModel):
    user: UserInfo
    access_token: str
    token_type: str = "bearer"

"""Auth Schemas — registration and login payloads.

Invariants:
    - RegisterRequest.email stripped but case preserved (email is a case-sensitive key)
    - Passwords 6-72 chars (bcrypt ignores bytes past 72)
    - LoginRequest carries no length rules: any mismatch is InvalidCredentials
"""

from pydantic import BaseModel, Field, field_validator


class RegisterRequest(BaseModel):
    full_name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=320, pattern=r"^\s*[^@\s]+@[^@\s]+\s*$")
    password: str = Field(min_length=6, max_length=72)

    @field_validator("full_name", "email")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        return v.strip()


class TokenResponse(BaseModel):
    token: str

"""Auth Schemas — password login request and result."""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """Credentials — blank values are rejected by the service, not by Pydantic."""
    email: str = ""
    password: str = ""


class LoginResult(BaseModel):
    success: bool
    error: str | None = None

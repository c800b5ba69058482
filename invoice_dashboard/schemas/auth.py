"""
Pydantic schemas for the login form.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LoginForm(BaseModel):
    """
    Credentials posted by the login form.

    Parsed by the credentials provider before Supabase Auth is called; a
    submission that fails here is reported as invalid credentials.
    """
    model_config = ConfigDict(extra="ignore")

    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+$", description="Account email")
    password: str = Field(..., min_length=6, description="Account password")


class LoginResponse(BaseModel):
    """Response for POST /login when sign-in does not succeed."""
    message: Optional[str] = Field(
        None,
        description="Error message to show above the login form",
        examples=["Invalid credentials."]
    )

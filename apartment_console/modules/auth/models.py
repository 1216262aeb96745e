"""
Authentication module data models.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from apartment_console.modules.session.models import JWTClaims


class LoginResult(BaseModel):
    """Outcome of a successful login or refresh."""

    model_config = ConfigDict(frozen=True)

    token: str = Field(..., description="Access token")
    claims: Optional[JWTClaims] = Field(None, description="Decoded token payload")


class ResetTokenVerification(BaseModel):
    """Answer of POST /password-reset/verify."""

    valid: bool = False
    email: Optional[str] = None
    error: Optional[str] = None

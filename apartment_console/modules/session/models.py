"""
Session module data models.
"""

import math
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class JWTClaims(BaseModel):
    """
    Decoded access-token payload.

    The API issues tokens with the username and role list as claims.
    Unknown claims are kept so callers can read them if they need to.

    Claim types are not trusted: scalar identifiers are read as strings,
    roles are kept as sent (the role policy treats malformed lists as a
    plain user), and a non-numeric exp or iat is dropped, which makes the
    token invalid without making it undecodable.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    sub: Optional[str] = Field(None, description="Subject (user identifier)")
    username: Optional[str] = Field(None, description="Login name")
    roles: Any = Field(default_factory=list, description="Role list")
    exp: Optional[float] = Field(None, description="Expiration timestamp")
    iat: Optional[float] = Field(None, description="Issued at timestamp")

    @field_validator("sub", "username", mode="before")
    @classmethod
    def _scalar_to_str(cls, value: Any) -> Optional[str]:
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return None

    @field_validator("exp", "iat", mode="before")
    @classmethod
    def _numeric_or_none(cls, value: Any) -> Optional[float]:
        if isinstance(value, bool) or value is None:
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        return number if math.isfinite(number) else None

    @property
    def identity(self) -> Optional[str]:
        """Best available identifier for display."""
        return self.username or self.sub

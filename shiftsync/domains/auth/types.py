"""Auth domain type definitions for type safety."""

from typing import Optional

from pydantic import BaseModel, Field


class AccessTokenPayload(BaseModel):
    """Access token payload structure."""

    # Standard JWT claims
    sub: str = Field(..., description="Subject (user ID)")
    exp: Optional[int] = Field(None, description="Expiration timestamp")
    iat: Optional[int] = Field(None, description="Issued at timestamp")

    # Informational; authorization always re-reads the stored user
    role: Optional[str] = Field(None, description="Role at time of issue")

    model_config = {"extra": "allow"}

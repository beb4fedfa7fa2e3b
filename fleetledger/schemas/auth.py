"""
Schémas d'authentification / Authentication schemas.
Inscription, connexion, tokens, refresh.
"""

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Requête d'inscription / Sign-up request."""
    email: EmailStr
    password: str = Field(min_length=6, max_length=200)
    name: str = Field(default="", max_length=100)


class LoginRequest(BaseModel):
    """Requête de connexion / Login request."""
    email: EmailStr
    password: str = Field(min_length=1, max_length=200)


class TokenResponse(BaseModel):
    """Réponse avec tokens / Token response."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshRequest(BaseModel):
    """Requête de rafraîchissement / Refresh request."""
    refresh_token: str

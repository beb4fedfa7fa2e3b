"""
Routes d'authentification / Authentication routes.
Inscription, connexion, refresh, deconnexion, profil.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleetledger.api.deps import get_current_user
from fleetledger.config import settings
from fleetledger.database import get_db
from fleetledger.models.user import User
from fleetledger.rate_limit import limiter
from fleetledger.schemas.auth import LoginRequest, RefreshRequest, RegisterRequest, TokenResponse
from fleetledger.schemas.user import UserMe
from fleetledger.services.audit_service import log_auth_event
from fleetledger.utils.auth import (
    REFRESH,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)

router = APIRouter()


def _client_ip(request: Request) -> str:
    """Extraire l'IP client / Extract client IP (supports X-Forwarded-For behind proxy)."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _tokens(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(user.id),
        refresh_token=create_refresh_token(user.id),
    )


@router.post("/register", response_model=TokenResponse, status_code=201)
@limiter.limit(settings.RATE_LIMIT_REGISTER)
async def register(request: Request, data: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Inscription / Sign up."""
    email = data.email.lower()
    existing = await db.execute(select(User.id).where(User.email == email))
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

    user = User(email=email, name=data.name.strip(), hashed_password=hash_password(data.password), is_active=True)
    db.add(user)
    await db.flush()
    log_auth_event(db, "REGISTER", email, user.id, _client_ip(request))
    return _tokens(user)


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.RATE_LIMIT_LOGIN)
async def login(request: Request, data: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Connexion par identifiants / Login with credentials."""
    email = data.email.lower()
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()
    ip = _client_ip(request)

    if user is None or not verify_password(data.password, user.hashed_password):
        # Journal de tentative échouée / Log failed login attempt
        log_auth_event(db, "LOGIN_FAILED", email, 0, ip)
        await db.commit()
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    if not user.is_active:
        log_auth_event(db, "LOGIN_DISABLED", email, user.id, ip)
        await db.commit()
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account disabled")

    log_auth_event(db, "LOGIN", email, user.id, ip)
    return _tokens(user)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(data: RefreshRequest, db: AsyncSession = Depends(get_db)):
    """Rafraîchir les tokens / Refresh tokens."""
    user_id = decode_token(data.refresh_token, REFRESH)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")

    user = await db.get(User, user_id)
    if user is None or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found or inactive")

    return _tokens(user)


@router.post("/logout", status_code=204)
async def logout(request: Request, db: AsyncSession = Depends(get_db), user: User = Depends(get_current_user)):
    """Deconnexion / Sign out.

    Les JWT sont sans etat : le client jette ses tokens, on journalise l'evenement.
    JWTs are stateless: the client drops its tokens, the event is logged.
    """
    log_auth_event(db, "LOGOUT", user.email, user.id, _client_ip(request))


@router.get("/me", response_model=UserMe)
async def me(user: User = Depends(get_current_user)):
    """Profil de l'utilisateur connecté / Current user profile."""
    return user

"""
Dépendances d'authentification et de propriété / Authentication and ownership dependencies.
Injectées dans les routes via Depends().
"""

from typing import TypeVar

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleetledger.database import Base, get_db
from fleetledger.models.user import User
from fleetledger.utils.auth import ACCESS, decode_token

security = HTTPBearer()

ModelT = TypeVar("ModelT", bound=Base)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Extraire et valider l'utilisateur depuis le JWT / Extract and validate user from JWT."""
    user_id = decode_token(credentials.credentials, ACCESS)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if user is None or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found or inactive")

    return user


async def get_owned_or_404(db: AsyncSession, model: type[ModelT], obj_id: int, user: User) -> ModelT:
    """Charger une ligne appartenant a l'utilisateur / Load a row owned by the user.

    Une ligne d'un autre utilisateur est traitee comme absente / Another user's row is treated as missing.
    """
    result = await db.execute(select(model).where(model.id == obj_id, model.user_id == user.id))
    obj = result.scalar_one_or_none()
    if obj is None:
        raise HTTPException(status_code=404, detail=f"{model.__name__} not found")
    return obj

import uuid

from fastapi import APIRouter, Depends
from fastapi_utils.cbv import cbv
from sqlalchemy.ext.asyncio import AsyncSession

from core.get_db import get_db_async
from core.safe_handler import safe_handler
from core.validators import jwt_protect
from schemas.schema import AuthTokenPayload, ProfileUpdateOut, UserProfileUpdate
from services.profile_service import ProfileService

router = APIRouter(tags=["User Profile"])


@cbv(router)
class ProfileRoutes:
    @router.patch("/{user_id}", response_model=ProfileUpdateOut)
    @safe_handler
    async def update_profile(
        self,
        user_id: uuid.UUID,
        data: UserProfileUpdate,
        db: AsyncSession = Depends(get_db_async),
        current_user: AuthTokenPayload = Depends(jwt_protect),
    ):
        return await ProfileService(db).update_profile(
            user_id=user_id, current_user=current_user, data=data
        )

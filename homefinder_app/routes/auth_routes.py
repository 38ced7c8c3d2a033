from fastapi import APIRouter, Depends
from fastapi_utils.cbv import cbv
from sqlalchemy.ext.asyncio import AsyncSession

from core.get_db import get_db_async
from core.safe_handler import safe_handler
from core.validators import jwt_protect
from schemas.schema import (
    AuthTokenPayload,
    LoginOut,
    MeOut,
    RegisterOut,
    UserCreate,
    UserLoginInput,
)
from services.auth_service import AuthService

router = APIRouter(tags=["User Authentication"])


@cbv(router)
class UserRoutes:
    @router.post("/register", response_model=RegisterOut, status_code=201)
    @safe_handler
    async def register(
        self,
        data: UserCreate,
        db: AsyncSession = Depends(get_db_async),
    ):
        return await AuthService(db).register(data)

    @router.post("/login", response_model=LoginOut)
    @safe_handler
    async def login(
        self,
        data: UserLoginInput,
        db: AsyncSession = Depends(get_db_async),
    ):
        return await AuthService(db).login(data)

    @router.get("/me", response_model=MeOut)
    @safe_handler
    async def me(
        self,
        db: AsyncSession = Depends(get_db_async),
        current_user: AuthTokenPayload = Depends(jwt_protect),
    ):
        return await AuthService(db).me(current_user.user_id)

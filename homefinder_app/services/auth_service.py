import logging

from sqlalchemy.exc import IntegrityError

from core.breaker import breaker
from core.errors import Conflict, NotFound, Unauthorized
from models.models import User
from repos.user_repo import UserRepo
from schemas.schema import (
    LoginOut,
    MeOut,
    RegisterOut,
    UserPublicSchema,
    UserSummaryOut,
)
from security.security_generate import token_generate

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db):
        self.repo: UserRepo = UserRepo(db)

    async def register(self, data) -> RegisterOut:
        async def handler():
            if await self.repo.find_by_email(data.email):
                raise Conflict("Email already registered", field="email")
            if await self.repo.find_by_username(data.username):
                raise Conflict("Username already taken", field="username")

            user = User(
                username=data.username,
                full_name=data.full_name,
                email=data.email.strip().lower(),
                role=data.role,
            )
            user.set_password(raw_password=data.password)
            try:
                await self.repo.save(user)
            except IntegrityError:
                raise Conflict("Username or email already exists")

            logger.info(f"Registered user {user.id} as {user.role.value}")
            return RegisterOut(
                message="Registration successful",
                user=UserSummaryOut.model_validate(user),
                token=token_generate.generate_access_token(user),
            )

        return await breaker.call(handler)

    async def login(self, data) -> LoginOut:
        async def handler():
            user = await self.repo.find_by_email(data.email)
            if not user or not user.check_password(raw_password=data.password):
                raise Unauthorized("Invalid email or password")

            return LoginOut(
                message="Login successful",
                token=token_generate.generate_access_token(user),
                user=UserPublicSchema.model_validate(user),
            )

        return await breaker.call(handler)

    async def me(self, user_id) -> MeOut:
        async def handler():
            user = await self.repo.get(user_id)
            if not user:
                raise NotFound("User not found")
            return MeOut(user=UserPublicSchema.model_validate(user))

        return await breaker.call(handler)

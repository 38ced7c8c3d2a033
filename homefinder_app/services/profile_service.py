import logging
import uuid

from sqlalchemy.exc import IntegrityError

from core.breaker import breaker
from core.check_permission import CheckRolePermission
from core.errors import Conflict, NotFound
from repos.user_repo import UserRepo
from schemas.schema import ProfileUpdateOut, UserPublicSchema

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, db):
        self.repo: UserRepo = UserRepo(db)
        self.permission: CheckRolePermission = CheckRolePermission()

    async def update_profile(
        self, *, user_id: uuid.UUID, current_user, data
    ) -> ProfileUpdateOut:
        async def handler():
            self.permission.check_self(current_user, user_id)

            if await self.repo.email_taken_by_other(data.email, current_user.user_id):
                raise Conflict("Email already in use by another account", field="email")

            user = await self.repo.get(current_user.user_id)
            if not user:
                raise NotFound("User not found")

            user.full_name = data.full_name
            user.email = data.email
            try:
                await self.repo.save(user)
            except IntegrityError:
                raise Conflict("Email already in use by another account", field="email")
            logger.info(f"Profile updated for user {user.id}")

            return ProfileUpdateOut(
                message="Profile updated successfully",
                user=UserPublicSchema.model_validate(user),
            )

        return await breaker.call(handler)

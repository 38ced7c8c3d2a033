import uuid

from fastapi import Depends

from models.enums import UserRole
from schemas.schema import AuthTokenPayload

from .errors import Forbidden
from .validators import jwt_protect


class CheckRolePermission:
    def check_owner(self, current_user: AuthTokenPayload):
        if current_user.role != UserRole.OWNER:
            raise Forbidden("Forbidden: Only property owners can perform this action")

    def check_self(self, current_user: AuthTokenPayload, user_id: uuid.UUID):
        if current_user.user_id != user_id:
            raise Forbidden("Forbidden: You can only update your own profile")


permission = CheckRolePermission()


async def require_owner(
    current_user: AuthTokenPayload = Depends(jwt_protect),
) -> AuthTokenPayload:
    permission.check_owner(current_user)
    return current_user

from datetime import datetime, timedelta, timezone

import jwt

from core.settings import settings
from models.models import User


class TokenGenerate:
    def __init__(
        self,
        secret_key: str = settings.JWT_SECRET_KEY,
        algorithm: str = settings.ALGORITHM,
        expire_days: int = settings.TOKEN_EXPIRE_DAYS,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_days = expire_days

    def build_claims(self, user: User, now: datetime | None = None) -> dict:
        issued_at = now or datetime.now(timezone.utc)
        return {
            "sub": str(user.id),
            "userId": str(user.id),
            "username": user.username,
            "email": user.email,
            "role": user.role.value,
            "iat": issued_at,
            "exp": issued_at + timedelta(days=self.expire_days),
        }

    def generate_access_token(self, user: User, now: datetime | None = None) -> str:
        return jwt.encode(
            self.build_claims(user, now), self.secret_key, algorithm=self.algorithm
        )


token_generate = TokenGenerate()

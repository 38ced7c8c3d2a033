import jwt
from fastapi import Request
from pydantic import ValidationError

from schemas.schema import AuthTokenPayload

from .errors import Unauthorized
from .settings import settings


def decode_http_access_token(token: str) -> AuthTokenPayload:
    payload = jwt.decode(
        token,
        settings.JWT_SECRET_KEY,
        algorithms=[settings.ALGORITHM],
        options={"require": ["exp", "sub"]},
    )
    try:
        return AuthTokenPayload.model_validate(payload)
    except ValidationError:
        raise jwt.InvalidTokenError("Token claims are malformed")


def read_bearer_token(request: Request) -> str:
    header = request.headers.get("Authorization")
    if not header or not header.startswith("Bearer "):
        raise Unauthorized("Unauthorized: Missing or invalid token format")
    token = header[len("Bearer "):].strip()
    if not token:
        raise Unauthorized("Unauthorized: Missing or invalid token format")
    return token


def authenticate(token: str) -> AuthTokenPayload:
    try:
        return decode_http_access_token(token)
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Unauthorized: Token expired")
    except jwt.InvalidTokenError:
        raise Unauthorized("Unauthorized: Invalid token")


async def jwt_protect(request: Request) -> AuthTokenPayload:
    payload = authenticate(read_bearer_token(request))
    request.state.user = payload
    return payload

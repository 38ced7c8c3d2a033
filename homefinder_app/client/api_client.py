import uuid
from typing import Any, Optional

import httpx

from schemas.schema import (
    MessageDetailOut,
    MessageOut,
    PropertyOut,
    UserPublicSchema,
)


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, payload: Any = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.payload = payload


class HomeFinderClient:
    """Async client for the HomeFinder HTTP API."""

    def __init__(
        self,
        base_url: str,
        *,
        token: Optional[str] = None,
        api_prefix: str = "/api",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_prefix = api_prefix
        self.token = token
        self.transport = transport
        self.timeout = timeout

    @property
    def headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        async with httpx.AsyncClient(
            base_url=self.base_url, transport=self.transport, timeout=self.timeout
        ) as client:
            res = await client.request(
                method, f"{self.api_prefix}{path}", headers=self.headers, **kwargs
            )

        try:
            data = res.json()
        except ValueError:
            data = {"message": res.text}

        if res.is_error:
            message = data.get("message") or data.get("detail") or res.reason_phrase
            raise ApiError(res.status_code, str(message), data)
        return data

    # auth

    async def register(
        self, *, username: str, full_name: str, email: str, password: str, role: str = "tenant"
    ) -> dict:
        data = await self._request(
            "POST",
            "/auth/register",
            json={
                "username": username,
                "fullName": full_name,
                "email": email,
                "password": password,
                "role": role,
            },
        )
        self.token = data["token"]
        return data["user"]

    async def login(self, email: str, password: str) -> UserPublicSchema:
        data = await self._request(
            "POST", "/auth/login", json={"email": email, "password": password}
        )
        self.token = data["token"]
        return UserPublicSchema.model_validate(data["user"])

    async def me(self) -> UserPublicSchema:
        data = await self._request("GET", "/auth/me")
        return UserPublicSchema.model_validate(data["user"])

    async def update_profile(
        self, user_id: uuid.UUID, *, full_name: str, email: str
    ) -> UserPublicSchema:
        data = await self._request(
            "PATCH",
            f"/users/{user_id}",
            json={"fullName": full_name, "email": email},
        )
        return UserPublicSchema.model_validate(data["user"])

    # properties

    async def search_properties(self, **filters) -> list[PropertyOut]:
        params = {
            "location": filters.get("location"),
            "type": filters.get("type"),
            "minPrice": filters.get("min_price"),
            "maxPrice": filters.get("max_price"),
        }
        params = {k: v for k, v in params.items() if v is not None}
        data = await self._request("GET", "/properties", params=params)
        return [PropertyOut.model_validate(p) for p in data["properties"]]

    async def get_property(self, property_id: uuid.UUID) -> PropertyOut:
        data = await self._request("GET", f"/properties/{property_id}")
        return PropertyOut.model_validate(data["property"])

    async def my_properties(self) -> list[PropertyOut]:
        data = await self._request("GET", "/my-properties")
        return [PropertyOut.model_validate(p) for p in data["properties"]]

    async def create_property(self, **fields) -> PropertyOut:
        data = await self._request("POST", "/properties", json=fields)
        return PropertyOut.model_validate(data["property"])

    async def update_property(self, property_id: uuid.UUID, **fields) -> PropertyOut:
        data = await self._request("PUT", f"/properties/{property_id}", json=fields)
        return PropertyOut.model_validate(data["property"])

    async def delete_property(self, property_id: uuid.UUID) -> str:
        data = await self._request("DELETE", f"/properties/{property_id}")
        return data["message"]

    # messages

    async def list_messages(self) -> list[MessageDetailOut]:
        data = await self._request("GET", "/messages")
        return [MessageDetailOut.model_validate(m) for m in data["messages"]]

    async def unread_count(self) -> int:
        data = await self._request("GET", "/messages/unread-count")
        return int(data["count"])

    async def mark_as_read(self, sender_id: uuid.UUID) -> bool:
        data = await self._request(
            "POST", "/messages/mark-as-read", json={"senderId": str(sender_id)}
        )
        return bool(data.get("success"))

    async def get_conversation(
        self, other_user_id: uuid.UUID, property_id: uuid.UUID
    ) -> list[MessageDetailOut]:
        data = await self._request(
            "GET", f"/messages/conversation/{other_user_id}/{property_id}"
        )
        return [MessageDetailOut.model_validate(m) for m in data["messages"]]

    async def delete_conversation(
        self, other_user_id: uuid.UUID, property_id: uuid.UUID
    ) -> str:
        data = await self._request(
            "DELETE", f"/messages/conversation/{other_user_id}/{property_id}"
        )
        return data["message"]

    async def send_message(
        self, *, receiver_id: uuid.UUID, property_id: uuid.UUID, content: str
    ) -> MessageOut:
        data = await self._request(
            "POST",
            "/messages",
            json={
                "receiverId": str(receiver_id),
                "propertyId": str(property_id),
                "content": content,
            },
        )
        return MessageOut.model_validate(data["data"])

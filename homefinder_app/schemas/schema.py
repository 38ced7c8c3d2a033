from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from models.enums import PropertyType, UserRole


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------------------------------------------------------------- users


class UserCreate(CamelModel):
    username: str = Field(..., min_length=3, max_length=50)
    full_name: str = Field(..., min_length=2)
    email: EmailStr
    password: str = Field(
        ..., min_length=6, json_schema_extra={"type": "string", "format": "password"}
    )
    role: UserRole = UserRole.TENANT

    @field_validator("username", "full_name", mode="before")
    @classmethod
    def strip_text(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class UserLoginInput(CamelModel):
    email: EmailStr
    password: str = Field(
        ..., min_length=6, json_schema_extra={"type": "string", "format": "password"}
    )

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class UserProfileUpdate(CamelModel):
    full_name: str = Field(..., min_length=2)
    email: EmailStr

    @field_validator("full_name", mode="before")
    @classmethod
    def strip_name(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class UserPublicSchema(CamelModel):
    id: uuid.UUID
    username: str
    full_name: str
    email: str
    role: UserRole


class MessageUserOut(CamelModel):
    id: uuid.UUID
    username: str
    full_name: str


class AuthTokenPayload(CamelModel):
    user_id: uuid.UUID
    username: str
    email: str
    role: UserRole


# ----------------------------------------------------------- properties


class PropertyCreate(CamelModel):
    name: str = Field(..., min_length=3, max_length=255)
    description: str = Field(..., min_length=10)
    price: int = Field(..., ge=1)
    location: str = Field(..., min_length=3, max_length=255)
    type: PropertyType
    image_url: Optional[str] = None


class PropertyUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=3, max_length=255)
    description: Optional[str] = Field(None, min_length=10)
    price: Optional[int] = Field(None, ge=1)
    location: Optional[str] = Field(None, min_length=3, max_length=255)
    type: Optional[PropertyType] = None
    image_url: Optional[str] = None

    @field_validator("name", "description", "price", "location", "type")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class PropertyOut(CamelModel):
    id: uuid.UUID
    owner_id: uuid.UUID
    name: str
    description: str
    price: int
    location: str
    type: PropertyType
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PropertyRefOut(CamelModel):
    id: uuid.UUID
    name: str


# ------------------------------------------------------------- messages


class MessageCreate(CamelModel):
    receiver_id: uuid.UUID
    property_id: uuid.UUID
    content: str = Field(..., min_length=1)


class MarkAsReadIn(CamelModel):
    sender_id: uuid.UUID


class MessageOut(CamelModel):
    id: uuid.UUID
    sender_id: uuid.UUID
    receiver_id: uuid.UUID
    property_id: uuid.UUID
    content: str
    read: bool
    created_at: datetime


class MessageDetailOut(MessageOut):
    sender: Optional[MessageUserOut] = None
    receiver: Optional[MessageUserOut] = None
    property: Optional[PropertyRefOut] = None


class ConversationUserOut(CamelModel):
    id: uuid.UUID
    full_name: str


class LastMessageOut(CamelModel):
    id: uuid.UUID
    content: str
    created_at: datetime


class ConversationOut(CamelModel):
    user: ConversationUserOut
    property: PropertyRefOut
    last_message: LastMessageOut
    unread_count: int


class ConversationListOut(CamelModel):
    conversations: List[ConversationOut] = Field(default_factory=list)


# ------------------------------------------------------------ envelopes


class UserSummaryOut(CamelModel):
    id: uuid.UUID
    username: str
    email: str
    role: UserRole


class RegisterOut(CamelModel):
    message: str
    user: UserSummaryOut
    token: str


class LoginOut(CamelModel):
    message: str
    token: str
    user: UserPublicSchema


class MeOut(CamelModel):
    user: UserPublicSchema


class ProfileUpdateOut(CamelModel):
    message: str
    user: UserPublicSchema


class PropertyListOut(CamelModel):
    properties: List[PropertyOut] = Field(default_factory=list)


class PropertyEnvelopeOut(CamelModel):
    message: Optional[str] = None
    property: PropertyOut


class MessageListOut(CamelModel):
    messages: List[MessageDetailOut] = Field(default_factory=list)


class MessageSentOut(CamelModel):
    message: str
    data: MessageOut


class UnreadCountOut(CamelModel):
    count: int


class SuccessOut(CamelModel):
    success: bool


class DetailOut(CamelModel):
    message: str

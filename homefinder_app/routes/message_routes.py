import uuid

from fastapi import APIRouter, Depends
from fastapi_utils.cbv import cbv
from sqlalchemy.ext.asyncio import AsyncSession

from core.get_db import get_db_async
from core.safe_handler import safe_handler
from core.validators import jwt_protect
from schemas.schema import (
    AuthTokenPayload,
    ConversationListOut,
    DetailOut,
    MarkAsReadIn,
    MessageCreate,
    MessageListOut,
    MessageSentOut,
    SuccessOut,
    UnreadCountOut,
)
from services.message_service import MessagingService

router = APIRouter(tags=["Property Messaging"])


@cbv(router)
class MessageRoutes:
    @router.get("/messages", response_model=MessageListOut)
    @safe_handler
    async def list_messages(
        self,
        db: AsyncSession = Depends(get_db_async),
        current_user: AuthTokenPayload = Depends(jwt_protect),
    ):
        messages = await MessagingService(db).list_messages(current_user.user_id)
        return {"messages": messages}

    @router.get("/messages/conversations", response_model=ConversationListOut)
    @safe_handler
    async def list_conversations(
        self,
        db: AsyncSession = Depends(get_db_async),
        current_user: AuthTokenPayload = Depends(jwt_protect),
    ):
        conversations = await MessagingService(db).list_conversations(
            current_user.user_id
        )
        return {"conversations": conversations}

    @router.get("/messages/unread-count", response_model=UnreadCountOut)
    @safe_handler
    async def unread_count(
        self,
        db: AsyncSession = Depends(get_db_async),
        current_user: AuthTokenPayload = Depends(jwt_protect),
    ):
        count = await MessagingService(db).get_unread_count(current_user.user_id)
        return {"count": count}

    @router.post("/messages/mark-as-read", response_model=SuccessOut)
    @safe_handler
    async def mark_as_read(
        self,
        payload: MarkAsReadIn,
        db: AsyncSession = Depends(get_db_async),
        current_user: AuthTokenPayload = Depends(jwt_protect),
    ):
        await MessagingService(db).mark_as_read(
            sender_id=payload.sender_id, receiver_id=current_user.user_id
        )
        return {"success": True}

    @router.get(
        "/messages/conversation/{user_id}/{property_id}", response_model=MessageListOut
    )
    @safe_handler
    async def get_conversation(
        self,
        user_id: uuid.UUID,
        property_id: uuid.UUID,
        db: AsyncSession = Depends(get_db_async),
        current_user: AuthTokenPayload = Depends(jwt_protect),
    ):
        messages = await MessagingService(db).read_conversation(
            viewer_id=current_user.user_id,
            other_user_id=user_id,
            property_id=property_id,
        )
        return {"messages": messages}

    @router.delete(
        "/messages/conversation/{user_id}/{property_id}", response_model=DetailOut
    )
    @safe_handler
    async def delete_conversation(
        self,
        user_id: uuid.UUID,
        property_id: uuid.UUID,
        db: AsyncSession = Depends(get_db_async),
        current_user: AuthTokenPayload = Depends(jwt_protect),
    ):
        await MessagingService(db).delete_conversation(
            viewer_id=current_user.user_id,
            other_user_id=user_id,
            property_id=property_id,
        )
        return {"message": "Conversation deleted successfully"}

    @router.post("/messages", response_model=MessageSentOut, status_code=201)
    @safe_handler
    async def send_message(
        self,
        payload: MessageCreate,
        db: AsyncSession = Depends(get_db_async),
        current_user: AuthTokenPayload = Depends(jwt_protect),
    ):
        msg = await MessagingService(db).send_message(
            sender_id=current_user.user_id,
            receiver_id=payload.receiver_id,
            property_id=payload.property_id,
            content=payload.content,
        )
        return {"message": "Message sent successfully", "data": msg}

import logging
import uuid

from core.breaker import breaker
from core.errors import NotFound, ValidationFailed
from repos.message_repo import MessageRepo
from repos.user_repo import UserRepo
from schemas.schema import ConversationOut, MessageDetailOut, MessageOut

from .conversations import ConversationScope, group_conversations
from .property_service import PropertyService

logger = logging.getLogger(__name__)


class MessagingService:
    def __init__(self, db):
        self.db = db
        self.messages: MessageRepo = MessageRepo(db)
        self.users: UserRepo = UserRepo(db)
        self.properties: PropertyService = PropertyService(db)

    async def send_message(
        self,
        *,
        sender_id: uuid.UUID,
        receiver_id: uuid.UUID,
        property_id: uuid.UUID,
        content: str,
    ) -> MessageOut:
        async def handler():
            text = (content or "").strip()
            if not text:
                raise ValidationFailed("Message cannot be empty")
            if sender_id == receiver_id:
                raise ValidationFailed("You cannot message yourself")
            if not await self.users.exists(receiver_id):
                raise NotFound("Recipient not found")
            if not await self.properties.property_exists(property_id):
                raise NotFound("Property not found")

            msg = await self.messages.create(
                sender_id=sender_id,
                receiver_id=receiver_id,
                property_id=property_id,
                content=text,
            )
            logger.info(
                f"Message {msg.id} sent {sender_id} -> {receiver_id} "
                f"about property {property_id}"
            )
            return MessageOut.model_validate(msg)

        return await breaker.call(handler)

    async def list_messages(self, viewer_id: uuid.UUID) -> list[MessageDetailOut]:
        async def handler():
            rows = await self.messages.list_for_user(viewer_id)
            return [MessageDetailOut.model_validate(row) for row in rows]

        return await breaker.call(handler)

    async def list_conversations(self, viewer_id: uuid.UUID) -> list[ConversationOut]:
        async def handler():
            rows = await self.messages.list_for_user(viewer_id)
            conversations = group_conversations(rows, viewer_id)
            return [ConversationOut.model_validate(row) for row in conversations]

        return await breaker.call(handler)

    async def get_conversation(
        self,
        viewer_id: uuid.UUID,
        other_user_id: uuid.UUID,
        property_id: uuid.UUID,
    ) -> list[MessageDetailOut]:
        async def handler():
            scope = ConversationScope(viewer_id, other_user_id, property_id)
            rows = await self.messages.list_for_scope(scope)
            thread = [m for m in rows if scope.includes(m)]
            return [MessageDetailOut.model_validate(row) for row in thread]

        return await breaker.call(handler)

    async def read_conversation(
        self,
        viewer_id: uuid.UUID,
        other_user_id: uuid.UUID,
        property_id: uuid.UUID,
    ) -> list[MessageDetailOut]:
        """Load a thread for display and mark the counterparty's messages read."""
        thread = await self.get_conversation(viewer_id, other_user_id, property_id)
        await self.mark_as_read(sender_id=other_user_id, receiver_id=viewer_id)
        return thread

    async def mark_as_read(self, sender_id: uuid.UUID, receiver_id: uuid.UUID) -> int:
        async def handler():
            updated = await self.messages.mark_as_read(sender_id, receiver_id)
            if updated:
                logger.debug(
                    f"Marked {updated} message(s) {sender_id} -> {receiver_id} as read"
                )
            return updated

        return await breaker.call(handler)

    async def get_unread_count(self, user_id: uuid.UUID) -> int:
        async def handler():
            return await self.messages.unread_count(user_id)

        return await breaker.call(handler)

    async def delete_conversation(
        self,
        viewer_id: uuid.UUID,
        other_user_id: uuid.UUID,
        property_id: uuid.UUID,
    ) -> bool:
        # deletion is global: the thread disappears for both participants
        async def handler():
            scope = ConversationScope(viewer_id, other_user_id, property_id)
            deleted = await self.messages.delete_for_scope(scope)
            logger.info(
                f"User {viewer_id} deleted conversation with {other_user_id} "
                f"about property {property_id} ({deleted} message(s))"
            )
            return True

        return await breaker.call(handler)

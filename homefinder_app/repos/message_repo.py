import uuid
from typing import List

from sqlalchemy import and_, delete, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from models.models import Message
from services.conversations import ConversationScope


def scope_filter(scope: ConversationScope):
    return and_(
        Message.property_id == scope.property_id,
        or_(
            and_(
                Message.sender_id == scope.viewer_id,
                Message.receiver_id == scope.other_user_id,
            ),
            and_(
                Message.sender_id == scope.other_user_id,
                Message.receiver_id == scope.viewer_id,
            ),
        ),
    )


class MessageRepo:
    def __init__(self, db):
        self.db = db

    def _with_relations(self, stmt):
        return stmt.options(
            selectinload(Message.sender),
            selectinload(Message.receiver),
            selectinload(Message.property),
        )

    async def create(
        self,
        *,
        sender_id: uuid.UUID,
        receiver_id: uuid.UUID,
        property_id: uuid.UUID,
        content: str,
    ) -> Message:
        msg = Message(
            sender_id=sender_id,
            receiver_id=receiver_id,
            property_id=property_id,
            content=content,
            read=False,
        )
        self.db.add(msg)
        try:
            await self.db.commit()
            await self.db.refresh(msg)
            return msg
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def list_for_user(self, user_id: uuid.UUID) -> List[Message]:
        stmt = self._with_relations(
            select(Message)
            .where(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
            .order_by(Message.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def list_for_scope(self, scope: ConversationScope) -> List[Message]:
        stmt = self._with_relations(
            select(Message).where(scope_filter(scope)).order_by(Message.created_at)
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def mark_as_read(self, sender_id: uuid.UUID, receiver_id: uuid.UUID) -> int:
        stmt = (
            update(Message)
            .where(
                Message.sender_id == sender_id,
                Message.receiver_id == receiver_id,
                Message.read.is_(False),
            )
            .values(read=True)
        )
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
            return result.rowcount
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def unread_count(self, user_id: uuid.UUID) -> int:
        result = await self.db.execute(
            select(func.count(Message.id)).where(
                Message.receiver_id == user_id,
                Message.read.is_(False),
            )
        )
        return int(result.scalar_one() or 0)

    async def delete_for_scope(self, scope: ConversationScope) -> int:
        try:
            result = await self.db.execute(delete(Message).where(scope_filter(scope)))
            await self.db.commit()
            return result.rowcount
        except SQLAlchemyError:
            await self.db.rollback()
            raise

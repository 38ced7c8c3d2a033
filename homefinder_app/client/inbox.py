import logging
import uuid
from typing import List, Optional

import httpx

from services.conversations import Conversation, ConversationKey, group_conversations

from .api_client import ApiError, HomeFinderClient

logger = logging.getLogger(__name__)


class Inbox:
    """Client-side conversation list with an unread badge.

    The cache is never authoritative: every mutation is followed by a
    refetch, and a failed optimistic update is undone by refetching
    rather than by restoring a snapshot.
    """

    def __init__(self, client: HomeFinderClient, viewer_id: uuid.UUID):
        self.client = client
        self.viewer_id = viewer_id
        self.conversations: List[Conversation] = []
        self.unread_count = 0
        self.selected: Optional[ConversationKey] = None
        self.thread = []
        self.stale = True

    def invalidate(self):
        self.stale = True

    def find(self, key: ConversationKey) -> Optional[Conversation]:
        for convo in self.conversations:
            if convo.key == key:
                return convo
        return None

    async def refresh(self) -> List[Conversation]:
        messages = await self.client.list_messages()
        count = await self.client.unread_count()
        self.conversations = group_conversations(messages, self.viewer_id)
        self.unread_count = count
        self.stale = False
        return self.conversations

    async def _rollback(self):
        self.invalidate()
        try:
            await self.refresh()
        except (ApiError, httpx.HTTPError) as e:
            logger.warning(f"Inbox refetch after failed update did not complete: {e}")

    async def open_conversation(self, other_user_id: uuid.UUID, property_id: uuid.UUID):
        key = ConversationKey(other_user_id, property_id)
        if self.selected == key and not self.stale:
            return self.thread

        convo = self.find(key)
        cleared = convo.unread_count if convo else 0
        if convo:
            convo.unread_count = 0
        self.unread_count = max(0, self.unread_count - cleared)
        self.selected = key

        try:
            await self.client.mark_as_read(other_user_id)
            self.thread = await self.client.get_conversation(other_user_id, property_id)
        except (ApiError, httpx.HTTPError):
            self.selected = None
            await self._rollback()
            raise
        # mark-as-read clears this sender across every property, so resync
        self.invalidate()
        await self.refresh()
        return self.thread

    async def delete_conversation(self, other_user_id: uuid.UUID, property_id: uuid.UUID):
        key = ConversationKey(other_user_id, property_id)
        await self.client.delete_conversation(other_user_id, property_id)

        self.conversations = [c for c in self.conversations if c.key != key]
        if self.selected == key:
            self.selected = None
            self.thread = []
        self.invalidate()
        await self.refresh()

    async def send(self, *, receiver_id: uuid.UUID, property_id: uuid.UUID, content: str):
        message = await self.client.send_message(
            receiver_id=receiver_id, property_id=property_id, content=content
        )
        self.invalidate()
        await self.refresh()
        if self.selected == ConversationKey(receiver_id, property_id):
            self.thread = await self.client.get_conversation(receiver_id, property_id)
        return message

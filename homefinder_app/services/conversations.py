"""Conversation view derived from flat message rows.

There is no conversation table. A conversation is the set of messages
exchanged between a viewer and one counterparty about one property, so
it is computed on demand from an already-authorized list of messages:
load once, derive the view, discard.

The functions here only read attributes (``sender_id``, ``receiver_id``,
``property_id``, ``read``, ``created_at`` and, for display, ``sender``,
``receiver`` and ``property``), so they work on ORM rows as well as on
the API schemas the client parses responses into.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, List


@dataclass(frozen=True)
class ConversationKey:
    other_user_id: uuid.UUID
    property_id: uuid.UUID


@dataclass
class ConversationUser:
    id: uuid.UUID
    full_name: str


@dataclass
class ConversationProperty:
    id: uuid.UUID
    name: str


@dataclass
class LastMessage:
    id: uuid.UUID
    content: str
    created_at: datetime


@dataclass
class Conversation:
    user: ConversationUser
    property: ConversationProperty
    last_message: LastMessage
    unread_count: int = 0
    message_ids: List[uuid.UUID] = field(default_factory=list)

    @property
    def key(self) -> ConversationKey:
        return ConversationKey(self.user.id, self.property.id)


@dataclass(frozen=True)
class ConversationScope:
    """Authorization predicate for one thread.

    A thread is addressed by the viewer, the counterparty and the
    property. The scope is always anchored on the caller, so a message
    belongs to it only when it links the caller and the counterparty (in
    either direction) about that property; nobody can reach a thread they
    are not part of.
    """

    viewer_id: uuid.UUID
    other_user_id: uuid.UUID
    property_id: uuid.UUID

    def includes(self, message: Any) -> bool:
        if message.property_id != self.property_id:
            return False
        pair = (message.sender_id, message.receiver_id)
        return pair in (
            (self.viewer_id, self.other_user_id),
            (self.other_user_id, self.viewer_id),
        )


def involves(message: Any, user_id: uuid.UUID) -> bool:
    return user_id in (message.sender_id, message.receiver_id)


def is_unread_for(message: Any, user_id: uuid.UUID) -> bool:
    return message.receiver_id == user_id and not message.read


def count_unread(messages: Iterable[Any], user_id: uuid.UUID) -> int:
    return sum(1 for m in messages if is_unread_for(m, user_id))


def counterparty_id(message: Any, viewer_id: uuid.UUID) -> uuid.UUID:
    if message.sender_id == viewer_id:
        return message.receiver_id
    return message.sender_id


def conversation_key(message: Any, viewer_id: uuid.UUID) -> ConversationKey:
    return ConversationKey(counterparty_id(message, viewer_id), message.property_id)


def _counterparty(message: Any, viewer_id: uuid.UUID) -> ConversationUser:
    other = message.receiver if message.sender_id == viewer_id else message.sender
    return ConversationUser(
        id=counterparty_id(message, viewer_id),
        full_name=getattr(other, "full_name", None) or "",
    )


def _property_ref(message: Any) -> ConversationProperty:
    return ConversationProperty(
        id=message.property_id,
        name=getattr(message.property, "name", None) or "",
    )


def _last(message: Any) -> LastMessage:
    return LastMessage(
        id=message.id, content=message.content, created_at=message.created_at
    )


def group_conversations(
    messages: Iterable[Any], viewer_id: uuid.UUID
) -> List[Conversation]:
    """Partition the viewer's messages by (counterparty, property).

    ``messages`` is expected newest first, as the store returns it, so the
    first message seen for a key is its last message; a later message only
    replaces it when strictly newer, which keeps first-seen-wins on ties.
    Messages the viewer is not part of are ignored. The result is sorted
    newest conversation first.
    """
    conversations: dict[ConversationKey, Conversation] = {}

    for message in messages:
        if not involves(message, viewer_id):
            continue

        key = conversation_key(message, viewer_id)
        convo = conversations.get(key)
        if convo is None:
            convo = Conversation(
                user=_counterparty(message, viewer_id),
                property=_property_ref(message),
                last_message=_last(message),
            )
            conversations[key] = convo
        elif message.created_at > convo.last_message.created_at:
            convo.last_message = _last(message)

        convo.message_ids.append(message.id)
        if is_unread_for(message, viewer_id):
            convo.unread_count += 1

    # sorted() is stable, so equal timestamps keep first-seen order
    return sorted(
        conversations.values(),
        key=lambda c: c.last_message.created_at,
        reverse=True,
    )

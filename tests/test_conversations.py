import uuid
from datetime import datetime, timedelta
from types import SimpleNamespace

from hypothesis import given, strategies as st

from services.conversations import (
    ConversationKey,
    ConversationScope,
    count_unread,
    group_conversations,
)

USERS = [uuid.UUID(int=i) for i in range(1, 5)]
PROPERTIES = [uuid.UUID(int=100 + i) for i in range(3)]
EPOCH = datetime(2024, 1, 1, 12, 0, 0)


def make_message(sender, receiver, prop, minutes, read=False, content="hi"):
    return SimpleNamespace(
        id=uuid.uuid4(),
        sender_id=sender,
        receiver_id=receiver,
        property_id=prop,
        content=content,
        read=read,
        created_at=EPOCH + timedelta(minutes=minutes),
        sender=SimpleNamespace(full_name=f"user-{sender.int}"),
        receiver=SimpleNamespace(full_name=f"user-{receiver.int}"),
        property=SimpleNamespace(name=f"property-{prop.int}"),
    )


@st.composite
def message_sets(draw):
    rows = draw(
        st.lists(
            st.tuples(
                st.sampled_from(USERS),
                st.sampled_from(USERS),
                st.sampled_from(PROPERTIES),
                st.integers(min_value=0, max_value=50),
                st.booleans(),
            ),
            max_size=30,
        )
    )
    messages = [
        make_message(sender, receiver, prop, minutes, read)
        for sender, receiver, prop, minutes, read in rows
        if sender != receiver
    ]
    # the store hands messages over newest first
    return sorted(messages, key=lambda m: m.created_at, reverse=True)


@given(message_sets(), st.sampled_from(USERS))
def test_unread_counts_sum_to_total(messages, viewer):
    conversations = group_conversations(messages, viewer)

    assert sum(c.unread_count for c in conversations) == count_unread(messages, viewer)


@given(message_sets(), st.sampled_from(USERS))
def test_conversations_partition_the_viewers_messages(messages, viewer):
    conversations = group_conversations(messages, viewer)

    grouped = [mid for c in conversations for mid in c.message_ids]
    mine = [m.id for m in messages if viewer in (m.sender_id, m.receiver_id)]
    assert sorted(grouped) == sorted(mine)
    assert len({c.key for c in conversations}) == len(conversations)


@given(message_sets(), st.sampled_from(USERS))
def test_last_message_is_newest_and_list_is_sorted(messages, viewer):
    conversations = group_conversations(messages, viewer)
    by_id = {m.id: m for m in messages}

    for convo in conversations:
        newest = max(by_id[mid].created_at for mid in convo.message_ids)
        assert convo.last_message.created_at == newest

    stamps = [c.last_message.created_at for c in conversations]
    assert stamps == sorted(stamps, reverse=True)


@given(message_sets(), st.sampled_from(USERS), st.sampled_from(USERS), st.sampled_from(PROPERTIES))
def test_thread_membership_is_symmetric(messages, a, b, prop):
    forward = ConversationScope(a, b, prop)
    backward = ConversationScope(b, a, prop)

    assert {m.id for m in messages if forward.includes(m)} == {
        m.id for m in messages if backward.includes(m)
    }


def test_grouping_by_counterparty_and_property():
    me, alice, bob = USERS[:3]
    house, flat = PROPERTIES[:2]
    messages = [
        make_message(bob, me, flat, 40, content="bob latest"),
        make_message(me, alice, house, 30, content="my reply"),
        make_message(alice, me, house, 20, content="alice question"),
        make_message(alice, me, flat, 10, read=True, content="alice about flat"),
    ]

    conversations = group_conversations(messages, me)

    assert [c.key for c in conversations] == [
        ConversationKey(bob, flat),
        ConversationKey(alice, house),
        ConversationKey(alice, flat),
    ]
    alice_house = conversations[1]
    assert alice_house.last_message.content == "my reply"
    assert alice_house.unread_count == 1
    assert alice_house.user.full_name == f"user-{alice.int}"
    assert alice_house.property.name == f"property-{house.int}"
    assert conversations[2].unread_count == 0


def test_first_seen_message_wins_on_equal_timestamps():
    me, alice = USERS[:2]
    house = PROPERTIES[0]
    first = make_message(alice, me, house, 5, content="first seen")
    second = make_message(me, alice, house, 5, content="second seen")

    [convo] = group_conversations([first, second], me)

    assert convo.last_message.content == "first seen"


def test_messages_not_involving_viewer_are_ignored():
    me, alice, bob = USERS[:3]
    messages = [make_message(alice, bob, PROPERTIES[0], 1)]

    assert group_conversations(messages, me) == []


def test_missing_display_data_falls_back_to_empty_names():
    me, alice = USERS[:2]
    message = make_message(alice, me, PROPERTIES[0], 1)
    message.sender = None
    message.property = None

    [convo] = group_conversations([message], me)

    assert convo.user.full_name == ""
    assert convo.property.name == ""


def test_scope_includes_both_directions_for_one_property():
    me, alice, bob = USERS[:3]
    house, flat = PROPERTIES[:2]
    scope = ConversationScope(me, alice, house)

    assert scope.includes(make_message(me, alice, house, 1))
    assert scope.includes(make_message(alice, me, house, 2))
    assert not scope.includes(make_message(alice, me, flat, 3))
    assert not scope.includes(make_message(bob, me, house, 4))

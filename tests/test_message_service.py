import pytest

from ridsport.core.exceptions import NotFoundError
from ridsport.models.enums import UserRole
from ridsport.schemas.message import MessageCreate
from ridsport.services.message_service import MessageService


def _message(receiver_id: str, subject: str = "Lektion imorgon") -> MessageCreate:
    return MessageCreate(receiver_id=receiver_id, subject=subject, content="Glöm inte hjälmen!")


@pytest.mark.asyncio
async def test_new_messages_are_unread(db, make_tenant, make_user):
    tenant = await make_tenant()
    trainer = await make_user(tenant, role=UserRole.trainer)
    rider = await make_user(tenant)

    message = await MessageService.create_message(db, tenant.id, trainer.id, _message(rider.id))

    assert message.read is False
    assert message.sender_id == trainer.id
    assert message.receiver_id == rider.id


@pytest.mark.asyncio
async def test_read_flag_in_payload_is_ignored(db, make_tenant, make_user):
    tenant = await make_tenant()
    sender = await make_user(tenant)
    receiver = await make_user(tenant)
    payload = MessageCreate.model_validate(
        {"receiver_id": receiver.id, "subject": "Hej", "content": "Hej!", "read": True}
    )

    message = await MessageService.create_message(db, tenant.id, sender.id, payload)

    assert message.read is False


@pytest.mark.asyncio
async def test_receiver_must_be_in_same_tenant(db, make_tenant, make_user):
    first = await make_tenant(subdomain="first")
    second = await make_tenant(subdomain="second")
    sender = await make_user(first)
    outsider = await make_user(second)

    with pytest.raises(NotFoundError):
        await MessageService.create_message(db, first.id, sender.id, _message(outsider.id))


@pytest.mark.asyncio
async def test_list_includes_sent_and_received(db, make_tenant, make_user):
    tenant = await make_tenant()
    me = await make_user(tenant)
    friend = await make_user(tenant)
    stranger = await make_user(tenant)
    sent = await MessageService.create_message(db, tenant.id, me.id, _message(friend.id))
    received = await MessageService.create_message(db, tenant.id, friend.id, _message(me.id))
    await MessageService.create_message(db, tenant.id, friend.id, _message(stranger.id))

    messages = await MessageService.list_messages_for_user(db, me.id, tenant_id=tenant.id)

    assert {m.id for m in messages} == {sent.id, received.id}
    created = [m.created_at for m in messages]
    assert created == sorted(created, reverse=True)


@pytest.mark.asyncio
async def test_mark_read_is_idempotent(db, make_tenant, make_user):
    tenant = await make_tenant()
    sender = await make_user(tenant)
    receiver = await make_user(tenant)
    message = await MessageService.create_message(db, tenant.id, sender.id, _message(receiver.id))

    first = await MessageService.mark_read(db, message.id)
    second = await MessageService.mark_read(db, message.id)

    assert first.read is True
    assert second.read is True


@pytest.mark.asyncio
async def test_unread_count(db, make_tenant, make_user):
    tenant = await make_tenant()
    sender = await make_user(tenant)
    receiver = await make_user(tenant)
    m1 = await MessageService.create_message(db, tenant.id, sender.id, _message(receiver.id))
    await MessageService.create_message(db, tenant.id, sender.id, _message(receiver.id))
    m3 = await MessageService.create_message(db, tenant.id, sender.id, _message(receiver.id))
    await MessageService.mark_read(db, m3.id)
    # Messages the user sent never count as unread for them
    await MessageService.create_message(db, tenant.id, receiver.id, _message(sender.id))

    assert await MessageService.count_unread(db, receiver.id) == 2

    await MessageService.mark_read(db, m1.id)

    assert await MessageService.count_unread(db, receiver.id) == 1


@pytest.mark.asyncio
async def test_mark_read_missing_message(db):
    with pytest.raises(NotFoundError):
        await MessageService.mark_read(db, "missing")

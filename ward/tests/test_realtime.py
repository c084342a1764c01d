import json

import pytest
from channels.db import database_sync_to_async
from channels.routing import URLRouter
from channels.testing import WebsocketCommunicator
from django.db import transaction

from ward.models import Card
from ward.realtime.routing import websocket_urlpatterns

application = URLRouter(websocket_urlpatterns)


@pytest.mark.asyncio
async def test_unknown_table_is_refused():
    communicator = WebsocketCommunicator(application, "/ws/changes/users/")
    connected, code = await communicator.connect()
    assert not connected
    assert code == 4004


@pytest.mark.asyncio
@pytest.mark.django_db(transaction=True)
async def test_card_changes_are_pushed_to_subscribers():
    communicator = WebsocketCommunicator(application, "/ws/changes/dm_the_cham/")
    connected, _ = await communicator.connect()
    assert connected
    welcome = json.loads(await communicator.receive_from())
    assert welcome == {"type": "welcome", "table": "dm_the_cham"}

    card = await database_sync_to_async(Card.objects.create)(so_the="RT1")
    msg = json.loads(await communicator.receive_from(timeout=2))
    assert msg == {"type": "table.change", "table": "dm_the_cham", "event": "INSERT", "id": card.pk}

    await database_sync_to_async(card.delete)()
    msg = json.loads(await communicator.receive_from(timeout=2))
    assert msg["event"] == "DELETE"

    await communicator.disconnect()


@pytest.mark.django_db
def test_change_is_sent_only_after_commit(monkeypatch, django_capture_on_commit_callbacks):
    sent = []
    monkeypatch.setattr("ward.signals.broadcast_change", lambda *args: sent.append(args))
    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        card = Card.objects.create(so_the="OC1")
        assert sent == []
    assert len(callbacks) == 1
    assert sent == [("dm_the_cham", "INSERT", card.pk)]


@pytest.mark.django_db
def test_rolled_back_write_is_not_announced(monkeypatch, django_capture_on_commit_callbacks):
    sent = []
    monkeypatch.setattr("ward.signals.broadcast_change", lambda *args: sent.append(args))
    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with pytest.raises(RuntimeError):
            with transaction.atomic():
                Card.objects.create(so_the="OC2")
                raise RuntimeError("boom")
    assert callbacks == []
    assert sent == []

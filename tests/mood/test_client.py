"""End-to-end tests for the application-state container."""

from datetime import timedelta

import pytest

from mood.client import MoodFlowClient
from mood.errors import FutureDateError
from mood.identity import LocalIdentityProvider
from shared_types import SessionState


@pytest.fixture
def client(identity_backend, store, today):
    client = MoodFlowClient(LocalIdentityProvider(identity_backend), store, today=lambda: today)
    client.start()
    return client


def test_signed_out_has_no_records(client):
    assert client.state == SessionState.UNAUTHENTICATED
    assert len(client.records) == 0


def test_sign_in_loads_existing_records(identity_backend, store, today):
    user = identity_backend.register("ann@example.com", "secret1")
    store.write(user["id"], "2024-03-01", {"mood": 4, "note": "", "timestamp": 0})

    client = MoodFlowClient(LocalIdentityProvider(identity_backend), store, today=lambda: today)
    client.start()
    client.sign_in("ann@example.com", "secret1")

    assert client.state == SessionState.AUTHENTICATED
    assert list(client.records) == ["2024-03-01"]
    assert client.views.distribution == [0, 0, 0, 1, 0]


def test_views_recomputed_on_each_change(client, today):
    client.sign_up("ann@example.com", "secret1")
    seen = []
    client.add_observer(seen.append)

    client.editor.submit(today, 3, "")
    client.editor.submit(today - timedelta(days=1), 5, "")

    assert len(seen) == 2
    assert seen[-1].distribution == [0, 0, 1, 0, 1]
    assert client.views.today_record.mood_value == 3


def test_future_submit_leaves_map_unchanged(client, today):
    client.sign_up("ann@example.com", "secret1")
    with pytest.raises(FutureDateError):
        client.editor.submit(today + timedelta(days=1), 4, "")
    assert len(client.records) == 0


def test_streak_triggers_celebration(client, today):
    client.sign_up("ann@example.com", "secret1")
    for i in range(7):
        client.editor.submit(today - timedelta(days=i * 3), 5, "")
    assert client.views.streak
    assert client.celebration.active


def test_sign_out_clears_records(client, store, today):
    session = client.sign_up("ann@example.com", "secret1")
    client.editor.submit(today, 4, "")
    client.sign_out()

    assert client.state == SessionState.UNAUTHENTICATED
    assert len(client.records) == 0
    assert client.views.today_record is None
    assert store.subscriber_count(session.user_id) == 0
    # Data stays in the store for the next sign-in
    assert today.isoformat() in store.snapshot(session.user_id)


def test_users_do_not_see_each_other(identity_backend, store, today):
    a = MoodFlowClient(LocalIdentityProvider(identity_backend), store, today=lambda: today)
    b = MoodFlowClient(LocalIdentityProvider(identity_backend), store, today=lambda: today)
    a.sign_up("a@example.com", "secret1")
    b.sign_up("b@example.com", "secret1")

    a.editor.submit(today, 2, "private")

    assert len(a.records) == 1
    assert len(b.records) == 0


def test_report_mentions_user(client, today):
    client.sign_up("ann@example.com", "secret1")
    client.editor.submit(today, 4, "")
    report = client.report()
    assert "User: ann@example.com" in report
    assert "Total records: 1" in report

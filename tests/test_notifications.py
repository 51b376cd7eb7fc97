from sqlalchemy.exc import SQLAlchemyError

from petcare.services.notification_service import notify_status_change, send_notification


def test_send_notification_stores_row(db_session):
    notification = send_notification(
        db_session, "amy@example.com", "Hello", "Welcome aboard", {"type": "welcome"}
    )

    assert notification is not None
    assert notification.read is False
    assert notification.data == {"type": "welcome"}


def test_send_notification_without_recipient_is_skipped(db_session):
    assert send_notification(db_session, None, "Hello", "Nobody home") is None
    assert send_notification(db_session, "", "Hello", "Nobody home") is None


def test_send_notification_failure_is_swallowed(db_session, monkeypatch):
    def broken_commit():
        raise SQLAlchemyError("database is locked")

    monkeypatch.setattr(db_session, "commit", broken_commit)

    assert send_notification(db_session, "amy@example.com", "Hello", "Text") is None


def test_notify_status_change_wording(db_session):
    notification = notify_status_change(
        db_session, "amy@example.com", subject="Advertisement", status="Rejected", data={}
    )
    assert notification.title == "Advertisement Rejected"
    assert notification.message == "Your advertisement has been rejected."


def test_list_count_read_and_delete(client, db_session):
    first = send_notification(db_session, "amy@example.com", "One", "First")
    send_notification(db_session, "amy@example.com", "Two", "Second")
    send_notification(db_session, "bob@example.com", "Other", "Not Amy's")

    listed = client.get("/notifications/amy@example.com").json()
    assert {n["title"] for n in listed} == {"One", "Two"}
    assert client.get("/notifications/amy@example.com/unread/count").json() == {"count": 2}

    response = client.put(f"/notifications/{first.id}/read")
    assert response.status_code == 200
    assert response.json()["read"] is True
    assert client.get("/notifications/amy@example.com/unread/count").json() == {"count": 1}

    assert client.put("/notifications/amy@example.com/read-all").json() == {"updated": 1}
    assert client.get("/notifications/amy@example.com/unread/count").json() == {"count": 0}
    assert client.get("/notifications/bob@example.com/unread/count").json() == {"count": 1}

    assert client.delete(f"/notifications/{first.id}").status_code == 200
    assert client.delete(f"/notifications/{first.id}").status_code == 404
    assert client.put("/notifications/missing/read").status_code == 404

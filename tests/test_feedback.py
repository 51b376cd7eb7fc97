import pytest

from petcare.models import Notification


@pytest.fixture
def leave_feedback(client):
    def _leave(**overrides):
        payload = {
            "email": "kim@example.com",
            "name": "Kim",
            "rating": 4,
            "comment": "Great grooming, friendly staff",
            "serviceType": "grooming",
            **overrides,
        }
        response = client.post("/feedback", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _leave


def test_create_feedback(leave_feedback):
    feedback = leave_feedback()

    assert feedback["status"] == "pending"
    assert feedback["adminReply"] is None
    assert feedback["rating"] == 4


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"rating": 6}, "Rating must be between 1 and 5"),
        ({"rating": 0}, "Rating must be between 1 and 5"),
        ({"serviceType": "walking"}, "Invalid service type"),
        ({"comment": "  "}, "Comment is required"),
        ({"email": None}, "Email is required"),
    ],
)
def test_create_feedback_validation(client, overrides, message):
    payload = {
        "email": "kim@example.com",
        "rating": 4,
        "comment": "Nice",
        "serviceType": "boarding",
        **overrides,
    }
    response = client.post("/feedback", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"] == message


def test_malformed_rating_is_400(client):
    response = client.post(
        "/feedback",
        json={"email": "kim@example.com", "rating": "lots", "comment": "x", "serviceType": "other"},
    )
    assert response.status_code == 400
    assert "rating" in response.json()["detail"]


def test_all_and_my_feedback(client, leave_feedback):
    leave_feedback()
    leave_feedback(email="lee@example.com")

    assert len(client.get("/feedback/all").json()) == 2
    mine = client.get("/feedback/my-feedback/kim@example.com").json()
    assert len(mine) == 1
    assert mine[0]["email"] == "kim@example.com"


def test_admin_status_change(client, leave_feedback):
    feedback = leave_feedback()

    response = client.patch(f"/feedback/{feedback['id']}/status", json={"status": "approved"})
    assert response.status_code == 200
    assert response.json()["status"] == "approved"

    bad = client.patch(f"/feedback/{feedback['id']}/status", json={"status": "archived"})
    assert bad.status_code == 400
    assert client.patch("/feedback/missing/status", json={"status": "approved"}).status_code == 404


def test_admin_reply_notifies_author(client, leave_feedback, db_session):
    feedback = leave_feedback()

    response = client.post(f"/feedback/{feedback['id']}/reply", json={"message": "Thank you!"})

    assert response.status_code == 200
    reply = response.json()["adminReply"]
    assert reply["message"] == "Thank you!"
    assert reply["repliedAt"] is not None

    notification = db_session.query(Notification).filter_by(recipient="kim@example.com").one()
    assert notification.data == {"feedbackId": feedback["id"], "type": "feedback_reply"}


def test_owner_edit_requires_matching_email(client, leave_feedback):
    feedback = leave_feedback()

    response = client.patch(
        f"/feedback/{feedback['id']}",
        json={"email": "kim@example.com", "rating": 5, "comment": "Even better"},
    )
    assert response.status_code == 200
    assert response.json()["rating"] == 5
    assert response.json()["comment"] == "Even better"
    assert response.json()["serviceType"] == "grooming"

    other = client.patch(f"/feedback/{feedback['id']}", json={"email": "x@example.com", "rating": 1})
    assert other.status_code == 404


def test_comment_stored_as_written(client, leave_feedback):
    feedback = leave_feedback(comment="Nails & coat done <in 1 hour>")
    assert feedback["comment"] == "Nails & coat done <in 1 hour>"

    response = client.patch(
        f"/feedback/{feedback['id']}",
        json={"email": "kim@example.com", "comment": feedback["comment"]},
    )
    assert response.status_code == 200
    assert response.json()["comment"] == "Nails & coat done <in 1 hour>"


def test_owner_delete(client, leave_feedback):
    feedback = leave_feedback()

    assert client.delete(f"/feedback/{feedback['id']}?email=lee@example.com").status_code == 404
    response = client.delete(f"/feedback/{feedback['id']}?email=kim@example.com")
    assert response.status_code == 200
    assert response.json()["message"] == "Feedback deleted"
    assert client.get("/feedback/all").json() == []

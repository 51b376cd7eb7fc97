from datetime import date, timedelta

import pytest

from petcare.models import Notification


@pytest.fixture
def booking():
    return {
        "petOwner": "Sam Perera",
        "petName": "Rex",
        "email": "sam@example.com",
        "serviceType": "Vet Service",
        "date": (date.today() + timedelta(days=7)).isoformat(),
        "time": "10:30",
        "amount": 2500,
        "notes": "Annual checkup",
    }


@pytest.fixture
def book(client, booking):
    def _book(**overrides):
        response = client.post("/appointments", json={**booking, **overrides})
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _book


def test_book_appointment(client, booking):
    response = client.post("/appointments", json=booking)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Appointment booked successfully"
    assert body["data"]["status"] == "Pending"
    assert body["data"]["trainingType"] == "N/A"
    assert body["data"]["time"] == "10:30"


def test_pet_training_requires_training_type(client, booking):
    response = client.post("/appointments", json={**booking, "serviceType": "Pet Training"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid training type for Pet Training"

    response = client.post(
        "/appointments",
        json={**booking, "serviceType": "Pet Training", "trainingType": "Group"},
    )
    assert response.status_code == 201
    assert response.json()["data"]["trainingType"] == "Group"


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"petOwner": "A"}, "Pet owner name must be at least 2 characters"),
        ({"petName": " "}, "Pet name must be at least 2 characters"),
        ({"serviceType": "Walking"}, "Invalid service type"),
        ({"date": "2001-01-01"}, "Date must be in the future"),
        ({"date": "next tuesday"}, "Invalid date format"),
        ({"time": ""}, "Time is required"),
        ({"time": "08:59"}, "Time must be between 9:00 AM and 5:00 PM"),
        ({"time": "17:00"}, "Time must be between 9:00 AM and 5:00 PM"),
        ({"amount": 0}, "Invalid amount"),
        ({"email": "not-an-email"}, "Invalid email format"),
    ],
)
def test_booking_validation(client, booking, overrides, message):
    response = client.post("/appointments", json={**booking, **overrides})

    assert response.status_code == 400
    assert response.json()["detail"] == message
    assert client.get("/appointments").json() == []


def test_list_get_and_my_appointments(client, book):
    mine = book()
    book(email="other@example.com", petName="Bella")

    assert len(client.get("/appointments").json()) == 2
    assert client.get(f"/appointments/{mine['id']}").json()["petName"] == "Rex"

    my = client.get("/appointments/my/sam@example.com").json()
    assert [a["id"] for a in my] == [mine["id"]]

    assert client.get("/appointments/missing").status_code == 404


def test_update_appointment(client, book):
    appointment = book()

    response = client.patch(
        f"/appointments/{appointment['id']}", json={"time": "16:59", "notes": "Bring records"}
    )

    assert response.status_code == 200
    assert response.json()["time"] == "16:59"
    assert response.json()["notes"] == "Bring records"
    assert response.json()["petName"] == "Rex"


def test_update_rejects_bad_status(client, book):
    appointment = book()

    response = client.patch(f"/appointments/{appointment['id']}", json={"status": "Done"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid status value"

    assert client.patch("/appointments/missing", json={"notes": "x"}).status_code == 404


def test_approve_reject_reopen(client, book, db_session):
    appointment = book()
    appointment_id = appointment["id"]

    assert client.patch(f"/appointments/approve/{appointment_id}").json()["status"] == "Approved"
    assert client.patch(f"/appointments/reject/{appointment_id}").json()["status"] == "Rejected"
    assert client.patch(f"/appointments/reopen/{appointment_id}").json()["status"] == "Pending"

    titles = [
        n.title
        for n in db_session.query(Notification)
        .filter_by(recipient="sam@example.com")
        .order_by(Notification.created_at)
    ]
    assert set(titles) == {
        "Appointment Approved",
        "Appointment Rejected",
        "Appointment Reopened",
    }


def test_status_change_without_email_skips_notification(client, book, db_session):
    appointment = book(email=None)

    assert client.patch(f"/appointments/approve/{appointment['id']}").status_code == 200
    assert db_session.query(Notification).count() == 0


def test_delete_appointment(client, book):
    appointment = book()

    assert client.delete(f"/appointments/{appointment['id']}").status_code == 200
    assert client.get(f"/appointments/{appointment['id']}").status_code == 404
    assert client.delete(f"/appointments/{appointment['id']}").status_code == 404

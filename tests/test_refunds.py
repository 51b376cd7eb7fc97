import re
from datetime import timedelta

import pytest

from petcare.models import Notification, Refund, utcnow


@pytest.fixture
def paid_transaction(client, sent_otps):
    payment = {
        "transactionId": "TXN-9001",
        "name": "Ravi",
        "email": "ravi@example.com",
        "phone": "0711111111",
        "address": "4 Hill Street",
        "amount": 1000,
        "purpose": "Sell a Pet advertisement",
        "paymentMethod": "bank_transfer",
    }
    assert client.post("/payments", json=payment).status_code == 200
    response = client.post(
        "/payments/verify-otp", json={"email": "ravi@example.com", "otp": sent_otps[-1]["otp"]}
    )
    assert response.status_code == 201
    return response.json()["payment"]


@pytest.fixture
def refund_request():
    return {
        "transactionId": "TXN-9001",
        "amount": 1000,
        "reason": "Pet was sold elsewhere",
        "email": "ravi@example.com",
    }


@pytest.fixture
def refund(client, paid_transaction, refund_request):
    response = client.post("/refunds/request", json=refund_request)
    assert response.status_code == 201, response.text
    return response.json()["refund"]


def test_request_refund(client, paid_transaction, refund_request):
    response = client.post("/refunds/request", json=refund_request)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Refund request submitted successfully"
    assert body["refund"]["status"] == "pending"
    assert re.fullmatch(r"REF-\d+-[a-z0-9]{7}", body["refund"]["refundId"])


def test_duplicate_refund_rejected(client, refund, refund_request):
    response = client.post("/refunds/request", json=refund_request)

    assert response.status_code == 400
    assert response.json()["detail"] == "Refund already requested for this transaction"


def test_refund_requires_owned_payment(client, paid_transaction, refund_request):
    response = client.post(
        "/refunds/request", json={**refund_request, "email": "someone@example.com"}
    )
    assert response.status_code == 404

    response = client.post("/refunds/request", json={**refund_request, "transactionId": "TXN-0"})
    assert response.status_code == 404


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"reason": ""}, "Transaction ID, amount, reason, and email are required"),
        ({"amount": None}, "Transaction ID, amount, reason, and email are required"),
        ({"email": "ravi-at-example"}, "Invalid email format"),
    ],
)
def test_refund_validation(client, refund_request, overrides, message):
    response = client.post("/refunds/request", json={**refund_request, **overrides})
    assert response.status_code == 400
    assert response.json()["detail"] == message


def test_user_and_admin_lists(client, refund):
    mine = client.get("/refunds/user/ravi@example.com").json()
    assert [r["refundId"] for r in mine] == [refund["refundId"]]

    assert client.get("/refunds/user/ravi@example.com?status=approved").json() == []
    assert client.get("/refunds/user/ravi@example.com?status=lost").status_code == 400
    assert len(client.get("/refunds/admin").json()) == 1
    assert client.get("/refunds/admin?startDate=2999-01-01").json() == []


def test_approve_refund(client, refund, db_session):
    response = client.post(f"/refunds/approve/{refund['id']}", json={"adminComment": "Approved, sorry!"})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Refund approved successfully"
    assert body["refund"]["status"] == "approved"
    assert body["refund"]["actionDate"] is not None
    assert body["refund"]["adminComment"] == "Approved, sorry!"

    notification = db_session.query(Notification).filter_by(recipient="ravi@example.com").one()
    assert notification.title == "Refund Approved"

    payments = client.get("/payments/user/ravi@example.com").json()
    assert payments[0]["refundStatus"] == "approved"
    assert payments[0]["adminComment"] == "Approved, sorry!"


def test_reject_refund_without_body(client, refund):
    response = client.post(f"/refunds/reject/{refund['id']}")

    assert response.status_code == 200
    assert response.json()["refund"]["status"] == "rejected"
    assert response.json()["refund"]["adminComment"] == ""
    assert client.post("/refunds/reject/missing").status_code == 404


def test_refund_notifications_since_last_checked(client, refund, db_session):
    assert client.get("/refunds/notifications/ravi@example.com").json() == []

    client.post(f"/refunds/approve/{refund['id']}", json={"adminComment": "ok"})

    decided = client.get("/refunds/notifications/ravi@example.com").json()
    assert [r["id"] for r in decided] == [refund["id"]]

    later = (utcnow() + timedelta(minutes=1)).isoformat()
    assert client.get(f"/refunds/notifications/ravi@example.com?lastChecked={later}").json() == []
    assert client.get("/refunds/notifications/ravi@example.com?lastChecked=soon").status_code == 400

    assert db_session.query(Refund).count() == 1

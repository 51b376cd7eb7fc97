import os
import tempfile

# Must be set before petcare.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="petcare-uploads-"))
os.environ.setdefault("SECURITY_HEADERS_ENABLED", "true")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from petcare import email_service  # noqa: E402
from petcare.database import Base, get_db  # noqa: E402
from petcare.main import app  # noqa: E402

# Tiny but genuine images, so libmagic recognises them
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00\x1f\x15\xc4\x89"
    b"\x00\x00\x00\rIDATx\x9cc\xf8\x0f\x00\x00\x01\x01\x00\x05\x18\xd8N"
    b"\x00\x00\x00\x00IEND\xaeB`\x82"
)
JPEG_BYTES = (
    b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
    b"\xff\xdb\x00C\x00" + bytes(range(1, 65)) + b"\xff\xd9"
)
GIF_BYTES = (
    b"GIF89a\x01\x00\x01\x00\x80\x00\x00\x00\x00\x00\xff\xff\xff"
    b"!\xf9\x04\x01\x00\x00\x00\x00,\x00\x00\x00\x00\x01\x00\x01\x00\x00\x02\x02D\x01\x00;"
)


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sent_otps(monkeypatch):
    """Captures OTP emails instead of sending them through Resend"""
    sent = []

    async def fake_send_payment_otp_email(to, otp):
        sent.append({"to": to, "otp": otp})
        return {"id": "test-email"}

    monkeypatch.setattr(email_service, "send_payment_otp_email", fake_send_payment_otp_email)
    return sent


@pytest.fixture
def client(engine, sent_otps):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def ad_form():
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "contactNumber": "0771234567",
        "advertisementType": "Lost Pet",
        "heading": "Lost tabby cat",
        "description": "Grey tabby, answers to Milo",
    }


@pytest.fixture
def create_ad(client, ad_form):
    def _create(photo=None, **overrides):
        data = {**ad_form, **overrides}
        files = {"photo": photo} if photo else None
        response = client.post("/advertisements", data=data, files=files)
        assert response.status_code == 201, response.text
        return response.json()

    return _create

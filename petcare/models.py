import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from .database import Base


def generate_id():
    """Generate an opaque document ID"""
    return str(uuid.uuid4())


def utcnow():
    """Naive UTC timestamp, the form every DateTime column stores"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Advertisement(Base):
    __tablename__ = "advertisements"

    id = Column(String(36), primary_key=True, default=generate_id)
    # Contact identity; ads are looked up by this email, not by an account
    name = Column(String(255), nullable=False)
    email = Column(String(255), index=True, nullable=False)
    contact_number = Column(String(50), nullable=False)
    advertisement_type = Column(String(20), nullable=False)  # Sell a Pet, Lost Pet, Found Pet
    pet_type = Column(String(10), default="", nullable=False)  # only set for Sell a Pet
    heading = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    photo = Column(String(255), nullable=True)  # stored filename under UPLOAD_DIR
    status = Column(String(20), default="Pending", nullable=False)  # Pending, Approved, Rejected
    payment_status = Column(String(20), default="Pending", nullable=False)  # Pending, Paid
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=generate_id)
    pet_owner = Column(String(255), nullable=False)
    pet_name = Column(String(255), nullable=False)
    email = Column(String(255), index=True, nullable=True)  # notification recipient
    service_type = Column(String(50), nullable=False)  # Vet Service, Pet Grooming, Pet Training
    training_type = Column(String(20), default="N/A", nullable=False)  # Private, Group, N/A
    date = Column(DateTime, nullable=False)
    time = Column(String(5), nullable=False)  # HH:MM
    amount = Column(Float, nullable=False)
    notes = Column(Text, default="")
    status = Column(String(20), default="Pending", nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(String(36), primary_key=True, default=generate_id)
    email = Column(String(255), index=True, nullable=False)
    name = Column(String(255), nullable=True)
    rating = Column(Integer, nullable=False)  # 1-5
    comment = Column(Text, nullable=False)
    service_type = Column(String(20), nullable=False)
    status = Column(String(20), default="pending", nullable=False)  # pending, approved, rejected
    admin_reply_message = Column(Text, nullable=True)
    admin_replied_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class Payment(Base):
    __tablename__ = "payments"

    id = Column(String(36), primary_key=True, default=generate_id)
    transaction_id = Column(String(100), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    email = Column(String(255), index=True, nullable=False)
    phone = Column(String(50), nullable=False)
    address = Column(String(500), nullable=False)
    amount = Column(Float, nullable=False)
    purpose = Column(String(255), nullable=False)
    payment_method = Column(String(50), nullable=False)  # card, bank_transfer
    status = Column(String(20), default="paid", nullable=False)  # paid, failed
    # Informal reference; no foreign key, same as every other relation here
    advertisement_id = Column(String(36), nullable=True)
    payment_date = Column(DateTime, default=utcnow)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class PaymentOTP(Base):
    """Pending payment waiting for its emailed one-time code"""

    __tablename__ = "payment_otps"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    otp = Column(String(10), nullable=False)
    expires_at = Column(DateTime, nullable=False)
    payment_data = Column(JSON, nullable=False)
    created_at = Column(DateTime, default=utcnow)


class Refund(Base):
    __tablename__ = "refunds"

    id = Column(String(36), primary_key=True, default=generate_id)
    refund_id = Column(String(50), unique=True, nullable=False)
    # One refund request per transaction
    transaction_id = Column(String(100), unique=True, index=True, nullable=False)
    amount = Column(Float, nullable=False)
    email = Column(String(255), index=True, nullable=False)
    reason = Column(Text, nullable=False)
    status = Column(String(20), default="pending", nullable=False)  # pending, approved, rejected
    request_date = Column(DateTime, default=utcnow)
    action_date = Column(DateTime, nullable=True)
    admin_comment = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=generate_id)
    recipient = Column(String(255), index=True, nullable=False)  # recipient email
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    data = Column(JSON, default=dict)  # e.g. {"advertisementId": ..., "type": ...}
    read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class Pet(Base):
    __tablename__ = "pets"

    id = Column(String(36), primary_key=True, default=generate_id)
    owner_email = Column(String(255), index=True, nullable=False)
    pet_name = Column(String(255), nullable=False)
    breed = Column(String(255), nullable=False)
    birthday = Column(DateTime, nullable=False)
    age = Column(Integer, nullable=False)
    weight = Column(Float, nullable=False)  # kg
    special_conditions = Column(Text, default="")
    photo = Column(String(255), nullable=True)  # stored filename under UPLOAD_DIR
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    vaccinations = relationship(
        "Vaccination",
        back_populates="pet",
        cascade="all, delete-orphan",
        order_by="Vaccination.date",
    )


class Vaccination(Base):
    __tablename__ = "vaccinations"

    id = Column(String(36), primary_key=True, default=generate_id)
    pet_id = Column(String(36), ForeignKey("pets.id"), index=True, nullable=False)
    name = Column(String(255), nullable=False)
    date = Column(DateTime, nullable=False)
    next_due_date = Column(DateTime, nullable=False)
    notes = Column(Text, default="")
    is_completed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    pet = relationship("Pet", back_populates="vaccinations")


class InventoryItem(Base):
    """Store product with its stock level"""

    __tablename__ = "inventory_items"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    category = Column(String(100), index=True, nullable=False)
    description = Column(Text, default="")
    quantity = Column(Integer, default=0, nullable=False)  # never negative
    price = Column(Float, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class Supplier(Base):
    __tablename__ = "suppliers"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(50), default="")
    address = Column(String(500), default="")
    products = Column(Text, default="")  # free-text list of what they supply
    logo = Column(Text, default="")  # URL or data URI sent by the client
    status = Column(String(20), default="active", nullable=False)  # active, inactive
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

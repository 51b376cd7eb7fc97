"""Appointment domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

SERVICE_TYPES = ("Vet Service", "Pet Grooming", "Pet Training")
PET_TRAINING = "Pet Training"
TRAINING_TYPES = ("Private", "Group")
NO_TRAINING = "N/A"

APPOINTMENT_STATUSES = ("Pending", "Approved", "Rejected")

# Bookable hours, [opening, closing)
OPENING_HOUR = 9
CLOSING_HOUR = 17


class AppointmentCreate(BaseModel):
    """Schema for booking an appointment"""

    petOwner: Optional[str] = None
    petName: Optional[str] = None
    email: Optional[str] = None
    serviceType: Optional[str] = None
    trainingType: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    amount: Optional[float] = None
    notes: Optional[str] = None


class AppointmentUpdate(BaseModel):
    """Schema for editing an appointment; admins also use it to set status"""

    petName: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = None


class AppointmentResponse(BaseModel):
    id: str
    petOwner: str
    petName: str
    email: Optional[str] = None
    serviceType: str
    trainingType: str
    date: datetime
    time: str
    amount: float
    notes: Optional[str] = None
    status: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

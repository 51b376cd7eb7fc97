"""Appointment service - Booking rules and admin status flow"""

import logging
from datetime import date, datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Appointment, utcnow
from ...services.notification_service import notify_status_change
from ...shared.validators import is_blank, validate_email
from ...utils.sanitization import validate_and_sanitize_input
from .repository import AppointmentRepository
from .schemas import (
    APPOINTMENT_STATUSES,
    CLOSING_HOUR,
    NO_TRAINING,
    OPENING_HOUR,
    PET_TRAINING,
    SERVICE_TYPES,
    TRAINING_TYPES,
    AppointmentCreate,
    AppointmentUpdate,
)

logger = logging.getLogger(__name__)


def _parse_appointment_date(value: str) -> datetime:
    """Accepts YYYY-MM-DD or a full ISO timestamp; past days are rejected"""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00")).replace(tzinfo=None)
    except ValueError as e:
        raise HTTPException(status_code=400, detail="Invalid date format") from e

    today: date = utcnow().date()
    if parsed.date() < today:
        raise HTTPException(status_code=400, detail="Date must be in the future")
    return parsed


def _validate_time(value: str) -> str:
    try:
        hours, minutes = (int(part) for part in value.split(":"))
    except ValueError as e:
        raise HTTPException(status_code=400, detail="Time must be in HH:MM format") from e
    if not 0 <= minutes < 60:
        raise HTTPException(status_code=400, detail="Time must be in HH:MM format")
    if hours < OPENING_HOUR or hours >= CLOSING_HOUR:
        raise HTTPException(
            status_code=400, detail="Time must be between 9:00 AM and 5:00 PM"
        )
    return f"{hours:02d}:{minutes:02d}"


def _validate_name(value: Optional[str], label: str) -> str:
    if is_blank(value) or len(value.strip()) < 2:
        raise HTTPException(status_code=400, detail=f"{label} must be at least 2 characters")
    return value.strip()


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()

    def get_appointments(self, email: Optional[str] = None) -> list[Appointment]:
        return self.repo.get_appointments(self.db, email)

    def get_appointment(self, appointment_id: str) -> Appointment:
        appointment = self.repo.get_appointment_by_id(self.db, appointment_id)
        if not appointment:
            raise HTTPException(status_code=404, detail="Appointment not found")
        return appointment

    def create_appointment(self, data: AppointmentCreate) -> Appointment:
        """Book an appointment; every booking starts Pending"""
        pet_owner = _validate_name(data.petOwner, "Pet owner name")
        pet_name = _validate_name(data.petName, "Pet name")

        if data.serviceType not in SERVICE_TYPES:
            raise HTTPException(status_code=400, detail="Invalid service type")

        training_type = NO_TRAINING
        if data.serviceType == PET_TRAINING:
            if data.trainingType not in TRAINING_TYPES:
                raise HTTPException(
                    status_code=400, detail="Invalid training type for Pet Training"
                )
            training_type = data.trainingType

        if is_blank(data.date):
            raise HTTPException(status_code=400, detail="Date is required")
        appointment_date = _parse_appointment_date(data.date)

        if is_blank(data.time):
            raise HTTPException(status_code=400, detail="Time is required")
        appointment_time = _validate_time(data.time)

        if data.amount is None or data.amount <= 0:
            raise HTTPException(status_code=400, detail="Invalid amount")

        try:
            email = validate_email(data.email) if data.email else None
            notes = validate_and_sanitize_input(data.notes)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        appointment = self.repo.create_appointment(
            self.db,
            pet_owner=pet_owner,
            pet_name=pet_name,
            email=email,
            service_type=data.serviceType,
            training_type=training_type,
            date=appointment_date,
            time=appointment_time,
            amount=float(data.amount),
            notes=notes,
            status="Pending",
        )
        logger.info(f"Appointment {appointment.id} booked: {appointment.service_type}")
        return appointment

    def update_appointment(self, appointment_id: str, data: AppointmentUpdate) -> Appointment:
        """Partial update; only supplied fields are validated and written"""
        updates = {}
        if data.petName is not None:
            updates["pet_name"] = _validate_name(data.petName, "Pet name")
        if data.date:
            updates["date"] = _parse_appointment_date(data.date)
        if data.time:
            updates["time"] = _validate_time(data.time)
        if data.notes is not None:
            try:
                updates["notes"] = validate_and_sanitize_input(data.notes)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e)) from e
        if data.status is not None:
            if data.status not in APPOINTMENT_STATUSES:
                raise HTTPException(status_code=400, detail="Invalid status value")
            updates["status"] = data.status

        appointment = self.get_appointment(appointment_id)
        previous_status = appointment.status
        appointment = self.repo.update_appointment(self.db, appointment, **updates)
        logger.info(f"Appointment {appointment.id} updated")

        if appointment.status != previous_status:
            self._notify_status(appointment)
        return appointment

    def set_status(self, appointment_id: str, status: str) -> Appointment:
        """Admin transition; reopening sets the appointment back to Pending"""
        appointment = self.get_appointment(appointment_id)
        appointment = self.repo.update_appointment(self.db, appointment, status=status)
        logger.info(f"Appointment {appointment.id} status set to {status}")
        self._notify_status(appointment)
        return appointment

    def _notify_status(self, appointment: Appointment) -> None:
        status = "Reopened" if appointment.status == "Pending" else appointment.status
        notify_status_change(
            self.db,
            appointment.email,
            subject="Appointment",
            status=status,
            data={"appointmentId": appointment.id, "type": "appointment_status"},
        )

    def delete_appointment(self, appointment_id: str) -> dict:
        appointment = self.get_appointment(appointment_id)
        self.repo.delete_appointment(self.db, appointment)
        logger.info(f"Appointment {appointment_id} deleted")
        return {"message": "Appointment deleted successfully"}

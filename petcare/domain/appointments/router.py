"""Appointment router - FastAPI endpoints for bookings"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Appointment
from .schemas import AppointmentCreate, AppointmentResponse, AppointmentUpdate
from .service import AppointmentService

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


def to_response(appointment: Appointment) -> AppointmentResponse:
    return AppointmentResponse(
        id=appointment.id,
        petOwner=appointment.pet_owner,
        petName=appointment.pet_name,
        email=appointment.email,
        serviceType=appointment.service_type,
        trainingType=appointment.training_type,
        date=appointment.date,
        time=appointment.time,
        amount=appointment.amount,
        notes=appointment.notes,
        status=appointment.status,
        createdAt=appointment.created_at,
        updatedAt=appointment.updated_at,
    )


@router.get("", response_model=list[AppointmentResponse])
async def get_appointments(service: AppointmentService = Depends(get_appointment_service)):
    return [to_response(a) for a in service.get_appointments()]


@router.get("/my/{email}", response_model=list[AppointmentResponse])
async def get_my_appointments(
    email: str,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Appointments booked under an email"""
    return [to_response(a) for a in service.get_appointments(email.strip().lower())]


@router.post("", status_code=201)
async def create_appointment(
    data: AppointmentCreate,
    service: AppointmentService = Depends(get_appointment_service),
):
    appointment = service.create_appointment(data)
    return {
        "success": True,
        "message": "Appointment booked successfully",
        "data": to_response(appointment),
    }


@router.patch("/approve/{appointment_id}", response_model=AppointmentResponse)
async def approve_appointment(
    appointment_id: str,
    service: AppointmentService = Depends(get_appointment_service),
):
    return to_response(service.set_status(appointment_id, "Approved"))


@router.patch("/reject/{appointment_id}", response_model=AppointmentResponse)
async def reject_appointment(
    appointment_id: str,
    service: AppointmentService = Depends(get_appointment_service),
):
    return to_response(service.set_status(appointment_id, "Rejected"))


@router.patch("/reopen/{appointment_id}", response_model=AppointmentResponse)
async def reopen_appointment(
    appointment_id: str,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Put a decided appointment back to Pending"""
    return to_response(service.set_status(appointment_id, "Pending"))


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: str,
    service: AppointmentService = Depends(get_appointment_service),
):
    return to_response(service.get_appointment(appointment_id))


@router.patch("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: str,
    data: AppointmentUpdate,
    service: AppointmentService = Depends(get_appointment_service),
):
    return to_response(service.update_appointment(appointment_id, data))


@router.delete("/{appointment_id}")
async def delete_appointment(
    appointment_id: str,
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.delete_appointment(appointment_id)

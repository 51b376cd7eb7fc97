"""Pet profile and vaccination schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class PetForm(BaseModel):
    """Multipart form fields for adding or editing a pet"""

    ownerEmail: Optional[str] = None
    petName: Optional[str] = None
    breed: Optional[str] = None
    birthday: Optional[str] = None
    age: Optional[str] = None
    weight: Optional[str] = None
    specialConditions: Optional[str] = None


class PetResponse(BaseModel):
    id: str
    ownerEmail: str
    petName: str
    breed: str
    birthday: datetime
    age: int
    weight: float
    specialConditions: str
    photo: Optional[str] = None
    photoUrl: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class PetCreatedResponse(BaseModel):
    message: str
    pet: PetResponse


class VaccinationCreate(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None
    date: Optional[str] = None
    nextDueDate: Optional[str] = None
    notes: Optional[str] = None


class VaccinationUpdate(BaseModel):
    """Owner edit; only the fields sent are changed"""

    email: Optional[str] = None
    name: Optional[str] = None
    date: Optional[str] = None
    nextDueDate: Optional[str] = None
    notes: Optional[str] = None
    isCompleted: Optional[bool] = None


class VaccinationResponse(BaseModel):
    id: str
    petId: str
    name: str
    date: datetime
    nextDueDate: datetime
    notes: str
    isCompleted: bool
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class MessageResponse(BaseModel):
    message: str

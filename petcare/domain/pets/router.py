"""Pet router - Pet profiles and vaccination tracking"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Pet, Vaccination
from ...uploads import read_image_upload
from .schemas import (
    MessageResponse,
    PetCreatedResponse,
    PetForm,
    PetResponse,
    VaccinationCreate,
    VaccinationResponse,
    VaccinationUpdate,
)
from .service import PetService

router = APIRouter(prefix="/pets", tags=["Pets"])


def get_pet_service(db: Session = Depends(get_db)) -> PetService:
    """Dependency injection for PetService"""
    return PetService(db)


def pet_form(
    ownerEmail: Optional[str] = Form(None),
    petName: Optional[str] = Form(None),
    breed: Optional[str] = Form(None),
    birthday: Optional[str] = Form(None),
    age: Optional[str] = Form(None),
    weight: Optional[str] = Form(None),
    specialConditions: Optional[str] = Form(None),
) -> PetForm:
    return PetForm(
        ownerEmail=ownerEmail,
        petName=petName,
        breed=breed,
        birthday=birthday,
        age=age,
        weight=weight,
        specialConditions=specialConditions,
    )


def to_response(pet: Pet) -> PetResponse:
    return PetResponse(
        id=pet.id,
        ownerEmail=pet.owner_email,
        petName=pet.pet_name,
        breed=pet.breed,
        birthday=pet.birthday,
        age=pet.age,
        weight=pet.weight,
        specialConditions=pet.special_conditions or "",
        photo=pet.photo,
        photoUrl=f"/uploads/{pet.photo}" if pet.photo else None,
        createdAt=pet.created_at,
        updatedAt=pet.updated_at,
    )


def to_vaccination_response(vaccination: Vaccination) -> VaccinationResponse:
    return VaccinationResponse(
        id=vaccination.id,
        petId=vaccination.pet_id,
        name=vaccination.name,
        date=vaccination.date,
        nextDueDate=vaccination.next_due_date,
        notes=vaccination.notes or "",
        isCompleted=vaccination.is_completed,
        createdAt=vaccination.created_at,
        updatedAt=vaccination.updated_at,
    )


@router.get("", response_model=list[PetResponse])
async def get_pets(service: PetService = Depends(get_pet_service)):
    return [to_response(p) for p in service.get_pets()]


@router.post("", response_model=PetCreatedResponse, status_code=201)
async def create_pet(
    form: PetForm = Depends(pet_form),
    petPhoto: Optional[UploadFile] = File(None),
    service: PetService = Depends(get_pet_service),
):
    """Add a pet profile, optionally with a photo"""
    image = await read_image_upload(petPhoto)
    pet = service.create_pet(form, image)
    return PetCreatedResponse(message="Pet added", pet=to_response(pet))


@router.get("/owner/{email}", response_model=list[PetResponse])
async def get_owner_pets(email: str, service: PetService = Depends(get_pet_service)):
    """Pets registered under an owner email"""
    return [to_response(p) for p in service.get_owner_pets(email)]


@router.get("/{pet_id}", response_model=PetResponse)
async def get_pet(pet_id: str, service: PetService = Depends(get_pet_service)):
    return to_response(service.get_pet(pet_id))


@router.put("/{pet_id}", response_model=PetResponse)
async def update_pet(
    pet_id: str,
    form: PetForm = Depends(pet_form),
    petPhoto: Optional[UploadFile] = File(None),
    service: PetService = Depends(get_pet_service),
):
    """Owner edit of a pet profile; a new photo replaces the old one"""
    image = await read_image_upload(petPhoto)
    return to_response(service.update_pet(pet_id, form, image))


@router.delete("/{pet_id}", response_model=MessageResponse)
async def delete_pet(
    pet_id: str,
    email: Optional[str] = Query(None),
    service: PetService = Depends(get_pet_service),
):
    return service.delete_pet(pet_id, email)


@router.get("/{pet_id}/vaccinations", response_model=list[VaccinationResponse])
async def get_vaccinations(pet_id: str, service: PetService = Depends(get_pet_service)):
    """Vaccination history, oldest first"""
    return [to_vaccination_response(v) for v in service.get_vaccinations(pet_id)]


@router.post("/{pet_id}/vaccinations", response_model=VaccinationResponse, status_code=201)
async def add_vaccination(
    pet_id: str,
    data: VaccinationCreate,
    service: PetService = Depends(get_pet_service),
):
    return to_vaccination_response(service.add_vaccination(pet_id, data))


@router.put("/{pet_id}/vaccinations/{vaccination_id}", response_model=VaccinationResponse)
async def update_vaccination(
    pet_id: str,
    vaccination_id: str,
    data: VaccinationUpdate,
    service: PetService = Depends(get_pet_service),
):
    return to_vaccination_response(service.update_vaccination(pet_id, vaccination_id, data))


@router.delete("/{pet_id}/vaccinations/{vaccination_id}", response_model=MessageResponse)
async def delete_vaccination(
    pet_id: str,
    vaccination_id: str,
    email: Optional[str] = Query(None),
    service: PetService = Depends(get_pet_service),
):
    return service.delete_vaccination(pet_id, vaccination_id, email)

"""Pet service - Owner pet profiles and vaccination records"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Pet, Vaccination, utcnow
from ...shared.validators import is_blank, normalize_email, parse_date_param, validate_email
from ...uploads import ImageUpload, delete_upload, save_upload
from ...utils.sanitization import validate_and_sanitize_input
from .repository import PetRepository
from .schemas import PetForm, VaccinationCreate, VaccinationUpdate

logger = logging.getLogger(__name__)

REQUIRED_PET_FIELDS = ("ownerEmail", "petName", "breed", "birthday", "age", "weight")


def _parse_age(value: str) -> int:
    try:
        age = int(value.strip())
    except ValueError as e:
        raise HTTPException(status_code=400, detail="Age must be a whole number") from e
    if age < 0:
        raise HTTPException(status_code=400, detail="Age cannot be negative")
    return age


def _parse_weight(value: str) -> float:
    try:
        weight = float(value.strip())
    except ValueError as e:
        raise HTTPException(status_code=400, detail="Weight must be a number") from e
    if weight <= 0:
        raise HTTPException(status_code=400, detail="Weight must be greater than zero")
    return weight


def _parse_birthday(value: str) -> datetime:
    birthday = parse_date_param(value.strip())
    if birthday > utcnow():
        raise HTTPException(status_code=400, detail="Birthday cannot be in the future")
    return birthday


def _clean_text(value: Optional[str], max_length: int = 2000) -> str:
    try:
        return validate_and_sanitize_input(value, max_length=max_length)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


def _check_due_date(date: datetime, next_due_date: datetime) -> None:
    if next_due_date < date:
        raise HTTPException(
            status_code=400, detail="Next due date cannot be before the vaccination date"
        )


class PetService:
    """Service layer for pets and vaccinations"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PetRepository()

    def get_pets(self) -> list[Pet]:
        return self.repo.get_pets(self.db)

    def get_owner_pets(self, email: str) -> list[Pet]:
        return self.repo.get_pets_by_owner(self.db, normalize_email(email))

    def get_pet(self, pet_id: str) -> Pet:
        pet = self.repo.get_pet_by_id(self.db, pet_id)
        if not pet:
            raise HTTPException(status_code=404, detail="Pet not found")
        return pet

    def _get_owned(self, pet_id: str, email: Optional[str]) -> Pet:
        """The pet, provided the caller's email is the owner's"""
        pet = self.get_pet(pet_id)
        if is_blank(email) or normalize_email(email) != pet.owner_email:
            logger.warning(f"Rejected change to pet {pet_id}: not the owner")
            raise HTTPException(status_code=403, detail="Not authorized")
        return pet

    def _validate_fields(self, form: PetForm) -> dict:
        """Column values for every profile field present in the form"""
        values = {}
        if not is_blank(form.petName):
            values["pet_name"] = _clean_text(form.petName, max_length=255)
        if not is_blank(form.breed):
            values["breed"] = _clean_text(form.breed, max_length=255)
        if not is_blank(form.birthday):
            values["birthday"] = _parse_birthday(form.birthday)
        if not is_blank(form.age):
            values["age"] = _parse_age(form.age)
        if not is_blank(form.weight):
            values["weight"] = _parse_weight(form.weight)
        if form.specialConditions is not None:
            values["special_conditions"] = _clean_text(form.specialConditions)
        return values

    def create_pet(self, form: PetForm, photo: Optional[ImageUpload] = None) -> Pet:
        if any(is_blank(getattr(form, field)) for field in REQUIRED_PET_FIELDS):
            logger.warning("Pet validation failed: missing required fields")
            raise HTTPException(status_code=400, detail="Please fill all required fields")

        try:
            owner_email = validate_email(form.ownerEmail)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        pet_data = self._validate_fields(form)
        pet_data.setdefault("special_conditions", "")

        stored_photo = save_upload(photo, fieldname="petPhoto") if photo else None
        try:
            pet = self.repo.create_pet(
                self.db, owner_email=owner_email, photo=stored_photo, **pet_data
            )
        except Exception:
            self.db.rollback()
            delete_upload(stored_photo)
            raise

        logger.info(f"Pet {pet.id} ({pet.pet_name}) added for {owner_email}")
        return pet

    def update_pet(self, pet_id: str, form: PetForm, photo: Optional[ImageUpload] = None) -> Pet:
        """Owner edit; blank fields keep their stored value"""
        pet = self._get_owned(pet_id, form.ownerEmail)
        updates = self._validate_fields(form)

        previous_photo = pet.photo
        if photo:
            updates["photo"] = save_upload(photo, fieldname="petPhoto")

        try:
            pet = self.repo.update_pet(self.db, pet, **updates)
        except Exception:
            self.db.rollback()
            delete_upload(updates.get("photo"))
            raise

        if photo and previous_photo:
            delete_upload(previous_photo)

        logger.info(f"Pet {pet.id} updated")
        return pet

    def delete_pet(self, pet_id: str, email: Optional[str]) -> dict:
        pet = self._get_owned(pet_id, email)
        photo = pet.photo
        self.repo.delete_pet(self.db, pet)
        delete_upload(photo)
        logger.info(f"Pet {pet_id} deleted with its vaccination records")
        return {"message": "Pet deleted successfully"}

    def get_vaccinations(self, pet_id: str) -> list[Vaccination]:
        return list(self.get_pet(pet_id).vaccinations)

    def add_vaccination(self, pet_id: str, data: VaccinationCreate) -> Vaccination:
        pet = self._get_owned(pet_id, data.email)

        if is_blank(data.name) or is_blank(data.date) or is_blank(data.nextDueDate):
            raise HTTPException(
                status_code=400, detail="Name, date and next due date are required"
            )

        date = parse_date_param(data.date.strip())
        next_due_date = parse_date_param(data.nextDueDate.strip())
        _check_due_date(date, next_due_date)

        vaccination = self.repo.add_vaccination(
            self.db,
            pet,
            name=_clean_text(data.name, max_length=255),
            date=date,
            next_due_date=next_due_date,
            notes=_clean_text(data.notes),
            is_completed=False,
        )
        logger.info(f"Vaccination '{vaccination.name}' recorded for pet {pet.id}")
        return vaccination

    def update_vaccination(
        self, pet_id: str, vaccination_id: str, data: VaccinationUpdate
    ) -> Vaccination:
        pet = self._get_owned(pet_id, data.email)
        vaccination = self.repo.get_vaccination(self.db, pet.id, vaccination_id)
        if not vaccination:
            raise HTTPException(status_code=404, detail="Vaccination not found")

        updates = {"is_completed": data.isCompleted}
        if not is_blank(data.name):
            updates["name"] = _clean_text(data.name, max_length=255)
        if data.notes is not None:
            updates["notes"] = _clean_text(data.notes)
        if not is_blank(data.date):
            updates["date"] = parse_date_param(data.date.strip())
        if not is_blank(data.nextDueDate):
            updates["next_due_date"] = parse_date_param(data.nextDueDate.strip())

        _check_due_date(
            updates.get("date") or vaccination.date,
            updates.get("next_due_date") or vaccination.next_due_date,
        )

        vaccination = self.repo.update_vaccination(self.db, vaccination, **updates)
        logger.info(f"Vaccination {vaccination.id} of pet {pet.id} updated")
        return vaccination

    def delete_vaccination(self, pet_id: str, vaccination_id: str, email: Optional[str]) -> dict:
        pet = self._get_owned(pet_id, email)
        vaccination = self.repo.get_vaccination(self.db, pet.id, vaccination_id)
        if not vaccination:
            raise HTTPException(status_code=404, detail="Vaccination not found")

        self.repo.delete_vaccination(self.db, vaccination)
        logger.info(f"Vaccination {vaccination_id} of pet {pet.id} deleted")
        return {"message": "Vaccination deleted successfully"}

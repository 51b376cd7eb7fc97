"""Pet repository - Database operations for pets and their vaccinations"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Pet, Vaccination


class PetRepository:
    """Repository for pet database operations"""

    @staticmethod
    def get_pets(db: Session) -> list[Pet]:
        return db.query(Pet).order_by(Pet.created_at.desc()).all()

    @staticmethod
    def get_pets_by_owner(db: Session, owner_email: str) -> list[Pet]:
        return (
            db.query(Pet)
            .filter(Pet.owner_email == owner_email)
            .order_by(Pet.created_at.desc())
            .all()
        )

    @staticmethod
    def get_pet_by_id(db: Session, pet_id: str) -> Optional[Pet]:
        return db.query(Pet).filter(Pet.id == pet_id).first()

    @staticmethod
    def create_pet(db: Session, **pet_data) -> Pet:
        pet = Pet(**pet_data)
        db.add(pet)
        db.commit()
        db.refresh(pet)
        return pet

    @staticmethod
    def update_pet(db: Session, pet: Pet, **updates) -> Pet:
        """Update a pet with provided fields; None values are left untouched"""
        for key, value in updates.items():
            if value is not None and hasattr(pet, key):
                setattr(pet, key, value)

        db.commit()
        db.refresh(pet)
        return pet

    @staticmethod
    def delete_pet(db: Session, pet: Pet) -> None:
        """Delete a pet; its vaccinations go with it"""
        db.delete(pet)
        db.commit()

    @staticmethod
    def get_vaccination(db: Session, pet_id: str, vaccination_id: str) -> Optional[Vaccination]:
        return (
            db.query(Vaccination)
            .filter(Vaccination.id == vaccination_id, Vaccination.pet_id == pet_id)
            .first()
        )

    @staticmethod
    def add_vaccination(db: Session, pet: Pet, **vaccination_data) -> Vaccination:
        vaccination = Vaccination(pet_id=pet.id, **vaccination_data)
        db.add(vaccination)
        db.commit()
        db.refresh(vaccination)
        return vaccination

    @staticmethod
    def update_vaccination(db: Session, vaccination: Vaccination, **updates) -> Vaccination:
        for key, value in updates.items():
            if value is not None and hasattr(vaccination, key):
                setattr(vaccination, key, value)

        db.commit()
        db.refresh(vaccination)
        return vaccination

    @staticmethod
    def delete_vaccination(db: Session, vaccination: Vaccination) -> None:
        db.delete(vaccination)
        db.commit()

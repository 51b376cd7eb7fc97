"""Advertisement service - Validation, moderation and lifecycle rules"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Advertisement
from ...services.notification_service import notify_status_change
from ...shared.validators import is_blank, normalize_email
from ...uploads import ImageUpload, delete_upload, save_upload
from ...utils.sanitization import validate_and_sanitize_input
from .repository import AdvertisementRepository
from .schemas import (
    ADVERTISEMENT_TYPES,
    PAYMENT_PAID,
    PAYMENT_PENDING,
    PET_TYPES,
    SELL_A_PET,
    STATUS_APPROVED,
    STATUS_PENDING,
    STATUS_REJECTED,
    AdvertisementForm,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "contactNumber", "advertisementType", "heading", "description")


class AdvertisementService:
    """Service layer for advertisement business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AdvertisementRepository()

    def get_advertisements(self) -> list[Advertisement]:
        return self.repo.get_advertisements(self.db)

    def get_advertisement(self, advertisement_id: str) -> Advertisement:
        advertisement = self.repo.get_advertisement_by_id(self.db, advertisement_id)
        if not advertisement:
            raise HTTPException(status_code=404, detail="Advertisement not found")
        return advertisement

    def get_user_advertisements(self, email: str) -> list[Advertisement]:
        """Advertisements posted with the given contact email"""
        return self.repo.get_advertisements_by_email(self.db, normalize_email(email))

    def validate_form(self, form: AdvertisementForm) -> dict:
        """
        Check a submitted form and map it to column values.

        Raises:
            HTTPException: 400 with the first failing rule
        """
        if any(is_blank(getattr(form, field)) for field in REQUIRED_FIELDS):
            logger.warning("Advertisement validation failed: missing required fields")
            raise HTTPException(status_code=400, detail="Please fill all required fields")

        advertisement_type = form.advertisementType.strip()
        if advertisement_type not in ADVERTISEMENT_TYPES:
            logger.warning(f"Advertisement validation failed: invalid type '{advertisement_type}'")
            raise HTTPException(status_code=400, detail="Invalid advertisement type")

        pet_type = ""
        if advertisement_type == SELL_A_PET:
            if is_blank(form.petType):
                logger.warning("Advertisement validation failed: pet type required for sale")
                raise HTTPException(status_code=400, detail="Pet type is required for selling a pet")
            pet_type = form.petType.strip()
            if pet_type not in PET_TYPES:
                logger.warning(f"Advertisement validation failed: invalid pet type '{pet_type}'")
                raise HTTPException(status_code=400, detail="Invalid pet type")

        try:
            heading = validate_and_sanitize_input(form.heading, max_length=255)
            description = validate_and_sanitize_input(form.description)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        return {
            "name": form.name.strip(),
            "email": normalize_email(form.email),
            "contact_number": form.contactNumber.strip(),
            "advertisement_type": advertisement_type,
            "pet_type": pet_type,
            "heading": heading,
            "description": description,
        }

    def create_advertisement(
        self, form: AdvertisementForm, photo: Optional[ImageUpload] = None
    ) -> Advertisement:
        """Create a pending, unpaid advertisement"""
        advertisement_data = self.validate_form(form)
        logger.info(
            f"Creating advertisement '{advertisement_data['heading']}' "
            f"({advertisement_data['advertisement_type']}) for {advertisement_data['email']}"
        )

        stored_photo = save_upload(photo) if photo else None
        try:
            advertisement = self.repo.create_advertisement(
                self.db,
                **advertisement_data,
                photo=stored_photo,
                status=STATUS_PENDING,
                payment_status=PAYMENT_PENDING,
            )
        except Exception:
            self.db.rollback()
            delete_upload(stored_photo)
            raise

        logger.info(f"Advertisement {advertisement.id} created")
        return advertisement

    def update_advertisement(
        self,
        advertisement_id: str,
        form: AdvertisementForm,
        photo: Optional[ImageUpload] = None,
    ) -> Advertisement:
        """Replace the editable fields; the photo changes only when a new one is sent"""
        updates = self.validate_form(form)
        advertisement = self.get_advertisement(advertisement_id)

        previous_photo = advertisement.photo
        if photo:
            updates["photo"] = save_upload(photo)

        try:
            advertisement = self.repo.update_advertisement(self.db, advertisement, **updates)
        except Exception:
            self.db.rollback()
            delete_upload(updates.get("photo"))
            raise

        if photo and previous_photo:
            delete_upload(previous_photo)

        logger.info(f"Advertisement {advertisement.id} updated")
        return advertisement

    def _set_status(self, advertisement_id: str, status: str) -> Advertisement:
        advertisement = self.get_advertisement(advertisement_id)
        advertisement = self.repo.update_advertisement(self.db, advertisement, status=status)
        logger.info(f"Advertisement {advertisement.id} moderated: {status}")

        notify_status_change(
            self.db,
            advertisement.email,
            subject="Advertisement",
            status=status,
            data={"advertisementId": advertisement.id, "type": "advertisement_status"},
        )
        return advertisement

    def approve_advertisement(self, advertisement_id: str) -> Advertisement:
        return self._set_status(advertisement_id, STATUS_APPROVED)

    def reject_advertisement(self, advertisement_id: str) -> Advertisement:
        return self._set_status(advertisement_id, STATUS_REJECTED)

    def mark_paid(self, advertisement_id: str) -> Advertisement:
        """Flip paymentStatus to Paid without checking for a payment record"""
        advertisement = self.get_advertisement(advertisement_id)
        advertisement = self.repo.update_advertisement(
            self.db, advertisement, payment_status=PAYMENT_PAID
        )
        logger.info(f"Advertisement {advertisement.id} marked as paid")
        return advertisement

    def delete_advertisement(self, advertisement_id: str) -> dict:
        advertisement = self.get_advertisement(advertisement_id)
        photo = advertisement.photo
        self.repo.delete_advertisement(self.db, advertisement)
        delete_upload(photo)
        logger.info(f"Advertisement {advertisement_id} deleted")
        return {"message": "Advertisement deleted successfully"}

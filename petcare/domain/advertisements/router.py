"""Advertisement router - FastAPI endpoints for the advertisement lifecycle"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Advertisement
from ...uploads import read_image_upload
from .schemas import (
    ADVERTISEMENT_COSTS,
    AdvertisementCountResponse,
    AdvertisementForm,
    AdvertisementListResponse,
    AdvertisementResponse,
    MessageResponse,
)
from .service import AdvertisementService


router = APIRouter(prefix="/advertisements", tags=["Advertisements"])


def get_advertisement_service(db: Session = Depends(get_db)) -> AdvertisementService:
    """Dependency injection for AdvertisementService"""
    return AdvertisementService(db)


def advertisement_form(
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    contactNumber: Optional[str] = Form(None),
    advertisementType: Optional[str] = Form(None),
    petType: Optional[str] = Form(None),
    heading: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
) -> AdvertisementForm:
    """Collect multipart fields; presence is checked by the service so it can answer 400"""
    return AdvertisementForm(
        name=name,
        email=email,
        contactNumber=contactNumber,
        advertisementType=advertisementType,
        petType=petType,
        heading=heading,
        description=description,
    )


def to_response(advertisement: Advertisement) -> AdvertisementResponse:
    return AdvertisementResponse(
        id=advertisement.id,
        name=advertisement.name,
        email=advertisement.email,
        contactNumber=advertisement.contact_number,
        advertisementType=advertisement.advertisement_type,
        petType=advertisement.pet_type or "",
        heading=advertisement.heading,
        description=advertisement.description,
        photo=advertisement.photo,
        photoUrl=f"/uploads/{advertisement.photo}" if advertisement.photo else None,
        status=advertisement.status,
        paymentStatus=advertisement.payment_status,
        createdAt=advertisement.created_at,
        updatedAt=advertisement.updated_at,
    )


@router.get("", response_model=AdvertisementListResponse)
async def get_advertisements(service: AdvertisementService = Depends(get_advertisement_service)):
    """Get all advertisements"""
    return AdvertisementListResponse(data=[to_response(a) for a in service.get_advertisements()])


@router.post("", response_model=AdvertisementResponse, status_code=201)
async def create_advertisement(
    form: AdvertisementForm = Depends(advertisement_form),
    photo: Optional[UploadFile] = File(None),
    service: AdvertisementService = Depends(get_advertisement_service),
):
    """Submit a new advertisement; it starts Pending and unpaid"""
    image = await read_image_upload(photo)
    return to_response(service.create_advertisement(form, image))


@router.get("/pricing")
async def get_advertisement_pricing():
    """Posting fee per advertisement type"""
    return {"data": ADVERTISEMENT_COSTS}


@router.get("/details/{advertisement_id}", response_model=AdvertisementResponse)
async def get_advertisement(
    advertisement_id: str,
    service: AdvertisementService = Depends(get_advertisement_service),
):
    """Get a single advertisement"""
    return to_response(service.get_advertisement(advertisement_id))


@router.get("/my-ads/{email}", response_model=AdvertisementCountResponse)
async def get_user_advertisements(
    email: str,
    service: AdvertisementService = Depends(get_advertisement_service),
):
    """Get the advertisements posted under an email"""
    advertisements = service.get_user_advertisements(email)
    return AdvertisementCountResponse(
        count=len(advertisements), data=[to_response(a) for a in advertisements]
    )


@router.put("/edit/{advertisement_id}", response_model=AdvertisementResponse)
async def update_advertisement(
    advertisement_id: str,
    form: AdvertisementForm = Depends(advertisement_form),
    photo: Optional[UploadFile] = File(None),
    service: AdvertisementService = Depends(get_advertisement_service),
):
    """Edit an advertisement, optionally replacing its photo"""
    image = await read_image_upload(photo)
    return to_response(service.update_advertisement(advertisement_id, form, image))


@router.put("/approve/{advertisement_id}", response_model=MessageResponse)
async def approve_advertisement(
    advertisement_id: str,
    service: AdvertisementService = Depends(get_advertisement_service),
):
    """Admin: approve an advertisement"""
    service.approve_advertisement(advertisement_id)
    return MessageResponse(message="Advertisement approved successfully")


@router.put("/reject/{advertisement_id}", response_model=MessageResponse)
async def reject_advertisement(
    advertisement_id: str,
    service: AdvertisementService = Depends(get_advertisement_service),
):
    """Admin: reject an advertisement"""
    service.reject_advertisement(advertisement_id)
    return MessageResponse(message="Advertisement rejected successfully")


@router.put("/pay/{advertisement_id}", response_model=MessageResponse)
async def pay_advertisement(
    advertisement_id: str,
    service: AdvertisementService = Depends(get_advertisement_service),
):
    """Mark the posting fee as paid"""
    service.mark_paid(advertisement_id)
    return MessageResponse(message="Advertisement marked as paid")


@router.delete("/delete/{advertisement_id}", response_model=MessageResponse)
async def delete_advertisement(
    advertisement_id: str,
    service: AdvertisementService = Depends(get_advertisement_service),
):
    """Delete an advertisement at any status"""
    return service.delete_advertisement(advertisement_id)

"""Advertisement domain schemas - Pydantic models and enumerations"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

SELL_A_PET = "Sell a Pet"
ADVERTISEMENT_TYPES = (SELL_A_PET, "Lost Pet", "Found Pet")
PET_TYPES = ("Cat", "Dog", "Bird", "Fish", "Other")

STATUS_PENDING = "Pending"
STATUS_APPROVED = "Approved"
STATUS_REJECTED = "Rejected"

PAYMENT_PENDING = "Pending"
PAYMENT_PAID = "Paid"

# Posting fee per advertisement type. Published for the client, not enforced on create.
ADVERTISEMENT_COSTS = {SELL_A_PET: 1000, "Lost Pet": 500, "Found Pet": 500}


class AdvertisementForm(BaseModel):
    """Multipart form fields for creating or editing an advertisement"""

    name: Optional[str] = None
    email: Optional[str] = None
    contactNumber: Optional[str] = None
    advertisementType: Optional[str] = None
    petType: Optional[str] = None
    heading: Optional[str] = None
    description: Optional[str] = None


class AdvertisementResponse(BaseModel):
    """Schema for advertisement response"""

    id: str
    name: str
    email: str
    contactNumber: str
    advertisementType: str
    petType: str
    heading: str
    description: str
    photo: Optional[str] = None
    photoUrl: Optional[str] = None
    status: str
    paymentStatus: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class AdvertisementListResponse(BaseModel):
    data: list[AdvertisementResponse]


class AdvertisementCountResponse(BaseModel):
    count: int
    data: list[AdvertisementResponse]


class MessageResponse(BaseModel):
    message: str

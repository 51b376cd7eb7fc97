"""Supplier schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

SUPPLIER_STATUSES = ("active", "inactive")


class SupplierCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    products: Optional[str] = None
    logo: Optional[str] = None


class SupplierUpdate(SupplierCreate):
    """Full replacement; status is kept when not sent"""

    status: Optional[str] = None


class SupplierResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    address: str
    products: str
    logo: str
    status: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class MessageResponse(BaseModel):
    message: str

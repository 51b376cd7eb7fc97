"""Store inventory schemas"""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel

# At or below this many units an item counts as low stock
LOW_STOCK_THRESHOLD = 5

IN_STOCK = "In Stock"
LOW_STOCK = "Low Stock"
OUT_OF_STOCK = "Out of Stock"


class InventoryItemCreate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    quantity: Optional[int] = None
    price: Optional[float] = None


class InventoryItemUpdate(BaseModel):
    """Only the fields sent are changed"""

    name: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    quantity: Optional[int] = None
    price: Optional[float] = None


class StockAdjustment(BaseModel):
    """Units received (positive) or removed (negative)"""

    amount: Optional[Union[int, str]] = None


class InventoryItemResponse(BaseModel):
    id: str
    name: str
    category: str
    description: str
    quantity: int
    price: float
    stockStatus: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class InventoryReport(BaseModel):
    totalProducts: int
    totalQuantity: int
    totalValue: float
    statusCounts: dict[str, int]
    categoryCounts: dict[str, int]


class MessageResponse(BaseModel):
    message: str

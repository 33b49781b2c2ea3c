# sellcore/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

class ListingBase(BaseModel):
    title: str = Field(..., max_length=255)
    description: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    category: str
    price: float = Field(..., allow_inf_nan=False)
    image_url: Optional[str] = None
    shipping_cost: Optional[float] = Field(None, allow_inf_nan=False)
    shipping_method: Optional[str] = None

class ListingCreate(ListingBase):
    pass

class ListingRenew(BaseModel):
    # unset fields keep their stored value; explicit nulls clear them
    price: Optional[float] = Field(None, allow_inf_nan=False)
    image_url: Optional[str] = None
    shipping_cost: Optional[float] = Field(None, allow_inf_nan=False)

class ListingOut(ListingBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    seller_id: str
    status: str
    created_at: datetime
    expires_at: datetime

class SweepResult(BaseModel):
    updated: int

class BlueBookEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    category: Optional[str] = None
    quality_tier: Optional[str] = None
    avg_price: Optional[float] = None
    base_price_cents: Optional[int] = None
    popularity_score: int = 0

class PriceCheckOut(BaseModel):
    title: str
    price: float
    flagged: bool
    percent_over: Optional[int] = None
    avg_price: Optional[float] = None

class SuggestedPriceOut(BaseModel):
    listing_id: int
    suggested_price: float

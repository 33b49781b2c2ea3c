# sellcore/api/routes.py
from fastapi import APIRouter, Depends, Header, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from .. import schemas
from ..crud import SqlStore
from ..db import get_db
from ..pricing import PricingEngine
from ..services import ListingManager
from ..utils import utcnow

router = APIRouter()


def get_clock():
    return utcnow


def get_actor_id(x_actor_id: Optional[str] = Header(None)) -> str:
    # identity is established upstream; the header value is trusted as-is
    if not x_actor_id:
        raise HTTPException(status_code=401, detail="no auth")
    return x_actor_id


def get_pricing_engine(db: Session = Depends(get_db)) -> PricingEngine:
    return PricingEngine(SqlStore(db))


def get_listing_manager(
    db: Session = Depends(get_db),
    clock=Depends(get_clock),
    pricing: PricingEngine = Depends(get_pricing_engine),
) -> ListingManager:
    return ListingManager(SqlStore(db), clock=clock, pricing=pricing)


@router.get("/health")
def health():
    return {"status": "ok"}

@router.post("/listings", response_model=schemas.ListingOut)
def create_listing(
    payload: schemas.ListingCreate,
    actor_id: str = Depends(get_actor_id),
    manager: ListingManager = Depends(get_listing_manager),
):
    return manager.create_listing(actor_id, payload.model_dump())


@router.get("/listings", response_model=List[schemas.ListingOut])
def listings(
    status: str | None = Query(None),
    manager: ListingManager = Depends(get_listing_manager),
):
    return manager.list_listings(status)


@router.get("/listings/{listing_id}", response_model=schemas.ListingOut)
def get_listing(listing_id: int, manager: ListingManager = Depends(get_listing_manager)):
    return manager.get_listing(listing_id)


@router.post("/listings/{listing_id}/renew", response_model=schemas.ListingOut)
def renew_listing(
    listing_id: int,
    payload: schemas.ListingRenew,
    actor_id: str = Depends(get_actor_id),
    manager: ListingManager = Depends(get_listing_manager),
):
    return manager.renew_listing(listing_id, actor_id, payload.model_dump(exclude_unset=True))


@router.post("/expire-check", response_model=schemas.SweepResult)
def expire_check(manager: ListingManager = Depends(get_listing_manager)):
    return {"updated": manager.sweep_expirations()}


@router.get("/bluebook", response_model=List[schemas.BlueBookEntryOut])
def bluebook(
    brand: str | None = Query(None),
    model: str | None = Query(None),
    quality_tier: str | None = Query(None),
    category: str | None = Query(None),
    pricing: PricingEngine = Depends(get_pricing_engine),
):
    return pricing.query_entries(brand=brand, model=model, quality_tier=quality_tier, category=category)


@router.get("/bluebook/lookup", response_model=Optional[schemas.BlueBookEntryOut])
def bluebook_lookup(title: str = Query(...), pricing: PricingEngine = Depends(get_pricing_engine)):
    return pricing.lookup_by_title(title)


@router.get("/bluebook/check-price", response_model=schemas.PriceCheckOut)
def check_price(
    title: str = Query(...),
    price: float = Query(..., gt=0),
    pricing: PricingEngine = Depends(get_pricing_engine),
):
    return pricing.flag_overpriced(title, price)


@router.get("/bluebook/suggested-price/{listing_id}", response_model=schemas.SuggestedPriceOut)
def suggested_price(listing_id: int, pricing: PricingEngine = Depends(get_pricing_engine)):
    return {"listing_id": listing_id, "suggested_price": pricing.suggested_price_for(listing_id)}

# sellcore/crud.py
"""Session-backed store for `Listing` and `BlueBookEntry` rows.

`SqlStore` is the persistence boundary handed to the listing manager and the
pricing engine. Every write commits before returning.
"""
from datetime import datetime
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional
from .models import BlueBookEntry, Listing, ListingStatus


class SqlStore:
    def __init__(self, db: Session):
        self.db = db

    def get_listing(self, listing_id: int, for_update: bool = False) -> Optional[Listing]:
        q = self.db.query(Listing).filter(Listing.id == listing_id)
        if for_update:
            q = q.with_for_update()
        return q.first()

    def create_listing(self, data: Dict[str, Any]) -> Listing:
        obj = Listing(**data)
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def update_listing(self, listing: Listing, updates: Dict[str, Any]) -> Listing:
        for k, v in updates.items():
            setattr(listing, k, v)
        self.db.commit()
        self.db.refresh(listing)
        return listing

    def list_listings(self, status: Optional[str] = None) -> List[Listing]:
        q = self.db.query(Listing)
        if status:
            q = q.filter(Listing.status == status)
        return q.order_by(Listing.created_at.desc(), Listing.id.desc()).all()

    def expire_listings(self, now: datetime) -> int:
        count = (
            self.db.query(Listing)
            .filter(Listing.status == ListingStatus.LISTED.value, Listing.expires_at <= now)
            .update({Listing.status: ListingStatus.EXPIRED.value}, synchronize_session=False)
        )
        self.db.commit()
        return count

    def find_entry_by_title(self, title: str) -> Optional[BlueBookEntry]:
        return (
            self.db.query(BlueBookEntry)
            .filter(func.lower(BlueBookEntry.title) == func.lower(title))
            .order_by(BlueBookEntry.id)
            .first()
        )

    def query_entries(self, filters: Dict[str, Optional[str]]) -> List[BlueBookEntry]:
        q = self.db.query(BlueBookEntry)
        if filters.get("brand"):
            q = q.filter(BlueBookEntry.brand.icontains(filters["brand"], autoescape=True))
        if filters.get("model"):
            q = q.filter(BlueBookEntry.model.icontains(filters["model"], autoescape=True))
        if filters.get("quality_tier"):
            q = q.filter(BlueBookEntry.quality_tier == filters["quality_tier"])
        if filters.get("category"):
            q = q.filter(BlueBookEntry.category == filters["category"])
        return q.order_by(BlueBookEntry.popularity_score.desc(), BlueBookEntry.id).all()

    def comparable_entries(self, brand: Optional[str], model: Optional[str],
                           category: Optional[str]) -> List[BlueBookEntry]:
        q = self.db.query(BlueBookEntry)
        if brand:
            q = q.filter(BlueBookEntry.brand == brand)
        if model:
            q = q.filter(BlueBookEntry.model == model)
        if category:
            q = q.filter(BlueBookEntry.category == category)
        return q.order_by(BlueBookEntry.id).all()

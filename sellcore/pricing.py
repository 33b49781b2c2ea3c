# sellcore/pricing.py
"""Blue Book reference pricing.

Lookups and price suggestions over the read-only reference set. Nothing in
here writes to the store, and nothing here knows about listing lifecycle.
"""
from dataclasses import dataclass
from typing import List, Optional
from .errors import NotFoundError
from .models import BlueBookEntry, Listing
from .utils import logger, round_half_up

OVERPRICE_FACTOR = 1.25


@dataclass
class PriceCheck:
    title: str
    price: float
    flagged: bool = False
    percent_over: Optional[int] = None
    avg_price: Optional[float] = None


class PricingEngine:
    def __init__(self, store):
        self.store = store

    def lookup_by_title(self, title: str) -> Optional[BlueBookEntry]:
        if not title:
            return None
        return self.store.find_entry_by_title(title)

    def flag_overpriced(self, title: str, proposed_price: float) -> PriceCheck:
        """Compare a proposed price with the Blue Book average for `title`.

        Flagged when the price is more than 25% above the average. The
        percentage over the average is reported whenever an average exists,
        so callers can show it even for prices under the threshold.
        """
        check = PriceCheck(title=title, price=proposed_price)
        entry = self.lookup_by_title(title)
        if entry is None or not entry.avg_price or entry.avg_price <= 0:
            return check
        avg = entry.avg_price
        check.avg_price = avg
        check.percent_over = round_half_up((proposed_price / avg - 1) * 100)
        check.flagged = proposed_price > avg * OVERPRICE_FACTOR
        return check

    def query_entries(self, brand: Optional[str] = None, model: Optional[str] = None,
                      quality_tier: Optional[str] = None,
                      category: Optional[str] = None) -> List[BlueBookEntry]:
        filters = {
            "brand": brand,
            "model": model,
            "quality_tier": quality_tier,
            "category": category,
        }
        return self.store.query_entries(filters)

    def suggested_price(self, listing: Listing) -> float:
        """Mean `base_price_cents` of entries comparable to `listing`.

        Brand, model and category narrow the comparable set only when the
        listing has them; with no comparables the listing's own price comes
        back unchanged.
        """
        entries = self.store.comparable_entries(listing.brand, listing.model, listing.category)
        prices = [e.base_price_cents for e in entries if e.base_price_cents is not None]
        if not prices:
            logger.debug("No comparables for listing %s, keeping price %s", listing.id, listing.price)
            return listing.price
        return round_half_up(sum(prices) / len(prices))

    def suggested_price_for(self, listing_id: int) -> float:
        listing = self.store.get_listing(listing_id)
        if listing is None:
            raise NotFoundError(f"Listing {listing_id} not found")
        return self.suggested_price(listing)

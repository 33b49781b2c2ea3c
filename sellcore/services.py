# sellcore/services.py
"""Listing lifecycle: creation, renewal and the expiration sweep.

A listing lives for LISTING_TTL after it is created or renewed. The sweep
moves listings past that window to `expired`; only the seller can bring one
back, and only by changing its price, image or shipping cost.
"""
import math
from datetime import timedelta
from typing import Any, Callable, Dict, List, Mapping, Optional
from .errors import AuthorizationError, NoChangeError, NotFoundError, ValidationError
from .models import Listing, ListingStatus
from .utils import logger, utcnow

LISTING_TTL = timedelta(days=14)

CREATE_FIELDS = (
    "title", "description", "brand", "model", "category", "price",
    "image_url", "shipping_cost", "shipping_method",
)
RENEWABLE_FIELDS = ("price", "image_url", "shipping_cost")


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _validate_price(price):
    if not _is_number(price):
        raise ValidationError("price must be a finite number")
    if price <= 0:
        raise ValidationError("price must be greater than zero")


def _validate_shipping_cost(cost):
    if cost is None:
        return
    if not _is_number(cost):
        raise ValidationError("shipping_cost must be a finite number")
    if cost < 0:
        raise ValidationError("shipping_cost cannot be negative")


class ListingManager:
    def __init__(self, store, clock: Callable = utcnow, pricing=None):
        self.store = store
        self.clock = clock
        self.pricing = pricing

    def get_listing(self, listing_id: int) -> Listing:
        listing = self.store.get_listing(listing_id)
        if listing is None:
            raise NotFoundError(f"Listing {listing_id} not found")
        return listing

    def list_listings(self, status: Optional[str] = None) -> List[Listing]:
        if status is not None and status not in {s.value for s in ListingStatus}:
            raise ValidationError(f"unknown status: {status}")
        return self.store.list_listings(status)

    def create_listing(self, seller_id: str, fields: Mapping[str, Any]) -> Listing:
        if not seller_id:
            raise ValidationError("seller_id is required")
        data: Dict[str, Any] = {k: fields[k] for k in CREATE_FIELDS if k in fields}
        missing = [k for k in ("title", "price", "category")
                   if data.get(k) is None or (isinstance(data[k], str) and not data[k].strip())]
        if missing:
            raise ValidationError(f"missing fields: {', '.join(missing)}")
        _validate_price(data["price"])
        _validate_shipping_cost(data.get("shipping_cost"))

        now = self.clock()
        data.update(
            seller_id=seller_id,
            status=ListingStatus.LISTED.value,
            created_at=now,
            expires_at=now + LISTING_TTL,
        )
        listing = self.store.create_listing(data)
        logger.info("Created listing %s for seller %s, expires %s",
                    listing.id, seller_id, listing.expires_at)
        self._advise_price(listing)
        return listing

    def renew_listing(self, listing_id: int, actor_id: str, changes: Mapping[str, Any]) -> Listing:
        """Renew a listing for another LISTING_TTL.

        `changes` maps field name to new value; a field that is absent from
        the mapping keeps its stored value, a field present with None is
        cleared. Only price, image_url and shipping_cost are applied.
        """
        listing = self.store.get_listing(listing_id, for_update=True)
        if listing is None:
            raise NotFoundError(f"Listing {listing_id} not found")
        if listing.seller_id != actor_id:
            logger.info("Rejected renewal of listing %s by non-owner %s", listing_id, actor_id)
            raise AuthorizationError("only the seller can renew this listing")

        updates = {k: changes[k] for k in RENEWABLE_FIELDS if k in changes}
        if "price" in updates:
            _validate_price(updates["price"])
        if "shipping_cost" in updates:
            _validate_shipping_cost(updates["shipping_cost"])

        changed = [k for k, v in updates.items() if v != getattr(listing, k)]
        if not changed:
            logger.info("Rejected renewal of listing %s: nothing changed", listing_id)
            raise NoChangeError("must change price, photo, or shipping cost")

        now = self.clock()
        updates.update(
            status=ListingStatus.LISTED.value,
            created_at=now,
            expires_at=now + LISTING_TTL,
        )
        listing = self.store.update_listing(listing, updates)
        logger.info("Renewed listing %s (changed: %s), expires %s",
                    listing.id, ", ".join(changed), listing.expires_at)
        self._advise_price(listing)
        return listing

    def sweep_expirations(self, now=None) -> int:
        if now is None:
            now = self.clock()
        count = self.store.expire_listings(now)
        if count:
            logger.info("Expired %d listing(s) as of %s", count, now)
        return count

    def _advise_price(self, listing: Listing):
        if self.pricing is None:
            return
        check = self.pricing.flag_overpriced(listing.title, listing.price)
        if check.flagged:
            logger.warning("Listing %s priced %s%% above the Blue Book average (%s)",
                           listing.id, check.percent_over, check.avg_price)

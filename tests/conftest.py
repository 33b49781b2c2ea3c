# tests/conftest.py
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["SWEEP_ENABLED"] = "0"

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from sellcore.api.routes import get_clock
from sellcore.db import Base, SessionLocal, engine
from sellcore.main import app
from sellcore.models import BlueBookEntry, Listing, ListingStatus
from sellcore.pricing import PricingEngine
from sellcore.services import ListingManager


class FixedClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)
        return self.now


class MemoryStore:
    """Dict-backed stand-in for SqlStore."""

    def __init__(self, entries=()):
        self.listings = {}
        self.entries = []
        self._next_id = 1
        for e in entries:
            self.add_entry(**e)

    def add_entry(self, **fields):
        fields.setdefault("popularity_score", 0)
        entry = BlueBookEntry(id=len(self.entries) + 1, **fields)
        self.entries.append(entry)
        return entry

    def get_listing(self, listing_id, for_update=False):
        return self.listings.get(listing_id)

    def create_listing(self, data):
        listing = Listing(id=self._next_id, **data)
        self.listings[listing.id] = listing
        self._next_id += 1
        return listing

    def update_listing(self, listing, updates):
        for k, v in updates.items():
            setattr(listing, k, v)
        return listing

    def list_listings(self, status=None):
        rows = [l for l in self.listings.values() if not status or l.status == status]
        return sorted(rows, key=lambda l: (l.created_at, l.id), reverse=True)

    def expire_listings(self, now):
        count = 0
        for l in self.listings.values():
            if l.status == ListingStatus.LISTED.value and l.expires_at <= now:
                l.status = ListingStatus.EXPIRED.value
                count += 1
        return count

    def find_entry_by_title(self, title):
        for e in self.entries:
            if e.title and e.title.lower() == title.lower():
                return e
        return None

    def query_entries(self, filters):
        def ok(e):
            if filters.get("brand") and filters["brand"].lower() not in (e.brand or "").lower():
                return False
            if filters.get("model") and filters["model"].lower() not in (e.model or "").lower():
                return False
            if filters.get("quality_tier") and e.quality_tier != filters["quality_tier"]:
                return False
            if filters.get("category") and e.category != filters["category"]:
                return False
            return True
        return sorted([e for e in self.entries if ok(e)], key=lambda e: -e.popularity_score)

    def comparable_entries(self, brand, model, category):
        return [
            e for e in self.entries
            if (not brand or e.brand == brand)
            and (not model or e.model == model)
            and (not category or e.category == category)
        ]


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 3, 1, 12, 0, 0))


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def pricing(store):
    return PricingEngine(store)


@pytest.fixture
def manager(store, clock):
    return ListingManager(store, clock=clock)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db, clock):
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

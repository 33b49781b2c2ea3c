# tests/test_crud.py
from datetime import datetime, timedelta

from sellcore.crud import SqlStore
from sellcore.models import BlueBookEntry

NOW = datetime(2026, 3, 1, 12, 0, 0)


def _listing(**overrides):
    data = {
        "seller_id": "u1",
        "title": "Test Bike",
        "category": "bikes",
        "price": 1000.0,
        "status": "listed",
        "created_at": NOW,
        "expires_at": NOW + timedelta(days=14),
    }
    data.update(overrides)
    return data


def test_create_and_get(db):
    store = SqlStore(db)
    created = store.create_listing(_listing())
    obj = store.get_listing(created.id)
    assert obj is not None
    assert obj.title == "Test Bike"
    assert obj.expires_at - obj.created_at == timedelta(days=14)
    assert store.get_listing(created.id + 100) is None


def test_update_listing(db):
    store = SqlStore(db)
    obj = store.get_listing(store.create_listing(_listing()).id, for_update=True)
    store.update_listing(obj, {"price": 800.0, "image_url": "http://img/1.jpg"})
    again = store.get_listing(obj.id)
    assert again.price == 800.0
    assert again.image_url == "http://img/1.jpg"


def test_list_listings_by_status_newest_first(db):
    store = SqlStore(db)
    old = store.create_listing(_listing(title="old"))
    new = store.create_listing(_listing(title="new", created_at=NOW + timedelta(hours=1)))
    gone = store.create_listing(_listing(title="gone", status="expired"))
    assert [l.id for l in store.list_listings("listed")] == [new.id, old.id]
    assert [l.id for l in store.list_listings("expired")] == [gone.id]
    assert len(store.list_listings()) == 3


def test_expire_listings_only_touches_due_listed_rows(db):
    store = SqlStore(db)
    due = store.create_listing(_listing(expires_at=NOW - timedelta(seconds=1)))
    edge = store.create_listing(_listing(expires_at=NOW))
    fresh = store.create_listing(_listing(expires_at=NOW + timedelta(days=1)))
    store.create_listing(_listing(status="expired", expires_at=NOW - timedelta(days=3)))

    assert store.expire_listings(NOW) == 2
    db.expire_all()
    assert store.get_listing(due.id).status == "expired"
    assert store.get_listing(edge.id).status == "expired"
    assert store.get_listing(fresh.id).status == "listed"
    assert store.expire_listings(NOW) == 0


def test_find_entry_by_title_is_case_insensitive(db):
    db.add(BlueBookEntry(title="Widget X", avg_price=100.0))
    db.commit()
    store = SqlStore(db)
    assert store.find_entry_by_title("widget x").avg_price == 100.0
    assert store.find_entry_by_title("Widget Y") is None


def test_query_entries_partial_brand_and_popularity_order(db):
    db.add_all([
        BlueBookEntry(brand="ACE Tools", model="Drill 9", category="tools", popularity_score=3),
        BlueBookEntry(brand="Acme", model="Saw", category="tools", popularity_score=9),
        BlueBookEntry(brand="Race Co", model="Wheel", category="bikes", popularity_score=7),
        BlueBookEntry(brand="Ace Hardware", model="Drill 2", category="tools", popularity_score=3),
    ])
    db.commit()
    store = SqlStore(db)
    rows = store.query_entries({"brand": "ace"})
    assert [r.brand for r in rows] == ["Race Co", "ACE Tools", "Ace Hardware"]
    rows = store.query_entries({"brand": "ace", "model": "drill", "category": "tools"})
    assert [r.model for r in rows] == ["Drill 9", "Drill 2"]
    assert store.query_entries({"quality_tier": "gold"}) == []


def test_comparable_entries_exact_match_with_wildcards(db):
    db.add_all([
        BlueBookEntry(brand="Trek", model="FX 2", category="bikes", base_price_cents=50000),
        BlueBookEntry(brand="Trek", model="FX 3", category="bikes", base_price_cents=70000),
        BlueBookEntry(brand="Trekking", model="FX 2", category="bikes", base_price_cents=1),
    ])
    db.commit()
    store = SqlStore(db)
    assert len(store.comparable_entries("Trek", "FX 2", "bikes")) == 1
    assert len(store.comparable_entries("Trek", None, "bikes")) == 2
    assert len(store.comparable_entries(None, None, "bikes")) == 3


def test_query_entries_treats_like_wildcards_literally(db):
    db.add_all([
        BlueBookEntry(brand="ACE Tools", model="Drill_9", popularity_score=1),
        BlueBookEntry(brand="Bolt", model="Drill 9", popularity_score=2),
        BlueBookEntry(brand="100% Cotton", model="Tee", popularity_score=3),
    ])
    db.commit()
    store = SqlStore(db)
    assert [r.brand for r in store.query_entries({"brand": "%"})] == ["100% Cotton"]
    assert store.query_entries({"brand": "_"}) == []
    assert [r.brand for r in store.query_entries({"model": "drill_"})] == ["ACE Tools"]


def test_find_entry_by_title_non_ascii(db):
    db.add(BlueBookEntry(title="Éclair Mixer", avg_price=80.0))
    db.commit()
    store = SqlStore(db)
    assert store.find_entry_by_title("Éclair Mixer").avg_price == 80.0
    assert store.find_entry_by_title("Éclair MIXER").avg_price == 80.0

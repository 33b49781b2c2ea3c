import json
import sys
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()

ENTRY_FIELDS = (
    "title", "brand", "model", "category", "quality_tier",
    "avg_price", "base_price_cents", "popularity_score",
)
# Bluebook.json exports use camelCase keys
ALIASES = {
    "qualityTier": "quality_tier",
    "avgPrice": "avg_price",
    "basePriceCents": "base_price_cents",
    "popularityScore": "popularity_score",
}


def normalize(item):
    """Map one exported entry onto BlueBookEntry columns, dropping unknown keys."""
    out = {}
    for k, v in item.items():
        k = ALIASES.get(k, k)
        if k in ENTRY_FIELDS:
            out[k] = v
    out.setdefault("popularity_score", 0)
    return out


def load_entries(path):
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    if isinstance(data, dict):
        data = [data]
    return [normalize(it) for it in data if isinstance(it, dict)]


def save_entries(entries):
    from sellcore.db import Base, SessionLocal, engine
    from sellcore.models import BlueBookEntry

    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        session.add_all([BlueBookEntry(**e) for e in entries])
        session.commit()
    finally:
        session.close()
    return len(entries)


if __name__ == "__main__":
    path = sys.argv[1] if len(sys.argv) > 1 else "Bluebook.json"
    try:
        entries = load_entries(path)
    except (OSError, ValueError) as e:
        raise SystemExit(f"Failed to read {path}: {e}")
    if not entries:
        raise SystemExit(f"No entries found in {path}")
    print(f"Inserted {save_entries(entries)} Blue Book entries from {path}")

# habits_repo.py
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    create_engine, MetaData, Table, Column, String, Text, DateTime, select
)

# -------------------------
# Engine
# -------------------------
def make_engine(database_url: str = "sqlite:///habit_tracker.db"):
    """Create and return a SQLAlchemy engine (SQLite by default)."""
    return create_engine(database_url, future=True)

# -------------------------
# Schema (module-level, shared)
# -------------------------
metadata = MetaData()

kv_store = Table(
    "kv_store", metadata,
    Column("key", String, primary_key=True),
    Column("value", Text, nullable=False),
    Column("updated_at", DateTime, nullable=False, default=datetime.utcnow),
)

# -------------------------
# DB init
# -------------------------
def init_db(engine):
    """Create tables if they do not exist."""
    metadata.create_all(engine)

# -------------------------
# Store
# -------------------------
class SqlStorage:
    """
    Same get/set contract as LocalStorage, backed by one SQL table.
    Every set() overwrites the whole value for that key in its own transaction.
    """

    def __init__(self, engine):
        self.engine = engine
        init_db(engine)

    def get(self, key: str) -> Optional[str]:
        with self.engine.connect() as conn:
            row = conn.execute(
                select(kv_store.c.value).where(kv_store.c.key == key)
            ).first()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        payload = {"value": value, "updated_at": datetime.utcnow()}
        with self.engine.begin() as conn:  # ensures commit
            updated = conn.execute(
                kv_store.update().where(kv_store.c.key == key).values(**payload)
            ).rowcount
            if not updated:
                conn.execute(kv_store.insert().values(key=key, **payload))

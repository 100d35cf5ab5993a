"""
Shared SQLAlchemy base and helpers.
"""
from datetime import datetime, UTC

from sqlalchemy import event
from sqlalchemy.orm import Session, declarative_base


def now_utc():
    """Return an aware UTC datetime for default/updated timestamps."""
    return datetime.now(UTC)


Base = declarative_base()


@event.listens_for(Session, "before_flush")
def _refresh_updated_at(session, flush_context, instances):
    # Column onupdate misses changes that only touch child collections
    # (skills, portfolio), so stamp every modified entity here.
    for obj in session.dirty:
        if hasattr(obj, "updated_at") and session.is_modified(obj):
            obj.updated_at = now_utc()

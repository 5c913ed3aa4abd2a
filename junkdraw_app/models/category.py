import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from junkdraw_app.database.connection import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(Base):
    """
    User-defined, colored tag applied to links for grouping/filtering.

    Mirrors the `categories` table on Supabase. Name uniqueness is not
    enforced; color is a hex code rendered as the category badge.
    """
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    color = Column(String(7), nullable=False)
    # Python-side default keeps sub-second precision on SQLite
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    # passive_deletes lets the database apply ON DELETE SET NULL
    links = relationship("Link", back_populates="category", passive_deletes=True)

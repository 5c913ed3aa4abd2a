from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from junkdraw_app.database.connection import Base
from junkdraw_app.models.category import _new_id, _utcnow


class Link(Base):
    """
    A saved URL with its metadata.

    `source` is the url's hostname without a leading "www." (or "Manual"
    when the url could not be parsed). A NULL category_id means uncategorized.
    """
    __tablename__ = "links"

    id = Column(String(36), primary_key=True, default=_new_id)
    url = Column(Text, nullable=False)
    title = Column(Text, nullable=False)
    notes = Column(Text, nullable=True)
    source = Column(String, nullable=True)
    category_id = Column(
        String(36),
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    category = relationship("Category", back_populates="links")

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime
from junkdraw_app.schemas.category import CategoryResponse


class LinkCreate(BaseModel):
    # Plain str, not HttpUrl: unparseable urls are accepted and get the "Manual" source
    url: str = Field(..., description="The URL to save")
    title: Optional[str] = Field(None, description="Falls back to the url when blank")
    category_id: Optional[str] = Field(None, description="Blank means uncategorized")
    notes: Optional[str] = None
    description: Optional[str] = Field(None, description="Alias for notes used by share forms")


class LinkUpdate(BaseModel):
    """Only notes and category can change after a link is saved."""
    notes: Optional[str] = None
    category_id: Optional[str] = None


class LinkResponse(BaseModel):
    """A link together with its embedded category row (or None)."""
    id: str
    url: str
    title: str
    notes: Optional[str] = None
    source: Optional[str] = None
    category_id: Optional[str] = None
    created_at: datetime
    category: Optional[CategoryResponse] = None

    model_config = ConfigDict(from_attributes=True)


class DeleteResult(BaseModel):
    success: bool


class UrlMetadata(BaseModel):
    title: Optional[str] = None
    source: Optional[str] = None

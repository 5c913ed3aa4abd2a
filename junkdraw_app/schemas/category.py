from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime


class CategoryBase(BaseModel):
    name: str = Field(..., description="Display name of the category")
    color: str = Field(..., description="Hex color code, e.g. #40E0D0")


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(CategoryBase):
    pass


class CategoryResponse(CategoryBase):
    """Serializes a category row from either backend.

    from_attributes=True reads SQLAlchemy models; Supabase rows are plain dicts.
    """
    id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

"""
Database models for the local relational backend.

Note: these tables mirror the Supabase schema (`categories`, `links`).
The Supabase backend never touches SQLAlchemy; it receives plain rows.
"""

from .category import Category
from .link import Link

__all__ = ["Category", "Link"]

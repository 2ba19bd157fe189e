# mediacat/services/schemas/tags.py
from __future__ import annotations
from typing import Optional

from pydantic import BaseModel


# Category
class CategoryCreate(BaseModel):
    name: str
    color: str
    description: str = ""


class CategoryUpdate(BaseModel):
    # All optional so you can PATCH any subset of fields; None keeps the stored value
    name: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None


# Tag
class TagCreate(BaseModel):
    name: str
    category_id: int
    description: str = ""


class TagUpdate(BaseModel):
    name: Optional[str] = None
    category_id: Optional[int] = None
    description: Optional[str] = None

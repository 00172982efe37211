"""Category entity."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class CategoryType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class Category(BaseModel):
    """Shared taxonomy node used to classify transactions and budgets.

    Categories form a tree through ``parent_id``. The server does not
    guarantee acyclicity, so parent changes are checked client-side by
    CategoryHierarchyService before they are sent.
    """

    id: int
    user_id: Optional[int] = None  # None for system-wide categories
    name: str
    type: CategoryType
    icon: Optional[str] = None
    color: Optional[str] = None
    parent_id: Optional[int] = None
    children: list[Category] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

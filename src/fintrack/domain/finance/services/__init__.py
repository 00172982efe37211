"""Finance domain services."""

from fintrack.domain.finance.services import metrics
from fintrack.domain.finance.services.category_hierarchy import CategoryHierarchyService

__all__ = [
    "CategoryHierarchyService",
    "metrics",
]

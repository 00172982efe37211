"""Finance domain exceptions."""

from fintrack.domain.shared.exceptions import ErrorCode, ValidationError


class CategoryCycleError(ValidationError):
    """Raised when a parent assignment would make a category its own ancestor."""

    def __init__(self, category_id: int, parent_id: int) -> None:
        super().__init__(
            message=(
                f"Category {parent_id} cannot become the parent of category "
                f"{category_id}: it would create a circular reference"
            ),
            field_errors={"parent_id": ["A category cannot be nested under itself"]},
            code=ErrorCode.CATEGORY_CYCLE,
            details={"category_id": category_id, "parent_id": parent_id},
        )

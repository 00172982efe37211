from fintrack.application.mutations.actions import (
    INVALIDATION_RULES,
    MutationAction,
    families_for,
)
from fintrack.application.mutations.coordinator import MutationCoordinator

__all__ = [
    "INVALIDATION_RULES",
    "MutationAction",
    "MutationCoordinator",
    "families_for",
]

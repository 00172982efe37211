"""Validation of user input before it is sent to the server."""

from fintrack.application.validation.forms import (
    AccountForm,
    AccountUpdateForm,
    BudgetForm,
    BudgetUpdateForm,
    CategoryForm,
    CategoryUpdateForm,
    ContributeForm,
    FormModel,
    GoalForm,
    GoalUpdateForm,
    PartialFormModel,
    TransactionForm,
    TransactionUpdateForm,
)
from fintrack.application.validation.result import ValidationResult, validate_form

__all__ = [
    "AccountForm",
    "AccountUpdateForm",
    "BudgetForm",
    "BudgetUpdateForm",
    "CategoryForm",
    "CategoryUpdateForm",
    "ContributeForm",
    "FormModel",
    "GoalForm",
    "GoalUpdateForm",
    "PartialFormModel",
    "TransactionForm",
    "TransactionUpdateForm",
    "ValidationResult",
    "validate_form",
]

"""Enumerations shared by models and schemas.

Columns store the plain string values; these enums only constrain input.
"""
from enum import Enum


class TransactionType(str, Enum):
    income = "income"
    expense = "expense"
    neutral = "neutral"


class CategoryType(str, Enum):
    income = "income"
    expense = "expense"


class CategoryDeleteAction(str, Enum):
    """What happens to a category's transactions when it is deleted."""

    nullify = "nullify"
    move = "move"
    delete = "delete"


class BudgetStatus(str, Enum):
    safe = "safe"
    warning = "warning"
    danger = "danger"

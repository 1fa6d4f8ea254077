"""Transaction auto-categorization.

Descriptions are matched against a static keyword lexicon; matched and
fallback categories are found or created per user through a resolver that
serializes concurrent creation of the same category.
"""

from .classifier import TransactionClassifier
from .lexicon import best_category_name, match_keywords
from .resolver import CategoryResolver

__all__ = [
    "CategoryResolver",
    "TransactionClassifier",
    "best_category_name",
    "match_keywords",
]

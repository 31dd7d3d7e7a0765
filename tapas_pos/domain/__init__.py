"""Domain objects exchanged with the persistence layer."""

from .base import BaseSchema
from .models import Article, Bill, BillLine, Configuration, PaymentMode

__all__ = [
    "Article",
    "BaseSchema",
    "Bill",
    "BillLine",
    "Configuration",
    "PaymentMode",
]

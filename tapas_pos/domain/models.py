from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import Field

from .base import BaseSchema


class PaymentMode(int, Enum):
    cash = 0
    card = 1
    on_account = 2


class Configuration(BaseSchema):
    """Terminal-wide settings, persisted as a single row."""

    password: Optional[str] = None
    email: Optional[str] = None

    full_screen_mode: bool = False
    auto_align_mode: bool = False

    ticket_header: Optional[str] = None
    ticket_footer: Optional[str] = None
    ticket_header_image: Optional[bytes] = None


class Article(BaseSchema):
    """A catalog entry.

    Top-level articles are categories; the articles in a category's
    ``sub_menu`` are its products. Icons are kept as the raw image bytes.
    """

    id: Optional[int] = None
    caption: str
    description: Optional[str] = None
    price: Optional[Decimal] = None
    icon: Optional[bytes] = None

    sub_menu: List[Article] = Field(default_factory=list)

    def add_to_sub_menu(self, article: Article) -> None:
        self.sub_menu.append(article)


class BillLine(BaseSchema):
    quantity: int = 1
    item: str
    price: Decimal

    @property
    def amount(self) -> Decimal:
        return self.price * self.quantity


class Bill(BaseSchema):
    """A sales receipt: header fields plus line items."""

    id: Optional[int] = None
    customer: Optional[str] = None
    payment: PaymentMode = PaymentMode.cash
    when: Optional[datetime] = None

    lines: List[BillLine] = Field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum((line.amount for line in self.lines), Decimal("0"))

    def add_line(self, line: BillLine) -> None:
        self.lines.append(line)

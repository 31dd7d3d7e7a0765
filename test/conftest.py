from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import AsyncGenerator

import pytest

from tapas_pos.core.config import Settings
from tapas_pos.domain import Article, Bill, BillLine, Configuration, PaymentMode
from tapas_pos.persistence import SqlDataProvider


@pytest.fixture
def db_dir(tmp_path: Path) -> Path:
    """Directory for the embedded database; not created yet."""
    return tmp_path / "db"


@pytest.fixture
def test_settings(db_dir: Path) -> Settings:
    """Settings pointing the embedded database at a temporary directory."""
    return Settings(TAPAS_DB_DIR=str(db_dir), TAPAS_DB_NAME="tapas.db")


@pytest.fixture
async def provider(test_settings: Settings) -> AsyncGenerator[SqlDataProvider, None]:
    """Connected data provider over a fresh temporary database."""
    data_provider = SqlDataProvider(test_settings)
    await data_provider.connect()
    try:
        yield data_provider
    finally:
        await data_provider.disconnect()


@pytest.fixture
def sample_configuration() -> Configuration:
    return Configuration(
        password="1234",
        email="bar@example.com",
        full_screen_mode=True,
        auto_align_mode=False,
        ticket_header="Bar La Tapa\nCalle Mayor 1",
        ticket_footer="Gracias por su visita",
        ticket_header_image=b"\x89PNG\r\n\x1a\nlogo",
    )


@pytest.fixture
def sample_catalog() -> list[Article]:
    drinks = Article(caption="Drinks", icon=b"drinks-icon")
    drinks.add_to_sub_menu(Article(caption="Wine", description="Glass of red", price=Decimal("2.50")))
    drinks.add_to_sub_menu(Article(caption="Beer", description="Caña", price=Decimal("1.80"), icon=b"beer"))

    tapas = Article(caption="Tapas")
    tapas.add_to_sub_menu(Article(caption="Tortilla", price=Decimal("3.00")))

    return [drinks, tapas]


@pytest.fixture
def sample_bill() -> Bill:
    return Bill(
        customer="Table 4",
        payment=PaymentMode.card,
        lines=[
            BillLine(quantity=2, item="Beer", price=Decimal("1.80")),
            BillLine(quantity=1, item="Tortilla", price=Decimal("3.00")),
        ],
    )

"""
Pytest Configuration and Fixtures

Provides shared fixtures for all tests.
"""

import os
import tempfile
from pathlib import Path
from typing import Callable, Generator, List

import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from suburbpulse.config import AnalysisWindow  # noqa: E402
from suburbpulse.core.models import Sale  # noqa: E402
from suburbpulse.core.store import SaleStore  # noqa: E402


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="function")
def temp_db() -> Generator[str, None, None]:
    """Create a temporary database with the sales schema.

    Yields:
        Path to temporary database file.
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name

    SaleStore(db_path).init_schema()

    yield db_path

    try:
        os.unlink(db_path)
    except (OSError, PermissionError):
        pass


@pytest.fixture(scope="function")
def test_config(temp_db: str, monkeypatch):
    """Create test configuration with temp database.

    Yields:
        Config object configured for testing.
    """
    monkeypatch.setenv("SUBURBPULSE_DB_PATH", temp_db)
    monkeypatch.setenv("SUBURBPULSE_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("SUBURBPULSE_CURRENT_START", "20250101")
    monkeypatch.setenv("SUBURBPULSE_PRIOR_START", "20240101")
    monkeypatch.setenv("SUBURBPULSE_HISTORY_START", "20240101")

    from suburbpulse.config import reset_config, get_config
    reset_config()

    config = get_config()
    yield config

    reset_config()


@pytest.fixture(scope="function")
def store(temp_db: str) -> SaleStore:
    """Sale store bound to the temporary database."""
    return SaleStore(temp_db)


@pytest.fixture(scope="session")
def window() -> AnalysisWindow:
    """2025 current window with 2024 as the prior year."""
    return AnalysisWindow(
        current_start="20250101",
        prior_start="20240101",
        history_start="20240101",
    )


@pytest.fixture(scope="function")
def make_sale() -> Callable[..., Sale]:
    """Factory for sales with sensible defaults and unique ids."""
    counter = {"n": 0}

    def _make(
        price: int = 1_000_000,
        suburb: str = "CASTLE HILL",
        postcode: str = "2154",
        land_area: float = 500.0,
        settlement_date: str = "20250315",
        **kwargs,
    ) -> Sale:
        counter["n"] += 1
        sale_id = kwargs.pop("id", f"sale-{counter['n']}")
        return Sale(
            id=sale_id,
            suburb=suburb,
            postcode=postcode,
            price=price,
            land_area=land_area,
            settlement_date=settlement_date,
            **kwargs,
        )

    return _make


@pytest.fixture(scope="function")
def suburb_sales(make_sale) -> Callable[..., List[Sale]]:
    """Factory for a batch of sales in one suburb from a list of prices."""

    def _batch(prices, suburb="CASTLE HILL", postcode="2154",
               settlement_date="20250315", land_area=500.0) -> List[Sale]:
        return [
            make_sale(price=price, suburb=suburb, postcode=postcode,
                      settlement_date=settlement_date, land_area=land_area)
            for price in prices
        ]

    return _batch


@pytest.fixture(scope="function")
def sample_csv(tmp_path) -> Path:
    """CSV of normalized sale records including a few invalid rows."""
    path = tmp_path / "sales.csv"
    path.write_text(
        "id,property_id,address,suburb,postcode,price,land_area,settlement_date,zone_code\n"
        "s1,P1,1 Old Northern Rd,CASTLE HILL,2154,1500000,600,20250115,R2\n"
        "s2,P2,2 Showground Rd,castle hill,2154,\"$1,250,000\",450.5,2025-02-03,R2\n"
        "s3,P3,5/10 Terminus St,CASTLE HILL,2154,820000,,20250210,R4\n"
        "s4,P4,8 Seven Hills Rd,BAULKHAM HILLS,2153,0,500,20250301,R2\n"
        "s5,P5,,BAULKHAM HILLS,2153,1100000,550,not-a-date,R2\n"
        ",P6,3 Windsor Rd,BAULKHAM HILLS,2153,1320000,620,15/03/2025,R2\n",
        encoding="utf-8",
    )
    return path

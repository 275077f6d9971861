"""Pytest configuration and fixtures."""

import os

import pytest

from fundcalc.calculator import FundEntry
from fundcalc.settings import Settings

MAJOR_ORDER = ["股票", "债券", "大宗商品", "现金"]


@pytest.fixture
def major_order():
    return list(MAJOR_ORDER)


@pytest.fixture
def settings(monkeypatch):
    """Fresh Settings singleton with no environment overrides."""
    for key in list(os.environ):
        if key.startswith("FUNDCALC_"):
            monkeypatch.delenv(key)
    Settings._clear()
    instance = Settings()
    yield instance
    Settings._clear()


@pytest.fixture
def sample_entries():
    """Five entries across three majors; majors sit exactly on target at a 1000 total."""
    return [
        FundEntry(id=5, major_category="现金", target_ratio="0.1", amount="100"),
        FundEntry(
            id=1, major_category="股票", minor_category="A股", target_ratio="0.3", amount="250", fund_name="沪深300"
        ),
        FundEntry(
            id=2, major_category="股票", minor_category="A股", target_ratio="0.2", amount="250", fund_name="中证500"
        ),
        FundEntry(
            id=3, major_category="股票", minor_category="美股", target_ratio="0.1", amount="100", fund_name="标普500"
        ),
        FundEntry(id=4, major_category="债券", target_ratio="0.3", amount="300", fund_name="国债"),
    ]

"""Shared fixtures for the cashbook tests."""

import os
from datetime import datetime
from decimal import Decimal
from itertools import count

import pytest

from cashbook.config import get_settings
from cashbook.models.records import Direction, Payment


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run every test with default settings, ignoring the developer's env."""
    for key in list(os.environ):
        if key.startswith("CASHBOOK_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_payment():
    """Factory for payments with sequential ids and sensible defaults."""
    ids = count(1)

    def _make(
        type: str = "IN",
        amount="100",
        date: datetime = datetime(2024, 6, 1, 10, 0),
        mode: str = "CASH",
        **fields,
    ) -> Payment:
        return Payment(
            id=fields.pop("id", f"PAY-{next(ids)}"),
            type=Direction(type),
            amount=Decimal(str(amount)),
            date=date,
            mode=mode,
            **fields,
        )

    return _make

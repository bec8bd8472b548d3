"""Currency conversion tests: ceiling rounding and the stored rate override."""

from decimal import Decimal

import pytest

from app.modules.common import InvalidAmountError
from app.modules.currency import USD_INR_RATE_KEY, CurrencyConverter
from app.infrastructure.database.repositories import SqlSettingRepository


class InMemorySettings:
    def __init__(self, values=None):
        self.values = dict(values or {})

    async def get_value(self, key):
        return self.values.get(key)

    async def set_value(self, key, value):
        self.values[key] = value


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        ("1.00", 84),
        ("2.00", 167),
        ("0", 0),
        ("0.01", 1),
        ("10", 835),
    ],
)
async def test_convert_rounds_up(amount, expected):
    converter = CurrencyConverter(InMemorySettings(), default_rate=Decimal("83.5"))

    assert await converter.convert(amount) == expected


async def test_convert_rejects_negative():
    converter = CurrencyConverter(InMemorySettings(), default_rate=Decimal("83.5"))

    with pytest.raises(InvalidAmountError):
        await converter.convert("-1")


async def test_stored_rate_wins_over_default():
    converter = CurrencyConverter(InMemorySettings({USD_INR_RATE_KEY: "84.10"}), default_rate=Decimal("83.5"))

    assert await converter.get_rate() == Decimal("84.10")
    assert await converter.convert("1.00") == 85


@pytest.mark.parametrize("stored", ["abc", "0", "-3"])
async def test_bad_stored_rate_falls_back(stored):
    converter = CurrencyConverter(InMemorySettings({USD_INR_RATE_KEY: stored}), default_rate=Decimal("83.5"))

    assert await converter.get_rate() == Decimal("83.5")


@pytest.mark.parametrize("rate", ["0", "-1", "nan", "abc"])
async def test_set_rate_validates(rate):
    store = InMemorySettings()
    converter = CurrencyConverter(store, default_rate=Decimal("83.5"))

    with pytest.raises(InvalidAmountError):
        await converter.set_rate(rate)
    assert store.values == {}


async def test_set_rate_persists(session):
    converter = CurrencyConverter.with_session(session)

    assert await converter.get_rate() == Decimal("83.5")
    assert await converter.set_rate("86.25") == Decimal("86.25")
    await converter.set_rate(Decimal("87"))
    await session.commit()

    assert await SqlSettingRepository(session).get_value(USD_INR_RATE_KEY) == "87"
    assert await CurrencyConverter.with_session(session).get_rate() == Decimal("87")
